"""Conversion of OpenTelemetry SDK metrics data into comparable trees."""
from typing import List, Sequence
import logging

from opentelemetry.sdk.metrics import export as sdk_export

from metricdatatest.metricdata import (
    DataPoint,
    Exemplar,
    ExponentialBucket,
    ExponentialHistogramDataPoint,
    Float64ExponentialHistogram,
    Float64Gauge,
    Float64Histogram,
    Float64Sum,
    HistogramDataPoint,
    Int64ExponentialHistogram,
    Int64Gauge,
    Int64Histogram,
    Int64Sum,
    KeyValue,
    Metrics,
    ResourceMetrics,
    ScopeMetrics,
)

logger = logging.getLogger(__name__)

SPAN_ID_SIZE = 8
TRACE_ID_SIZE = 16


def from_metrics_data(data: sdk_export.MetricsData) -> List[ResourceMetrics]:
    """
    Convert collected SDK metrics, e.g. from an InMemoryMetricReader.

    Args:
        data: MetricsData returned by a metric reader

    Returns:
        One ResourceMetrics per SDK ResourceMetrics, in the same order
    """
    converted = [from_resource_metrics(rm) for rm in data.resource_metrics]
    logger.debug(f"Converted {len(converted)} resource metrics from the SDK")
    return converted


def from_resource_metrics(rm: sdk_export.ResourceMetrics) -> ResourceMetrics:
    return ResourceMetrics(
        resource=rm.resource,
        scope_metrics=tuple(from_scope_metrics(sm) for sm in rm.scope_metrics),
    )


def from_scope_metrics(sm: sdk_export.ScopeMetrics) -> ScopeMetrics:
    return ScopeMetrics(
        scope=sm.scope,
        metrics=tuple(from_metric(m) for m in sm.metrics),
    )


def from_metric(metric: sdk_export.Metric) -> Metrics:
    """Convert a single SDK Metric."""
    return Metrics(
        name=metric.name,
        description=metric.description or "",
        unit=metric.unit or "",
        data=_convert_aggregation(metric.data),
    )


def _is_int64(values: Sequence) -> bool:
    """
    The SDK keeps the Python type of what was recorded: an int instrument
    produces int values and sums. An aggregation without data points is
    treated as float64.
    """
    if not values:
        return False
    return all(isinstance(v, int) and not isinstance(v, bool) for v in values)


def _convert_aggregation(data):
    if isinstance(data, sdk_export.Sum):
        points = tuple(_convert_number_point(dp) for dp in data.data_points)
        cls = Int64Sum if _is_int64([dp.value for dp in points]) else Float64Sum
        return cls(
            data_points=points,
            temporality=data.aggregation_temporality,
            is_monotonic=data.is_monotonic,
        )

    if isinstance(data, sdk_export.Gauge):
        points = tuple(_convert_number_point(dp) for dp in data.data_points)
        cls = Int64Gauge if _is_int64([dp.value for dp in points]) else Float64Gauge
        return cls(data_points=points)

    if isinstance(data, sdk_export.Histogram):
        points = tuple(_convert_histogram_point(dp) for dp in data.data_points)
        cls = Int64Histogram if _is_int64([dp.sum for dp in points]) else Float64Histogram
        return cls(data_points=points, temporality=data.aggregation_temporality)

    if isinstance(data, sdk_export.ExponentialHistogram):
        points = tuple(_convert_exponential_histogram_point(dp) for dp in data.data_points)
        cls = Int64ExponentialHistogram if _is_int64([dp.sum for dp in points]) else Float64ExponentialHistogram
        return cls(data_points=points, temporality=data.aggregation_temporality)

    raise TypeError(f"unsupported metric data type: {type(data).__name__}")


def _convert_exemplar(exemplar) -> Exemplar:
    return Exemplar(
        filtered_attributes=tuple(
            KeyValue(key, value) for key, value in (exemplar.filtered_attributes or {}).items()
        ),
        time_unix_nano=exemplar.time_unix_nano,
        value=exemplar.value,
        span_id=(exemplar.span_id or 0).to_bytes(SPAN_ID_SIZE, "big"),
        trace_id=(exemplar.trace_id or 0).to_bytes(TRACE_ID_SIZE, "big"),
    )


def _convert_exemplars(dp) -> tuple:
    return tuple(_convert_exemplar(e) for e in dp.exemplars or ())


def _convert_number_point(dp: sdk_export.NumberDataPoint) -> DataPoint:
    return DataPoint(
        attributes=dict(dp.attributes or {}),
        start_time_unix_nano=dp.start_time_unix_nano,
        time_unix_nano=dp.time_unix_nano,
        value=dp.value,
        exemplars=_convert_exemplars(dp),
    )


def _convert_histogram_point(dp: sdk_export.HistogramDataPoint) -> HistogramDataPoint:
    return HistogramDataPoint(
        attributes=dict(dp.attributes or {}),
        start_time_unix_nano=dp.start_time_unix_nano,
        time_unix_nano=dp.time_unix_nano,
        count=dp.count,
        bounds=tuple(dp.explicit_bounds),
        bucket_counts=tuple(dp.bucket_counts),
        min=dp.min,
        max=dp.max,
        sum=dp.sum,
        exemplars=_convert_exemplars(dp),
    )


def _convert_buckets(buckets) -> ExponentialBucket:
    return ExponentialBucket(offset=buckets.offset, counts=tuple(buckets.bucket_counts))


def _convert_exponential_histogram_point(dp) -> ExponentialHistogramDataPoint:
    return ExponentialHistogramDataPoint(
        attributes=dict(dp.attributes or {}),
        start_time_unix_nano=dp.start_time_unix_nano,
        time_unix_nano=dp.time_unix_nano,
        count=dp.count,
        min=dp.min,
        max=dp.max,
        sum=dp.sum,
        scale=dp.scale,
        zero_count=dp.zero_count,
        positive_bucket=_convert_buckets(dp.positive),
        negative_bucket=_convert_buckets(dp.negative),
        exemplars=_convert_exemplars(dp),
    )
