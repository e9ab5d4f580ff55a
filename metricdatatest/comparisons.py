"""Structural comparison of metric trees.

Every ``equal_*`` function returns the reasons its two arguments are not
equal. An empty list means they are equal. Mismatches never stop a
comparison: all fields and children that can be reached are checked and
reported.
"""
from typing import Callable, Dict, List, Optional, Type
import logging

from metricdatatest.attributes import encode, equal_attributes, equal_key_values
from metricdatatest.config import Config
from metricdatatest.diff import compare_diff, diff_slices, equal_slices, not_equal_str
from metricdatatest.metricdata import (
    DataPoint,
    Exemplar,
    ExponentialBucket,
    ExponentialHistogram,
    ExponentialHistogramDataPoint,
    Float64ExponentialHistogram,
    Float64Gauge,
    Float64Histogram,
    Float64Sum,
    Gauge,
    Histogram,
    HistogramDataPoint,
    Int64ExponentialHistogram,
    Int64Gauge,
    Int64Histogram,
    Int64Sum,
    Metrics,
    ResourceMetrics,
    ScopeMetrics,
    Sum,
    resource_str,
)

logger = logging.getLogger(__name__)


def _diff_reasons(a, b, equal, config: Config) -> str:
    """
    Multiset diff of two child collections using a reason-producing comparator.

    When exactly one expected and one actual element are left unmatched they
    are the likely counterparts, so the fields that differ between them are
    listed after the unmatched values.
    """
    extra_a, extra_b = diff_slices(a, b, lambda x, y: not equal(x, y, config))
    r = compare_diff(extra_a, extra_b)
    if len(extra_a) == 1 and len(extra_b) == 1:
        r += "differences:\n" + "".join(f"{reason}\n" for reason in equal(extra_a[0], extra_b[0], config))
    return r


def equal_resource_metrics(a: ResourceMetrics, b: ResourceMetrics, config: Config) -> List[str]:
    """
    Compare two ResourceMetrics.

    The ScopeMetrics each contains are compared as collections: the order they
    are stored in does not matter, the number of times each appears does.
    """
    reasons = []
    if a.resource != b.resource:
        reasons.append(not_equal_str("Resources", resource_str(a.resource), resource_str(b.resource)))

    r = _diff_reasons(a.scope_metrics, b.scope_metrics, equal_scope_metrics, config)
    if r:
        reasons.append(f"ResourceMetrics ScopeMetrics not equal:\n{r}")
    return reasons


def equal_scope_metrics(a: ScopeMetrics, b: ScopeMetrics, config: Config) -> List[str]:
    """
    Compare two ScopeMetrics.

    The Metrics each contains are compared as collections, regardless of order.
    """
    reasons = []
    if a.scope != b.scope:
        reasons.append(not_equal_str("Scope", a.scope, b.scope))

    r = _diff_reasons(a.metrics, b.metrics, equal_metrics, config)
    if r:
        reasons.append(f"ScopeMetrics Metrics not equal:\n{r}")
    return reasons


def equal_metrics(a: Metrics, b: Metrics, config: Config) -> List[str]:
    """Compare two Metrics: identity fields, then their aggregations."""
    reasons = []
    if a.name != b.name:
        reasons.append(not_equal_str("Name", a.name, b.name))
    if a.description != b.description:
        reasons.append(not_equal_str("Description", a.description, b.description))
    if a.unit != b.unit:
        reasons.append(not_equal_str("Unit", a.unit, b.unit))

    r = equal_aggregations(a.data, b.data, config)
    if r:
        reasons.append("Metrics Data not equal:")
        reasons.extend(r)
    return reasons


def equal_aggregations(a, b, config: Config) -> List[str]:
    """
    Compare two aggregations.

    Both must be absent or both present, and of the same concrete variant
    (aggregation kind and numeric kind). Aggregations of different variants
    are reported once and not compared further.
    """
    if a is None or b is None:
        if a is not b:
            return [not_equal_str("Aggregation", a, b)]
        return []

    if type(a) is not type(b):
        return [
            f"Aggregation types not equal:\nexpected: {type(a).__name__}\nactual: {type(b).__name__}"
        ]

    comparator = _AGGREGATION_COMPARATORS.get(type(a))
    if comparator is None:
        logger.warning(f"Cannot compare aggregation of unknown type {type(a).__name__}")
        return [f"Aggregation of unknown types {type(a).__name__}"]

    reasons = []
    r = comparator(a, b, config)
    if r:
        reasons.append(f"{type(a).__name__} not equal:")
        reasons.extend(r)
    return reasons


def equal_gauges(a: Gauge, b: Gauge, config: Config) -> List[str]:
    """Compare two Gauges; data points are compared regardless of order."""
    reasons = []
    r = _diff_reasons(a.data_points, b.data_points, equal_data_points, config)
    if r:
        reasons.append(f"Gauge DataPoints not equal:\n{r}")
    return reasons


def equal_sums(a: Sum, b: Sum, config: Config) -> List[str]:
    """Compare two Sums; data points are compared regardless of order."""
    reasons = []
    if a.temporality != b.temporality:
        reasons.append(not_equal_str("Temporality", a.temporality, b.temporality))
    if a.is_monotonic != b.is_monotonic:
        reasons.append(not_equal_str("IsMonotonic", a.is_monotonic, b.is_monotonic))

    r = _diff_reasons(a.data_points, b.data_points, equal_data_points, config)
    if r:
        reasons.append(f"Sum DataPoints not equal:\n{r}")
    return reasons


def equal_histograms(a: Histogram, b: Histogram, config: Config) -> List[str]:
    """Compare two Histograms; data points are compared regardless of order."""
    reasons = []
    if a.temporality != b.temporality:
        reasons.append(not_equal_str("Temporality", a.temporality, b.temporality))

    r = _diff_reasons(a.data_points, b.data_points, equal_histogram_data_points, config)
    if r:
        reasons.append(f"Histogram DataPoints not equal:\n{r}")
    return reasons


def equal_exponential_histograms(a: ExponentialHistogram, b: ExponentialHistogram, config: Config) -> List[str]:
    """Compare two ExponentialHistograms; data points are compared regardless of order."""
    reasons = []
    if a.temporality != b.temporality:
        reasons.append(not_equal_str("Temporality", a.temporality, b.temporality))

    r = _diff_reasons(a.data_points, b.data_points, equal_exponential_histogram_data_points, config)
    if r:
        reasons.append(f"ExponentialHistogram DataPoints not equal:\n{r}")
    return reasons


_AGGREGATION_COMPARATORS: Dict[Type, Callable[..., List[str]]] = {
    Int64Gauge: equal_gauges,
    Float64Gauge: equal_gauges,
    Int64Sum: equal_sums,
    Float64Sum: equal_sums,
    Int64Histogram: equal_histograms,
    Float64Histogram: equal_histograms,
    Int64ExponentialHistogram: equal_exponential_histograms,
    Float64ExponentialHistogram: equal_exponential_histograms,
}


def _attributes_text(attributes) -> str:
    try:
        return encode(attributes)
    except TypeError:
        return repr(dict(attributes))


def _same_attributes(a, b) -> bool:
    try:
        return equal_attributes(a, b)
    except TypeError:
        # A value outside the attribute kinds falls back to plain equality.
        return dict(a) == dict(b)


def _equal_point_header(a, b, config: Config) -> List[str]:
    """Attributes and timestamps, shared by every data point shape."""
    reasons = []
    if not _same_attributes(a.attributes, b.attributes):
        reasons.append(not_equal_str("Attributes", _attributes_text(a.attributes), _attributes_text(b.attributes)))

    if not config.ignore_timestamp:
        if a.start_time_unix_nano != b.start_time_unix_nano:
            reasons.append(not_equal_str("StartTime", a.start_time_unix_nano, b.start_time_unix_nano))
        if a.time_unix_nano != b.time_unix_nano:
            reasons.append(not_equal_str("Time", a.time_unix_nano, b.time_unix_nano))
    return reasons


def _equal_point_exemplars(a, b, config: Config) -> List[str]:
    if config.ignore_exemplars:
        return []
    r = _diff_reasons(a.exemplars, b.exemplars, equal_exemplars, config)
    if r:
        return [f"Exemplars not equal:\n{r}"]
    return []


def equal_data_points(a: DataPoint, b: DataPoint, config: Config) -> List[str]:
    """Compare two DataPoints."""
    reasons = _equal_point_header(a, b, config)

    if not config.ignore_value:
        if a.value != b.value:
            reasons.append(not_equal_str("Value", a.value, b.value))

    reasons.extend(_equal_point_exemplars(a, b, config))
    return reasons


def equal_histogram_data_points(a: HistogramDataPoint, b: HistogramDataPoint, config: Config) -> List[str]:
    """Compare two HistogramDataPoints."""
    reasons = _equal_point_header(a, b, config)

    if not config.ignore_value:
        if a.count != b.count:
            reasons.append(not_equal_str("Count", a.count, b.count))
        if not equal_slices(a.bounds, b.bounds):
            reasons.append(not_equal_str("Bounds", list(a.bounds), list(b.bounds)))
        if not equal_slices(a.bucket_counts, b.bucket_counts):
            reasons.append(not_equal_str("BucketCounts", list(a.bucket_counts), list(b.bucket_counts)))
        if not eq_extrema(a.min, b.min):
            reasons.append(not_equal_str("Min", a.min, b.min))
        if not eq_extrema(a.max, b.max):
            reasons.append(not_equal_str("Max", a.max, b.max))
        if a.sum != b.sum:
            reasons.append(not_equal_str("Sum", a.sum, b.sum))

    reasons.extend(_equal_point_exemplars(a, b, config))
    return reasons


def equal_exponential_histogram_data_points(
    a: ExponentialHistogramDataPoint,
    b: ExponentialHistogramDataPoint,
    config: Config
) -> List[str]:
    """Compare two ExponentialHistogramDataPoints."""
    reasons = _equal_point_header(a, b, config)

    if not config.ignore_value:
        if a.count != b.count:
            reasons.append(not_equal_str("Count", a.count, b.count))
        if not eq_extrema(a.min, b.min):
            reasons.append(not_equal_str("Min", a.min, b.min))
        if not eq_extrema(a.max, b.max):
            reasons.append(not_equal_str("Max", a.max, b.max))
        if a.sum != b.sum:
            reasons.append(not_equal_str("Sum", a.sum, b.sum))

        if a.scale != b.scale:
            reasons.append(not_equal_str("Scale", a.scale, b.scale))
        if a.zero_count != b.zero_count:
            reasons.append(not_equal_str("ZeroCount", a.zero_count, b.zero_count))

        reasons.extend(equal_exponential_buckets(a.positive_bucket, b.positive_bucket, config))
        reasons.extend(equal_exponential_buckets(a.negative_bucket, b.negative_bucket, config))

    reasons.extend(_equal_point_exemplars(a, b, config))
    return reasons


def equal_exponential_buckets(a: ExponentialBucket, b: ExponentialBucket, config: Config) -> List[str]:
    """Compare two ExponentialBuckets; bucket counts are compared in order."""
    reasons = []
    if a.offset != b.offset:
        reasons.append(not_equal_str("Offset", a.offset, b.offset))
    if not equal_slices(a.counts, b.counts):
        reasons.append(not_equal_str("Counts", list(a.counts), list(b.counts)))
    return reasons


def equal_exemplars(a: Exemplar, b: Exemplar, config: Config) -> List[str]:
    """Compare two Exemplars; filtered attributes are compared in order."""
    reasons = []
    if not equal_key_values(a.filtered_attributes, b.filtered_attributes):
        reasons.append(not_equal_str("FilteredAttributes", list(a.filtered_attributes), list(b.filtered_attributes)))

    if not config.ignore_timestamp:
        if a.time_unix_nano != b.time_unix_nano:
            reasons.append(not_equal_str("Time", a.time_unix_nano, b.time_unix_nano))

    if not config.ignore_value:
        if a.value != b.value:
            reasons.append(not_equal_str("Value", a.value, b.value))

    if bytes(a.span_id) != bytes(b.span_id):
        reasons.append(not_equal_str("SpanID", bytes(a.span_id).hex(), bytes(b.span_id).hex()))
    if bytes(a.trace_id) != bytes(b.trace_id):
        reasons.append(not_equal_str("TraceID", bytes(a.trace_id).hex(), bytes(b.trace_id).hex()))
    return reasons


def equal_extrema(a: Optional[float], b: Optional[float], config: Config) -> List[str]:
    """Compare two extrema, where ``None`` is an unrecorded value."""
    if not eq_extrema(a, b):
        return [not_equal_str("Extrema", a, b)]
    return []


def eq_extrema(a: Optional[float], b: Optional[float]) -> bool:
    if a is None or b is None:
        return (a is None) == (b is None)
    return a == b
