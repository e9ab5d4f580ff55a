"""Checks that every data point of a metric tree carries a set of attributes.

These functions compare a single tree against literal attributes rather
than against another tree. Extra attributes on a data point are allowed.
"""
from typing import Callable, Dict, List, Mapping, Type

from metricdatatest.attributes import emit, equal_values
from metricdatatest.diff import not_equal_str
from metricdatatest.metricdata import (
    AttributeValue,
    DataPoint,
    Exemplar,
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
    KeyValue,
    Metrics,
    ResourceMetrics,
    ScopeMetrics,
    Sum,
)


def missing_attr_str(name: str) -> str:
    return f"missing attribute {name}"


def _has_attributes(attributes: Mapping[str, AttributeValue], attrs) -> List[str]:
    reasons = []
    for key, value in attrs:
        if key not in attributes:
            reasons.append(missing_attr_str(key))
            continue
        val = attributes[key]
        if not equal_values(val, value):
            reasons.append(not_equal_str(key, emit(value), emit(val)))
    return reasons


def has_attributes_exemplar(exemplar: Exemplar, *attrs: KeyValue) -> List[str]:
    # The last value wins when a key is repeated.
    return _has_attributes(dict(exemplar.filtered_attributes), attrs)


def has_attributes_data_point(dp: DataPoint, *attrs: KeyValue) -> List[str]:
    return _has_attributes(dp.attributes, attrs)


def has_attributes_histogram_data_point(dp: HistogramDataPoint, *attrs: KeyValue) -> List[str]:
    return _has_attributes(dp.attributes, attrs)


def has_attributes_exponential_histogram_data_point(
    dp: ExponentialHistogramDataPoint,
    *attrs: KeyValue
) -> List[str]:
    return _has_attributes(dp.attributes, attrs)


def _has_attributes_points(label: str, data_points, check, attrs) -> List[str]:
    reasons = []
    for n, dp in enumerate(data_points):
        reas = check(dp, *attrs)
        if reas:
            reasons.append(f"{label} datapoint {n} attributes:\n")
            reasons.extend(reas)
    return reasons


def has_attributes_gauge(gauge: Gauge, *attrs: KeyValue) -> List[str]:
    return _has_attributes_points("gauge", gauge.data_points, has_attributes_data_point, attrs)


def has_attributes_sum(sum_: Sum, *attrs: KeyValue) -> List[str]:
    return _has_attributes_points("sum", sum_.data_points, has_attributes_data_point, attrs)


def has_attributes_histogram(histogram: Histogram, *attrs: KeyValue) -> List[str]:
    return _has_attributes_points(
        "histogram", histogram.data_points, has_attributes_histogram_data_point, attrs
    )


def has_attributes_exponential_histogram(histogram: ExponentialHistogram, *attrs: KeyValue) -> List[str]:
    return _has_attributes_points(
        "histogram", histogram.data_points, has_attributes_exponential_histogram_data_point, attrs
    )


_AGGREGATION_CHECKS: Dict[Type, Callable[..., List[str]]] = {
    Int64Gauge: has_attributes_gauge,
    Float64Gauge: has_attributes_gauge,
    Int64Sum: has_attributes_sum,
    Float64Sum: has_attributes_sum,
    Int64Histogram: has_attributes_histogram,
    Float64Histogram: has_attributes_histogram,
    Int64ExponentialHistogram: has_attributes_exponential_histogram,
    Float64ExponentialHistogram: has_attributes_exponential_histogram,
}


def has_attributes_aggregation(agg, *attrs: KeyValue) -> List[str]:
    """Check the data points of any of the known aggregation variants."""
    check = _AGGREGATION_CHECKS.get(type(agg))
    if check is None:
        return [f"unknown aggregation {type(agg).__name__}"]
    return check(agg, *attrs)


def has_attributes_metrics(metrics: Metrics, *attrs: KeyValue) -> List[str]:
    reasons = []
    reas = has_attributes_aggregation(metrics.data, *attrs)
    if reas:
        reasons.append(f"Metric {metrics.name}:\n")
        reasons.extend(reas)
    return reasons


def has_attributes_scope_metrics(sm: ScopeMetrics, *attrs: KeyValue) -> List[str]:
    reasons = []
    for n, metrics in enumerate(sm.metrics):
        reas = has_attributes_metrics(metrics, *attrs)
        if reas:
            reasons.append(f"ScopeMetrics {sm.scope.name} Metrics {n}:\n")
            reasons.extend(reas)
    return reasons


def has_attributes_resource_metrics(rm: ResourceMetrics, *attrs: KeyValue) -> List[str]:
    """
    Check every data point reachable from a ResourceMetrics.

    Each finding is preceded by lines locating it: the scope metrics index,
    scope name and metric index, metric name and data point index.
    """
    reasons = []
    for n, sm in enumerate(rm.scope_metrics):
        reas = has_attributes_scope_metrics(sm, *attrs)
        if reas:
            reasons.append(f"ResourceMetrics ScopeMetrics {n}:\n")
            reasons.extend(reas)
    return reasons
