"""Equality assertions with readable diffs for collected metric trees."""
from metricdatatest.assertion import (
    assert_aggregations_equal,
    assert_equal,
    assert_extrema_equal,
    assert_has_attributes,
)
from metricdatatest.comparisons import (
    equal_aggregations,
    equal_metrics,
    equal_resource_metrics,
    equal_scope_metrics,
)
from metricdatatest.config import Config, Option, load_config, new_config
from metricdatatest.has_attributes import has_attributes_resource_metrics
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
    NumberKind,
    ResourceMetrics,
    ScopeMetrics,
)
from metricdatatest.otel_sdk import from_metrics_data

__all__ = [
    "Config",
    "DataPoint",
    "Exemplar",
    "ExponentialBucket",
    "ExponentialHistogramDataPoint",
    "Float64ExponentialHistogram",
    "Float64Gauge",
    "Float64Histogram",
    "Float64Sum",
    "HistogramDataPoint",
    "Int64ExponentialHistogram",
    "Int64Gauge",
    "Int64Histogram",
    "Int64Sum",
    "KeyValue",
    "Metrics",
    "NumberKind",
    "Option",
    "ResourceMetrics",
    "ScopeMetrics",
    "assert_aggregations_equal",
    "assert_equal",
    "assert_extrema_equal",
    "assert_has_attributes",
    "equal_aggregations",
    "equal_metrics",
    "equal_resource_metrics",
    "equal_scope_metrics",
    "from_metrics_data",
    "has_attributes_resource_metrics",
    "load_config",
    "new_config",
]
