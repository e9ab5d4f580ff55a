"""Test assertions over metric trees.

The assertions raise ``AssertionError`` listing every reason the values
differ, so they can be used directly in pytest tests::

    assert_equal(expected, actual, Option.IGNORE_TIMESTAMP)
"""
from typing import Callable, List, Optional, Tuple, Union
import logging

from metricdatatest.comparisons import (
    equal_aggregations,
    equal_data_points,
    equal_exemplars,
    equal_exponential_buckets,
    equal_exponential_histogram_data_points,
    equal_extrema,
    equal_histogram_data_points,
    equal_metrics,
    equal_resource_metrics,
    equal_scope_metrics,
)
from metricdatatest.config import Config, Option, new_config
from metricdatatest.has_attributes import (
    has_attributes_aggregation,
    has_attributes_data_point,
    has_attributes_exemplar,
    has_attributes_exponential_histogram_data_point,
    has_attributes_histogram_data_point,
    has_attributes_metrics,
    has_attributes_resource_metrics,
    has_attributes_scope_metrics,
)
from metricdatatest.metricdata import (
    DataPoint,
    Exemplar,
    ExponentialBucket,
    ExponentialHistogram,
    ExponentialHistogramDataPoint,
    Gauge,
    Histogram,
    HistogramDataPoint,
    KeyValue,
    Metrics,
    ResourceMetrics,
    ScopeMetrics,
    Sum,
)

logger = logging.getLogger(__name__)

_AGGREGATION_TYPES = (Gauge, Sum, Histogram, ExponentialHistogram)

_EQUALITY: List[Tuple[type, Callable[..., List[str]]]] = [
    (Exemplar, equal_exemplars),
    (DataPoint, equal_data_points),
    (HistogramDataPoint, equal_histogram_data_points),
    (ExponentialHistogramDataPoint, equal_exponential_histogram_data_points),
    (ExponentialBucket, equal_exponential_buckets),
    (_AGGREGATION_TYPES, equal_aggregations),
    (Metrics, equal_metrics),
    (ScopeMetrics, equal_scope_metrics),
    (ResourceMetrics, equal_resource_metrics),
]

_HAS_ATTRIBUTES: List[Tuple[type, Callable[..., List[str]]]] = [
    (Exemplar, has_attributes_exemplar),
    (DataPoint, has_attributes_data_point),
    (HistogramDataPoint, has_attributes_histogram_data_point),
    (ExponentialHistogramDataPoint, has_attributes_exponential_histogram_data_point),
    (_AGGREGATION_TYPES, has_attributes_aggregation),
    (Metrics, has_attributes_metrics),
    (ScopeMetrics, has_attributes_scope_metrics),
    (ResourceMetrics, has_attributes_resource_metrics),
]


def _resolve_config(options, config: Optional[Config]) -> Config:
    if config is not None:
        if options:
            raise ValueError("Pass either options or a config, not both")
        return config
    return new_config(*options)


def _lookup(table, value) -> Callable[..., List[str]]:
    for types, func in table:
        if isinstance(value, types):
            return func
    raise TypeError(f"Unknown types {type(value).__name__}")


def _fail(value, reasons: List[str]):
    message = f"{type(value).__name__} inequality:\n" + "\n".join(reasons)
    logger.debug(message)
    raise AssertionError(message)


def assert_equal(
    expected,
    actual,
    *options: Union[Option, str],
    config: Optional[Config] = None
) -> bool:
    """
    Assert two metric values are equal.

    Args:
        expected: Any metric tree node (Exemplar, a data point, an
            ExponentialBucket, an aggregation, Metrics, ScopeMetrics or
            ResourceMetrics)
        actual: A value of the same type
        options: Options switched on for this comparison
        config: A ready configuration, instead of options

    Returns:
        True when the values are equal

    Raises:
        AssertionError: the values differ; the message lists every reason
        TypeError: the values cannot be compared
    """
    cfg = _resolve_config(options, config)
    comparator = _lookup(_EQUALITY, expected)
    if comparator is not equal_aggregations and type(actual) is not type(expected):
        raise TypeError(
            f"Cannot compare {type(expected).__name__} with {type(actual).__name__}"
        )

    reasons = comparator(expected, actual, cfg)
    if reasons:
        _fail(expected, reasons)
    return True


def assert_aggregations_equal(
    expected,
    actual,
    *options: Union[Option, str],
    config: Optional[Config] = None
) -> bool:
    """Assert two aggregations, possibly of different variants, are equal."""
    cfg = _resolve_config(options, config)
    reasons = equal_aggregations(expected, actual, cfg)
    if reasons:
        _fail(expected, reasons)
    return True


def assert_extrema_equal(expected: Optional[float], actual: Optional[float]) -> bool:
    """Assert two extrema are equal; ``None`` is an unrecorded value."""
    reasons = equal_extrema(expected, actual, Config())
    if reasons:
        raise AssertionError("Extrema inequality:\n" + "\n".join(reasons))
    return True


def assert_has_attributes(value, *attrs: KeyValue) -> bool:
    """
    Assert every data point reachable from ``value`` has the given attributes.

    Raises:
        AssertionError: an attribute is missing or has another value
        TypeError: the value is not a metric tree node
    """
    check = _lookup(_HAS_ATTRIBUTES, value)
    reasons = check(value, *attrs)
    if reasons:
        message = f"{type(value).__name__} has unexpected attributes:\n" + "\n".join(reasons)
        logger.debug(message)
        raise AssertionError(message)
    return True
