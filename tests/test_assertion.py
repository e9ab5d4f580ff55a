"""Tests for the assertion helpers."""
import pytest
from opentelemetry.sdk.metrics.export import AggregationTemporality
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.util.instrumentation import InstrumentationScope

from metricdatatest import (
    Config,
    DataPoint,
    ExponentialBucket,
    HistogramDataPoint,
    Int64Gauge,
    Int64Sum,
    KeyValue,
    Metrics,
    Option,
    ResourceMetrics,
    ScopeMetrics,
    assert_aggregations_equal,
    assert_equal,
    assert_extrema_equal,
    assert_has_attributes,
)


def requests(value, time_unix_nano=2):
    return ResourceMetrics(
        resource=Resource({"service.name": "checkout"}),
        scope_metrics=(
            ScopeMetrics(
                scope=InstrumentationScope("checkout.server"),
                metrics=(
                    Metrics(
                        "requests",
                        data=Int64Sum(
                            data_points=(DataPoint(attributes={"method": "GET"}, time_unix_nano=time_unix_nano,
                                                   value=value),),
                            temporality=AggregationTemporality.CUMULATIVE,
                            is_monotonic=True,
                        ),
                    ),
                ),
            ),
        ),
    )


def test_assert_equal_passes():
    assert assert_equal(requests(5), requests(5))


def test_assert_equal_fails_with_reasons():
    with pytest.raises(AssertionError) as excinfo:
        assert_equal(requests(5), requests(6))
    message = str(excinfo.value)
    assert message.startswith("ResourceMetrics inequality:\n")
    assert "Value not equal:\nexpected: 5\nactual: 6" in message


def test_assert_equal_options():
    assert assert_equal(requests(5), requests(6), Option.IGNORE_VALUE)
    assert assert_equal(requests(5, time_unix_nano=2), requests(5, time_unix_nano=3), "ignore_timestamp")
    assert assert_equal(requests(5), requests(6), config=Config(ignore_value=True))


def test_assert_equal_options_and_config_conflict():
    with pytest.raises(ValueError):
        assert_equal(requests(5), requests(5), Option.IGNORE_VALUE, config=Config())


def test_assert_equal_leaf_types():
    assert assert_equal(DataPoint(value=1), DataPoint(value=1))
    assert assert_equal(ExponentialBucket(offset=1, counts=(1,)), ExponentialBucket(offset=1, counts=(1,)))
    with pytest.raises(AssertionError, match="HistogramDataPoint inequality"):
        assert_equal(HistogramDataPoint(count=1), HistogramDataPoint(count=2))


def test_assert_equal_unknown_type():
    with pytest.raises(TypeError, match="Unknown types str"):
        assert_equal("a", "a")


def test_assert_equal_mismatched_types():
    with pytest.raises(TypeError):
        assert_equal(DataPoint(), HistogramDataPoint())


def test_assert_equal_mismatched_aggregations():
    with pytest.raises(AssertionError, match="Aggregation types not equal"):
        assert_equal(Int64Gauge(), Int64Sum())


def test_assert_aggregations_equal():
    assert assert_aggregations_equal(None, None)
    assert assert_aggregations_equal(Int64Gauge(data_points=(DataPoint(value=1),)),
                                     Int64Gauge(data_points=(DataPoint(value=1),)))
    with pytest.raises(AssertionError):
        assert_aggregations_equal(None, Int64Gauge())


def test_assert_extrema_equal():
    assert assert_extrema_equal(None, None)
    assert assert_extrema_equal(2.5, 2.5)
    with pytest.raises(AssertionError, match="Extrema inequality"):
        assert_extrema_equal(None, 0)


def test_assert_has_attributes():
    assert assert_has_attributes(requests(5), KeyValue("method", "GET"))
    with pytest.raises(AssertionError, match="missing attribute region"):
        assert_has_attributes(requests(5), KeyValue("region", "us"))


def test_assert_has_attributes_unknown_type():
    with pytest.raises(TypeError):
        assert_has_attributes(ExponentialBucket(), KeyValue("method", "GET"))
