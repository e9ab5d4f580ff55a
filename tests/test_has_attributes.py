"""Tests for attribute containment checks."""
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.util.instrumentation import InstrumentationScope

from metricdatatest.has_attributes import (
    has_attributes_aggregation,
    has_attributes_data_point,
    has_attributes_exemplar,
    has_attributes_exponential_histogram,
    has_attributes_gauge,
    has_attributes_histogram,
    has_attributes_resource_metrics,
    has_attributes_sum,
)
from metricdatatest.metricdata import (
    DataPoint,
    Exemplar,
    ExponentialHistogramDataPoint,
    Float64ExponentialHistogram,
    Float64Gauge,
    HistogramDataPoint,
    Int64Histogram,
    Int64Sum,
    KeyValue,
    Metrics,
    ResourceMetrics,
    ScopeMetrics,
)

GET = DataPoint(attributes={"method": "GET", "region": "us"}, value=1)
POST = DataPoint(attributes={"method": "POST"}, value=2)


def test_data_point_has_attributes():
    assert has_attributes_data_point(GET, KeyValue("method", "GET")) == []
    assert has_attributes_data_point(GET, KeyValue("method", "GET"), KeyValue("region", "us")) == []


def test_data_point_different_value():
    assert has_attributes_data_point(POST, KeyValue("method", "GET")) == [
        "method not equal:\nexpected: GET\nactual: POST"
    ]


def test_data_point_missing_attribute():
    assert has_attributes_data_point(POST, KeyValue("region", "us")) == ["missing attribute region"]


def test_values_are_rendered_as_text():
    dp = DataPoint(attributes={"code": "200", "retry": True})
    assert has_attributes_data_point(dp, KeyValue("code", 200), KeyValue("retry", False)) == [
        "code not equal:\nexpected: 200\nactual: 200",
        "retry not equal:\nexpected: false\nactual: true",
    ]


def test_plain_pairs_are_accepted():
    assert has_attributes_data_point(GET, ("method", "GET")) == []


def test_gauge_labels_data_point_index():
    gauge = Float64Gauge(data_points=(GET, POST))
    assert has_attributes_gauge(gauge, KeyValue("region", "us")) == [
        "gauge datapoint 1 attributes:\n",
        "missing attribute region",
    ]


def test_sum_labels_data_point_index():
    sum_ = Int64Sum(data_points=(POST, GET))
    assert has_attributes_sum(sum_, KeyValue("method", "GET")) == [
        "sum datapoint 0 attributes:\n",
        "method not equal:\nexpected: GET\nactual: POST",
    ]


def test_histograms():
    histogram = Int64Histogram(data_points=(HistogramDataPoint(attributes={"route": "/cart"}),))
    assert has_attributes_histogram(histogram, KeyValue("route", "/cart")) == []
    assert has_attributes_histogram(histogram, KeyValue("route", "/pay")) == [
        "histogram datapoint 0 attributes:\n",
        "route not equal:\nexpected: /pay\nactual: /cart",
    ]

    expo = Float64ExponentialHistogram(data_points=(ExponentialHistogramDataPoint(attributes={}),))
    assert has_attributes_exponential_histogram(expo, KeyValue("route", "/cart")) == [
        "histogram datapoint 0 attributes:\n",
        "missing attribute route",
    ]


def test_aggregation_dispatch():
    assert has_attributes_aggregation(Int64Sum(data_points=(GET,)), KeyValue("method", "GET")) == []
    assert has_attributes_aggregation(None, KeyValue("method", "GET")) == ["unknown aggregation NoneType"]


def test_exemplar_filtered_attributes():
    exemplar = Exemplar(filtered_attributes=(KeyValue("user", "alice"), KeyValue("user", "bob")))
    assert has_attributes_exemplar(exemplar, KeyValue("user", "bob")) == []
    assert has_attributes_exemplar(exemplar, KeyValue("session", "1")) == ["missing attribute session"]


def test_data_point_check_does_not_descend_into_exemplars():
    dp = DataPoint(
        attributes={"method": "GET"},
        exemplars=(Exemplar(filtered_attributes=(KeyValue("user", "alice"),)),),
    )
    assert has_attributes_data_point(dp, KeyValue("method", "GET")) == []


def test_resource_metrics_context():
    rm = ResourceMetrics(
        resource=Resource({"service.name": "checkout"}),
        scope_metrics=(
            ScopeMetrics(
                scope=InstrumentationScope("checkout.server"),
                metrics=(
                    Metrics("ok", data=Int64Sum(data_points=(GET,))),
                    Metrics("requests", data=Int64Sum(data_points=(POST,))),
                ),
            ),
        ),
    )
    assert has_attributes_resource_metrics(rm, KeyValue("method", "POST"), KeyValue("region", "us")) == [
        "ResourceMetrics ScopeMetrics 0:\n",
        "ScopeMetrics checkout.server Metrics 0:\n",
        "Metric ok:\n",
        "sum datapoint 0 attributes:\n",
        "method not equal:\nexpected: POST\nactual: GET",
        "ScopeMetrics checkout.server Metrics 1:\n",
        "Metric requests:\n",
        "sum datapoint 0 attributes:\n",
        "missing attribute region",
    ]
