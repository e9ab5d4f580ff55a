"""Data structures for collected metric trees."""
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Generic, Mapping, NamedTuple, Optional, Sequence, TypeVar, Union

from opentelemetry.sdk.metrics.export import AggregationTemporality
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.util.instrumentation import InstrumentationScope

N = TypeVar("N", int, float)

AttributeValue = Union[
    bool, int, float, str,
    Sequence[bool], Sequence[int], Sequence[float], Sequence[str],
]
Attributes = Mapping[str, AttributeValue]


class NumberKind(Enum):
    """Numeric kind an aggregation is instantiated over."""
    INT64 = "int64"
    FLOAT64 = "float64"


class KeyValue(NamedTuple):
    """A single typed attribute."""
    key: str
    value: AttributeValue


@dataclass(frozen=True)
class Exemplar(Generic[N]):
    """A measurement sampled alongside an aggregation.

    ``filtered_attributes`` are the attributes recorded with the measurement
    that were filtered out of the data point; their order is significant.
    ``span_id`` and ``trace_id`` are 8 and 16 raw bytes.
    """
    filtered_attributes: Sequence[KeyValue] = ()
    time_unix_nano: int = 0
    value: N = 0
    span_id: bytes = bytes(8)
    trace_id: bytes = bytes(16)


@dataclass(frozen=True)
class DataPoint(Generic[N]):
    """A single value for a set of attributes."""
    attributes: Attributes = field(default_factory=dict)
    start_time_unix_nano: Optional[int] = 0
    time_unix_nano: int = 0
    value: N = 0
    exemplars: Sequence[Exemplar[N]] = ()


@dataclass(frozen=True)
class HistogramDataPoint(Generic[N]):
    """A histogram of values for a set of attributes.

    ``min`` and ``max`` are extrema: ``None`` means the value was not
    recorded, which is different from a recorded zero.
    """
    attributes: Attributes = field(default_factory=dict)
    start_time_unix_nano: Optional[int] = 0
    time_unix_nano: int = 0
    count: int = 0
    bounds: Sequence[float] = ()
    bucket_counts: Sequence[int] = ()
    min: Optional[N] = None
    max: Optional[N] = None
    sum: N = 0
    exemplars: Sequence[Exemplar[N]] = ()


@dataclass(frozen=True)
class ExponentialBucket:
    """A range of exponential histogram buckets starting at ``offset``."""
    offset: int = 0
    counts: Sequence[int] = ()


@dataclass(frozen=True)
class ExponentialHistogramDataPoint(Generic[N]):
    """An exponential histogram of values for a set of attributes."""
    attributes: Attributes = field(default_factory=dict)
    start_time_unix_nano: Optional[int] = 0
    time_unix_nano: int = 0
    count: int = 0
    min: Optional[N] = None
    max: Optional[N] = None
    sum: N = 0
    scale: int = 0
    zero_count: int = 0
    positive_bucket: ExponentialBucket = field(default_factory=ExponentialBucket)
    negative_bucket: ExponentialBucket = field(default_factory=ExponentialBucket)
    exemplars: Sequence[Exemplar[N]] = ()


@dataclass(frozen=True)
class Gauge(Generic[N]):
    """Instantaneous measurements."""
    number_kind: ClassVar[NumberKind]

    data_points: Sequence[DataPoint[N]] = ()


@dataclass(frozen=True)
class Sum(Generic[N]):
    """Scalar measurements summed over time."""
    number_kind: ClassVar[NumberKind]

    data_points: Sequence[DataPoint[N]] = ()
    temporality: AggregationTemporality = AggregationTemporality.CUMULATIVE
    is_monotonic: bool = False


@dataclass(frozen=True)
class Histogram(Generic[N]):
    """Measurements bucketed by explicit boundaries."""
    number_kind: ClassVar[NumberKind]

    data_points: Sequence[HistogramDataPoint[N]] = ()
    temporality: AggregationTemporality = AggregationTemporality.CUMULATIVE


@dataclass(frozen=True)
class ExponentialHistogram(Generic[N]):
    """Measurements bucketed by exponential scale."""
    number_kind: ClassVar[NumberKind]

    data_points: Sequence[ExponentialHistogramDataPoint[N]] = ()
    temporality: AggregationTemporality = AggregationTemporality.CUMULATIVE


@dataclass(frozen=True)
class Int64Gauge(Gauge[int]):
    number_kind: ClassVar[NumberKind] = NumberKind.INT64


@dataclass(frozen=True)
class Float64Gauge(Gauge[float]):
    number_kind: ClassVar[NumberKind] = NumberKind.FLOAT64


@dataclass(frozen=True)
class Int64Sum(Sum[int]):
    number_kind: ClassVar[NumberKind] = NumberKind.INT64


@dataclass(frozen=True)
class Float64Sum(Sum[float]):
    number_kind: ClassVar[NumberKind] = NumberKind.FLOAT64


@dataclass(frozen=True)
class Int64Histogram(Histogram[int]):
    number_kind: ClassVar[NumberKind] = NumberKind.INT64


@dataclass(frozen=True)
class Float64Histogram(Histogram[float]):
    number_kind: ClassVar[NumberKind] = NumberKind.FLOAT64


@dataclass(frozen=True)
class Int64ExponentialHistogram(ExponentialHistogram[int]):
    number_kind: ClassVar[NumberKind] = NumberKind.INT64


@dataclass(frozen=True)
class Float64ExponentialHistogram(ExponentialHistogram[float]):
    number_kind: ClassVar[NumberKind] = NumberKind.FLOAT64


Aggregation = Union[
    Int64Gauge, Float64Gauge,
    Int64Sum, Float64Sum,
    Int64Histogram, Float64Histogram,
    Int64ExponentialHistogram, Float64ExponentialHistogram,
]


@dataclass(frozen=True)
class Metrics:
    """A collection of one or more aggregated time series from an instrument."""
    name: str
    description: str = ""
    unit: str = ""
    data: Optional[Aggregation] = None


@dataclass(frozen=True)
class ScopeMetrics:
    """Metrics produced by a single instrumentation scope."""
    scope: InstrumentationScope
    metrics: Sequence[Metrics] = ()


@dataclass(frozen=True)
class ResourceMetrics:
    """Metrics collected for a single resource."""
    resource: Resource
    scope_metrics: Sequence[ScopeMetrics] = ()

    def __repr__(self) -> str:
        return (
            f"ResourceMetrics(resource={resource_str(self.resource)}, "
            f"scope_metrics={self.scope_metrics!r})"
        )


def resource_str(resource: Resource) -> str:
    """Render a resource by value; the SDK class has no value repr."""
    return f"Resource(attributes={dict(resource.attributes)!r}, schema_url={resource.schema_url!r})"
