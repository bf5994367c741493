# src/influx_write/point.py
# Data model for a single observation: typed field values, timestamps, the immutable
# Point and the staged PointBuilder that refuses to produce a point without fields.
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from .errors import InvalidPointError, InvalidValueError, MissingFieldError

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
UINT64_MAX = 2 ** 64 - 1


class Value:
    """
    Closed set of field value types understood by Line Protocol:
    Float, Integer, UInteger, String and Boolean.
    """

    __slots__ = ()

    @staticmethod
    def of(obj: Any) -> "Value":
        """
        Convert a plain Python object into its Value variant.

        bool -> Boolean, int -> Integer, float -> Float, str -> String.
        Unsigned fields have no plain Python counterpart; pass UInteger(n) explicitly.
        """
        if isinstance(obj, Value):
            return obj
        # bool first: it is a subclass of int
        if isinstance(obj, bool):
            return Boolean(obj)
        if isinstance(obj, int):
            return Integer(obj)
        if isinstance(obj, float):
            return Float(obj)
        if isinstance(obj, str):
            return String(obj)
        raise InvalidValueError(f"Unsupported field value type: {type(obj).__name__}")


@dataclass(frozen=True)
class Float(Value):
    value: float

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise InvalidValueError(f"Float expects a number, got {self.value!r}")
        try:
            as_float = float(self.value)
        except OverflowError:
            raise InvalidValueError(f"Float field must be finite, got {self.value}") from None
        if not math.isfinite(as_float):
            raise InvalidValueError(f"Float field must be finite, got {as_float}")
        object.__setattr__(self, "value", as_float)


@dataclass(frozen=True)
class Integer(Value):
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidValueError(f"Integer expects an int, got {self.value!r}")
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise InvalidValueError(f"Integer out of signed 64-bit range: {self.value}")


@dataclass(frozen=True)
class UInteger(Value):
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidValueError(f"UInteger expects an int, got {self.value!r}")
        if not 0 <= self.value <= UINT64_MAX:
            raise InvalidValueError(f"UInteger out of unsigned 64-bit range: {self.value}")


@dataclass(frozen=True)
class String(Value):
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise InvalidValueError(f"String expects a str, got {self.value!r}")


@dataclass(frozen=True)
class Boolean(Value):
    value: bool

    def __post_init__(self):
        if not isinstance(self.value, bool):
            raise InvalidValueError(f"Boolean expects a bool, got {self.value!r}")


@dataclass(frozen=True)
class Timestamp:
    """An absolute instant, always held as an aware UTC datetime."""

    instant: datetime

    def __post_init__(self):
        if not isinstance(self.instant, datetime):
            raise TypeError(f"Timestamp expects a datetime, got {type(self.instant).__name__}")
        if self.instant.tzinfo is None:
            # naive datetimes are taken to be UTC already
            utc = self.instant.replace(tzinfo=timezone.utc)
        else:
            utc = self.instant.astimezone(timezone.utc)
        object.__setattr__(self, "instant", utc)

    @classmethod
    def of(cls, obj: Union["Timestamp", datetime]) -> "Timestamp":
        if isinstance(obj, Timestamp):
            return obj
        return cls(obj)


def _check_key(kind: str, key: Any) -> str:
    if not isinstance(key, str):
        raise InvalidPointError(f"{kind} keys must be strings, got {key!r}")
    return key


@dataclass(frozen=True)
class Point:
    """
    One observation: measurement, tags, fields and an optional timestamp.

    A Point always carries at least one field; constructing one without fields
    raises MissingFieldError. Tags and fields keep insertion order, which is the
    order they are written on the wire. Without a timestamp the server assigns
    its own time on ingestion.
    """

    measurement: str
    fields: Mapping[str, Value]
    tags: Mapping[str, str] = field(default_factory=dict)
    time: Optional[Timestamp] = None

    def __post_init__(self):
        if not isinstance(self.measurement, str) or not self.measurement:
            raise InvalidPointError("Measurement must be a non-empty string")

        fields = {_check_key("Field", k): Value.of(v) for k, v in self.fields.items()}
        if not fields:
            raise MissingFieldError()

        tags = {}
        for k, v in self.tags.items():
            if not isinstance(v, str):
                raise InvalidPointError(f"Tag values must be strings, got {v!r} for {k!r}")
            tags[_check_key("Tag", k)] = v

        object.__setattr__(self, "fields", MappingProxyType(fields))
        object.__setattr__(self, "tags", MappingProxyType(tags))
        if self.time is not None:
            object.__setattr__(self, "time", Timestamp.of(self.time))

    @staticmethod
    def builder(measurement: str) -> "PointBuilder":
        return PointBuilder(measurement)


class PointBuilder:
    """
    Staged constructor for Point.

    The builder starts without fields; build() is only valid once with_field has
    been called at least once. Re-using a key overwrites the previous value.

        point = (PointBuilder("cpu")
                 .with_tag("host", "server01")
                 .with_field("usage", 0.64)
                 .build())
    """

    def __init__(self, measurement: str):
        if not isinstance(measurement, str) or not measurement:
            raise InvalidPointError("Measurement must be a non-empty string")
        self._measurement = measurement
        self._tags: dict = {}
        self._fields: dict = {}
        self._time: Optional[Timestamp] = None

    @property
    def has_field(self) -> bool:
        return bool(self._fields)

    def with_field(self, key: str, value: Any) -> "PointBuilder":
        self._fields[_check_key("Field", key)] = Value.of(value)
        return self

    def with_tag(self, key: str, value: str) -> "PointBuilder":
        if not isinstance(value, str):
            raise InvalidPointError(f"Tag values must be strings, got {value!r} for {key!r}")
        self._tags[_check_key("Tag", key)] = value
        return self

    def with_time(self, instant: Union[Timestamp, datetime]) -> "PointBuilder":
        self._time = Timestamp.of(instant)
        return self

    def build(self) -> Point:
        if not self.has_field:
            raise MissingFieldError()
        return Point(
            measurement=self._measurement,
            fields=dict(self._fields),
            tags=dict(self._tags),
            time=self._time,
        )

    def __repr__(self) -> str:
        state = "HasField" if self.has_field else "NoField"
        return f"PointBuilder({self._measurement!r}, state={state})"
