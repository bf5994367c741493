# src/influx_write/line_protocol.py
# Serialises points into Line Protocol text:
#   <measurement>[,<tag_key>=<tag_value>...] <field_key>=<field_value>[,...] [<timestamp>]
# https://docs.influxdata.com/influxdb/v2/reference/syntax/line-protocol/
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Iterable

from .errors import ConversionError, MissingFieldError, TimeConversionError
from .point import INT64_MAX, INT64_MIN, Boolean, Float, Integer, Point, String, Timestamp, UInteger, Value
from .precision import WritePrecision

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_UNITS = {
    WritePrecision.US: timedelta(microseconds=1),
    WritePrecision.MS: timedelta(milliseconds=1),
    WritePrecision.S: timedelta(seconds=1),
}


def _escape_whitespace(value: str) -> str:
    # a raw line break would end the point early
    return value.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")


def escape_measurement(name: str) -> str:
    escaped = name.replace("\\", "\\\\").replace(",", "\\,").replace(" ", "\\ ")
    return _escape_whitespace(escaped)


def escape_key(value: str) -> str:
    """Escape a tag key, tag value or field key."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace(",", "\\,")
        .replace("=", "\\=")
        .replace(" ", "\\ ")
    )
    return _escape_whitespace(escaped)


def escape_string_field(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def format_float(value: float) -> str:
    """Shortest round-tripping text in positional notation; integral values drop '.0'."""
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def encode_value(value: Value) -> str:
    if isinstance(value, Float):
        return format_float(value.value)
    if isinstance(value, Integer):
        return f"{value.value}i"
    if isinstance(value, UInteger):
        return f"{value.value}u"
    if isinstance(value, String):
        return f'"{escape_string_field(value.value)}"'
    if isinstance(value, Boolean):
        return "true" if value.value else "false"
    raise ConversionError(f"Not a field value: {value!r}")


def encode_timestamp(timestamp: Timestamp, precision: WritePrecision) -> str:
    """
    Epoch time of the instant scaled to `precision`, as decimal text.

    Only nanosecond precision can fail: a signed 64-bit nanosecond count covers
    roughly 1677-09-21 to 2262-04-11. Coarser units floor towards negative infinity.
    """
    delta = timestamp.instant - EPOCH
    if precision is WritePrecision.NS:
        nanos = (delta // timedelta(microseconds=1)) * 1000
        if not INT64_MIN <= nanos <= INT64_MAX:
            raise TimeConversionError(
                f"Can not convert {timestamp.instant.isoformat()} with nanosecond precision"
            )
        return str(nanos)
    return str(delta // _UNITS[precision])


def encode_point(point: Point, precision: WritePrecision = WritePrecision.NS) -> str:
    if not point.fields:
        raise MissingFieldError()

    parts = [escape_measurement(point.measurement)]
    for k, v in point.tags.items():
        parts.append(f",{escape_key(k)}={escape_key(v)}")
    parts.append(" ")
    parts.append(",".join(f"{escape_key(k)}={encode_value(v)}" for k, v in point.fields.items()))
    if point.time is not None:
        parts.append(" ")
        parts.append(encode_timestamp(point.time, precision))
    return "".join(parts)


def encode_points(points: Iterable[Point], precision: WritePrecision = WritePrecision.NS) -> str:
    """Encode every point in order under one precision, newline separated."""
    return "\n".join(encode_point(p, precision) for p in points)
