# src/influx_write/__init__.py
# Line Protocol encoding and HTTP write requests for InfluxDB v2.
from loguru import logger

from .auth import Authorization
from .errors import (
    ConfigError,
    ConversionError,
    InfluxWriteError,
    InvalidHeaderValueError,
    InvalidPointError,
    InvalidValueError,
    MissingFieldError,
    TimeConversionError,
    TransportError,
    UrlError,
    WriteFailedError,
)
from .line_protocol import encode_point, encode_points, encode_timestamp, encode_value
from .point import Boolean, Float, Integer, Point, PointBuilder, String, Timestamp, UInteger, Value
from .precision import WritePrecision
from .request import API_ENDPOINT_V2, HttpRequest, HttpResponse, WriterConfig, build_write_request
from .transport import AsyncTransport, BlockingTransport, HttpxTransport, RequestsTransport
from .writer import AsyncInfluxWriter, InfluxWriter

__version__ = "0.1.0"

logger.disable("influx_write")

__all__ = [
    "API_ENDPOINT_V2",
    "AsyncInfluxWriter",
    "AsyncTransport",
    "Authorization",
    "BlockingTransport",
    "Boolean",
    "ConfigError",
    "ConversionError",
    "Float",
    "HttpRequest",
    "HttpResponse",
    "HttpxTransport",
    "InfluxWriteError",
    "InfluxWriter",
    "Integer",
    "InvalidHeaderValueError",
    "InvalidPointError",
    "InvalidValueError",
    "MissingFieldError",
    "Point",
    "PointBuilder",
    "RequestsTransport",
    "String",
    "TimeConversionError",
    "Timestamp",
    "TransportError",
    "UInteger",
    "UrlError",
    "Value",
    "WriteFailedError",
    "WritePrecision",
    "WriterConfig",
    "build_write_request",
    "encode_point",
    "encode_points",
    "encode_timestamp",
    "encode_value",
]
