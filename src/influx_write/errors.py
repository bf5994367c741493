# src/influx_write/errors.py
# Exception hierarchy. Every failure of a write call surfaces as one of these,
# except whatever a custom transport chooses to raise itself.
from typing import Optional


class InfluxWriteError(Exception):
    """Base class for all errors raised by influx_write."""


class ConversionError(InfluxWriteError):
    """A point could not be turned into Line Protocol."""


class MissingFieldError(ConversionError):
    def __init__(self, message: str = "Datapoints must have at least one field"):
        super().__init__(message)


class TimeConversionError(ConversionError):
    pass


class InvalidValueError(ConversionError, ValueError):
    pass


class InvalidPointError(InfluxWriteError, ValueError):
    pass


class InvalidHeaderValueError(InfluxWriteError, ValueError):
    pass


class UrlError(InfluxWriteError):
    pass


class TransportError(InfluxWriteError):
    """Raised by the bundled transports when the HTTP exchange itself fails."""


class ConfigError(InfluxWriteError):
    pass


class WriteFailedError(InfluxWriteError):
    """
    The server answered with a non-2xx status.

    body holds the decoded response text, or a short marker when the payload was
    not valid UTF-8; raw_body always keeps the bytes as received.
    """

    def __init__(self, status: int, body: str, raw_body: Optional[bytes] = None):
        self.status = status
        self.body = body
        self.raw_body = raw_body if raw_body is not None else body.encode("utf-8")
        super().__init__(f"Write failed with status {status}: {body}")
