# src/influx_write/transport/__init__.py
from .base import AsyncTransport, BlockingTransport
from .httpx_transport import HttpxTransport
from .requests_transport import RequestsTransport

__all__ = ["AsyncTransport", "BlockingTransport", "HttpxTransport", "RequestsTransport"]
