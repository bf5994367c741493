# src/influx_write/transport/base.py
# Contract between the writers and whatever actually talks HTTP.
from typing import Awaitable, Protocol, runtime_checkable

from ..request import HttpRequest, HttpResponse


@runtime_checkable
class BlockingTransport(Protocol):
    """Executes a request on the calling thread and returns the response."""

    def execute(self, request: HttpRequest) -> HttpResponse:
        ...


@runtime_checkable
class AsyncTransport(Protocol):
    """Executes a request from a coroutine; the await is the only suspension point."""

    def execute(self, request: HttpRequest) -> Awaitable[HttpResponse]:
        ...
