# src/influx_write/writer.py
# Writers push points to InfluxDB: encode, build one request, hand it to the transport,
# then classify the response. InfluxWriter blocks, AsyncInfluxWriter awaits.
from typing import Iterable, List, Optional

from loguru import logger

from .auth import Authorization
from .errors import WriteFailedError
from .point import Point
from .precision import DEFAULT_PRECISION, WritePrecision
from .request import HttpRequest, HttpResponse, WriterConfig, build_write_request
from .transport import AsyncTransport, BlockingTransport, HttpxTransport, RequestsTransport


def decode_body(body: bytes) -> str:
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError:
        return f"<{len(body)} bytes, not valid UTF-8>"


def check_response(response: HttpResponse) -> None:
    """Raise WriteFailedError unless the status is 2xx. The body is not inspected on success."""
    if response.is_success:
        return
    text = decode_body(response.body)
    logger.warning("InfluxDB rejected write: status={} body={}", response.status_code, text)
    raise WriteFailedError(response.status_code, text, response.body)


class _WriterBase:
    def __init__(self, transport, url: str, authorization: Authorization, org: str, bucket: str):
        self.transport = transport
        self.config = WriterConfig(url=url, authorization=authorization, org=org, bucket=bucket)

    def build_request(self, points: Iterable[Point], precision: WritePrecision = DEFAULT_PRECISION) -> HttpRequest:
        return build_write_request(self.config, points, precision)

    def _prepare(self, points: Iterable[Point], precision: WritePrecision) -> HttpRequest:
        batch: List[Point] = list(points)
        request = self.build_request(batch, precision)
        logger.debug("Writing {} point(s) to {} (precision={})", len(batch), request.url, precision.code)
        return request


class InfluxWriter(_WriterBase):
    """
    Blocking writer. Owns its transport; every write call issues exactly one request,
    whatever the number of points. Not safe for concurrent use without external locking.
    """

    def __init__(
        self,
        transport: BlockingTransport,
        url: str,
        authorization: Authorization,
        org: str,
        bucket: str,
    ):
        super().__init__(transport, url, authorization, org, bucket)

    @classmethod
    def from_config(cls, config: WriterConfig, transport: Optional[BlockingTransport] = None) -> "InfluxWriter":
        if transport is None:
            transport = RequestsTransport()
        return cls(transport, config.url, config.authorization, config.org, config.bucket)

    def write(self, points: Iterable[Point], precision: WritePrecision = DEFAULT_PRECISION) -> None:
        request = self._prepare(points, precision)
        response = self.transport.execute(request)
        check_response(response)

    def write_with_precision(self, points: Iterable[Point], precision: WritePrecision) -> None:
        self.write(points, precision)

    def write_single(self, point: Point, precision: WritePrecision = DEFAULT_PRECISION) -> None:
        self.write([point], precision)

    def write_single_with_precision(self, point: Point, precision: WritePrecision) -> None:
        self.write([point], precision)

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "InfluxWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class AsyncInfluxWriter(_WriterBase):
    """Async counterpart of InfluxWriter; encoding stays synchronous, only the transport call is awaited."""

    def __init__(
        self,
        transport: AsyncTransport,
        url: str,
        authorization: Authorization,
        org: str,
        bucket: str,
    ):
        super().__init__(transport, url, authorization, org, bucket)

    @classmethod
    def from_config(cls, config: WriterConfig, transport: Optional[AsyncTransport] = None) -> "AsyncInfluxWriter":
        if transport is None:
            transport = HttpxTransport()
        return cls(transport, config.url, config.authorization, config.org, config.bucket)

    async def write(self, points: Iterable[Point], precision: WritePrecision = DEFAULT_PRECISION) -> None:
        request = self._prepare(points, precision)
        response = await self.transport.execute(request)
        check_response(response)

    async def write_with_precision(self, points: Iterable[Point], precision: WritePrecision) -> None:
        await self.write(points, precision)

    async def write_single(self, point: Point, precision: WritePrecision = DEFAULT_PRECISION) -> None:
        await self.write([point], precision)

    async def write_single_with_precision(self, point: Point, precision: WritePrecision) -> None:
        await self.write([point], precision)

    async def aclose(self) -> None:
        aclose = getattr(self.transport, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> "AsyncInfluxWriter":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
