# src/influx_write/transport/httpx_transport.py
# Async transport backed by an httpx.AsyncClient.
from typing import Optional

import httpx
from loguru import logger

from ..errors import TransportError
from ..request import HttpRequest, HttpResponse


class HttpxTransport:
    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: Optional[float] = 10.0):
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def execute(self, request: HttpRequest) -> HttpResponse:
        try:
            resp = await self.client.request(
                request.method,
                request.url,
                params=dict(request.params),
                headers=dict(request.headers),
                content=request.content,
            )
        except httpx.HTTPError as e:
            logger.debug("HTTP {} {} failed: {}", request.method, request.url, e)
            raise TransportError(f"Request to {request.url} failed: {e}") from e
        return HttpResponse(status_code=resp.status_code, headers=dict(resp.headers), body=resp.content)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
