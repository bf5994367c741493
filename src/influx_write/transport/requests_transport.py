# src/influx_write/transport/requests_transport.py
# Blocking transport backed by a requests.Session.
from typing import Optional

import requests
from loguru import logger

from ..errors import TransportError
from ..request import HttpRequest, HttpResponse


class RequestsTransport:
    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = 10.0):
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.timeout = timeout

    def execute(self, request: HttpRequest) -> HttpResponse:
        try:
            resp = self.session.request(
                request.method,
                request.url,
                params=dict(request.params),
                headers=dict(request.headers),
                data=request.content,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.debug("HTTP {} {} failed: {}", request.method, request.url, e)
            raise TransportError(f"Request to {request.url} failed: {e}") from e
        return HttpResponse(status_code=resp.status_code, headers=dict(resp.headers), body=resp.content)

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
