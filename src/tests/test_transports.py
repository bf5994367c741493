# src/tests/test_transports.py
import asyncio

import httpx
import pytest
import requests

from influx_write import (
    AsyncInfluxWriter,
    AsyncTransport,
    Authorization,
    BlockingTransport,
    HttpxTransport,
    InfluxWriter,
    PointBuilder,
    RequestsTransport,
    TransportError,
    WriteFailedError,
    WriterConfig,
    build_write_request,
)

CONFIG = WriterConfig("http://localhost:8086", Authorization.token("tok123"), "MyOrg", "MyBucket")


def _request():
    point = PointBuilder("measurement").with_field("field", 0.0).build()
    return build_write_request(CONFIG, [point])


class _Resp:
    def __init__(self, status_code, content=b"", headers=None):
        self.status_code = status_code
        self.content = content
        self.headers = headers or {}


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


def test_transports_satisfy_protocols():
    assert isinstance(RequestsTransport(session=FakeSession()), BlockingTransport)
    assert isinstance(HttpxTransport(client=httpx.AsyncClient()), AsyncTransport)


def test_requests_transport_sends_request():
    session = FakeSession(_Resp(204, headers={"X-Influxdb-Version": "v2.7"}))
    transport = RequestsTransport(session=session, timeout=3)
    response = transport.execute(_request())

    method, url, kwargs = session.calls[0]
    assert method == "POST"
    assert url == "http://localhost:8086/api/v2/write"
    assert kwargs["params"] == {"org": "MyOrg", "bucket": "MyBucket", "precision": "ns"}
    assert kwargs["headers"]["Authorization"] == "Token tok123"
    assert kwargs["data"] == b"measurement field=0"
    assert kwargs["timeout"] == 3
    assert response.status_code == 204
    assert response.headers["X-Influxdb-Version"] == "v2.7"


def test_requests_transport_wraps_errors():
    cause = requests.ConnectionError("refused")
    transport = RequestsTransport(session=FakeSession(error=cause))
    with pytest.raises(TransportError) as excinfo:
        transport.execute(_request())
    assert excinfo.value.__cause__ is cause


def test_requests_transport_leaves_injected_session_open():
    session = FakeSession()
    RequestsTransport(session=session).close()
    assert not session.closed


def test_blocking_writer_over_requests_transport():
    session = FakeSession(_Resp(500, b"error"))
    writer = InfluxWriter.from_config(CONFIG, RequestsTransport(session=session))
    with pytest.raises(WriteFailedError) as excinfo:
        writer.write_single(PointBuilder("measurement").with_field("field", 0.0).build())
    assert excinfo.value.status == 500
    assert excinfo.value.body == "error"
    assert len(session.calls) == 1


def test_httpx_transport_end_to_end():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    async def run():
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        async with AsyncInfluxWriter.from_config(CONFIG, HttpxTransport(client=client)) as writer:
            await writer.write_single(PointBuilder("measurement").with_field("field", 0.0).build())
        await client.aclose()

    asyncio.run(run())

    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/api/v2/write"
    assert request.url.params["org"] == "MyOrg"
    assert request.url.params["bucket"] == "MyBucket"
    assert request.url.params["precision"] == "ns"
    assert request.headers["authorization"] == "Token tok123"
    assert request.content == b"measurement field=0"


def test_httpx_transport_failure_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, content=b"error")

    async def run():
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        writer = AsyncInfluxWriter.from_config(CONFIG, HttpxTransport(client=client))
        try:
            await writer.write_single(PointBuilder("measurement").with_field("field", 0.0).build())
        finally:
            await client.aclose()

    with pytest.raises(WriteFailedError) as excinfo:
        asyncio.run(run())
    assert excinfo.value.status == 500
    assert excinfo.value.body == "error"


def test_httpx_transport_wraps_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async def run():
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        try:
            await HttpxTransport(client=client).execute(_request())
        finally:
            await client.aclose()

    with pytest.raises(TransportError) as excinfo:
        asyncio.run(run())
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)
