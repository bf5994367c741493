# src/influx_write/request.py
# Builds the HTTP write request from a writer configuration, a batch of points and a
# precision. Nothing here performs I/O; transports turn HttpRequest into a real call.
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping
from urllib.parse import urlencode, urljoin, urlsplit

from .auth import Authorization
from .errors import UrlError
from .line_protocol import encode_points
from .point import Point
from .precision import WritePrecision

API_ENDPOINT_V2 = "/api/v2/write"
USER_AGENT = "influx-write/0.1.0"


def _validate_base_url(url: str) -> None:
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise UrlError(f"Invalid InfluxDB URL: {url}") from e
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise UrlError(f"Invalid InfluxDB URL: {url}. Expected format: http(s)://hostname:port")


@dataclass(frozen=True)
class WriterConfig:
    """Connection details: server base URL, credential, organization and bucket."""

    url: str
    authorization: Authorization
    org: str
    bucket: str

    def __post_init__(self):
        _validate_base_url(self.url)
        if not isinstance(self.authorization, Authorization):
            raise TypeError("authorization must be an Authorization instance")

    @property
    def write_url(self) -> str:
        # absolute path: replaces any path already present on the base URL
        try:
            return urljoin(self.url, API_ENDPOINT_V2)
        except ValueError as e:
            raise UrlError(f"Can not join {API_ENDPOINT_V2} onto {self.url}") from e


@dataclass(frozen=True)
class HttpRequest:
    method: str
    url: str
    params: Mapping[str, str]
    headers: Mapping[str, str]
    body: str

    @property
    def full_url(self) -> str:
        if not self.params:
            return self.url
        return f"{self.url}?{urlencode(list(self.params.items()))}"

    @property
    def content(self) -> bytes:
        return self.body.encode("utf-8")


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


def build_write_request(
    config: WriterConfig,
    points: Iterable[Point],
    precision: WritePrecision = WritePrecision.NS,
) -> HttpRequest:
    """
    Assemble a POST to <base>/api/v2/write?org=..&bucket=..&precision=..

    Encoding errors (missing fields, out-of-range nanosecond timestamps) propagate
    unchanged.
    """
    body = encode_points(points, precision)
    params: Dict[str, str] = {
        "org": config.org,
        "bucket": config.bucket,
        "precision": precision.code,
    }
    headers = {
        "User-Agent": USER_AGENT,
        "Authorization": config.authorization.header_value,
        "Content-Type": "text/plain; charset=utf-8",
        "Accept": "application/json",
    }
    return HttpRequest(method="POST", url=config.write_url, params=params, headers=headers, body=body)
