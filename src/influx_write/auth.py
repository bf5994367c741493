# src/influx_write/auth.py
# Authorization credential sent with every write request.
import re
from dataclasses import dataclass

from .errors import InvalidHeaderValueError

# Header values may contain visible ASCII, obs-text, space and tab but no other control characters.
_ILLEGAL_HEADER_CHARS = re.compile(r"[\x00-\x08\x0a-\x1f\x7f]")


@dataclass(frozen=True)
class Authorization:
    header_value: str

    def __post_init__(self):
        if _ILLEGAL_HEADER_CHARS.search(self.header_value):
            raise InvalidHeaderValueError("Authorization header value contains control characters")
        try:
            # http.client sends header values as latin-1
            self.header_value.encode("latin-1")
        except UnicodeEncodeError:
            raise InvalidHeaderValueError("Authorization header value contains non latin-1 characters") from None

    @classmethod
    def token(cls, token: str) -> "Authorization":
        """Credential for an API token, sent as `Authorization: Token <token>`."""
        return cls("Token " + token)

    def as_header(self) -> tuple:
        return ("Authorization", self.header_value)

    def __repr__(self) -> str:
        return "Authorization(<redacted>)"
