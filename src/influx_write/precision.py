# src/influx_write/precision.py
# Time unit used both for encoding timestamps and for the `precision` query parameter.
from enum import Enum


class WritePrecision(Enum):
    NS = "ns"
    US = "us"
    MS = "ms"
    S = "s"

    @property
    def code(self) -> str:
        return self.value

    @classmethod
    def parse(cls, code: str) -> "WritePrecision":
        """Accept a short code such as 'ms' (case-insensitive)."""
        try:
            return cls(code.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown write precision: {code!r}") from None

    def __str__(self) -> str:
        return self.value


DEFAULT_PRECISION = WritePrecision.NS
