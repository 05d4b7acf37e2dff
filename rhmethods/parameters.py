from typing import NamedTuple


class UrlParameter(NamedTuple):
    """A single ``key=value`` pair of a query string or form body."""

    key: str
    value: str

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


class HttpHeaderParameter(NamedTuple):
    """A single HTTP header sent with an API method."""

    key: str
    value: str

    def __str__(self) -> str:
        return f"{self.key}: {self.value}"
