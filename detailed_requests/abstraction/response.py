from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Union


def guess_encoding(headers: Mapping[str, str]) -> str:
    ctype = headers.get("content-type", "")
    if "charset=" in ctype:
        return (
            ctype.split("charset=", 1)[1].split(";", 1)[0].strip(" \"'") or "utf-8"
        )
    return "utf-8"


def _decode(body: bytes, headers: Mapping[str, str]) -> str:
    try:
        return body.decode(guess_encoding(headers), errors="replace")
    except LookupError:  # unknown charset label
        return body.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class Metadata:
    """What the server said about a response, besides its body."""

    url: str
    """The URL of the response. Due to redirects, it can differ from the request's."""

    status_code: int
    """The status code of the response."""

    status_text: str = ""
    """Reason phrase, e.g. ``Not Found``."""

    headers: Mapping[str, str] = field(default_factory=dict)
    """Response headers with lower-cased names, as a read-only mapping."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def __hash__(self) -> int:
        return hash(
            (self.url, self.status_code, self.status_text, frozenset(self.headers.items()))
        )


# ───────────────────────── raw outcomes ──────────────────────────


@dataclass(frozen=True)
class BadUrl:
    """The request target could not be turned into a valid URL."""

    url: str


@dataclass(frozen=True)
class Timeout:
    """The client-side deadline passed before a response arrived."""


@dataclass(frozen=True)
class NetworkError:
    """DNS failure, refused or reset connection, offline..."""


@dataclass(frozen=True)
class BadStatus:
    """The server answered outside the 2xx range."""

    metadata: Metadata
    body: bytes = b""

    def text(self) -> str:
        return _decode(self.body, self.metadata.headers)


@dataclass(frozen=True)
class GoodStatus:
    """The server answered with a 2xx status."""

    metadata: Metadata
    body: bytes = b""

    def text(self) -> str:
        return _decode(self.body, self.metadata.headers)


RawResponse = Union[BadUrl, Timeout, NetworkError, BadStatus, GoodStatus]


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code < 300
