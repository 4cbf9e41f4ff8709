from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Iterable, Optional, Sequence
from urllib.parse import urlencode

from .body import (
    EMPTY,
    Body,
    BytesBody,
    File,
    FileBody,
    JsonBody,
    MultipartBody,
    Part,
    TextBody,
)
from .http import URL, HttpMethod


@dataclass(frozen=True)
class RequestLine:
    """Reduced identity of a request: just enough to say which call failed."""

    method: str
    url: str

    def __str__(self) -> str:
        return f"{self.method} {self.url}"


@dataclass(frozen=True)
class Request:
    """Represents all the data needed to perform one call.

    A Request is a value: every ``with_*`` method returns a new instance and
    leaves the receiver untouched, so a partially configured request can be
    shared and refined in several directions.
    """

    method: str
    """The method used in the request. Any string is passed through."""

    url: str
    """Fully qualified or root-relative target."""

    headers: tuple[tuple[str, str], ...] = ()
    """Header pairs, most recently added first. Duplicates are kept."""

    body: Body = EMPTY
    """The body of the request. Setting a new one replaces the old one."""

    timeout: Optional[float] = None
    """Client-side deadline in seconds. None disables it."""

    allow_cross_origin_credentials: bool = False
    """Attach cookies and credentials to requests towards other origins."""

    # ────── headers ──────
    def with_header(self, name: str, value: str) -> Request:
        return replace(self, headers=((name, value),) + self.headers)

    def with_headers(self, pairs: Iterable[tuple[str, str]]) -> Request:
        req = self
        for name, value in pairs:
            req = req.with_header(name, value)
        return req

    def with_bearer_token(self, token: str) -> Request:
        return self.with_header("Authorization", f"Bearer {token}")

    def header_list(self) -> list[tuple[str, str]]:
        """Headers in the order they were added, as they go on the wire."""
        return list(reversed(self.headers))

    # ────── options ──────
    def with_timeout(self, seconds: Optional[float]) -> Request:
        return replace(self, timeout=seconds)

    def with_credentials_across_origins(self, allow: bool = True) -> Request:
        return replace(self, allow_cross_origin_credentials=bool(allow))

    def with_query_params(self, pairs: Iterable[tuple[str, str]]) -> Request:
        return replace(self, url=URL(full_url=self.url).with_query(pairs).full_url)

    # ────── bodies ──────
    def with_text_body(self, mime: str, content: str) -> Request:
        return replace(self, body=TextBody(mime=mime, content=content))

    def with_json_body(self, value: Any) -> Request:
        return replace(self, body=JsonBody(value=value))

    def with_file_body(self, file: File) -> Request:
        return replace(self, body=FileBody(file=file))

    def with_bytes_body(self, mime: str, data: bytes) -> Request:
        return replace(self, body=BytesBody(mime=mime, data=bytes(data)))

    def with_multipart_body(self, parts: Sequence[Part]) -> Request:
        return replace(self, body=MultipartBody(parts=tuple(parts)))

    def with_url_encoded_body(self, pairs: Iterable[tuple[str, str]]) -> Request:
        return self.with_text_body(
            "application/x-www-form-urlencoded", urlencode(list(pairs))
        )

    # ────── identity ──────
    def line(self) -> RequestLine:
        return RequestLine(method=self.method, url=self.url)


# ───────────────────────── constructors ──────────────────────────


def request(method: HttpMethod | str, url: str) -> Request:
    """Start a request with an arbitrary method."""
    value = method.value if isinstance(method, HttpMethod) else str(method)
    return Request(method=value, url=url)


def get(url: str) -> Request:
    return request(HttpMethod.GET, url)


def post(url: str) -> Request:
    return request(HttpMethod.POST, url)


def put(url: str) -> Request:
    return request(HttpMethod.PUT, url)


def patch(url: str) -> Request:
    return request(HttpMethod.PATCH, url)


def delete(url: str) -> Request:
    return request(HttpMethod.DELETE, url)
