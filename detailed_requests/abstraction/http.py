from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional
from urllib.parse import urlencode, urljoin, urlsplit, urlunsplit


class HttpMethod(Enum):
    """The methods with a dedicated constructor. Any other string is accepted as-is."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


@dataclass(frozen=True)
class URL:
    """A thin, parse-on-demand view over a URL string."""

    full_url: str
    """The URL exactly as the caller wrote it."""

    @property
    def scheme(self) -> str:
        return urlsplit(self.full_url).scheme.lower()

    @property
    def domain(self) -> str:
        """Host without port, lower-cased. Empty for root-relative URLs."""
        return (urlsplit(self.full_url).hostname or "").lower()

    @property
    def path(self) -> str:
        return urlsplit(self.full_url).path or "/"

    @property
    def origin(self) -> Optional[str]:
        """``scheme://host[:port]`` or None when the URL is not absolute."""
        parts = urlsplit(self.full_url)
        if not parts.scheme or not parts.netloc:
            return None
        return f"{parts.scheme.lower()}://{parts.netloc.lower()}"

    @property
    def is_absolute(self) -> bool:
        return self.origin is not None

    def join(self, base: Optional[str]) -> URL:
        """Resolve a root-relative URL against ``base``; absolute URLs are kept."""
        if base is None or self.is_absolute:
            return self
        return URL(full_url=urljoin(base, self.full_url))

    def with_query(self, pairs: Iterable[tuple[str, str]]) -> URL:
        """Append url-encoded pairs, keeping the existing query and fragment."""
        encoded = urlencode(list(pairs))
        if not encoded:
            return self
        u = urlsplit(self.full_url)
        qs = f"{u.query}&{encoded}" if u.query else encoded
        return URL(full_url=urlunsplit((u.scheme, u.netloc, u.path, qs, u.fragment)))

    def __str__(self) -> str:
        return self.full_url
