from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

from .abstraction.request import Request, RequestLine
from .abstraction.response import Metadata

__all__ = [
    "ImpossibleResponse",
    "BadUrlProblem",
    "TimeoutProblem",
    "NetworkErrorProblem",
    "BadStatusProblem",
    "BadBodyProblem",
    "Problem",
    "Error",
    "CompatibleError",
    "CompatBadUrl",
    "CompatTimeout",
    "CompatNetworkError",
    "CompatBadStatus",
    "CompatBadBody",
]

E = TypeVar("E")


class ImpossibleResponse(RuntimeError):
    """A response reached a branch the classification rules out. Always a bug."""


# ───────────────────────── problems ──────────────────────────


@dataclass(frozen=True)
class BadUrlProblem:
    url: str


@dataclass(frozen=True)
class TimeoutProblem:
    pass


@dataclass(frozen=True)
class NetworkErrorProblem:
    pass


@dataclass(frozen=True)
class BadStatusProblem(Generic[E]):
    metadata: Metadata
    body: E
    """Error body after decoding. Raw text or bytes for the simple resolvers."""


@dataclass(frozen=True)
class BadBodyProblem:
    metadata: Metadata
    message: str
    """Why the decoder rejected the payload. Never the partially parsed value."""


Problem = Union[
    BadUrlProblem, TimeoutProblem, NetworkErrorProblem, BadStatusProblem, BadBodyProblem
]


@dataclass(frozen=True)
class Error(Generic[E]):
    """A failed call, as rich as the resolver was asked to make it.

    Hashable as long as the decoded error body and the attached request are.
    """

    problem: Problem
    """What went wrong."""

    request: Optional[Union[Request, RequestLine]] = None
    """The originating request, its method + url projection, or nothing."""

    @property
    def metadata(self) -> Optional[Metadata]:
        if isinstance(self.problem, (BadStatusProblem, BadBodyProblem)):
            return self.problem.metadata
        return None

    @property
    def request_line(self) -> Optional[RequestLine]:
        if isinstance(self.request, Request):
            return self.request.line()
        return self.request

    def describe(self) -> str:
        """One human-readable line, e.g. for a log record or a status bar."""
        p = self.problem
        if isinstance(p, BadUrlProblem):
            text = f"bad url: {p.url}"
        elif isinstance(p, TimeoutProblem):
            text = "timed out"
        elif isinstance(p, NetworkErrorProblem):
            text = "network error"
        elif isinstance(p, BadStatusProblem):
            reason = f" {p.metadata.status_text}" if p.metadata.status_text else ""
            text = f"bad status: {p.metadata.status_code}{reason}"
        elif isinstance(p, BadBodyProblem):
            text = f"bad body: {p.message}"
        else:
            raise ImpossibleResponse(f"unknown problem {p!r}")
        line = self.request_line
        return f"{line}: {text}" if line is not None else text

    def to_compatible(self) -> CompatibleError:
        """Drop request identity, headers and the decoded error body."""
        p = self.problem
        if isinstance(p, BadUrlProblem):
            return CompatBadUrl(p.url)
        if isinstance(p, TimeoutProblem):
            return CompatTimeout()
        if isinstance(p, NetworkErrorProblem):
            return CompatNetworkError()
        if isinstance(p, BadStatusProblem):
            return CompatBadStatus(p.metadata.status_code)
        if isinstance(p, BadBodyProblem):
            return CompatBadBody(p.message)
        raise ImpossibleResponse(f"unknown problem {p!r}")


# ───────────────────────── compatible shape ──────────────────────────


class CompatibleError:
    """The minimal error shape of a conventional HTTP client."""


@dataclass(frozen=True)
class CompatBadUrl(CompatibleError):
    url: str


@dataclass(frozen=True)
class CompatTimeout(CompatibleError):
    pass


@dataclass(frozen=True)
class CompatNetworkError(CompatibleError):
    pass


@dataclass(frozen=True)
class CompatBadStatus(CompatibleError):
    status_code: int


@dataclass(frozen=True)
class CompatBadBody(CompatibleError):
    message: str
