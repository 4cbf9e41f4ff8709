"""
resolver — turns a (Request, RawResponse) pair into ``Ok(value)`` or ``Err(error)``.

There is one resolver; the four fidelity tiers are configurations of it:

==============  ==========================  ====================  ================
tier            error type                  error body            request identity
==============  ==========================  ====================  ================
compatible      :class:`CompatibleError`    dropped               no
simple          :class:`Error`              raw text / bytes      no
detailed        :class:`Error`              caller's decoder      no
with request    :class:`Error`              caller's decoder      yes
==============  ==========================  ====================  ================

Classification is the same for every tier:

1. ``BadUrl``       → :class:`BadUrlProblem`
2. ``Timeout``      → :class:`TimeoutProblem`
3. ``NetworkError`` → :class:`NetworkErrorProblem`
4. ``BadStatus``    → error decoder; success gives :class:`BadStatusProblem`,
   failure gives :class:`BadBodyProblem` (metadata kept).
5. ``GoodStatus``   → success decoder; success gives ``Ok``, failure gives
   :class:`BadBodyProblem`.

Resolution is pure: no I/O, no retries, nothing raised for a malformed
response.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from . import decoders
from .abstraction.request import Request, RequestLine
from .abstraction.response import (
    BadStatus,
    BadUrl,
    GoodStatus,
    NetworkError,
    RawResponse,
    Timeout,
)
from .abstraction.result import Err, Ok, Result
from .errors import (
    BadBodyProblem,
    BadStatusProblem,
    BadUrlProblem,
    Error,
    ImpossibleResponse,
    NetworkErrorProblem,
    Problem,
    TimeoutProblem,
)

if TYPE_CHECKING:
    from .transport import TrackedCall, Transport

__all__ = [
    "Identity",
    "Resolver",
    "expect_string_compatible",
    "expect_json_compatible",
    "expect_bytes_compatible",
    "expect_whatever_compatible",
    "expect_string",
    "expect_json",
    "expect_bytes",
    "expect_whatever",
    "expect_string_detailed",
    "expect_json_detailed",
    "expect_bytes_detailed",
]


class Identity(Enum):
    """How much of the originating request an :class:`Error` carries."""

    NONE = "none"
    LINE = "line"
    FULL = "full"


@dataclass(frozen=True)
class Resolver:
    """A resolution strategy. Build one with the ``expect_*`` functions."""

    success: Callable[[Any], Any]
    """Text decoder, or bytes decoder when ``binary`` is set."""

    error: Callable[[Any], Callable[[Any], Any]]
    """Factory from response metadata to the decoder of the error body."""

    binary: bool = False
    """Feed decoders the raw body bytes instead of the decoded text."""

    identity: Identity = Identity.NONE
    """Request identity attached to errors."""

    compatible: bool = False
    """Reduce errors to the :class:`CompatibleError` shape."""

    # ────── configuration ──────
    def with_request(self) -> Resolver:
        """Attach the full originating request to every error."""
        return replace(self, identity=Identity.FULL)

    def with_request_line(self) -> Resolver:
        """Attach ``method + url`` of the originating request to every error."""
        return replace(self, identity=Identity.LINE)

    # ────── resolution ──────
    def resolve(self, request: Request, raw: RawResponse) -> Result:
        if isinstance(raw, BadUrl):
            problem: Problem = BadUrlProblem(raw.url)
        elif isinstance(raw, Timeout):
            problem = TimeoutProblem()
        elif isinstance(raw, NetworkError):
            problem = NetworkErrorProblem()
        elif isinstance(raw, BadStatus):
            problem = self._error_problem(raw)
        elif isinstance(raw, GoodStatus):
            outcome = self._decode(self.success, raw)
            if isinstance(outcome, Ok):
                return outcome
            problem = BadBodyProblem(raw.metadata, outcome.error)
        else:
            raise ImpossibleResponse(f"not a raw response: {raw!r}")
        return Err(self._error(request, problem))

    def _error_problem(self, raw: RawResponse) -> Problem:
        if not isinstance(raw, BadStatus):
            raise ImpossibleResponse(f"error decoding reached with {type(raw).__name__}")
        outcome = self._decode(self.error(raw.metadata), raw)
        if isinstance(outcome, Ok):
            return BadStatusProblem(raw.metadata, outcome.value)
        return BadBodyProblem(raw.metadata, outcome.error)

    def _decode(
        self, decoder: Callable[[Any], Any], raw: Union[BadStatus, GoodStatus]
    ) -> Result:
        if self.binary:
            value = decoder(raw.body)
            return Err(decoders.UNEXPECTED_PAYLOAD) if value is None else Ok(value)
        outcome = decoder(raw.text())
        if isinstance(outcome, Err) and not outcome.error:
            return Err(decoders.UNEXPECTED_PAYLOAD)
        return outcome

    def _error(self, request: Request, problem: Problem) -> Any:
        identity: Optional[Union[Request, RequestLine]] = None
        if self.identity is Identity.FULL:
            identity = request
        elif self.identity is Identity.LINE:
            identity = request.line()
        error = Error(problem=problem, request=identity)
        return error.to_compatible() if self.compatible else error

    # ────── dispatch ──────
    async def send(self, transport: Transport, request: Request) -> Result:
        """Dispatch once and resolve."""
        return self.resolve(request, await transport.dispatch(request))

    def track(self, transport: Transport, key: str, request: Request) -> TrackedCall:
        """Dispatch under a tracker key; ``await call.result()`` gives the resolved outcome."""
        return transport.dispatch_tracked(key, request, resolve=self.resolve)


# ───────────────────────── compatible ──────────────────────────


def expect_string_compatible() -> Resolver:
    return Resolver(decoders.string(), decoders.error_string(), compatible=True)


def expect_json_compatible(convert: Optional[Callable[[Any], Any]] = None) -> Resolver:
    return Resolver(decoders.json(convert), decoders.error_string(), compatible=True)


def expect_bytes_compatible(decoder: decoders.BytesDecoder) -> Resolver:
    return Resolver(decoder, decoders.error_bytes(), binary=True, compatible=True)


def expect_whatever_compatible() -> Resolver:
    return Resolver(decoders.whatever(), decoders.error_string(), compatible=True)


# ───────────────────────── simple ──────────────────────────


def expect_string() -> Resolver:
    """Body as text; error bodies kept as raw text."""
    return Resolver(decoders.string(), decoders.error_string())


def expect_json(convert: Optional[Callable[[Any], Any]] = None) -> Resolver:
    """Body as JSON through ``convert``; error bodies kept as raw text."""
    return Resolver(decoders.json(convert), decoders.error_string())


def expect_bytes(decoder: decoders.BytesDecoder) -> Resolver:
    """Body through a bytes decoder; error bodies kept as raw bytes.

    The decoder returns ``None`` for an unexpected payload, so ``None`` is
    never a successful value here.
    """
    return Resolver(decoder, decoders.error_bytes(), binary=True)


def expect_whatever() -> Resolver:
    return Resolver(decoders.whatever(), decoders.error_string())


# ───────────────────────── detailed ──────────────────────────


def expect_string_detailed(error: decoders.ErrorDecoder) -> Resolver:
    return Resolver(decoders.string(), error)


def expect_json_detailed(
    convert: Optional[Callable[[Any], Any]],
    error: decoders.ErrorDecoder,
) -> Resolver:
    """Decode success bodies with ``convert`` and error bodies with ``error(metadata)``.

    ``error`` may be built with :func:`decoders.error_json` or be any function
    of the response metadata returning a text decoder, e.g. to read a
    different payload for ``422`` than for ``500``.
    """
    return Resolver(decoders.json(convert), error)


def expect_bytes_detailed(
    decoder: decoders.BytesDecoder,
    error: decoders.BytesErrorDecoder,
) -> Resolver:
    return Resolver(decoder, error, binary=True)
