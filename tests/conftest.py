from __future__ import annotations

import asyncio
from typing import Optional

import pytest

from detailed_requests import (
    BadStatus,
    GoodStatus,
    Metadata,
    RawResponse,
    Request,
    Transport,
)
from detailed_requests.transport import ProgressCallback, Receiving, Sending


def metadata(status: int, text: str = "", **headers: str) -> Metadata:
    return Metadata(
        url="https://api.example.com/",
        status_code=status,
        status_text=text,
        headers={k.replace("_", "-"): v for k, v in headers.items()},
    )


def good(body: str | bytes, status: int = 200, **headers: str) -> GoodStatus:
    data = body.encode() if isinstance(body, str) else body
    return GoodStatus(metadata(status, "OK", **headers), data)


def bad(body: str | bytes, status: int = 404, text: str = "Not Found", **headers: str) -> BadStatus:
    data = body.encode() if isinstance(body, str) else body
    return BadStatus(metadata(status, text, **headers), data)


class ScriptedTransport(Transport):
    """Answers every request with a canned RawResponse keyed by URL.

    ``gate`` holds every call until it is set, which lets tests observe
    calls while they are in flight.
    """

    def __init__(self, responses: dict[str, RawResponse]) -> None:
        super().__init__()
        self.responses = responses
        self.sent: list[Request] = []
        self.gate: asyncio.Event | None = None

    async def _send(
        self, request: Request, progress: Optional[ProgressCallback]
    ) -> RawResponse:
        self.sent.append(request)
        raw = self.responses[request.url]
        if progress is not None:
            progress(Sending(sent=0, size=10))
            progress(Sending(sent=10, size=10))
        if self.gate is not None:
            await self.gate.wait()
        if progress is not None and isinstance(raw, (GoodStatus, BadStatus)):
            progress(Receiving(received=len(raw.body), size=len(raw.body)))
        return raw


@pytest.fixture
def scripted() -> ScriptedTransport:
    return ScriptedTransport({})
