from __future__ import annotations

import asyncio

import pytest

import detailed_requests as dr
from detailed_requests import Receiving, Sending
from conftest import ScriptedTransport, good


async def _settle() -> None:
    for _ in range(5):
        await asyncio.sleep(0)


# ===========================================================================
# single shot
# ===========================================================================
@pytest.mark.asyncio
async def test_dispatch_returns_raw_response():
    raw = good("hello")
    transport = ScriptedTransport({"/a": raw})
    assert await transport.dispatch(dr.get("/a")) == raw


@pytest.mark.asyncio
async def test_concurrent_dispatches_can_be_gathered():
    transport = ScriptedTransport({"/a": good("a"), "/b": dr.Timeout()})
    outcomes = await asyncio.gather(
        dr.expect_string().send(transport, dr.get("/a")),
        dr.expect_string().with_request().send(transport, dr.get("/b")),
    )
    assert outcomes[0] == dr.Ok("a")
    assert outcomes[1].error.request == dr.get("/b")


# ===========================================================================
# tracked
# ===========================================================================
@pytest.mark.asyncio
async def test_tracked_call_yields_progress_then_response():
    raw = good("0123456789")
    transport = ScriptedTransport({"/a": raw})
    call = transport.dispatch_tracked("upload", dr.get("/a"))

    events = [event async for event in call]

    assert events == [
        Sending(sent=0, size=10),
        Sending(sent=10, size=10),
        Receiving(received=10, size=10),
        raw,
    ]
    assert await call.response() == raw
    assert transport.in_flight() == []


@pytest.mark.asyncio
async def test_same_key_supersedes_previous_call():
    transport = ScriptedTransport({"/a": good("a"), "/b": good("b")})
    transport.gate = asyncio.Event()

    first = transport.dispatch_tracked("search", dr.get("/a"))
    await _settle()
    second = transport.dispatch_tracked("search", dr.get("/b"))
    await _settle()

    assert first.cancelled()
    assert transport.in_flight() == ["search"]

    transport.gate.set()
    assert await second.response() == good("b")
    with pytest.raises(asyncio.CancelledError):
        await first.response()


@pytest.mark.asyncio
async def test_different_keys_run_side_by_side():
    transport = ScriptedTransport({"/a": good("a"), "/b": good("b")})
    transport.gate = asyncio.Event()

    a = transport.dispatch_tracked("a", dr.get("/a"))
    b = transport.dispatch_tracked("b", dr.get("/b"))
    await _settle()
    assert sorted(transport.in_flight()) == ["a", "b"]

    transport.gate.set()
    assert [await a.response(), await b.response()] == [good("a"), good("b")]


@pytest.mark.asyncio
async def test_cancel_by_key():
    transport = ScriptedTransport({"/a": good("a")})
    transport.gate = asyncio.Event()
    call = transport.dispatch_tracked("dl", dr.get("/a"))
    await _settle()

    assert transport.cancel("dl") is True
    assert transport.cancel("dl") is False
    assert transport.cancel("never-used") is False

    events = [event async for event in call]
    assert dr.GoodStatus not in {type(e) for e in events}
    assert call.cancelled()


@pytest.mark.asyncio
async def test_cancel_before_the_call_starts_ends_iteration():
    transport = ScriptedTransport({"/a": good("a")})
    call = transport.dispatch_tracked("k", dr.get("/a"))
    transport.cancel("k")

    assert [event async for event in call] == []
    assert transport.sent == []


@pytest.mark.asyncio
async def test_result_requires_a_resolver():
    transport = ScriptedTransport({"/a": good("a")})
    call = transport.dispatch_tracked("k", dr.get("/a"))
    with pytest.raises(RuntimeError):
        await call.result()
    assert await call.response() == good("a")


class _BrokenTransport(dr.Transport):
    async def _send(self, request, progress):
        if progress is not None:
            progress(Sending(sent=0, size=4))
        raise OSError("file body vanished")


@pytest.mark.asyncio
async def test_transport_failure_is_raised_from_iteration(caplog: pytest.LogCaptureFixture):
    call = _BrokenTransport().dispatch_tracked("up", dr.post("/a"))
    seen = []

    with pytest.raises(OSError, match="vanished"):
        async for event in call:
            seen.append(event)

    assert seen == [Sending(sent=0, size=4)]
    with pytest.raises(OSError):
        await call.response()
    assert "tracker 'up': POST /a failed" in caplog.text


def test_progress_fractions():
    assert Sending(sent=5, size=10).fraction == 0.5
    assert Sending(sent=0, size=0).fraction == 1.0
    assert Receiving(received=3, size=None).fraction is None
    assert Receiving(received=30, size=10).fraction == 1.0
