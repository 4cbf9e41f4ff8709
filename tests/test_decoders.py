from __future__ import annotations

import struct

import pytest

from detailed_requests import Err, Ok, decoders
from conftest import metadata


def test_string_is_verbatim():
    assert decoders.string()("  raw <b>text</b> ") == Ok("  raw <b>text</b> ")


def test_whatever_ignores_the_body():
    assert decoders.whatever()("definitely not json") == Ok(None)


def test_json_without_converter_returns_document():
    assert decoders.json()('{"a": [1, 2]}') == Ok({"a": [1, 2]})


def test_json_syntax_error_is_a_failure():
    outcome = decoders.json()("{nope")
    assert isinstance(outcome, Err)
    assert outcome.error.startswith("This is not valid JSON!")


def test_missing_key_names_the_field():
    outcome = decoders.json(lambda d: d["forks_count"])('{"name": "y", "forks_number": 3}')
    assert isinstance(outcome, Err)
    assert "`forks_count`" in outcome.error
    assert "forks_number" in outcome.error  # the offending value is shown


def test_decode_error_message_is_kept():
    def convert(d):
        raise decoders.DecodeError("expected a positive id")

    assert decoders.json(convert)("{}") == Err("expected a positive id")


def test_type_errors_become_failures():
    outcome = decoders.json(lambda d: int(d["n"]))('{"n": "seven"}')
    assert isinstance(outcome, Err)
    assert "seven" in outcome.error


def test_wrong_container_becomes_a_failure():
    outcome = decoders.json(lambda d: d.get("login"))("[]")
    assert isinstance(outcome, Err)
    assert outcome.error.startswith("Problem with the given value:")
    assert "get" in outcome.error


def test_deeply_nested_document_is_not_valid_json():
    outcome = decoders.json()("[" * 100_000 + "]" * 100_000)
    assert isinstance(outcome, Err)
    assert outcome.error.startswith("This is not valid JSON!")


def test_field_helpers():
    assert decoders.field({"a": 1}, "a") == 1
    with pytest.raises(decoders.DecodeError, match="`b`"):
        decoders.field({"a": 1}, "b")
    with pytest.raises(decoders.DecodeError):
        decoders.field([1, 2], "a")
    assert decoders.optional_field({"a": 1}, "b", 5) == 5
    with pytest.raises(decoders.DecodeError, match="OBJECT"):
        decoders.optional_field("text", "b")


def test_bytes_decoder_turns_parse_errors_into_none():
    unpack = decoders.bytes_decoder(lambda b: struct.unpack(">I", b)[0])
    assert unpack(b"\x00\x00\x01\x00") == 256
    assert unpack(b"\x01") is None
    assert decoders.raw_bytes()(b"\xff") == b"\xff"


def test_bytes_decoder_treats_any_exception_as_unexpected():
    def header(data: bytes) -> str:
        return data[:4].decode("ascii").lower()

    assert decoders.bytes_decoder(header)(b"PNG\x00\x01") == "png\x00"
    assert decoders.bytes_decoder(lambda b: b.magic)(b"\x89") is None


def test_error_decoders_receive_metadata():
    seen = []

    def by_status(meta):
        seen.append(meta.status_code)
        if meta.status_code == 422:
            return decoders.json(lambda d: d["errors"])
        return decoders.string()

    assert by_status(metadata(422))('{"errors": ["x"]}') == Ok(["x"])
    assert by_status(metadata(500))("boom") == Ok("boom")
    assert seen == [422, 500]


def test_stock_error_decoders():
    assert decoders.error_string()(metadata(500))("oops") == Ok("oops")
    assert decoders.error_json(lambda d: d["message"])(metadata(404))('{"message": "gone"}') == Ok("gone")
    assert decoders.error_bytes()(metadata(500))(b"\x00") == b"\x00"
