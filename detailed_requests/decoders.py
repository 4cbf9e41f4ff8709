"""
Body decoders used by the resolver.

A *text decoder* takes the response body as ``str`` and returns ``Ok(value)``
or ``Err(message)``. A *bytes decoder* takes the raw ``bytes`` and returns the
value, or ``None`` when the payload is not what it expected; binary decoders
cannot explain why they failed, so the resolver reports them with the fixed
:data:`UNEXPECTED_PAYLOAD` message. ``None`` is reserved for that: a bytes
decoder cannot produce ``None`` as a successful value. Wrap such a value
(``lambda data: ()`` instead of ``lambda data: None``) or use a text decoder
such as :func:`whatever`.

Error decoders are factories taking the response :class:`Metadata`, so the
shape of an error body can depend on the status code or on the headers.
"""

from __future__ import annotations

import json as _json
from typing import Any, Callable, Optional, TypeVar

from .abstraction.response import Metadata
from .abstraction.result import Err, Ok, Result

__all__ = [
    "UNEXPECTED_PAYLOAD",
    "DecodeError",
    "TextDecoder",
    "BytesDecoder",
    "ErrorDecoder",
    "BytesErrorDecoder",
    "string",
    "whatever",
    "json",
    "field",
    "optional_field",
    "raw_bytes",
    "bytes_decoder",
    "error_string",
    "error_json",
    "error_bytes",
]

T = TypeVar("T")

UNEXPECTED_PAYLOAD = "Unexpected payload"

TextDecoder = Callable[[str], Result[Any, str]]
BytesDecoder = Callable[[bytes], Optional[Any]]
"""Returns the decoded value, or ``None`` for an unexpected payload."""
ErrorDecoder = Callable[[Metadata], TextDecoder]
BytesErrorDecoder = Callable[[Metadata], BytesDecoder]

_PREVIEW_LIMIT = 200


class DecodeError(Exception):
    """Raised by converters when a parsed value does not have the expected shape."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def _preview(value: Any) -> str:
    try:
        text = _json.dumps(value, ensure_ascii=False, indent=4)
    except (TypeError, ValueError):
        text = repr(value)
    except RecursionError:
        text = f"<deeply nested {type(value).__name__}>"
    if len(text) > _PREVIEW_LIMIT:
        text = text[:_PREVIEW_LIMIT] + "..."
    return text


def _missing_field(name: Any, value: Any) -> str:
    return f"Expecting an OBJECT with a field named `{name}` but instead got: {_preview(value)}"


# ───────────────────────── text decoders ──────────────────────────


def string() -> TextDecoder:
    """Pass the body text through verbatim."""
    return Ok


def whatever() -> TextDecoder:
    """Ignore the body."""

    def decode(_text: str) -> Result[None, str]:
        return Ok(None)

    return decode


def json(convert: Optional[Callable[[Any], T]] = None) -> TextDecoder:
    """Parse JSON, then build a value with ``convert``.

    ``convert`` receives the parsed document and may index into it freely:
    a missing key, a wrong type or an explicit :class:`DecodeError` all turn
    into a failure whose message names the problem. Any other exception
    raised by ``convert`` is reported the same way, so a body of the wrong
    shape never escapes as an exception. Documents nested too deeply for the
    parser count as invalid JSON.
    """

    def decode(text: str) -> Result[T, str]:
        try:
            value = _json.loads(text)
        except (ValueError, RecursionError) as e:
            return Err(f"This is not valid JSON! {e}")
        if convert is None:
            return Ok(value)
        try:
            return Ok(convert(value))
        except DecodeError as e:
            return Err(e.message)
        except KeyError as e:
            return Err(_missing_field(e.args[0] if e.args else "", value))
        except Exception as e:
            return Err(f"Problem with the given value: {e}\n\n{_preview(value)}")

    return decode


def field(obj: Any, name: str) -> Any:
    """``obj[name]`` with a readable failure for non-objects and missing keys."""
    if not isinstance(obj, dict) or name not in obj:
        raise DecodeError(_missing_field(name, obj))
    return obj[name]


def optional_field(obj: Any, name: str, default: Any = None) -> Any:
    if not isinstance(obj, dict):
        raise DecodeError(f"Expecting an OBJECT but instead got: {_preview(obj)}")
    return obj.get(name, default)


# ───────────────────────── bytes decoders ──────────────────────────


def raw_bytes() -> BytesDecoder:
    """Keep the payload as is."""
    return bytes


def bytes_decoder(fn: Callable[[bytes], T]) -> BytesDecoder:
    """Adapt a raising parser into a bytes decoder.

    Any exception raised by ``fn`` (``struct.error``, ``ValueError``,
    ``IndexError`` and so on) counts as an unexpected payload, and so does a
    ``None`` result.
    """

    def decode(data: bytes) -> Optional[T]:
        try:
            return fn(data)
        except Exception:
            return None

    return decode


# ───────────────────────── error decoders ──────────────────────────


def error_string() -> ErrorDecoder:
    """Keep the error body as raw text, whatever the status."""

    def for_metadata(_metadata: Metadata) -> TextDecoder:
        return string()

    return for_metadata


def error_json(convert: Optional[Callable[[Any], T]] = None) -> ErrorDecoder:
    """Decode every error body with the same JSON converter."""
    decoder = json(convert)

    def for_metadata(_metadata: Metadata) -> TextDecoder:
        return decoder

    return for_metadata


def error_bytes() -> BytesErrorDecoder:
    def for_metadata(_metadata: Metadata) -> BytesDecoder:
        return raw_bytes()

    return for_metadata
