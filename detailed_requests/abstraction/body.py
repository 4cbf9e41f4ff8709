from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

OCTET_STREAM = "application/octet-stream"


@dataclass(frozen=True)
class File:
    """A file on disk that can be sent as a body or as a multipart part."""

    path: Path
    """Location of the file. Read lazily, at dispatch time."""

    mime: str = ""
    """Content type. Guessed from the extension when left empty."""

    name: str = ""
    """File name reported to the server. Defaults to the basename of ``path``."""

    def __post_init__(self) -> None:
        # frozen: normalise through object.__setattr__
        path = Path(self.path)
        object.__setattr__(self, "path", path)
        if not self.name:
            object.__setattr__(self, "name", path.name)
        if not self.mime:
            guessed, _ = mimetypes.guess_type(path.name)
            object.__setattr__(self, "mime", guessed or OCTET_STREAM)

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


# ───────────────────────── bodies ──────────────────────────


@dataclass(frozen=True)
class EmptyBody:
    @property
    def content_type(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class TextBody:
    mime: str
    content: str

    @property
    def content_type(self) -> Optional[str]:
        return self.mime


@dataclass(frozen=True)
class JsonBody:
    value: Any
    """Any value ``json.dumps`` accepts."""

    @property
    def content_type(self) -> Optional[str]:
        return "application/json"


@dataclass(frozen=True)
class FileBody:
    file: File

    @property
    def content_type(self) -> Optional[str]:
        return self.file.mime


@dataclass(frozen=True)
class BytesBody:
    mime: str
    data: bytes

    @property
    def content_type(self) -> Optional[str]:
        return self.mime


@dataclass(frozen=True)
class MultipartBody:
    parts: tuple[Part, ...] = field(default_factory=tuple)

    @property
    def content_type(self) -> Optional[str]:
        # the boundary is chosen by the transport
        return None


Body = Union[EmptyBody, TextBody, JsonBody, FileBody, BytesBody, MultipartBody]

EMPTY = EmptyBody()


# ───────────────────────── multipart parts ──────────────────────────


@dataclass(frozen=True)
class TextPart:
    name: str
    value: str


@dataclass(frozen=True)
class FilePart:
    name: str
    file: File


@dataclass(frozen=True)
class BytesPart:
    name: str
    mime: str
    data: bytes


Part = Union[TextPart, FilePart, BytesPart]


def text_part(name: str, value: str) -> TextPart:
    return TextPart(name=name, value=value)


def file_part(name: str, file: File) -> FilePart:
    return FilePart(name=name, file=file)


def bytes_part(name: str, mime: str, data: bytes) -> BytesPart:
    return BytesPart(name=name, mime=mime, data=data)
