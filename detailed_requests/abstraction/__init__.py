from .body import (
    EMPTY,
    Body,
    BytesBody,
    BytesPart,
    EmptyBody,
    File,
    FileBody,
    FilePart,
    JsonBody,
    MultipartBody,
    Part,
    TextBody,
    TextPart,
    bytes_part,
    file_part,
    text_part,
)
from .http import URL, HttpMethod
from .request import Request, RequestLine, delete, get, patch, post, put, request
from .response import (
    BadStatus,
    BadUrl,
    GoodStatus,
    Metadata,
    NetworkError,
    RawResponse,
    Timeout,
)
from .result import Err, Ok, Result

__all__ = [
    "EMPTY",
    "Body",
    "BytesBody",
    "BytesPart",
    "EmptyBody",
    "File",
    "FileBody",
    "FilePart",
    "JsonBody",
    "MultipartBody",
    "Part",
    "TextBody",
    "TextPart",
    "bytes_part",
    "file_part",
    "text_part",
    "URL",
    "HttpMethod",
    "Request",
    "RequestLine",
    "delete",
    "get",
    "patch",
    "post",
    "put",
    "request",
    "BadStatus",
    "BadUrl",
    "GoodStatus",
    "Metadata",
    "NetworkError",
    "RawResponse",
    "Timeout",
    "Err",
    "Ok",
    "Result",
]
