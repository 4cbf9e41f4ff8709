from . import decoders
from .abstraction.body import (
    File,
    bytes_part,
    file_part,
    text_part,
)
from .abstraction.http import URL, HttpMethod
from .abstraction.request import Request, RequestLine, delete, get, patch, post, put, request
from .abstraction.response import (
    BadStatus,
    BadUrl,
    GoodStatus,
    Metadata,
    NetworkError,
    RawResponse,
    Timeout,
)
from .abstraction.result import Err, Ok, Result
from .curl_transport import CurlTransport
from .errors import (
    BadBodyProblem,
    BadStatusProblem,
    BadUrlProblem,
    CompatBadBody,
    CompatBadStatus,
    CompatBadUrl,
    CompatibleError,
    CompatNetworkError,
    CompatTimeout,
    Error,
    ImpossibleResponse,
    NetworkErrorProblem,
    TimeoutProblem,
)
from .resolver import (
    Identity,
    Resolver,
    expect_bytes,
    expect_bytes_compatible,
    expect_bytes_detailed,
    expect_json,
    expect_json_compatible,
    expect_json_detailed,
    expect_string,
    expect_string_compatible,
    expect_string_detailed,
    expect_whatever,
    expect_whatever_compatible,
)
from .transport import Receiving, Sending, TrackedCall, Transport

__all__ = [
    "decoders",
    "File",
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
    "CurlTransport",
    "BadBodyProblem",
    "BadStatusProblem",
    "BadUrlProblem",
    "CompatBadBody",
    "CompatBadStatus",
    "CompatBadUrl",
    "CompatibleError",
    "CompatNetworkError",
    "CompatTimeout",
    "Error",
    "ImpossibleResponse",
    "NetworkErrorProblem",
    "TimeoutProblem",
    "Identity",
    "Resolver",
    "expect_bytes",
    "expect_bytes_compatible",
    "expect_bytes_detailed",
    "expect_json",
    "expect_json_compatible",
    "expect_json_detailed",
    "expect_string",
    "expect_string_compatible",
    "expect_string_detailed",
    "expect_whatever",
    "expect_whatever_compatible",
    "Receiving",
    "Sending",
    "TrackedCall",
    "Transport",
]

__version__ = "0.1.0"
