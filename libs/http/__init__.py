"""HTTP helpers: JSON client, codec, error taxonomy."""

from .client import HttpClient, CID_HEADER
from .codec import JsonCodec, StdJsonCodec
from .errors import (
    ApiError,
    ErrorKind,
    HttpError,
    NetworkError,
    ParseError,
    RequestTimeoutError,
)

__all__ = [
    "HttpClient",
    "CID_HEADER",
    "JsonCodec",
    "StdJsonCodec",
    "ApiError",
    "ErrorKind",
    "HttpError",
    "NetworkError",
    "ParseError",
    "RequestTimeoutError",
]
