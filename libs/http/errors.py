# libs/http/errors.py
from __future__ import annotations
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    NETWORK = "network"
    TIMEOUT = "timeout"
    HTTP = "http"
    PARSE = "parse"


class ApiError(Exception):
    """
    Base of every failure raised by HttpClient.
    Callers branch on the subclass (or on `kind`), never on the message.
    """
    kind: ErrorKind

    def __init__(self, message: str, url: str, correlation_id: Optional[str] = None):
        super().__init__(f"{message} {url} (cid={correlation_id})")
        self.url = url
        self.correlation_id = correlation_id


class NetworkError(ApiError):
    """Request never reached the server (refused, DNS, malformed URL)."""
    kind = ErrorKind.NETWORK

    def __init__(self, url: str, reason: str, correlation_id: Optional[str] = None):
        super().__init__(f"network error ({reason})", url, correlation_id)
        self.reason = reason


class RequestTimeoutError(ApiError):
    """Request exceeded the configured timeout."""
    kind = ErrorKind.TIMEOUT

    def __init__(self, url: str, timeout_ms: int, correlation_id: Optional[str] = None):
        super().__init__(f"timed out after {timeout_ms}ms", url, correlation_id)
        self.timeout_ms = timeout_ms


class HttpError(ApiError):
    """Server answered with status >= 400."""
    kind = ErrorKind.HTTP

    def __init__(self, status: int, url: str, body: Any, correlation_id: Optional[str] = None):
        super().__init__(f"HTTP {status}", url, correlation_id)
        self.status = status
        self.body = body

    @property
    def is_not_found(self) -> bool:
        return self.status == 404


class ParseError(ApiError):
    """Success response whose body is not valid JSON."""
    kind = ErrorKind.PARSE

    def __init__(self, url: str, text: str, correlation_id: Optional[str] = None):
        super().__init__("invalid JSON body", url, correlation_id)
        self.text = text
