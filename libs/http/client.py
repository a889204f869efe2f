# libs/http/client.py
from __future__ import annotations
import logging, time, uuid
from typing import Any, Callable, Dict, Optional

import requests
from urllib3.exceptions import HTTPError as Urllib3Error, ReadTimeoutError

from .codec import JsonCodec, StdJsonCodec
from .errors import HttpError, NetworkError, ParseError, RequestTimeoutError

logger = logging.getLogger(__name__)

# Header constants
CID_HEADER = "X-Correlation-Id"
JSON_MEDIA_TYPE = "application/json"

READ_CHUNK = 64 * 1024


class _DeadlineExceeded(Exception):
    """Overall request deadline passed while the body was still arriving."""


def _gen_cid() -> str:
    """Random correlation id for requests that do not bring one."""
    return str(uuid.uuid4())


def _is_read_timeout(ex: Exception) -> bool:
    # requests wraps a read timeout hit while streaming the body in ConnectionError
    return any(isinstance(a, ReadTimeoutError) for a in ex.args)


def _read_body(resp: requests.Response, deadline: float) -> bytes:
    """
    Read the streamed body, never waiting past `deadline` (time.monotonic()).
    Each read is one socket read at most, with the socket timeout cut down
    to the time left, so a slow trickle cannot stretch the request.
    """
    raw = resp.raw
    chunks = []
    while True:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise _DeadlineExceeded()
        sock = getattr(getattr(raw, "connection", None), "sock", None)
        if sock is not None:
            sock.settimeout(remaining)
        chunk = raw.read1(READ_CHUNK, decode_content=True)
        if not chunk:
            return b"".join(chunks)
        chunks.append(chunk)


class HttpClient:
    """
    Small verb-generic JSON client.
    - GET/POST/PUT/DELETE against a path relative to base_url
    - JSON encode/decode through a pluggable codec
    - Timeout in milliseconds bounding the whole exchange, reported
      separately from network failures
    - Propagates X-Correlation-Id
    - One short-lived session per call, nothing shared between calls
    """

    def __init__(self,
                 base_url: str,
                 *,
                 timeout_ms: int = 10_000,
                 codec: Optional[JsonCodec] = None,
                 session_factory: Callable[[], requests.Session] = requests.Session,
                 default_headers: Dict[str, str] | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout_ms = timeout_ms
        self.codec: JsonCodec = codec or StdJsonCodec()
        self._session_factory = session_factory
        self._default_headers = {"Accept": JSON_MEDIA_TYPE, **(default_headers or {})}

    @classmethod
    def from_settings(cls, settings: Any, **kwargs: Any) -> "HttpClient":
        return cls(settings.base_url, timeout_ms=settings.timeout_ms, **kwargs)

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _timeout(self, method: str, url: str, cid: str) -> RequestTimeoutError:
        logger.warning("http timeout method=%s url=%s timeout_ms=%s cid=%s", method, url, self.timeout_ms, cid)
        return RequestTimeoutError(url, self.timeout_ms, correlation_id=cid)

    # ---- generic request helper ----
    def _request(self,
                 method: str,
                 path: str,
                 *,
                 body: Any = None,
                 params: Dict[str, Any] | None = None,
                 headers: Dict[str, str] | None = None,
                 correlation_id: str | None = None,
                 allow_empty: bool = False) -> Any:

        url = self.url_for(path)
        hdrs = {**self._default_headers, **(headers or {})}

        cid = correlation_id or hdrs.get(CID_HEADER) or _gen_cid()
        hdrs[CID_HEADER] = cid

        data = None
        if body is not None:
            hdrs.setdefault("Content-Type", JSON_MEDIA_TYPE)
            data = self.codec.encode(body).encode("utf-8")

        logger.debug("http request method=%s url=%s cid=%s", method, url, cid)
        timeout_sec = self.timeout_ms / 1000
        deadline = time.monotonic() + timeout_sec
        try:
            with self._session_factory() as s:
                resp = s.request(method, url, params=params, data=data, headers=hdrs,
                                 timeout=timeout_sec, stream=True)
                try:
                    content = _read_body(resp, deadline)
                finally:
                    resp.close()
        except (requests.Timeout, ReadTimeoutError, _DeadlineExceeded):
            raise self._timeout(method, url, cid) from None
        except (requests.RequestException, Urllib3Error) as ex:
            if _is_read_timeout(ex):
                raise self._timeout(method, url, cid) from ex
            logger.warning("http network_error method=%s url=%s error=%s cid=%s", method, url, type(ex).__name__, cid)
            raise NetworkError(url, type(ex).__name__, correlation_id=cid) from ex

        logger.debug("http response method=%s url=%s status=%s cid=%s", method, url, resp.status_code, cid)
        text = content.decode(resp.encoding or "utf-8", errors="replace")

        if resp.status_code >= 400:
            try:
                err_body = self.codec.decode(text)
            except ValueError:
                err_body = text
            logger.warning("http error_status method=%s url=%s status=%s cid=%s", method, url, resp.status_code, cid)
            raise HttpError(resp.status_code, url, err_body, correlation_id=cid)

        # "no content" is a valid answer only where the caller allows it (delete)
        if allow_empty and not text.strip():
            return None
        try:
            return self.codec.decode(text)
        except ValueError:
            logger.warning("http parse_error method=%s url=%s status=%s cid=%s", method, url, resp.status_code, cid)
            raise ParseError(url, text, correlation_id=cid) from None

    # ---- public shortcut methods ----
    def get(self, path: str, **kwargs: Any) -> Any:
        return self._request("GET", path, **kwargs)

    def post(self, path: str, body: Any = None, **kwargs: Any) -> Any:
        return self._request("POST", path, body=body, **kwargs)

    def put(self, path: str, body: Any = None, **kwargs: Any) -> Any:
        return self._request("PUT", path, body=body, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> Any:
        return self._request("DELETE", path, allow_empty=True, **kwargs)
