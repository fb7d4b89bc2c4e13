"""Network request state and blocking HTTP helpers."""

from __future__ import annotations

import enum
import http.client
import logging
import ssl
import urllib.error
import urllib.request
from typing import Any, Callable

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64; rv:98.0) Gecko/20100101 Firefox/98.0"
DEFAULT_CONTENT_TYPE = "application/x-www-form-urlencoded"

_ERRORS = (urllib.error.URLError, http.client.HTTPException, OSError, ValueError)


class NetworkCode(enum.IntEnum):
    """State of a network query."""

    QUERY = 0xFF00
    SUCCESS = 0
    ERROR = -1
    UNKNOWN = 2


class AbstractNetwork:
    """Base for network queries: tracks state, headers and listeners.

    Listeners registered with :meth:`connect` receive the downloaded text;
    an empty string signals failure.
    """

    def __init__(self) -> None:
        self.interrupt = False
        self.state_code = NetworkCode.QUERY
        self.reply: Any = None
        self._raw_data: dict[str, Any] = {}
        self._callbacks: list[Callable[[str], None]] = []

    def __enter__(self) -> "AbstractNetwork":
        return self

    def __exit__(self, *exc: object) -> None:
        self.interrupt = True
        self.state_code = NetworkCode.ERROR
        self.delete_all()

    def delete_all(self) -> None:
        """Drop the pending reply and mark the query interrupted."""
        if self.reply is not None:
            close = getattr(self.reply, "close", None)
            if callable(close):
                close()
            self.reply = None
        self.interrupt = True

    def set_header(self, key: str, value: Any) -> None:
        """Store a raw value under *key*."""
        self._raw_data[key] = value

    def header(self, key: str) -> Any:
        """The raw value stored under *key*, or None."""
        return self._raw_data.get(key)

    def download_finished(self) -> None:
        """Mark the download as finished; subclasses extend this."""
        self.interrupt = False

    def reply_error(self, error: Any) -> None:
        """Report a failed reply to listeners and drop it."""
        logger.error("Abnormal network connection, code %s", error)
        self._emit("")
        self.delete_all()

    def connect(self, callback: Callable[[str], None]) -> None:
        """Register a listener for downloaded data."""
        self._callbacks.append(callback)

    def query_allowed(self) -> bool:
        """Tell whether a query may still proceed."""
        return not self.interrupt and self.state_code == NetworkCode.QUERY

    def _emit(self, data: str) -> None:
        for callback in list(self._callbacks):
            callback(data)


def _text(data: str | bytes | None) -> str:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode("latin-1")
    return data or ""


def make_user_agent_header(request: urllib.request.Request, data: str | bytes | None = None) -> None:
    """Set the User-Agent header, using a browser string when *data* is empty."""
    request.add_header("User-Agent", _text(data) or DEFAULT_USER_AGENT)


def make_content_type_header(request: urllib.request.Request, data: str | bytes | None = None) -> None:
    """Set the Content-Type header, using form encoding when *data* is empty."""
    request.add_header("Content-Type", _text(data) or DEFAULT_CONTENT_TYPE)


def ssl_context(verify: bool = False) -> ssl.SSLContext:
    """An SSL context that checks peers only when *verify* is true."""
    context = ssl.create_default_context()
    if not verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def fetch_file_size_by_url(url: str) -> int:
    """Size announced by a HEAD request to *url*, following redirects; -1 on error."""
    try:
        request = urllib.request.Request(url, method="HEAD")
        make_content_type_header(request)
        with urllib.request.urlopen(request, context=ssl_context()) as reply:
            length = reply.headers.get("Content-Length")
    except _ERRORS as error:
        logger.info("%s", error)
        return -1
    try:
        return int(length) if length is not None else 0
    except ValueError:
        return 0


def _as_payload(data: str | bytes | None) -> bytes | None:
    if isinstance(data, str):
        return data.encode("utf-8")
    return None if data is None else bytes(data)


def _sync_query(request: urllib.request.Request, method: str, data: str | bytes | None = None) -> bytes:
    try:
        prepared = urllib.request.Request(
            request.full_url,
            data=_as_payload(data),
            headers=dict(request.header_items()),
            method=method,
        )
        with urllib.request.urlopen(prepared) as reply:
            return reply.read()
    except _ERRORS as error:
        logger.info("%s", error)
        return b""


def sync_network_query_for_get(request: urllib.request.Request) -> bytes:
    """Body of a GET of *request*, or b'' on error."""
    return _sync_query(request, "GET")


def sync_network_query_for_post(request: urllib.request.Request, data: str | bytes) -> bytes:
    """Body of a POST of *data* to *request*, or b'' on error."""
    return _sync_query(request, "POST", data)


def sync_network_query_for_put(request: urllib.request.Request, data: str | bytes) -> bytes:
    """Body of a PUT of *data* to *request*, or b'' on error."""
    return _sync_query(request, "PUT", data)


def sync_network_query_for_patch(request: urllib.request.Request, data: str | bytes) -> bytes:
    """Body of a PATCH of *data* to *request*, or b'' on error."""
    return _sync_query(request, "PATCH", data)