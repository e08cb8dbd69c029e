# src/gcal_client/transport.py
import logging
from typing import Mapping, NamedTuple, Optional, Protocol

import requests
from google.auth import exceptions as google_exceptions
from google.auth.transport.requests import Request

from gcal_client.errors import RequestError

logger = logging.getLogger(__name__)


class TransportResponse(NamedTuple):
    status: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport(Protocol):
    """Anything able to send one HTTP request and hand back status + body."""

    def send(
        self,
        method: str,
        url: str,
        body: Optional[bytes] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> TransportResponse:
        ...


class RequestsTransport:
    """
    Transport backed by google-auth's requests adapter.

    The same Request object google-auth uses to refresh credentials, so proxies,
    session reuse and error types behave the same way for token exchange and API calls.
    """

    def __init__(self, timeout_seconds: float = 30, session: Optional[requests.Session] = None):
        self.timeout_seconds = timeout_seconds
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        self._request = Request(session=self._session)

    def send(self, method, url, body=None, headers=None):
        try:
            resp = self._request(
                url,
                method=method,
                body=body,
                headers=dict(headers or {}),
                timeout=self.timeout_seconds,
            )
        except google_exceptions.TransportError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise RequestError(f"{method} {url} failed: {e}") from e
        return TransportResponse(resp.status, resp.data.decode("utf-8", errors="replace"))

    def close(self):
        # sessions handed in by the caller are theirs to close
        if self._owns_session:
            self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
