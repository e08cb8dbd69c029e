# src/gcal_client/http_client.py
import json
import logging
from typing import Any, Optional

from gcal_client.config import GCalConfig
from gcal_client.errors import ApiError
from gcal_client.google_auth_helpers import fetch_access_token
from gcal_client.transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)


class HttpClient:
    """JSON over HTTP against config.api_base_url, authorized when credentials are configured."""

    def __init__(self, config: GCalConfig, transport: Optional[Transport] = None):
        self.config = config
        self._owns_transport = transport is None
        self.transport = transport or RequestsTransport(timeout_seconds=config.timeout_seconds)

    def close(self):
        if self._owns_transport:
            self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    @property
    def base_url(self) -> str:
        return self.config.api_base_url

    def _url(self, path: str) -> str:
        return f"{self.config.api_base_url.rstrip('/')}/{path.lstrip('/')}"

    def _headers(self, has_body: bool) -> dict:
        headers = {"Accept": "application/json"}
        if has_body:
            headers["Content-Type"] = "application/json"

        if self.config.credentials is not None:
            # fresh token per request, no caching at this layer
            token = fetch_access_token(self.config.credentials, self.transport)
            headers["Authorization"] = f"Bearer {token}"
        else:
            logger.debug("No credentials configured, sending request without authorization")
        return headers

    def _send(self, method: str, path: str, payload: Any = None) -> str:
        url = self._url(path)
        body = json.dumps(payload).encode("utf-8") if payload is not None else None
        headers = self._headers(body is not None)

        logger.debug("Sending %s request to %s", method, url)
        resp = self.transport.send(method, url, body=body, headers=headers)
        return self._handle_response(method, url, resp)

    def _handle_response(self, method, url, resp) -> str:
        if 200 <= resp.status < 300:
            return resp.text
        logger.warning("%s %s returned status %s", method, url, resp.status)
        raise ApiError(resp.status, resp.text)

    def get(self, path: str) -> str:
        return self._send("GET", path)

    def post(self, path: str, payload: Any) -> str:
        return self._send("POST", path, payload)

    def put(self, path: str, payload: Any) -> str:
        return self._send("PUT", path, payload)

    def delete(self, path: str) -> str:
        return self._send("DELETE", path)
