"""HTTP client for the console's remote API.

Wraps an ``httpx.AsyncClient`` with the API's conventions: a base URL, JSON
content type, a per-request timeout and the ``{ok, data}`` response envelope.
Failures are logged and translated into the domain ``TransportError`` family:

* the request could not be constructed → ``RequestBuildError``
* no response was received             → ``ConnectionFailedError``
* the server returned an error status  → ``ServerStatusError``
* the body is not a usable envelope    → ``ResponseFormatError``
"""

import json
import logging
from typing import Any

import httpx

from admin_console.domain.exceptions import (
    ConnectionFailedError,
    RequestBuildError,
    ResponseFormatError,
    ServerStatusError,
)

logger = logging.getLogger(__name__)


class ApiClient:
    """Infrastructure adapter — talks JSON to the remote API.

    An injected ``http_client`` is used as-is and left open; otherwise one is
    created on first use and closed by ``aclose()``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080/api",
        *,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client
        self._owns_client = http_client is None

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or lazily create an owned one."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
        return self._http_client

    async def aclose(self) -> None:
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def get(self, path: str) -> Any:
        return await self.request("GET", path)

    async def post(self, path: str, payload: dict[str, Any]) -> Any:
        return await self.request("POST", path, payload=payload)

    async def put(self, path: str, payload: dict[str, Any]) -> Any:
        return await self.request("PUT", path, payload=payload)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def request(
        self,
        method: str,
        path: str,
        *,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the envelope's ``data`` member.

        Returns ``None`` for empty bodies (e.g. ``204 No Content``).
        """
        url = f"{self._base_url}{path}"
        client = await self._get_client()

        try:
            request = client.build_request(
                method,
                url,
                headers=self._get_headers(),
                json=payload,
                timeout=self._timeout,
            )
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            logger.error("Request error: %s %s — %s", method, url, exc)
            raise RequestBuildError(f"Could not build {method} {url}: {exc}") from exc

        logger.debug("%s %s", method, url)
        try:
            response = await client.send(request)
        except httpx.UnsupportedProtocol as exc:
            logger.error("Request error: %s %s — %s", method, url, exc)
            raise RequestBuildError(f"Could not build {method} {url}: {exc}") from exc
        except httpx.TransportError as exc:
            # Timeouts, refused connections and dropped sockets alike
            logger.error("Network error: %s %s — %s", method, url, exc)
            raise ConnectionFailedError(f"No response from {method} {url}: {exc}") from exc

        if not response.is_success:
            message = self._error_message(response)
            logger.error(
                "Response error: %s %s — %d %s", method, url, response.status_code, message
            )
            raise ServerStatusError(status_code=response.status_code, message=message)

        return self._unwrap(method, url, response)

    def _unwrap(self, method: str, url: str, response: httpx.Response) -> Any:
        if not response.content:
            return None

        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.error("Malformed response: %s %s — %s", method, url, exc)
            raise ResponseFormatError(f"{method} {url} returned a non-JSON body") from exc

        if not isinstance(body, dict):
            raise ResponseFormatError(f"{method} {url} returned a body without an envelope")

        if body.get("ok") is False:
            message = self._message_from_body(body) or "Request rejected by server"
            logger.error("Response rejected: %s %s — %s", method, url, message)
            raise ServerStatusError(status_code=response.status_code, message=message)

        return body.get("data")

    def _error_message(self, response: httpx.Response) -> str:
        """Extract an error message from an error response."""
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase

        if isinstance(body, dict):
            message = self._message_from_body(body)
            if message:
                return message
        return response.text or response.reason_phrase

    @staticmethod
    def _message_from_body(body: dict[str, Any]) -> str | None:
        for key in ("data", "message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, dict) and isinstance(value.get("message"), str):
                return value["message"]
        return None
