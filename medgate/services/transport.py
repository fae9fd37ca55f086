"""
HTTP transport to the upstream records backend.
Wraps an httpx.AsyncClient and unwraps the backend's {success, data, message}
envelope. Every failure surfaces as a TransportError.
"""
from typing import Any, Dict, Optional

import httpx

from medgate.core.config import UPSTREAM_API_BASE_URL, UPSTREAM_API_TIMEOUT
from medgate.core.errors import TransportError
from medgate.core.logging_config import logger
from medgate.schemas import ApiResponse


def build_query(**params: Any) -> Dict[str, Any]:
    """Drop unset values and render the rest the way the backend parses them.

    None and empty strings are omitted, booleans become ``true``/``false``
    and lists are sent as repeated parameters.
    """
    query: Dict[str, Any] = {}
    for key, value in params.items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            if value:
                query[key] = [str(v) for v in value]
        else:
            query[key] = str(value)
    return query


class ApiTransport:
    """Async HTTP client for the upstream API."""

    def __init__(
        self,
        base_url: str = UPSTREAM_API_BASE_URL,
        timeout: float = UPSTREAM_API_TIMEOUT,
        token: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)
        self._headers = headers

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _send(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        accept: Optional[str] = None,
    ) -> httpx.Response:
        headers = dict(self._headers)
        if accept:
            headers["Accept"] = accept
        try:
            response = await self._client.request(method, url, params=params, json=json, headers=headers)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as exc:
            raise self._status_error(exc.response) from exc
        except httpx.HTTPError as exc:
            logger.error(f"Upstream request failed: {method} {url}: {exc}")
            raise TransportError("Unable to reach the records backend. Check the network connection.") from exc

    @staticmethod
    def _status_error(response: httpx.Response) -> TransportError:
        try:
            data = response.json()
        except ValueError:
            data = None
        message = None
        if isinstance(data, dict):
            message = data.get("message")
        message = message or f"Upstream responded with HTTP {response.status_code}"

        if response.status_code == 403:
            logger.warning(f"Upstream access forbidden: {response.request.url}")
        elif response.status_code == 422:
            logger.warning(f"Upstream validation error: {data}")
        elif response.status_code >= 500:
            logger.error(f"Upstream server error {response.status_code}: {data}")
        return TransportError(message, status_code=response.status_code, data=data)

    async def _envelope(self, method: str, url: str, **kwargs: Any) -> ApiResponse:
        response = await self._send(method, url, **kwargs)
        try:
            return ApiResponse.model_validate(response.json())
        except ValueError as exc:
            raise TransportError(
                f"Malformed response from {method} {url}", status_code=response.status_code
            ) from exc

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> ApiResponse:
        return await self._envelope("GET", url, params=params)

    async def post(self, url: str, data: Any = None) -> ApiResponse:
        return await self._envelope("POST", url, json=data)

    async def put(self, url: str, data: Any = None) -> ApiResponse:
        return await self._envelope("PUT", url, json=data)

    async def patch(self, url: str, data: Any = None) -> ApiResponse:
        return await self._envelope("PATCH", url, json=data)

    async def delete(self, url: str) -> ApiResponse:
        return await self._envelope("DELETE", url)

    async def post_bytes(self, url: str, data: Any = None, accept: str = "application/octet-stream") -> bytes:
        """POST and return the raw body, for binary downloads."""
        response = await self._send("POST", url, json=data, accept=accept)
        return response.content

