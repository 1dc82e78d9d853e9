"""Async HTTP client for the Laravel Forge API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from forgesites.api.exceptions import (
    ForgeAPIError,
    ForgeAuthenticationError,
    ForgeConnectionError,
    ForgeNotFoundError,
    ForgeRateLimitError,
    ForgeValidationError,
)

if TYPE_CHECKING:
    from forgesites.config import ForgeConfig

logger = logging.getLogger(__name__)

BASE_URL = "https://forge.laravel.com/api/v1"
DEFAULT_TIMEOUT = 30.0


def form_fields(data: dict[str, Any] | None) -> dict[str, Any]:
    """Flatten a body into the form shape PHP parses back into arrays.

    Lists are sent as repeated ``key[]`` fields and booleans as ``"1"``/``"0"``.
    ``None`` values are left out.
    """
    fields: dict[str, Any] = {}
    for key, value in (data or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            fields[f"{key}[]"] = [_form_value(v) for v in value]
        else:
            fields[key] = _form_value(value)
    return fields


def _form_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "1" if value else "0"
    return value


class ForgeClient:
    """Async API client for Laravel Forge.

    Uses a single long-lived httpx.AsyncClient to reuse TCP/TLS connections.
    The client is lazily initialized on first request. Request bodies are
    sent form-encoded.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(cls, config: ForgeConfig) -> ForgeClient:
        return cls(config.api_key, base_url=config.base_url, timeout=config.timeout)

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Accept": "application/json",
                },
                timeout=httpx.Timeout(self._timeout, connect=10.0),
            )
        return self._client

    async def _request(
        self,
        method: str,
        path: str,
        *,
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        client = self._get_client()
        try:
            response = await client.request(method, path, data=form_fields(data) or None)
        except httpx.TransportError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ForgeConnectionError(f"{method} {path} failed: {exc}") from exc
        logger.debug("%s %s -> %s", method, path, response.status_code)
        self._handle_errors(response)
        if response.status_code == 204:
            return {}
        if not response.content:
            return {}
        return response.json()

    def _handle_errors(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        logger.warning("Forge API returned %s for %s", response.status_code, response.url)
        if response.status_code == 401:
            raise ForgeAuthenticationError("Invalid API key", status_code=401)
        if response.status_code == 404:
            raise ForgeNotFoundError(f"Resource not found: {response.url}", status_code=404)
        if response.status_code == 422:
            try:
                details = response.json()
            except Exception:
                details = {"error": response.text}
            raise ForgeValidationError(details)
        if response.status_code == 429:
            raise ForgeRateLimitError("Rate limit exceeded", status_code=429)
        try:
            error_body = response.json()
            msg = error_body.get("message", response.text)
        except Exception:
            msg = response.text
        raise ForgeAPIError(
            f"API error {response.status_code}: {msg}", status_code=response.status_code
        )

    async def get(self, path: str, **kwargs: Any) -> dict[str, Any]:
        return await self._request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> dict[str, Any]:
        return await self._request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> dict[str, Any]:
        return await self._request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> dict[str, Any]:
        return await self._request("DELETE", path, **kwargs)

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> ForgeClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
