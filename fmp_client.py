"""Async FMP API client with typed upstream errors."""

from __future__ import annotations

from typing import Any

import httpx

# Keys FMP uses to report application errors inside a 200 response
ERROR_KEYS = ("Error Message", "error", "message")


class FMPError(Exception):
    """Raised when the FMP API returns an error."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class UpstreamHTTPError(FMPError):
    """Non-success HTTP status from FMP."""

    def __init__(self, status_code: int, body: str):
        self.body = body
        super().__init__(f"FMP API error {status_code}: {body[:200]}", status_code=status_code)


TransportError = UpstreamHTTPError


class UpstreamAPIError(FMPError):
    """Well-formed JSON body that encodes an application error."""


def _api_error_message(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    if not any(key in data for key in ERROR_KEYS):
        return None
    for key in ERROR_KEYS:
        if data.get(key):
            return str(data[key])
    return "Unknown API error"


class FMPClient:
    """Async HTTP client for the Financial Modeling Prep stable API.

    Features:
    - Automatic API key injection
    - Typed errors for HTTP failures and error envelopes
    - No retries and no caching; callers fall back to other endpoints
    """

    BASE_URL = "https://financialmodelingprep.com"
    DEFAULT_TIMEOUT = 30.0

    def __init__(self, api_key: str, timeout: float = DEFAULT_TIMEOUT):
        self.api_key = api_key
        self._client = httpx.AsyncClient(
            base_url=self.BASE_URL,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def get(self, path: str, params: dict | None = None) -> Any:
        """Make a GET request to the FMP API.

        Args:
            path: API path (e.g. "/stable/profile")
            params: Additional query parameters

        Returns:
            Parsed JSON response

        Raises:
            UpstreamHTTPError: On non-success HTTP status
            UpstreamAPIError: When the body is an error envelope
            FMPError: On transport failures or undecodable bodies
        """
        params = dict(params or {})
        params["apikey"] = self.api_key

        try:
            resp = await self._client.get(path, params=params)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamHTTPError(e.response.status_code, e.response.text) from e
        except httpx.RequestError as e:
            raise FMPError(f"Request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise FMPError(f"Invalid JSON response from {path}: {resp.text[:200]}") from e

        message = _api_error_message(data)
        if message is not None:
            raise UpstreamAPIError(message)

        return data
