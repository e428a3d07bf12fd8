"""HTTP client for the Event Registry / NewsAPI.ai JSON API.

All endpoints are ``POST`` with a JSON body; the API key travels in the
body as ``apiKey``. Non-2xx responses raise ``ApiError`` carrying the
parsed JSON (or raw text) body and a category used for caller guidance.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from newsmcp.config import DEFAULT_ANALYTICS_URL, DEFAULT_BASE_URL

logger = logging.getLogger(__name__)


def classify_error(status: int) -> str:
    """Map an HTTP status to an error category."""
    if status in (401, 403):
        return "auth_error"
    if status == 429:
        return "rate_limit"
    if status == 400:
        return "invalid_param"
    if status == 404:
        return "not_found"
    return "api_error"


class ApiError(Exception):
    """Upstream API returned a non-success status.

    Attributes:
        status: HTTP status code (0 for transport failures).
        body: Parsed JSON body, raw text, or ``None``.
        category: One of auth_error, rate_limit, invalid_param, not_found,
            api_error, network_error.
    """

    def __init__(self, status: int, body: Any = None, category: Optional[str] = None) -> None:
        self.status = status
        self.body = body
        self.category = category or classify_error(status)
        super().__init__(f"API error {status}: {body!r}")

    @property
    def is_retryable(self) -> bool:
        return self.status == 429 or self.status >= 500 or self.category == "network_error"

    @classmethod
    def network(cls, exc: Exception) -> "ApiError":
        return cls(0, str(exc), category="network_error")


class NewsApiClient:
    """Async client for the main and analytics APIs.

    The underlying ``httpx.AsyncClient`` is created on first use and can
    be replaced with a custom transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        analytics_url: str = DEFAULT_ANALYTICS_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._analytics_url = analytics_url.rstrip("/")
        self._timeout = httpx.Timeout(timeout, connect=10.0)
        self._transport = transport
        self._http: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_config(cls, config) -> "NewsApiClient":
        return cls(
            api_key=config.api_key or "",
            base_url=config.base_url,
            analytics_url=config.analytics_url,
            timeout=config.timeout,
        )

    async def api_post(self, path: str, body: Dict[str, Any]) -> Any:
        """POST to the main Event Registry API."""
        return await self._request(f"{self._base_url}{path}", body)

    async def analytics_post(self, path: str, body: Dict[str, Any]) -> Any:
        """POST to the analytics API."""
        return await self._request(f"{self._analytics_url}{path}", body)

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                headers={"Content-Type": "application/json"},
            )
        return self._http

    async def _request(self, url: str, body: Dict[str, Any]) -> Any:
        payload: Dict[str, Any] = {"apiKey": self._api_key}
        payload.update({k: v for k, v in body.items() if v is not None})

        logger.debug(f"POST {url} keys={sorted(k for k in payload if k != 'apiKey')}")
        response = await self._client().post(url, json=payload)

        if response.is_success:
            return response.json()

        text = response.text
        try:
            parsed: Any = response.json()
        except ValueError:
            parsed = text
        logger.warning(f"Upstream {url} returned HTTP {response.status_code}")
        raise ApiError(response.status_code, parsed)
