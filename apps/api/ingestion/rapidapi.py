"""
RapidAPI client for the TikTok and Instagram video scrapers.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from config import settings

logger = logging.getLogger(__name__)

MAX_ERROR_BODY_CHARS = 320


class RapidAPIError(RuntimeError):
    """Raised when a RapidAPI request fails or returns a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RapidAPINotConfiguredError(RapidAPIError):
    """Raised when no RapidAPI key is configured."""


def _truncate(text: str) -> str:
    if len(text) > MAX_ERROR_BODY_CHARS:
        return f"{text[:MAX_ERROR_BODY_CHARS]}…"
    return text


class RapidAPIClient:
    """Thin async wrapper over the two scraper endpoints."""

    def __init__(
        self,
        api_key: str,
        *,
        tiktok_host: str,
        instagram_host: str,
        timeout: float = 20.0,
        max_attempts: int = 3,
        backoff_seconds: float = 0.5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            api_key: RapidAPI key sent as ``x-rapidapi-key``
            tiktok_host: RapidAPI host of the TikTok scraper
            instagram_host: RapidAPI host of the Instagram scraper
            timeout: Per-request timeout in seconds
            max_attempts: Attempts for Instagram lookups (>= 1)
            backoff_seconds: Base delay; attempt ``n`` waits ``n * backoff_seconds``
            transport: Optional httpx transport, used by tests
        """
        if not (api_key or "").strip():
            raise RapidAPINotConfiguredError("RAPIDAPI_KEY not configured")
        self.api_key = api_key.strip()
        self.tiktok_host = tiktok_host
        self.instagram_host = instagram_host
        self.timeout = timeout
        self.max_attempts = max(int(max_attempts), 1)
        self.backoff_seconds = max(float(backoff_seconds), 0.0)
        self._transport = transport

    @classmethod
    def from_settings(cls, transport: Optional[httpx.AsyncBaseTransport] = None) -> "RapidAPIClient":
        return cls(
            settings.RAPIDAPI_KEY,
            tiktok_host=settings.TIKTOK_RAPIDAPI_HOST,
            instagram_host=settings.INSTAGRAM_RAPIDAPI_HOST,
            timeout=settings.RAPIDAPI_TIMEOUT_SECONDS,
            max_attempts=settings.RAPIDAPI_MAX_ATTEMPTS,
            backoff_seconds=settings.RAPIDAPI_BACKOFF_SECONDS,
            transport=transport,
        )

    def _client(self, **kwargs: Any) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport, **kwargs)

    async def _get_json(
        self,
        label: str,
        host: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        headers = {
            "x-rapidapi-key": self.api_key,
            "x-rapidapi-host": host,
            "Accept": "application/json",
        }
        url = f"https://{host}{path}"
        try:
            async with self._client() as client:
                response = await client.get(url, headers=headers, params=params)
        except httpx.HTTPError as exc:
            raise RapidAPIError(f"{label} RapidAPI request failed: {_truncate(str(exc))}") from exc

        if response.status_code >= 400:
            raise RapidAPIError(
                f"{label} RapidAPI failed ({response.status_code}): {_truncate(response.text)}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise RapidAPIError(
                f"{label} RapidAPI returned invalid JSON", status_code=response.status_code
            ) from exc

    async def fetch_tiktok_video(self, video_id: str) -> Any:
        return await self._get_json("TikTok", self.tiktok_host, f"/video/{quote(video_id, safe='')}")

    async def fetch_instagram_post(self, shortcode: str) -> Any:
        """Fetch a post by shortcode, retrying with linear backoff."""
        last_error: Optional[RapidAPIError] = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await self._get_json(
                    "Instagram", self.instagram_host, "/post", params={"shortcode": shortcode}
                )
            except RapidAPIError as exc:
                last_error = exc
                if attempt == self.max_attempts:
                    break
                delay = self.backoff_seconds * attempt
                logger.warning(
                    "Instagram RapidAPI attempt %s failed for shortcode %s: %s. Retrying in %.2fs",
                    attempt,
                    shortcode,
                    exc,
                    delay,
                )
                await asyncio.sleep(delay)

        raise last_error or RapidAPIError("Instagram RapidAPI request failed")

    async def resolve_short_link(self, url: str) -> Optional[str]:
        """Follow redirects of a short link; None when the link cannot be reached."""
        try:
            async with self._client(follow_redirects=True) as client:
                response = await client.head(url)
        except httpx.HTTPError as exc:
            logger.warning("Failed to resolve short link %s: %s", url, exc)
            return None
        return str(response.url)
