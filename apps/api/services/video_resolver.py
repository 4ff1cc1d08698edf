"""Resolve a social video URL into a normalized, downloadable video."""

from __future__ import annotations

import logging
from typing import Optional

from analysis.content import extract_hashtags
from ingestion.models import UnifiedVideoResult
from ingestion.normalize import clean_text, map_instagram_to_unified, map_tiktok_to_unified
from ingestion.platforms import (
    detect_platform,
    extract_instagram_shortcode,
    extract_tiktok_video_id,
    is_tiktok_short_link,
    strip_tracking_params,
)
from ingestion.rapidapi import RapidAPIClient

logger = logging.getLogger(__name__)


class UnsupportedPlatformError(ValueError):
    """Raised for URLs that are not TikTok or Instagram videos."""


class InvalidVideoURLError(ValueError):
    """Raised when no video id can be extracted from a supported URL."""


async def _resolve_tiktok(url: str, client: RapidAPIClient) -> UnifiedVideoResult:
    target = url
    if is_tiktok_short_link(url):
        target = await client.resolve_short_link(url) or url
    video_id = extract_tiktok_video_id(target)
    if not video_id:
        raise InvalidVideoURLError(f"Could not extract a TikTok video id from {url}")
    payload = await client.fetch_tiktok_video(video_id)
    return map_tiktok_to_unified(payload)


async def _resolve_instagram(url: str, client: RapidAPIClient, prefer_audio_only: bool) -> UnifiedVideoResult:
    shortcode = extract_instagram_shortcode(url)
    if not shortcode:
        raise InvalidVideoURLError(f"Could not extract an Instagram shortcode from {url}")
    payload = await client.fetch_instagram_post(shortcode)
    return map_instagram_to_unified(payload, shortcode, prefer_audio_only)


async def resolve_video(
    url: str,
    *,
    prefer_audio_only: bool = False,
    client: Optional[RapidAPIClient] = None,
) -> UnifiedVideoResult:
    """
    Detect the platform of ``url``, fetch it through RapidAPI and normalize it.

    Raises:
        UnsupportedPlatformError: YouTube or unrecognized URLs
        InvalidVideoURLError: supported platform but no id in the URL
        RapidAPINotConfiguredError / RapidAPIError: upstream problems
        PayloadMappingError: upstream answered without a usable video
    """
    url = (url or "").strip()
    platform = detect_platform(url)
    if platform not in ("tiktok", "instagram"):
        raise UnsupportedPlatformError(
            f"Unsupported platform for URL: {url or '<empty>'}. Only TikTok and Instagram videos can be resolved."
        )

    client = client or RapidAPIClient.from_settings()
    if platform == "tiktok":
        result = await _resolve_tiktok(url, client)
    else:
        result = await _resolve_instagram(url, client, prefer_audio_only)

    description = clean_text(result.description) or None
    resolved = result.model_copy(
        update={
            "download_url": strip_tracking_params(result.download_url),
            "audio_url": strip_tracking_params(result.audio_url),
            "thumbnail_url": strip_tracking_params(result.thumbnail_url),
            "title": clean_text(result.title) or None,
            "description": description,
            "hashtags": extract_hashtags(description or ""),
        }
    )
    logger.info("Resolved %s video from %s (author=%s)", platform, url, resolved.author)
    return resolved
