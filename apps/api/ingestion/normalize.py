"""
Map RapidAPI scraper payloads onto UnifiedVideoResult.
"""

from __future__ import annotations

import html
import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ingestion.models import NormalizedMetrics, PlatformKey, UnifiedVideoResult

MAX_TITLE_LENGTH = 120

_AUDIO_REPRESENTATION_RE = re.compile(
    r'<Representation[^>]*mimeType="audio/mp4"[^>]*>[\s\S]*?<BaseURL>([^<]+)</BaseURL>',
    re.IGNORECASE,
)


class PayloadMappingError(ValueError):
    """Raised when a scraper payload cannot be turned into a usable video."""


def _dig(data: Any, *keys: str) -> Any:
    current = data
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _first(values: Any) -> Any:
    if isinstance(values, list) and values:
        return values[0]
    return None


def _first_present(*values: Any) -> Any:
    for value in values:
        if value is not None and value != "":
            return value
    return None


def _safe_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


def _safe_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _build_result(label: str, **fields: Any) -> UnifiedVideoResult:
    try:
        return UnifiedVideoResult(**fields)
    except ValidationError as exc:
        raise PayloadMappingError(
            f"{label} RapidAPI payload could not be normalized ({exc.error_count()} invalid fields)"
        ) from exc


def map_tiktok_to_unified(data: Any) -> UnifiedVideoResult:
    aweme = _first_present(_dig(data, "data", "aweme_detail"), _dig(data, "aweme_detail"), data)
    if not isinstance(aweme, dict) or not aweme:
        raise PayloadMappingError("TikTok RapidAPI response missing aweme_detail")

    video = _as_dict(aweme.get("video"))
    download_url = _first_present(
        _first(_dig(video, "download_addr", "url_list")),
        _first(_dig(video, "play_addr", "url_list")),
        aweme.get("video_url"),
    )
    if not download_url:
        raise PayloadMappingError("TikTok RapidAPI did not include a usable download URL")

    thumbnail_url = _first_present(
        _first(_dig(video, "cover", "url_list")),
        _first(_dig(video, "dynamic_cover", "url_list")),
        _first(_dig(video, "origin_cover", "url_list")),
    )

    # aweme durations are milliseconds
    duration_ms = _safe_float(_first_present(video.get("duration"), aweme.get("duration")))
    stats = _as_dict(aweme.get("statistics"))
    author = _as_dict(aweme.get("author"))
    description = aweme.get("desc") or None

    return _build_result(
        "TikTok",
        platform="tiktok",
        download_url=download_url,
        audio_url=_first(_dig(aweme, "music", "play_url", "url_list")),
        thumbnail_url=thumbnail_url,
        title=description,
        description=description,
        author=_first_present(author.get("unique_id"), author.get("nickname")),
        duration=duration_ms / 1000 if duration_ms is not None else None,
        like_count=_safe_int(stats.get("digg_count")),
        view_count=_safe_int(stats.get("play_count")),
        share_count=_safe_int(stats.get("share_count")),
        comment_count=_safe_int(stats.get("comment_count")),
        metrics=normalize_metrics(aweme, "tiktok"),
        raw=aweme,
    )


def extract_audio_url_from_manifest(manifest: Any) -> Optional[str]:
    """BaseURL of the first audio/mp4 representation in a DASH manifest."""
    if not manifest or not isinstance(manifest, str):
        return None
    match = _AUDIO_REPRESENTATION_RE.search(manifest)
    if not match:
        return None
    return match.group(1).replace("&amp;", "&").replace("\\u0026", "&").strip()


def _instagram_thumbnail(media: Dict[str, Any]) -> Optional[str]:
    candidates = (
        _dig(media, "image_versions2", "candidates")
        or _dig(media, "image_versions2", "additional_candidates", "first_frame")
        or media.get("thumbnails")
        or []
    )
    if isinstance(candidates, list):
        first = _first(candidates)
        return first.get("url") if isinstance(first, dict) else None
    if isinstance(candidates, dict):
        return candidates.get("url")
    return None


def _instagram_caption(media: Dict[str, Any]) -> str:
    caption = media.get("caption")
    text = caption.get("text") if isinstance(caption, dict) else caption
    return text if isinstance(text, str) else ""


def map_instagram_to_unified(data: Any, shortcode: str, prefer_audio_only: bool = False) -> UnifiedVideoResult:
    media = data
    if not isinstance(media, dict) or not media:
        raise PayloadMappingError("Instagram RapidAPI response did not include media")

    versions = media.get("video_versions") or _dig(media, "video", "video_versions") or []
    best_video = _first(versions) if isinstance(versions, list) else None
    audio_url = extract_audio_url_from_manifest(media.get("video_dash_manifest")) if prefer_audio_only else None

    download_url = audio_url if prefer_audio_only and audio_url else _dig(best_video, "url")
    if not download_url:
        raise PayloadMappingError("Instagram RapidAPI did not include a usable download URL")

    caption = _instagram_caption(media)

    return _build_result(
        "Instagram",
        platform="instagram",
        download_url=download_url,
        audio_url=audio_url,
        thumbnail_url=_instagram_thumbnail(media),
        title=caption.split("\n")[0][:MAX_TITLE_LENGTH] if caption else None,
        description=caption or None,
        author=_first_present(
            _dig(media, "user", "username"),
            _dig(media, "owner", "username"),
            _dig(media, "author", "username"),
            _dig(media, "user", "full_name"),
            _dig(media, "owner", "full_name"),
        ),
        duration=_safe_float(_first_present(media.get("video_duration"), media.get("duration"))),
        like_count=_safe_int(_first_present(media.get("like_count"), media.get("fb_like_count"), media.get("likes"))),
        view_count=_safe_int(_first_present(media.get("play_count"), media.get("fb_play_count"), media.get("views"))),
        share_count=_safe_int(media.get("reshare_count")),
        comment_count=_safe_int(media.get("comment_count")),
        metrics=normalize_metrics(media, "instagram"),
        raw={"shortcode": shortcode, "data": data},
    )


def clean_text(text: Optional[str]) -> str:
    """Unescape HTML entities left in captions and trim."""
    return html.unescape(text or "").strip()


def normalize_metrics(raw: Any, platform: PlatformKey) -> NormalizedMetrics:
    """Engagement counts under one set of names, plus engagement rate in percent."""
    raw = _as_dict(raw)
    if platform == "tiktok":
        stats = _as_dict(raw.get("statistics")) or raw
        values: List[Any] = [
            stats.get("digg_count"),
            stats.get("comment_count"),
            stats.get("share_count"),
            stats.get("collect_count"),
            stats.get("play_count"),
        ]
    elif platform == "instagram":
        values = [
            raw.get("like_count"),
            raw.get("comment_count"),
            _first_present(raw.get("reshare_count"), raw.get("share_count")),
            raw.get("save_count"),
            _first_present(raw.get("play_count"), raw.get("view_count")),
        ]
    else:
        stats = _as_dict(raw.get("statistics")) or raw
        values = [stats.get("likeCount"), stats.get("commentCount"), None, None, stats.get("viewCount")]

    likes, comments, shares, saves, views = (_safe_int(v) or 0 for v in values)
    metrics = NormalizedMetrics(likes=likes, comments=comments, shares=shares, saves=saves, views=views)
    if views > 0:
        metrics.engagement_rate = (likes + comments + shares) / views * 100
    return metrics
