"""
Platform detection and content-id extraction for social video URLs.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from ingestion.models import PlatformKey

TRACKING_PARAMS = {"utm_source", "utm_medium", "utm_campaign"}

_TIKTOK_VIDEO_RE = re.compile(r"tiktok\.com/.*?video/(\d+)", re.IGNORECASE)
_TIKTOK_QUERY_RE = re.compile(r"video_id=([^&]+)", re.IGNORECASE)
_TIKTOK_SHORT_RE = re.compile(r"(?:^|//)(?:vm|vt)\.tiktok\.com/|tiktok\.com/t/", re.IGNORECASE)
_INSTAGRAM_SHORTCODE_RE = re.compile(r"instagram\.com/(?:reel|reels|tv|p)/([A-Za-z0-9_-]+)", re.IGNORECASE)
_YOUTUBE_PATH_RE = re.compile(r"^/(?:embed|shorts)/([A-Za-z0-9_-]+)")


def detect_platform(url: str) -> Optional[PlatformKey]:
    lower = (url or "").strip().lower()
    if "tiktok.com" in lower:
        return "tiktok"
    if "instagram.com" in lower and any(part in lower for part in ("/reel", "/reels/", "/p/", "/tv/")):
        return "instagram"
    if "youtube.com" in lower or "youtu.be" in lower:
        return "youtube"
    return None


def is_tiktok_short_link(url: str) -> bool:
    """vm./vt. and /t/ links carry no video id until their redirect is followed."""
    return bool(_TIKTOK_SHORT_RE.search((url or "").strip()))


def extract_tiktok_video_id(url: str) -> Optional[str]:
    text = (url or "").strip()
    match = _TIKTOK_VIDEO_RE.search(text)
    if match:
        return match.group(1)
    match = _TIKTOK_QUERY_RE.search(text)
    if match:
        return match.group(1)
    return None


def extract_instagram_shortcode(url: str) -> Optional[str]:
    match = _INSTAGRAM_SHORTCODE_RE.search((url or "").strip())
    return match.group(1) if match else None


def extract_youtube_video_id(url: str) -> Optional[str]:
    try:
        parts = urlsplit((url or "").strip())
    except ValueError:
        return None

    host = (parts.hostname or "").lower()
    if host == "youtu.be":
        video_id = parts.path.lstrip("/").split("/", 1)[0]
        return video_id or None
    if host in ("youtube.com", "www.youtube.com", "m.youtube.com"):
        match = _YOUTUBE_PATH_RE.match(parts.path)
        if match:
            return match.group(1)
        for key, value in parse_qsl(parts.query):
            if key == "v" and value:
                return value
    return None


def extract_external_id(platform: PlatformKey, url: str) -> Optional[str]:
    if platform == "tiktok":
        return extract_tiktok_video_id(url)
    if platform == "instagram":
        return extract_instagram_shortcode(url)
    if platform == "youtube":
        return extract_youtube_video_id(url)
    return None


def strip_tracking_params(url: Optional[str]) -> Optional[str]:
    """Drop utm_* tracking parameters; anything unparsable comes back untouched."""
    if not url:
        return url
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    if not parts.scheme or not parts.netloc:
        return url
    pairs = parse_qsl(parts.query, keep_blank_values=True)
    # Query stays byte-for-byte intact unless a tracking param is present.
    if not any(k in TRACKING_PARAMS for k, _ in pairs):
        return url
    query = [(k, v) for k, v in pairs if k not in TRACKING_PARAMS]
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))
