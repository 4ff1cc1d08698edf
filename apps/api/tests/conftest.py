import copy

import pytest

from main import app
from routers import rate_limit


@pytest.fixture(autouse=True)
def reset_local_rate_limit_windows():
    """Keep in-memory rate-limit state isolated between tests."""
    previous = getattr(app.state, "disable_rate_limits", False)
    app.state.disable_rate_limits = True
    rate_limit.reset_local_windows()
    yield
    rate_limit.reset_local_windows()
    app.state.disable_rate_limits = previous


TIKTOK_PAYLOAD = {
    "data": {
        "aweme_detail": {
            "aweme_id": "7234567890123456789",
            "desc": "Easy pasta in 10 minutes &amp; no mess #food #recipe",
            "author": {"unique_id": "chefmike", "nickname": "Chef Mike"},
            "video": {
                "play_addr": {"url_list": ["https://v16.tiktokcdn.com/play.mp4"]},
                "download_addr": {"url_list": ["https://v16.tiktokcdn.com/dl.mp4?utm_source=rapid&sig=abc"]},
                "cover": {"url_list": ["https://p16.tiktokcdn.com/cover.jpg"]},
                "duration": 15000,
            },
            "music": {"play_url": {"url_list": ["https://sf16.tiktokcdn.com/audio.mp3"]}},
            "statistics": {
                "digg_count": 1200,
                "play_count": 45000,
                "share_count": 80,
                "comment_count": 95,
            },
        }
    }
}


INSTAGRAM_PAYLOAD = {
    "code": "Cabc_123-x",
    "video_versions": [
        {"url": "https://scontent.cdninstagram.com/v/high.mp4", "width": 1080},
        {"url": "https://scontent.cdninstagram.com/v/low.mp4", "width": 480},
    ],
    "image_versions2": {"candidates": [{"url": "https://scontent.cdninstagram.com/t/thumb.jpg"}]},
    "caption": {"text": "Morning routine that changed my life\nSave this for later #reels #routine"},
    "user": {"username": "dailycoach", "full_name": "Daily Coach"},
    "video_duration": 32.4,
    "like_count": 540,
    "play_count": 12000,
    "comment_count": 40,
    "reshare_count": 12,
    "video_dash_manifest": (
        '<MPD><Period><AdaptationSet>'
        '<Representation id="v1" mimeType="video/mp4" bandwidth="900000"><BaseURL>https://cdn/video.mp4</BaseURL></Representation>'
        '<Representation id="a1" mimeType="audio/mp4" bandwidth="64000">'
        '<BaseURL>https://cdn/audio.mp4?a=1&amp;b=2</BaseURL></Representation>'
        '</AdaptationSet></Period></MPD>'
    ),
}


@pytest.fixture
def tiktok_payload():
    return copy.deepcopy(TIKTOK_PAYLOAD)


@pytest.fixture
def instagram_payload():
    return copy.deepcopy(INSTAGRAM_PAYLOAD)
