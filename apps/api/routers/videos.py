"""Video ingestion router: resolve TikTok / Instagram links via RapidAPI."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from config import settings
from ingestion.models import PlatformKey, UnifiedVideoResult
from ingestion.normalize import PayloadMappingError
from ingestion.platforms import detect_platform, extract_external_id
from ingestion.rapidapi import RapidAPIError, RapidAPINotConfiguredError
from routers.rate_limit import rate_limit
from services.video_resolver import InvalidVideoURLError, UnsupportedPlatformError, resolve_video

router = APIRouter()
logger = logging.getLogger(__name__)


class ResolveVideoRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: str = Field(min_length=8, max_length=2000)
    prefer_audio_only: bool = False


class DetectPlatformResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    platform: Optional[PlatformKey] = None
    external_id: Optional[str] = None


@router.post("/resolve", response_model=UnifiedVideoResult)
async def resolve_video_url(
    request: ResolveVideoRequest,
    _rate_limit: None = Depends(
        rate_limit(
            "video_resolve",
            limit=settings.VIDEO_RESOLVE_RATE_LIMIT,
            window_seconds=settings.VIDEO_RESOLVE_RATE_WINDOW_SECONDS,
        )
    ),
):
    """Fetch a TikTok or Instagram video and return its normalized metadata."""
    try:
        return await resolve_video(request.url, prefer_audio_only=request.prefer_audio_only)
    except (UnsupportedPlatformError, InvalidVideoURLError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except RapidAPINotConfiguredError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    except (RapidAPIError, PayloadMappingError) as exc:
        logger.warning("Video resolution failed for %s: %s", request.url, exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.get("/detect", response_model=DetectPlatformResponse)
async def detect_video_platform(url: str = Query(..., min_length=1, max_length=2000)):
    platform = detect_platform(url)
    return DetectPlatformResponse(
        platform=platform,
        external_id=extract_external_id(platform, url) if platform else None,
    )
