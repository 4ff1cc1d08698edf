"""
Normalized video models shared by the platform adapters.
"""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


PlatformKey = Literal["tiktok", "instagram", "youtube"]


class NormalizedMetrics(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    likes: int = 0
    comments: int = 0
    shares: int = 0
    saves: int = 0
    views: int = 0
    engagement_rate: Optional[float] = None


class UnifiedVideoResult(BaseModel):
    """One video, whichever platform it came from."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    platform: PlatformKey
    download_url: str
    audio_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    duration: Optional[float] = None
    like_count: Optional[int] = None
    view_count: Optional[int] = None
    share_count: Optional[int] = None
    comment_count: Optional[int] = None
    metrics: Optional[NormalizedMetrics] = None
    hashtags: List[str] = Field(default_factory=list)
    raw: Dict[str, Any] = Field(default_factory=dict)
