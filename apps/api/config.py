"""
Application configuration using Pydantic Settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Redis (rate limiting)
    REDIS_URL: str = "redis://localhost:6379"

    # RapidAPI video scrapers
    RAPIDAPI_KEY: str = ""
    TIKTOK_RAPIDAPI_HOST: str = "tiktok-scrapper-videos-music-challenges-downloader.p.rapidapi.com"
    INSTAGRAM_RAPIDAPI_HOST: str = "instagram-api-fast-reliable-data-scraper.p.rapidapi.com"
    RAPIDAPI_TIMEOUT_SECONDS: float = 20.0
    RAPIDAPI_MAX_ATTEMPTS: int = 3
    RAPIDAPI_BACKOFF_SECONDS: float = 0.5

    # Rate limits
    VIDEO_RESOLVE_RATE_LIMIT: int = 30
    VIDEO_RESOLVE_RATE_WINDOW_SECONDS: int = 60

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()
