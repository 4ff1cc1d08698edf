"""Per-client fixed-window rate limiting, Redis first and in-process as fallback."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Dict, Tuple

from fastapi import HTTPException, Request
import redis.asyncio as redis
from redis.exceptions import RedisError

from config import settings

logger = logging.getLogger(__name__)

KEY_PREFIX = "scripts:rate"

# key -> (hits in window, window end as epoch seconds)
_local_windows: Dict[str, Tuple[int, float]] = {}
_local_lock = asyncio.Lock()


def _client_key(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "anonymous"


async def _redis_hit(key: str, window_seconds: int) -> int:
    client = redis.from_url(settings.REDIS_URL, decode_responses=True)
    try:
        hits = await client.incr(key)
        if hits == 1:
            await client.expire(key, window_seconds)
        return int(hits)
    finally:
        await client.aclose()


async def _local_hit(key: str, window_seconds: int) -> int:
    now = time.time()
    async with _local_lock:
        hits, window_end = _local_windows.get(key, (0, now + window_seconds))
        if now >= window_end:
            hits, window_end = 0, now + window_seconds
        hits += 1
        _local_windows[key] = (hits, window_end)
        return hits


def reset_local_windows() -> None:
    _local_windows.clear()


def rate_limit(prefix: str, limit: int, window_seconds: int) -> Callable[[Request], object]:
    """FastAPI dependency allowing ``limit`` calls per client per window."""

    async def _dependency(request: Request) -> None:
        if getattr(request.app.state, "disable_rate_limits", False):
            return

        key = f"{KEY_PREFIX}:{prefix}:{_client_key(request)}"
        try:
            hits = await _redis_hit(key, window_seconds)
        except (RedisError, OSError) as exc:
            logger.debug("Redis unavailable for rate limiting, using local window: %s", exc)
            hits = await _local_hit(key, window_seconds)

        if hits > limit:
            raise HTTPException(
                status_code=429,
                detail=f"Rate limit exceeded for {prefix}. Try again later.",
            )

    return _dependency
