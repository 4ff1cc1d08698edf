"""
Health check endpoints.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import redis.asyncio as redis
from redis.exceptions import RedisError

from config import settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Reports API, Redis and RapidAPI configuration status.
    """
    health_status = {
        "status": "healthy",
        "api": "up",
        "redis": "unknown",
        "rapidapi_key": "configured" if settings.RAPIDAPI_KEY else "missing",
    }

    try:
        r = redis.from_url(settings.REDIS_URL)
        try:
            await r.ping()
        finally:
            await r.aclose()
        health_status["redis"] = "up"
    except (RedisError, OSError) as e:
        health_status["redis"] = f"down: {str(e)}"
        health_status["status"] = "degraded"

    return health_status


@router.get("/health/ready")
async def readiness_check():
    """Kubernetes-style readiness probe."""
    missing = []
    if not settings.RAPIDAPI_KEY:
        missing.append("RAPIDAPI_KEY")

    if missing:
        return JSONResponse(
            status_code=503,
            content={"ready": False, "missing": missing},
        )
    return {"ready": True}


@router.get("/health/live")
async def liveness_check():
    """Kubernetes-style liveness probe."""
    return {"alive": True}
