"""
Script Studio - FastAPI Backend
Main application entry point with health check and API routing.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from routers import (
    health,
    analysis,
    videos,
)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting Script Studio API...")
    if not settings.RAPIDAPI_KEY:
        logger.warning("RAPIDAPI_KEY is not configured; /videos/resolve will answer 503.")
    yield
    logger.info("Shutting down API...")


app = FastAPI(
    title="Script Studio API",
    description="Score short-form video scripts for readability and ingest TikTok/Instagram videos",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(analysis.router, prefix="/analysis", tags=["Analysis"])
app.include_router(videos.router, prefix="/videos", tags=["Videos"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Script Studio API",
        "version": "0.1.0",
        "status": "running"
    }
