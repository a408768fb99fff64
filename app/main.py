"""
AI Platform Hub API

Main FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.middleware import ErrorHandlerMiddleware
from app.routes import auto_import, keys, platforms, usage
from app.services import get_api_key_service, get_credential_resolver
from app.services.auto_import import AutoImportService
from app.services.cleanup_scheduler import (
    get_scheduler_status,
    start_cleanup_scheduler,
    stop_cleanup_scheduler,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown events."""
    # Startup
    if settings.AUTO_IMPORT_API_KEYS:
        results = AutoImportService(get_api_key_service(), get_credential_resolver()).import_from_env()
        logger.info(f"Startup key import: {sum(r.success for r in results)}/{len(results)} platforms ready")
    start_cleanup_scheduler()
    yield
    # Shutdown
    stop_cleanup_scheduler()


app = FastAPI(
    title="AI Platform Hub API",
    description="Unified proxy for text, image and video generation providers",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Register routers
app.include_router(platforms.router, prefix="/api", tags=["Platforms"])
app.include_router(keys.router, prefix="/api", tags=["Keys"])
app.include_router(auto_import.router, prefix="/api", tags=["Keys"])
app.include_router(usage.router, prefix="/api", tags=["Usage"])


@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "status": "ok",
        "service": "AI Platform Hub API",
        "version": "1.0.0",
    }


@app.get("/health")
async def health_check():
    """
    Detailed health check endpoint.

    Returns service health and usage-log cleanup scheduler state.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "1.0.0",
        "scheduler": get_scheduler_status(),
    }
