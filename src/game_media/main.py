# src/game_media/main.py
"""Main entry point for the Game Media application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from game_media.api.v1 import media_router
from game_media.core.errors import MediaError
from game_media.core.logging import setup_logging
from game_media.core.settings import settings
from game_media.db.session import create_tables

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Game Media API",
    description="Screenshot, video and text feed for games",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(media_router, prefix="/api/v1")


@app.exception_handler(MediaError)
async def media_error_handler(request: Request, exc: MediaError) -> JSONResponse:
    """Return the client-safe message of a service error."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and answer with a generic message."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
    )


@app.on_event("startup")
async def on_startup() -> None:
    setup_logging(settings.log_level)
    if settings.auto_create_tables:
        create_tables()
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Screenshot, video and text feed for games",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("game_media.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
