# src/piazza/main.py
"""Main entry point for the Piazza application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from piazza.api.v1 import (
    auth_router,
    interactions_router,
    posts_router,
    topics_router,
)
from piazza.core.errors import PiazzaError, ValidationError
from piazza.core.settings import settings
from piazza.db.session import create_tables

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Piazza API",
    description="Time-limited topic posts with likes, dislikes and comments",
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
app.include_router(auth_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(interactions_router, prefix="/api/v1")
app.include_router(topics_router, prefix="/api/v1")


@app.exception_handler(PiazzaError)
async def handle_piazza_error(request: Request, exc: PiazzaError) -> JSONResponse:
    """Render a domain error as ``{"detail": ..., "field": ...}``."""
    content: dict[str, str] = {"detail": exc.detail}
    if isinstance(exc, ValidationError) and exc.field:
        content["field"] = exc.field
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


@app.on_event("startup")
async def on_startup() -> None:
    logging.getLogger("piazza").setLevel(settings.log_level.upper())
    if settings.auto_create_tables:
        await create_tables()
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
        "description": "Time-limited topic posts with likes, dislikes and comments",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("piazza.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
