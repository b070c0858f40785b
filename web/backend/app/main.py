"""FastAPI application for the PostGuard content moderation service.

Provides REST API endpoints wrapping the postguard package for:
- Content moderation (detectors, custom rules, platform limits)
- Configuration inspection and atomic replacement
- Custom rule management
- Supported platform / content type / severity listings
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

# Ensure the postguard package is importable by adding the project root to sys.path.
_project_root = str(Path(__file__).resolve().parents[3])
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from postguard import __version__
from postguard.config import LOG_LEVEL_ENV_VAR
from postguard.moderation import messages
from postguard.moderation.messages import ErrorCode
from web.backend.app.routers import moderation, rules

logging.basicConfig(level=os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="PostGuard API",
    description=(
        "REST API for PostGuard. Moderates social media posts for profanity, "
        "negative sentiment, toxicity, spam and personal information, applies "
        "operator-defined rules and platform limits, and returns a single "
        "safe-to-post verdict."
    ),
    version=__version__,
)

# ---------------------------------------------------------------------------
# CORS middleware (allow all origins for development)
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Include routers
# ---------------------------------------------------------------------------
app.include_router(moderation.router)
app.include_router(rules.router)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": ErrorCode.SERVER_ERROR, "message": messages.SERVER_ERROR},
    )


# ---------------------------------------------------------------------------
# Root and health-check endpoints
# ---------------------------------------------------------------------------


@app.get("/", tags=["meta"])
async def root():
    """Return basic API information."""
    return {
        "name": "PostGuard API",
        "version": __version__,
        "description": "Content moderation REST API",
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


@app.get("/health", tags=["meta"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "message": messages.HEALTH_CHECK,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
    }
