"""Moderation router -- moderate content, manage configuration, list enum values."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, status

from postguard.config import config_from_dict, config_to_dict
from postguard.moderation import messages
from postguard.moderation.errors import ConfigError, ValidationError
from postguard.moderation.messages import ErrorCode, SuccessCode
from postguard.moderation.models import ContentType, ModerationRequest, Platform, Severity
from web.backend.app.engine import get_coordinator
from web.backend.app.models.api import (
    ConfigModel,
    ConfigResponse,
    ConfigUpdateResponse,
    EnumValuesResponse,
    ModerateRequest,
    ModerateResponse,
    SampleModerateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["moderation"])

SAMPLE_CONTENT = "This is a test message for content moderation."


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _error(status_code: int, code: str, message: str, details: Optional[str] = None) -> HTTPException:
    detail = {"error": code, "message": message}
    if details:
        detail["details"] = details
    return HTTPException(status_code=status_code, detail=detail)


def _moderate(request: ModerationRequest) -> ModerateResponse:
    try:
        result = get_coordinator().moderate(request)
    except ValidationError as e:
        raise _error(status.HTTP_400_BAD_REQUEST, e.code, e.message) from e
    return ModerateResponse(
        success=True,
        code=SuccessCode.MODERATION_COMPLETE,
        message=messages.CONTENT_FLAGGED if result.is_flagged else messages.CONTENT_SAFE,
        data=result.to_dict(),
    )


# ---------------------------------------------------------------------------
# Moderation endpoints
# ---------------------------------------------------------------------------


@router.post(
    "/moderate",
    response_model=ModerateResponse,
    response_model_exclude_none=True,
    summary="Moderate a piece of content",
)
async def moderate_content(body: ModerateRequest):
    """Run every enabled detector, custom rules and platform limits over the content."""
    if body.content is None or body.content_type is None or body.platform is None:
        raise _error(
            status.HTTP_400_BAD_REQUEST,
            ErrorCode.INVALID_REQUEST,
            messages.INVALID_REQUEST,
            "Missing required fields: content, content_type, platform",
        )
    return _moderate(ModerationRequest.from_dict(body.model_dump()))


@router.post(
    "/test",
    response_model=ModerateResponse,
    response_model_exclude_none=True,
    summary="Moderate sample content",
)
async def moderate_sample(body: Optional[SampleModerateRequest] = None):
    """Moderate the given (or a built-in) sample text as a test user."""
    body = body or SampleModerateRequest()
    request = ModerationRequest.from_dict({
        "content": body.content or SAMPLE_CONTENT,
        "content_type": ContentType.TEXT.value,
        "platform": body.platform or Platform.TWITTER.value,
        "user_id": "test_user",
        "metadata": {"test": True},
    })
    return _moderate(request)


# ---------------------------------------------------------------------------
# Configuration endpoints
# ---------------------------------------------------------------------------


@router.get("/config", response_model=ConfigResponse, summary="Get the active configuration")
async def get_config():
    """Return detector toggles, sensitivity threshold and rules."""
    config = get_coordinator().get_config()
    return ConfigResponse(data=ConfigModel(**config_to_dict(config)))


@router.put("/config", response_model=ConfigUpdateResponse, summary="Replace the configuration")
async def update_config(body: ConfigModel):
    """Atomically replace the configuration, rules included.

    Rule patterns that are not valid regular expressions are skipped and
    listed in ``pattern_errors``.
    """
    try:
        config = config_from_dict(body.model_dump())
    except ConfigError as e:
        raise _error(status.HTTP_400_BAD_REQUEST, e.code, messages.CONFIG_INVALID, e.message) from e

    errors = get_coordinator().update_config(config)
    return ConfigUpdateResponse(
        code=SuccessCode.CONFIG_UPDATED,
        message=messages.CONFIG_UPDATED,
        pattern_errors=[str(e) for e in errors],
    )


# ---------------------------------------------------------------------------
# Enum listings
# ---------------------------------------------------------------------------


@router.get("/platforms", response_model=EnumValuesResponse, summary="Supported platforms")
async def list_platforms():
    return EnumValuesResponse(data=[p.value for p in Platform])


@router.get("/content-types", response_model=EnumValuesResponse, summary="Supported content types")
async def list_content_types():
    return EnumValuesResponse(data=[c.value for c in ContentType])


@router.get("/severity-levels", response_model=EnumValuesResponse, summary="Severity levels")
async def list_severity_levels():
    return EnumValuesResponse(data=[s.value for s in Severity])
