"""Request validation — the gate every request passes before any detector runs."""

from __future__ import annotations

from dataclasses import replace
from enum import Enum
from typing import TypeVar

from postguard.moderation.errors import (
    ContentTooLong,
    EmptyContent,
    InvalidContentType,
    InvalidPlatform,
    ValidationError,
)
from postguard.moderation.models import ContentType, ModerationRequest, Platform

MAX_CONTENT_LENGTH = 10000

E = TypeVar("E", bound=Enum)


def validate_request(request: ModerationRequest) -> ModerationRequest:
    """Validate *request* and return a copy with enum-typed fields.

    Checks run in a fixed order and the first violation raises; no partial
    result is ever produced.

    Raises:
        EmptyContent: content is empty or whitespace-only.
        ContentTooLong: content exceeds ``MAX_CONTENT_LENGTH`` characters.
        InvalidContentType: content_type is not a ContentType.
        InvalidPlatform: platform is not a Platform.
    """
    content = request.content
    if not isinstance(content, str) or not content.strip():
        raise EmptyContent()

    if len(content) > MAX_CONTENT_LENGTH:
        raise ContentTooLong()

    content_type = _coerce(ContentType, request.content_type, InvalidContentType)
    platform = _coerce(Platform, request.platform, InvalidPlatform)

    if content_type is request.content_type and platform is request.platform:
        return request
    return replace(request, content_type=content_type, platform=platform)


def _coerce(enum_cls: type[E], value: object, error: type[ValidationError]) -> E:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value)
        except ValueError:
            pass
    raise error()
