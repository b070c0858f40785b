"""Exception taxonomy for the moderation pipeline.

``ValidationError`` subclasses are fatal to the current call and deterministic
on the same input. ``PatternCompileError`` never reaches callers of
``moderate``: the rule engine skips the offending pattern.
"""

from __future__ import annotations

from postguard.moderation import messages
from postguard.moderation.messages import ErrorCode


class ModerationError(Exception):
    """Base class for every error raised by the moderation package."""

    code = ErrorCode.MODERATION_FAILED
    default_message = messages.MODERATION_FAILED

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ModerationError):
    """The request was rejected before any detector ran."""

    code = ErrorCode.INVALID_REQUEST
    default_message = messages.INVALID_REQUEST


class EmptyContent(ValidationError):
    code = ErrorCode.CONTENT_EMPTY
    default_message = messages.CONTENT_EMPTY


class ContentTooLong(ValidationError):
    code = ErrorCode.CONTENT_TOO_LONG
    default_message = messages.CONTENT_TOO_LONG


class InvalidContentType(ValidationError):
    code = ErrorCode.INVALID_CONTENT_TYPE
    default_message = messages.INVALID_CONTENT_TYPE


class InvalidPlatform(ValidationError):
    code = ErrorCode.INVALID_PLATFORM
    default_message = messages.INVALID_PLATFORM


class PatternCompileError(ModerationError):
    """A ``/regex/`` rule pattern could not be compiled."""

    code = ErrorCode.PATTERN_INVALID

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid regex pattern {pattern!r}: {reason}")


class ConfigError(ModerationError):
    """Configuration data could not be parsed into a ModerationConfig."""

    code = ErrorCode.CONFIG_INVALID
    default_message = messages.CONFIG_INVALID
