"""Moderation pipeline — detectors, custom rules, platform policy and aggregation.

The package provides:
- Detectors: profanity, sentiment, toxicity, spam and personal information
- Rule engine: operator-defined literal / regex rules scoped by platform
- Platform policy: structural limits per social network
- Aggregation: reduce all flags into one severity / confidence / verdict
- Coordinator: validation, fan-out over detectors, configuration ownership
"""

from postguard.moderation.coordinator import ModerationCoordinator
from postguard.moderation.errors import (
    ConfigError,
    ContentTooLong,
    EmptyContent,
    InvalidContentType,
    InvalidPlatform,
    ModerationError,
    PatternCompileError,
    ValidationError,
)
from postguard.moderation.models import (
    ContentType,
    Flag,
    ModerationConfig,
    ModerationRequest,
    ModerationResponse,
    Platform,
    Rule,
    Severity,
)

__all__ = [
    "ConfigError",
    "ContentTooLong",
    "ContentType",
    "EmptyContent",
    "Flag",
    "InvalidContentType",
    "InvalidPlatform",
    "ModerationConfig",
    "ModerationCoordinator",
    "ModerationError",
    "ModerationRequest",
    "ModerationResponse",
    "PatternCompileError",
    "Platform",
    "Rule",
    "Severity",
    "ValidationError",
]
