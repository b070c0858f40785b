"""Data models for the content moderation pipeline.

Requests, flags, rules and the configuration are plain dataclasses; the
value objects (request, flag, rule) are frozen so a snapshot handed to a
request in flight can never change under it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from typing import Any, Optional


class ContentType(Enum):
    """Kind of content submitted for moderation."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"


class Platform(Enum):
    """Social network the content is destined for."""

    TWITTER = "twitter"
    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"
    LINKEDIN = "linkedin"
    TIKTOK = "tiktok"
    YOUTUBE = "youtube"


@total_ordering
class Severity(Enum):
    """Ordinal risk tier: LOW < MEDIUM < HIGH < CRITICAL."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank


_SEVERITY_RANK = {
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
    Severity.CRITICAL: 4,
}


# --- Request ---


@dataclass(frozen=True)
class ModerationRequest:
    """A piece of content submitted for moderation.

    ``content_type`` and ``platform`` may hold raw strings until the request
    has been through :func:`postguard.moderation.validator.validate_request`.
    """

    content: str
    content_type: ContentType
    platform: Platform
    user_id: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> ModerationRequest:
        """Build a request from a decoded JSON body, without validating it."""
        return cls(
            content=data.get("content", ""),
            content_type=data.get("content_type", ContentType.TEXT.value),
            platform=data.get("platform", ""),
            user_id=data.get("user_id"),
            metadata=dict(data.get("metadata") or {}),
        )


# --- Flags ---


@dataclass(frozen=True)
class Flag:
    """One finding produced by a detector, a custom rule or a platform check."""

    type: str  # profanity | toxicity | spam | custom_rule_<id> | character_limit | ...
    severity: Severity
    confidence: float  # 0.0 - 1.0
    description: str
    flagged_text: Optional[str] = None
    suggestion: Optional[str] = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "type": self.type,
            "severity": self.severity.value,
            "confidence": self.confidence,
            "description": self.description,
        }
        if self.flagged_text is not None:
            data["flagged_text"] = self.flagged_text
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        return data


# --- Response ---


@dataclass
class ModerationResponse:
    """The single verdict reduced from every flag raised for a request."""

    is_flagged: bool
    flags: list[Flag] = field(default_factory=list)
    overall_severity: Severity = Severity.LOW
    confidence_score: float = 1.0
    safe_to_post: bool = True
    recommendations: list[str] = field(default_factory=list)
    processing_time_ms: int = 0

    def to_dict(self) -> dict:
        """Wire shape shared with existing consumers of the moderation API."""
        return {
            "is_flagged": self.is_flagged,
            "flags": [f.to_dict() for f in self.flags],
            "overall_severity": self.overall_severity.value,
            "confidence_score": self.confidence_score,
            "safe_to_post": self.safe_to_post,
            "recommendations": list(self.recommendations),
            "processing_time_ms": self.processing_time_ms,
        }


# --- Rules ---


@dataclass(frozen=True)
class Rule:
    """An operator-defined, platform-scoped set of literal or ``/regex/`` patterns."""

    id: str
    name: str
    description: str = ""
    patterns: tuple[str, ...] = ()
    severity: Severity = Severity.MEDIUM
    enabled: bool = True
    platforms: frozenset[Platform] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "patterns", tuple(self.patterns))
        object.__setattr__(self, "platforms", frozenset(self.platforms))

    def applies_to(self, platform: Platform) -> bool:
        return self.enabled and platform in self.platforms


# --- Configuration ---


@dataclass
class ModerationConfig:
    """Detector toggles plus the custom rule set.

    ``sensitivity_threshold`` is accepted and round-tripped but no detector
    reads it.
    """

    rules: list[Rule] = field(default_factory=list)
    sensitivity_threshold: float = 0.5
    enable_sentiment_analysis: bool = True
    enable_profanity_detection: bool = True
    enable_toxicity_detection: bool = True
    enable_spam_detection: bool = True
    enable_hate_speech_detection: bool = True
    enable_violence_detection: bool = True
    enable_sexual_content_detection: bool = True
    enable_personal_info_detection: bool = True

    @classmethod
    def all_disabled(cls, rules: Optional[list[Rule]] = None) -> ModerationConfig:
        """A configuration with every detector switched off."""
        return cls(
            rules=list(rules or []),
            enable_sentiment_analysis=False,
            enable_profanity_detection=False,
            enable_toxicity_detection=False,
            enable_spam_detection=False,
            enable_hate_speech_detection=False,
            enable_violence_detection=False,
            enable_sexual_content_detection=False,
            enable_personal_info_detection=False,
        )
