"""Pydantic models for API request/response serialization.

These models mirror the postguard dataclasses and provide proper JSON
serialization for the FastAPI endpoints. Enum-valued fields travel as plain
strings so the moderation validator, not pydantic, decides what is valid.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Moderation
# ---------------------------------------------------------------------------


class ModerateRequest(BaseModel):
    """Inbound moderation request."""

    content: Optional[str] = None
    content_type: Optional[str] = None
    platform: Optional[str] = None
    user_id: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class SampleModerateRequest(BaseModel):
    """Body of the sample-content endpoint; every field is optional."""

    content: Optional[str] = None
    platform: Optional[str] = None


class FlagResponse(BaseModel):
    """Mirrors postguard.moderation.models.Flag."""

    type: str
    severity: str
    confidence: float
    description: str
    flagged_text: Optional[str] = None
    suggestion: Optional[str] = None


class ModerationResultResponse(BaseModel):
    """Mirrors postguard.moderation.models.ModerationResponse."""

    is_flagged: bool
    flags: list[FlagResponse] = Field(default_factory=list)
    overall_severity: str
    confidence_score: float
    safe_to_post: bool
    recommendations: list[str] = Field(default_factory=list)
    processing_time_ms: int


class ModerateResponse(BaseModel):
    """Envelope returned by the moderation endpoints."""

    success: bool = True
    code: str = ""
    message: str = ""
    data: ModerationResultResponse


# ---------------------------------------------------------------------------
# Rules & configuration
# ---------------------------------------------------------------------------


class RuleModel(BaseModel):
    """Mirrors postguard.moderation.models.Rule."""

    id: str
    name: str = ""
    description: str = ""
    patterns: list[str] = Field(default_factory=list)
    severity: str = "medium"
    enabled: bool = True
    platforms: list[str] = Field(default_factory=list)


class RuleResponse(BaseModel):
    success: bool = True
    code: str = ""
    message: str = ""
    data: RuleModel
    pattern_errors: list[str] = Field(default_factory=list)


class RuleListResponse(BaseModel):
    success: bool = True
    data: list[RuleModel] = Field(default_factory=list)


class ConfigModel(BaseModel):
    """Mirrors postguard.moderation.models.ModerationConfig."""

    rules: list[RuleModel] = Field(default_factory=list)
    sensitivity_threshold: float = 0.5
    enable_sentiment_analysis: bool = True
    enable_profanity_detection: bool = True
    enable_toxicity_detection: bool = True
    enable_spam_detection: bool = True
    enable_hate_speech_detection: bool = True
    enable_violence_detection: bool = True
    enable_sexual_content_detection: bool = True
    enable_personal_info_detection: bool = True


class ConfigResponse(BaseModel):
    success: bool = True
    data: ConfigModel


class ConfigUpdateResponse(BaseModel):
    success: bool = True
    code: str = ""
    message: str = ""
    pattern_errors: list[str] = Field(default_factory=list)


class EnumValuesResponse(BaseModel):
    success: bool = True
    data: list[str] = Field(default_factory=list)
