"""Reduce a list of flags into one verdict."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from postguard.moderation import messages
from postguard.moderation.models import Flag, Platform, Severity

BLOCKING_SEVERITIES = frozenset({Severity.HIGH, Severity.CRITICAL})

PLATFORM_TIPS: dict[Platform, str] = {
    Platform.TWITTER: "Consider using Twitter's built-in content warnings for sensitive topics",
    Platform.INSTAGRAM: "Use Instagram's content filters and moderation tools",
    Platform.LINKEDIN: "Ensure content aligns with LinkedIn's professional community guidelines",
}


@dataclass
class Verdict:
    """Aggregated outcome of every flag raised for one request."""

    overall_severity: Severity
    confidence_score: float
    safe_to_post: bool
    recommendations: list[str] = field(default_factory=list)


def overall_severity(flags: Sequence[Flag]) -> Severity:
    """Highest severity present, or LOW when there are no flags."""
    return max((f.severity for f in flags), key=lambda s: s.rank, default=Severity.LOW)


def confidence_score(flags: Sequence[Flag]) -> float:
    """Mean flag confidence, or 1.0 when there are no flags."""
    if not flags:
        return 1.0
    return sum(f.confidence for f in flags) / len(flags)


def is_safe_to_post(severity: Severity) -> bool:
    return severity not in BLOCKING_SEVERITIES


def recommendations(flags: Sequence[Flag], platform: Platform) -> list[str]:
    """One severity-tier message, then the platform tip if there is one."""
    if not flags:
        return [messages.CONTENT_SAFE]

    severities = {f.severity for f in flags}
    if severities & BLOCKING_SEVERITIES:
        result = [messages.RECOMMEND_REPLACE]
    elif Severity.MEDIUM in severities:
        result = [messages.RECOMMEND_EDIT]
    else:
        result = [messages.RECOMMEND_REVIEW]

    tip = PLATFORM_TIPS.get(platform)
    if tip:
        result.append(tip)
    return result


def aggregate(flags: Sequence[Flag], platform: Platform) -> Verdict:
    severity = overall_severity(flags)
    return Verdict(
        overall_severity=severity,
        confidence_score=confidence_score(flags),
        safe_to_post=is_safe_to_post(severity),
        recommendations=recommendations(flags, platform),
    )
