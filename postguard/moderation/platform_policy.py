"""Structural limits imposed by individual platforms."""

from __future__ import annotations

from postguard.moderation import messages
from postguard.moderation.models import Flag, Platform, Severity

TWITTER_CHARACTER_LIMIT = 280
INSTAGRAM_HASHTAG_LIMIT = 30
LINKEDIN_MENTION_LIMIT = 5


def check_platform_rules(content: str, platform: Platform) -> list[Flag]:
    """Return the LOW-severity limit flags *content* triggers on *platform*."""
    if platform == Platform.TWITTER and len(content) > TWITTER_CHARACTER_LIMIT:
        return [_limit_flag("character_limit", messages.CHARACTER_LIMIT, "Consider shortening your post")]

    if platform == Platform.INSTAGRAM and content.count("#") > INSTAGRAM_HASHTAG_LIMIT:
        return [_limit_flag("hashtag_limit", messages.HASHTAG_LIMIT, "Reduce the number of hashtags")]

    if platform == Platform.LINKEDIN and content.count("@") > LINKEDIN_MENTION_LIMIT:
        return [_limit_flag("mention_limit", messages.MENTION_LIMIT, "Reduce the number of mentions")]

    return []


def _limit_flag(flag_type: str, description: str, suggestion: str) -> Flag:
    return Flag(
        type=flag_type,
        severity=Severity.LOW,
        confidence=1.0,
        description=description,
        suggestion=suggestion,
    )
