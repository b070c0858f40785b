"""Spam detection with additive scoring.

Unlike the other detectors, signals add up: every spam phrase, the URL
count, shouting, punctuation, repeated words and suspicious patterns each
contribute, and the sum is clipped to 1.0.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass, field

from postguard.moderation import messages
from postguard.moderation.detectors.base import DetectorResult, uppercase_ratio
from postguard.moderation.models import Flag, Severity

logger = logging.getLogger(__name__)

SPAM_THRESHOLD = 0.6

SPAM_PHRASES: dict[str, float] = {
    "buy now": 0.7,
    "limited time offer": 0.8,
    "act now": 0.7,
    "don't miss out": 0.6,
    "click here": 0.6,
    "free money": 0.9,
    "make money fast": 0.9,
    "work from home": 0.7,
    "earn money online": 0.8,
    "get rich quick": 0.9,
    "lose weight fast": 0.8,
    "miracle cure": 0.9,
    "100% guaranteed": 0.8,
    "no risk": 0.7,
    "limited supply": 0.7,
    "exclusive offer": 0.6,
    "secret method": 0.8,
    "government secret": 0.9,
    "bankruptcy": 0.7,
    "debt relief": 0.7,
    "credit repair": 0.7,
    "investment opportunity": 0.6,
    "hot singles": 0.9,
    "meet singles": 0.8,
    "enlarge your": 0.9,
    "viagra": 0.9,
    "cialis": 0.9,
}

# Each pattern is counted on its own, so a shortener link written with a
# scheme is counted by both the scheme and the shortener pattern.
URL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"https?://\S+"),
    re.compile(r"www\.\S+"),
    re.compile(r"bit\.ly/\S+"),
    re.compile(r"tinyurl\.com/\S+"),
    re.compile(r"goo\.gl/\S+"),
)

SUSPICIOUS_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\d{4}-\d{4}-\d{4}-\d{4}"),  # credit card
    re.compile(r"\d{3}-\d{2}-\d{4}"),  # SSN
    re.compile(r"\d{10,}"),  # long number runs
    re.compile(r"[A-Z]{5,}"),  # all caps words
    re.compile(r"\$\d+"),  # dollar amounts
    re.compile(r"%\d+"),  # percentages
    re.compile(r"free\s+[a-z]+", re.IGNORECASE),
    re.compile(r"limited\s+time", re.IGNORECASE),
    re.compile(r"act\s+now", re.IGNORECASE),
    re.compile(r"click\s+here", re.IGNORECASE),
    re.compile(r"buy\s+now", re.IGNORECASE),
)

URL_PLACEHOLDER = "[URL]"

URL_WEIGHT = 0.5
CAPS_WEIGHT = 0.4
PUNCTUATION_WEIGHT = 0.3
REPEATED_WORD_WEIGHT = 0.2
SUSPICIOUS_WEIGHT = 0.6


@dataclass
class SpamResult(DetectorResult):
    """Outcome of a spam check.

    ``clean_content`` is informational only; the aggregator never reads it.
    """

    is_spam: bool
    spam_score: float
    spam_indicators: list[str] = field(default_factory=list)
    clean_content: str = ""

    def to_flags(self) -> list[Flag]:
        if not self.is_spam:
            return []
        return [
            Flag(
                type="spam",
                severity=Severity.MEDIUM,
                confidence=self.spam_score,
                description=messages.SPAM_DETECTED,
                suggestion=messages.RECOMMEND_EDIT,
            )
        ]


class SpamDetector:
    """Phrase, link and formatting heuristics for promotional and scam content."""

    def __init__(self) -> None:
        self._phrases = dict(SPAM_PHRASES)
        self._url_patterns = list(URL_PATTERNS)

    def check(self, text: str) -> SpamResult:
        lowered = text.lower()
        score = 0.0
        indicators: list[str] = []

        for phrase, confidence in self._phrases.items():
            if phrase in lowered:
                score += confidence
                indicators.append(f'Spam phrase: "{phrase}"')

        url_count = self.count_urls(text)
        if url_count > 2:
            score += URL_WEIGHT * url_count
            indicators.append(f"Multiple URLs detected: {url_count}")

        if uppercase_ratio(text) > 0.5 and len(text) > 20:
            score += CAPS_WEIGHT
            indicators.append("Excessive capitalization")

        if text.count("!") > 2 or text.count("?") > 3:
            score += PUNCTUATION_WEIGHT
            indicators.append("Excessive punctuation")

        frequency = Counter(w for w in lowered.split() if len(w) > 3)
        for word, count in frequency.items():
            if count > 3:
                score += REPEATED_WORD_WEIGHT
                indicators.append(f'Repetitive word: "{word}" ({count} times)')

        if any(p.search(text) for p in SUSPICIOUS_PATTERNS):
            score += SUSPICIOUS_WEIGHT
            indicators.append("Suspicious patterns detected")

        score = min(score, 1.0)
        logger.debug("spam: score=%.2f indicators=%d", score, len(indicators))
        return SpamResult(
            is_spam=score > SPAM_THRESHOLD,
            spam_score=score,
            spam_indicators=indicators,
            clean_content=self.clean_content(text),
        )

    def count_urls(self, text: str) -> int:
        return sum(len(p.findall(text)) for p in self._url_patterns)

    def clean_content(self, text: str) -> str:
        """Replace links with a placeholder and collapse repeated ``!`` / ``?``."""
        cleaned = text
        for pattern in self._url_patterns:
            cleaned = pattern.sub(URL_PLACEHOLDER, cleaned)
        cleaned = re.sub(r"!{2,}", "!", cleaned)
        cleaned = re.sub(r"\?{2,}", "?", cleaned)
        return cleaned.strip()

    def add_spam_pattern(self, pattern: str, confidence: float) -> None:
        self._phrases[pattern.lower()] = confidence

    def add_url_pattern(self, pattern: re.Pattern[str] | str) -> None:
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        self._url_patterns.append(pattern)
