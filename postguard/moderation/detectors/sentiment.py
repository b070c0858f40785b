"""Lexicon-based sentiment scoring.

Token valences come from a small table of business-positive terms first and
the AFINN-165 English lexicon (via ``afinn``) otherwise. A token directly
preceded by a negator ("not", "don't", ...) counts with its valence flipped,
so "not happy" scores negative.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from afinn import Afinn

from postguard.moderation import messages
from postguard.moderation.detectors.base import DetectorResult, clamp_confidence
from postguard.moderation.models import Flag, Severity

logger = logging.getLogger(__name__)

BUSINESS_LABELS: dict[str, int] = {
    "innovative": 2,
    "successful": 2,
    "growth": 2,
    "opportunity": 2,
    "solution": 1,
    "improve": 1,
    "excellent": 2,
    "amazing": 2,
    "great": 1,
    "good": 1,
    "positive": 1,
    "benefit": 1,
    "advantage": 1,
    "efficient": 1,
    "effective": 1,
    "reliable": 1,
    "secure": 1,
    "fast": 1,
    "easy": 1,
    "simple": 1,
}

NEGATORS: frozenset[str] = frozenset({
    "cant", "can't",
    "dont", "don't",
    "doesnt", "doesn't",
    "not", "non",
    "wont", "won't",
    "isnt", "isn't",
})

# Flag when the per-token average drops below this value.
NEGATIVE_COMPARATIVE_THRESHOLD = -0.3

_PUNCTUATION = re.compile(r"[.,/#!$%^&*;:{}=_`\"~()?\[\]<>|+\\]")


def tokenize(text: str) -> list[str]:
    """Lower-case, drop punctuation, split on whitespace."""
    return _PUNCTUATION.sub(" ", text.lower()).split()


@dataclass
class SentimentResult(DetectorResult):
    """Outcome of sentiment analysis."""

    score: float
    comparative: float
    tokens: list[str] = field(default_factory=list)
    words: list[str] = field(default_factory=list)
    positive: list[str] = field(default_factory=list)
    negative: list[str] = field(default_factory=list)

    def to_flags(self) -> list[Flag]:
        if self.comparative >= NEGATIVE_COMPARATIVE_THRESHOLD:
            return []
        return [
            Flag(
                type="negative_sentiment",
                severity=Severity.LOW,
                confidence=clamp_confidence(abs(self.comparative)),
                description=messages.NEGATIVE_SENTIMENT,
                suggestion=messages.RECOMMEND_REVIEW,
            )
        ]


class SentimentAnalyzer:
    """AFINN valence scoring with business-term augmentation."""

    def __init__(self, labels: dict[str, int] | None = None) -> None:
        self._afinn = Afinn(language="en")
        self._labels = dict(BUSINESS_LABELS if labels is None else labels)

    def valence(self, token: str) -> float:
        if token in self._labels:
            return self._labels[token]
        return self._afinn.score(token)

    def analyze(self, text: str) -> SentimentResult:
        tokens = tokenize(text)
        score = 0.0
        words: list[str] = []
        positive: list[str] = []
        negative: list[str] = []

        cache: dict[str, float] = {}
        for i, token in enumerate(tokens):
            if token not in cache:
                cache[token] = self.valence(token)
            value = cache[token]
            if value == 0:
                continue
            if i > 0 and tokens[i - 1] in NEGATORS:
                value = -value
            score += value
            words.append(token)
            if value > 0:
                positive.append(token)
            else:
                negative.append(token)

        comparative = score / len(tokens) if tokens else 0.0
        logger.debug("sentiment: score=%.1f comparative=%.3f", score, comparative)
        return SentimentResult(
            score=score,
            comparative=comparative,
            tokens=tokens,
            words=words,
            positive=positive,
            negative=negative,
        )

    # Informational helpers, not used for flagging.

    @staticmethod
    def get_sentiment_category(score: float) -> str:
        if score > 2:
            return "very_positive"
        if score > 0:
            return "positive"
        if score == 0:
            return "neutral"
        if score > -2:
            return "negative"
        return "very_negative"

    @staticmethod
    def is_overly_negative(score: float) -> bool:
        return score < -3

    @staticmethod
    def is_overly_positive(score: float) -> bool:
        return score > 5

    @staticmethod
    def get_sentiment_confidence(score: float) -> float:
        """More extreme scores give higher confidence."""
        return min(abs(score) / 10, 1.0)
