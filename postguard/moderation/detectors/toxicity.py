"""Toxicity detection across four independent categories.

Each category score is the maximum confidence over the signals that match;
the overall toxicity score is the maximum across categories.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from postguard.moderation import messages
from postguard.moderation.detectors.base import DetectorResult, uppercase_ratio
from postguard.moderation.models import Flag, Severity

logger = logging.getLogger(__name__)

GENERAL_TOXICITY = "general_toxicity"
HATE_SPEECH = "hate_speech"
VIOLENCE = "violence"
SEXUAL_CONTENT = "sexual_content"

CATEGORIES: tuple[str, ...] = (GENERAL_TOXICITY, HATE_SPEECH, VIOLENCE, SEXUAL_CONTENT)

TOXICITY_THRESHOLD = 0.5

TOXIC_PHRASES: dict[str, float] = {
    "kill yourself": 0.9,
    "you should die": 0.9,
    "i hope you die": 0.9,
    "go to hell": 0.7,
    "fuck you": 0.8,
    "you are stupid": 0.6,
    "you are dumb": 0.6,
    "you are an idiot": 0.7,
    "shut up": 0.5,
    "nobody cares": 0.5,
    "you are worthless": 0.8,
    "you are useless": 0.7,
}

HATE_SPEECH_TEMPLATES: tuple[str, ...] = (
    r"all [a-z]+ are",
    r"every [a-z]+ is",
    r"typical [a-z]+",
    r"you people",
    r"those people",
    r"go back to",
    r"you don't belong",
    r"you are not welcome",
)

VIOLENCE_PHRASES: tuple[str, ...] = (
    "i will kill",
    "i want to kill",
    "i should kill",
    "punch you",
    "hit you",
    "beat you",
    "attack you",
    "hurt you",
    "destroy you",
    "burn you",
    "shoot you",
    "stab you",
)

SEXUAL_KEYWORDS: tuple[str, ...] = (
    "nude",
    "naked",
    "porn",
    "sex",
    "sexual",
    "intimate",
    "explicit",
    "adult content",
    "mature content",
)

HATE_SPEECH_CONFIDENCE = 0.8
VIOLENCE_CONFIDENCE = 0.9
SEXUAL_CONTENT_CONFIDENCE = 0.7
SHOUTING_FLOOR = 0.3
PUNCTUATION_FLOOR = 0.2


@dataclass
class ToxicityResult(DetectorResult):
    """Outcome of a toxicity check."""

    is_toxic: bool
    toxicity_score: float
    categories: dict[str, float] = field(default_factory=dict)

    def to_flags(self) -> list[Flag]:
        if not self.is_toxic:
            return []
        return [
            Flag(
                type="toxicity",
                severity=Severity.HIGH,
                confidence=self.toxicity_score,
                description=messages.TOXICITY_DETECTED,
                suggestion=messages.RECOMMEND_REPLACE,
            )
        ]


class ToxicityDetector:
    """Phrase, template and keyword based toxicity scoring."""

    def __init__(self) -> None:
        self._toxic_phrases = dict(TOXIC_PHRASES)
        self._hate_speech = [re.compile(p, re.IGNORECASE) for p in HATE_SPEECH_TEMPLATES]
        self._violence = list(VIOLENCE_PHRASES)
        self._sexual = list(SEXUAL_KEYWORDS)

    def check(self, text: str, categories: Optional[Iterable[str]] = None) -> ToxicityResult:
        """Score *text*.

        Args:
            text: The content to score.
            categories: Optional subset of ``CATEGORIES`` to evaluate. General
                toxicity is always evaluated; omitted categories score 0.

        The coordinator derives *categories* from the
        ``enable_hate_speech_detection``, ``enable_violence_detection`` and
        ``enable_sexual_content_detection`` switches, so turning one off stops
        that category from being evaluated instead of merely being recorded.
        """
        enabled = set(CATEGORIES if categories is None else categories)
        enabled.add(GENERAL_TOXICITY)

        lowered = text.lower()
        scores = {name: 0.0 for name in CATEGORIES}

        for phrase, confidence in self._toxic_phrases.items():
            if phrase in lowered:
                scores[GENERAL_TOXICITY] = max(scores[GENERAL_TOXICITY], confidence)

        if uppercase_ratio(text) > 0.7 and len(text) > 10:
            scores[GENERAL_TOXICITY] = max(scores[GENERAL_TOXICITY], SHOUTING_FLOOR)

        if text.count("!") > 3 or text.count("?") > 5:
            scores[GENERAL_TOXICITY] = max(scores[GENERAL_TOXICITY], PUNCTUATION_FLOOR)

        if HATE_SPEECH in enabled and any(p.search(text) for p in self._hate_speech):
            scores[HATE_SPEECH] = HATE_SPEECH_CONFIDENCE

        if VIOLENCE in enabled and any(p in lowered for p in self._violence):
            scores[VIOLENCE] = VIOLENCE_CONFIDENCE

        if SEXUAL_CONTENT in enabled and any(k in lowered for k in self._sexual):
            scores[SEXUAL_CONTENT] = SEXUAL_CONTENT_CONFIDENCE

        toxicity_score = max(scores.values())
        logger.debug("toxicity: score=%.2f categories=%s", toxicity_score, scores)
        return ToxicityResult(
            is_toxic=toxicity_score > TOXICITY_THRESHOLD,
            toxicity_score=toxicity_score,
            categories=scores,
        )

    def add_toxic_pattern(self, pattern: str, confidence: float) -> None:
        self._toxic_phrases[pattern.lower()] = confidence

    def add_hate_speech_pattern(self, pattern: str) -> None:
        self._hate_speech.append(re.compile(pattern, re.IGNORECASE))

    def add_violence_pattern(self, pattern: str) -> None:
        self._violence.append(pattern.lower())

    def add_sexual_content_pattern(self, pattern: str) -> None:
        self._sexual.append(pattern.lower())
