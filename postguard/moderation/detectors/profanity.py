"""Profanity detection backed by the better_profanity word list.

Two lists are involved and they are intentionally not the same:

- the better_profanity lexicon (minus a business allow-list) decides whether
  the text is profane at all, by censoring it and comparing;
- a small canonical set of terms is what gets reported back in
  ``profane_words``.

Text can therefore be profane while ``profane_words`` is empty.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from better_profanity import Profanity

from postguard.moderation import messages
from postguard.moderation.detectors.base import DetectorResult
from postguard.moderation.models import Flag, Severity

logger = logging.getLogger(__name__)

# Words acceptable in business contexts, or homographs of blocked terms.
ALLOWED_WORDS: frozenset[str] = frozenset({
    "hell", "damn", "ass", "bitch", "piss", "shit",
    "analytics", "analysis", "assistant", "class", "function",
})

# Terms reported back to the caller when the text is profane.
REPORTED_WORDS: tuple[str, ...] = ("fuck", "shit", "bitch", "ass", "damn", "hell")

PROFANITY_CONFIDENCE = 0.9


@dataclass
class ProfanityResult(DetectorResult):
    """Outcome of a profanity check."""

    is_profane: bool
    profane_words: list[str] = field(default_factory=list)
    clean_text: str = ""

    def to_flags(self) -> list[Flag]:
        if not self.is_profane:
            return []
        return [
            Flag(
                type="profanity",
                severity=Severity.MEDIUM,
                confidence=PROFANITY_CONFIDENCE,
                description=messages.PROFANITY_DETECTED,
                flagged_text=", ".join(self.profane_words),
                suggestion=messages.RECOMMEND_EDIT,
            )
        ]


class ProfanityDetector:
    """Censor-and-compare profanity check with a business allow-list."""

    def __init__(self, allowed_words: Iterable[str] = ALLOWED_WORDS) -> None:
        self._allowed: set[str] = {w.lower() for w in allowed_words}
        self._extra_words: set[str] = set()
        self._filter = Profanity()
        self._reload()

    def _reload(self) -> None:
        self._filter.load_censor_words(whitelist_words=sorted(self._allowed))
        if self._extra_words:
            self._filter.add_censor_words(sorted(self._extra_words))

    def check(self, text: str) -> ProfanityResult:
        clean_text = self._filter.censor(text)
        is_profane = clean_text != text

        profane_words: list[str] = []
        if is_profane:
            lowered = text.lower()
            profane_words = [w for w in REPORTED_WORDS if w in lowered]

        logger.debug("profanity check: profane=%s reported=%d", is_profane, len(profane_words))
        return ProfanityResult(
            is_profane=is_profane,
            profane_words=profane_words,
            clean_text=clean_text,
        )

    def add_words(self, words: Iterable[str]) -> None:
        """Block additional words on top of the default lexicon."""
        words = {w.lower() for w in words}
        self._extra_words |= words
        self._allowed -= words
        self._reload()

    def remove_words(self, words: Iterable[str]) -> None:
        """Stop blocking *words* (they join the allow-list)."""
        words = {w.lower() for w in words}
        self._extra_words -= words
        self._allowed |= words
        self._reload()

    def get_filtered_words(self) -> list[str]:
        """The canonical terms reported in ``profane_words``."""
        return list(REPORTED_WORDS)
