"""Common contract shared by every detector result."""

from __future__ import annotations

from abc import ABC, abstractmethod

from postguard.moderation.models import Flag


class DetectorResult(ABC):
    """Capability shared by all detector results: contribute flags."""

    @abstractmethod
    def to_flags(self) -> list[Flag]:
        """Return the flags this result contributes (possibly none)."""


def clamp_confidence(value: float) -> float:
    """Bound a confidence into [0, 1]."""
    return max(0.0, min(float(value), 1.0))


def uppercase_ratio(text: str) -> float:
    """Fraction of characters in *text* that are ASCII capitals."""
    if not text:
        return 0.0
    return sum(1 for ch in text if "A" <= ch <= "Z") / len(text)
