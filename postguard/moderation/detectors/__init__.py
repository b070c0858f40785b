"""Detectors — independent risk signals evaluated over the post text.

Every detector exposes ``check(text)`` (``analyze`` for sentiment) returning
its own result type. All result types implement ``to_flags()``, which is the
only thing the coordinator consumes.
"""

from postguard.moderation.detectors.base import DetectorResult
from postguard.moderation.detectors.personal_info import PersonalInfoDetector, PersonalInfoResult
from postguard.moderation.detectors.profanity import ProfanityDetector, ProfanityResult
from postguard.moderation.detectors.sentiment import SentimentAnalyzer, SentimentResult
from postguard.moderation.detectors.spam import SpamDetector, SpamResult
from postguard.moderation.detectors.toxicity import ToxicityDetector, ToxicityResult

__all__ = [
    "DetectorResult",
    "PersonalInfoDetector",
    "PersonalInfoResult",
    "ProfanityDetector",
    "ProfanityResult",
    "SentimentAnalyzer",
    "SentimentResult",
    "SpamDetector",
    "SpamResult",
    "ToxicityDetector",
    "ToxicityResult",
]
