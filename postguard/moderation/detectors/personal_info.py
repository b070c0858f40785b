"""Personal information (PII) detection.

Signals are independent; the reported confidence is the highest confidence
among the signals that fired. Name-like sequences are weak evidence and only
count when they repeat or when another kind of PII was already found.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from postguard.moderation import messages
from postguard.moderation.detectors.base import DetectorResult
from postguard.moderation.models import Flag, Severity

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")

PHONE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b"),  # 123-456-7890, 123.456.7890
    re.compile(r"(?<!\w)\(\d{3}\)\s?\d{3}[-.]?\d{4}\b"),  # (123) 456-7890
    re.compile(r"(?<!\w)\+\d{1,3}\s?\d{3}[-.]?\d{3}[-.]?\d{4}\b"),  # +1 123-456-7890
    re.compile(r"\b\d{10,11}\b"),
]

SSN_PATTERN = re.compile(r"\b\d{3}-\d{2}-\d{4}\b")

CREDIT_CARD_PATTERN = re.compile(r"\b\d{4}[- ]?\d{4}[- ]?\d{4}[- ]?\d{4}\b")

_STREET_SUFFIX = r"(?:Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd|Lane|Ln|Drive|Dr)"

ADDRESS_PATTERNS: list[re.Pattern[str]] = [
    re.compile(rf"\b\d+\s+[A-Za-z\s]+{_STREET_SUFFIX}\b", re.IGNORECASE),
    re.compile(rf"\b[A-Za-z\s]+{_STREET_SUFFIX}\s+\d+\b", re.IGNORECASE),
]

NAME_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"\b[A-Z][a-z]+\s+[A-Z][a-z]+\b"),  # First Last
    re.compile(r"\b[A-Z][a-z]+\s+[A-Z][a-z]+\s+[A-Z][a-z]+\b"),  # First Middle Last
]

PERSONAL_KEYWORDS: tuple[str, ...] = (
    "password",
    "pin",
    "account number",
    "routing number",
    "date of birth",
    "birthday",
    "ssn",
    "social security",
    "driver license",
    "passport",
    "id number",
)

EMAIL_CONFIDENCE = 0.9
PHONE_CONFIDENCE = 0.8
SSN_CONFIDENCE = 0.95
CREDIT_CARD_CONFIDENCE = 0.9
ADDRESS_CONFIDENCE = 0.7
NAME_CONFIDENCE = 0.6
KEYWORD_CONFIDENCE = 0.5


def _dedupe(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


@dataclass
class PersonalInfoResult(DetectorResult):
    """Outcome of a personal-information check."""

    has_personal_info: bool
    confidence: float
    detected_info: list[str] = field(default_factory=list)
    info_types: list[str] = field(default_factory=list)

    def to_flags(self) -> list[Flag]:
        if not self.has_personal_info:
            return []
        return [
            Flag(
                type="personal_info",
                severity=Severity.HIGH,
                confidence=self.confidence,
                description=messages.PERSONAL_INFO_DETECTED,
                flagged_text=", ".join(self.detected_info),
                suggestion=messages.RECOMMEND_EDIT,
            )
        ]


class PersonalInfoDetector:
    """Regex and keyword scan for emails, phones, SSNs, cards, addresses and names."""

    def __init__(self) -> None:
        self._phone_patterns = list(PHONE_PATTERNS)
        self._address_patterns = list(ADDRESS_PATTERNS)
        self._name_patterns = list(NAME_PATTERNS)

    def check(self, text: str) -> PersonalInfoResult:
        detected: list[str] = []
        info_types: list[str] = []
        confidence = 0.0

        def record(matches: list[str], info_type: str, value: float) -> None:
            nonlocal confidence
            detected.extend(matches)
            info_types.append(info_type)
            confidence = max(confidence, value)

        emails = EMAIL_PATTERN.findall(text)
        if emails:
            record(emails, "email", EMAIL_CONFIDENCE)

        for pattern in self._phone_patterns:
            phones = pattern.findall(text)
            if phones:
                record(phones, "phone", PHONE_CONFIDENCE)

        ssns = SSN_PATTERN.findall(text)
        if ssns:
            record(ssns, "ssn", SSN_CONFIDENCE)

        cards = CREDIT_CARD_PATTERN.findall(text)
        if cards:
            record(cards, "credit_card", CREDIT_CARD_CONFIDENCE)

        for pattern in self._address_patterns:
            addresses = pattern.findall(text)
            if addresses:
                record(addresses, "address", ADDRESS_CONFIDENCE)

        for pattern in self._name_patterns:
            names = pattern.findall(text)
            # A single capitalised pair is usually just a title or a phrase.
            if names and (len(names) > 1 or detected):
                record(names, "name", NAME_CONFIDENCE)

        lowered = text.lower()
        for keyword in PERSONAL_KEYWORDS:
            if keyword in lowered:
                info_types.append("personal_keyword")
                confidence = max(confidence, KEYWORD_CONFIDENCE)

        detected = _dedupe(detected)
        info_types = _dedupe(info_types)
        logger.debug("personal info: types=%s confidence=%.2f", info_types, confidence)
        return PersonalInfoResult(
            has_personal_info=bool(detected),
            confidence=confidence,
            detected_info=detected,
            info_types=info_types,
        )

    def add_pattern(self, pattern: re.Pattern[str] | str, info_type: str) -> None:
        """Register an extra phone, address or name pattern."""
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        if info_type == "phone":
            self._phone_patterns.append(pattern)
        elif info_type == "address":
            self._address_patterns.append(pattern)
        elif info_type == "name":
            self._name_patterns.append(pattern)
        else:
            raise ValueError(f"Unsupported personal info type: {info_type}")
