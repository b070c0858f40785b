"""Operator-defined moderation rules.

Rule patterns are parsed once, when a rule enters the engine, into either a
literal substring matcher or a compiled case-insensitive regex (patterns
written as ``/regex/``). A malformed regex is dropped at that point and
reported through :attr:`RuleEngine.pattern_errors`; the rest of the rule
still applies. A pattern is a regex only if it is at least two characters
long and both starts and ends with ``/``; a lone ``/`` is the literal slash,
not an empty regex that would match every post.

The engine never mutates its rule set in place. Every management operation
builds a new tuple and swaps it in, and :meth:`RuleEngine.check` reads the
tuple once, so a request never sees a half-updated rule set.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Union

from postguard.moderation.errors import PatternCompileError
from postguard.moderation.models import Flag, ModerationRequest, Platform, Rule

logger = logging.getLogger(__name__)

RULE_CONFIDENCE = 0.8


@dataclass(frozen=True)
class LiteralPattern:
    """Case-insensitive substring match."""

    text: str

    def match(self, content: str, lowered: str) -> Optional[str]:
        if self.text.lower() in lowered:
            return self.text
        return None


@dataclass(frozen=True)
class RegexPattern:
    """Case-insensitive regular expression; reports every match."""

    source: str
    regex: re.Pattern[str]

    def match(self, content: str, lowered: str) -> Optional[str]:
        matches = [m.group(0) for m in self.regex.finditer(content)]
        if not matches:
            return None
        return ", ".join(matches)


Pattern = Union[LiteralPattern, RegexPattern]


def is_regex_pattern(pattern: str) -> bool:
    return len(pattern) >= 2 and pattern.startswith("/") and pattern.endswith("/")


def parse_pattern(pattern: str) -> Pattern:
    """Parse a rule pattern string.

    Raises:
        PatternCompileError: the pattern is ``/…/`` delimited but not a valid regex.
    """
    if not is_regex_pattern(pattern):
        return LiteralPattern(pattern)
    source = pattern[1:-1]
    try:
        return RegexPattern(source, re.compile(source, re.IGNORECASE))
    except re.error as e:
        raise PatternCompileError(pattern, str(e)) from e


@dataclass(frozen=True)
class CompiledRule:
    """A rule together with its parsed patterns."""

    rule: Rule
    patterns: tuple[Pattern, ...] = ()
    errors: tuple[PatternCompileError, ...] = field(default=(), compare=False)

    @classmethod
    def compile(cls, rule: Rule) -> CompiledRule:
        patterns: list[Pattern] = []
        errors: list[PatternCompileError] = []
        for raw in rule.patterns:
            try:
                patterns.append(parse_pattern(raw))
            except PatternCompileError as e:
                logger.warning("Rule %s: skipping pattern. %s", rule.id, e)
                errors.append(e)
        return cls(rule=rule, patterns=tuple(patterns), errors=tuple(errors))

    def evaluate(self, content: str, lowered: str) -> list[Flag]:
        flags: list[Flag] = []
        for pattern in self.patterns:
            matched = pattern.match(content, lowered)
            if matched is None:
                continue
            flags.append(
                Flag(
                    type=f"custom_rule_{self.rule.id}",
                    severity=self.rule.severity,
                    confidence=RULE_CONFIDENCE,
                    description=self.rule.description,
                    flagged_text=matched,
                    suggestion=f"Content matches rule: {self.rule.name}",
                )
            )
        return flags


class RuleEngine:
    """Evaluate platform-scoped custom rules against request content."""

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._rules: tuple[CompiledRule, ...] = tuple(CompiledRule.compile(r) for r in rules)
        # Serialises writers only; readers take the current tuple without locking.
        self._write_lock = threading.Lock()

    # -- evaluation ----------------------------------------------------------

    def check(self, request: ModerationRequest) -> list[Flag]:
        """Return one flag per matching pattern of every applicable rule, in rule order."""
        rules = self._rules
        content = request.content
        lowered = content.lower()

        flags: list[Flag] = []
        for compiled in rules:
            if not compiled.rule.applies_to(request.platform):
                continue
            flags.extend(compiled.evaluate(content, lowered))
        return flags

    @property
    def pattern_errors(self) -> list[PatternCompileError]:
        """Patterns dropped because they did not compile."""
        return [e for compiled in self._rules for e in compiled.errors]

    # -- management ----------------------------------------------------------

    def update_rules(self, rules: Iterable[Rule]) -> None:
        """Replace the whole rule set."""
        compiled = tuple(CompiledRule.compile(r) for r in rules)
        with self._write_lock:
            self._rules = compiled

    def add_rule(self, rule: Rule) -> list[PatternCompileError]:
        """Append *rule*; returns the pattern errors found while compiling it."""
        compiled = CompiledRule.compile(rule)
        with self._write_lock:
            self._rules = self._rules + (compiled,)
        return list(compiled.errors)

    def remove_rule(self, rule_id: str) -> bool:
        """Remove every rule with *rule_id*. Returns True if any was removed."""
        with self._write_lock:
            remaining = tuple(c for c in self._rules if c.rule.id != rule_id)
            removed = len(remaining) < len(self._rules)
            self._rules = remaining
        return removed

    def get_rule(self, rule_id: str) -> Optional[Rule]:
        for compiled in self._rules:
            if compiled.rule.id == rule_id:
                return compiled.rule
        return None

    def get_all_rules(self) -> list[Rule]:
        return [c.rule for c in self._rules]

    def enable_rule(self, rule_id: str) -> bool:
        return self._set_enabled(rule_id, True)

    def disable_rule(self, rule_id: str) -> bool:
        return self._set_enabled(rule_id, False)

    def get_rules_for_platform(self, platform: Platform) -> list[Rule]:
        return [c.rule for c in self._rules if platform in c.rule.platforms]

    def get_enabled_rules(self) -> list[Rule]:
        return [c.rule for c in self._rules if c.rule.enabled]

    def _set_enabled(self, rule_id: str, enabled: bool) -> bool:
        with self._write_lock:
            rules = self._rules
            for i, compiled in enumerate(rules):
                if compiled.rule.id == rule_id:
                    updated = replace(compiled, rule=replace(compiled.rule, enabled=enabled))
                    self._rules = rules[:i] + (updated,) + rules[i + 1:]
                    return True
        return False
