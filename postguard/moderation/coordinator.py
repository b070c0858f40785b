"""Moderation coordinator — validates requests, fans detectors out, aggregates.

The coordinator is the long-lived object callers hold. It owns the active
configuration and the rule engine built from it, stored together as one
immutable snapshot that is swapped as a unit. A request reads the snapshot
exactly once, so a concurrent ``update_config`` is either fully visible to
it or not at all.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import Callable, Optional

from postguard.moderation.aggregator import aggregate
from postguard.moderation.detectors import (
    PersonalInfoDetector,
    ProfanityDetector,
    SentimentAnalyzer,
    SpamDetector,
    ToxicityDetector,
)
from postguard.moderation.detectors.toxicity import HATE_SPEECH, SEXUAL_CONTENT, VIOLENCE
from postguard.moderation.errors import ConfigError, PatternCompileError
from postguard.moderation.models import (
    Flag,
    ModerationConfig,
    ModerationRequest,
    ModerationResponse,
    Platform,
    Rule,
)
from postguard.moderation.platform_policy import check_platform_rules
from postguard.moderation.rule_engine import RuleEngine
from postguard.moderation.validator import validate_request

logger = logging.getLogger(__name__)

FlagTask = Callable[[], list[Flag]]


@dataclass(frozen=True)
class _Snapshot:
    config: ModerationConfig
    engine: RuleEngine


class ModerationCoordinator:
    """Run every enabled check over a request and reduce the flags to a verdict.

    Args:
        config: Initial configuration (defaults: every detector on, no rules).
        max_workers: Thread pool size for the detector fan-out.
        parallel: When False, checks run sequentially in the calling thread.
    """

    def __init__(
        self,
        config: Optional[ModerationConfig] = None,
        max_workers: Optional[int] = None,
        parallel: bool = True,
    ) -> None:
        config = config or ModerationConfig()
        self._snapshot = _Snapshot(config=config, engine=RuleEngine(config.rules))
        self._lock = threading.Lock()

        self._profanity = ProfanityDetector()
        self._sentiment = SentimentAnalyzer()
        self._toxicity = ToxicityDetector()
        self._spam = SpamDetector()
        self._personal_info = PersonalInfoDetector()

        self._parallel = parallel
        self._max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None

    # -- moderation ----------------------------------------------------------

    def moderate(self, request: ModerationRequest) -> ModerationResponse:
        """Moderate *request*.

        Raises:
            ValidationError: the request failed validation; nothing ran.
        """
        start = time.perf_counter()
        request = validate_request(request)
        snapshot = self._snapshot

        tasks = self._build_tasks(snapshot, request)
        flags: list[Flag] = []
        for task_flags in self._run(tasks):
            flags.extend(task_flags)

        verdict = aggregate(flags, request.platform)
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(
            "moderated %s post: %d flag(s), severity=%s in %dms",
            request.platform.value,
            len(flags),
            verdict.overall_severity.value,
            elapsed_ms,
        )
        return ModerationResponse(
            is_flagged=bool(flags),
            flags=flags,
            overall_severity=verdict.overall_severity,
            confidence_score=verdict.confidence_score,
            safe_to_post=verdict.safe_to_post,
            recommendations=verdict.recommendations,
            processing_time_ms=max(elapsed_ms, 0),
        )

    def _build_tasks(self, snapshot: _Snapshot, request: ModerationRequest) -> list[FlagTask]:
        """Checks in the order their flags must appear in the response."""
        config = snapshot.config
        content = request.content
        tasks: list[FlagTask] = []

        if config.enable_profanity_detection:
            tasks.append(lambda: self._profanity.check(content).to_flags())
        if config.enable_sentiment_analysis:
            tasks.append(lambda: self._sentiment.analyze(content).to_flags())
        if config.enable_toxicity_detection:
            categories = _toxicity_categories(config)
            tasks.append(lambda: self._toxicity.check(content, categories).to_flags())
        if config.enable_spam_detection:
            tasks.append(lambda: self._spam.check(content).to_flags())
        if config.enable_personal_info_detection:
            tasks.append(lambda: self._personal_info.check(content).to_flags())

        engine = snapshot.engine
        tasks.append(lambda: engine.check(request))
        tasks.append(lambda: check_platform_rules(content, request.platform))
        return tasks

    def _run(self, tasks: list[FlagTask]) -> list[list[Flag]]:
        if not self._parallel:
            return [task() for task in tasks]
        executor = self._get_executor()
        futures = [executor.submit(task) for task in tasks]
        # Joined in submission order, whatever order they finish in.
        return [future.result() for future in futures]

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers,
                    thread_name_prefix="postguard-detector",
                )
            return self._executor

    def shutdown(self) -> None:
        """Release the detector thread pool."""
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def __enter__(self) -> ModerationCoordinator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    # -- configuration -------------------------------------------------------

    def get_config(self) -> ModerationConfig:
        """Snapshot of the active configuration, rules included."""
        snapshot = self._snapshot
        return replace(snapshot.config, rules=snapshot.engine.get_all_rules())

    def update_config(self, config: ModerationConfig) -> list[PatternCompileError]:
        """Atomically replace the configuration and the rule set.

        Returns the rule patterns that failed to compile and will be skipped.
        """
        engine = RuleEngine(config.rules)
        snapshot = _Snapshot(config=replace(config, rules=list(config.rules)), engine=engine)
        with self._lock:
            self._snapshot = snapshot
        errors = engine.pattern_errors
        logger.info("configuration updated: %d rule(s), %d bad pattern(s)", len(config.rules), len(errors))
        return errors

    # -- rule management -----------------------------------------------------

    @property
    def rule_engine(self) -> RuleEngine:
        return self._snapshot.engine

    def add_rule(self, rule: Rule) -> list[PatternCompileError]:
        """Add *rule* to the active rule set.

        Raises:
            ConfigError: a rule with the same id already exists.
        """
        with self._lock:
            engine = self._snapshot.engine
            if engine.get_rule(rule.id) is not None:
                raise ConfigError(f"Rule '{rule.id}' already exists")
            return engine.add_rule(rule)

    def remove_rule(self, rule_id: str) -> bool:
        with self._lock:
            return self._snapshot.engine.remove_rule(rule_id)

    def enable_rule(self, rule_id: str) -> bool:
        with self._lock:
            return self._snapshot.engine.enable_rule(rule_id)

    def disable_rule(self, rule_id: str) -> bool:
        with self._lock:
            return self._snapshot.engine.disable_rule(rule_id)

    def get_rule(self, rule_id: str) -> Optional[Rule]:
        return self._snapshot.engine.get_rule(rule_id)

    def list_rules(self, platform: Optional[Platform] = None, enabled_only: bool = False) -> list[Rule]:
        engine = self._snapshot.engine
        rules = engine.get_rules_for_platform(platform) if platform else engine.get_all_rules()
        if enabled_only:
            rules = [r for r in rules if r.enabled]
        return rules


def _toxicity_categories(config: ModerationConfig) -> set[str]:
    categories: set[str] = set()
    if config.enable_hate_speech_detection:
        categories.add(HATE_SPEECH)
    if config.enable_violence_detection:
        categories.add(VIOLENCE)
    if config.enable_sexual_content_detection:
        categories.add(SEXUAL_CONTENT)
    return categories
