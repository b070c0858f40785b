"""Tests for the custom rule engine."""

import pytest

from postguard.moderation.errors import PatternCompileError
from postguard.moderation.models import ModerationRequest, Platform, Rule, Severity
from postguard.moderation.rule_engine import LiteralPattern, RegexPattern, RuleEngine, parse_pattern


def _rule(rule_id: str = "r1", **overrides) -> Rule:
    return Rule(
        id=rule_id,
        name=overrides.get("name", f"Rule {rule_id}"),
        description=overrides.get("description", "Custom rule"),
        patterns=overrides.get("patterns", ("acme",)),
        severity=overrides.get("severity", Severity.MEDIUM),
        enabled=overrides.get("enabled", True),
        platforms=overrides.get("platforms", {Platform.TWITTER}),
    )


def _request(content: str, platform: Platform = Platform.TWITTER) -> ModerationRequest:
    return ModerationRequest(content=content, content_type="text", platform=platform)


# --- Pattern parsing ---


def test_parse_literal_and_regex():
    assert parse_pattern("acme") == LiteralPattern("acme")
    regex = parse_pattern("/ac+me/")
    assert isinstance(regex, RegexPattern)
    assert regex.source == "ac+me"


def test_parse_lone_slash_is_literal():
    # Deliberately not an empty regex, which would flag every post.
    assert parse_pattern("/") == LiteralPattern("/")
    engine = RuleEngine([_rule(patterns=("/",))])
    assert engine.check(_request("no slashes here")) == []
    assert len(engine.check(_request("and/or"))) == 1


def test_parse_invalid_regex_raises():
    with pytest.raises(PatternCompileError) as excinfo:
        parse_pattern("/([unclosed/")
    assert excinfo.value.pattern == "/([unclosed/"


# --- Evaluation ---


def test_literal_match_is_case_insensitive():
    engine = RuleEngine([_rule(patterns=("Acme Corp",))])
    flags = engine.check(_request("Switch from ACME CORP today"))
    assert len(flags) == 1
    flag = flags[0]
    assert flag.type == "custom_rule_r1"
    assert flag.severity == Severity.MEDIUM
    assert flag.confidence == 0.8
    assert flag.description == "Custom rule"
    assert flag.flagged_text == "Acme Corp"
    assert flag.suggestion == "Content matches rule: Rule r1"


def test_regex_reports_all_matches():
    engine = RuleEngine([_rule(patterns=(r"/\bv\d+\b/",), severity=Severity.HIGH)])
    flags = engine.check(_request("Upgrade from V1 to v2 now"))
    assert len(flags) == 1
    assert flags[0].flagged_text == "V1, v2"
    assert flags[0].severity == Severity.HIGH


def test_each_matching_pattern_yields_a_flag():
    engine = RuleEngine([_rule(patterns=("acme", "/ac+me/", "globex"))])
    flags = engine.check(_request("acme is here"))
    assert [f.flagged_text for f in flags] == ["acme", "acme"]


def test_invalid_regex_is_skipped_not_fatal():
    engine = RuleEngine([_rule(patterns=("/([bad/", "acme"))])
    flags = engine.check(_request("acme rocks"))
    assert len(flags) == 1
    assert flags[0].flagged_text == "acme"
    assert len(engine.pattern_errors) == 1


def test_disabled_rule_never_flags():
    engine = RuleEngine([_rule(enabled=False)])
    assert engine.check(_request("acme acme acme")) == []


def test_rule_scoped_to_other_platform_never_flags():
    engine = RuleEngine([_rule(platforms={Platform.LINKEDIN})])
    assert engine.check(_request("acme", Platform.TWITTER)) == []
    assert len(engine.check(_request("acme", Platform.LINKEDIN))) == 1


def test_rule_without_platforms_never_flags():
    engine = RuleEngine([_rule(platforms=set())])
    assert engine.check(_request("acme")) == []


def test_flags_follow_rule_order():
    engine = RuleEngine([_rule("b", patterns=("beta",)), _rule("a", patterns=("alpha",))])
    flags = engine.check(_request("alpha and beta"))
    assert [f.type for f in flags] == ["custom_rule_b", "custom_rule_a"]


# --- Management ---


def test_add_get_remove_rule():
    engine = RuleEngine()
    assert engine.add_rule(_rule("x")) == []
    assert engine.get_rule("x").id == "x"
    assert engine.get_rule("missing") is None
    assert engine.remove_rule("x")
    assert not engine.remove_rule("x")
    assert engine.get_all_rules() == []


def test_add_rule_reports_pattern_errors():
    errors = RuleEngine().add_rule(_rule(patterns=("/(/",)))
    assert len(errors) == 1


def test_enable_disable_replace_rather_than_mutate():
    engine = RuleEngine([_rule("x")])
    before = engine.get_rule("x")

    assert engine.disable_rule("x")
    assert before.enabled
    assert not engine.get_rule("x").enabled
    assert engine.check(_request("acme")) == []

    assert engine.enable_rule("x")
    assert engine.get_rule("x").enabled
    assert not engine.enable_rule("missing")


def test_platform_and_enabled_listings():
    engine = RuleEngine([
        _rule("t", platforms={Platform.TWITTER}),
        _rule("l", platforms={Platform.LINKEDIN}, enabled=False),
        _rule("both", platforms={Platform.TWITTER, Platform.LINKEDIN}),
    ])
    assert [r.id for r in engine.get_rules_for_platform(Platform.LINKEDIN)] == ["l", "both"]
    assert [r.id for r in engine.get_enabled_rules()] == ["t", "both"]


def test_update_rules_replaces_set():
    engine = RuleEngine([_rule("old")])
    engine.update_rules([_rule("new", patterns=("globex",))])
    assert [r.id for r in engine.get_all_rules()] == ["new"]
    assert engine.check(_request("acme")) == []
