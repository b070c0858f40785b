"""Tests for YAML configuration loading and saving."""

import tempfile
from pathlib import Path

import pytest
import yaml

from postguard.config import (
    CONFIG_ENV_VAR,
    config_from_dict,
    config_path,
    config_to_dict,
    load_config,
    rule_from_dict,
    rule_to_dict,
    save_config,
)
from postguard.moderation import ConfigError, ModerationConfig, Platform, Rule, Severity


def _rule_data(**overrides) -> dict:
    data = {
        "id": "competitor",
        "name": "Competitor mentions",
        "description": "Do not name competitors",
        "patterns": ["acme corp", "/acme\\s+inc/"],
        "severity": "high",
        "platforms": ["twitter", "linkedin"],
    }
    data.update(overrides)
    return data


def test_missing_file_gives_defaults():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = load_config(Path(tmpdir) / "absent.yaml")
    assert config == ModerationConfig()


def test_load_rules_and_toggles():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "config.yaml"
        with open(path, "w") as f:
            yaml.dump({"enable_spam_detection": False, "rules": [_rule_data()]}, f)

        config = load_config(path)

    assert config.enable_spam_detection is False
    assert config.enable_toxicity_detection is True
    rule = config.rules[0]
    assert rule.id == "competitor"
    assert rule.severity == Severity.HIGH
    assert rule.platforms == frozenset({Platform.TWITTER, Platform.LINKEDIN})
    assert rule.patterns == ("acme corp", "/acme\\s+inc/")
    assert rule.enabled


def test_save_then_load_keeps_rules():
    config = ModerationConfig(
        rules=[Rule(id="r1", name="One", patterns=("x",), platforms={Platform.TIKTOK}, enabled=False)],
        enable_violence_detection=False,
    )
    with tempfile.TemporaryDirectory() as tmpdir:
        path = save_config(config, Path(tmpdir) / "nested" / "config.yaml")
        assert path.exists()
        loaded = load_config(path)
    assert loaded == config


def test_saved_file_is_plain_yaml():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = save_config(ModerationConfig(), Path(tmpdir) / "config.yaml")
        with open(path) as f:
            data = yaml.safe_load(f)
    assert data["enable_profanity_detection"] is True
    assert data["rules"] == []
    assert list(data)[0] == "sensitivity_threshold"


def test_invalid_yaml_raises_config_error():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "config.yaml"
        path.write_text("rules: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(path)


def test_env_var_selects_file(monkeypatch):
    monkeypatch.setenv(CONFIG_ENV_VAR, "/tmp/somewhere/postguard.yaml")
    assert config_path() == Path("/tmp/somewhere/postguard.yaml")
    assert config_path("explicit.yaml") == Path("explicit.yaml")


def test_rule_from_dict_rejects_bad_values():
    with pytest.raises(ConfigError):
        rule_from_dict(_rule_data(id=None))
    with pytest.raises(ConfigError):
        rule_from_dict(_rule_data(severity="apocalyptic"))
    with pytest.raises(ConfigError):
        rule_from_dict(_rule_data(platforms=["myspace"]))
    with pytest.raises(ConfigError):
        rule_from_dict(_rule_data(patterns="acme"))


def test_rule_defaults():
    rule = rule_from_dict({"id": "bare"})
    assert rule.name == "bare"
    assert rule.severity == Severity.MEDIUM
    assert rule.patterns == ()
    assert rule.platforms == frozenset()


def test_rule_to_dict_sorts_platforms():
    data = rule_to_dict(rule_from_dict(_rule_data()))
    assert data["platforms"] == ["linkedin", "twitter"]
    assert data["severity"] == "high"


def test_config_from_dict_validates_types():
    assert config_from_dict(None) == ModerationConfig()
    with pytest.raises(ConfigError):
        config_from_dict(["not", "a", "mapping"])
    with pytest.raises(ConfigError):
        config_from_dict({"enable_spam_detection": "yes"})
    with pytest.raises(ConfigError):
        config_from_dict({"sensitivity_threshold": "high"})
    with pytest.raises(ConfigError):
        config_from_dict({"rules": {"id": "x"}})


def test_sensitivity_threshold_round_trips():
    config = config_from_dict({"sensitivity_threshold": 0.8})
    assert config_to_dict(config)["sensitivity_threshold"] == 0.8
