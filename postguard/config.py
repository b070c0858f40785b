"""YAML-backed configuration for the moderation pipeline.

The configuration file lives at ``~/.postguard/config.yaml`` unless the
``POSTGUARD_CONFIG`` environment variable points elsewhere. A missing file
yields the default configuration (every detector on, no rules).

Example::

    sensitivity_threshold: 0.5
    enable_spam_detection: true
    rules:
      - id: competitor
        name: Competitor mentions
        description: Do not name competitors
        patterns: ["acme corp", "/acme\\s+inc/"]
        severity: medium
        platforms: [twitter, linkedin]
"""

from __future__ import annotations

import logging
import os
from dataclasses import fields
from pathlib import Path
from typing import Any, Optional

import yaml

from postguard.moderation.errors import ConfigError
from postguard.moderation.models import ModerationConfig, Platform, Rule, Severity

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "POSTGUARD_CONFIG"
LOG_LEVEL_ENV_VAR = "POSTGUARD_LOG_LEVEL"
DEFAULT_CONFIG_PATH = Path.home() / ".postguard" / "config.yaml"

_TOGGLES: tuple[str, ...] = tuple(
    f.name for f in fields(ModerationConfig) if f.name.startswith("enable_")
)


def config_path(path: str | Path | None = None) -> Path:
    """Resolve the configuration file path (argument, then env var, then default)."""
    if path:
        return Path(path)
    env = os.environ.get(CONFIG_ENV_VAR)
    return Path(env) if env else DEFAULT_CONFIG_PATH


def default_config() -> ModerationConfig:
    return ModerationConfig()


# ---------------------------------------------------------------------------
# dict <-> model
# ---------------------------------------------------------------------------


def rule_from_dict(data: dict) -> Rule:
    """Build a Rule from a plain dict (YAML or JSON)."""
    if not isinstance(data, dict):
        raise ConfigError("Each rule must be a mapping")
    rule_id = data.get("id")
    if rule_id is None or str(rule_id) == "":
        raise ConfigError("Rule is missing required field: id")

    patterns = data.get("patterns") or []
    if isinstance(patterns, str) or not all(isinstance(p, str) for p in patterns):
        raise ConfigError(f"Rule '{rule_id}': patterns must be a list of strings")

    try:
        severity = Severity(str(data.get("severity", Severity.MEDIUM.value)).lower())
    except ValueError:
        raise ConfigError(f"Rule '{rule_id}': invalid severity '{data.get('severity')}'") from None

    platforms: list[Platform] = []
    for value in data.get("platforms") or []:
        try:
            platforms.append(Platform(str(value).lower()))
        except ValueError:
            raise ConfigError(f"Rule '{rule_id}': invalid platform '{value}'") from None

    return Rule(
        id=str(rule_id),
        name=str(data.get("name") or rule_id),
        description=str(data.get("description", "")),
        patterns=tuple(patterns),
        severity=severity,
        enabled=bool(data.get("enabled", True)),
        platforms=frozenset(platforms),
    )


def rule_to_dict(rule: Rule) -> dict:
    return {
        "id": rule.id,
        "name": rule.name,
        "description": rule.description,
        "patterns": list(rule.patterns),
        "severity": rule.severity.value,
        "enabled": rule.enabled,
        # Sorted so saved files are stable.
        "platforms": sorted(p.value for p in rule.platforms),
    }


def config_from_dict(data: Optional[dict]) -> ModerationConfig:
    """Build a ModerationConfig; absent keys take their defaults."""
    if data is None:
        return default_config()
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    kwargs: dict[str, Any] = {}
    for name in _TOGGLES:
        if name in data:
            if not isinstance(data[name], bool):
                raise ConfigError(f"'{name}' must be true or false")
            kwargs[name] = data[name]

    if "sensitivity_threshold" in data:
        try:
            kwargs["sensitivity_threshold"] = float(data["sensitivity_threshold"])
        except (TypeError, ValueError):
            raise ConfigError("'sensitivity_threshold' must be a number") from None

    rules_data = data.get("rules") or []
    if not isinstance(rules_data, list):
        raise ConfigError("'rules' must be a list")
    kwargs["rules"] = [rule_from_dict(r) for r in rules_data]

    return ModerationConfig(**kwargs)


def config_to_dict(config: ModerationConfig) -> dict:
    data: dict[str, Any] = {
        "sensitivity_threshold": config.sensitivity_threshold,
    }
    for name in _TOGGLES:
        data[name] = getattr(config, name)
    data["rules"] = [rule_to_dict(r) for r in config.rules]
    return data


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def load_config(path: str | Path | None = None) -> ModerationConfig:
    """Load the configuration from YAML; a missing file gives the defaults."""
    resolved = config_path(path)
    if not resolved.exists():
        logger.debug("No configuration at %s, using defaults", resolved)
        return default_config()

    try:
        with open(resolved) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {resolved}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {resolved}: {e}") from e

    config = config_from_dict(data)
    logger.info("Loaded configuration from %s (%d rules)", resolved, len(config.rules))
    return config


def save_config(config: ModerationConfig, path: str | Path | None = None) -> Path:
    """Write *config* as YAML. Returns the path written."""
    resolved = config_path(path)
    resolved.parent.mkdir(parents=True, exist_ok=True)
    with open(resolved, "w") as f:
        yaml.safe_dump(config_to_dict(config), f, sort_keys=False)
    return resolved
