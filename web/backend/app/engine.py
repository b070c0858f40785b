"""Process-wide moderation coordinator shared by the routers."""

from __future__ import annotations

from typing import Optional

from postguard.config import load_config
from postguard.moderation.coordinator import ModerationCoordinator
from postguard.moderation.models import ModerationConfig

_coordinator: ModerationCoordinator | None = None


def get_coordinator() -> ModerationCoordinator:
    """Return the shared coordinator, loading the configuration on first use."""
    global _coordinator
    if _coordinator is None:
        _coordinator = ModerationCoordinator(load_config())
    return _coordinator


def reset_coordinator(config: Optional[ModerationConfig] = None) -> ModerationCoordinator:
    """Replace the shared coordinator (used at startup and by tests)."""
    global _coordinator
    if _coordinator is not None:
        _coordinator.shutdown()
    _coordinator = ModerationCoordinator(config)
    return _coordinator
