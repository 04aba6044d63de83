from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from config.defaults import DEFAULT_UPDATE_INTERVAL_SECONDS
from config.defaults import DEFAULT_UPDATE_MINUTES
from config.defaults import MAX_UPDATE_MINUTES
from config.defaults import MIN_UPDATE_SPACING_SECONDS


@dataclass(frozen=True, slots=True)
class LiveUpdateSettings:
    interval_seconds: float = DEFAULT_UPDATE_INTERVAL_SECONDS
    min_spacing_seconds: float = MIN_UPDATE_SPACING_SECONDS
    default_minutes: int = DEFAULT_UPDATE_MINUTES
    max_minutes: int = MAX_UPDATE_MINUTES

    def clamp_minutes(self, minutes: int | None) -> int:
        if not minutes:
            return self.default_minutes
        return max(1, min(int(minutes), self.max_minutes))


def default_live_update_settings() -> LiveUpdateSettings:
    return LiveUpdateSettings()


def _positive_number(value: Any, fallback: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return fallback
    return float(value) if value > 0 else fallback


def _positive_int(value: Any, fallback: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return fallback
    return value if value > 0 else fallback


def load_live_update_settings(path: str | Path | None) -> tuple[LiveUpdateSettings, str | None]:
    """
    Returns (settings, warning_message). warning_message is None on clean load.
    """
    defaults = default_live_update_settings()
    if not path:
        return (defaults, "Live-update settings path missing; using built-in defaults.")

    p = Path(path)
    if not p.exists():
        return (defaults, f"Live-update settings file not found at {p}; using built-in defaults.")

    try:
        payload = yaml.safe_load(p.read_text(encoding="utf-8"))
    except Exception as exc:
        return (defaults, f"Failed to read live-update settings from {p}: {exc}; using built-in defaults.")

    if not isinstance(payload, dict):
        return (defaults, f"Invalid live-update settings format in {p}; using built-in defaults.")

    max_minutes = _positive_int(payload.get("max_minutes"), defaults.max_minutes)
    default_minutes = _positive_int(payload.get("default_minutes"), defaults.default_minutes)
    settings = LiveUpdateSettings(
        interval_seconds=_positive_number(payload.get("interval_seconds"), defaults.interval_seconds),
        min_spacing_seconds=_positive_number(payload.get("min_spacing_seconds"), defaults.min_spacing_seconds),
        default_minutes=min(default_minutes, max_minutes),
        max_minutes=max_minutes,
    )
    return (settings, None)
