from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class RuntimeDeps:
    store: Any
    route_component_interaction: Callable


@dataclass(frozen=True)
class RuntimeBootDeps:
    bot_name: str
    config_warnings: list[str]
