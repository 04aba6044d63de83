from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Callable

from misc.live_update_settings import LiveUpdateSettings


def _default_false(*args, **kwargs) -> bool:
    return False


@dataclass(frozen=True)
class CommandDeps:
    # Core/shared
    store: Any = None
    send_chunked: Callable | None = None
    max_group_count: int = 10

    # Live-update panels
    live_settings: LiveUpdateSettings = field(default_factory=LiveUpdateSettings)
    start_live_update: Callable | None = None
    reply_target_factory: Callable | None = None

    # Render/panel factories
    enrollment_embed: Callable | None = None
    lab_status_embed: Callable | None = None
    lab_panel_embed: Callable | None = None
    student_status_embed: Callable | None = None
    join_group_panel: Callable | None = None
    complete_lab_panel: Callable | None = None

    # Owner tooling
    app_id: int = 0
    invite_link_func: Callable | None = None


@dataclass(frozen=True)
class CommandGates:
    classroom_for_channel: Callable[[Any], Any] = lambda channel: None
    channel_is_thread: Callable[[Any], bool] = _default_false
    channel_can_host_threads: Callable[[Any], bool] = _default_false
    user_is_owner: Callable[[Any], bool] = _default_false
    user_is_instructor: Callable[[Any], bool] = _default_false
