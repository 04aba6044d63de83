from __future__ import annotations

from datetime import datetime, timezone

import discord

from classroom.models import Classroom
from classroom.models import LabSession
from config.defaults import GROUP_BUTTONS_PER_ROW

JOIN_GROUP_ACTION = "join_group"
COMPLETE_LAB_ACTION = "complete_lab"


def join_group_custom_id(group: int, thread_id: int) -> str:
    return f"{JOIN_GROUP_ACTION}:{int(group)}:{int(thread_id)}"


def complete_lab_custom_id(lab_id: str, thread_id: int) -> str:
    return f"{COMPLETE_LAB_ACTION}:{lab_id}:{int(thread_id)}"


def build_join_group_panel(classroom: Classroom) -> discord.ui.View:
    # Buttons carry no callbacks; clicks are routed by custom_id in on_interaction,
    # which keeps working for panels posted before a restart.
    view = discord.ui.View(timeout=None)
    for number in range(1, classroom.group_count + 1):
        view.add_item(
            discord.ui.Button(
                label=f"Join Group {number}",
                style=discord.ButtonStyle.primary,
                custom_id=join_group_custom_id(number, classroom.id),
                row=(number - 1) // GROUP_BUTTONS_PER_ROW,
            )
        )
    return view


def build_complete_lab_panel(session: LabSession) -> discord.ui.View:
    view = discord.ui.View(timeout=None)
    view.add_item(
        discord.ui.Button(
            label="Mark as Complete",
            style=discord.ButtonStyle.success,
            custom_id=complete_lab_custom_id(session.id, session.thread_id),
        )
    )
    return view


def welcome_text(group_count: int) -> str:
    return (
        f"Welcome to the classroom! This classroom has {group_count} "
        f"group{'s' if group_count != 1 else ''}. Students, please join a group:"
    )


def classroom_thread_name(now: datetime | None = None) -> str:
    stamp = now or datetime.now(timezone.utc)
    return f"Classroom-{stamp.date().isoformat()}"
