from __future__ import annotations

import discord

from classroom.models import Classroom
from classroom.store import ClassroomStore


def channel_is_thread(channel) -> bool:
    return isinstance(channel, discord.Thread)


def channel_can_host_threads(channel) -> bool:
    # threads cannot nest; forum posts need an opening message we don't have
    return isinstance(channel, discord.TextChannel)


def classroom_for_channel(channel, store: ClassroomStore) -> Classroom | None:
    if channel is None or not channel_is_thread(channel):
        return None
    return store.get(int(getattr(channel, "id", 0) or 0))
