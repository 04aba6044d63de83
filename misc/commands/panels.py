from __future__ import annotations

from typing import Callable

from discord.ext import commands

from classroom.models import Classroom
from misc.commands.command_deps import CommandDeps
from misc.commands.command_deps import CommandGates


async def require_classroom(ctx: commands.Context, gates: CommandGates, command_name: str) -> Classroom | None:
    if not gates.channel_is_thread(ctx.channel):
        print(f"[CMD] name={command_name} result=rejected reason=not_thread user={int(ctx.author.id)}")
        await ctx.send("This command can only be used in classroom threads.")
        return None

    classroom = gates.classroom_for_channel(ctx.channel)
    if classroom is None:
        print(f"[CMD] name={command_name} result=rejected reason=not_classroom user={int(ctx.author.id)}")
        await ctx.send("This thread is not a registered classroom.")
        return None
    return classroom


async def start_panel(
    ctx: commands.Context,
    deps: CommandDeps,
    *,
    classroom: Classroom,
    render: Callable,
    content: str,
    minutes: int,
    label: str,
):
    settings = deps.live_settings
    return await deps.start_live_update(
        target=deps.reply_target_factory(ctx),
        render=render,
        content=content,
        interval_seconds=settings.interval_seconds,
        time_budget_seconds=int(minutes) * 60,
        min_spacing_seconds=settings.min_spacing_seconds,
        classroom=classroom,
        label=label,
    )


def every_text(deps: CommandDeps) -> str:
    return f"{deps.live_settings.interval_seconds:g} seconds"
