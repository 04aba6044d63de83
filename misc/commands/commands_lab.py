from __future__ import annotations

from discord.ext import commands

from classroom.models import LabAlreadyActiveError
from misc.commands.command_deps import CommandDeps
from misc.commands.command_deps import CommandGates
from misc.commands.panels import every_text
from misc.commands.panels import require_classroom
from misc.commands.panels import start_panel


def register(
    bot: commands.Bot,
    *,
    deps: CommandDeps,
    gates: CommandGates,
) -> None:
    @bot.command(name="lab.start")
    @commands.guild_only()
    async def lab_start(ctx: commands.Context, *, lab_name: str = ""):
        classroom = await require_classroom(ctx, gates, "lab.start")
        if classroom is None:
            return
        if not gates.user_is_instructor(ctx.author):
            await ctx.send("Only instructors (Manage Threads) can start labs.")
            return

        lab_name = " ".join(str(lab_name or "").split())
        if not lab_name:
            await ctx.send("Usage: `!lab.start <lab name>`")
            return

        try:
            session = classroom.start_lab(lab_name)
        except LabAlreadyActiveError as e:
            await ctx.send(f'There is already an active lab session: "{e.active.name}"')
            return

        print(f"[CMD] name=lab.start result=ok user={int(ctx.author.id)} classroom={classroom.id} lab={session.id}")
        try:
            await ctx.channel.send(embed=deps.lab_panel_embed(session), view=deps.complete_lab_panel(session))
            await start_panel(
                ctx,
                deps,
                classroom=classroom,
                render=lambda: deps.lab_status_embed(classroom, list_completed=False),
                content=(
                    f"Lab session started! Status will update every {every_text(deps)} "
                    "and immediately when student progress changes."
                ),
                minutes=deps.live_settings.default_minutes,
                label="lab",
            )
        except Exception as e:
            print(f"[CMD] name=lab.start result=error error={str(e)[:180]}")
            await ctx.send("An error occurred while starting the lab session.")

    @bot.command(name="lab.stats")
    @commands.guild_only()
    async def lab_stats(ctx: commands.Context, minutes: int = 0):
        classroom = await require_classroom(ctx, gates, "lab.stats")
        if classroom is None:
            return
        session = classroom.active_lab_session
        if session is None:
            await ctx.send("There is no active lab session in this classroom.")
            return

        budget = deps.live_settings.clamp_minutes(minutes)
        print(f"[CMD] name=lab.stats user={int(ctx.author.id)} classroom={classroom.id} lab={session.id} minutes={budget}")
        try:
            await start_panel(
                ctx,
                deps,
                classroom=classroom,
                render=lambda: deps.lab_status_embed(classroom, list_completed=True),
                content=(
                    f'Lab statistics for "{session.name}" will update every {every_text(deps)} '
                    f"for {budget} minutes and immediately when student progress changes."
                ),
                minutes=budget,
                label="lab_stats",
            )
        except Exception as e:
            print(f"[CMD] name=lab.stats result=error error={str(e)[:180]}")
            await ctx.send("An error occurred while retrieving lab statistics.")
