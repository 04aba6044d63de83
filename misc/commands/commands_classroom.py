from __future__ import annotations

import discord
from discord.ext import commands

from classroom.models import Classroom
from config.defaults import DEFAULT_GROUP_COUNT
from config.defaults import THREAD_AUTO_ARCHIVE_MINUTES
from misc.classroom_views import classroom_thread_name
from misc.classroom_views import welcome_text
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
    @bot.command(name="classroom.create")
    @commands.guild_only()
    async def classroom_create(ctx: commands.Context, group_count: int = DEFAULT_GROUP_COUNT):
        if not gates.user_is_instructor(ctx.author):
            await ctx.send("Only instructors (Manage Threads) can create classrooms.")
            return
        if not gates.channel_can_host_threads(ctx.channel):
            await ctx.send("This command can only be used in channels that support threads.")
            return

        groups = max(1, min(int(group_count or DEFAULT_GROUP_COUNT), deps.max_group_count))
        try:
            thread_name = classroom_thread_name()
            thread = await ctx.channel.create_thread(
                name=thread_name,
                type=discord.ChannelType.public_thread,
                auto_archive_duration=THREAD_AUTO_ARCHIVE_MINUTES,
                reason="New classroom created",
            )
            classroom = Classroom(int(thread.id), thread_name, groups)
            deps.store.register(classroom.id, classroom)

            await thread.send(welcome_text(groups), view=deps.join_group_panel(classroom))
            print(f"[CMD] name=classroom.create result=ok user={int(ctx.author.id)} thread={classroom.id} groups={groups}")

            await start_panel(
                ctx,
                deps,
                classroom=classroom,
                render=lambda: deps.enrollment_embed(classroom),
                content=(
                    f"Classroom created successfully: {thread.mention}\n"
                    f"Student enrollment will update every {every_text(deps)} and immediately when students join."
                ),
                minutes=deps.live_settings.default_minutes,
                label="enrollment",
            )
        except Exception as e:
            print(f"[CMD] name=classroom.create result=error error={str(e)[:180]}")
            await ctx.send("An error occurred while creating the classroom.")

    @bot.command(name="classroom.status")
    @commands.guild_only()
    async def classroom_status(ctx: commands.Context, minutes: int = 0):
        classroom = await require_classroom(ctx, gates, "classroom.status")
        if classroom is None:
            return

        budget = deps.live_settings.clamp_minutes(minutes)
        print(f"[CMD] name=classroom.status user={int(ctx.author.id)} classroom={classroom.id} minutes={budget}")
        try:
            await start_panel(
                ctx,
                deps,
                classroom=classroom,
                render=lambda: deps.enrollment_embed(classroom),
                content=f"Current classroom enrollment status (updating for {budget} minutes):",
                minutes=budget,
                label="enrollment",
            )
        except Exception as e:
            print(f"[CMD] name=classroom.status result=error error={str(e)[:180]}")
            await ctx.send("An error occurred while checking enrollment status.")

    @bot.command(name="student.status")
    @commands.guild_only()
    async def student_status(ctx: commands.Context, member: discord.Member | None = None):
        classroom = await require_classroom(ctx, gates, "student.status")
        if classroom is None:
            return
        if not classroom.students:
            await ctx.send("There are no students in this classroom yet.")
            return
        if member is None:
            await ctx.send("Usage: `!student.status @member`")
            return

        student = classroom.get_student(int(member.id))
        if student is None:
            await ctx.send("This student is not in the classroom.")
            return

        print(f"[CMD] name=student.status user={int(ctx.author.id)} classroom={classroom.id} student={student.id}")
        await ctx.send(embed=deps.student_status_embed(classroom, student))
