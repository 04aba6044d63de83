from __future__ import annotations

from discord.ext import commands

from misc.commands.command_deps import CommandDeps
from misc.commands.command_deps import CommandGates


def register(
    bot: commands.Bot,
    *,
    deps: CommandDeps,
    gates: CommandGates,
) -> None:
    @bot.command(name="invite")
    async def cmd_invite(ctx: commands.Context):
        if not gates.user_is_owner(ctx.author):
            await ctx.send("This command is owner-only.")
            return

        app_id = int(deps.app_id or 0)
        if app_id <= 0 and bot.user is not None:
            app_id = int(bot.user.id)
        link = deps.invite_link_func(app_id)
        if not link:
            print("[CMD] name=invite result=error reason=missing_app_id")
            await ctx.send("Error: DISCORD_APP_ID is not configured.")
            return

        print(f"[CMD] name=invite result=ok user={int(ctx.author.id)}")
        await ctx.send(f"Here's the invite link for the bot:\n<{link}>")

    @bot.command(name="classrooms")
    async def cmd_classrooms(ctx: commands.Context):
        if not gates.user_is_owner(ctx.author):
            await ctx.send("This command is owner-only.")
            return

        ids = deps.store.ids()
        if not ids:
            await ctx.send("No classrooms registered.")
            return

        lines = [f"Classrooms ({len(ids)}):"]
        for classroom_id in ids:
            classroom = deps.store.get(classroom_id)
            lab = classroom.active_lab_session
            lines.append(
                f"- <#{classroom_id}> {classroom.name} groups={classroom.group_count} "
                f"students={len(classroom.students)} lab={lab.name if lab is not None else '(none)'}"
            )
        await deps.send_chunked(ctx.channel, "\n".join(lines))
