from __future__ import annotations

import discord
from discord.ext import commands

from misc.runtime_deps import RuntimeBootDeps
from misc.runtime_deps import RuntimeDeps


def register_runtime_events(
    bot: commands.Bot,
    *,
    deps: RuntimeDeps,
    boot: RuntimeBootDeps,
) -> None:
    @bot.event
    async def on_ready():
        print(f"{boot.bot_name} is online as {bot.user}")
        for warning in boot.config_warnings:
            print(f"[CFG] {warning}")

    @bot.event
    async def on_message(message: discord.Message):
        if message.author.bot:
            return
        if (message.content or "").lstrip().startswith(bot.command_prefix):
            await bot.process_commands(message)

    @bot.event
    async def on_interaction(interaction: discord.Interaction):
        try:
            await deps.route_component_interaction(interaction, store=deps.store)
        except Exception as e:
            print(f"[INTERACTION] action=route result=error error={str(e)[:180]}")
            try:
                if not interaction.response.is_done():
                    await interaction.response.send_message(
                        "An error occurred while handling the interaction.",
                        ephemeral=True,
                    )
            except Exception as reply_err:
                print(f"[INTERACTION] action=error_reply result=error error={str(reply_err)[:180]}")

    @bot.event
    async def on_command_error(ctx: commands.Context, error: commands.CommandError):
        if isinstance(error, commands.CommandNotFound):
            return
        if isinstance(error, commands.NoPrivateMessage):
            await ctx.send("This command only works in a server.")
            return
        if isinstance(error, (commands.BadArgument, commands.MissingRequiredArgument)):
            await ctx.send(f"Invalid arguments: {str(error)[:180]}")
            return
        print(f"[CMD] name={getattr(ctx.command, 'name', '?')} result=error error={str(error)[:180]}")
        await ctx.send("An error occurred while running that command.")
