from __future__ import annotations

import discord
from discord.ext import commands


class ContextReplyTarget:
    """
    The reply a live-update session keeps editing.

    ``post`` sends the first render: it replies to the invoking command unless a
    message was already handed in (e.g. a placeholder), in which case that
    message is edited instead. ``edit`` updates whatever ``post`` produced.
    """

    def __init__(self, ctx: commands.Context, *, message: discord.Message | None = None) -> None:
        self.ctx = ctx
        self.message = message

    @property
    def ident(self) -> str:
        message_id = getattr(self.message, "id", None)
        return f"ctx:{getattr(self.ctx.message, 'id', '?')}/msg:{message_id}"

    async def post(self, *, content: str, embed: discord.Embed) -> None:
        if self.message is None:
            self.message = await self.ctx.reply(content=content, embed=embed, mention_author=False)
            return
        await self.message.edit(content=content, embed=embed)

    async def edit(self, *, content: str, embed: discord.Embed) -> None:
        if self.message is None:
            raise RuntimeError("live reply has not been posted yet")
        await self.message.edit(content=content, embed=embed)
