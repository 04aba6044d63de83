from __future__ import annotations

import discord

BOT_SCOPES = ("bot", "applications.commands")


def required_permissions() -> discord.Permissions:
    return discord.Permissions(
        view_channel=True,
        send_messages=True,
        manage_threads=True,
        create_public_threads=True,
        embed_links=True,
        attach_files=True,
        read_message_history=True,
        send_messages_in_threads=True,
    )


def generate_invite_link(app_id: int) -> str | None:
    if int(app_id or 0) <= 0:
        return None
    return discord.utils.oauth_url(int(app_id), permissions=required_permissions(), scopes=BOT_SCOPES)
