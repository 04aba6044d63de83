from __future__ import annotations

import importlib


async def _noop_async(*args, **kwargs):
    return None


def _try_import_or_skip(module_name: str, pip_name: str | None = None) -> bool:
    try:
        importlib.import_module(module_name)
        return True
    except ModuleNotFoundError:
        install_name = pip_name or module_name
        print(
            f"Smoke wiring check skipped: missing dependency '{module_name}'. "
            f"Install requirements and retry (e.g. `pip install {install_name}` "
            f"or `pip install -e .`)."
        )
        return False


def _main() -> int:
    if not _try_import_or_skip("discord", "discord.py"):
        return 0

    import discord
    from discord.ext import commands
    from classroom.store import ClassroomStore
    from misc.classroom_embeds import build_enrollment_embed
    from misc.classroom_embeds import build_lab_panel_embed
    from misc.classroom_embeds import build_lab_status_embed
    from misc.classroom_embeds import build_student_status_embed
    from misc.classroom_views import build_complete_lab_panel
    from misc.classroom_views import build_join_group_panel
    from misc.component_routes import route_component_interaction
    from misc.discord_gates import channel_can_host_threads
    from misc.discord_gates import channel_is_thread
    from misc.discord_gates import classroom_for_channel
    from misc.invite_link import generate_invite_link
    from misc.live_targets import ContextReplyTarget
    from misc.live_update import start_live_update
    from misc.live_update_settings import default_live_update_settings
    from misc.runtime_wiring import wire_bot_runtime

    intents = discord.Intents.none()
    bot = commands.Bot(command_prefix="!", intents=intents)

    wire_bot_runtime(
        bot,
        store=ClassroomStore(),
        send_chunked=_noop_async,
        user_is_owner=lambda user: True,
        user_is_instructor=lambda user: True,
        channel_is_thread=channel_is_thread,
        channel_can_host_threads=channel_can_host_threads,
        classroom_for_channel=classroom_for_channel,
        route_component_interaction=route_component_interaction,
        live_settings=default_live_update_settings(),
        start_live_update=start_live_update,
        reply_target_factory=ContextReplyTarget,
        enrollment_embed=build_enrollment_embed,
        lab_status_embed=build_lab_status_embed,
        lab_panel_embed=build_lab_panel_embed,
        student_status_embed=build_student_status_embed,
        join_group_panel=build_join_group_panel,
        complete_lab_panel=build_complete_lab_panel,
        max_group_count=10,
        app_id=123456789012345678,
        invite_link_func=generate_invite_link,
        bot_name="LabBot",
        config_warnings=[],
    )

    expected_commands = {
        "invite",
        "classrooms",
        "classroom.create",
        "classroom.status",
        "student.status",
        "lab.start",
        "lab.stats",
    }
    existing_commands = set(bot.all_commands.keys())
    missing = sorted(expected_commands - existing_commands)
    if missing:
        raise RuntimeError(f"Missing expected commands: {missing}")

    for event_name in ("on_ready", "on_message", "on_interaction", "on_command_error"):
        if event_name not in vars(bot):
            raise RuntimeError(f"Runtime event was not registered: {event_name}")

    print("Smoke wiring check passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(_main())
