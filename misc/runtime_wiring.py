from __future__ import annotations

from misc.commands.command_deps import CommandDeps
from misc.commands.command_deps import CommandGates
from misc.commands.commands_classroom import register as register_classroom
from misc.commands.commands_lab import register as register_lab
from misc.commands.commands_owner import register as register_owner
from misc.events_runtime import register_runtime_events
from misc.runtime_deps import RuntimeBootDeps
from misc.runtime_deps import RuntimeDeps


def wire_bot_runtime(
    bot,
    *,
    store,
    send_chunked,
    user_is_owner,
    user_is_instructor,
    channel_is_thread,
    channel_can_host_threads,
    classroom_for_channel,
    route_component_interaction,
    live_settings,
    start_live_update,
    reply_target_factory,
    enrollment_embed,
    lab_status_embed,
    lab_panel_embed,
    student_status_embed,
    join_group_panel,
    complete_lab_panel,
    max_group_count: int,
    app_id: int,
    invite_link_func,
    bot_name: str,
    config_warnings: list[str],
) -> None:
    command_deps = CommandDeps(
        store=store,
        send_chunked=send_chunked,
        max_group_count=max_group_count,
        live_settings=live_settings,
        start_live_update=start_live_update,
        reply_target_factory=reply_target_factory,
        enrollment_embed=enrollment_embed,
        lab_status_embed=lab_status_embed,
        lab_panel_embed=lab_panel_embed,
        student_status_embed=student_status_embed,
        join_group_panel=join_group_panel,
        complete_lab_panel=complete_lab_panel,
        app_id=app_id,
        invite_link_func=invite_link_func,
    )
    command_gates = CommandGates(
        classroom_for_channel=lambda channel: classroom_for_channel(channel, store),
        channel_is_thread=channel_is_thread,
        channel_can_host_threads=channel_can_host_threads,
        user_is_owner=user_is_owner,
        user_is_instructor=user_is_instructor,
    )

    register_owner(
        bot,
        deps=command_deps,
        gates=command_gates,
    )

    register_classroom(
        bot,
        deps=command_deps,
        gates=command_gates,
    )

    register_lab(
        bot,
        deps=command_deps,
        gates=command_gates,
    )

    register_runtime_events(
        bot,
        deps=RuntimeDeps(
            store=store,
            route_component_interaction=route_component_interaction,
        ),
        boot=RuntimeBootDeps(
            bot_name=bot_name,
            config_warnings=list(config_warnings),
        ),
    )
