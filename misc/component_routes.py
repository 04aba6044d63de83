from __future__ import annotations

import discord

from classroom.models import Student
from classroom.store import ClassroomStore
from misc.classroom_views import COMPLETE_LAB_ACTION
from misc.classroom_views import JOIN_GROUP_ACTION


def parse_custom_id(custom_id: str) -> tuple[str, list[str]]:
    action, _, rest = str(custom_id or "").partition(":")
    params = rest.split(":") if rest else []
    return (action, params)


def _parse_int(token: str) -> int | None:
    try:
        return int(str(token).strip())
    except (TypeError, ValueError):
        return None


def _display_name(user) -> str:
    for attr in ("display_name", "global_name", "name"):
        value = getattr(user, attr, None)
        if value:
            return str(value)
    return f"<@{int(user.id)}>"


async def _reply(interaction: discord.Interaction, text: str) -> None:
    await interaction.response.send_message(text, ephemeral=True)


async def handle_join_group(interaction: discord.Interaction, params: list[str], *, store: ClassroomStore) -> None:
    group = _parse_int(params[0]) if len(params) > 0 else None
    thread_id = _parse_int(params[1]) if len(params) > 1 else None
    if group is None:
        print(f"[INTERACTION] action=join_group result=rejected reason=bad_group params={params}")
        await _reply(interaction, "Invalid group number.")
        return

    classroom = store.get(thread_id) if thread_id is not None else None
    if classroom is None:
        print(f"[INTERACTION] action=join_group result=rejected reason=unknown_classroom thread={thread_id}")
        await _reply(interaction, "This classroom no longer exists.")
        return

    user_id = int(interaction.user.id)
    if classroom.get_student(user_id) is None:
        classroom.add_student(Student(id=user_id, name=_display_name(interaction.user)))

    if not classroom.assign_student_to_group(user_id, group):
        await _reply(interaction, f"Group {group} does not exist in this classroom.")
        return

    print(f"[INTERACTION] action=join_group result=ok user={user_id} classroom={classroom.id} group={group}")
    await _reply(interaction, f"You have joined Group {group} in this classroom!")


async def handle_complete_lab(interaction: discord.Interaction, params: list[str], *, store: ClassroomStore) -> None:
    lab_id = params[0] if len(params) > 0 else ""
    thread_id = _parse_int(params[1]) if len(params) > 1 else None

    classroom = store.get(thread_id) if thread_id is not None else None
    if classroom is None:
        print(f"[INTERACTION] action=complete_lab result=rejected reason=unknown_classroom thread={thread_id}")
        await _reply(interaction, "This classroom no longer exists.")
        return

    session = classroom.active_lab_session
    if session is None or session.id != lab_id:
        print(f"[INTERACTION] action=complete_lab result=rejected reason=stale_lab lab={lab_id}")
        await _reply(interaction, "This lab session is no longer active.")
        return

    user_id = int(interaction.user.id)
    if classroom.get_student(user_id) is None:
        print(f"[INTERACTION] action=complete_lab result=rejected reason=unknown_student user={user_id}")
        await _reply(interaction, "You are not registered in this classroom. Please join a group first.")
        return

    already = classroom.has_completed_active_lab(user_id)
    classroom.complete_lab(user_id)
    print(
        f"[INTERACTION] action=complete_lab result={'repeat' if already else 'ok'} "
        f"user={user_id} classroom={classroom.id} lab={session.id}"
    )
    if already:
        await _reply(interaction, f'You have already completed the "{session.name}" lab.')
    else:
        await _reply(interaction, f'You have completed the "{session.name}" lab!')


async def route_component_interaction(interaction: discord.Interaction, *, store: ClassroomStore) -> bool:
    """Dispatch a button click by custom_id. Returns False for non-component interactions."""
    if interaction.type != discord.InteractionType.component:
        return False
    data = interaction.data or {}
    action, params = parse_custom_id(str(data.get("custom_id") or ""))
    print(f"[INTERACTION] action=button custom_action={action} params={params} user={int(interaction.user.id)}")

    if action == JOIN_GROUP_ACTION:
        await handle_join_group(interaction, params, store=store)
    elif action == COMPLETE_LAB_ACTION:
        await handle_complete_lab(interaction, params, store=store)
    else:
        await _reply(interaction, f"Unknown button action: {action}")
    return True
