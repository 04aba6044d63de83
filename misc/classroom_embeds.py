from __future__ import annotations

import discord

from classroom.models import Classroom
from classroom.models import LabSession
from classroom.models import Student
from classroom.stats import enrollment_summary
from classroom.stats import lab_completion_stats
from config.defaults import LAB_PANEL_COLOUR
from config.defaults import STATUS_COLOUR
from misc.discord_timestamps import format_discord_timestamp


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'s' if n != 1 else ''}"


def build_enrollment_embed(classroom: Classroom) -> discord.Embed:
    embed = discord.Embed(
        title=f"Classroom: {classroom.name}",
        colour=discord.Colour(STATUS_COLOUR),
        timestamp=discord.utils.utcnow(),
    )
    summary = enrollment_summary(classroom)
    lines = [f"**Total Students:** {summary.total}", ""]

    if summary.total == 0:
        lines.append("No students have joined yet.")
        embed.description = "\n".join(lines)
        return embed

    if classroom.group_count > 1:
        for number, members in summary.by_group.items():
            lines.append(f"**Group {number}:** {_plural(len(members), 'student')}")
            if members:
                lines.extend(f"- {s.name}" for s in members)
            else:
                lines.append("No students in this group yet.")
            lines.append("")
        if summary.unassigned:
            lines.append(f"**Unassigned:** {_plural(len(summary.unassigned), 'student')}")
            lines.extend(f"- {s.name}" for s in summary.unassigned)
    else:
        lines.append("**Students:**")
        lines.extend(f"- {s.name}" for s in classroom.students.values())

    embed.description = "\n".join(lines).strip()
    return embed


def build_lab_status_embed(classroom: Classroom, *, list_completed: bool = True) -> discord.Embed:
    session = classroom.active_lab_session
    embed = discord.Embed(
        title=f"Lab Status: {session.name if session is not None else 'No active lab'}",
        colour=discord.Colour(STATUS_COLOUR),
        timestamp=discord.utils.utcnow(),
    )
    if session is None:
        embed.description = "No active lab session."
        return embed

    stats = lab_completion_stats(classroom)
    lines = [f"Started: {format_discord_timestamp(session.start_time, 'f')}", ""]
    if stats.total == 0:
        lines.append("**Completion Status:** No students in classroom")
    else:
        lines.append(f"**Completion Status:** {stats.completed}/{stats.total} students ({stats.pct}%)")
    lines.append("")

    if classroom.group_count > 1:
        for row in stats.groups:
            if row.total == 0:
                lines.append(f"**Group {row.group}:** No students in group")
            else:
                lines.append(f"**Group {row.group}:** {row.completed}/{row.total} students ({row.pct}%)")

    done = classroom.completed_students()
    if list_completed and done:
        lines.append("")
        lines.append("**Completed Students:**")
        for student in done:
            group_info = f" (Group {student.group})" if student.group else ""
            lines.append(f"- {student.name}{group_info}")

    embed.description = "\n".join(lines).strip()
    return embed


def build_lab_panel_embed(session: LabSession) -> discord.Embed:
    return discord.Embed(
        title=f"Lab Session: {session.name}",
        description="Click the button below when you complete this lab.",
        colour=discord.Colour(LAB_PANEL_COLOUR),
        timestamp=discord.utils.utcnow(),
    )


def build_student_status_embed(classroom: Classroom, student: Student) -> discord.Embed:
    embed = discord.Embed(
        title=f"Student Status: {student.name}",
        colour=discord.Colour(STATUS_COLOUR),
        timestamp=discord.utils.utcnow(),
    )
    lines = [f"**Group:** {student.group or 'Not assigned'}", ""]

    session = classroom.active_lab_session
    if session is not None:
        done = classroom.has_completed_active_lab(student.id)
        lines.append(f"**Current Lab ({session.name}):** {'✅ Completed' if done else '❌ Not completed'}")
    else:
        lines.append("**No active lab session.**")
    lines.append("")

    if student.completed_labs:
        lines.append("**Completed Labs:**")
        lines.append(f"Total completed: {len(student.completed_labs)}")
    else:
        lines.append("**Completed Labs:** None")

    embed.description = "\n".join(lines)
    return embed
