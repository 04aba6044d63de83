from __future__ import annotations

import math
from dataclasses import dataclass

from classroom.models import Classroom
from classroom.models import Student


def completion_pct(completed: int, total: int) -> int:
    if total <= 0:
        return 0
    return int(math.floor((completed * 100.0 / total) + 0.5))


@dataclass(frozen=True, slots=True)
class GroupCompletion:
    group: int
    completed: int
    total: int

    @property
    def pct(self) -> int:
        return completion_pct(self.completed, self.total)


@dataclass(frozen=True, slots=True)
class LabCompletionStats:
    lab_id: str | None
    completed: int
    total: int
    groups: list[GroupCompletion]

    @property
    def pct(self) -> int:
        return completion_pct(self.completed, self.total)

    def group(self, number: int) -> GroupCompletion | None:
        for row in self.groups:
            if row.group == number:
                return row
        return None


def lab_completion_stats(classroom: Classroom) -> LabCompletionStats:
    session = classroom.active_lab_session
    lab_id = session.id if session is not None else None

    def _done(student: Student) -> bool:
        return lab_id is not None and lab_id in student.completed_labs

    students = list(classroom.students.values())
    groups: list[GroupCompletion] = []
    for number in range(1, classroom.group_count + 1):
        members = classroom.students_in_group(number)
        groups.append(
            GroupCompletion(
                group=number,
                completed=sum(1 for s in members if _done(s)),
                total=len(members),
            )
        )
    return LabCompletionStats(
        lab_id=lab_id,
        completed=sum(1 for s in students if _done(s)),
        total=len(students),
        groups=groups,
    )


@dataclass(frozen=True, slots=True)
class EnrollmentSummary:
    total: int
    by_group: dict[int, list[Student]]
    unassigned: list[Student]


def enrollment_summary(classroom: Classroom) -> EnrollmentSummary:
    by_group: dict[int, list[Student]] = {n: [] for n in range(1, classroom.group_count + 1)}
    unassigned: list[Student] = []
    for student in classroom.students.values():
        if student.group in by_group:
            by_group[student.group].append(student)
        else:
            unassigned.append(student)
    return EnrollmentSummary(total=len(classroom.students), by_group=by_group, unassigned=unassigned)
