from __future__ import annotations

import time
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime, timezone

from classroom.events import ClassroomEmitter
from classroom.events import LabCompleted
from classroom.events import LabStarted
from classroom.events import StudentAdded
from classroom.events import StudentGroupChanged


class LabAlreadyActiveError(RuntimeError):
    def __init__(self, active: LabSession):
        super().__init__("A lab session is already active")
        self.active = active


@dataclass(slots=True)
class Student:
    id: int
    name: str
    group: int | None = None
    completed_labs: set[str] = field(default_factory=set)


@dataclass(frozen=True, slots=True)
class LabSession:
    id: str
    name: str
    start_time: datetime
    thread_id: int


def _new_lab_id() -> str:
    return str(int(time.time() * 1000))


class Classroom(ClassroomEmitter):
    """
    One classroom per hosting thread.

    Owns its students and at most one active lab session. Every successful
    mutation emits a typed notification before returning; see
    ``classroom.events`` for the kinds.

    There is no end-lab transition: once started, ``active_lab_session`` stays
    set for the lifetime of the process.
    """

    def __init__(self, id: int, name: str, group_count: int = 1) -> None:
        super().__init__()
        self.id = id
        self.name = str(name)
        self.group_count = max(1, int(group_count or 0))
        self.students: dict[int, Student] = {}
        self.active_lab_session: LabSession | None = None
        print(f"[CLASSROOM] action=create result=ok id={self.id} name={self.name!r} groups={self.group_count}")

    def add_student(self, student: Student) -> None:
        self.students[student.id] = student
        print(f"[CLASSROOM] action=add_student result=ok classroom={self.id} student={student.id} name={student.name!r}")
        self.emit(StudentAdded(student=student))

    def get_student(self, student_id: int) -> Student | None:
        return self.students.get(student_id)

    def assign_student_to_group(self, student_id: int, group: int) -> bool:
        student = self.students.get(student_id)
        if student is None or group < 1 or group > self.group_count:
            print(
                f"[CLASSROOM] action=assign_group result=rejected classroom={self.id} "
                f"student={student_id} group={group}"
            )
            return False

        student.group = group
        print(f"[CLASSROOM] action=assign_group result=ok classroom={self.id} student={student_id} group={group}")
        self.emit(StudentGroupChanged(student=student, group=group))
        return True

    def start_lab(self, name: str) -> LabSession:
        if self.active_lab_session is not None:
            print(
                f"[CLASSROOM] action=start_lab result=rejected classroom={self.id} "
                f"name={name!r} active={self.active_lab_session.name!r}"
            )
            raise LabAlreadyActiveError(self.active_lab_session)

        session = LabSession(
            id=_new_lab_id(),
            name=str(name),
            start_time=datetime.now(timezone.utc),
            thread_id=self.id,
        )
        self.active_lab_session = session
        print(f"[CLASSROOM] action=start_lab result=ok classroom={self.id} lab={session.id} name={session.name!r}")
        self.emit(LabStarted(session=session))
        return session

    def complete_lab(self, student_id: int) -> bool:
        """
        Mark the active lab complete for a student.

        Returns True for repeat completions too, but only the first completion
        of a (student, lab) pair emits a notification.
        """
        session = self.active_lab_session
        if session is None:
            print(f"[CLASSROOM] action=complete_lab result=rejected classroom={self.id} student={student_id} reason=no_active_lab")
            return False

        student = self.students.get(student_id)
        if student is None:
            print(f"[CLASSROOM] action=complete_lab result=rejected classroom={self.id} student={student_id} reason=unknown_student")
            return False

        is_new = session.id not in student.completed_labs
        student.completed_labs.add(session.id)
        print(
            f"[CLASSROOM] action=complete_lab result={'ok' if is_new else 'repeat'} "
            f"classroom={self.id} student={student_id} lab={session.id}"
        )
        if is_new:
            self.emit(LabCompleted(student=student, session=session))
        return True

    def has_completed_active_lab(self, student_id: int) -> bool:
        session = self.active_lab_session
        if session is None:
            return False
        student = self.students.get(student_id)
        if student is None:
            return False
        return session.id in student.completed_labs

    def students_in_group(self, group: int) -> list[Student]:
        return [s for s in self.students.values() if s.group == group]

    def completed_students(self) -> list[Student]:
        session = self.active_lab_session
        if session is None:
            return []
        return [s for s in self.students.values() if session.id in s.completed_labs]
