from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from classroom.models import LabSession
    from classroom.models import Student


class ClassroomEventKind(str, Enum):
    STUDENT_ADDED = "student-added"
    STUDENT_GROUP_CHANGED = "student-group-changed"
    LAB_STARTED = "lab-started"
    LAB_COMPLETED = "lab-completed"


@dataclass(frozen=True, slots=True)
class StudentAdded:
    student: Student

    kind = ClassroomEventKind.STUDENT_ADDED


@dataclass(frozen=True, slots=True)
class StudentGroupChanged:
    student: Student
    group: int

    kind = ClassroomEventKind.STUDENT_GROUP_CHANGED


@dataclass(frozen=True, slots=True)
class LabStarted:
    session: LabSession

    kind = ClassroomEventKind.LAB_STARTED


@dataclass(frozen=True, slots=True)
class LabCompleted:
    student: Student
    session: LabSession

    kind = ClassroomEventKind.LAB_COMPLETED


ClassroomEvent = StudentAdded | StudentGroupChanged | LabStarted | LabCompleted
ClassroomListener = Callable[[ClassroomEvent], None]


class ClassroomEmitter:
    """
    Synchronous notification fan-out.

    Listeners run inside the mutating call, in registration order. A listener
    that raises is logged and skipped; the rest still run.
    """

    def __init__(self) -> None:
        self._listeners: dict[ClassroomEventKind, list[ClassroomListener]] = {
            kind: [] for kind in ClassroomEventKind
        }

    def subscribe(self, kind: ClassroomEventKind, listener: ClassroomListener) -> None:
        self._listeners[ClassroomEventKind(kind)].append(listener)

    def unsubscribe(self, kind: ClassroomEventKind, listener: ClassroomListener) -> bool:
        listeners = self._listeners[ClassroomEventKind(kind)]
        try:
            listeners.remove(listener)
        except ValueError:
            return False
        return True

    def listener_count(self, kind: ClassroomEventKind | None = None) -> int:
        if kind is not None:
            return len(self._listeners[ClassroomEventKind(kind)])
        return sum(len(v) for v in self._listeners.values())

    def emit(self, event: ClassroomEvent) -> None:
        # copy: a listener may unsubscribe itself while we iterate
        for listener in list(self._listeners[event.kind]):
            try:
                listener(event)
            except Exception as e:
                print(f"[CLASSROOM] action=emit result=listener_error kind={event.kind.value} error={str(e)[:180]}")
