from __future__ import annotations

from classroom.models import Classroom


class ClassroomStore:
    """In-memory classrooms keyed by hosting thread id. Nothing is persisted."""

    def __init__(self) -> None:
        self._classrooms: dict[int, Classroom] = {}

    def register(self, classroom_id: int, classroom: Classroom) -> None:
        # overwrites silently; a thread id only ever hosts its latest classroom
        self._classrooms[classroom_id] = classroom

    def get(self, classroom_id: int) -> Classroom | None:
        return self._classrooms.get(classroom_id)

    def ids(self) -> list[int]:
        return list(self._classrooms)

    def __contains__(self, classroom_id: object) -> bool:
        return classroom_id in self._classrooms

    def __len__(self) -> int:
        return len(self._classrooms)
