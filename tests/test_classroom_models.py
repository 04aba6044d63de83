from __future__ import annotations

import unittest

from classroom.events import ClassroomEventKind
from classroom.events import LabCompleted
from classroom.events import StudentAdded
from classroom.events import StudentGroupChanged
from classroom.models import Classroom
from classroom.models import LabAlreadyActiveError
from classroom.models import Student


def _recorder(classroom: Classroom) -> list:
    seen: list = []
    for kind in ClassroomEventKind:
        classroom.subscribe(kind, seen.append)
    return seen


class ClassroomCreationTests(unittest.TestCase):
    def test_group_count_floor_is_one(self):
        for raw in (0, -1, -50):
            self.assertEqual(Classroom(1, "c", raw).group_count, 1)

    def test_group_count_kept_when_positive(self):
        self.assertEqual(Classroom(1, "c", 4).group_count, 4)

    def test_new_classroom_is_empty(self):
        classroom = Classroom(42, "Classroom-2026-10-19", 2)
        self.assertEqual(classroom.students, {})
        self.assertIsNone(classroom.active_lab_session)
        self.assertFalse(classroom.has_completed_active_lab(1))


class StudentTests(unittest.TestCase):
    def test_add_then_get_round_trips_identity(self):
        classroom = Classroom(1, "c", 2)
        classroom.add_student(Student(id=7, name="Ada"))
        student = classroom.get_student(7)
        self.assertIsNotNone(student)
        self.assertEqual((student.id, student.name), (7, "Ada"))

    def test_add_student_overwrites_and_emits(self):
        classroom = Classroom(1, "c", 2)
        seen = _recorder(classroom)
        classroom.add_student(Student(id=7, name="Ada"))
        classroom.add_student(Student(id=7, name="Ada L."))
        self.assertEqual(classroom.get_student(7).name, "Ada L.")
        self.assertEqual(len(classroom.students), 1)
        self.assertEqual([type(e) for e in seen], [StudentAdded, StudentAdded])

    def test_get_unknown_student_returns_none(self):
        self.assertIsNone(Classroom(1, "c").get_student(99))


class GroupAssignmentTests(unittest.TestCase):
    def setUp(self):
        self.classroom = Classroom(1, "c", 3)
        self.classroom.add_student(Student(id=7, name="Ada"))
        self.seen = _recorder(self.classroom)

    def test_out_of_range_groups_rejected_without_mutation(self):
        for group in (0, -1, 4, 100):
            self.assertFalse(self.classroom.assign_student_to_group(7, group))
        self.assertIsNone(self.classroom.get_student(7).group)
        self.assertEqual(self.seen, [])

    def test_unknown_student_rejected(self):
        self.assertFalse(self.classroom.assign_student_to_group(99, 1))
        self.assertEqual(self.seen, [])

    def test_assignment_and_reassignment_emit_each_time(self):
        self.assertTrue(self.classroom.assign_student_to_group(7, 2))
        self.assertTrue(self.classroom.assign_student_to_group(7, 2))
        self.assertTrue(self.classroom.assign_student_to_group(7, 3))
        self.assertEqual(self.classroom.get_student(7).group, 3)
        self.assertEqual([e.group for e in self.seen], [2, 2, 3])
        self.assertTrue(all(isinstance(e, StudentGroupChanged) for e in self.seen))


class LabLifecycleTests(unittest.TestCase):
    def setUp(self):
        self.classroom = Classroom(55, "c", 2)
        self.classroom.add_student(Student(id=1, name="A"))
        self.classroom.add_student(Student(id=2, name="B"))

    def test_start_lab_sets_active_session(self):
        seen = _recorder(self.classroom)
        session = self.classroom.start_lab("L1")
        self.assertIs(self.classroom.active_lab_session, session)
        self.assertEqual(session.name, "L1")
        self.assertEqual(session.thread_id, 55)
        self.assertTrue(session.id.isdigit())
        self.assertEqual([e.kind for e in seen], [ClassroomEventKind.LAB_STARTED])

    def test_second_start_raises_and_keeps_first(self):
        first = self.classroom.start_lab("L1")
        with self.assertRaises(LabAlreadyActiveError) as cm:
            self.classroom.start_lab("L2")
        self.assertIs(cm.exception.active, first)
        self.assertIs(self.classroom.active_lab_session, first)

    def test_complete_without_active_lab_returns_false(self):
        self.assertFalse(self.classroom.complete_lab(1))
        self.assertEqual(self.classroom.get_student(1).completed_labs, set())

    def test_complete_unknown_student_returns_false(self):
        self.classroom.start_lab("L1")
        self.assertFalse(self.classroom.complete_lab(99))

    def test_repeat_completion_returns_true_but_notifies_once(self):
        session = self.classroom.start_lab("L1")
        completed: list = []
        self.classroom.subscribe(ClassroomEventKind.LAB_COMPLETED, completed.append)

        self.assertTrue(self.classroom.complete_lab(1))
        self.assertTrue(self.classroom.complete_lab(1))

        self.assertEqual(len(completed), 1)
        self.assertIsInstance(completed[0], LabCompleted)
        self.assertEqual(completed[0].student.id, 1)
        self.assertIs(completed[0].session, session)
        self.assertEqual(self.classroom.get_student(1).completed_labs, {session.id})

    def test_has_completed_active_lab_tracks_membership(self):
        self.assertFalse(self.classroom.has_completed_active_lab(1))
        self.classroom.start_lab("L1")
        self.assertFalse(self.classroom.has_completed_active_lab(1))
        self.classroom.complete_lab(1)
        self.assertTrue(self.classroom.has_completed_active_lab(1))
        self.assertFalse(self.classroom.has_completed_active_lab(2))
        self.assertFalse(self.classroom.has_completed_active_lab(99))

    def test_students_in_group_helper(self):
        self.classroom.assign_student_to_group(2, 2)
        self.assertEqual([s.id for s in self.classroom.students_in_group(2)], [2])
        self.assertEqual(self.classroom.students_in_group(1), [])

    def test_completed_students_helper(self):
        self.assertEqual(self.classroom.completed_students(), [])
        self.classroom.start_lab("L1")
        self.classroom.complete_lab(2)
        self.assertEqual([s.id for s in self.classroom.completed_students()], [2])


class EmitterTests(unittest.TestCase):
    def test_failing_listener_does_not_block_others_or_mutation(self):
        classroom = Classroom(1, "c")
        seen: list = []

        def _boom(event):
            raise ValueError("listener exploded")

        classroom.subscribe(ClassroomEventKind.STUDENT_ADDED, _boom)
        classroom.subscribe(ClassroomEventKind.STUDENT_ADDED, seen.append)
        classroom.add_student(Student(id=3, name="C"))

        self.assertIsNotNone(classroom.get_student(3))
        self.assertEqual(len(seen), 1)

    def test_unsubscribe_is_safe_to_repeat(self):
        classroom = Classroom(1, "c")
        seen: list = []
        classroom.subscribe(ClassroomEventKind.STUDENT_ADDED, seen.append)
        self.assertTrue(classroom.unsubscribe(ClassroomEventKind.STUDENT_ADDED, seen.append))
        self.assertFalse(classroom.unsubscribe(ClassroomEventKind.STUDENT_ADDED, seen.append))
        classroom.add_student(Student(id=3, name="C"))
        self.assertEqual(seen, [])
        self.assertEqual(classroom.listener_count(), 0)

    def test_listeners_only_receive_their_kind(self):
        classroom = Classroom(1, "c", 2)
        added: list = []
        classroom.subscribe(ClassroomEventKind.STUDENT_ADDED, added.append)
        classroom.add_student(Student(id=3, name="C"))
        classroom.assign_student_to_group(3, 1)
        classroom.start_lab("L")
        self.assertEqual(len(added), 1)


if __name__ == "__main__":
    unittest.main()
