"""
Roster management and class-wide operations.
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from ..core.entities import Student
from ..core.interfaces import AssignmentObserver, NotificationSink
from .notification_service import ConsoleSink

logger = logging.getLogger(__name__)


class ClassList:
    """Owns a roster of students and fans class-wide operations out to them."""

    def __init__(self, observer: Optional[AssignmentObserver] = None,
                 sink: Optional[NotificationSink] = None):
        self._students: List[Student] = []
        self._observer = observer
        self._sink = sink or ConsoleSink()

    @property
    def students(self) -> Tuple[Student, ...]:
        return tuple(self._students)

    @property
    def observer(self) -> Optional[AssignmentObserver]:
        return self._observer

    def __len__(self) -> int:
        return len(self._students)

    def __contains__(self, student: Student) -> bool:
        return any(s is student for s in self._students)

    def add_student(self, student: Student) -> None:
        """Add a student once; the same object twice is a no-op."""
        if student is None or student in self:
            return
        self._students.append(student)
        logger.info("Added %s to roster (%d students)", student.full_name, len(self._students))
        self._sink.emit(f"{student.full_name} has been added to the classlist.")

    def remove_student(self, student_or_name: Union[Student, str]) -> None:
        """Remove every student whose full name matches."""
        if isinstance(student_or_name, str):
            name = student_or_name
        else:
            name = student_or_name.full_name

        before = len(self._students)
        self._students = [s for s in self._students if s.full_name != name]
        logger.info("Removed %d student(s) named %s", before - len(self._students), name)

    def find_student_by_name(self, name: str) -> Optional[Student]:
        for student in self._students:
            if student.full_name == name:
                return student
        return None

    def find_outstanding_assignments(self, assignment_name: Optional[str] = None) -> List[str]:
        """Full names of students with outstanding work.

        With a name, only that assignment counts and students who never got
        it are left out. Without one, any outstanding assignment counts;
        students with no assignments at all are never listed.
        """
        result = []

        if assignment_name:
            for student in self._students:
                assignment = student.get_assignment(assignment_name)
                if assignment is not None and assignment.status.is_outstanding:
                    result.append(student.full_name)
        else:
            for student in self._students:
                if any(a.status.is_outstanding for a in student.assignments):
                    result.append(student.full_name)

        return result

    async def _release(self, student: Student, assignment_name: str) -> None:
        # yield first so every release runs as its own scheduled step
        await asyncio.sleep(0)
        student.update_assignment_status(assignment_name)

    async def release_assignments_parallel(self, assignment_names: Iterable[str]) -> None:
        """Release every named assignment to every student, waiting for all of them."""
        tasks = [
            self._release(student, assignment_name)
            for assignment_name in assignment_names
            for student in list(self._students)
        ]
        logger.info("Releasing %d assignment(s) across the roster", len(tasks))
        await asyncio.gather(*tasks)

    def send_reminder(self, assignment_name: str) -> None:
        """Remind students with outstanding work and submit it for them.

        Each roster entry is checked on its own, so students sharing a name
        are never reminded on each other's behalf.
        """
        for student in list(self._students):
            current = student.get_assignment(assignment_name)
            if current is None or not current.status.is_outstanding:
                continue

            assignment = student.mark_final_reminder(assignment_name)
            if assignment is None:
                continue
            if self._observer is not None:
                self._observer.notify(student, assignment, True)

            student.submit_assignment(assignment_name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'students': [s.to_dict() for s in self._students],
            'outstanding': self.find_outstanding_assignments(),
        }
