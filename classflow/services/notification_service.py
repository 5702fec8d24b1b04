"""
Notification sinks and observers for assignment transitions.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from ..core.entities import Assignment, Student
from ..core.enums import AssignmentStatus
from ..core.interfaces import AssignmentObserver, NotificationSink


class ConsoleSink(NotificationSink):
    """Prints each message on its own line."""

    def emit(self, message: str) -> None:
        print(message)


class LoggingSink(NotificationSink):
    """Forwards messages to a standard library logger."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self._logger = logger or logging.getLogger("classflow.notifications")
        self._level = level

    def emit(self, message: str) -> None:
        self._logger.log(self._level, message)


class MemorySink(NotificationSink):
    """Keeps every message in a list."""

    def __init__(self):
        self.messages: List[str] = []

    def emit(self, message: str) -> None:
        self.messages.append(message)

    def clear(self) -> None:
        self.messages.clear()


def format_notification(student: Student, assignment: Assignment, is_reminder: bool = False) -> str:
    """Build the notification line for a transition. First matching rule wins."""
    name = student.full_name
    a_name = assignment.name
    status = assignment.status

    if is_reminder or status == AssignmentStatus.FINAL_REMINDER:
        return f"Observer → {name}, final reminder for {a_name}."
    if status == AssignmentStatus.RELEASED:
        return f"Observer → {name}, {a_name} has been released."
    if status == AssignmentStatus.WORKING:
        return f"Observer → {name} is working on {a_name}."
    if status == AssignmentStatus.SUBMITTED:
        return f"Observer → {name} has submitted {a_name}."
    if status == AssignmentStatus.PASS:
        return f"Observer → {name} has passed {a_name}"
    if status == AssignmentStatus.FAIL:
        return f"Observer → {name} has failed {a_name}"
    return f"Observer → {name}, {a_name} status updated to {status.display}."


class Observer(AssignmentObserver):
    """Formats transitions and writes them to a sink. Holds no state of its own."""

    def __init__(self, sink: Optional[NotificationSink] = None):
        self._sink = sink or ConsoleSink()

    @property
    def sink(self) -> NotificationSink:
        return self._sink

    def notify(self, student: Student, assignment: Assignment, is_reminder: bool = False) -> None:
        self._sink.emit(format_notification(student, assignment, is_reminder))


@dataclass
class Notification:
    """A captured notification."""
    student_name: str
    assignment_name: str
    status: AssignmentStatus
    grade: Optional[float]
    is_reminder: bool
    message: str
    timestamp: float = field(default_factory=time.time)


class RecordingObserver(AssignmentObserver):
    """Observer that records notifications instead of printing them.

    An optional ``delegate`` still receives every call, so recording can sit
    in front of a real observer.
    """

    def __init__(self, delegate: Optional[AssignmentObserver] = None):
        self._delegate = delegate
        self.notifications: List[Notification] = []

    @property
    def messages(self) -> List[str]:
        return [n.message for n in self.notifications]

    def notify(self, student: Student, assignment: Assignment, is_reminder: bool = False) -> None:
        self.notifications.append(Notification(
            student_name=student.full_name,
            assignment_name=assignment.name,
            status=assignment.status,
            grade=assignment.grade,
            is_reminder=is_reminder,
            message=format_notification(student, assignment, is_reminder),
        ))
        if self._delegate is not None:
            self._delegate.notify(student, assignment, is_reminder)

    def for_student(self, full_name: str) -> List[Notification]:
        return [n for n in self.notifications if n.student_name == full_name]

    def statuses(self, full_name: str, assignment_name: str) -> List[AssignmentStatus]:
        return [n.status for n in self.notifications
                if n.student_name == full_name and n.assignment_name == assignment_name]

    def clear(self) -> None:
        self.notifications.clear()
