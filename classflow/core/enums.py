"""
Enumerations and status groups for the assignment lifecycle.
"""

from enum import Enum
from typing import FrozenSet


class AssignmentStatus(Enum):
    """Lifecycle state of a single per-student assignment."""
    RELEASED = "released"
    WORKING = "working"
    SUBMITTED = "submitted"
    FINAL_REMINDER = "final_reminder"
    PASS = "pass"
    FAIL = "fail"
    # Lookup sentinel only, never stored on an assignment.
    NOT_ASSIGNED = "not_assigned"

    @property
    def display(self) -> str:
        """Human readable form used in notifications."""
        return _DISPLAY[self]

    @property
    def is_outstanding(self) -> bool:
        return self in OUTSTANDING_STATUSES


_DISPLAY = {
    AssignmentStatus.RELEASED: "released",
    AssignmentStatus.WORKING: "working",
    AssignmentStatus.SUBMITTED: "submitted",
    AssignmentStatus.FINAL_REMINDER: "final reminder",
    AssignmentStatus.PASS: "Pass",
    AssignmentStatus.FAIL: "Fail",
    AssignmentStatus.NOT_ASSIGNED: "Hasn't been assigned",
}

GRADED_STATUSES: FrozenSet[AssignmentStatus] = frozenset({
    AssignmentStatus.PASS,
    AssignmentStatus.FAIL,
})

# Submission already happened (or was graded); submitting again is a no-op.
CLOSED_STATUSES: FrozenSet[AssignmentStatus] = frozenset({
    AssignmentStatus.SUBMITTED,
    AssignmentStatus.PASS,
    AssignmentStatus.FAIL,
})

OUTSTANDING_STATUSES: FrozenSet[AssignmentStatus] = frozenset({
    AssignmentStatus.RELEASED,
    AssignmentStatus.WORKING,
    AssignmentStatus.FINAL_REMINDER,
})
