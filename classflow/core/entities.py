"""
Core entities: assignments and the students who own them.
"""

import logging
import math
import numbers
from typing import Any, Dict, Optional, Tuple

from .abstract_entity import AbstractEntity
from .config import DEFAULT_SETTINGS, Settings
from .enums import AssignmentStatus, CLOSED_STATUSES, GRADED_STATUSES, OUTSTANDING_STATUSES
from .grading import RandomGradeSource, average_grade
from .interfaces import AssignmentObserver, GradeSource, Scheduler, TimerHandle
from .scheduler import AsyncioScheduler

logger = logging.getLogger(__name__)


class Assignment(AbstractEntity):
    """A single per-student assignment instance holding status and grade."""

    def __init__(self, name: str, pass_threshold: float = DEFAULT_SETTINGS.pass_threshold, **kwargs):
        super().__init__(**kwargs)
        self._name = name
        self._status = AssignmentStatus.RELEASED
        self._grade: Optional[float] = None
        self._graded = False
        self._pending_timer: Optional[TimerHandle] = None
        self._pass_threshold = pass_threshold

    @property
    def name(self) -> str:
        return self._name

    @property
    def status(self) -> AssignmentStatus:
        return self._status

    @property
    def grade(self) -> Optional[float]:
        return self._grade

    @property
    def graded(self) -> bool:
        return self._graded

    @property
    def has_pending_timer(self) -> bool:
        return self._pending_timer is not None and not self._pending_timer.cancelled()

    def set_grade(self, grade: float) -> None:
        """Record a grade and derive pass/fail. Exactly the threshold fails."""
        self._grade = grade
        self._graded = True
        self._status = AssignmentStatus.PASS if grade > self._pass_threshold else AssignmentStatus.FAIL
        self.touch()

    def _set_status(self, status: AssignmentStatus) -> None:
        self._status = status
        self.touch()

    def _replace_timer(self, timer: Optional[TimerHandle]) -> None:
        self._cancel_timer()
        self._pending_timer = timer

    def _cancel_timer(self) -> None:
        if self._pending_timer is not None:
            self._pending_timer.cancel()
            self._pending_timer = None

    def _timer_fired(self, timer: TimerHandle) -> None:
        if self._pending_timer is timer:
            self._pending_timer = None

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            'name': self._name,
            'status': self._status.value,
            'grade': self._grade,
            'graded': self._graded,
        })
        return base_dict

    def __repr__(self) -> str:
        return f"Assignment(name={self._name!r}, status={self._status.value}, grade={self._grade})"


def _is_numeric_grade(grade: Any) -> bool:
    if isinstance(grade, bool) or not isinstance(grade, numbers.Real):
        return False
    return not math.isnan(grade)


class Student(AbstractEntity):
    """A student owning a collection of assignments.

    Every mutator creates the named assignment on first use (notifying that
    it was released) before applying its own transition. Auto-submit and
    auto-grade run later on the injected scheduler; both re-check status when
    they fire, so a late timer never produces a second submission or grade.
    """

    def __init__(self, full_name: str = "", email: str = "",
                 observer: Optional[AssignmentObserver] = None,
                 scheduler: Optional[Scheduler] = None,
                 grade_source: Optional[GradeSource] = None,
                 settings: Optional[Settings] = None, **kwargs):
        super().__init__(**kwargs)
        self._settings = settings or DEFAULT_SETTINGS
        self._full_name = full_name or ""
        self._email = email or ""
        self._observer = observer
        self._scheduler = scheduler or AsyncioScheduler(self._settings.time_unit_seconds)
        self._grade_source = grade_source or RandomGradeSource(
            self._settings.random_seed, self._settings.min_grade, self._settings.max_grade
        )
        # insertion order is first-touched order
        self._assignments: Dict[str, Assignment] = {}
        self._overall_grade: Optional[float] = None

    @property
    def full_name(self) -> str:
        return self._full_name

    @property
    def email(self) -> str:
        return self._email

    @property
    def observer(self) -> Optional[AssignmentObserver]:
        return self._observer

    @property
    def assignments(self) -> Tuple[Assignment, ...]:
        return tuple(self._assignments.values())

    @property
    def overall_grade(self) -> Optional[float]:
        return self._recalculate_overall_grade()

    def set_full_name(self, name: str) -> None:
        self._full_name = name
        self.touch()

    def set_email(self, email: str) -> None:
        self._email = email
        self.touch()

    def get_assignment(self, assignment_name: str) -> Optional[Assignment]:
        """Look up an assignment without creating it."""
        return self._assignments.get(assignment_name)

    def _ensure_assignment(self, assignment_name: str) -> Assignment:
        assignment = self._assignments.get(assignment_name)
        if assignment is None:
            assignment = Assignment(assignment_name, pass_threshold=self._settings.pass_threshold)
            self._assignments[assignment_name] = assignment
            self.touch()
            self._notify(assignment)
        return assignment

    def _notify(self, assignment: Assignment, is_reminder: bool = False) -> None:
        if self._observer is not None:
            self._observer.notify(self, assignment, is_reminder)

    def _recalculate_overall_grade(self) -> Optional[float]:
        self._overall_grade = average_grade(
            a.grade for a in self._assignments.values() if a.grade is not None
        )
        return self._overall_grade

    def update_assignment_status(self, assignment_name: str, grade: Any = None) -> None:
        """Create the assignment if needed and, given a numeric grade, grade it.

        Non-numeric grades are ignored, leaving a plain release.
        """
        assignment = self._ensure_assignment(assignment_name)

        if _is_numeric_grade(grade):
            assignment._cancel_timer()
            assignment.set_grade(grade)
            self._notify(assignment)
            self._recalculate_overall_grade()
        elif grade is not None:
            logger.debug("Ignoring non-numeric grade %r for %s/%s", grade, self._full_name, assignment_name)

    def get_assignment_status(self, assignment_name: str) -> AssignmentStatus:
        assignment = self._assignments.get(assignment_name)
        if assignment is None:
            return AssignmentStatus.NOT_ASSIGNED
        return assignment.status

    def start_working(self, assignment_name: str) -> None:
        """Move to working and schedule an automatic submission.

        The timer is scheduled before the status changes, so a scheduler
        failure leaves the assignment as it was.
        """
        assignment = self._ensure_assignment(assignment_name)

        if assignment.status in GRADED_STATUSES:
            logger.debug("%s/%s already graded, not reopening", self._full_name, assignment_name)
            return

        def auto_submit() -> None:
            assignment._timer_fired(timer)
            if assignment.status in OUTSTANDING_STATUSES:
                self.submit_assignment(assignment_name)
            else:
                logger.debug("Auto-submit skipped for %s/%s (%s)",
                             self._full_name, assignment_name, assignment.status.value)

        timer = self._scheduler.schedule(self._settings.auto_submit_delay, auto_submit,
                                         label=f"auto-submit:{self._full_name}:{assignment_name}")
        assignment._replace_timer(timer)
        assignment._set_status(AssignmentStatus.WORKING)
        self._notify(assignment)

    def submit_assignment(self, assignment_name: str) -> None:
        """Submit and schedule automatic grading. No-op once submitted or graded."""
        assignment = self._ensure_assignment(assignment_name)

        if assignment.status in CLOSED_STATUSES:
            return

        def auto_grade() -> None:
            assignment._timer_fired(timer)
            if assignment.graded or assignment.status != AssignmentStatus.SUBMITTED:
                logger.debug("Auto-grade skipped for %s/%s", self._full_name, assignment_name)
                return
            assignment.set_grade(self._grade_source.draw())
            self._notify(assignment)
            self._recalculate_overall_grade()

        timer = self._scheduler.schedule(self._settings.auto_grade_delay, auto_grade,
                                         label=f"auto-grade:{self._full_name}:{assignment_name}")
        assignment._replace_timer(timer)
        assignment._set_status(AssignmentStatus.SUBMITTED)
        self._notify(assignment)

    def mark_final_reminder(self, assignment_name: str) -> Optional[Assignment]:
        """Force the final-reminder state and drop any pending timer.

        Submitted or graded assignments are left alone and None is returned.
        Does not notify; the roster sends the reminder itself.
        """
        assignment = self._ensure_assignment(assignment_name)
        if assignment.status in CLOSED_STATUSES:
            logger.debug("%s/%s already %s, no reminder", self._full_name, assignment_name,
                         assignment.status.value)
            return None
        assignment._set_status(AssignmentStatus.FINAL_REMINDER)
        assignment._cancel_timer()
        return assignment

    def get_grade(self) -> Optional[float]:
        """Mean of all graded assignments, or None if nothing is graded."""
        return self._recalculate_overall_grade()

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            'full_name': self._full_name,
            'email': self._email,
            'overall_grade': self._recalculate_overall_grade(),
            'assignments': [a.to_dict() for a in self._assignments.values()],
        })
        return base_dict

    def __repr__(self) -> str:
        return f"Student(full_name={self._full_name!r}, assignments={len(self._assignments)})"
