"""
Core module containing the assignment state machine and its seams.
"""

from .config import Settings, DEFAULT_SETTINGS, load_settings
from .abstract_entity import AbstractEntity
from .entities import Assignment, Student
from .enums import AssignmentStatus, CLOSED_STATUSES, GRADED_STATUSES, OUTSTANDING_STATUSES
from .exceptions import ClassflowException, ConfigurationError, SchedulingError, ValidationError
from .grading import RandomGradeSource, average_grade
from .interfaces import AssignmentObserver, GradeSource, NotificationSink, Scheduler, TimerHandle
from .scheduler import AsyncioScheduler, VirtualScheduler

__all__ = [
    # Entities
    "AbstractEntity",
    "Assignment",
    "Student",

    # Interfaces
    "AssignmentObserver",
    "GradeSource",
    "NotificationSink",
    "Scheduler",
    "TimerHandle",

    # Implementations
    "AsyncioScheduler",
    "VirtualScheduler",
    "RandomGradeSource",
    "average_grade",

    # Configuration
    "Settings",
    "DEFAULT_SETTINGS",
    "load_settings",

    # Enums
    "AssignmentStatus",
    "CLOSED_STATUSES",
    "GRADED_STATUSES",
    "OUTSTANDING_STATUSES",

    # Exceptions
    "ClassflowException",
    "ConfigurationError",
    "SchedulingError",
    "ValidationError",
]
