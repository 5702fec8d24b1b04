"""
Core interfaces and abstract base classes for the Classflow engine.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional


class NotificationSink(ABC):
    """Destination for plain text notification lines."""

    @abstractmethod
    def emit(self, message: str) -> None:
        """Write a single message line."""
        pass


class AssignmentObserver(ABC):
    """Interface for anything that wants to hear about assignment transitions."""

    @abstractmethod
    def notify(self, student: 'Student', assignment: 'Assignment', is_reminder: bool = False) -> None:
        """Called after an assignment changed state."""
        pass


class TimerHandle(ABC):
    """Handle to a deferred callback returned by a scheduler."""

    @abstractmethod
    def cancel(self) -> None:
        """Cancel the callback if it has not run yet."""
        pass

    @abstractmethod
    def cancelled(self) -> bool:
        """Whether the callback was cancelled."""
        pass


class Scheduler(ABC):
    """Abstract base class for deferred-callback timer facilities."""

    @abstractmethod
    def schedule(self, delay: float, callback: Callable[[], None], label: Optional[str] = None) -> TimerHandle:
        """Run ``callback`` once after ``delay`` logical time units."""
        pass


class GradeSource(ABC):
    """Source of synthetic grades used by auto-grading."""

    @abstractmethod
    def draw(self) -> int:
        """Return one grade."""
        pass
