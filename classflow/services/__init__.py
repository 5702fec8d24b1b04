"""
Services module containing the roster and notification components.
"""

from .class_list import ClassList
from .notification_service import (
    ConsoleSink,
    LoggingSink,
    MemorySink,
    Notification,
    Observer,
    RecordingObserver,
    format_notification,
)

__all__ = [
    "ClassList",
    "ConsoleSink",
    "LoggingSink",
    "MemorySink",
    "Notification",
    "Observer",
    "RecordingObserver",
    "format_notification",
]
