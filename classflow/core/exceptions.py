"""
Custom exceptions for the Classflow engine.
"""

from typing import Optional, Any, Dict


class ClassflowException(Exception):
    """Base exception for all Classflow-related errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(ClassflowException):
    """Raised when data validation fails."""
    pass


class ConfigurationError(ClassflowException):
    """Raised when configuration is invalid."""
    pass


class SchedulingError(ClassflowException):
    """Raised when a timer cannot be scheduled."""
    pass
