"""
Exceptions raised by the planner export pipeline.

Derivation anomalies (an unrecognized term prefix, for instance) never raise;
these exceptions cover structural problems with the input data and failures
writing the output document.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ConverterError(Exception):
    """Base class for all planner export errors."""
    pass


class DataValidationError(ConverterError):
    """Raised when schedule data or a planner document fails validation."""

    def __init__(self, message: str, errors: Optional[list[str]] = None):
        super().__init__(message)
        self.errors = errors or [message]


class InvalidPeriodTime(ConverterError):
    """Raised when a period's start or end time is missing or not a time value."""

    def __init__(self, field: str, value: object, context: str = ""):
        self.field = field
        self.value = value
        self.context = context
        where = f" in {context}" if context else ""
        super().__init__(
            f"Period '{field}' must be a time or datetime{where}, got {value!r}"
        )


class ExportWriteFailed(ConverterError):
    """
    Raised when the exported document cannot be written to its destination.

    The destination is never left holding a partially written document.
    """

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to write {self.path}: {reason}")
