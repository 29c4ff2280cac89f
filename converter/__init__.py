"""Planner Export - academic schedule to planner course-data conversion."""

from .data.models import (
    Course,
    Department,
    Period,
    ScheduleDatabase,
    Section,
    extract_term_letter,
)
from .exporter import ExportResult, ScheduleExporter, export_schedule
from .exceptions import (
    ConverterError,
    DataValidationError,
    ExportWriteFailed,
    InvalidPeriodTime,
)

__all__ = [
    # Models
    "ScheduleDatabase",
    "Department",
    "Course",
    "Section",
    "Period",
    "extract_term_letter",
    # Export
    "ScheduleExporter",
    "ExportResult",
    "export_schedule",
    # Errors
    "ConverterError",
    "DataValidationError",
    "ExportWriteFailed",
    "InvalidPeriodTime",
]
