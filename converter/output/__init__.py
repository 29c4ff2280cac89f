"""Planner document schema and formatting."""

from .schema import (
    PeriodOutput,
    SectionOutput,
    CourseOutput,
    DepartmentOutput,
    PlannerDocument,
    create_planner_document,
    database_to_json,
    database_to_dict,
    format_time_of_day,
    collapse_days,
)
from .formatters import (
    JSONFormatter,
    ConsoleFormatter,
    format_json,
    format_console,
    save_json,
    write_text_atomic,
)

__all__ = [
    # Schema models
    "PeriodOutput",
    "SectionOutput",
    "CourseOutput",
    "DepartmentOutput",
    "PlannerDocument",
    # Conversion functions
    "create_planner_document",
    "database_to_json",
    "database_to_dict",
    "format_time_of_day",
    "collapse_days",
    # Formatters
    "JSONFormatter",
    "ConsoleFormatter",
    "format_json",
    "format_console",
    # File utilities
    "save_json",
    "write_text_atomic",
]
