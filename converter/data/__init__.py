"""Schedule data models and loading utilities."""

from .models import (
    DayOfWeek,
    Period,
    Section,
    Course,
    Department,
    ScheduleDatabase,
    extract_term_letter,
    format_term_name,
    is_valid_term_letter,
)
from .loader import (
    load_schedule_database,
    parse_schedule_database,
    load_planner_document,
    validate_planner_document,
    find_consistency_warnings,
)

__all__ = [
    # Models
    "DayOfWeek",
    "Period",
    "Section",
    "Course",
    "Department",
    "ScheduleDatabase",
    # Term helpers
    "extract_term_letter",
    "format_term_name",
    "is_valid_term_letter",
    # Loader
    "load_schedule_database",
    "parse_schedule_database",
    "load_planner_document",
    "validate_planner_document",
    "find_consistency_warnings",
]
