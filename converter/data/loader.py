"""Load and validate schedule databases and planner documents from JSON files."""

from __future__ import annotations

import json
import re
from collections import Counter
from datetime import datetime, time
from pathlib import Path
from typing import Any, Union

from pydantic import ValidationError

from converter.exceptions import DataValidationError
from .models import DayOfWeek, ScheduleDatabase, is_valid_term_letter
from converter.output.schema import PlannerDocument


DAY_ORDER = [day.value for day in DayOfWeek]
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

# Derived on load, so dumps that include it are accepted
_DERIVED_SECTION_KEYS = ("computed_term",)


def load_schedule_database(path: Union[str, Path]) -> ScheduleDatabase:
    """
    Load a schedule database from a JSON dump.

    Keys may be snake_case or camelCase. Period times may be 'HH:MM' strings
    or ISO datetimes.

    Args:
        path: Path to the JSON file

    Returns:
        Validated ScheduleDatabase

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file isn't valid JSON
        DataValidationError: If the data doesn't match the model
    """
    path = Path(path)

    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    return parse_schedule_database(data)


def parse_schedule_database(data: Any) -> ScheduleDatabase:
    """Validate an already-decoded JSON dump into a ScheduleDatabase."""
    converted = _convert_keys_to_snake_case(data)

    if isinstance(converted, dict):
        for department in converted.get("departments") or []:
            for course in _children(department, "courses"):
                for section in _children(course, "sections"):
                    for key in _DERIVED_SECTION_KEYS:
                        section.pop(key, None)

    try:
        return ScheduleDatabase.model_validate(converted)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise DataValidationError("; ".join(errors), errors) from e


def load_planner_document(path: Union[str, Path]) -> PlannerDocument:
    """
    Load and validate an exported planner document.

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file isn't valid JSON
        DataValidationError: If the document breaks the planner contract
    """
    path = Path(path)

    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    return validate_planner_document(data)


def validate_planner_document(data: Any) -> PlannerDocument:
    """
    Validate planner document structure and derived fields.

    Args:
        data: Decoded planner document

    Returns:
        The validated PlannerDocument

    Raises:
        DataValidationError: If validation fails
    """
    try:
        document = PlannerDocument.model_validate(data)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise DataValidationError("; ".join(errors), errors) from e

    errors = []

    for dept in document.departments:
        for course in dept.courses:
            where = f"{dept.abbreviation} {course.number}"
            if course.id != course.number:
                errors.append(f"Course {where} has id '{course.id}' different from number")

            for section in course.sections:
                sec_where = f"{where} section {section.number}"
                if not is_valid_term_letter(section.computed_term):
                    errors.append(f"Section {sec_where} has invalid computedTerm '{section.computed_term}'")

                for i, period in enumerate(section.periods):
                    per_where = f"{sec_where} period {i}"
                    for name in ("start_time", "end_time"):
                        value = getattr(period, name)
                        if not TIME_PATTERN.match(value):
                            errors.append(f"Period {per_where} has invalid {name} '{value}'")

                    if period.location != f"{period.building} {period.room}":
                        errors.append(f"Period {per_where} location does not match building and room")

                    unknown = [d for d in period.days if d not in DAY_ORDER]
                    if unknown:
                        errors.append(f"Period {per_where} has unknown days: {', '.join(unknown)}")
                    elif period.days != sorted(set(period.days), key=DAY_ORDER.index):
                        errors.append(f"Period {per_where} days are not in Monday-Friday order")

    if errors:
        raise DataValidationError("; ".join(errors), errors)

    return document


def find_consistency_warnings(database: ScheduleDatabase) -> list[str]:
    """
    Report data problems that don't stop an export.

    Returns:
        Human-readable warnings, in traversal order
    """
    warnings = []

    abbrev_counts = Counter(d.abbreviation for d in database.departments)
    for abbrev, count in abbrev_counts.items():
        if count > 1:
            warnings.append(f"Duplicate department abbreviation: {abbrev} ({count} times)")

    seen_crns: set[int] = set()
    for dept in database.departments:
        for course in dept.courses:
            if course.min_credits > course.max_credits:
                warnings.append(
                    f"Course {course.number} has min_credits ({course.min_credits}) "
                    f"greater than max_credits ({course.max_credits})"
                )

            for section in course.sections:
                if section.crn in seen_crns:
                    warnings.append(f"Duplicate CRN: {section.crn}")
                seen_crns.add(section.crn)

                if section.available_seats > section.seats:
                    warnings.append(
                        f"Section {course.number} {section.number} has more available seats "
                        f"({section.available_seats}) than seats ({section.seats})"
                    )

                for period in section.periods:
                    if period.starts is None or period.ends is None:
                        warnings.append(
                            f"Section {course.number} {section.number} has a period without times"
                        )
                    elif _time_of(period.starts) > _time_of(period.ends):
                        warnings.append(
                            f"Section {course.number} {section.number} has a period ending before it starts"
                        )

    return warnings


def _time_of(value: Any) -> time:
    # Wall-clock comparison; offsets are dropped so naive and aware values compare.
    if isinstance(value, datetime):
        value = value.time()
    return value.replace(tzinfo=None)


def _children(obj: Any, key: str) -> list:
    if isinstance(obj, dict) and isinstance(obj.get(key), list):
        return [item for item in obj[key] if isinstance(item, dict)]
    return []


def _convert_keys_to_snake_case(obj: Any) -> Any:
    """Recursively convert dictionary keys from camelCase to snake_case."""

    def to_snake_case(name: str) -> str:
        name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)
        name = re.sub(r'([a-z\d])([A-Z])', r'\1_\2', name)
        return name.lower()

    if isinstance(obj, dict):
        return {to_snake_case(k): _convert_keys_to_snake_case(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_convert_keys_to_snake_case(item) for item in obj]
    else:
        return obj
