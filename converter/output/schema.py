"""
Output schema for the planner course-data document.

This module defines the JSON document consumed by the scheduling planner and
the conversion from the schedule models. Key names are part of the planner's
contract: they are snake_case except for ``computedTerm``.
"""

from __future__ import annotations

from datetime import datetime, time
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from converter.data.models import (
    Course,
    Department,
    Period,
    ScheduleDatabase,
    Section,
)
from converter.exceptions import InvalidPeriodTime


# =============================================================================
# Field Helpers
# =============================================================================

def format_time_of_day(value: Any, field: str = "time", context: str = "") -> str:
    """
    Format the time-of-day part of a time or datetime as 'HH:MM' (24-hour).

    Args:
        value: A datetime.time or datetime.datetime; any date part is dropped
        field: Field name used in the error message
        context: Where the value came from, used in the error message

    Returns:
        Zero-padded time string, e.g. '09:05'

    Raises:
        InvalidPeriodTime: If value is None or not a time value
    """
    if isinstance(value, datetime):
        value = value.time()
    if not isinstance(value, time):
        raise InvalidPeriodTime(field, value, context)
    return f"{value.hour:02d}:{value.minute:02d}"


def collapse_days(period: Period) -> list[str]:
    """Collapse the weekday flags of a period into ordered day codes."""
    return period.day_codes


# =============================================================================
# Period Output
# =============================================================================

class PeriodOutput(BaseModel):
    """A single meeting in the output."""
    type: str
    professor: str
    start_time: str = Field(pattern=r"^\d{2}:\d{2}$")
    end_time: str = Field(pattern=r"^\d{2}:\d{2}$")
    location: str
    building: str
    room: str
    seats: int
    seats_available: int
    actual_waitlist: int
    max_waitlist: int
    specific_section: str
    days: list[str]

    @classmethod
    def from_period(cls, period: Period, context: str = "") -> PeriodOutput:
        """Create from a Period."""
        return cls(
            type=period.type,
            professor=period.professor,
            start_time=format_time_of_day(period.starts, "starts", context),
            end_time=format_time_of_day(period.ends, "ends", context),
            location=period.location,
            building=period.building,
            room=period.room,
            seats=period.seats,
            seats_available=period.available_seats,
            actual_waitlist=period.actual_waitlist,
            max_waitlist=period.max_waitlist,
            specific_section=period.specific_section,
            days=collapse_days(period),
        )


# =============================================================================
# Section Output
# =============================================================================

class SectionOutput(BaseModel):
    """A section with its meetings."""
    crn: int
    number: str
    seats: int
    seats_available: int
    actual_waitlist: int
    max_waitlist: int
    note: Optional[str]
    description: Optional[str]
    term: str
    computed_term: str = Field(alias="computedTerm")
    is_gps: bool
    is_interest_list: bool
    periods: list[PeriodOutput]

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_section(cls, section: Section, context: str = "") -> SectionOutput:
        """Create from a Section, converting its periods in order."""
        where = f"{context} section {section.number}".strip()
        return cls(
            crn=section.crn,
            number=section.number,
            seats=section.seats,
            seats_available=section.available_seats,
            actual_waitlist=section.actual_waitlist,
            max_waitlist=section.max_waitlist,
            note=section.note,
            description=section.description,
            term=section.term,
            computedTerm=section.computed_term,
            is_gps=section.is_gps,
            is_interest_list=section.is_interest_list,
            periods=[PeriodOutput.from_period(p, where) for p in section.periods],
        )


# =============================================================================
# Course / Department Output
# =============================================================================

class CourseOutput(BaseModel):
    """A course with its sections. ``id`` repeats ``number`` for the planner."""
    id: str
    number: str
    name: str
    description: Optional[str]
    min_credits: float
    max_credits: float
    sections: list[SectionOutput]

    @classmethod
    def from_course(cls, course: Course) -> CourseOutput:
        """Create from a Course."""
        return cls(
            id=course.number,
            number=course.number,
            name=course.name,
            description=course.description,
            min_credits=course.min_credits,
            max_credits=course.max_credits,
            sections=[SectionOutput.from_section(s, course.number) for s in course.sections],
        )


class DepartmentOutput(BaseModel):
    """A department with its courses."""
    abbreviation: str
    name: str
    courses: list[CourseOutput]

    @classmethod
    def from_department(cls, department: Department) -> DepartmentOutput:
        """Create from a Department."""
        return cls(
            abbreviation=department.abbreviation,
            name=department.name,
            courses=[CourseOutput.from_course(c) for c in department.courses],
        )


# =============================================================================
# Complete Document
# =============================================================================

class PlannerDocument(BaseModel):
    """Complete course-data document for the planner."""
    generated: str
    departments: list[DepartmentOutput]

    model_config = ConfigDict(populate_by_name=True)

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize to JSON string (compact when indent is None)."""
        return self.model_dump_json(by_alias=True, indent=indent)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return self.model_dump(by_alias=True)

    def counts(self) -> dict[str, int]:
        """Count the entities in the document."""
        courses = [c for d in self.departments for c in d.courses]
        sections = [s for c in courses for s in c.sections]
        return {
            "departments": len(self.departments),
            "courses": len(courses),
            "sections": len(sections),
            "periods": sum(len(s.periods) for s in sections),
        }


# =============================================================================
# Conversion Functions
# =============================================================================

def create_planner_document(database: ScheduleDatabase) -> PlannerDocument:
    """
    Create a PlannerDocument from a ScheduleDatabase.

    Departments, courses, sections and periods keep their stored order and
    nothing is filtered out.

    Args:
        database: Populated schedule database

    Returns:
        PlannerDocument mirroring the database

    Raises:
        InvalidPeriodTime: If any period is missing a start or end time
    """
    return PlannerDocument(
        generated=database.generated.isoformat(),
        departments=[DepartmentOutput.from_department(d) for d in database.departments],
    )


def database_to_json(database: ScheduleDatabase, indent: Optional[int] = None) -> str:
    """Convert a ScheduleDatabase directly to a JSON string."""
    return create_planner_document(database).to_json(indent=indent)


def database_to_dict(database: ScheduleDatabase) -> dict[str, Any]:
    """Convert a ScheduleDatabase directly to a dictionary."""
    return create_planner_document(database).to_dict()
