"""
Pydantic models for the academic schedule hierarchy.

The hierarchy is a strict tree:

    ScheduleDatabase -> Department -> Course -> Section -> Period

Every parent owns its children in insertion order and nothing is shared
between parents. Models are populated once by the scraping stage and only
read while exporting.

Term conventions:
- Section numbers start with the academic term letter ("A01", "DL08/DD08/DX10")
- Only the letters A-D are terms; anything else falls back to "A"
"""

from __future__ import annotations

from datetime import datetime, time
from enum import Enum
from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
)


# =============================================================================
# Constants and Enums
# =============================================================================

class DayOfWeek(str, Enum):
    """Day codes understood by the planner, Monday through Friday."""
    MONDAY = "mon"
    TUESDAY = "tue"
    WEDNESDAY = "wed"
    THURSDAY = "thu"
    FRIDAY = "fri"


TERM_LETTERS = ("A", "B", "C", "D")
DEFAULT_TERM_LETTER = "A"

# Period attribute name for each day code, in canonical order
WEEKDAY_FLAGS: tuple[tuple[str, DayOfWeek], ...] = (
    ("monday", DayOfWeek.MONDAY),
    ("tuesday", DayOfWeek.TUESDAY),
    ("wednesday", DayOfWeek.WEDNESDAY),
    ("thursday", DayOfWeek.THURSDAY),
    ("friday", DayOfWeek.FRIDAY),
)

TimeOfDay = Union[datetime, time]


# =============================================================================
# Term Helpers
# =============================================================================

def extract_term_letter(section_number: Optional[str]) -> str:
    """
    Get the academic term letter from a section number.

    Only the first character is inspected. Section numbers that are empty
    or start with anything other than A-D resolve to "A" rather than raising.

    Examples:
        >>> extract_term_letter("A01")
        'A'
        >>> extract_term_letter("b02")
        'B'
        >>> extract_term_letter("DL08/DD08/DX10")
        'D'
        >>> extract_term_letter("X99")
        'A'
    """
    if not section_number:
        return DEFAULT_TERM_LETTER

    first = section_number[0].upper()
    if first in TERM_LETTERS:
        return first
    return DEFAULT_TERM_LETTER


def format_term_name(term_letter: str) -> str:
    """Format a term letter for display, e.g. 'c' -> 'C Term'."""
    normalized = term_letter.strip().upper()
    if normalized in TERM_LETTERS:
        return f"{normalized} Term"
    return f"{term_letter.upper()} Term"


def is_valid_term_letter(value: Any) -> bool:
    """Check whether a value is a single A-D term letter (case-insensitive)."""
    if not isinstance(value, str):
        return False
    value = value.strip().upper()
    return len(value) == 1 and value in TERM_LETTERS


# =============================================================================
# Core Entity Models
# =============================================================================

class Period(BaseModel):
    """One recurring weekly meeting of a section (lecture, lab, ...)."""
    model_config = ConfigDict(extra="forbid")

    type: str = Field(default="", description="Meeting type, e.g. 'Lecture'")
    professor: str = Field(default="", description="Instructor display name")
    starts: Optional[TimeOfDay] = Field(default=None, description="Start time; only the time of day is used")
    ends: Optional[TimeOfDay] = Field(default=None, description="End time; only the time of day is used")
    building: str = Field(default="", description="Building name")
    room: str = Field(default="", description="Room number")
    seats: int = Field(default=0, description="Seats in this meeting")
    available_seats: int = Field(default=0, description="Open seats in this meeting")
    max_waitlist: int = Field(default=0, description="Waitlist capacity")
    actual_waitlist: int = Field(default=0, description="Students on the waitlist")
    specific_section: str = Field(default="", description="Section code this meeting belongs to")
    monday: bool = False
    tuesday: bool = False
    wednesday: bool = False
    thursday: bool = False
    friday: bool = False

    @property
    def day_codes(self) -> list[str]:
        """Day codes for the days this period meets, Monday first."""
        return [code.value for flag, code in WEEKDAY_FLAGS if getattr(self, flag)]

    @property
    def location(self) -> str:
        return f"{self.building} {self.room}"

    def __str__(self) -> str:
        days = ",".join(self.day_codes) or "-"
        return f"{self.type} {days} @ {self.location}"


class Section(BaseModel):
    """A specific offering of a course."""
    model_config = ConfigDict(extra="forbid")

    crn: int = Field(description="Course registration number")
    number: str = Field(description="Section code, e.g. 'A01' or 'DL08/DD08/DX10'")
    seats: int = Field(default=0, description="Total seats")
    available_seats: int = Field(default=0, description="Open seats")
    max_waitlist: int = Field(default=0, description="Waitlist capacity")
    actual_waitlist: int = Field(default=0, description="Students on the waitlist")
    term: str = Field(default="", description="Raw term code, e.g. '202201'")
    part_of_term: str = Field(default="", description="Descriptive term, e.g. 'A Term'")
    note: Optional[str] = Field(default=None, description="Registration note")
    description: Optional[str] = Field(default=None, description="Section description")
    is_gps: bool = Field(default=False, description="Great Problems Seminar section")
    is_interest_list: bool = Field(default=False, description="Registration by interest list")
    periods: list[Period] = Field(default_factory=list, description="Meetings in stored order")

    @computed_field  # type: ignore[misc]
    @property
    def computed_term(self) -> str:
        """Academic term letter (A-D) derived from the section number."""
        return extract_term_letter(self.number)

    def __str__(self) -> str:
        return f"{self.number} (CRN {self.crn})"


class Course(BaseModel):
    """A catalog course."""
    model_config = ConfigDict(extra="forbid")

    number: str = Field(min_length=1, description="Catalog number, e.g. 'CS 1101'")
    name: str = Field(description="Course title")
    description: Optional[str] = Field(default=None, description="Catalog description")
    min_credits: float = Field(default=0, ge=0, description="Minimum credits")
    max_credits: float = Field(default=0, ge=0, description="Maximum credits")
    sections: list[Section] = Field(default_factory=list, description="Sections in stored order")

    def __str__(self) -> str:
        return f"{self.number} {self.name}"


class Department(BaseModel):
    """An academic department."""
    model_config = ConfigDict(extra="forbid")

    abbreviation: str = Field(min_length=1, description="Short code, e.g. 'CS'")
    name: str = Field(description="Full department name")
    courses: list[Course] = Field(default_factory=list, description="Courses in stored order")

    def __str__(self) -> str:
        return f"{self.name} ({self.abbreviation})"


class ScheduleDatabase(BaseModel):
    """
    Root of the schedule hierarchy.

    ``generated`` is supplied by whoever built the database so that exporting
    the same tree twice yields identical documents.
    """
    model_config = ConfigDict(extra="forbid")

    generated: datetime = Field(description="When the source data was collected")
    departments: list[Department] = Field(default_factory=list, description="Departments in stored order")

    def iter_sections(self):
        """Yield (department, course, section) for every section in traversal order."""
        for department in self.departments:
            for course in department.courses:
                for section in course.sections:
                    yield department, course, section

    def summary(self) -> dict[str, Any]:
        """Get entity counts for the database."""
        courses = sum(len(d.courses) for d in self.departments)
        sections = 0
        periods = 0
        for _, _, section in self.iter_sections():
            sections += 1
            periods += len(section.periods)
        return {
            "generated": self.generated.isoformat(),
            "departments": len(self.departments),
            "courses": courses,
            "sections": sections,
            "periods": periods,
        }
