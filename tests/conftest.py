"""Shared fixtures for planner export tests."""

from __future__ import annotations

from datetime import datetime, time

import pytest

from converter.config import get_settings
from converter.data.models import (
    Course,
    Department,
    Period,
    ScheduleDatabase,
    Section,
)


GENERATED = datetime(2025, 1, 6, 12, 30)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; reset between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def lecture() -> Period:
    """Monday/Wednesday/Friday lecture."""
    return Period(
        type="Lecture",
        professor="Jane Doe",
        starts=time(9, 0),
        ends=time(9, 50),
        building="Fuller Labs",
        room="320",
        seats=150,
        available_seats=12,
        max_waitlist=10,
        actual_waitlist=0,
        specific_section="AL01",
        monday=True,
        wednesday=True,
        friday=True,
    )


@pytest.fixture
def lab() -> Period:
    """Wednesday/Friday lab using full datetimes."""
    return Period(
        type="Lab",
        professor="John Roe",
        starts=datetime(2025, 1, 8, 14, 0),
        ends=datetime(2025, 1, 8, 15, 50),
        building="Salisbury Labs",
        room="104",
        seats=25,
        available_seats=3,
        specific_section="AX01",
        wednesday=True,
        friday=True,
    )


@pytest.fixture
def sample_database(lecture, lab) -> ScheduleDatabase:
    """Two departments: CS with three courses, MA with one."""
    cs_courses = [
        Course(
            number="CS 1101",
            name="Introduction to Program Design",
            description="Fundamentals of programming.",
            min_credits=1,
            max_credits=1,
            sections=[
                Section(
                    crn=10001,
                    number="A01",
                    seats=150,
                    available_seats=12,
                    max_waitlist=10,
                    actual_waitlist=0,
                    term="202501",
                    part_of_term="A Term",
                    periods=[lecture, lab],
                ),
                Section(
                    crn=10002,
                    number="b02",
                    seats=40,
                    available_seats=40,
                    term="202501",
                    part_of_term="B Term",
                    note="Honors section",
                ),
            ],
        ),
        Course(
            number="CS 2102",
            name="Object-Oriented Design Concepts",
            min_credits=1,
            max_credits=1,
            sections=[
                Section(crn=10003, number="DL08/DD08/DX10", term="202501", part_of_term="D Term"),
            ],
        ),
        Course(number="CS 4099", name="Independent Study", min_credits=0, max_credits=3),
    ]

    ma_courses = [
        Course(
            number="MA 1021",
            name="Calculus I",
            min_credits=1,
            max_credits=1,
            sections=[
                Section(crn=20001, number="X99", term="202501", is_gps=True),
            ],
        ),
    ]

    return ScheduleDatabase(
        generated=GENERATED,
        departments=[
            Department(abbreviation="CS", name="Computer Science", courses=cs_courses),
            Department(abbreviation="MA", name="Mathematical Sciences", courses=ma_courses),
        ],
    )


@pytest.fixture
def sample_dump() -> dict:
    """Schedule database dump as written by the scraper (camelCase keys)."""
    return {
        "generated": "2025-01-06T12:30:00",
        "departments": [
            {
                "abbreviation": "CS",
                "name": "Computer Science",
                "courses": [
                    {
                        "number": "CS 1101",
                        "name": "Introduction to Program Design",
                        "description": None,
                        "minCredits": 1,
                        "maxCredits": 1,
                        "sections": [
                            {
                                "crn": 10001,
                                "number": "A01",
                                "seats": 150,
                                "availableSeats": 12,
                                "maxWaitlist": 10,
                                "actualWaitlist": 0,
                                "term": "202501",
                                "partOfTerm": "A Term",
                                "isGPS": False,
                                "isInterestList": True,
                                "computedTerm": "A",
                                "periods": [
                                    {
                                        "type": "Lecture",
                                        "professor": "Jane Doe",
                                        "starts": "09:00",
                                        "ends": "2025-01-06T09:50:00",
                                        "building": "Fuller Labs",
                                        "room": "320",
                                        "seats": 150,
                                        "availableSeats": 12,
                                        "specificSection": "AL01",
                                        "monday": True,
                                        "thursday": True,
                                    }
                                ],
                            }
                        ],
                    }
                ],
            }
        ],
    }
