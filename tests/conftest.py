"""
Pytest fixtures for calendar intelligence testing.

Provides:
- Fixed reference dates (a Monday and a Saturday in March 2024)
- An event factory with unique ids
- Engine components built from the default config
"""

import itertools
from datetime import datetime, timedelta

import pytest

from calendar_intelligence import (
    ConflictDetector,
    DuplicateDetector,
    Event,
    PatternAnalyzer,
    TimeSlotScheduler,
)

# 2024-03-04 is a Monday, 2024-03-09 a Saturday
MONDAY = datetime(2024, 3, 4)
SATURDAY = datetime(2024, 3, 9)


def at(day: datetime, hour: int, minute: int = 0) -> datetime:
    """Return ``day`` at the given wall-clock time."""
    return day.replace(hour=hour, minute=minute, second=0, microsecond=0)


# =============================================================================
# EVENT FIXTURES
# =============================================================================

@pytest.fixture
def make_event():
    """Factory for events with unique ids; duration defaults to 30 minutes."""
    counter = itertools.count(1)

    def _make(
        title="Meeting",
        start=None,
        end=None,
        minutes=30,
        location=None,
        source="local",
        event_id=None,
        attendees=(),
    ):
        start = start or at(MONDAY, 9)
        end = end or start + timedelta(minutes=minutes)
        return Event(
            id=event_id or f"evt-{next(counter)}",
            title=title,
            start=start,
            end=end,
            location=location,
            attendees=tuple(attendees),
            source=source,
        )

    return _make


@pytest.fixture
def past_events(make_event):
    """Factory for ``count`` hourly events ending before ``now``."""
    def _make(count, now):
        return [
            make_event(title=f"Past {i}", start=now - timedelta(hours=i + 1))
            for i in range(count)
        ]

    return _make


# =============================================================================
# COMPONENT FIXTURES
# =============================================================================

@pytest.fixture
def pattern_analyzer():
    return PatternAnalyzer()


@pytest.fixture
def scheduler():
    return TimeSlotScheduler(timezone="America/New_York")


@pytest.fixture
def conflict_detector():
    return ConflictDetector()


@pytest.fixture
def duplicate_detector():
    return DuplicateDetector()
