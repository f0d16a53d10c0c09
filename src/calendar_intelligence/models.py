"""
Data model for calendar intelligence

Events are the read-only input; everything else is a derived value object
computed on demand and discarded after use.
"""

import hashlib
from dataclasses import dataclass
from datetime import datetime, tzinfo
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .config import DEFAULT_CONFIG, EngineConfig

# Format used by ICS calendar APIs for event times
ICS_TIME_FORMAT = '%Y-%m-%d %H:%M'


def weekday_index(dt: datetime) -> int:
    """Weekday of ``dt`` numbered 1=Sunday through 7=Saturday."""
    return (dt.weekday() + 1) % 7 + 1


def _parse_ics_time(value: Any, name: str) -> datetime:
    if not isinstance(value, str) or not value:
        raise ValueError(f"'{name}' must be a non-empty string, got {value!r}")
    return datetime.strptime(value, ICS_TIME_FORMAT)


@dataclass(frozen=True)
class Event:
    """A calendar event as supplied by a calendar source."""
    id: str
    title: str
    start: datetime
    end: datetime
    location: Optional[str] = None
    attendees: Tuple[str, ...] = ()
    source: str = "local"

    @property
    def duration(self) -> float:
        """Length of the event in seconds."""
        return (self.end - self.start).total_seconds()

    @property
    def identity(self) -> Tuple[str, str]:
        """Identifiers are only unique within a source."""
        return (self.source, self.id)

    def overlaps(self, start: datetime, end: datetime) -> bool:
        """Check if this event intersects the half-open range [start, end)."""
        return self.start < end and self.end > start

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        source: str = "ics",
        tz: Optional[tzinfo] = None
    ) -> 'Event':
        """
        Build an Event from an ICS API event dictionary.

        Args:
            data: Dictionary with 'summary', 'start', 'end' (YYYY-MM-DD HH:MM)
                and optional 'uid', 'location', 'attendees'
            source: Source tag for the calendar the event came from
            tz: Timezone the API times are expressed in

        Returns:
            Event instance

        Raises:
            ValueError: If the start or end time is missing, not a string or cannot be parsed
        """
        title = data.get('summary') or 'Untitled Event'
        start_raw = data.get('start')
        start = _parse_ics_time(start_raw, 'start')
        end_raw = data.get('end')
        end = start if end_raw in (None, '') else _parse_ics_time(end_raw, 'end')

        if tz is not None:
            start = start.replace(tzinfo=tz)
            end = end.replace(tzinfo=tz)

        event_id = data.get('uid')
        if not event_id:
            digest = hashlib.sha1(f"{title}|{start_raw}".encode('utf-8'))
            event_id = digest.hexdigest()[:16]

        return cls(
            id=str(event_id),
            title=title,
            start=start,
            end=end,
            location=data.get('location') or None,
            attendees=tuple(data.get('attendees') or ()),
            source=source,
        )


class PatternConfidence(Enum):
    """How reliable derived calendar patterns are, by sample size."""
    NONE = "none"      # 0-2 events
    LOW = "low"        # 3-9 events
    MEDIUM = "medium"  # 10-29 events
    HIGH = "high"      # 30+ events

    @classmethod
    def for_count(cls, count: int, config: EngineConfig = DEFAULT_CONFIG) -> 'PatternConfidence':
        if count >= config.high_confidence_min_events:
            return cls.HIGH
        if count >= config.medium_confidence_min_events:
            return cls.MEDIUM
        if count >= config.low_confidence_min_events:
            return cls.LOW
        return cls.NONE

    @property
    def description(self) -> str:
        return _CONFIDENCE_DESCRIPTIONS[self]


_CONFIDENCE_DESCRIPTIONS = {
    PatternConfidence.NONE: "No pattern data yet",
    PatternConfidence.LOW: "Limited pattern data",
    PatternConfidence.MEDIUM: "Moderate pattern confidence",
    PatternConfidence.HIGH: "High pattern confidence",
}


@dataclass(frozen=True)
class CalendarPatterns:
    """Scheduling habits derived from recent events."""
    preferred_hours: Tuple[int, ...]
    average_gap_between_meetings: float
    typical_meeting_duration: float
    busiest_days: Tuple[int, ...]
    quietest_days: Tuple[int, ...]
    has_lunch_pattern: bool
    lunch_hour_range: Optional[Tuple[int, int]]
    confidence: PatternConfidence
    event_count: int

    def is_lunch_hour(self, hour: int) -> bool:
        if self.lunch_hour_range is None:
            return False
        low, high = self.lunch_hour_range
        return low <= hour <= high


@dataclass(frozen=True)
class SchedulingSuggestion:
    """A proposed start time with its justification."""
    suggested_time: datetime
    confidence: float
    reasons: Tuple[str, ...]
    alternatives: Tuple[datetime, ...] = ()
    warnings: Optional[Tuple[str, ...]] = None


class MatchType(Enum):
    """How confidently two events are believed to be the same occurrence."""
    EXACT = "exact"        # Same title, time and location
    STRONG = "strong"      # Same title, overlapping time
    MODERATE = "moderate"  # Similar title, close start times
    WEAK = "weak"          # Similar title only (never produced)


@dataclass(frozen=True)
class DuplicateGroup:
    """Events believed to represent one real-world occurrence."""
    events: List[Event]
    match_type: MatchType
    confidence: float

    @property
    def primary_event(self) -> Event:
        return self.events[0]

    @property
    def duplicates(self) -> List[Event]:
        return self.events[1:]

    @property
    def sources(self) -> List[str]:
        """Distinct calendar sources in the group, in first-seen order."""
        seen = []
        for event in self.events:
            if event.source not in seen:
                seen.append(event.source)
        return seen

    @property
    def is_cross_calendar(self) -> bool:
        return len(self.sources) > 1
