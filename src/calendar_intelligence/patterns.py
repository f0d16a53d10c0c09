"""
Pattern Analyzer - Derives scheduling habits from recent calendar events

Looks back over a trailing window (30 days by default) and summarizes:
- Preferred meeting hours
- Typical gap between meetings and typical meeting length
- Busiest and quietest weekdays
- Whether the user tends to hold lunch-hour meetings

Every statistic has a minimum sample size. Below it, a fixed default that
approximates generic office-hours behavior is used instead.
"""

import logging
from collections import Counter
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple

from .config import DEFAULT_CONFIG, EngineConfig
from .models import CalendarPatterns, Event, PatternConfidence, weekday_index

logger = logging.getLogger(__name__)


def current_time(reference: Optional[datetime] = None) -> datetime:
    """
    Current time, aware or naive to match ``reference``.

    Comparing naive and aware datetimes raises, so "now" follows whatever
    convention the caller's events use.
    """
    if reference is not None and reference.tzinfo is not None:
        return datetime.now(reference.tzinfo)
    return datetime.now()


class PatternAnalyzer:
    """
    Computes CalendarPatterns from a list of events.

    Usage:
        analyzer = PatternAnalyzer()
        patterns = analyzer.analyze(events)
        print(patterns.preferred_hours, patterns.confidence.description)
    """

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG):
        self.config = config

    def analyze(self, events: Sequence[Event], now: Optional[datetime] = None) -> CalendarPatterns:
        """
        Analyze events that started within the trailing window ending at ``now``.

        Args:
            events: Events in any order
            now: End of the analysis window (defaults to the current time)

        Returns:
            CalendarPatterns; defaults fill in any statistic without enough data
        """
        if now is None:
            now = current_time(events[0].start if events else None)

        recent = self.recent_events(events, now)
        event_count = len(recent)
        confidence = PatternConfidence.for_count(event_count, self.config)

        busiest, quietest = self._weekday_extremes(recent)
        has_lunch, lunch_range = self._lunch_pattern(recent)

        patterns = CalendarPatterns(
            preferred_hours=self._preferred_hours(recent),
            average_gap_between_meetings=self._average_gap(recent),
            typical_meeting_duration=self._typical_duration(recent),
            busiest_days=busiest,
            quietest_days=quietest,
            has_lunch_pattern=has_lunch,
            lunch_hour_range=lunch_range,
            confidence=confidence,
            event_count=event_count,
        )

        logger.info(
            f"Pattern analysis: {event_count} events, confidence: {confidence.description}"
        )
        return patterns

    def recent_events(self, events: Iterable[Event], now: datetime) -> List[Event]:
        """Events whose start falls within the analysis window ending at ``now``."""
        window_start = now - timedelta(days=self.config.analysis_window_days)
        return [event for event in events if window_start <= event.start <= now]

    def _preferred_hours(self, events: List[Event]) -> Tuple[int, ...]:
        if len(events) < self.config.preferred_hours_min_events:
            return tuple(self.config.default_preferred_hours)

        # Counter keeps first-encountered order, so most_common breaks ties by it
        hour_counts = Counter(event.start.hour for event in events)
        return tuple(hour for hour, _ in hour_counts.most_common(self.config.preferred_hours_count))

    def _average_gap(self, events: List[Event]) -> float:
        ordered = sorted(events, key=lambda event: event.start)
        gaps = []
        for previous, following in zip(ordered, ordered[1:]):
            gap = (following.start - previous.end).total_seconds()
            if 0 < gap < self.config.max_counted_gap:
                gaps.append(gap)

        if not gaps:
            return self.config.default_gap
        return sum(gaps) / len(gaps)

    def _typical_duration(self, events: List[Event]) -> float:
        if not events:
            return self.config.default_duration
        return sum(event.duration for event in events) / len(events)

    def _weekday_extremes(self, events: List[Event]):
        """Busiest and quietest weekdays (1=Sunday..7=Saturday)."""
        if len(events) < self.config.weekday_stats_min_events:
            return (
                tuple(self.config.default_busiest_days),
                tuple(self.config.default_quietest_days),
            )

        day_counts = Counter(weekday_index(event.start) for event in events)
        count = self.config.weekday_stats_count
        busiest = tuple(day for day, _ in day_counts.most_common(count))
        # sorted() is stable, so equal counts stay in first-encountered order
        quietest = tuple(day for day, _ in sorted(day_counts.items(), key=lambda item: item[1])[:count])
        return busiest, quietest

    def _lunch_pattern(self, events: List[Event]):
        if len(events) < self.config.lunch_min_events:
            return False, None

        first_hour, last_hour = self.config.lunch_window
        lunch_events = [event for event in events if first_hour <= event.start.hour <= last_hour]
        if len(lunch_events) > len(events) * self.config.lunch_ratio:
            return True, tuple(self.config.lunch_hour_range)
        return False, None
