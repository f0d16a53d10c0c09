"""
Conflict Detector - Flags problems with a proposed event time
"""

import logging
from datetime import datetime, timedelta
from typing import List, Sequence

from .config import DEFAULT_CONFIG, EngineConfig
from .models import Event, weekday_index

logger = logging.getLogger(__name__)


class ConflictDetector:
    """
    Checks a proposed start time and duration against existing events.

    Every check runs independently; an empty result means nothing was found.
    """

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG):
        self.config = config

    def detect_scheduling_issues(
        self,
        proposed_start: datetime,
        duration: float,
        events: Sequence[Event]
    ) -> List[str]:
        """
        Describe every scheduling issue with the proposed time.

        Args:
            proposed_start: Start of the new event
            duration: Length of the new event in seconds
            events: Existing events

        Returns:
            List of human-readable issue descriptions
        """
        cfg = self.config
        issues = []
        proposed_end = proposed_start + timedelta(seconds=duration)

        conflicts = self.find_conflicts(proposed_start, duration, events)
        if conflicts:
            issues.append(f"Conflicts with {len(conflicts)} existing event(s)")

        tolerance = cfg.back_to_back_tolerance
        back_to_back = [
            event for event in events
            if abs((event.end - proposed_start).total_seconds()) < tolerance
            or abs((proposed_end - event.start).total_seconds()) < tolerance
        ]
        if back_to_back:
            issues.append("Back-to-back with other meetings - no break time")

        same_day = [event for event in events if event.start.date() == proposed_start.date()]
        if len(same_day) >= cfg.day_overload_threshold:
            issues.append(f"This would be meeting #{len(same_day) + 1} on this day")

        hour = proposed_start.hour
        if hour < cfg.business_start_hour or hour >= cfg.business_end_hour:
            issues.append(
                f"Outside typical business hours "
                f"({_hour_label(cfg.business_start_hour)}-{_hour_label(cfg.business_end_hour)})"
            )

        if weekday_index(proposed_start) in cfg.weekend_days:
            issues.append("Scheduled on weekend")

        if issues:
            logger.debug(f"Found {len(issues)} issue(s) for {proposed_start.isoformat()}")
        return issues

    def find_conflicts(
        self,
        proposed_start: datetime,
        duration: float,
        events: Sequence[Event]
    ) -> List[Event]:
        """Events that overlap the proposed time range."""
        proposed_end = proposed_start + timedelta(seconds=duration)
        return [event for event in events if event.overlaps(proposed_start, proposed_end)]


def _hour_label(hour: int) -> str:
    """12-hour label such as '8am' or '6pm'."""
    suffix = 'am' if hour < 12 else 'pm'
    display = hour % 12 or 12
    return f"{display}{suffix}"
