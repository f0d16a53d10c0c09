"""
Time Slot Scheduler - Suggests a start time for a new event

Searches hour-aligned candidates over the next week of working hours,
drops any that collide with an existing event, and scores the rest with
independent weighted signals derived from the user's calendar patterns.

The search is a bounded greedy heuristic rather than a global optimizer:
the first candidate reaching the top score wins, and runners-up are
offered as alternatives.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, tzinfo
from typing import List, Optional, Sequence, Union
from zoneinfo import ZoneInfo

from .config import DEFAULT_CONFIG, EngineConfig
from .models import CalendarPatterns, Event, SchedulingSuggestion, weekday_index
from .patterns import PatternAnalyzer, current_time

logger = logging.getLogger(__name__)

FALLBACK_REASON = "Available time slot"

TimeZoneLike = Union[str, tzinfo]


@dataclass
class _ScoredSlot:
    """Score breakdown for a single candidate start time."""
    start: datetime
    score: float = 0.0
    reasons: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class TimeSlotScheduler:
    """
    Proposes and scores a start time for a new event.

    Usage:
        scheduler = TimeSlotScheduler(timezone="America/Denver")
        suggestion = scheduler.suggest_optimal_time(3600, events)
    """

    def __init__(
        self,
        config: EngineConfig = DEFAULT_CONFIG,
        pattern_analyzer: Optional[PatternAnalyzer] = None,
        timezone: Optional[str] = None
    ):
        """
        Initialize the scheduler.

        Args:
            config: Engine thresholds and weights
            pattern_analyzer: Analyzer to derive patterns with (built from config if omitted)
            timezone: IANA timezone naive candidate times are interpreted in when
                comparing against participant time zones (system local time if omitted)
        """
        self.config = config
        self.pattern_analyzer = pattern_analyzer or PatternAnalyzer(config)
        self.local_tz = ZoneInfo(timezone) if timezone else None

    def suggest_optimal_time(
        self,
        duration: float,
        events: Sequence[Event],
        preferred_date: Optional[datetime] = None,
        participant_time_zones: Optional[Sequence[TimeZoneLike]] = None,
        now: Optional[datetime] = None
    ) -> SchedulingSuggestion:
        """
        Suggest the best start time for an event of ``duration`` seconds.

        Args:
            duration: Length of the new event in seconds
            events: Existing events to schedule around
            preferred_date: First day of the search (defaults to now)
            participant_time_zones: IANA names or tzinfo objects of attendees
            now: Reference time for pattern analysis (defaults to the current time)

        Returns:
            SchedulingSuggestion. Reasons and warnings describe the suggested slot
            only; warnings raised while scoring other candidates are not carried over.
            If every candidate collides, the suggestion is the search start plus
            one day, which is not checked for overlap.
        """
        if now is None:
            now = current_time(preferred_date or (events[0].start if events else None))
        search_start = preferred_date or now

        patterns = self.pattern_analyzer.analyze(events, now)
        zones = [self._resolve_zone(zone) for zone in participant_time_zones or []]
        length = timedelta(seconds=duration)

        best: Optional[_ScoredSlot] = None
        alternatives: List[datetime] = []

        for day_offset, candidate in self._candidates(search_start):
            candidate_end = candidate + length
            if any(event.overlaps(candidate, candidate_end) for event in events):
                logger.debug(f"Skipping {candidate.isoformat()}: conflicts with an existing event")
                continue

            slot = self._score(candidate, candidate_end, day_offset, events, patterns, zones)
            logger.debug(f"Scored {candidate.isoformat()}: {slot.score:.2f}")

            # Ties keep the earlier candidate
            if best is None or slot.score > best.score:
                if best is not None:
                    alternatives.insert(0, best.start)
                best = slot

            if (
                slot.score > self.config.alternative_min_score
                and len(alternatives) < self.config.max_alternatives
                and (best is None or candidate != best.start)
            ):
                alternatives.append(candidate)

        if best is None:
            fallback = search_start + timedelta(days=1)
            logger.info(f"No open slot found, falling back to {fallback.isoformat()}")
            return SchedulingSuggestion(
                suggested_time=fallback,
                confidence=self.config.confidence_floor,
                reasons=(FALLBACK_REASON,),
                alternatives=tuple(alternatives[:self.config.max_alternatives]),
                warnings=None,
            )

        logger.info(f"Suggested {best.start.isoformat()} with score {best.score:.2f}")
        return SchedulingSuggestion(
            suggested_time=best.start,
            confidence=min(1.0, max(self.config.confidence_floor, best.score)),
            reasons=tuple(best.reasons) or (FALLBACK_REASON,),
            alternatives=tuple(alternatives[:self.config.max_alternatives]),
            warnings=tuple(best.warnings) or None,
        )

    def _candidates(self, search_start: datetime):
        """Yield (day_offset, start) for every hour-aligned slot in the search space."""
        for day_offset in range(self.config.search_days):
            day = search_start + timedelta(days=day_offset)
            for hour in range(self.config.search_start_hour, self.config.search_end_hour + 1):
                yield day_offset, day.replace(hour=hour, minute=0, second=0, microsecond=0)

    def _score(
        self,
        start: datetime,
        end: datetime,
        day_offset: int,
        events: Sequence[Event],
        patterns: CalendarPatterns,
        zones: List[tzinfo]
    ) -> _ScoredSlot:
        cfg = self.config
        slot = _ScoredSlot(start=start)
        hour = start.hour

        if hour in patterns.preferred_hours:
            slot.score += cfg.preferred_hour_weight
            slot.reasons.append("Matches your typical meeting time")

        if patterns.is_lunch_hour(hour):
            slot.score -= cfg.lunch_penalty
            slot.warnings.append("During typical lunch hours")
        else:
            slot.score += cfg.outside_lunch_bonus

        if self._has_buffer(start, end, events):
            slot.score += cfg.buffer_bonus
            slot.reasons.append("Good buffer time before/after")
        else:
            slot.score -= cfg.buffer_penalty
            slot.warnings.append("Back-to-back with other meetings")

        weekday = weekday_index(start)
        if weekday in patterns.quietest_days:
            slot.score += cfg.quiet_day_bonus
            slot.reasons.append("On a typically lighter day")
        elif weekday in patterns.busiest_days:
            slot.score -= cfg.busy_day_penalty

        if hour < cfg.morning_cutoff_hour:
            slot.score += cfg.morning_bonus
            slot.reasons.append("Morning time slot")

        if zones:
            if self._fits_time_zones(start, zones):
                slot.score += cfg.timezone_fit_bonus
                slot.reasons.append("Works for all time zones")
            else:
                slot.score -= cfg.timezone_miss_penalty
                slot.warnings.append("May be outside business hours for some participants")

        # Sooner is slightly better
        slot.score += (cfg.search_days - day_offset) * cfg.proximity_weight
        return slot

    def _has_buffer(self, start: datetime, end: datetime, events: Sequence[Event]) -> bool:
        """True when no event ends just before ``start`` or begins just after ``end``."""
        window = self.config.buffer_window
        for event in events:
            if event.end <= start and (start - event.end).total_seconds() < window:
                return False
            if event.start >= end and (event.start - end).total_seconds() < window:
                return False
        return True

    def _fits_time_zones(self, start: datetime, zones: List[tzinfo]) -> bool:
        local_start = start
        if local_start.tzinfo is None:
            local_start = local_start.replace(tzinfo=self.local_tz) if self.local_tz else local_start.astimezone()

        for zone in zones:
            their_hour = local_start.astimezone(zone).hour
            if not self.config.business_start_hour <= their_hour <= self.config.business_end_hour:
                return False
        return True

    @staticmethod
    def _resolve_zone(zone: TimeZoneLike) -> tzinfo:
        if isinstance(zone, str):
            return ZoneInfo(zone)
        return zone
