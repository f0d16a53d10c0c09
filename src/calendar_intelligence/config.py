"""
Configuration module for the calendar intelligence engine.
Centralizes default values and tuning constants.
"""

from dataclasses import dataclass, field, replace
from typing import Tuple

# Default display timezone
DEFAULT_TIMEZONE = "America/Denver"

# Pattern analysis
ANALYSIS_WINDOW_DAYS = 30
DEFAULT_PREFERRED_HOURS = (10, 14, 16)  # 10AM, 2PM, 4PM
DEFAULT_MEETING_GAP = 900.0  # 15 minutes
DEFAULT_MEETING_DURATION = 1800.0  # 30 minutes
DEFAULT_BUSIEST_DAYS = (3, 5)  # Tuesday, Thursday
DEFAULT_QUIETEST_DAYS = (2, 6)  # Monday, Friday
MAX_COUNTED_GAP = 4 * 3600  # Gaps of 4h or more are not "between meetings"

# Scheduler search space
SEARCH_DAYS = 7
SEARCH_START_HOUR = 8
SEARCH_END_HOUR = 18  # Inclusive

# Business hours shared by the scheduler and conflict checks
BUSINESS_START_HOUR = 8
BUSINESS_END_HOUR = 18

# Duplicate detection
SIMILARITY_THRESHOLD = 0.85
FILTER_MIN_CONFIDENCE = 0.7


@dataclass(frozen=True)
class EngineConfig:
    """
    Every threshold and weight used by the engine.

    Components take an ``EngineConfig`` at construction, so tests and callers
    can tune behavior without touching the algorithms:

        config = DEFAULT_CONFIG.replace(search_days=3)
        scheduler = TimeSlotScheduler(config=config)
    """

    # Pattern analysis
    analysis_window_days: int = ANALYSIS_WINDOW_DAYS
    low_confidence_min_events: int = 3
    medium_confidence_min_events: int = 10
    high_confidence_min_events: int = 30
    preferred_hours_min_events: int = 3
    preferred_hours_count: int = 3
    weekday_stats_min_events: int = 5
    weekday_stats_count: int = 2
    lunch_min_events: int = 10
    lunch_window: Tuple[int, int] = (11, 14)
    lunch_ratio: float = 0.25
    lunch_hour_range: Tuple[int, int] = (12, 13)
    max_counted_gap: float = MAX_COUNTED_GAP
    default_preferred_hours: Tuple[int, ...] = DEFAULT_PREFERRED_HOURS
    default_gap: float = DEFAULT_MEETING_GAP
    default_duration: float = DEFAULT_MEETING_DURATION
    default_busiest_days: Tuple[int, ...] = DEFAULT_BUSIEST_DAYS
    default_quietest_days: Tuple[int, ...] = DEFAULT_QUIETEST_DAYS

    # Scheduler search and scoring
    search_days: int = SEARCH_DAYS
    search_start_hour: int = SEARCH_START_HOUR
    search_end_hour: int = SEARCH_END_HOUR
    preferred_hour_weight: float = 0.30
    lunch_penalty: float = 0.20
    outside_lunch_bonus: float = 0.10
    buffer_window: float = 1800.0
    buffer_bonus: float = 0.20
    buffer_penalty: float = 0.10
    quiet_day_bonus: float = 0.15
    busy_day_penalty: float = 0.10
    morning_cutoff_hour: int = 12
    morning_bonus: float = 0.10
    timezone_fit_bonus: float = 0.20
    timezone_miss_penalty: float = 0.30
    proximity_weight: float = 0.02
    alternative_min_score: float = 0.5
    max_alternatives: int = 3
    confidence_floor: float = 0.3

    # Conflict detection
    back_to_back_tolerance: float = 60.0
    day_overload_threshold: int = 6
    business_start_hour: int = BUSINESS_START_HOUR
    business_end_hour: int = BUSINESS_END_HOUR
    weekend_days: Tuple[int, ...] = (1, 7)  # Sunday, Saturday

    # Duplicate detection
    exact_time_tolerance: float = 60.0
    moderate_time_window: float = 1800.0
    similarity_threshold: float = SIMILARITY_THRESHOLD
    tier_confidence: Tuple[Tuple[str, float], ...] = field(
        default_factory=lambda: (
            ('exact', 1.0),
            ('strong', 0.9),
            ('moderate', 0.7),
            ('weak', 0.5),
        )
    )
    filter_min_confidence: float = FILTER_MIN_CONFIDENCE

    def __post_init__(self):
        if self.analysis_window_days <= 0:
            raise ValueError("analysis_window_days must be positive")
        if self.search_days <= 0:
            raise ValueError("search_days must be positive")
        if not 0 <= self.search_start_hour <= self.search_end_hour <= 23:
            raise ValueError(
                f"Invalid search hours {self.search_start_hour}-{self.search_end_hour}"
            )
        if not (
            self.low_confidence_min_events
            <= self.medium_confidence_min_events
            <= self.high_confidence_min_events
        ):
            raise ValueError("Confidence thresholds must be non-decreasing")
        if self.lunch_window[0] > self.lunch_window[1]:
            raise ValueError(f"Invalid lunch window {self.lunch_window}")
        if self.lunch_hour_range[0] > self.lunch_hour_range[1]:
            raise ValueError(f"Invalid lunch hour range {self.lunch_hour_range}")

    def confidence_for_tier(self, tier: str) -> float:
        """Confidence score assigned to a duplicate match tier name."""
        return dict(self.tier_confidence)[tier]

    def replace(self, **changes) -> 'EngineConfig':
        """Return a copy of this config with the given fields changed."""
        return replace(self, **changes)


DEFAULT_CONFIG = EngineConfig()
