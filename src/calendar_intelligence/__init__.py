"""
Calendar Intelligence Library

A reusable library that turns calendar events into scheduling knowledge.

Main exports:
- CalendarAnalyzer: Main orchestrator for calendar intelligence
- PatternAnalyzer: Scheduling habits from recent events
- TimeSlotScheduler: Optimal start time suggestions
- ConflictDetector: Issues with a proposed time
- DuplicateDetector: Duplicate events across calendars
- CalendarRepository: Abstract base class for event sources
- IcsRepository / InMemoryRepository: Event source implementations
- EventFormatter: Result display formatting
- EngineConfig: Tunable thresholds and weights
"""

from .analyzer import CalendarAnalyzer
from .config import DEFAULT_CONFIG, EngineConfig
from .conflicts import ConflictDetector
from .duplicates import DuplicateDetector, levenshtein_distance, title_similarity
from .formatter import EventFormatter
from .models import (
    CalendarPatterns,
    DuplicateGroup,
    Event,
    MatchType,
    PatternConfidence,
    SchedulingSuggestion,
    weekday_index,
)
from .patterns import PatternAnalyzer
from .repositories import CalendarRepository, IcsRepository, InMemoryRepository
from .scheduler import TimeSlotScheduler

__version__ = "0.2.0"

__all__ = [
    'CalendarAnalyzer',
    'PatternAnalyzer',
    'TimeSlotScheduler',
    'ConflictDetector',
    'DuplicateDetector',
    'CalendarRepository',
    'IcsRepository',
    'InMemoryRepository',
    'EventFormatter',
    'EngineConfig',
    'DEFAULT_CONFIG',
    'Event',
    'CalendarPatterns',
    'SchedulingSuggestion',
    'DuplicateGroup',
    'MatchType',
    'PatternConfidence',
    'weekday_index',
    'levenshtein_distance',
    'title_similarity',
]
