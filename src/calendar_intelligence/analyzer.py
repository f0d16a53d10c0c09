"""
Calendar Analyzer - Main orchestration of calendar intelligence

Combines pattern analysis, time suggestions, conflict checks and duplicate
detection behind one object, optionally fed by a calendar repository.
"""

import logging
from typing import Dict, Any, List, Optional, Sequence
from datetime import datetime

from .config import DEFAULT_CONFIG, DEFAULT_TIMEZONE, EngineConfig
from .conflicts import ConflictDetector
from .duplicates import DuplicateDetector
from .formatter import EventFormatter
from .models import CalendarPatterns, DuplicateGroup, Event, SchedulingSuggestion
from .patterns import PatternAnalyzer
from .repositories.base import CalendarRepository
from .scheduler import TimeSlotScheduler, TimeZoneLike

logger = logging.getLogger(__name__)


class CalendarAnalyzer:
    """
    Main calendar intelligence service.
    
    Orchestrates:
    1. Event fetching from an optional repository
    2. Duplicate removal
    3. Pattern analysis and time suggestions
    4. Formatting for consumption
    
    Usage:
        repository = IcsRepository(api_url="https://calendar.example.com")
        analyzer = CalendarAnalyzer(repository=repository)
        result = await analyzer.analyze_upcoming(days=7, meeting_duration=1800)
    """
    
    def __init__(
        self,
        repository: Optional[CalendarRepository] = None,
        config: EngineConfig = DEFAULT_CONFIG,
        timezone: str = DEFAULT_TIMEZONE,
        enabled: bool = True
    ):
        """
        Initialize the analyzer.
        
        Args:
            repository: Calendar data source implementation (only needed for async methods)
            config: Engine thresholds and weights shared by every component
            timezone: IANA timezone for displaying and interpreting event times
            enabled: Whether the analyzer is enabled
        """
        self.repository = repository
        self.config = config
        self.enabled = enabled
        self.timezone = timezone
        self.pattern_analyzer = PatternAnalyzer(config)
        self.scheduler = TimeSlotScheduler(config, self.pattern_analyzer, timezone=timezone)
        self.conflict_detector = ConflictDetector(config)
        self.duplicate_detector = DuplicateDetector(config)
        self.formatter = EventFormatter(timezone=timezone)
    
    def analyze_patterns(self, events: Sequence[Event], now: Optional[datetime] = None) -> CalendarPatterns:
        return self.pattern_analyzer.analyze(events, now)
    
    def suggest_time(
        self,
        duration: float,
        events: Sequence[Event],
        preferred_date: Optional[datetime] = None,
        participant_time_zones: Optional[Sequence[TimeZoneLike]] = None,
        now: Optional[datetime] = None
    ) -> SchedulingSuggestion:
        return self.scheduler.suggest_optimal_time(
            duration,
            events,
            preferred_date=preferred_date,
            participant_time_zones=participant_time_zones,
            now=now,
        )
    
    def check_time(self, proposed_start: datetime, duration: float, events: Sequence[Event]) -> List[str]:
        return self.conflict_detector.detect_scheduling_issues(proposed_start, duration, events)
    
    def find_duplicates(self, events: Sequence[Event]) -> List[DuplicateGroup]:
        return self.duplicate_detector.detect_duplicates(events)
    
    def remove_duplicates(self, events: Sequence[Event]) -> List[Event]:
        return self.duplicate_detector.filter_duplicates(events)
    
    def build_report(
        self,
        events: Sequence[Event],
        meeting_duration: Optional[float] = None,
        now: Optional[datetime] = None,
        history: Optional[Sequence[Event]] = None
    ) -> Dict[str, Any]:
        """
        Analyze an event snapshot end to end.
        
        Args:
            events: Events from all calendar sources, in source order
            meeting_duration: If given, also suggest a time for a meeting this long (seconds)
            now: Reference time (defaults to the current time)
            history: Past events to learn patterns from, in addition to ``events``.
                Events already present in ``events`` are not counted twice.
        
        Returns:
            Dictionary with:
            - events: Events with confident duplicates removed
            - duplicates: Detected DuplicateGroup list
            - patterns: CalendarPatterns for the deduplicated events and history
            - suggestion: SchedulingSuggestion (only when meeting_duration is given)
            - formatted_text: Human-readable summary
        """
        duplicates = self.find_duplicates(events)
        unique_events = self.remove_duplicates(events)
        pattern_events = unique_events
        if history:
            seen = {event.identity for event in unique_events}
            past = [event for event in self.remove_duplicates(history) if event.identity not in seen]
            pattern_events = past + unique_events
        patterns = self.analyze_patterns(pattern_events, now)
        
        sections = [
            self.formatter.format_patterns(patterns),
            self.formatter.format_duplicates(duplicates),
        ]
        report = {
            'events': unique_events,
            'duplicates': duplicates,
            'patterns': patterns,
        }
        
        if meeting_duration is not None:
            suggestion = self.suggest_time(meeting_duration, pattern_events, now=now)
            report['suggestion'] = suggestion
            sections.append(self.formatter.format_suggestion(suggestion))
        
        report['formatted_text'] = "\n\n".join(sections)
        return report
    
    async def analyze_upcoming(self, days: int = 7, meeting_duration: Optional[float] = None) -> Dict[str, Any]:
        """
        Fetch the next ``days`` days from the repository and analyze them.
        
        Patterns are learned from the repository's trailing analysis window,
        measured from the repository's current time.
        
        Args:
            days: Number of days to fetch
            meeting_duration: If given, also suggest a time for a meeting this long (seconds)
        
        Returns:
            Dictionary with success flag, the build_report() fields and metadata,
            or an error message (if success=False)
        """
        if not self.enabled:
            return {
                'success': False,
                'error': 'Calendar analyzer is disabled'
            }
        
        if self.repository is None:
            return {
                'success': False,
                'error': 'No calendar repository configured'
            }
        
        try:
            now = self.repository.current_time()
            events = await self.repository.get_events_next_n_days(days)
            history = await self.repository.get_events_past_n_days(self.config.analysis_window_days)
            logger.info(
                f"Analyzing {len(events)} events for the next {days} days "
                f"with {len(history)} events of history"
            )
            
            report = self.build_report(events, meeting_duration=meeting_duration, now=now, history=history)
            
            return {
                'success': True,
                **report,
                'metadata': {
                    'event_count': len(events),
                    'unique_event_count': len(report['events']),
                    'history_event_count': len(history),
                    'data_source': self.repository.get_source_name(),
                    'timezone': self.timezone
                }
            }
        
        except Exception as e:
            logger.error(f"Error analyzing calendar: {e}", exc_info=True)
            return {
                'success': False,
                'error': f'Calendar analysis failed: {str(e)}',
                'metadata': {
                    'data_source': self.repository.get_source_name()
                }
            }
    
    async def check_health(self) -> Dict[str, Any]:
        """
        Check if the calendar source is healthy.
        
        Returns:
            Health status dictionary
        """
        if self.repository is None:
            return {
                'success': False,
                'error': 'No calendar repository configured'
            }
        
        try:
            health = await self.repository.get_health()
            return {
                'success': True,
                'data': health,
                'formatted_text': f"Calendar service status: {health.get('status', 'unknown')}"
            }
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return {
                'success': False,
                'error': str(e)
            }
