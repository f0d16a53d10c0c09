"""
Event Formatter - Renders engine results as human-readable text

Provides formatting for:
- Scheduling suggestions with reasons, warnings and alternatives
- Calendar pattern summaries
- Scheduling issue lists
- Duplicate event groups
"""

from typing import Sequence
from datetime import datetime
from zoneinfo import ZoneInfo

from .config import DEFAULT_TIMEZONE
from .models import CalendarPatterns, DuplicateGroup, Event, SchedulingSuggestion

WEEKDAY_NAMES = {
    1: 'Sunday', 2: 'Monday', 3: 'Tuesday', 4: 'Wednesday',
    5: 'Thursday', 6: 'Friday', 7: 'Saturday',
}


class EventFormatter:
    """Formats calendar intelligence results into human-readable text."""
    
    def __init__(self, timezone: str = DEFAULT_TIMEZONE):
        """
        Initialize the formatter.
        
        Args:
            timezone: IANA timezone name for displaying times
        """
        self.timezone = timezone
        self.local_tz = ZoneInfo(timezone)
    
    def format_suggestion(self, suggestion: SchedulingSuggestion) -> str:
        """
        Format a scheduling suggestion as a short explanation.
        
        Args:
            suggestion: Result of TimeSlotScheduler.suggest_optimal_time
        
        Returns:
            Formatted string suitable for display or TTS
        """
        message = f"I suggest {self._format_time(suggestion.suggested_time)}"
        
        if suggestion.reasons:
            message += " because:\n"
            for reason in suggestion.reasons:
                message += f"• {reason}\n"
        
        if suggestion.warnings:
            message += f"\nNote: {', '.join(suggestion.warnings)}"
        
        if suggestion.alternatives:
            alternatives = ", ".join(self._format_time(alt) for alt in suggestion.alternatives)
            message += f"\n\nAlternatives: {alternatives}"
        
        return message
    
    def format_patterns(self, patterns: CalendarPatterns) -> str:
        """Format calendar patterns as a list of lines."""
        hours = ", ".join(self._format_hour(hour) for hour in patterns.preferred_hours)
        busiest = ", ".join(WEEKDAY_NAMES[day] for day in patterns.busiest_days)
        quietest = ", ".join(WEEKDAY_NAMES[day] for day in patterns.quietest_days)
        
        lines = [
            f"{patterns.confidence.description} ({patterns.event_count} events analyzed)",
            f"  Preferred meeting hours: {hours}",
            f"  Typical meeting length: {round(patterns.typical_meeting_duration / 60)} minutes",
            f"  Average gap between meetings: {round(patterns.average_gap_between_meetings / 60)} minutes",
            f"  Busiest days: {busiest}",
            f"  Quietest days: {quietest}",
        ]
        
        if patterns.has_lunch_pattern and patterns.lunch_hour_range:
            low, high = patterns.lunch_hour_range
            lines.append(f"  Lunch usually between {self._format_hour(low)} and {self._format_hour(high + 1)}")
        
        return "\n".join(lines)
    
    def format_issues(self, issues: Sequence[str]) -> str:
        """Format scheduling issues, or a confirmation when there are none."""
        if not issues:
            return "No scheduling issues found."
        
        count = len(issues)
        lines = [f"Found {count} potential issue{'s' if count != 1 else ''}:"]
        lines.extend(f"⚠️ {issue}" for issue in issues)
        return "\n".join(lines)
    
    def format_duplicates(self, groups: Sequence[DuplicateGroup]) -> str:
        """Format duplicate groups, one block per group."""
        if not groups:
            return "No duplicate events found."
        
        count = len(groups)
        lines = [f"Found {count} duplicate event group{'s' if count != 1 else ''}:", ""]
        
        for group in groups:
            primary = group.primary_event
            lines.append(f"**{primary.title}** ({group.match_type.value} match, {group.confidence:.0%} confidence)")
            lines.extend(self._format_event_line(event) for event in group.events)
            lines.append("")  # Blank line between groups
        
        return "\n".join(lines).rstrip()
    
    def _format_event_line(self, event: Event) -> str:
        """Format a single event as one indented line."""
        line = f"  🕒 {self._format_range(event.start, event.end)} [{event.source}]"
        if event.location:
            line += f" 📍 {event.location}"
        return line
    
    def _localize(self, dt: datetime) -> datetime:
        # Naive times are already local to the calendar
        if dt.tzinfo is None:
            return dt.replace(tzinfo=self.local_tz)
        return dt.astimezone(self.local_tz)
    
    def _format_time(self, dt: datetime) -> str:
        local = self._localize(dt)
        return local.strftime('%A, %b %-d at %-I:%M %p %Z')
    
    def _format_range(self, start: datetime, end: datetime) -> str:
        start_local = self._localize(start)
        end_local = self._localize(end)
        return (
            f"{start_local.strftime('%a, %b %-d %-I:%M %p')} - "
            f"{end_local.strftime('%-I:%M %p %Z')}"
        )
    
    @staticmethod
    def _format_hour(hour: int) -> str:
        suffix = 'AM' if hour % 24 < 12 else 'PM'
        return f"{hour % 12 or 12} {suffix}"
