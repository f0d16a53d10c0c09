"""
Base Repository Interface for Calendar Event Sources

Defines the abstract interface that supplies events to the engine.
This allows CalendarAnalyzer to work with any calendar provider (ICS, Google, Outlook, etc.)
while the engine components only ever see Event objects.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Dict, Any

from ..models import Event


class CalendarRepository(ABC):
    """
    Abstract base class for calendar event sources.
    
    Implementations should:
    1. Handle authentication/connection to their specific calendar provider
    2. Convert provider payloads into Event objects
    3. Tag every event with the repository's source name
    """
    
    @abstractmethod
    async def get_events_today(self) -> List[Event]:
        """Fetch all events for today."""
        pass
    
    @abstractmethod
    async def get_events_tomorrow(self) -> List[Event]:
        """Fetch all events for tomorrow."""
        pass
    
    @abstractmethod
    async def get_events_next_n_days(self, days: int) -> List[Event]:
        """
        Fetch all events for the next N days.
        
        Args:
            days: Number of days to fetch (e.g., 7 for next week, 30 for next month)
        
        Returns:
            List of events ordered as the provider returns them
        """
        pass
    
    @abstractmethod
    async def get_events_past_n_days(self, days: int) -> List[Event]:
        """
        Fetch events that started during the last N days, up to now.
        
        Pattern analysis needs this history; upcoming events alone never
        fall inside its window.
        
        Args:
            days: Number of days to look back
        
        Returns:
            List of events ordered as the provider returns them
        """
        pass
    
    @abstractmethod
    async def get_health(self) -> Dict[str, Any]:
        """
        Check if the calendar source is available.
        
        Returns:
            Dictionary with 'status' key (e.g., {'status': 'healthy'})
        """
        pass
    
    def current_time(self) -> datetime:
        """The source's notion of "now", used as the analysis reference time."""
        return datetime.now()
    
    def get_source_name(self) -> str:
        """
        Get the name of this calendar source.
        
        Returns:
            Name identifier (e.g., 'ics', 'inmemory')
        """
        return self.__class__.__name__.replace('Repository', '').lower()
