"""
In-Memory Calendar Repository

Serves a fixed list of events. Useful for tests and for callers that
already hold an event snapshot from their own sync layer.
"""

from datetime import datetime, timedelta
from typing import Callable, Dict, Any, List, Optional, Sequence

from ..models import Event
from .base import CalendarRepository


class InMemoryRepository(CalendarRepository):
    """Repository over an in-memory event list."""
    
    def __init__(self, events: Sequence[Event], clock: Optional[Callable[[], datetime]] = None):
        """
        Args:
            events: Events to serve, in source order
            clock: Returns the current time (defaults to datetime.now)
        """
        self.events = list(events)
        self.clock = clock or datetime.now
    
    async def get_events_today(self) -> List[Event]:
        return self._events_between(0, 1)
    
    async def get_events_tomorrow(self) -> List[Event]:
        return self._events_between(1, 2)
    
    async def get_events_next_n_days(self, days: int) -> List[Event]:
        return self._events_between(0, days)
    
    async def get_events_past_n_days(self, days: int) -> List[Event]:
        now = self.current_time()
        start = now - timedelta(days=days)
        return [event for event in self.events if start <= event.start <= now]
    
    async def get_health(self) -> Dict[str, Any]:
        return {'status': 'healthy', 'event_count': len(self.events)}
    
    def current_time(self) -> datetime:
        return self.clock()
    
    def _events_between(self, first_day: int, last_day: int) -> List[Event]:
        """Events starting between midnight ``first_day`` and ``last_day`` days from today."""
        midnight = self.current_time().replace(hour=0, minute=0, second=0, microsecond=0)
        start = midnight + timedelta(days=first_day)
        end = midnight + timedelta(days=last_day)
        return [event for event in self.events if start <= event.start < end]
