"""
ICS Calendar Repository

Implements CalendarRepository for ICS/iCal-based calendar services
that expose events as JSON over HTTP.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Dict, Any
from zoneinfo import ZoneInfo
import requests

from ..config import DEFAULT_TIMEZONE
from ..models import Event
from .base import CalendarRepository

logger = logging.getLogger(__name__)


class IcsRepository(CalendarRepository):
    """
    Repository for ICS-based calendar APIs.
    
    Compatible with APIs that provide endpoints like:
    - /calendar/events/today
    - /calendar/events/tomorrow
    - /calendar/events/next/{days}
    - /calendar/events (all events, used for history)
    - /calendar/health
    """
    
    def __init__(self, api_url: str, timeout: int = 10, timezone: str = DEFAULT_TIMEZONE):
        """
        Initialize the ICS repository.
        
        Args:
            api_url: Base URL for the ICS API
            timeout: Request timeout in seconds
            timezone: IANA timezone the API reports event times in
        """
        self.api_url = api_url.rstrip('/')
        self.timeout = timeout
        self.local_tz = ZoneInfo(timezone)
    
    async def get_events_today(self) -> List[Event]:
        """Fetch today's events from the ICS API."""
        return await self._fetch_events('/calendar/events/today')
    
    async def get_events_tomorrow(self) -> List[Event]:
        """Fetch tomorrow's events from the ICS API."""
        return await self._fetch_events('/calendar/events/tomorrow')
    
    async def get_events_next_n_days(self, days: int) -> List[Event]:
        """Fetch events for the next N days from the ICS API."""
        return await self._fetch_events(f'/calendar/events/next/{days}')
    
    async def get_events_past_n_days(self, days: int) -> List[Event]:
        """
        Fetch events that started in the last N days.
        
        The API has no history endpoint, so all events are fetched and
        filtered to the trailing window.
        """
        now = self.current_time()
        start = now - timedelta(days=days)
        events = await self._fetch_events('/calendar/events')
        return [event for event in events if start <= event.start <= now]
    
    async def get_health(self) -> Dict[str, Any]:
        """Check ICS API health status."""
        try:
            url = f"{self.api_url}/calendar/health"
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"ICS API health check failed: {e}")
            return {'status': 'unhealthy', 'error': str(e)}
    
    def current_time(self) -> datetime:
        return datetime.now(self.local_tz)
    
    async def _fetch_events(self, endpoint: str) -> List[Event]:
        """
        Internal method to fetch events from a specific endpoint.
        
        Args:
            endpoint: API endpoint path (e.g., '/calendar/events/today')
        
        Returns:
            List of events; payload entries with unparseable times are skipped
        
        Raises:
            requests.exceptions.RequestException: If API call fails
        """
        url = f"{self.api_url}{endpoint}"
        logger.info(f"Fetching events from ICS API: {url}")
        
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout:
            logger.error(f"ICS API timeout after {self.timeout}s for {endpoint}")
            raise
        except requests.exceptions.RequestException as e:
            logger.error(f"ICS API error for {endpoint}: {e}")
            raise
        
        events = []
        for item in data.get('events', []):
            try:
                events.append(Event.from_dict(item, source=self.get_source_name(), tz=self.local_tz))
            except ValueError as e:
                logger.warning(f"Skipping event with unparseable time {item.get('start')!r}: {e}")
        
        logger.info(f"Retrieved {len(events)} events from {endpoint}")
        return events
