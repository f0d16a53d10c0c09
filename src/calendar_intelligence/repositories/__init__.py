"""Calendar Intelligence Repositories"""

from .base import CalendarRepository
from .ics import IcsRepository
from .memory import InMemoryRepository

__all__ = ['CalendarRepository', 'IcsRepository', 'InMemoryRepository']
