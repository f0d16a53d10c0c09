"""
Duplicate Detector - Finds events that represent the same occurrence

The same meeting often shows up once per synced calendar (device, Google,
Outlook). Pairs are classified into match tiers, strongest first:

- exact: same title, starts within a minute, same (or no) location
- strong: same title, overlapping times
- moderate: near-identical title (edit-distance ratio), starts within 30 minutes
- weak: kept as a tier but never matched; title-only similarity produced too
  many false positives

Grouping is a single greedy pass in input order, so each event lands in at
most one group. Title comparison is O(n*m) per pair and the pass is
O(events^2), which is fine for a personal calendar of a few hundred events.
"""

import logging
import re
from typing import List, Optional, Sequence

from .config import DEFAULT_CONFIG, EngineConfig
from .models import DuplicateGroup, Event, MatchType

logger = logging.getLogger(__name__)

_NON_ALPHANUMERIC = re.compile(r'[^a-z0-9 ]')


def normalize_title(title: str) -> str:
    """Lowercase, trim and strip everything but letters, digits and spaces."""
    return _NON_ALPHANUMERIC.sub('', title.lower().strip())


def levenshtein_distance(first: str, second: str) -> int:
    """Classic edit distance using two rolling rows."""
    previous = list(range(len(second) + 1))
    for i, char1 in enumerate(first):
        current = [i + 1] + [0] * len(second)
        for j, char2 in enumerate(second):
            if char1 == char2:
                current[j + 1] = previous[j]
            else:
                current[j + 1] = min(previous[j], previous[j + 1], current[j]) + 1
        previous = current
    return previous[-1]


def title_similarity(first: str, second: str) -> float:
    """Similarity of two titles in [0, 1]; 1.0 means identical after normalizing."""
    normalized1 = normalize_title(first)
    normalized2 = normalize_title(second)
    max_length = max(len(normalized1), len(normalized2))
    if max_length == 0:
        return 1.0
    return 1.0 - levenshtein_distance(normalized1, normalized2) / max_length


class DuplicateDetector:
    """
    Groups and filters probable duplicate events.

    Usage:
        detector = DuplicateDetector()
        groups = detector.detect_duplicates(events)
        unique_events = detector.filter_duplicates(events)
    """

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG):
        self.config = config

    def detect_duplicates(self, events: Sequence[Event]) -> List[DuplicateGroup]:
        """
        Partition events into duplicate groups.

        Args:
            events: Events in their original order; earlier events become primaries

        Returns:
            Groups of two or more events, highest confidence first
        """
        groups = []
        processed = set()

        for index, event in enumerate(events):
            if event.identity in processed:
                continue

            members = [event]
            group_type: Optional[MatchType] = None
            processed.add(event.identity)

            for candidate in events[index + 1:]:
                if candidate.identity in processed:
                    continue

                match_type = self.classify(event, candidate)
                if match_type is None:
                    continue

                members.append(candidate)
                processed.add(candidate.identity)
                # The first match decides the tier of the whole group
                if group_type is None:
                    group_type = match_type

            if len(members) >= 2 and group_type is not None:
                groups.append(DuplicateGroup(
                    events=members,
                    match_type=group_type,
                    confidence=self.confidence_score(group_type),
                ))

        groups.sort(key=lambda group: group.confidence, reverse=True)

        if groups:
            logger.info(f"Detected {len(groups)} duplicate event groups")
            for group in groups:
                logger.debug(
                    f"{len(group.events)} duplicates with confidence {group.confidence}: "
                    f"{group.primary_event.title}"
                )
        return groups

    def filter_duplicates(self, events: Sequence[Event]) -> List[Event]:
        """
        Remove non-primary members of confident duplicate groups.

        Args:
            events: Events in their original order

        Returns:
            Events in the same order with duplicates dropped
        """
        groups = self.detect_duplicates(events)
        to_remove = {
            event.identity
            for event in self.duplicates_to_remove(groups, self.config.filter_min_confidence)
        }
        filtered = [event for event in events if event.identity not in to_remove]

        if to_remove:
            logger.info(f"Filtered duplicates, {len(filtered)} unique events remaining")
        return filtered

    def duplicates_to_remove(
        self,
        groups: Sequence[DuplicateGroup],
        minimum_confidence: Optional[float] = None
    ) -> List[Event]:
        """Non-primary events of every group at or above ``minimum_confidence``."""
        if minimum_confidence is None:
            minimum_confidence = self.config.filter_min_confidence
        duplicates = []
        for group in groups:
            if group.confidence >= minimum_confidence:
                duplicates.extend(group.duplicates)
        return duplicates

    def classify(self, first: Event, second: Event) -> Optional[MatchType]:
        """Strongest match tier between two events, or None."""
        if self._is_exact_match(first, second):
            return MatchType.EXACT
        if self._is_strong_match(first, second):
            return MatchType.STRONG
        if self._is_moderate_match(first, second):
            return MatchType.MODERATE
        if self._is_weak_match(first, second):
            return MatchType.WEAK
        return None

    def confidence_score(self, match_type: MatchType) -> float:
        return self.config.confidence_for_tier(match_type.value)

    def _is_exact_match(self, first: Event, second: Event) -> bool:
        if first.identity == second.identity:
            return False

        if first.title.lower() != second.title.lower():
            return False
        if abs((first.start - second.start).total_seconds()) >= self.config.exact_time_tolerance:
            return False

        # Many events have no location at all
        location1 = (first.location or '').lower()
        location2 = (second.location or '').lower()
        return location1 == location2

    def _is_strong_match(self, first: Event, second: Event) -> bool:
        if first.identity == second.identity:
            return False

        same_title = first.title.lower() == second.title.lower()
        return same_title and first.start < second.end and second.start < first.end

    def _is_moderate_match(self, first: Event, second: Event) -> bool:
        if first.identity == second.identity:
            return False

        time_difference = abs((first.start - second.start).total_seconds())
        if time_difference >= self.config.moderate_time_window:
            return False
        return title_similarity(first.title, second.title) > self.config.similarity_threshold

    def _is_weak_match(self, first: Event, second: Event) -> bool:
        # Disabled: title-only similarity flags too many unrelated events
        return False
