"""
Tests for DuplicateDetector - duplicate events across calendars

Tests cover:
- Pairwise match tiers
- Greedy grouping and ordering
- Filtering that preserves primaries
- Title similarity helpers
"""

from datetime import timedelta

import pytest

from calendar_intelligence import (
    MatchType,
    levenshtein_distance,
    title_similarity,
)
from calendar_intelligence.duplicates import normalize_title

from conftest import MONDAY, at


class TestMatchTiers:
    """Pairwise classification, strongest tier first."""

    def test_same_title_and_time_is_exact(self, duplicate_detector, make_event):
        first = make_event(title="Sync", start=at(MONDAY, 9), source="google")
        second = make_event(title="sync", start=at(MONDAY, 9) + timedelta(seconds=30), source="outlook")

        assert duplicate_detector.classify(first, second) == MatchType.EXACT

    def test_matching_locations_are_exact(self, duplicate_detector, make_event):
        first = make_event(title="Sync", location="Room 4")
        second = make_event(title="Sync", location="room 4")

        assert duplicate_detector.classify(first, second) == MatchType.EXACT

    def test_different_locations_fall_back_to_strong(self, duplicate_detector, make_event):
        first = make_event(title="Sync", location="Room 4")
        second = make_event(title="Sync", location=None)

        assert duplicate_detector.classify(first, second) == MatchType.STRONG

    def test_overlapping_same_title_is_strong(self, duplicate_detector, make_event):
        first = make_event(title="Planning", start=at(MONDAY, 9), minutes=60)
        second = make_event(title="PLANNING", start=at(MONDAY, 9, 20), minutes=60)

        assert duplicate_detector.classify(first, second) == MatchType.STRONG

    def test_similar_title_close_start_is_moderate(self, duplicate_detector, make_event):
        first = make_event(title="Team Standup", start=at(MONDAY, 9))
        second = make_event(title="Team Standups", start=at(MONDAY, 9, 20))

        assert duplicate_detector.classify(first, second) == MatchType.MODERATE

    def test_punctuation_ignored_for_moderate(self, duplicate_detector, make_event):
        first = make_event(title="Weekly Sync!", start=at(MONDAY, 9))
        second = make_event(title="Weekly Sync", start=at(MONDAY, 9, 10))

        assert duplicate_detector.classify(first, second) == MatchType.MODERATE

    def test_similar_title_far_apart_is_not_a_match(self, duplicate_detector, make_event):
        first = make_event(title="Team Standup", start=at(MONDAY, 9))
        second = make_event(title="Team Standups", start=at(MONDAY, 10))

        assert duplicate_detector.classify(first, second) is None

    def test_different_titles_never_match(self, duplicate_detector, make_event):
        first = make_event(title="Budget review", start=at(MONDAY, 9))
        second = make_event(title="Dentist", start=at(MONDAY, 9))

        assert duplicate_detector.classify(first, second) is None

    def test_same_event_is_not_its_own_duplicate(self, duplicate_detector, make_event):
        event = make_event(title="Sync", event_id="abc", source="google")
        same = make_event(title="Sync", event_id="abc", source="google")

        assert duplicate_detector.classify(event, same) is None

    def test_same_id_from_other_source_can_match(self, duplicate_detector, make_event):
        first = make_event(title="Sync", event_id="abc", source="google")
        second = make_event(title="Sync", event_id="abc", source="outlook")

        assert duplicate_detector.classify(first, second) == MatchType.EXACT

    def test_weak_tier_never_matches(self, duplicate_detector, make_event):
        first = make_event(title="Weekly Sync", start=at(MONDAY, 9))
        second = make_event(title="Weekly Sync", start=at(MONDAY + timedelta(days=7), 9))

        assert duplicate_detector.classify(first, second) is None
        assert duplicate_detector._is_weak_match(first, second) is False


class TestDetectDuplicates:
    """Greedy, order-sensitive grouping."""

    def test_two_synced_copies(self, duplicate_detector, make_event):
        events = [
            make_event(title="Sync", start=at(MONDAY, 9), event_id="1", source="google"),
            make_event(title="Sync", start=at(MONDAY, 9), event_id="2", source="outlook"),
        ]

        groups = duplicate_detector.detect_duplicates(events)

        assert len(groups) == 1
        assert groups[0].match_type == MatchType.EXACT
        assert groups[0].confidence == 1.0
        assert groups[0].primary_event is events[0]
        assert groups[0].duplicates == [events[1]]

    def test_no_duplicates(self, duplicate_detector, make_event):
        events = [
            make_event(title="Sync", start=at(MONDAY, 9)),
            make_event(title="Lunch", start=at(MONDAY, 12)),
        ]
        assert duplicate_detector.detect_duplicates(events) == []

    def test_empty_input(self, duplicate_detector):
        assert duplicate_detector.detect_duplicates([]) == []

    def test_first_match_sets_group_tier(self, duplicate_detector, make_event):
        events = [
            make_event(title="Planning", start=at(MONDAY, 9), minutes=60),
            make_event(title="Planning", start=at(MONDAY, 9, 20), minutes=60),
            make_event(title="Planning", start=at(MONDAY, 9), minutes=60),
        ]

        groups = duplicate_detector.detect_duplicates(events)

        assert len(groups) == 1
        assert groups[0].events == events
        assert groups[0].match_type == MatchType.STRONG
        assert groups[0].confidence == 0.9

    def test_groups_sorted_by_confidence(self, duplicate_detector, make_event):
        events = [
            make_event(title="Team Standup", start=at(MONDAY, 9)),
            make_event(title="Team Standups", start=at(MONDAY, 9, 20)),
            make_event(title="Sync", start=at(MONDAY, 14)),
            make_event(title="Sync", start=at(MONDAY, 14)),
        ]

        groups = duplicate_detector.detect_duplicates(events)

        assert [group.match_type for group in groups] == [MatchType.EXACT, MatchType.MODERATE]
        assert [group.confidence for group in groups] == [1.0, 0.7]

    def test_event_belongs_to_one_group(self, duplicate_detector, make_event):
        events = [
            make_event(title="Sync", start=at(MONDAY, 9)),
            make_event(title="Sync", start=at(MONDAY, 9)),
            make_event(title="Sync", start=at(MONDAY, 9)),
        ]

        groups = duplicate_detector.detect_duplicates(events)

        assert len(groups) == 1
        assert len(groups[0].events) == 3

    def test_repeated_identity_is_skipped(self, duplicate_detector, make_event):
        event = make_event(title="Sync", event_id="abc", source="google")
        copy = make_event(title="Sync", event_id="abc", source="google")

        assert duplicate_detector.detect_duplicates([event, copy]) == []

    def test_cross_calendar_sources(self, duplicate_detector, make_event):
        events = [
            make_event(title="Sync", source="google"),
            make_event(title="Sync", source="outlook"),
            make_event(title="Sync", source="google"),
        ]

        group = duplicate_detector.detect_duplicates(events)[0]

        assert group.sources == ["google", "outlook"]
        assert group.is_cross_calendar


class TestFilterDuplicates:
    """Filtering keeps primaries and original order."""

    def test_removes_non_primary_members(self, duplicate_detector, make_event):
        lunch = make_event(title="Lunch", start=at(MONDAY, 12))
        primary = make_event(title="Sync", start=at(MONDAY, 9), source="google")
        copy = make_event(title="Sync", start=at(MONDAY, 9), source="outlook")

        assert duplicate_detector.filter_duplicates([lunch, primary, copy]) == [lunch, primary]

    def test_moderate_groups_are_filtered(self, duplicate_detector, make_event):
        first = make_event(title="Team Standup", start=at(MONDAY, 9))
        second = make_event(title="Team Standups", start=at(MONDAY, 9, 20))

        assert duplicate_detector.filter_duplicates([first, second]) == [first]

    def test_primaries_always_kept(self, duplicate_detector, make_event):
        events = [
            make_event(title=title, start=at(MONDAY, hour))
            for title, hour in [("Sync", 9), ("Review", 11), ("sync", 9), ("Review", 11), ("Sync", 9)]
        ]

        groups = duplicate_detector.detect_duplicates(events)
        filtered = duplicate_detector.filter_duplicates(events)

        for group in groups:
            assert group.primary_event in filtered
            for duplicate in group.duplicates:
                assert duplicate not in filtered
        assert filtered == [events[0], events[1]]

    def test_duplicates_to_remove_threshold(self, duplicate_detector, make_event):
        events = [
            make_event(title="Team Standup", start=at(MONDAY, 9)),
            make_event(title="Team Standups", start=at(MONDAY, 9, 20)),
            make_event(title="Sync", start=at(MONDAY, 14)),
            make_event(title="Sync", start=at(MONDAY, 14)),
        ]
        groups = duplicate_detector.detect_duplicates(events)

        assert duplicate_detector.duplicates_to_remove(groups) == [events[3], events[1]]
        assert duplicate_detector.duplicates_to_remove(groups, minimum_confidence=0.95) == [events[3]]


class TestTitleSimilarity:

    @pytest.mark.parametrize("first,second,expected", [
        ("kitten", "sitting", 3),
        ("", "abc", 3),
        ("abc", "", 3),
        ("same", "same", 0),
        ("flaw", "lawn", 2),
    ])
    def test_levenshtein_distance(self, first, second, expected):
        assert levenshtein_distance(first, second) == expected

    def test_normalize_title(self):
        assert normalize_title("  Q3 Planning: Kick-off!  ") == "q3 planning kickoff"

    def test_identical_after_normalizing(self):
        assert title_similarity("Weekly Sync!", "weekly sync") == 1.0

    def test_empty_titles_are_identical(self):
        assert title_similarity("", "???") == 1.0

    def test_similarity_ratio(self):
        assert title_similarity("Team Standup", "Team Standups") == pytest.approx(1 - 1 / 13)
