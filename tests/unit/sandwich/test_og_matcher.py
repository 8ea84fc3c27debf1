"""Tests for OG Project cross-matching."""

from __future__ import annotations

from datetime import timedelta

from sandwich.duplicates import OgProjectMatcher, is_early_entry
from sandwich.duplicates.og_matcher import DUPLICATE_OG_REASON, EARLY_MATCH_REASON
from sandwich.models import OG_HOST_NAME
from tests.factories import BASE_TIME, make_collection


def og(record_id, **kwargs):
    return make_collection(record_id, host_name=OG_HOST_NAME, **kwargs)


class TestIsEarlyEntry:
    def test_missing_or_blank_host(self):
        assert is_early_entry(make_collection(1, host_name=None))
        assert is_early_entry(make_collection(2, host_name="   "))

    def test_placeholder_host_names(self):
        assert is_early_entry(make_collection(1, host_name="Unknown Host"))
        assert is_early_entry(make_collection(2, host_name="No Location Given"))

    def test_named_and_og_hosts_are_not_early(self):
        assert not is_early_entry(make_collection(1, host_name="Alpha"))
        assert not is_early_entry(og(2))


class TestOgProjectMatcher:
    def test_early_entry_pairs_with_matching_og_entry(self):
        og_entry = og(1)
        early = make_collection(2, host_name=None)

        matches = OgProjectMatcher().match([og_entry, early])

        assert len(matches) == 1
        assert matches[0].og_entry is og_entry
        assert matches[0].early_entry is early
        assert matches[0].duplicate_og_entry is None
        assert matches[0].reason == EARLY_MATCH_REASON

    def test_early_entry_requires_same_date_and_count(self):
        records = [
            og(1),
            make_collection(2, host_name=None, individual_sandwiches=99),
            make_collection(3, host_name=None, collection_date="2025-04-01"),
        ]

        assert OgProjectMatcher().match(records) == []

    def test_early_entry_references_first_scanned_og_entry(self):
        first = og(1, submitted_at=BASE_TIME)
        second = og(2, submitted_at=BASE_TIME + timedelta(days=1))
        early = make_collection(3, host_name="unknown")

        early_matches = [m for m in OgProjectMatcher().match([first, second, early]) if m.early_entry]

        assert len(early_matches) == 1
        assert early_matches[0].og_entry is first

    def test_repeated_og_entries_keep_newest(self):
        oldest = og(1, submitted_at=BASE_TIME)
        newest = og(2, submitted_at=BASE_TIME + timedelta(days=2))
        middle = og(3, submitted_at=BASE_TIME + timedelta(days=1))

        matches = OgProjectMatcher().match([oldest, newest, middle])

        assert [m.reason for m in matches] == [DUPLICATE_OG_REASON, DUPLICATE_OG_REASON]
        assert all(m.og_entry is newest for m in matches)
        assert [m.duplicate_og_entry for m in matches] == [middle, oldest]
        assert all(m.early_entry is None for m in matches)

    def test_early_pairings_listed_before_og_duplicates(self):
        records = [og(1), og(2), make_collection(3, host_name=None)]

        matches = OgProjectMatcher().match(records)

        assert [m.reason for m in matches] == [EARLY_MATCH_REASON, DUPLICATE_OG_REASON]

    def test_configurable_og_host_name(self):
        og_entry = make_collection(1, host_name="Founders")
        early = make_collection(2, host_name=None)

        matches = OgProjectMatcher(og_host_name="Founders").match([og_entry, early])

        assert len(matches) == 1
        assert matches[0].og_entry is og_entry
