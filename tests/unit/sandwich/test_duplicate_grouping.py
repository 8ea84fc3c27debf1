"""Tests for exact-duplicate grouping of sandwich collections."""

from __future__ import annotations

from datetime import timedelta

from sandwich.duplicates import exact_duplicate_candidates, find_duplicate_groups, newest_first
from sandwich.models import OLDEST_INSTANT, SandwichCollection, parse_timestamp
from tests.factories import BASE_TIME, make_collection


class TestParseTimestamp:
    """Submission timestamps in the forms PocketBase and old imports produce."""

    def test_iso_string_with_z(self):
        assert parse_timestamp("2025-03-01T12:00:00Z") == BASE_TIME

    def test_pocketbase_space_separated_form(self):
        assert parse_timestamp("2025-03-01 12:00:00.000Z") == BASE_TIME

    def test_naive_string_is_treated_as_utc(self):
        assert parse_timestamp("2025-03-01T12:00:00") == BASE_TIME

    def test_epoch_milliseconds(self):
        assert parse_timestamp(int(BASE_TIME.timestamp() * 1000)) == BASE_TIME

    def test_unparsable_values_sort_first(self):
        assert parse_timestamp("not a date") == OLDEST_INSTANT
        assert parse_timestamp(None) == OLDEST_INSTANT
        assert parse_timestamp("") == OLDEST_INSTANT


class TestFindDuplicateGroups:
    """Grouping by (date, host, individual count, group collections)."""

    def test_newest_entry_is_kept(self):
        older = make_collection(1, submitted_at=BASE_TIME)
        newer = make_collection(2, submitted_at=BASE_TIME + timedelta(hours=1))

        groups = find_duplicate_groups([older, newer])

        assert len(groups) == 1
        assert groups[0].count == 2
        assert groups[0].keep_newest is newer
        assert groups[0].to_delete == [older]

    def test_records_differing_in_any_key_field_are_not_grouped(self):
        base = make_collection(1)
        records = [
            base,
            make_collection(2, host_name="Beta"),
            make_collection(3, collection_date="2025-03-02"),
            make_collection(4, individual_sandwiches=101),
            make_collection(5, group_collections='[{"sandwichCount": 5}]'),
        ]

        assert find_duplicate_groups(records) == []

    def test_group_collections_compared_as_raw_strings(self):
        compact = make_collection(1, group_collections='[{"sandwichCount":5}]')
        spaced = make_collection(2, group_collections='[{"sandwichCount": 5}]')

        assert find_duplicate_groups([compact, spaced]) == []

    def test_missing_host_names_group_together(self):
        records = [make_collection(1, host_name=None), make_collection(2, host_name=None)]

        groups = find_duplicate_groups(records)

        assert len(groups) == 1
        assert groups[0].count == 2

    def test_missing_host_does_not_match_literal_null_text(self):
        records = [make_collection(1, host_name=None), make_collection(2, host_name="null")]

        assert find_duplicate_groups(records) == []

    def test_groups_returned_in_first_seen_order(self):
        records = [
            make_collection(1, host_name="Beta"),
            make_collection(2, host_name="Alpha"),
            make_collection(3, host_name="Beta"),
            make_collection(4, host_name="Alpha"),
        ]

        groups = find_duplicate_groups(records)

        assert [group.keep_newest.host_name for group in groups] == ["Beta", "Alpha"]

    def test_equal_timestamps_keep_scan_order(self):
        first = make_collection(7)
        second = make_collection(3)

        ordered = newest_first([first, second])

        assert ordered == [first, second]

    def test_unparsable_timestamp_is_never_kept_over_a_real_one(self):
        broken = make_collection(1, submitted_at="garbage")
        real = make_collection(2, submitted_at="2020-01-01T00:00:00Z")

        groups = find_duplicate_groups([broken, real])

        assert groups[0].keep_newest is real
        assert groups[0].to_delete == [broken]


class TestExactDuplicateCandidates:
    def test_candidates_are_every_non_newest_entry(self):
        records = [
            make_collection(1, submitted_at=BASE_TIME),
            make_collection(2, submitted_at=BASE_TIME + timedelta(minutes=5)),
            make_collection(3, submitted_at=BASE_TIME + timedelta(minutes=10)),
            make_collection(4, host_name="Solo"),
        ]

        candidate_ids = {record.id for record in exact_duplicate_candidates(records)}

        assert candidate_ids == {1, 2}

    def test_each_group_keeps_exactly_one(self):
        records: list[SandwichCollection] = []
        for host in ("Alpha", "Beta", "Gamma"):
            for offset in range(3):
                records.append(
                    make_collection(len(records) + 1, host_name=host, submitted_at=BASE_TIME + timedelta(days=offset))
                )

        candidates = exact_duplicate_candidates(records)
        survivors = [record for record in records if record not in candidates]

        assert len(candidates) == 6
        assert sorted(record.host_name for record in survivors) == ["Alpha", "Beta", "Gamma"]
        assert all(record.submitted_at == BASE_TIME + timedelta(days=2) for record in survivors)
