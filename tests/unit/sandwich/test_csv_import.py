"""Tests for spreadsheet import parsing."""

from __future__ import annotations

import base64
import json
from datetime import UTC, datetime

import pytest

from sandwich.csv_import import (
    CsvFormat,
    CsvRowError,
    collection_from_row,
    decode_upload,
    detect_format,
    directory_entry_from_row,
    import_rows,
    parse_collection_rows,
    parse_leading_int,
    read_rows,
)

NOW = datetime(2025, 6, 1, 9, 30, tzinfo=UTC)

COMPLEX_CSV = "\n".join(
    [
        "WEEK #,Hosts:,,,",
        "1,TRUE,,2025-01-06,450",
        '2,TRUE,,2025-01-13,"380"',
        "3,FALSE,,2025-01-20,200",
        "",
    ]
)

STRUCTURED_CSV = "\n".join(
    [
        "Week_Number,Date,Total_Sandwiches",
        "1,01/06/2025,450",
        "2,2025-01-13,0",
        "3,not a date,12",
    ]
)

STANDARD_CSV = "\n".join(
    [
        "Host,Count,Date,Group Collections",
        "Alpha Church,120 sandwiches,2025-02-01,15",
        "Beta School,80,2025-02-02,",
        ",,,",
        "Gamma Hall,lots,2025-02-03,",
    ]
)


class TestDetectFormat:
    def test_complex(self):
        assert detect_format(COMPLEX_CSV) is CsvFormat.COMPLEX
        assert detect_format("Summary,Hosts:,\n1,TRUE") is CsvFormat.COMPLEX

    def test_structured(self):
        assert detect_format(STRUCTURED_CSV) is CsvFormat.STRUCTURED

    def test_standard(self):
        assert detect_format(STANDARD_CSV) is CsvFormat.STANDARD
        assert detect_format("Week_Number,Date\n1,2025-01-01") is CsvFormat.STANDARD


class TestParseCollectionRows:
    def test_complex_rows_become_weekly_totals(self):
        csv_format, rows = parse_collection_rows(COMPLEX_CSV, NOW)

        assert csv_format is CsvFormat.COMPLEX
        assert [row["Host Name"] for row in rows] == ["Week 1 Total", "Week 2 Total"]
        assert [row["Sandwich Count"] for row in rows] == ["450", "380"]
        assert rows[0]["Date"] == "2025-01-06"

    def test_structured_rows_skip_empty_weeks_and_normalize_dates(self):
        csv_format, rows = parse_collection_rows(STRUCTURED_CSV, NOW)

        assert csv_format is CsvFormat.STRUCTURED
        assert [row["Host Name"] for row in rows] == ["Week 1 Complete Data", "Week 3 Complete Data"]
        assert rows[0]["Date"] == "2025-01-06"
        assert rows[1]["Date"] == "not a date"

    def test_standard_rows_skip_blank_lines(self):
        csv_format, rows = parse_collection_rows(STANDARD_CSV, NOW)

        assert csv_format is CsvFormat.STANDARD
        assert len(rows) == 3


class TestCollectionFromRow:
    def test_standard_row(self):
        row = {"Host": " Alpha Church ", "Count": "120 sandwiches", "Date": "2025-02-01", "Group Collections": "15"}

        fields = collection_from_row(row, 1, NOW)

        assert fields["host_name"] == "Alpha Church"
        assert fields["individual_sandwiches"] == 120
        assert fields["collection_date"] == "2025-02-01"
        assert json.loads(fields["group_collections"]) == [{"sandwichCount": 15, "description": "Group Collection"}]
        assert fields["submitted_at"] == NOW.isoformat()

    def test_created_at_column_sets_submission_time(self):
        row = {"Host Name": "Alpha", "Sandwiches": "5", "Collection Date": "2025-02-01", "Created At": "2025-01-31T08:00:00Z"}

        fields = collection_from_row(row, 1, NOW)

        assert fields["submitted_at"] == "2025-01-31T08:00:00+00:00"

    def test_unparsable_created_at_falls_back_to_now(self):
        row = {"Host Name": "Alpha", "Sandwiches": "5", "Collection Date": "2025-02-01", "Created At": "yesterday"}

        assert collection_from_row(row, 1, NOW)["submitted_at"] == NOW.isoformat()

    @pytest.mark.parametrize(
        ("row", "message"),
        [
            ({"Count": "5", "Date": "2025-02-01"}, "Missing Host Name"),
            ({"Host": "Alpha", "Date": "2025-02-01"}, "Missing Individual Sandwiches"),
            ({"Host": "Alpha", "Count": "5"}, "Missing Collection Date"),
            ({"Host": "Alpha", "Count": "lots", "Date": "2025-02-01"}, 'Invalid sandwich count "lots"'),
        ],
    )
    def test_row_errors(self, row, message):
        with pytest.raises(CsvRowError, match=message):
            collection_from_row(row, 4, NOW)

    def test_row_error_names_available_columns(self):
        with pytest.raises(CsvRowError, match=r"available columns: Count, Date\) in row 2"):
            collection_from_row({"Count": "5", "Date": "2025-02-01"}, 2, NOW)


class TestDirectoryEntryFromRow:
    def test_alternative_column_names(self):
        row = {"fullName": "Dana Lee", "emailAddress": "dana@example.org", "phoneNumber": "555-0100", "Description": "Driver"}

        entry = directory_entry_from_row(row, 1)

        assert entry == {
            "name": "Dana Lee",
            "email": "dana@example.org",
            "phone": "555-0100",
            "address": None,
            "notes": "Driver",
        }

    def test_name_and_email_required(self):
        with pytest.raises(CsvRowError, match="Missing required fields"):
            directory_entry_from_row({"name": "Dana Lee"}, 3)


class TestImportRows:
    def test_row_errors_are_collected_and_capped(self):
        rows = read_rows(STANDARD_CSV)
        created = []

        result = import_rows(rows, lambda row, n: collection_from_row(row, n, NOW), created.append, max_errors=10)

        assert result.total_records == 3
        assert result.success_count == 2
        assert result.error_count == 1
        assert result.errors == ['Row 3: Invalid sandwich count "lots" in row 3']
        assert [fields["host_name"] for fields in created] == ["Alpha Church", "Beta School"]

    def test_store_failures_count_as_row_errors(self):
        rows = [{"name": f"Person {i}", "email": f"p{i}@example.org"} for i in range(15)]

        def failing_create(fields):
            raise RuntimeError("store unavailable")

        result = import_rows(rows, directory_entry_from_row, failing_create, max_errors=10)

        assert result.error_count == 15
        assert len(result.errors) == 10
        assert result.errors[0] == "Row 1: store unavailable"


class TestDecoding:
    def test_decode_upload_strips_bom(self):
        encoded = base64.b64encode("\ufeffHost,Count\nAlpha,5\n".encode()).decode()

        assert decode_upload(encoded).startswith("Host,Count")

    def test_invalid_base64(self):
        with pytest.raises(ValueError, match="base64"):
            decode_upload("not base64!!")

    @pytest.mark.parametrize(("text", "expected"), [("120 sandwiches", 120), (" 7", 7), ("lots", None), (None, None)])
    def test_parse_leading_int(self, text, expected):
        assert parse_leading_int(text) == expected
