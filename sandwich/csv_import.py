"""
CSV import for sandwich collections, contacts and recipients.

Volunteers upload spreadsheets exported from several generations of the
tracking sheet. Three collection layouts are recognised from the first line:

- complex: the weekly totals sheet ("WEEK #" / "Hosts:" banner rows); data
  rows start with a week number and contain a TRUE checkbox column
- structured: the cleaned weekly export with Week_Number / Total_Sandwiches
- standard: one collection per row with a header line

Every row is imported on its own. A bad row is reported and the rest of
the file still goes in.
"""

from __future__ import annotations

import base64
import binascii
import csv
import io
import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from .group_collections import single_group_entry
from .models import OLDEST_INSTANT, parse_timestamp

logger = logging.getLogger(__name__)

DEFAULT_IMPORT_ERROR_LIMIT = 10

HOST_COLUMNS = ("Host Name", "Host", "host_name", "HostName")
COUNT_COLUMNS = ("Individual Sandwiches", "Sandwich Count", "Count", "sandwich_count", "SandwichCount", "Sandwiches")
DATE_COLUMNS = ("Collection Date", "Date", "date", "CollectionDate")
CREATED_AT_COLUMNS = ("Created At", "created_at", "CreatedAt")

NAME_COLUMNS = ("name", "Name", "fullName", "full_name")
EMAIL_COLUMNS = ("email", "Email", "emailAddress", "email_address")
PHONE_COLUMNS = ("phone", "Phone", "phoneNumber", "phone_number")
ADDRESS_COLUMNS = ("address", "Address", "fullAddress", "full_address")
NOTES_COLUMNS = ("notes", "Notes", "description", "Description")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_COMPLEX_DATA_ROW = re.compile(r"^\d+,")
_STRUCTURED_DATE_FORMATS = ("%m/%d/%Y", "%m/%d/%y", "%Y/%m/%d", "%B %d, %Y")


class CsvFormat(Enum):
    """Recognised collection spreadsheet layouts"""

    COMPLEX = "complex"
    STRUCTURED = "structured"
    STANDARD = "standard"


class CsvRowError(ValueError):
    """A single row could not be turned into a record."""


@dataclass
class ImportResult:
    total_records: int = 0
    success_count: int = 0
    error_count: int = 0
    errors: list[str] = field(default_factory=list)


def decode_upload(csv_data_base64: str) -> str:
    """Decode a base64 CSV upload into text."""
    try:
        raw = base64.b64decode(csv_data_base64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError("CSV data is not valid base64") from e
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ValueError("CSV file must be UTF-8 encoded") from e


def parse_leading_int(text: str | None) -> int | None:
    """Parse the integer at the start of text ("120 sandwiches" -> 120)."""
    if text is None:
        return None
    match = _LEADING_INT.match(str(text))
    return int(match.group(1)) if match else None


def _first_value(row: dict[str, str], columns: Iterable[str]) -> str | None:
    for column in columns:
        value = row.get(column)
        if value:
            return value
    return None


def read_rows(content: str) -> list[dict[str, str]]:
    """Read a headed CSV into trimmed dicts, skipping blank lines."""
    reader = csv.DictReader(io.StringIO(content))
    if reader.fieldnames:
        reader.fieldnames = [name.strip() for name in reader.fieldnames]

    rows: list[dict[str, str]] = []
    for row in reader:
        cleaned = {key: (value or "").strip() for key, value in row.items() if isinstance(key, str)}
        if any(cleaned.values()):
            rows.append(cleaned)
    return rows


def detect_format(content: str) -> CsvFormat:
    first_line = content.split("\n", 1)[0]
    if "WEEK #" in first_line or "Hosts:" in first_line:
        return CsvFormat.COMPLEX
    if "Week_Number" in first_line and "Total_Sandwiches" in first_line:
        return CsvFormat.STRUCTURED
    return CsvFormat.STANDARD


def _normalize_date(value: str) -> str:
    try:
        return datetime.fromisoformat(value).date().isoformat()
    except ValueError:
        pass
    for date_format in _STRUCTURED_DATE_FORMATS:
        try:
            return datetime.strptime(value, date_format).date().isoformat()
        except ValueError:
            continue
    return value


def _complex_rows(content: str, created_at: str) -> list[dict[str, str]]:
    lines = content.split("\n")
    start_row = 0
    for index, line in enumerate(lines):
        if _COMPLEX_DATA_ROW.match(line) and "TRUE" in line:
            start_row = index
            break

    rows: list[dict[str, str]] = []
    for line in lines[start_row:]:
        line = line.strip()
        if not line or "TRUE" not in line:
            continue

        parts = line.split(",")
        if len(parts) < 5 or not parts[4]:
            continue

        week_number = parts[0]
        date = parts[3]
        total = re.sub(r'[",]', "", parts[4])
        if date and total and parse_leading_int(total) is not None:
            rows.append(
                {
                    "Host Name": f"Week {week_number} Total",
                    "Sandwich Count": total,
                    "Date": date,
                    "Logged By": "CSV Import",
                    "Notes": "Weekly total import from complex spreadsheet",
                    "Created At": created_at,
                }
            )
    return rows


def _structured_rows(content: str, created_at: str) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for row in read_rows(content):
        week_number = row.get("Week_Number")
        date = row.get("Date")
        total = row.get("Total_Sandwiches")
        if not (week_number and date and total):
            continue
        if (parse_leading_int(total) or 0) <= 0:
            continue

        rows.append(
            {
                "Host Name": f"Week {week_number} Complete Data",
                "Sandwich Count": total,
                "Date": _normalize_date(date),
                "Logged By": "CSV Import",
                "Notes": "Structured weekly data import with location and group details",
                "Created At": created_at,
            }
        )
    return rows


def parse_collection_rows(content: str, now: datetime | None = None) -> tuple[CsvFormat, list[dict[str, str]]]:
    """Detect the layout and return rows keyed by standard column names."""
    created_at = (now or datetime.now(UTC)).isoformat()
    csv_format = detect_format(content)
    logger.info(f"{csv_format.value.capitalize()} CSV format detected")

    if csv_format is CsvFormat.COMPLEX:
        return csv_format, _complex_rows(content, created_at)
    if csv_format is CsvFormat.STRUCTURED:
        return csv_format, _structured_rows(content, created_at)
    return csv_format, read_rows(content)


def collection_from_row(row: dict[str, str], row_number: int, now: datetime | None = None) -> dict[str, Any]:
    """Build collection fields from one CSV row.

    Raises:
        CsvRowError: when a required column is missing or unparseable
    """
    available = ", ".join(row.keys())
    host_name = _first_value(row, HOST_COLUMNS)
    if not host_name:
        raise CsvRowError(f"Missing Host Name (available columns: {available}) in row {row_number}")

    count_text = _first_value(row, COUNT_COLUMNS)
    if not count_text:
        raise CsvRowError(f"Missing Individual Sandwiches (available columns: {available}) in row {row_number}")

    date = _first_value(row, DATE_COLUMNS)
    if not date:
        raise CsvRowError(f"Missing Collection Date (available columns: {available}) in row {row_number}")

    sandwich_count = parse_leading_int(count_text.strip())
    if sandwich_count is None:
        raise CsvRowError(f'Invalid sandwich count "{count_text}" in row {row_number}')

    submitted_at = now or datetime.now(UTC)
    created_at = _first_value(row, CREATED_AT_COLUMNS)
    if created_at:
        parsed = parse_timestamp(created_at)
        if parsed != OLDEST_INSTANT:
            submitted_at = parsed

    group_collections = "[]"
    group_count = parse_leading_int((row.get("Group Collections") or "").strip() or None)
    if group_count is not None and group_count > 0:
        group_collections = single_group_entry(group_count)

    return {
        "host_name": host_name.strip(),
        "individual_sandwiches": sandwich_count,
        "collection_date": date.strip(),
        "group_collections": group_collections,
        "submitted_at": submitted_at.isoformat(),
    }


def directory_entry_from_row(row: dict[str, str], row_number: int) -> dict[str, Any]:
    """Build contact/recipient fields from one CSV row.

    Raises:
        CsvRowError: when name or email is missing
    """
    name = _first_value(row, NAME_COLUMNS)
    email = _first_value(row, EMAIL_COLUMNS)
    if not name or not email:
        raise CsvRowError(f"Missing required fields (name, email) in row {row_number}")

    phone = _first_value(row, PHONE_COLUMNS)
    address = _first_value(row, ADDRESS_COLUMNS)
    notes = _first_value(row, NOTES_COLUMNS)
    return {
        "name": name.strip(),
        "email": email.strip(),
        "phone": phone.strip() if phone else None,
        "address": address.strip() if address else None,
        "notes": notes.strip() if notes else None,
    }


def import_rows(
    rows: list[dict[str, str]],
    build: Callable[[dict[str, str], int], dict[str, Any]],
    create: Callable[[dict[str, Any]], Any],
    max_errors: int = DEFAULT_IMPORT_ERROR_LIMIT,
) -> ImportResult:
    """Build and store each row independently, collecting row errors."""
    result = ImportResult(total_records=len(rows))
    all_errors: list[str] = []

    for index, row in enumerate(rows):
        row_number = index + 1
        try:
            create(build(row, row_number))
            result.success_count += 1
        except Exception as e:
            result.error_count += 1
            message = f"Row {row_number}: {str(e) or 'Unknown error'}"
            all_errors.append(message)
            logger.error(message)

    result.errors = all_errors[:max_errors]
    logger.info(f"CSV import completed: {result.success_count}/{result.total_records} records imported")
    return result
