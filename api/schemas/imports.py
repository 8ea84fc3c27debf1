"""
Pydantic schemas for CSV import endpoints.

Uploads travel as base64 inside a JSON body so the API never touches
temporary files.
"""

from __future__ import annotations

from pydantic import Field, field_validator

from sandwich.csv_import import ImportResult

from .base import CamelModel


class CsvUploadRequest(CamelModel):
    """A CSV file encoded as base64."""

    csv_data_base64: str = Field(..., min_length=1)
    filename: str = "upload.csv"

    @field_validator("filename")
    @classmethod
    def validate_filename(cls, v: str) -> str:
        if not v.lower().endswith(".csv"):
            raise ValueError("Only CSV files are allowed")
        return v


class ImportResultResponse(CamelModel):
    total_records: int
    success_count: int
    error_count: int
    errors: list[str]

    @classmethod
    def from_result(cls, result: ImportResult) -> ImportResultResponse:
        return cls.from_domain(result)
