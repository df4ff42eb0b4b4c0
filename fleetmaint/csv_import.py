"""CSV parsing and validation for bulk truck import."""

import csv
import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, TextIO, Union

from .validation import TRUCK_FIELDS, clean_payload, validate_truck

NUMERIC_FIELDS = ("year", "current_mileage")
OPTIONAL_FIELDS = ("notes",)


@dataclass
class ImportRow:
    """One data row from an import file (row numbers start at 1)."""

    row: int
    data: Dict[str, Any]
    errors: List[str] = field(default_factory=list)


@dataclass
class ImportResults:
    valid: List[ImportRow] = field(default_factory=list)
    invalid: List[ImportRow] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.valid) + len(self.invalid)


def _normalize_header(name: str) -> str:
    return name.strip().lower().replace(" ", "_")


def validate_rows(rows: Iterable[Dict[str, Any]]) -> ImportResults:
    """Split raw rows into valid and invalid, collecting errors per row."""
    results = ImportResults()
    for index, raw in enumerate(rows, start=1):
        row = {
            _normalize_header(k): v
            for k, v in raw.items()
            if k is not None
        }
        data = clean_payload(row, numeric_fields=NUMERIC_FIELDS)
        data = {k: v for k, v in data.items() if k in TRUCK_FIELDS or k in OPTIONAL_FIELDS}

        missing = [f for f in TRUCK_FIELDS if f not in data]
        if missing:
            results.invalid.append(
                ImportRow(
                    index, data, [f"Missing required fields: {', '.join(missing)}"]
                )
            )
            continue

        errors = validate_truck(data)
        if errors:
            results.invalid.append(ImportRow(index, data, errors))
        else:
            results.valid.append(ImportRow(index, data))
    return results


def _skip_blank(reader: csv.DictReader) -> Iterable[Dict[str, Any]]:
    for row in reader:
        if any((v or "").strip() for v in row.values() if isinstance(v, str)):
            yield row


def parse_csv(fp: TextIO) -> ImportResults:
    """Parse and validate an open CSV stream with a header row."""
    reader = csv.DictReader(fp)
    return validate_rows(_skip_blank(reader))


def parse_csv_text(text: str) -> ImportResults:
    return parse_csv(io.StringIO(text))


def load_csv(filename: Union[str, Path]) -> ImportResults:
    """Parse and validate a CSV file."""
    with open(filename, "r", encoding="utf-8-sig", newline="") as fp:
        return parse_csv(fp)
