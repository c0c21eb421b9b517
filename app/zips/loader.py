"""
Dataset loader for postal records.

Two on-disk formats are supported:

- CSV ("delimited-text"): the first row is a header and is always skipped
  without being inspected. Every following row is mapped by position:
  column 0 is the postal code, column 3 the city and column 6 the state.
  Values are taken verbatim (no trimming).
- JSON ("structured-text"): a single array of {"zip", "city", "state"}
  objects.

Loading is all-or-nothing: the first malformed row or decode failure aborts
the whole load and nothing is returned.
"""

from __future__ import annotations

import csv
import io
import logging
from enum import Enum
from pathlib import Path
from typing import BinaryIO, List, Union

from pydantic import TypeAdapter, ValidationError

from app.zips.models import ZipRecord


logger = logging.getLogger(__name__)

CODE_COLUMN = 0
CITY_COLUMN = 3
REGION_COLUMN = 6
MIN_COLUMNS = REGION_COLUMN + 1

_records_adapter = TypeAdapter(List[ZipRecord])


class LoadError(Exception):
    """The dataset could not be loaded."""


class DatasetParseError(LoadError):
    """A CSV row could not be parsed into a record."""


class DatasetDecodeError(LoadError):
    """The JSON document could not be decoded into records."""


class DatasetFormat(str, Enum):
    CSV = "csv"
    JSON = "json"

    @classmethod
    def from_name(cls, name: str) -> "DatasetFormat":
        """Resolve a format from its extension or its descriptive name."""
        aliases = {
            "csv": cls.CSV,
            "delimited-text": cls.CSV,
            "json": cls.JSON,
            "structured-text": cls.JSON,
        }
        try:
            return aliases[(name or "").strip().lower()]
        except KeyError:
            raise ValueError(f"unsupported dataset format: {name!r}") from None


def _load_csv(source: BinaryIO) -> List[ZipRecord]:
    text = io.TextIOWrapper(source, encoding="utf-8", newline="")
    try:
        reader = csv.reader(text, strict=True)
        records: List[ZipRecord] = []
        try:
            # header row, discarded unconditionally
            if next(reader, None) is None:
                return records
            for row in reader:
                if not row:
                    # blank line
                    continue
                if len(row) < MIN_COLUMNS:
                    raise DatasetParseError(
                        f"error loading zips from CSV: line {reader.line_num}: "
                        f"expected at least {MIN_COLUMNS} fields, got {len(row)}"
                    )
                records.append(
                    ZipRecord(
                        code=row[CODE_COLUMN],
                        city=row[CITY_COLUMN],
                        region=row[REGION_COLUMN],
                    )
                )
        except csv.Error as e:
            raise DatasetParseError(
                f"error loading zips from CSV: line {reader.line_num}: {e}"
            ) from e
        except UnicodeDecodeError as e:
            raise DatasetParseError(f"error loading zips from CSV: {e}") from e
        return records
    finally:
        # hand the caller's stream back open
        text.detach()


def _load_json(source: BinaryIO) -> List[ZipRecord]:
    data = source.read()
    if not data.strip():
        return []
    try:
        return _records_adapter.validate_json(data)
    except ValidationError as e:
        raise DatasetDecodeError(f"error decoding zips from json: {e}") from e


def load_records(source: BinaryIO, fmt: DatasetFormat) -> List[ZipRecord]:
    """
    Parse a dataset stream into records, preserving file order.

    Raises DatasetParseError (CSV) or DatasetDecodeError (JSON) on bad input.
    """
    fmt = DatasetFormat(fmt)
    if fmt is DatasetFormat.CSV:
        return _load_csv(source)
    return _load_json(source)


def load_records_from_path(path: Union[str, Path], fmt: DatasetFormat) -> List[ZipRecord]:
    """Open `path` and load it. Open/read failures are reported as LoadError."""
    path = Path(path)
    try:
        with path.open("rb") as f:
            records = load_records(f, fmt)
    except OSError as e:
        raise LoadError(f"error opening zips file {path}: {e}") from e

    logger.info(f"Loaded {len(records)} zips from {path}")
    return records
