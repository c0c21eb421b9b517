"""Service layer for postal code lookups."""

from __future__ import annotations

from typing import List, Sequence

from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError

from app.zips.index import CityIndex, RecordGroup
from app.zips.models import ZipRecord


_records_adapter = TypeAdapter(List[ZipRecord])


class RecordEncodingError(Exception):
    """Records could not be serialized to JSON."""


class ZipLookupService:
    """Read-only lookups over a prebuilt CityIndex."""

    def __init__(self, index: CityIndex):
        self.index = index

    def lookup_by_city(self, city: str) -> RecordGroup:
        """
        Records whose city matches `city`, case-insensitively, in load order.

        An unknown city yields an empty group; that is not an error.
        """
        return self.index.lookup(city)

    def encode(self, records: Sequence[ZipRecord]) -> bytes:
        """Serialize records as a JSON array of {"zip", "city", "state"} objects."""
        try:
            return _records_adapter.dump_json(list(records), by_alias=True)
        except (PydanticSerializationError, TypeError, ValueError) as e:
            raise RecordEncodingError(str(e)) from e
