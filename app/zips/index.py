"""In-memory index of postal records by city name."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple

from app.zips.models import ZipRecord


RecordGroup = Tuple[ZipRecord, ...]


def normalize_city(city: str) -> str:
    """
    Index key for a city name: lower-cased, nothing else.

    Surrounding whitespace is kept and no locale rules apply, so " Seattle"
    and "Seattle" are different keys.
    """
    return city.lower()


class CityIndex:
    """
    Read-only mapping of normalized city name -> records in load order.

    Built once with `CityIndex.build` and never mutated afterwards, so it can
    be shared across concurrent requests without locking.
    """

    __slots__ = ("_groups", "_record_count")

    def __init__(self, groups: Mapping[str, RecordGroup]):
        self._groups = MappingProxyType(dict(groups))
        self._record_count = sum(len(group) for group in self._groups.values())

    @classmethod
    def build(cls, records: Iterable[ZipRecord]) -> "CityIndex":
        groups: Dict[str, List[ZipRecord]] = {}
        for record in records:
            groups.setdefault(normalize_city(record.city), []).append(record)
        return cls({key: tuple(group) for key, group in groups.items()})

    def lookup(self, city: str) -> RecordGroup:
        """Records for `city` (any case), or an empty tuple."""
        return self._groups.get(normalize_city(city), ())

    @property
    def record_count(self) -> int:
        return self._record_count

    def keys(self) -> Iterator[str]:
        return iter(self._groups)

    def __contains__(self, key: object) -> bool:
        return key in self._groups

    def __len__(self) -> int:
        return len(self._groups)

    def __repr__(self) -> str:
        return f"CityIndex(cities={len(self)}, records={self.record_count})"
