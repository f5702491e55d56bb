"""In-memory mirrors of every collection the dashboard displays.

Mirrors are only ever changed through ``apply_*`` calls, and services make
those calls after the database commit has returned. A failed write therefore
never shows up here.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional


Record = Dict[str, Any]


class Collection:
    """Ordered mirror of one table's records (camelCase dicts)."""

    def __init__(self, name: str, sort_key: Optional[Callable[[Record], Any]] = None, reverse: bool = False):
        self.name = name
        self._sort_key = sort_key
        self._reverse = reverse
        self._records: List[Record] = []
        self.loaded = False

    def all(self) -> List[Record]:
        return list(self._records)

    def load(self, records: List[Record]) -> None:
        self._records = list(records)
        self.loaded = True

    def apply_insert(self, record: Record) -> None:
        self._records.append(record)
        self._resort()

    def apply_replace(self, record: Record) -> None:
        self._records = [record if r.get("id") == record.get("id") else r for r in self._records]
        self._resort()

    def apply_delete(self, record_id: str) -> bool:
        """Drop *record_id*; returns False (and changes nothing) when absent."""
        remaining = [r for r in self._records if r.get("id") != record_id]
        removed = len(remaining) != len(self._records)
        self._records = remaining
        return removed

    def invalidate(self) -> None:
        self._records = []
        self.loaded = False

    def _resort(self) -> None:
        if self._sort_key is None:
            return
        # None keys sort first so optional display keys never raise
        self._records.sort(
            key=lambda r: (self._sort_key(r) is not None, self._sort_key(r)),
            reverse=self._reverse,
        )


class AppState:
    """Registry of collection mirrors, one per table."""

    def __init__(self):
        self._collections: Dict[str, Collection] = {}

    def register(self, name: str, sort_key: Optional[Callable[[Record], Any]] = None, reverse: bool = False) -> Collection:
        if name not in self._collections:
            self._collections[name] = Collection(name, sort_key=sort_key, reverse=reverse)
        return self._collections[name]

    def collection(self, name: str) -> Collection:
        return self._collections[name]

    def __contains__(self, name: str) -> bool:
        return name in self._collections

    def invalidate_all(self) -> None:
        for collection in self._collections.values():
            collection.invalidate()
