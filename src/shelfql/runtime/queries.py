"""Read-only entry points over the record store."""

from __future__ import annotations

from collections.abc import Awaitable

from shelfql.runtime.batch_cache import BatchCache
from shelfql.runtime.store import RecordStore
from shelfql.specs.record import Record


class QuerySurface:
    """List, point and search reads. Point reads go through the request's cache."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def list_all(self) -> list[Record]:
        return self._store.list()

    def get_by_id(self, record_id: str, cache: BatchCache) -> Awaitable[Record | None]:
        return cache.load(record_id)

    def search_by_term(self, term: str) -> list[Record]:
        """Case-insensitive substring match on title or author. Empty term matches all."""
        needle = term.lower()
        return [
            record
            for record in self._store.list()
            if needle in record.title.lower() or needle in record.author.lower()
        ]
