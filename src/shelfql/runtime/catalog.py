"""
Catalog wiring.

Owns one record store and the two components allowed to touch it. Each
external request opens its own ``BatchCache`` through ``open_scope``.
"""

from __future__ import annotations

from collections.abc import Callable

from shelfql.runtime.batch_cache import BatchCache
from shelfql.runtime.mutations import MutationCoordinator, current_year
from shelfql.runtime.queries import QuerySurface
from shelfql.runtime.store import RecordStore


class Catalog:
    """Store plus its coordinator and query surface.

    Example:
        >>> catalog = Catalog()
        >>> cache = catalog.open_scope()
        >>> record = catalog.mutations.add_record(RecordInput(...), cache)
    """

    def __init__(
        self,
        store: RecordStore | None = None,
        *,
        year_provider: Callable[[], int] = current_year,
        max_batch_size: int | None = None,
    ) -> None:
        self._store = store if store is not None else RecordStore()
        self._max_batch_size = max_batch_size
        self.mutations = MutationCoordinator(self._store, year_provider=year_provider)
        self.queries = QuerySurface(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def open_scope(self) -> BatchCache:
        """Start a resolution pass with an empty cache."""
        return BatchCache(self._store, max_batch_size=self._max_batch_size)
