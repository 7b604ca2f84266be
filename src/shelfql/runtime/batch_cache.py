"""
Per-request batching cache for by-id record reads.

Wraps Strawberry's ``DataLoader``. Every ``load`` issued before the
event loop next regains control is queued on one batch; the batch is
dispatched on the following loop iteration and resolved from the store
in a single call. Results, including ``None`` for unknown ids, stay
cached for the life of the ``BatchCache``.

One ``BatchCache`` is created per external request and threaded through
the GraphQL context, so nothing leaks between requests.

Usage::

    cache = BatchCache(store)
    a, b, again = await asyncio.gather(cache.load("1"), cache.load("2"), cache.load("1"))
    assert cache.batch_count == 1 and cache.fetched_keys == ["1", "2"]
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Iterable
from contextlib import suppress

from strawberry.dataloader import DataLoader

from shelfql.runtime.logging import get_cache_logger, log_with_context
from shelfql.runtime.store import RecordStore
from shelfql.specs.record import Record

logger = get_cache_logger()


class BatchCache:
    """Coalescing loader and scoped cache in front of ``RecordStore.find``.

    The mutation coordinator keeps it consistent with the store through
    ``clear`` and ``prime``; both are synchronous and take effect before
    any pending batch is dispatched.

    Attributes:
        batch_count: Number of batches dispatched against the store
        fetched_keys: Every key fetched from the store, in fetch order
    """

    def __init__(self, store: RecordStore, *, max_batch_size: int | None = None) -> None:
        self._store = store
        self._loader: DataLoader[str, Record | None] = DataLoader(
            load_fn=self._fetch,
            max_batch_size=max_batch_size,
        )
        self.batch_count = 0
        self.fetched_keys: list[str] = []

    async def _fetch(self, keys: list[str]) -> list[Record | None]:
        # Keys re-queued after a clear() can repeat within one batch.
        distinct = list(dict.fromkeys(keys))
        found = {key: self._store.find(key) for key in distinct}

        self.batch_count += 1
        self.fetched_keys.extend(distinct)
        log_with_context(
            logger,
            logging.DEBUG,
            "Batch dispatched",
            keys=distinct,
            hits=sum(1 for record in found.values() if record is not None),
        )
        return [found[key] for key in keys]

    def load(self, record_id: str) -> Awaitable[Record | None]:
        """Queue a lookup of ``record_id`` on the current batch.

        The lookup is registered at call time, so callers may gather
        several ``load`` calls and still get a single store fetch.
        """
        return self._loader.load(record_id)

    def load_many(self, record_ids: Iterable[str]) -> Awaitable[list[Record | None]]:
        return self._loader.load_many(record_ids)

    def clear(self, record_id: str) -> None:
        """Forget the cached value so the next ``load`` refetches.

        Does nothing when ``record_id`` was never loaded or primed.
        """
        # DataLoader.clear raises KeyError for keys it has not cached.
        with suppress(KeyError):
            self._loader.clear(record_id)
        log_with_context(logger, logging.DEBUG, "Cache cleared", id=record_id)

    def prime(self, record_id: str, record: Record | None) -> None:
        """Store a known-fresh value without fetching, overwriting any cached one.

        A lookup of ``record_id`` that is queued but not yet dispatched is
        resolved with ``record`` as well.
        """
        self._loader.prime(record_id, record, force=True)
        log_with_context(logger, logging.DEBUG, "Cache primed", id=record_id)
