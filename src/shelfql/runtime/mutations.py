"""
Mutation coordinator.

The only writer to the record store. Each mutation validates its input,
applies it to the store and then syncs the caller's ``BatchCache`` in the
same synchronous step, so no batch dispatched afterwards can pair a new
store state with an old cached value.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from shelfql.runtime.batch_cache import BatchCache
from shelfql.runtime.errors import InvalidInputError, NotFoundError
from shelfql.runtime.logging import get_mutation_logger, log_with_context
from shelfql.runtime.store import RecordStore
from shelfql.specs.record import Record, RecordInput, RecordPatch

logger = get_mutation_logger()

# How far past the current year a publication year may lie.
MAX_YEARS_AHEAD = 5


def current_year() -> int:
    return datetime.now(UTC).year


class MutationCoordinator:
    """
    Validates and applies writes, keeping a request's cache in lockstep.

    Args:
        store: The store this coordinator owns writes to
        year_provider: Returns the current year; overridable in tests
    """

    def __init__(
        self,
        store: RecordStore,
        *,
        year_provider: Callable[[], int] = current_year,
    ) -> None:
        self._store = store
        self._year_provider = year_provider

    def _validate_year(self, year: int) -> None:
        latest = self._year_provider() + MAX_YEARS_AHEAD
        if not 0 <= year <= latest:
            raise InvalidInputError(
                f"year must be between 0 and {latest}, got {year}",
                field="year",
                details={"min": 0, "max": latest, "value": year},
            )

    def _sync_cache(self, cache: BatchCache, record: Record) -> None:
        cache.clear(record.id)
        cache.prime(record.id, record)

    def add_record(self, data: RecordInput, cache: BatchCache) -> Record:
        """Insert a new record and prime it into ``cache``.

        Raises:
            InvalidInputError: ``data.year`` is out of range
        """
        try:
            self._validate_year(data.year)
        except InvalidInputError as e:
            log_with_context(logger, logging.INFO, "addRecord rejected", e.to_log_dict())
            raise

        record = self._store.insert(data)
        self._sync_cache(cache, record)
        log_with_context(logger, logging.INFO, "Record added", id=record.id, title=record.title)
        return record

    def load_records(self, items: Iterable[RecordInput]) -> list[Record]:
        """Bulk insert used at startup, before any request scope exists.

        Every item is validated before the first insert, so a bad item
        leaves the store untouched.
        """
        items = list(items)
        for item in items:
            self._validate_year(item.year)
        records = [self._store.insert(item) for item in items]
        log_with_context(logger, logging.INFO, "Records loaded", count=len(records))
        return records

    def update_record(self, record_id: str, patch: RecordPatch, cache: BatchCache) -> Record:
        """Apply ``patch`` to an existing record and re-prime it.

        Raises:
            NotFoundError: No record has ``record_id``
            InvalidInputError: The patch clears a required field or sets an
                out-of-range year
        """
        try:
            if self._store.find(record_id) is None:
                raise NotFoundError(record_id)

            cleared = patch.cleared_required_fields()
            if cleared:
                raise InvalidInputError(
                    f"{cleared[0]} cannot be null",
                    field=cleared[0],
                )
            if patch.year is not None:
                self._validate_year(patch.year)
        except (NotFoundError, InvalidInputError) as e:
            log_with_context(
                logger, logging.INFO, "updateRecord rejected", e.to_log_dict(), id=record_id
            )
            raise

        record = self._store.update_fields(record_id, patch)
        self._sync_cache(cache, record)
        log_with_context(
            logger,
            logging.INFO,
            "Record updated",
            id=record_id,
            fields=sorted(patch.model_fields_set),
        )
        return record

    def delete_record(self, record_id: str, cache: BatchCache) -> bool:
        """Remove a record. Missing ids report ``False`` rather than raising."""
        removed = self._store.remove_by_id(record_id)
        cache.clear(record_id)
        log_with_context(logger, logging.INFO, "Record deleted", id=record_id, removed=removed)
        return removed
