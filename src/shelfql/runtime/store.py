"""
In-memory record store.

The single source of truth for book records. All operations are
synchronous and never yield, so a write and the cache sync that follows
it always run in the same event-loop turn.
"""

from __future__ import annotations

import itertools
import logging

from shelfql.runtime.errors import NotFoundError
from shelfql.runtime.logging import get_store_logger, log_with_context
from shelfql.specs.record import Record, RecordInput, RecordPatch

logger = get_store_logger()


class RecordStore:
    """
    Insertion-ordered collection of records.

    Ids come from a counter that only moves forward, so an id freed by a
    delete is never handed out again. Readers get copies of the stored
    records; only ``update_fields`` touches the live instances.
    """

    def __init__(self) -> None:
        self._records: dict[str, Record] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._records)

    def list(self) -> list[Record]:
        """Return all live records in insertion order."""
        return [record.model_copy() for record in self._records.values()]

    def find(self, record_id: str) -> Record | None:
        record = self._records.get(record_id)
        return record.model_copy() if record is not None else None

    def insert(self, fields: RecordInput) -> Record:
        """Append a new record under a freshly generated id."""
        record_id = str(next(self._ids))
        record = Record(id=record_id, **fields.model_dump())
        self._records[record_id] = record
        log_with_context(logger, logging.DEBUG, "Record inserted", id=record_id)
        return record.model_copy()

    def update_fields(self, record_id: str, patch: RecordPatch) -> Record:
        """
        Merge the explicitly set fields of ``patch`` into a record.

        Raises:
            NotFoundError: No record has ``record_id``
        """
        record = self._records.get(record_id)
        if record is None:
            raise NotFoundError(record_id)

        changes = patch.changes()
        for name, value in changes.items():
            setattr(record, name, value)

        log_with_context(
            logger, logging.DEBUG, "Record updated", id=record_id, fields=sorted(changes)
        )
        return record.model_copy()

    def remove_by_id(self, record_id: str) -> bool:
        """Remove a record. Returns whether one was removed."""
        removed = self._records.pop(record_id, None) is not None
        log_with_context(logger, logging.DEBUG, "Record removed", id=record_id, removed=removed)
        return removed
