"""
Demo data for dev mode.

Seeds the catalog with the two books the service has always started
with, or with books read from a JSON file.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import TypeAdapter

from shelfql.runtime.catalog import Catalog
from shelfql.specs.record import Record, RecordInput

DEFAULT_BOOKS: tuple[RecordInput, ...] = (
    RecordInput(
        title="The Great Gatsby",
        author="F. Scott Fitzgerald",
        year=1925,
        genre="Novel",
    ),
    RecordInput(
        title="To Kill a Mockingbird",
        author="Harper Lee",
        year=1960,
        genre="Southern Gothic",
    ),
)

_BOOK_LIST = TypeAdapter(list[RecordInput])


def seed_catalog(catalog: Catalog, books: tuple[RecordInput, ...] = DEFAULT_BOOKS) -> list[Record]:
    """Insert ``books`` into an empty catalog. On a fresh catalog the ids start at "1"."""
    return catalog.mutations.load_records(books)


def load_seed_file(path: str | Path) -> tuple[RecordInput, ...]:
    """
    Read seed books from a JSON file.

    The file holds a list of objects with ``title``, ``author``, ``year``
    and optionally ``genre``.

    Raises:
        FileNotFoundError: If the file doesn't exist
        pydantic.ValidationError: If an entry is malformed
    """
    full_path = Path(path)
    if not full_path.exists():
        raise FileNotFoundError(f"Seed file not found: {full_path}")

    with open(full_path, encoding="utf-8") as f:
        data = json.load(f)

    return tuple(_BOOK_LIST.validate_python(data))
