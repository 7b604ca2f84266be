"""Shared pytest fixtures for shelfql tests."""

import pytest

from shelfql.demo_data import seed_catalog
from shelfql.runtime.catalog import Catalog
from shelfql.runtime.store import RecordStore
from shelfql.specs.record import RecordInput

FIXED_YEAR = 2026


@pytest.fixture
def store() -> RecordStore:
    """Return an empty record store."""
    return RecordStore()


@pytest.fixture
def catalog() -> Catalog:
    """Return a catalog holding the two demo books, with the year pinned to 2026."""
    catalog = Catalog(year_provider=lambda: FIXED_YEAR)
    seed_catalog(catalog)
    return catalog


@pytest.fixture
def dune() -> RecordInput:
    return RecordInput(title="Dune", author="Frank Herbert", year=1965, genre="Science Fiction")


@pytest.fixture
def fixed_year() -> int:
    """The year the catalog fixture treats as current."""
    return FIXED_YEAR
