#!/usr/bin/env python3
"""Tests for the mutation coordinator and its cache sync."""

import pytest

from shelfql.runtime.catalog import Catalog
from shelfql.runtime.errors import ErrorCategory, InvalidInputError, NotFoundError
from shelfql.runtime.mutations import MAX_YEARS_AHEAD
from shelfql.specs.record import RecordInput, RecordPatch


def _book(year: int) -> RecordInput:
    return RecordInput(title="Future Book", author="Someone", year=year)


# =============================================================================
# Validation
# =============================================================================


class TestYearValidation:
    """Year must lie in [0, current year + 5]."""

    @pytest.mark.asyncio
    async def test_upper_bound_accepted(self, catalog: Catalog, fixed_year: int) -> None:
        """current year + 5 is allowed."""
        record = catalog.mutations.add_record(
            _book(fixed_year + MAX_YEARS_AHEAD), catalog.open_scope()
        )

        assert record.year == fixed_year + 5

    @pytest.mark.asyncio
    async def test_past_upper_bound_rejected(self, catalog: Catalog, fixed_year: int) -> None:
        """current year + 6 raises InvalidInputError and stores nothing."""
        with pytest.raises(InvalidInputError) as exc_info:
            catalog.mutations.add_record(_book(fixed_year + 6), catalog.open_scope())

        assert exc_info.value.code == "INVALID_INPUT"
        assert exc_info.value.field == "year"
        assert exc_info.value.category is ErrorCategory.VALIDATION
        assert len(catalog) == 2

    @pytest.mark.asyncio
    async def test_zero_accepted_negative_rejected(self, catalog: Catalog) -> None:
        """0 is the lower bound."""
        cache = catalog.open_scope()
        catalog.mutations.add_record(_book(0), cache)

        with pytest.raises(InvalidInputError):
            catalog.mutations.add_record(_book(-1), cache)

    @pytest.mark.asyncio
    async def test_update_revalidates_year(self, catalog: Catalog, fixed_year: int) -> None:
        """An out-of-range year in a patch is rejected and nothing changes."""
        cache = catalog.open_scope()

        with pytest.raises(InvalidInputError):
            catalog.mutations.update_record("1", RecordPatch(year=fixed_year + 6), cache)

        loaded = await catalog.open_scope().load("1")
        assert loaded is not None and loaded.year == 1925

    @pytest.mark.asyncio
    async def test_update_cannot_clear_required_field(self, catalog: Catalog) -> None:
        """Explicitly nulling title is invalid input."""
        with pytest.raises(InvalidInputError) as exc_info:
            catalog.mutations.update_record("1", RecordPatch(title=None), catalog.open_scope())

        assert exc_info.value.field == "title"

    def test_load_records_is_all_or_nothing(self, fixed_year: int) -> None:
        """A bad item in a bulk load leaves the store empty."""
        catalog = Catalog(year_provider=lambda: fixed_year)

        with pytest.raises(InvalidInputError):
            catalog.mutations.load_records([_book(1999), _book(fixed_year + 10)])

        assert len(catalog) == 0


# =============================================================================
# Cache sync
# =============================================================================


class TestCacheSync:
    """Every write leaves the caller's cache consistent with the store."""

    @pytest.mark.asyncio
    async def test_add_primes_new_record(self, catalog: Catalog, dune: RecordInput) -> None:
        """The new id is served from the cache without a fetch."""
        cache = catalog.open_scope()

        record = catalog.mutations.add_record(dune, cache)
        loaded = await cache.load(record.id)

        assert loaded == record
        assert cache.batch_count == 0

    @pytest.mark.asyncio
    async def test_update_replaces_stale_cached_value(self, catalog: Catalog) -> None:
        """A value cached before the update is replaced by the updated record."""
        cache = catalog.open_scope()
        before = await cache.load("1")
        assert before is not None and before.title == "The Great Gatsby"

        catalog.mutations.update_record("1", RecordPatch(title="Gatsby"), cache)

        after = await cache.load("1")
        assert after is not None and after.title == "Gatsby"
        assert cache.batch_count == 1

    @pytest.mark.asyncio
    async def test_update_merges_onto_prior_state(self, catalog: Catalog) -> None:
        """A fresh scope sees the patch merged with the untouched fields."""
        catalog.mutations.update_record("2", RecordPatch(year=1961), catalog.open_scope())

        loaded = await catalog.open_scope().load("2")

        assert loaded is not None
        assert loaded.year == 1961
        assert loaded.title == "To Kill a Mockingbird"
        assert loaded.author == "Harper Lee"
        assert loaded.genre == "Southern Gothic"

    @pytest.mark.asyncio
    async def test_update_resolves_pending_lookup_with_new_state(self, catalog: Catalog) -> None:
        """A lookup queued before the write, in the same turn, sees the write."""
        cache = catalog.open_scope()
        pending = cache.load("1")

        catalog.mutations.update_record("1", RecordPatch(genre="Tragedy"), cache)

        loaded = await pending
        assert loaded is not None and loaded.genre == "Tragedy"

    @pytest.mark.asyncio
    async def test_delete_evicts_cached_record(self, catalog: Catalog) -> None:
        """A record cached before deletion is never served afterwards."""
        cache = catalog.open_scope()
        assert await cache.load("1") is not None

        assert catalog.mutations.delete_record("1", cache) is True

        assert await cache.load("1") is None
        assert await catalog.open_scope().load("1") is None

    @pytest.mark.asyncio
    async def test_writes_on_unread_ids_in_fresh_scope(
        self, catalog: Catalog, dune: RecordInput
    ) -> None:
        """Add, update and delete succeed on ids the scope has never loaded."""
        added = catalog.mutations.add_record(dune, catalog.open_scope())
        updated = catalog.mutations.update_record(
            "1", RecordPatch(title="Gatsby"), catalog.open_scope()
        )
        deleted = catalog.mutations.delete_record("2", catalog.open_scope())

        assert added.id == "3"
        assert updated.title == "Gatsby"
        assert deleted is True
        assert [record.id for record in catalog.queries.list_all()] == ["1", "3"]

    @pytest.mark.asyncio
    async def test_delete_missing_returns_false(self, catalog: Catalog) -> None:
        """Deleting an unknown id reports False and still clears the key."""
        cache = catalog.open_scope()
        await cache.load("999")

        assert catalog.mutations.delete_record("999", cache) is False
        await cache.load("999")
        assert cache.fetched_keys == ["999", "999"]


# =============================================================================
# Not found
# =============================================================================


class TestNotFound:
    """Updating a missing record raises NotFoundError."""

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, catalog: Catalog) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            catalog.mutations.update_record("999", RecordPatch(title="X"), catalog.open_scope())

        assert exc_info.value.to_graphql_extensions() == {
            "code": "NOT_FOUND",
            "category": "not_found",
            "details": {"id": "999"},
        }

    @pytest.mark.asyncio
    async def test_update_after_delete_raises(self, catalog: Catalog) -> None:
        cache = catalog.open_scope()
        catalog.mutations.delete_record("2", cache)

        with pytest.raises(NotFoundError):
            catalog.mutations.update_record("2", RecordPatch(year=1962), cache)
