"""
GraphQL request context.

Built fresh for every request, so each request resolves against its own
``BatchCache`` and nothing cached in one request is visible to another.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from strawberry.fastapi import BaseContext

from shelfql.runtime.batch_cache import BatchCache
from shelfql.runtime.catalog import Catalog


class GraphQLContext(BaseContext):
    """
    Per-request context handed to every resolver.

    Attributes:
        catalog: Shared catalog (store, coordinator, queries)
        records: This request's batching cache for by-id reads
    """

    def __init__(self, catalog: Catalog, records: BatchCache | None = None) -> None:
        super().__init__()
        self.catalog = catalog
        self.records = records if records is not None else catalog.open_scope()


def make_context_getter(catalog: Catalog) -> Callable[[], Awaitable[GraphQLContext]]:
    """Return a FastAPI dependency that opens a new scope per request."""

    async def get_context() -> GraphQLContext:
        return GraphQLContext(catalog)

    return get_context
