"""
shelfql runtime

In-memory catalog core plus the HTTP server around it.

This module provides:
- RecordStore: authoritative record collection
- BatchCache: per-request coalescing cache over by-id reads
- MutationCoordinator: validated writes with cache sync
- QuerySurface: list, get and search
- Catalog: wires the above together

Example usage:
    >>> from shelfql.runtime import Catalog
    >>> catalog = Catalog()
    >>> cache = catalog.open_scope()
    >>> record = await catalog.queries.get_by_id("1", cache)
"""

from shelfql.runtime.batch_cache import BatchCache
from shelfql.runtime.catalog import Catalog
from shelfql.runtime.errors import CatalogError, ErrorCategory, InvalidInputError, NotFoundError
from shelfql.runtime.mutations import MAX_YEARS_AHEAD, MutationCoordinator
from shelfql.runtime.queries import QuerySurface
from shelfql.runtime.store import RecordStore

__all__ = [
    "BatchCache",
    "Catalog",
    "CatalogError",
    "ErrorCategory",
    "InvalidInputError",
    "MAX_YEARS_AHEAD",
    "MutationCoordinator",
    "NotFoundError",
    "QuerySurface",
    "RecordStore",
]
