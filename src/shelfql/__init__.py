"""
shelfql - GraphQL book catalog.

This package provides:
- RecordStore: the authoritative in-memory collection of book records
- BatchCache: per-request coalescing loader in front of by-id reads
- MutationCoordinator: validated writes kept in lockstep with the cache
- create_app: FastAPI application serving the Strawberry schema
"""

from shelfql._version import get_version as _get_version

__version__ = _get_version()

from shelfql.runtime.catalog import Catalog
from shelfql.specs.record import Record, RecordInput, RecordPatch

__all__ = ["Catalog", "Record", "RecordInput", "RecordPatch", "__version__"]
