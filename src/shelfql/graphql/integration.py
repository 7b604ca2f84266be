"""
FastAPI/Strawberry integration for the catalog schema.

Provides utilities for building the schema, mounting it on a FastAPI app
and printing its SDL.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from typing import Any

import strawberry
from fastapi import FastAPI
from graphql import GraphQLError
from strawberry.extensions import SchemaExtension
from strawberry.fastapi import GraphQLRouter
from strawberry.types import ExecutionContext

from shelfql.graphql.context import make_context_getter
from shelfql.graphql.schema import Mutation, Query
from shelfql.runtime.catalog import Catalog
from shelfql.runtime.errors import CatalogError
from shelfql.runtime.logging import get_graphql_logger, log_with_context

logger = get_graphql_logger()


def _find_catalog_error(error: GraphQLError) -> CatalogError | None:
    # Resolvers raise GraphQLError wrapping the CatalogError; execution wraps it once more.
    original: BaseException | None = error.original_error
    while isinstance(original, GraphQLError):
        original = original.original_error
    return original if isinstance(original, CatalogError) else None


class OperationLogger(SchemaExtension):
    """Logs each operation with its duration and batch statistics."""

    def on_operation(self) -> Iterator[None]:
        started = time.perf_counter()
        yield
        records = getattr(self.execution_context.context, "records", None)
        log_with_context(
            logger,
            logging.DEBUG,
            "Operation resolved",
            operation=self.execution_context.operation_name,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            batches=records.batch_count if records is not None else 0,
            fetched=len(records.fetched_keys) if records is not None else 0,
        )


class CatalogSchema(strawberry.Schema):
    """Schema that logs rejected mutations quietly and everything else loudly."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        unexpected = []
        for error in errors:
            catalog_error = _find_catalog_error(error)
            if catalog_error is not None:
                log_with_context(
                    logger,
                    logging.DEBUG,
                    "Request rejected",
                    catalog_error.to_log_dict(),
                    path=error.path,
                )
            else:
                unexpected.append(error)
        if unexpected:
            super().process_errors(unexpected, execution_context)


def create_schema() -> CatalogSchema:
    """Create the Strawberry schema for the book catalog."""
    return CatalogSchema(query=Query, mutation=Mutation, extensions=[OperationLogger])


def mount_graphql(
    app: FastAPI,
    catalog: Catalog,
    path: str = "/graphql",
    enable_graphiql: bool = True,
) -> None:
    """
    Mount the GraphQL endpoint on an existing FastAPI application.

    Every request gets a fresh ``GraphQLContext`` and therefore a fresh
    ``BatchCache``.

    Args:
        app: Existing FastAPI application
        catalog: Catalog the resolvers read and write
        path: URL path for GraphQL endpoint (default: /graphql)
        enable_graphiql: Serve the GraphiQL IDE on GET (default: True)
    """
    graphql_router: GraphQLRouter[Any, None] = GraphQLRouter(
        create_schema(),
        context_getter=make_context_getter(catalog),
        graphql_ide="graphiql" if enable_graphiql else None,
    )
    app.include_router(graphql_router, prefix=path)


def print_schema() -> str:
    """Return the GraphQL SDL for the catalog schema."""
    return create_schema().as_str()
