"""
GraphQL layer for shelfql.

Exposes the catalog as a Strawberry schema mounted on FastAPI:
- Query: books, book(id), searchBooks(query)
- Mutation: addBook, updateBook, deleteBook

Usage:
    from fastapi import FastAPI
    from shelfql.graphql import mount_graphql
    from shelfql.runtime import Catalog

    app = FastAPI()
    mount_graphql(app, Catalog())
"""

from shelfql.graphql.context import GraphQLContext
from shelfql.graphql.integration import create_schema, mount_graphql, print_schema
from shelfql.graphql.schema import Book, BookInput, Mutation, Query

__all__ = [
    "Book",
    "BookInput",
    "GraphQLContext",
    "Mutation",
    "Query",
    "create_schema",
    "mount_graphql",
    "print_schema",
]
