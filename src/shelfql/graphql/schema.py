"""
Strawberry types and resolvers for the book catalog.

SDL::

    type Query {
      books: [Book!]!
      book(id: ID!): Book
      searchBooks(query: String!): [Book!]!
    }

    type Mutation {
      addBook(input: BookInput!): Book!
      updateBook(id: ID!, input: BookInput!): Book
      deleteBook(id: ID!): Boolean!
    }

Catalog errors are re-raised as ``GraphQLError`` with ``extensions.code``
set to ``INVALID_INPUT`` or ``NOT_FOUND``.
"""

from __future__ import annotations

from typing import Any

import strawberry

from shelfql.graphql.context import GraphQLContext
from shelfql.runtime.errors import CatalogError
from shelfql.specs.record import Record, RecordInput, RecordPatch


@strawberry.type(description="A catalog entry")
class Book:
    id: strawberry.ID
    title: str
    author: str
    year: int
    genre: str | None = None

    @classmethod
    def from_record(cls, record: Record) -> Book:
        return cls(
            id=strawberry.ID(record.id),
            title=record.title,
            author=record.author,
            year=record.year,
            genre=record.genre,
        )


@strawberry.input(description="Fields for adding or updating a book")
class BookInput:
    title: str
    author: str
    year: int
    genre: str | None = strawberry.UNSET

    def to_record_input(self) -> RecordInput:
        genre = None if self.genre is strawberry.UNSET else self.genre
        return RecordInput(title=self.title, author=self.author, year=self.year, genre=genre)

    def to_patch(self) -> RecordPatch:
        """Patch with every field the client sent. An omitted genre stays untouched."""
        fields: dict[str, Any] = {"title": self.title, "author": self.author, "year": self.year}
        if self.genre is not strawberry.UNSET:
            fields["genre"] = self.genre
        return RecordPatch(**fields)


@strawberry.type
class Query:
    @strawberry.field(description="All books in insertion order")
    def books(self, info: strawberry.Info) -> list[Book]:
        ctx: GraphQLContext = info.context
        return [Book.from_record(record) for record in ctx.catalog.queries.list_all()]

    @strawberry.field(description="Get a book by ID")
    async def book(self, info: strawberry.Info, id: strawberry.ID) -> Book | None:
        ctx: GraphQLContext = info.context
        record = await ctx.catalog.queries.get_by_id(str(id), ctx.records)
        return Book.from_record(record) if record is not None else None

    @strawberry.field(description="Case-insensitive match on title or author")
    def search_books(self, info: strawberry.Info, query: str) -> list[Book]:
        ctx: GraphQLContext = info.context
        return [Book.from_record(record) for record in ctx.catalog.queries.search_by_term(query)]


@strawberry.type
class Mutation:
    @strawberry.mutation(description="Add a new book")
    def add_book(self, info: strawberry.Info, input: BookInput) -> Book:
        ctx: GraphQLContext = info.context
        try:
            record = ctx.catalog.mutations.add_record(input.to_record_input(), ctx.records)
        except CatalogError as e:
            raise e.to_graphql_error() from e
        return Book.from_record(record)

    @strawberry.mutation(description="Update an existing book")
    def update_book(self, info: strawberry.Info, id: strawberry.ID, input: BookInput) -> Book | None:
        ctx: GraphQLContext = info.context
        try:
            record = ctx.catalog.mutations.update_record(str(id), input.to_patch(), ctx.records)
        except CatalogError as e:
            raise e.to_graphql_error() from e
        return Book.from_record(record)

    @strawberry.mutation(description="Delete a book; false when the ID is unknown")
    def delete_book(self, info: strawberry.Info, id: strawberry.ID) -> bool:
        ctx: GraphQLContext = info.context
        return ctx.catalog.mutations.delete_record(str(id), ctx.records)
