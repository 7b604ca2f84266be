"""
Record specification types.

Defines the book record held by the store, the insert payload and the
partial-update patch.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Fields a patch may never clear.
REQUIRED_FIELDS: tuple[str, ...] = ("title", "author", "year")


class RecordInput(BaseModel):
    """Payload for inserting a new record. The store assigns the id."""

    title: str = Field(description="Book title")
    author: str = Field(description="Author name")
    year: int = Field(description="Publication year")
    genre: str | None = Field(default=None, description="Optional genre")

    model_config = ConfigDict(frozen=True)


class Record(BaseModel):
    """
    One catalog entry.

    ``id`` is assigned by the store on insert and never changes. The
    store keeps the live instance and hands out copies.
    """

    id: str = Field(description="Opaque unique identifier")
    title: str
    author: str
    year: int
    genre: str | None = None

    model_config = ConfigDict(validate_assignment=True)


class RecordPatch(BaseModel):
    """
    Partial update for an existing record.

    Only fields passed explicitly are applied, so ``RecordPatch(genre=None)``
    clears the genre while ``RecordPatch(title="x")`` leaves it alone.
    """

    title: str | None = None
    author: str | None = None
    year: int | None = None
    genre: str | None = None

    model_config = ConfigDict(frozen=True)

    def changes(self) -> dict[str, Any]:
        """Return only the explicitly set fields."""
        return self.model_dump(include=self.model_fields_set)

    def cleared_required_fields(self) -> list[str]:
        """Names of required fields explicitly set to ``None``."""
        return [
            name
            for name in REQUIRED_FIELDS
            if name in self.model_fields_set and getattr(self, name) is None
        ]

