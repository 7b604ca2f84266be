"""
Error model for catalog operations.

Every failure raised by the store or the mutation coordinator is a
``CatalogError`` carrying a machine-readable code. The GraphQL layer
turns these into ``GraphQLError`` instances whose extensions hold the
code and category, so clients can branch on them without parsing
messages.

Example:
    try:
        coordinator.add_record(data, cache)
    except CatalogError as e:
        raise e.to_graphql_error()
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from graphql import GraphQLError


class ErrorCategory(Enum):
    """High-level error categories.

    - VALIDATION: Input rejected, show field-level errors
    - NOT_FOUND: Target record does not exist
    """

    VALIDATION = "validation"
    NOT_FOUND = "not_found"


class CatalogError(Exception):
    """Base class for deterministic, caller-facing catalog failures.

    Attributes:
        code: Machine-readable error code (e.g., "INVALID_INPUT")
        category: High-level error category
        field: Offending input field, if any
        details: Structured error details
    """

    code = "CATALOG_ERROR"
    category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details or {}

    def to_graphql_extensions(self) -> dict[str, Any]:
        """Convert to GraphQL error extensions."""
        extensions: dict[str, Any] = {
            "code": self.code,
            "category": self.category.value,
        }
        if self.field:
            extensions["field"] = self.field
        if self.details:
            extensions["details"] = self.details
        return extensions

    def to_graphql_error(self) -> GraphQLError:
        return GraphQLError(
            self.message,
            original_error=self,
            extensions=self.to_graphql_extensions(),
        )

    def to_log_dict(self) -> dict[str, Any]:
        """Convert to dict for structured logging."""
        return {
            "error_code": self.code,
            "category": self.category.value,
            "message": self.message,
            "field": self.field,
            "details": self.details,
        }


class InvalidInputError(CatalogError):
    """Raised when mutation input breaks a record invariant."""

    code = "INVALID_INPUT"
    category = ErrorCategory.VALIDATION


class NotFoundError(CatalogError):
    """Raised when an operation targets a record id that does not exist."""

    code = "NOT_FOUND"
    category = ErrorCategory.NOT_FOUND

    def __init__(self, record_id: str) -> None:
        super().__init__(
            f"Book not found: {record_id}",
            details={"id": record_id},
        )
        self.record_id = record_id
