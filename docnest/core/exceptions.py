"""DocNest exception hierarchy.

All exceptions are DocNest-specific. Raw driver exceptions are never
exposed to callers; storage failures on the save path surface as a
``False`` return instead of an exception.
"""

from __future__ import annotations

from typing import Any


class DocNestError(Exception):
    """Base exception for all DocNest errors."""


# --- Registry ---


class RegistryError(DocNestError):
    """Base for document type registry errors."""


class TypeNotFoundError(RegistryError):
    """Raised when a stored type tag has no registered document class."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"Document type not found: '{type_name}'")


class DuplicateTypeError(RegistryError):
    """Raised when two different classes claim the same type tag."""

    def __init__(self, type_name: str, existing: str, incoming: str) -> None:
        self.type_name = type_name
        super().__init__(f"Duplicate document type '{type_name}': {existing} and {incoming}")


# --- Documents ---


class DocumentError(DocNestError):
    """Base for document errors."""


class ValidationError(DocumentError):
    """Raised by the strict save/create variants when a document has errors."""

    def __init__(self, document: Any, errors: list[Any]) -> None:
        self.document = document
        self.errors = list(errors)
        super().__init__(
            f"Validation failed for {type(document).__name__}: {', '.join(map(str, self.errors))}"
        )


class UnboundCollectionError(DocumentError):
    """Raised when a root document is saved without a bound collection."""

    def __init__(self, class_name: str) -> None:
        self.class_name = class_name
        super().__init__(
            f"No collection bound to {class_name}; call Engine.bind({class_name}) first"
        )


class DocumentNotFoundError(DocumentError):
    """Raised when a repository lookup by id matches no stored document."""

    def __init__(self, class_name: str, document_id: Any) -> None:
        self.class_name = class_name
        self.document_id = document_id
        super().__init__(f"{class_name} not found: '{document_id}'")


# --- Criteria ---


class CriteriaError(DocNestError):
    """Raised on unknown scopes or malformed pagination options."""


# --- Adapter ---


class AdapterError(DocNestError):
    """Base for storage adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised on connection failures."""


class PoolError(AdapterError):
    """Raised on connection pool failures."""
