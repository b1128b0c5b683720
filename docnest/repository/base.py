"""Repository base class.

Thin wrapper binding one root document class to an Engine.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from docnest.core.exceptions import DocumentNotFoundError
from docnest.criteria.criteria import Criteria

T = TypeVar("T")


class Repository(Generic[T]):
    """Repository for one root document class.

    Binds ``document_class`` to its collection on construction. Subclasses
    add domain-specific finders on top of ``find``.
    """

    def __init__(
        self,
        engine: Any,
        document_class: type[T],
        collection_name: str | None = None,
    ) -> None:
        self.engine = engine
        self.document_class = document_class
        engine.bind(document_class, name=collection_name)

    @property
    def collection(self) -> Any:
        return self.document_class.collection  # type: ignore[attr-defined]

    def get(self, document_id: Any) -> T:
        """Load one root document by id.

        Raises:
            DocumentNotFoundError: If no document has that id.
        """
        attributes = self.collection.find_one(document_id)
        if attributes is None:
            raise DocumentNotFoundError(self.document_class.__name__, document_id)
        return self.document_class.instantiate(attributes)  # type: ignore[attr-defined,no-any-return]

    def find(self, **conditions: Any) -> Criteria:
        """Criteria over every stored document, restricted by *conditions*."""
        return Criteria(self.document_class, conditions)

    def all(self) -> list[T]:
        return Criteria(self.document_class).execute()

    def save(self, document: T, validate: bool = True) -> bool:
        return document.save(validate)  # type: ignore[attr-defined,no-any-return]

    def delete(self, document: T) -> bool:
        return self.collection.remove(document.id)  # type: ignore[attr-defined,no-any-return]
