"""Type Registry - resolves stored ``_type`` tags to document classes.

Naming convention:
    class Circle(Shape)            -> "Circle"
    class Circle(Shape, type_name="shapes.circle") -> "shapes.circle"

Embedded lists may be polymorphic, so each stored element is resolved
through this registry when an association proxy reconstructs it.
"""

from __future__ import annotations

from typing import Any

from docnest.core.exceptions import DuplicateTypeError, TypeNotFoundError


def _qualified(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class TypeRegistry:
    """Maps type tags to document classes.

    Registering the same class twice is a no-op. Re-registering a class
    with an identical qualified name (a module reload) replaces the old
    entry; any other collision is an error.

    Raises:
        DuplicateTypeError: If two distinct classes claim one type tag.
    """

    def __init__(self) -> None:
        self._types: dict[str, type] = {}

    def register(self, cls: type, type_name: str | None = None) -> str:
        """Register *cls* under *type_name* (defaults to the class name).

        Returns:
            The tag the class was registered under.
        """
        name = type_name or cls.__name__
        existing = self._types.get(name)
        if existing is not None and existing is not cls:
            if _qualified(existing) != _qualified(cls):
                raise DuplicateTypeError(name, _qualified(existing), _qualified(cls))
        self._types[name] = cls
        return name

    def get(self, type_name: str) -> type:
        """Look up a document class by type tag.

        Raises:
            TypeNotFoundError: If no class is registered under the tag.
        """
        try:
            return self._types[type_name]
        except KeyError:
            raise TypeNotFoundError(type_name) from None

    def resolve(self, attributes: dict[str, Any], default: type | None = None) -> type:
        """Resolve the class for a stored element.

        Uses the element's ``_type`` tag when present, else *default*.
        """
        tag = attributes.get("_type")
        if tag:
            return self.get(tag)
        if default is None:
            raise TypeNotFoundError("<untagged>")
        return default

    def has(self, type_name: str) -> bool:
        """Check if a type tag is registered."""
        return type_name in self._types

    def unregister(self, type_name: str) -> None:
        self._types.pop(type_name, None)

    @property
    def type_names(self) -> list[str]:
        """List all registered type tags, sorted alphabetically."""
        return sorted(self._types.keys())

    def __len__(self) -> int:
        """Number of registered types."""
        return len(self._types)


# Default registry every Document subclass registers into.
registry = TypeRegistry()
