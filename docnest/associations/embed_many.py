"""Embedded one-to-many association proxy.

An EmbedMany is a live, ordered view over a list of embedded documents
stored inside a parent's attributes. It keeps two representations equal:

* ``target``: the materialized list of child documents, and
* ``parent.raw_attributes[name]``: the list of their attribute dicts.

Every mutating operation ends in ``_sync``, so after any call both lists
have the same length and the same ids in the same order.

Names the proxy does not define are resolved in tiers (see
``OperationKind``): extension operations from the options, then named
scopes on the element class (evaluated over the materialized list), then
read-only list operations.
"""

from __future__ import annotations

import copy
import functools
import logging
from typing import Any, Iterable, Iterator

from docnest.associations.options import Options
from docnest.core.enums import LifecycleEvent, Macro, OperationKind, Selector
from docnest.core.exceptions import RegistryError, ValidationError
from docnest.core.identity import identify
from docnest.criteria.criteria import Criteria, Page, scopes_of

logger = logging.getLogger(__name__)

# Non-mutating list operations forwarded to the materialized list
_SEQUENCE_OPERATIONS = frozenset({"index", "count", "copy"})


class EmbedMany:
    """Proxy over an embedded list of documents.

    Args:
        document: The owning (parent) document.
        options: Association options naming the mirrored attribute.
    """

    def __init__(self, document: Any, options: Options) -> None:
        self._document = document
        self._options = options
        self._target: list[Any] = self._reconstruct()

    @classmethod
    def instantiate(cls, document: Any, options: Options) -> EmbedMany:
        return cls(document, options)

    @classmethod
    def update(cls, children: Iterable[Any], document: Any, options: Options) -> EmbedMany:
        """Replace the association's content with *children*.

        Returns:
            The new proxy, already in sync with the parent's attributes.
        """
        proxy = cls(document, options)
        proxy.replace(children)
        return proxy

    @staticmethod
    def macro() -> Macro:
        return Macro.EMBED_MANY

    # --- State ---

    @property
    def name(self) -> str:
        return self._options.name

    @property
    def parent(self) -> Any:
        return self._document

    @property
    def options(self) -> Options:
        return self._options

    @property
    def klass(self) -> type:
        return self._options.klass

    @property
    def target(self) -> list[Any]:
        """The live materialized list. Do not mutate it directly."""
        return self._target

    @property
    def entries(self) -> list[Any]:
        return list(self._target)

    def _reconstruct(self) -> list[Any]:
        stored = self._document.raw_attributes.get(self.name)
        if not stored:
            return []
        documents = []
        for attributes in stored:
            child = self._options.resolve(attributes).instantiate(attributes)
            child.parentize(self._document, self.name)
            if child.id is None:
                identify(child, [other.get("_id") for other in stored if other is not attributes])
            documents.append(child)
        logger.debug(
            "Reconstructed %d %s on %r", len(documents), self.name, self._document
        )
        return documents

    def _sync(self) -> None:
        attributes = self._document.raw_attributes
        stored = attributes.get(self.name)
        serialized = [doc.raw_attributes for doc in self._target]
        if isinstance(stored, list):
            stored[:] = serialized
        else:
            attributes[self.name] = serialized

    def _materialize(self, attributes: dict[str, Any], type_: type | None = None) -> Any:
        """A new child built from *attributes*, parentized before assignment."""
        attributes = dict(attributes)
        klass = self._resolve_class(attributes, type_)
        attributes.pop("_type", None)

        document = klass.blank()
        document.parentize(self._document, self.name)
        document.apply_defaults()
        document.write_attributes(attributes)
        return document

    def _admit(self, child: Any) -> Any:
        """The document to store for *child*.

        Attribute dicts are built into documents. An instance already in the
        list is stored as a copy, so every element keeps its own id.
        """
        if isinstance(child, dict):
            return self._materialize(child)
        if child in self:
            duplicate = type(child).instantiate(copy.deepcopy(child.raw_attributes))
            duplicate.new_record = child.new_record
            return duplicate
        return child

    def _adopt(self, child: Any) -> None:
        child.parentize(self._document, self.name)
        identify(child, [doc.id for doc in self._target])

    def _resolve_class(self, attributes: dict[str, Any], type_: type | None) -> type:
        if type_ is not None:
            return type_
        tag = attributes.get("_type")
        if tag:
            return self._options.registry.get(tag)
        return self._options.klass

    # --- Mutation ---

    def replace(self, children: Iterable[Any]) -> EmbedMany:
        """Swap the whole content for *children* (documents or attribute dicts), in order."""
        children = list(children)
        for old in self._target:
            old.unparentize()
        self._target = []
        for child in children:
            child = self._admit(child)
            self._adopt(child)
            self._target.append(child)
        self._sync()
        return self

    def append(self, child: Any) -> EmbedMany:
        """Parentize *child* and append it. Returns the proxy for chaining."""
        child = self._admit(child)
        self._adopt(child)
        self._target.append(child)
        self._sync()
        return self

    def push(self, *children: Any) -> EmbedMany:
        for child in children:
            self.append(child)
        return self

    def concat(self, children: Iterable[Any]) -> list[Any]:
        """Append every child in order. Returns the appended documents."""
        appended = []
        for child in list(children):
            child = self._admit(child)
            self._adopt(child)
            self._target.append(child)
            appended.append(child)
        self._sync()
        return appended

    def __iadd__(self, children: Iterable[Any]) -> EmbedMany:
        self.concat(children)
        return self

    def build(self, attributes: dict[str, Any] | None = None, type_: type | None = None) -> Any:
        """Build a new, unsaved child and append it.

        The child is parentized before any of *attributes* are assigned.
        """
        document = self._materialize(attributes or {}, type_)
        identify(document, [doc.id for doc in self._target])

        self._target.append(document)
        self._sync()
        return document

    def create(self, attributes: dict[str, Any] | None = None, type_: type | None = None) -> Any:
        """Build a child and save it inside its create callbacks.

        The child is returned whether or not the save succeeded; a failure
        shows up in ``child.errors``.
        """
        document = self.build(attributes, type_)
        document.callbacks.run(document, LifecycleEvent.CREATE, document.save)
        return document

    def create_strict(
        self, attributes: dict[str, Any] | None = None, type_: type | None = None
    ) -> Any:
        """As create, raising ValidationError if the child has errors."""
        document = self.create(attributes, type_)
        errors = document.errors
        if errors:
            raise ValidationError(document, errors)
        return document

    def nested_build(self, attributes_by_index: dict[str, dict[str, Any]]) -> EmbedMany:
        """Build or update children by position.

        Keys are positions as strings (``{"0": {...}, "1": {...}}``).
        Existing positions are updated in place; others are built and
        appended.
        """
        for key, attributes in sorted(attributes_by_index.items(), key=lambda item: int(item[0])):
            index = int(key)
            if 0 <= index < len(self._target):
                self._target[index].write_attributes(attributes)
            else:
                self.build(attributes)
        self._sync()
        return self

    def remove(self, child: Any) -> None:
        """Remove *child* (by identity).

        Raises:
            ValueError: If *child* is not in the association.
        """
        for index, document in enumerate(self._target):
            if document is child:
                del self._target[index]
                child.unparentize()
                self._sync()
                return
        raise ValueError(f"{child!r} is not in {self.name}")

    def delete(self, child: Any) -> Any:
        """Remove *child*; returns it, or None if it was not present."""
        try:
            self.remove(child)
        except ValueError:
            return None
        return child

    def pop(self, index: int = -1) -> Any:
        document = self._target.pop(index)
        document.unparentize()
        self._sync()
        return document

    def clear(self) -> EmbedMany:
        """Remove every child. Safe to call repeatedly."""
        for document in self._target:
            document.unparentize()
        self._target.clear()
        self._sync()
        return self

    # --- Access ---

    def index_get(self, index: int) -> Any:
        """Child at *index*, or None when out of range."""
        try:
            return self._target[index]
        except IndexError:
            return None

    def __getitem__(self, index: int | slice) -> Any:
        if isinstance(index, slice):
            return self._target[index]
        return self.index_get(index)

    def find(self, selector: Any) -> Any:
        """``Selector.ALL`` (or ``"all"``) returns the proxy; an id returns its child or None."""
        if selector is Selector.ALL or selector == Selector.ALL.value:
            return self
        for document in self._target:
            if document.id == selector:
                return document
        return None

    def first(self) -> Any:
        return self._target[0] if self._target else None

    def last(self) -> Any:
        return self._target[-1] if self._target else None

    def length(self) -> int:
        return len(self._target)

    size = length

    def __len__(self) -> int:
        return len(self._target)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._target)

    def __contains__(self, child: Any) -> bool:
        return any(document is child for document in self._target)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EmbedMany):
            return self._target == other._target
        if isinstance(other, list):
            return self._target == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    # --- Criteria ---

    def paginate(self, options: dict[str, Any] | None = None) -> Page:
        """Paginate the children through a Criteria over the element class."""
        criteria = Criteria.translate(self.klass, options)
        criteria.documents = self._target
        return criteria.paginate()

    def _operation_kind(self, name: str) -> OperationKind | None:
        if name in self._options.extend:
            return OperationKind.EXTENSION
        try:
            if name in scopes_of(self.klass):
                return OperationKind.SCOPE
        except RegistryError:
            # unresolvable element class: no scopes to offer
            pass
        if name in _SEQUENCE_OPERATIONS:
            return OperationKind.SEQUENCE
        return None

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        kind = self._operation_kind(name)
        if kind is OperationKind.EXTENSION:
            return functools.partial(self._options.extend[name], self)
        if kind is OperationKind.SCOPE:
            criteria = Criteria.translate(self.klass, {})
            criteria.documents = self._target
            return getattr(criteria, name)
        if kind is OperationKind.SEQUENCE:
            return getattr(self._target, name)
        raise AttributeError(f"'{type(self).__name__}' for '{self.name}' has no attribute '{name}'")

    def __repr__(self) -> str:
        return f"EmbedMany({self.name!r}, {self._target!r})"
