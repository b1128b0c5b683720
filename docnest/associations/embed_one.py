"""Embedded one-to-one association proxy."""

from __future__ import annotations

from typing import Any

from docnest.associations.options import Options
from docnest.core.enums import LifecycleEvent, Macro
from docnest.core.exceptions import ValidationError
from docnest.core.identity import identify


class EmbedOne:
    """Proxy over a single embedded document stored under one attribute."""

    def __init__(self, document: Any, options: Options) -> None:
        self._document = document
        self._options = options
        self._target: Any = None
        stored = document.raw_attributes.get(options.name)
        if isinstance(stored, dict):
            child = options.resolve(stored).instantiate(stored)
            child.parentize(document, options.name)
            self._target = child

    @classmethod
    def instantiate(cls, document: Any, options: Options) -> EmbedOne:
        return cls(document, options)

    @classmethod
    def update(cls, child: Any, document: Any, options: Options) -> EmbedOne:
        """Replace the embedded document with *child* (None removes it)."""
        proxy = cls(document, options)
        proxy.replace(child)
        return proxy

    @staticmethod
    def macro() -> Macro:
        return Macro.EMBED_ONE

    @property
    def name(self) -> str:
        return self._options.name

    @property
    def target(self) -> Any:
        return self._target

    def replace(self, child: Any) -> None:
        """Swap the embedded document for *child* (None removes it).

        An attribute dict is built into a document first.
        """
        if isinstance(child, dict):
            child = self._materialize(child)
        if self._target is not None and self._target is not child:
            self._target.unparentize()
        attributes = self._document.raw_attributes
        if child is None:
            attributes.pop(self.name, None)
        else:
            child.parentize(self._document, self.name)
            identify(child)
            attributes[self.name] = child.raw_attributes
        self._target = child

    def _materialize(self, attributes: dict[str, Any], type_: type | None = None) -> Any:
        attributes = dict(attributes)
        tag = attributes.pop("_type", None)
        if type_ is not None:
            klass = type_
        elif tag:
            klass = self._options.registry.get(tag)
        else:
            klass = self._options.klass

        document = klass.blank()
        document.parentize(self._document, self.name)
        document.apply_defaults()
        document.write_attributes(attributes)
        return document

    def build(self, attributes: dict[str, Any] | None = None, type_: type | None = None) -> Any:
        """Build a new, unsaved child in place of the current one."""
        document = self._materialize(attributes or {}, type_)
        self.replace(document)
        return document

    def create(self, attributes: dict[str, Any] | None = None, type_: type | None = None) -> Any:
        document = self.build(attributes, type_)
        document.callbacks.run(document, LifecycleEvent.CREATE, document.save)
        return document

    def create_strict(
        self, attributes: dict[str, Any] | None = None, type_: type | None = None
    ) -> Any:
        document = self.create(attributes, type_)
        if document.errors:
            raise ValidationError(document, document.errors)
        return document

    def __repr__(self) -> str:
        return f"EmbedOne({self.name!r}, {self._target!r})"
