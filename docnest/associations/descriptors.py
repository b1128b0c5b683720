"""Association declarations on document classes.

    class Person(Document):
        addresses = embeds_many(Address)
        name = embeds_one("Name")

Reading ``person.addresses`` gives the EmbedMany proxy; reading
``person.name`` gives the embedded document itself (or None). Assigning to
either replaces the content through the proxy's ``replace``.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from docnest.associations.embed_many import EmbedMany
from docnest.associations.embed_one import EmbedOne
from docnest.associations.options import Options
from docnest.core.enums import Macro


class EmbeddedAssociation:
    """Base descriptor; one proxy per owning document, created on first use."""

    proxy_class: type = EmbedMany

    def __init__(
        self,
        class_name: type | str | None = None,
        *,
        type_: type | None = None,
        extend: Mapping[str, Callable[..., Any]] | None = None,
    ) -> None:
        self._class_name = class_name
        self._type = type_
        self._extend = dict(extend or {})
        self.name = ""
        self._options: Options | None = None
        self._owner: type | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self._owner = owner

    @property
    def macro(self) -> Macro:
        return self.proxy_class.macro()  # type: ignore[attr-defined,no-any-return]

    @property
    def options(self) -> Options:
        if self._options is None:
            self._options = Options(
                name=self.name,
                class_name=self._class_name,
                type_=self._type,
                extend=self._extend,
                registry=self._owner.registry,  # type: ignore[union-attr]
            )
        return self._options

    def proxy(self, document: Any) -> Any:
        cache = document._association_cache
        if self.name not in cache:
            cache[self.name] = self.proxy_class.instantiate(document, self.options)  # type: ignore[attr-defined]
        return cache[self.name]

    def __set__(self, document: Any, value: Any) -> None:
        self.proxy(document).replace(value)


class EmbedsMany(EmbeddedAssociation):
    proxy_class = EmbedMany

    def __get__(self, document: Any, owner: type) -> Any:
        if document is None:
            return self
        return self.proxy(document)

    def __set__(self, document: Any, value: Any) -> None:
        super().__set__(document, list(value or ()))


class EmbedsOne(EmbeddedAssociation):
    proxy_class = EmbedOne

    def __get__(self, document: Any, owner: type) -> Any:
        if document is None:
            return self
        return self.proxy(document).target


def embeds_many(
    class_name: type | str | None = None,
    *,
    type_: type | None = None,
    extend: Mapping[str, Callable[..., Any]] | None = None,
) -> EmbedsMany:
    """Declare an embedded list of documents."""
    return EmbedsMany(class_name, type_=type_, extend=extend)


def embeds_one(class_name: type | str | None = None, *, type_: type | None = None) -> EmbedsOne:
    """Declare a single embedded document."""
    return EmbedsOne(class_name, type_=type_)
