"""Association options.

Frozen description of one embedded association: the attribute it mirrors,
which class its elements default to, and any extension operations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping

from docnest.core.registry import TypeRegistry, registry as default_registry


def singularize(name: str) -> str:
    """Naive English singular of a collection attribute name."""
    if name.endswith("ies"):
        return name[:-3] + "y"
    if name.endswith(("sses", "shes", "ches", "xes")):
        return name[:-2]
    if name.endswith("s") and not name.endswith("ss"):
        return name[:-1]
    return name


def classify(name: str) -> str:
    """``"street_addresses"`` -> ``"StreetAddress"``."""
    return "".join(part.capitalize() for part in singularize(name).split("_"))


@dataclass(frozen=True)
class Options:
    """Options for an embedded association.

    Attributes:
        name: Attribute name mirrored in the parent's attributes.
        class_name: Declared element class, or its registered type tag.
            Defaults to the class named after the singular of ``name``.
        type_: Explicit class forced on every reconstructed element,
            overriding stored ``_type`` tags.
        extend: Named extra operations, each called with the proxy first.
        registry: Registry used to resolve type tags.
    """

    name: str
    class_name: type | str | None = None
    type_: type | None = None
    extend: Mapping[str, Callable[..., Any]] = field(default_factory=dict)
    registry: TypeRegistry = field(default=default_registry, compare=False, repr=False)

    def __post_init__(self) -> None:
        for op_name, op in self.extend.items():
            if not callable(op):
                raise TypeError(f"Extension '{op_name}' is not callable")
        object.__setattr__(self, "extend", MappingProxyType(dict(self.extend)))

    @property
    def klass(self) -> type:
        """The declared element class."""
        if isinstance(self.class_name, type):
            return self.class_name
        return self.registry.get(self.class_name or classify(self.name))

    def resolve(self, attributes: dict[str, Any]) -> type:
        """Class for a stored element: explicit, then ``_type`` tag, then declared."""
        if self.type_ is not None:
            return self.type_
        tag = attributes.get("_type")
        if tag:
            return self.registry.get(tag)
        return self.klass
