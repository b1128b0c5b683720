"""Enumerations shared across DocNest."""

from __future__ import annotations

from enum import Enum


class StoreBackend(Enum):
    """Supported storage backends."""

    MEMORY = "memory"
    SQLITE = "sqlite"


class Macro(Enum):
    """Association kind, used for type introspection."""

    EMBED_MANY = "embed_many"
    EMBED_ONE = "embed_one"


class LifecycleEvent(Enum):
    """Events that carry before/after callback chains."""

    SAVE = "save"
    CREATE = "create"


class CallbackPhase(Enum):
    BEFORE = "before"
    AFTER = "after"


class OperationKind(Enum):
    """How an undeclared attribute on an association proxy is resolved."""

    EXTENSION = "extension"
    SCOPE = "scope"
    SEQUENCE = "sequence"


class Selector(Enum):
    """Selectors accepted by ``find`` besides an id."""

    ALL = "all"
