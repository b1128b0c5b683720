"""DocNest - embedded-document mapping with cascading saves."""

from __future__ import annotations

from docnest.associations.descriptors import embeds_many, embeds_one
from docnest.associations.embed_many import EmbedMany
from docnest.associations.embed_one import EmbedOne
from docnest.associations.options import Options
from docnest.core.connection import StoreConfig, StoreManager
from docnest.core.engine import Collection, Engine
from docnest.core.enums import (
    CallbackPhase,
    LifecycleEvent,
    Macro,
    OperationKind,
    Selector,
    StoreBackend,
)
from docnest.core.exceptions import (
    AdapterError,
    ConnectionError,  # noqa: A004
    CriteriaError,
    DocNestError,
    DocumentError,
    DocumentNotFoundError,
    DuplicateTypeError,
    PoolError,
    RegistryError,
    TypeNotFoundError,
    UnboundCollectionError,
    ValidationError,
)
from docnest.core.registry import TypeRegistry, registry
from docnest.criteria.criteria import Criteria, Page, scope
from docnest.document.base import Document, Field
from docnest.document.callbacks import (
    CallbackPipeline,
    after_create,
    after_save,
    before_create,
    before_save,
)
from docnest.persistence.save import SaveCascade, SaveState, save
from docnest.repository.base import Repository

ALL = Selector.ALL

__all__ = [
    # Documents
    "Document",
    "Field",
    "embeds_many",
    "embeds_one",
    # Associations
    "EmbedMany",
    "EmbedOne",
    "Options",
    "ALL",
    # Callbacks
    "CallbackPipeline",
    "before_save",
    "after_save",
    "before_create",
    "after_create",
    # Persistence
    "SaveCascade",
    "SaveState",
    "save",
    # Criteria
    "Criteria",
    "Page",
    "scope",
    # Store
    "StoreConfig",
    "StoreManager",
    "Engine",
    "Collection",
    "Repository",
    # Registry
    "TypeRegistry",
    "registry",
    # Enums
    "CallbackPhase",
    "LifecycleEvent",
    "Macro",
    "OperationKind",
    "Selector",
    "StoreBackend",
    # Exceptions
    "DocNestError",
    "RegistryError",
    "TypeNotFoundError",
    "DuplicateTypeError",
    "DocumentError",
    "ValidationError",
    "UnboundCollectionError",
    "DocumentNotFoundError",
    "CriteriaError",
    "AdapterError",
    "ConnectionError",
    "PoolError",
]
