"""Document base class.

A Document wraps one attribute dict: the exact structure written to the
store. Embedded children wrap the very dicts held in their parent's
attributes, so a write to a child's field is a write to the parent's tree.

    class Address(Document):
        key_fields = ("street",)
        street = Field()

    class Person(Document):
        title = Field()
        addresses = embeds_many(Address)
"""

from __future__ import annotations

import copy
from typing import Any, Callable, ClassVar

from docnest.associations.descriptors import EmbeddedAssociation
from docnest.core.enums import LifecycleEvent
from docnest.core.exceptions import DocumentError, ValidationError
from docnest.core.identity import identify
from docnest.core.registry import TypeRegistry, registry as default_registry
from docnest.document.callbacks import CallbackPipeline, declared_hooks
from docnest.persistence.save import save


class Field:
    """A named slot in a document's attributes.

    Args:
        default: Value set on new documents when the attribute is absent.
            Mutable defaults are deep-copied per document.
        default_factory: Callable producing the default instead.
    """

    def __init__(
        self,
        default: Any = None,
        *,
        default_factory: Callable[[], Any] | None = None,
    ) -> None:
        self.default = default
        self.default_factory = default_factory
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        return instance.raw_attributes.get(self.name)

    def __set__(self, instance: Any, value: Any) -> None:
        instance.raw_attributes[self.name] = value

    def make_default(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return copy.deepcopy(self.default)


class Document:
    """Base class for root and embedded documents."""

    collection: ClassVar[Any] = None
    key_fields: ClassVar[tuple[str, ...]] = ()
    registry: ClassVar[TypeRegistry] = default_registry
    callbacks: ClassVar[CallbackPipeline] = CallbackPipeline()
    fields: ClassVar[dict[str, Field]] = {}
    associations: ClassVar[dict[str, Any]] = {}
    _type_name: ClassVar[str] = "Document"

    def __init_subclass__(cls, type_name: str | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.callbacks = CallbackPipeline(parent=cls.callbacks)
        for phase, event, name in declared_hooks(vars(cls)):
            cls.callbacks.register(phase, event, name)

        fields: dict[str, Field] = {}
        associations: dict[str, EmbeddedAssociation] = {}
        for base in reversed(cls.__mro__):
            for name, value in vars(base).items():
                if isinstance(value, Field):
                    fields[name] = value
                elif isinstance(value, EmbeddedAssociation):
                    associations[name] = value
        cls.fields = fields
        cls.associations = associations
        cls._type_name = cls.registry.register(cls, type_name)

    def __init__(self, attributes: dict[str, Any] | None = None, **kwargs: Any) -> None:
        self._setup({}, new_record=True)
        self.apply_defaults()
        self.write_attributes({**(attributes or {}), **kwargs})
        identify(self)

    def _setup(self, attributes: dict[str, Any], new_record: bool) -> None:
        self._attributes = attributes
        self._parent_document: Any = None
        self._association_cache: dict[str, Any] = {}
        self.association_name: str | None = None
        self.new_record = new_record
        self.errors: list[Any] = []

    @classmethod
    def blank(cls) -> Document:
        """A new document with no attributes at all, not yet identified."""
        document = cls.__new__(cls)
        document._setup({}, new_record=True)
        return document

    @classmethod
    def instantiate(cls, attributes: dict[str, Any]) -> Document:
        """Wrap stored *attributes* (not copied) as a persisted document."""
        document = cls.__new__(cls)
        document._setup(attributes, new_record=False)
        return document

    @classmethod
    def type_name(cls) -> str:
        return cls._type_name

    @classmethod
    def collection_name(cls) -> str:
        return vars(cls).get("__collection__") or cls.__name__.lower() + "s"

    @classmethod
    def create(cls, attributes: dict[str, Any] | None = None, **kwargs: Any) -> Document:
        """Build a root document and save it inside the create callbacks."""
        document = cls(attributes, **kwargs)
        document.callbacks.run(document, LifecycleEvent.CREATE, document.save)
        return document

    @classmethod
    def create_strict(cls, attributes: dict[str, Any] | None = None, **kwargs: Any) -> Document:
        """As create, raising ValidationError if the document has errors."""
        document = cls.create(attributes, **kwargs)
        if document.errors:
            raise ValidationError(document, document.errors)
        return document

    # --- Attributes ---

    @property
    def raw_attributes(self) -> dict[str, Any]:
        return self._attributes

    attributes = raw_attributes

    @property
    def id(self) -> Any:
        return self._attributes.get("_id")

    def apply_defaults(self) -> None:
        for name, field in self.fields.items():
            if name not in self._attributes:
                self._attributes[name] = field.make_default()

    def write_attributes(self, attributes: dict[str, Any]) -> None:
        """Assign attributes through declared fields and setters.

        Names without a declared field or setter are stored as-is.
        Association names are routed through their descriptors.
        """
        for name, value in attributes.items():
            name = str(name)
            if name in self.associations or isinstance(getattr(type(self), name, None), property):
                setattr(self, name, value)
            else:
                self._attributes[name] = value

    # --- Tree ---

    @property
    def _parent(self) -> Any:
        return self._parent_document

    def parentize(self, parent: Any, association_name: str) -> None:
        """Link this document under *parent*; the link keeps the parent alive."""
        self._parent_document = parent
        self.association_name = association_name

    def unparentize(self) -> None:
        self._parent_document = None
        self.association_name = None

    @property
    def embedded(self) -> bool:
        return self._parent is not None

    def association(self, name: str) -> Any:
        """The association proxy behind attribute *name*."""
        try:
            descriptor = self.associations[name]
        except KeyError:
            raise DocumentError(f"{type(self).__name__} has no association '{name}'") from None
        return descriptor.proxy(self)

    # --- Validation & persistence ---

    def validate(self) -> None:
        """Hook: append error descriptors to ``self.errors``."""

    def valid(self) -> bool:
        self.errors = []
        self.validate()
        return not self.errors

    def save(self, validate: bool = True) -> bool:
        """Save through the root document. See SaveCascade."""
        return save(self, validate)

    def save_strict(self) -> bool:
        """As save, raising ValidationError if the document has errors."""
        saved = self.save()
        if self.errors:
            raise ValidationError(self, self.errors)
        return saved

    def __repr__(self) -> str:
        return f"<{type(self).__name__} _id={self.id!r}>"
