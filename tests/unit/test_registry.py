"""Unit tests for TypeRegistry and association options."""

from __future__ import annotations

import pytest

from docnest.associations.options import Options, classify, singularize
from docnest.core.exceptions import DuplicateTypeError, TypeNotFoundError
from docnest.core.registry import TypeRegistry
from models import Address, Circle, Shape


class Alpha:
    pass


class TestTypeRegistry:
    def test_register_defaults_to_class_name(self) -> None:
        reg = TypeRegistry()
        assert reg.register(Alpha) == "Alpha"
        assert reg.get("Alpha") is Alpha
        assert reg.has("Alpha")

    def test_register_custom_name(self) -> None:
        reg = TypeRegistry()
        reg.register(Alpha, "things.alpha")
        assert reg.get("things.alpha") is Alpha
        assert not reg.has("Alpha")

    def test_register_twice_is_noop(self) -> None:
        reg = TypeRegistry()
        reg.register(Alpha)
        reg.register(Alpha)
        assert len(reg) == 1

    def test_duplicate_raises(self) -> None:
        reg = TypeRegistry()
        reg.register(Alpha)
        other = type("Beta", (), {})
        with pytest.raises(DuplicateTypeError, match="Alpha"):
            reg.register(other, "Alpha")

    def test_reload_replaces(self) -> None:
        reg = TypeRegistry()
        reg.register(Alpha)
        reloaded = type("Alpha", (), {"__module__": Alpha.__module__, "__qualname__": "Alpha"})
        reg.register(reloaded)
        assert reg.get("Alpha") is reloaded

    def test_get_missing_raises(self) -> None:
        with pytest.raises(TypeNotFoundError) as exc_info:
            TypeRegistry().get("Nope")
        assert exc_info.value.type_name == "Nope"

    def test_resolve(self) -> None:
        reg = TypeRegistry()
        reg.register(Alpha)
        assert reg.resolve({"_type": "Alpha"}) is Alpha
        assert reg.resolve({}, default=int) is int
        with pytest.raises(TypeNotFoundError):
            reg.resolve({})

    def test_unregister_and_names(self) -> None:
        reg = TypeRegistry()
        reg.register(Alpha, "b")
        reg.register(int, "a")
        assert reg.type_names == ["a", "b"]
        reg.unregister("b")
        reg.unregister("missing")
        assert reg.type_names == ["a"]

    def test_documents_register_themselves(self) -> None:
        assert Address.registry.get("Address") is Address
        assert Circle.type_name() == "Circle"


class TestOptions:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [("addresses", "address"), ("shapes", "shape"), ("categories", "category"), ("boxes", "box")],
    )
    def test_singularize(self, name: str, expected: str) -> None:
        assert singularize(name) == expected

    def test_classify(self) -> None:
        assert classify("street_addresses") == "StreetAddress"

    def test_klass_from_name(self) -> None:
        assert Options(name="addresses").klass is Address

    def test_klass_from_tag(self) -> None:
        assert Options(name="things", class_name="Shape").klass is Shape

    def test_resolve_order(self) -> None:
        options = Options(name="shapes", class_name=Shape)
        assert options.resolve({}) is Shape
        assert options.resolve({"_type": "Circle"}) is Circle
        forced = Options(name="shapes", class_name=Shape, type_=Shape)
        assert forced.resolve({"_type": "Circle"}) is Shape

    def test_extensions_must_be_callable(self) -> None:
        with pytest.raises(TypeError):
            Options(name="shapes", extend={"bad": 1})  # type: ignore[dict-item]

    def test_extensions_are_read_only(self) -> None:
        options = Options(name="shapes", extend={"noop": lambda proxy: None})
        with pytest.raises(TypeError):
            options.extend["other"] = len  # type: ignore[index]
