from __future__ import annotations

from typing import Any

import pytest
from com.acme import (
    CustomEmailFormatter,
    EmailFormatter,
    SetterFailureMapperImpl,
    UserMapperImpl,
)

from mapwire._internal.capabilities import CapabilityBinder, CapabilityTable
from mapwire.exceptions import MapwireConfigurationError


class _Base:
    pass


class _Middle(_Base):
    pass


class _Leaf(_Middle):
    pass


class _Mixin:
    pass


class _LeafWithMixin(_Middle, _Mixin):
    pass


class _BaseOnlyMapper:
    def __init__(self) -> None:
        self.bound: list[tuple[str, Any]] = []

    def set_custom_mapper__base(self, value: _Base) -> None:
        self.bound.append(("base", value))


class _LayeredMapper(_BaseOnlyMapper):
    def set_custom_mapper__middle(self, value: _Middle) -> None:
        self.bound.append(("middle", value))

    def set_custom_mapper__mixin(self, value: _Mixin) -> None:
        self.bound.append(("mixin", value))


class _WrongShapeMapper:
    def set_custom_mapper__base(self, value: _Base, extra: int) -> None:
        pass

    def set_custom_mapper__middle(self, value: _Base) -> None:
        pass

    def set_custom_mapper__leaf(self, value) -> None:  # noqa: ANN001
        pass

    def set_custom_mapper__mixin(self, *, value: _Mixin) -> None:
        pass


class _UnresolvableHintsMapper:
    def set_custom_mapper__base(self, value: MissingType) -> None:  # type: ignore[name-defined]  # noqa: F821
        pass


def test_table_maps_annotated_setters_by_type() -> None:
    table = CapabilityTable.build(_LayeredMapper)

    assert table.setters == {
        _Base: "set_custom_mapper__base",
        _Middle: "set_custom_mapper__middle",
        _Mixin: "set_custom_mapper__mixin",
    }


def test_table_ignores_setters_with_wrong_shape_or_name() -> None:
    table = CapabilityTable.build(_WrongShapeMapper)

    assert table.setters == {}


def test_table_rejects_unresolvable_annotations() -> None:
    with pytest.raises(MapwireConfigurationError, match="cannot be resolved"):
        CapabilityTable.build(_UnresolvableHintsMapper)


def test_lookup_prefers_most_derived_type() -> None:
    table = CapabilityTable.build(_LayeredMapper)

    assert table.lookup(_Leaf) == (_Middle, "set_custom_mapper__middle")
    assert table.lookup(_Base) == (_Base, "set_custom_mapper__base")


def test_lookup_follows_method_resolution_order() -> None:
    table = CapabilityTable.build(_LayeredMapper)

    assert table.lookup(_LeafWithMixin) == (_Middle, "set_custom_mapper__middle")


def test_lookup_never_matches_object() -> None:
    table = CapabilityTable.build(_LayeredMapper)

    assert table.lookup(object) is None
    assert table.lookup(int) is None


def test_binder_uses_exact_type_setter() -> None:
    mapper = UserMapperImpl()
    formatter = EmailFormatter()

    CapabilityBinder().bind(mapper, formatter)

    assert mapper.email_formatter is formatter


def test_binder_falls_back_to_ancestor_setter() -> None:
    mapper = UserMapperImpl()
    formatter = CustomEmailFormatter()

    CapabilityBinder().bind(mapper, formatter)

    assert mapper.email_formatter is formatter


def test_binder_falls_back_through_several_ancestors() -> None:
    mapper = _BaseOnlyMapper()
    leaf = _Leaf()

    CapabilityBinder().bind(mapper, leaf)

    assert mapper.bound == [("base", leaf)]


def test_binder_reports_expected_setter_for_exact_type() -> None:
    with pytest.raises(MapwireConfigurationError) as exc_info:
        CapabilityBinder().bind(UserMapperImpl(), _Leaf())

    assert "set_custom_mapper__leaf" in str(exc_info.value)
    assert exc_info.value.type_name == "_Leaf"


def test_binder_wraps_setter_failure() -> None:
    with pytest.raises(MapwireConfigurationError, match="formatter rejected") as exc_info:
        CapabilityBinder().bind(SetterFailureMapperImpl(), EmailFormatter())

    assert isinstance(exc_info.value.__cause__, ValueError)


def test_binder_builds_each_table_once(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[type[Any]] = []
    original_build = CapabilityTable.build.__func__  # type: ignore[attr-defined]

    def counting_build(cls: type[CapabilityTable], implementation: type[Any], prefix: str) -> CapabilityTable:
        calls.append(implementation)
        return original_build(cls, implementation, prefix)

    monkeypatch.setattr(CapabilityTable, "build", classmethod(counting_build))
    binder = CapabilityBinder()

    binder.bind(UserMapperImpl(), EmailFormatter())
    binder.bind(UserMapperImpl(), CustomEmailFormatter())

    assert calls == [UserMapperImpl]


def test_binder_uses_configured_prefix() -> None:
    class _PrefixedMapper:
        def __init__(self) -> None:
            self.value: _Base | None = None

        def use__base(self, value: _Base) -> None:
            self.value = value

    mapper = _PrefixedMapper()
    base = _Base()

    CapabilityBinder(prefix="use_").bind(mapper, base)

    assert mapper.value is base
