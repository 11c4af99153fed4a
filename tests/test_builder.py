"""Tests for the fluent MapperBuilder."""

from __future__ import annotations

import pytest
from com.acme import (
    AuditTrail,
    Connection,
    CustomEmailFormatter,
    EmailFormatter,
    OrderMapper,
    UserMapper,
    UserMapperImpl,
)

from mapwire.exceptions import MapwireConfigurationError
from mapwire.registry import MapperBuilder, MapperRegistry


class _SourcesAndCustomMapper:
    def __init__(self, connection: Connection, region: str) -> None:
        self.connection = connection
        self.region = region
        self.formatter: EmailFormatter | None = None
        self.trail: AuditTrail | None = None

    def set_custom_mapper_email_formatter(self, formatter: EmailFormatter) -> None:
        self.formatter = formatter

    def set_custom_mapper_audit_trail(self, trail: AuditTrail) -> None:
        self.trail = trail


def test_builder_methods_return_builder(registry: MapperRegistry) -> None:
    builder = registry.builder(UserMapper)

    assert isinstance(builder, MapperBuilder)
    assert builder.with_sources() is builder
    assert builder.with_custom() is builder


def test_empty_builder_matches_default_resolution(registry: MapperRegistry) -> None:
    assert registry.builder(UserMapper).build() is registry.resolve(UserMapper)


def test_builder_with_custom_mapper(registry: MapperRegistry) -> None:
    formatter = CustomEmailFormatter()

    mapper = registry.builder("com.acme.UserMapper").with_custom(formatter).build()

    assert isinstance(mapper, UserMapperImpl)
    assert mapper.email_formatter is formatter
    assert mapper is registry.resolve_with_custom(UserMapper, formatter)


def test_builder_with_source(registry: MapperRegistry) -> None:
    connection = Connection("db://orders")

    mapper = registry.builder(OrderMapper).with_sources(connection).build()

    assert mapper.connection is connection
    assert mapper is registry.resolve_with_source(OrderMapper, connection)


def test_builder_forwards_every_source_and_custom_mapper(strict_registry: MapperRegistry) -> None:
    strict_registry.add_implementation("pkg.ReportMapper", _SourcesAndCustomMapper)
    connection = Connection("db://reports")
    formatter = EmailFormatter()
    trail = AuditTrail()

    mapper = (
        strict_registry.builder("pkg.ReportMapper")
        .with_sources(connection)
        .with_sources("eu-west")
        .with_custom(formatter, trail)
        .build()
    )

    # Unlike a first-only builder, every accumulated value reaches the mapper.
    assert mapper.connection is connection
    assert mapper.region == "eu-west"
    assert mapper.formatter is formatter
    assert mapper.trail is trail


def test_builder_does_not_drop_extra_sources(registry: MapperRegistry) -> None:
    builder = registry.builder(OrderMapper).with_sources(Connection("a"), Connection("b"))

    with pytest.raises(MapwireConfigurationError, match="got 2"):
        builder.build()


def test_builder_can_be_built_twice(registry: MapperRegistry) -> None:
    builder = registry.builder(UserMapper).with_custom(EmailFormatter())

    assert builder.build() is builder.build()
