from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Generic, TypeVar, overload

from mapwire._internal.cache import SingletonCache
from mapwire._internal.capabilities import CapabilityBinder
from mapwire._internal.factory import InstanceFactory
from mapwire._internal.keys import ResolutionKey
from mapwire._internal.lock_mode import LockMode
from mapwire._internal.naming import (
    DEFAULT_CAPABILITY_PREFIX,
    DEFAULT_IMPLEMENTATION_SUFFIX,
    interface_identity,
)
from mapwire._internal.settings import MapwireSettings
from mapwire._internal.sources import (
    ImplementationLocator,
    ImplementationRegistrations,
    ModuleImplementationDiscovery,
)
from mapwire._internal.type_checks import is_instantiable_class
from mapwire.exceptions import MapwireConfigurationError

T = TypeVar("T")

logger = logging.getLogger(__name__)


class MapperRegistry:
    """Resolve generated mapper implementations and keep them as singletons.

    A mapper is identified by its interface (class or dotted name), the
    ordered sources passed to its constructor, and the ordered custom mappers
    wired into it. The first request for a combination locates the generated
    implementation, constructs it, and calls the matching
    ``set_custom_mapper_<type>`` setter for every custom mapper. The result is
    cached and returned unchanged to every later request for the same
    combination.

    Each registry owns its own cache, so independent registries never share
    instances. Implementations come from explicit registrations first and, when
    ``discover_modules`` is enabled, from importing ``<interface><suffix>``.
    """

    def __init__(
        self,
        *,
        implementation_suffix: str = DEFAULT_IMPLEMENTATION_SUFFIX,
        capability_prefix: str = DEFAULT_CAPABILITY_PREFIX,
        lock_mode: LockMode = LockMode.KEY,
        discover_modules: bool = True,
    ) -> None:
        """Initialize an empty registry.

        Args:
            implementation_suffix: Suffix appended to interface names to find
                generated implementations.
            capability_prefix: Prefix of generated custom mapper setters.
            lock_mode: Locking strategy of the singleton cache.
            discover_modules: Import implementations by naming convention when
                no explicit registration exists.

        Examples:
            .. code-block:: python

                registry = MapperRegistry()
                user_mapper = registry.resolve(UserMapper)

                strict_registry = MapperRegistry(discover_modules=False)
                strict_registry.add_implementation(UserMapper, UserMapperImpl)

        """
        self._implementation_suffix = implementation_suffix
        self._capability_prefix = capability_prefix
        self._registrations = ImplementationRegistrations()
        self._locator = ImplementationLocator(
            suffix=implementation_suffix,
            registrations=self._registrations,
            discovery=ModuleImplementationDiscovery() if discover_modules else None,
        )
        self._instance_factory = InstanceFactory(self._locator)
        self._capability_binder = CapabilityBinder(capability_prefix)
        self._cache = SingletonCache(lock_mode)

    @classmethod
    def from_settings(cls, settings: MapwireSettings | None = None) -> MapperRegistry:
        """Build a registry from ``MapwireSettings``, read from the environment when omitted."""
        settings = settings or MapwireSettings()
        return cls(
            implementation_suffix=settings.implementation_suffix,
            capability_prefix=settings.capability_prefix,
            lock_mode=settings.lock_mode,
            discover_modules=settings.discover_modules,
        )

    @property
    def lock_mode(self) -> LockMode:
        return self._cache.lock_mode

    def add_implementation(self, interface: Any, implementation: type[Any]) -> None:
        """Register the generated implementation of a mapper interface.

        Registrations take precedence over module discovery. Mappers already
        cached for the interface are not rebuilt.

        Args:
            interface: Interface class or its dotted name.
            implementation: Concrete generated class.

        Raises:
            MapwireConfigurationError: If ``implementation`` is not a concrete class.

        """
        identity = check_implementation(interface, implementation)
        self._registrations.add(identity, implementation)
        logger.debug("Registered %s as implementation of %s", implementation.__qualname__, identity)

    @overload
    def resolve(
        self,
        interface: type[T],
        arguments: Sequence[Any] | None = None,
        delegates: Sequence[Any] | None = None,
    ) -> T: ...

    @overload
    def resolve(
        self,
        interface: str,
        arguments: Sequence[Any] | None = None,
        delegates: Sequence[Any] | None = None,
    ) -> Any: ...

    def resolve(
        self,
        interface: Any,
        arguments: Sequence[Any] | None = None,
        delegates: Sequence[Any] | None = None,
    ) -> Any:
        """Return the singleton mapper for an interface, sources, and custom mappers.

        Args:
            interface: Interface class or its dotted name.
            arguments: Ordered constructor sources, or ``None`` for the
                no-argument constructor.
            delegates: Ordered custom mappers to wire in, or ``None``. ``None``
                entries are skipped.

        Returns:
            The cached mapper, constructed and wired on first request.

        Raises:
            MapwireConfigurationError: If the implementation cannot be located,
                constructed, or wired. Nothing is cached in that case.

        """
        identity = interface_identity(interface)
        sources = None if arguments is None else tuple(arguments)
        custom_mappers = None if delegates is None else tuple(delegates)
        key = _derive_key(identity, sources, custom_mappers)
        return self._cache.get_or_create(
            key,
            lambda: self._create_mapper(identity, sources, custom_mappers),
        )

    def resolve_with_source(self, interface: Any, source: Any) -> Any:
        """Return the singleton mapper built from a single constructor source.

        A ``None`` source selects the no-argument constructor.
        """
        return self.resolve(interface, None if source is None else (source,), None)

    def resolve_with_custom(self, interface: Any, custom: Any) -> Any:
        """Return the default-constructed singleton mapper wired with one custom mapper."""
        return self.resolve(interface, None, None if custom is None else (custom,))

    def builder(self, interface: type[T] | str) -> MapperBuilder[T]:
        """Start a fluent ``MapperBuilder`` for ``interface`` bound to this registry."""
        return MapperBuilder(self, interface)

    def is_resolved(
        self,
        interface: Any,
        arguments: Sequence[Any] | None = None,
        delegates: Sequence[Any] | None = None,
    ) -> bool:
        """Return whether a mapper for this combination is already cached."""
        key = _derive_key(interface_identity(interface), arguments, delegates)
        return key in self._cache

    def _create_mapper(
        self,
        identity: str,
        arguments: tuple[Any, ...] | None,
        delegates: tuple[Any, ...] | None,
    ) -> Any:
        instance = self._instance_factory.create(identity, arguments)
        for delegate in delegates or ():
            if delegate is None:
                continue
            self._capability_binder.bind(instance, delegate)
        return instance


def check_implementation(interface: Any, implementation: type[Any]) -> str:
    """Return the identity of ``interface`` after checking ``implementation`` is a concrete class."""
    identity = interface_identity(interface)
    if not is_instantiable_class(implementation):
        msg = f"Mapper implementation for '{identity}' must be a concrete class, got {implementation!r}."
        raise MapwireConfigurationError(msg, type_name=identity)
    return identity


def _derive_key(
    identity: str,
    arguments: Sequence[Any] | None,
    delegates: Sequence[Any] | None,
) -> ResolutionKey:
    try:
        return ResolutionKey.derive(identity, arguments, delegates)
    except Exception as exc:
        msg = (
            f"Cannot derive a resolution key for mapper '{identity}': "
            f"a source or custom mapper failed to produce its repr ({exc!r})."
        )
        raise MapwireConfigurationError(msg, type_name=identity) from exc


class MapperBuilder(Generic[T]):
    """Accumulate sources and custom mappers, then resolve the mapper.

    Every accumulated source is passed to the constructor and every custom
    mapper is wired in, in the order they were added. ``build`` is equivalent
    to ``MapperRegistry.resolve`` with those lists; an empty list is passed as
    absent.

    Examples:
        .. code-block:: python

            mapper = (
                registry.builder(OrderMapper)
                .with_sources(connection)
                .with_custom(EmailFormatter())
                .build()
            )

    """

    def __init__(self, registry: MapperRegistry, interface: type[T] | str) -> None:
        self._registry = registry
        self._interface = interface
        self._sources: list[Any] = []
        self._custom_mappers: list[Any] = []

    def with_sources(self, *sources: Any) -> MapperBuilder[T]:
        """Append constructor sources and return the builder."""
        self._sources.extend(sources)
        return self

    def with_custom(self, *custom_mappers: Any) -> MapperBuilder[T]:
        """Append custom mappers and return the builder."""
        self._custom_mappers.extend(custom_mappers)
        return self

    def build(self) -> T:
        """Resolve the mapper for the accumulated sources and custom mappers.

        Raises:
            MapwireConfigurationError: If resolution fails.

        """
        return self._registry.resolve(
            self._interface,
            tuple(self._sources) if self._sources else None,
            tuple(self._custom_mappers) if self._custom_mappers else None,
        )


__all__ = ["MapperBuilder", "MapperRegistry"]
