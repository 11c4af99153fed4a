from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Any, TypeVar

from mapwire._internal.registry import MapperBuilder, MapperRegistry, check_implementation
from mapwire._internal.settings import MapwireSettings

T = TypeVar("T")

logger = logging.getLogger(__name__)


class RegistryContext:
    """Proxy resolution and registrations through a process-global registry.

    ``get_current`` creates a default registry from ``MapwireSettings`` on
    first use, so the module-level helpers work without any setup.
    ``set_current`` replaces the bound registry, which is how applications and
    tests install a configured or isolated one.

    Implementation registrations made through the context are recorded and
    replayed on every registry bound later, so generated modules imported at
    startup keep working after a rebind.

    The binding is process-global for this instance (not task-local or
    thread-local).
    """

    def __init__(self, settings: MapwireSettings | None = None) -> None:
        self._settings = settings
        self._registry: MapperRegistry | None = None
        self._implementations: list[tuple[Any, type[Any]]] = []
        self._lock = threading.RLock()

    def set_current(self, registry: MapperRegistry) -> None:
        """Bind the active registry and replay all recorded registrations.

        Args:
            registry: Registry to bind as the active target.

        """
        with self._lock:
            self._registry = registry
            for interface, implementation in self._implementations:
                registry.add_implementation(interface, implementation)

    def get_current(self) -> MapperRegistry:
        """Return the bound registry, creating the default one on first use."""
        registry = self._registry
        if registry is not None:
            return registry
        with self._lock:
            if self._registry is None:
                logger.debug("Creating default mapper registry from settings")
                self.set_current(MapperRegistry.from_settings(self._settings))
            return self._registry  # type: ignore[return-value]

    def add_implementation(self, interface: Any, implementation: type[Any]) -> None:
        """Record an implementation registration and apply it to the bound registry.

        No registry is created here. When none is bound yet, the registration
        is applied once ``set_current`` or the first ``get_current`` binds one.

        Raises:
            MapwireConfigurationError: If ``implementation`` is not a concrete class.

        """
        check_implementation(interface, implementation)
        with self._lock:
            self._implementations.append((interface, implementation))
            if self._registry is not None:
                self._registry.add_implementation(interface, implementation)

    def resolve(
        self,
        interface: Any,
        arguments: Sequence[Any] | None = None,
        delegates: Sequence[Any] | None = None,
    ) -> Any:
        """Resolve through ``MapperRegistry.resolve`` on the current registry."""
        return self.get_current().resolve(interface, arguments, delegates)

    def resolve_with_source(self, interface: Any, source: Any) -> Any:
        """Resolve through ``MapperRegistry.resolve_with_source`` on the current registry."""
        return self.get_current().resolve_with_source(interface, source)

    def resolve_with_custom(self, interface: Any, custom: Any) -> Any:
        """Resolve through ``MapperRegistry.resolve_with_custom`` on the current registry."""
        return self.get_current().resolve_with_custom(interface, custom)

    def builder(self, interface: type[T] | str) -> MapperBuilder[T]:
        """Start a ``MapperBuilder`` on the current registry."""
        return self.get_current().builder(interface)


registry_context = RegistryContext()


__all__ = ["RegistryContext", "registry_context"]
