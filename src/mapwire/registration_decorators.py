from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from mapwire._internal.registry import MapperRegistry
from mapwire._internal.registry_context import registry_context

C = TypeVar("C", bound=type[Any])


def mapper_implementation(
    interface: Any,
    *,
    registry: MapperRegistry | None = None,
) -> Callable[[C], C]:
    """Register the decorated class as the generated implementation of ``interface``.

    Generated modules use this decorator to publish themselves explicitly
    instead of relying on module discovery by naming convention. Without
    ``registry`` the registration goes through the global
    ``registry_context`` and is replayed on every registry bound to it later.

    Args:
        interface: Interface class or its dotted name.
        registry: Registry to register with instead of ``registry_context``.

    Returns:
        A decorator returning the class unchanged.

    Raises:
        MapwireConfigurationError: If the decorated object is not a concrete class.

    Examples:
        .. code-block:: python

            @mapper_implementation(UserMapper)
            class UserMapperImpl(UserMapper):
                def map(self, user: User) -> UserDto: ...

    """

    def decorator(implementation: C) -> C:
        if registry is None:
            registry_context.add_implementation(interface, implementation)
        else:
            registry.add_implementation(interface, implementation)
        return implementation

    return decorator


__all__ = ["mapper_implementation"]
