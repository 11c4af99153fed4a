"""Errors: every resolution failure is a ``MapwireConfigurationError``.

This module demonstrates:

1. A missing generated implementation.
2. A constructor arity mismatch.
3. A custom mapper without a matching setter.
4. A failed resolution leaving nothing in the cache.
"""

from __future__ import annotations

from collections.abc import Callable

from mapwire import MapperRegistry, MapwireConfigurationError


class Connection:
    pass


class Unregistered:
    pass


class OrderMapper:
    pass


class OrderMapperImpl(OrderMapper):
    def __init__(self, connection: Connection) -> None:
        self.connection = connection


class AuditTrail:
    pass


def _error_type(action: Callable[[], object]) -> str:
    try:
        action()
    except MapwireConfigurationError as error:
        return f"{type(error).__name__}({error.type_name})"
    return "no error"


def main() -> None:
    registry = MapperRegistry()

    missing = _error_type(lambda: registry.resolve(Unregistered))
    print(f"missing={missing}")  # => missing=MapwireConfigurationError(__main__.UnregisteredImpl)

    arity = _error_type(lambda: registry.resolve(OrderMapper))
    print(f"arity={arity}")  # => arity=MapwireConfigurationError(__main__.OrderMapperImpl)

    connection = Connection()
    custom = _error_type(lambda: registry.resolve(OrderMapper, [connection], [AuditTrail()]))
    print(f"custom={custom}")  # => custom=MapwireConfigurationError(AuditTrail)

    cached = registry.is_resolved(OrderMapper)
    print(f"cached_after_failure={cached}")  # => cached_after_failure=False


if __name__ == "__main__":
    main()
