from __future__ import annotations

import re
from typing import Any

from mapwire._internal.type_checks import is_runtime_class
from mapwire.exceptions import MapwireConfigurationError

DEFAULT_IMPLEMENTATION_SUFFIX = "Impl"
"""Suffix appended to an interface name to find its generated implementation."""

DEFAULT_CAPABILITY_PREFIX = "set_custom_mapper_"
"""Prefix of the generated setters that accept custom mappers."""

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def interface_identity(interface: Any) -> str:
    """Return the canonical dotted name identifying a mapper interface.

    Strings are taken as already canonical. Classes are named by their module
    and qualified name, so ``com.acme.UserMapper`` identifies ``UserMapper``
    declared in module ``com.acme``.

    Args:
        interface: Interface class or its dotted name.

    Returns:
        The dotted interface identity.

    Raises:
        MapwireConfigurationError: If ``interface`` is neither a class nor a
            non-empty dotted name.

    """
    if isinstance(interface, str):
        identity = interface.strip()
        if not identity or identity.startswith(".") or identity.endswith("."):
            msg = f"Mapper interface name {interface!r} is not a valid dotted name."
            raise MapwireConfigurationError(msg, type_name=interface)
        return identity
    if is_runtime_class(interface):
        return f"{interface.__module__}.{interface.__qualname__}"
    msg = f"Mapper interface must be a class or a dotted name, got {interface!r}."
    raise MapwireConfigurationError(msg)


def implementation_name(identity: str, suffix: str = DEFAULT_IMPLEMENTATION_SUFFIX) -> str:
    """Return the dotted name the generated implementation is published under."""
    return identity + suffix


def snake_case(name: str) -> str:
    """Convert a class name such as ``HTTPEmailFormatter`` to ``http_email_formatter``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def capability_name(delegate_type: type[Any], prefix: str = DEFAULT_CAPABILITY_PREFIX) -> str:
    """Return the setter name a generated mapper declares for ``delegate_type``."""
    return prefix + snake_case(delegate_type.__name__)


__all__ = [
    "DEFAULT_CAPABILITY_PREFIX",
    "DEFAULT_IMPLEMENTATION_SUFFIX",
    "capability_name",
    "implementation_name",
    "interface_identity",
    "snake_case",
]
