from __future__ import annotations

import inspect
import types
from typing import Any, TypeGuard


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_instantiable_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a concrete class that can be called to build an instance.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    if not is_runtime_class(candidate):
        return False
    if inspect.isabstract(candidate):
        return False
    return not issubclass(candidate, type)


__all__ = ["is_instantiable_class", "is_runtime_class"]
