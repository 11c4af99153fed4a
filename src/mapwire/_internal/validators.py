from __future__ import annotations

import inspect
import typing

from mapwire._internal.sources import ImplementationRef
from mapwire._internal.type_checks import is_instantiable_class
from mapwire.exceptions import MapwireConfigurationError


class ImplementationValidator:
    """Validates generated implementations before they are instantiated."""

    def validate_implementation(self, ref: ImplementationRef) -> type[object]:
        """Validate that an implementation is a concrete class and return it."""
        implementation = ref.implementation
        if not is_instantiable_class(implementation):
            msg = (
                f"Mapper class '{ref.name}' should have 1 constructor, "
                f"got {implementation!r} which cannot be instantiated."
            )
            raise MapwireConfigurationError(msg, type_name=ref.name)
        return implementation

    def constructor_signature(self, ref: ImplementationRef, implementation: type[object]) -> inspect.Signature:
        """Return the single public constructor signature of ``implementation``.

        Overloaded ``__init__`` declarations count as several constructors and
        are rejected as ambiguous.
        """
        init = implementation.__init__
        if inspect.isfunction(init):
            overloads = typing.get_overloads(init)
            if len(overloads) > 1:
                msg = (
                    f"Mapper class '{ref.name}' should have 1 constructor, "
                    f"found {len(overloads)} overloaded constructors (ambiguous constructor)."
                )
                raise MapwireConfigurationError(msg, type_name=ref.name)

        try:
            return inspect.signature(implementation)
        except (TypeError, ValueError) as exc:
            msg = f"Mapper class '{ref.name}' constructor cannot be inspected: {exc}"
            raise MapwireConfigurationError(msg, type_name=ref.name) from exc


__all__ = ["ImplementationValidator"]
