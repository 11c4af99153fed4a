from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from mapwire._internal.sources import ImplementationLocator
from mapwire._internal.validators import ImplementationValidator
from mapwire.exceptions import MapwireConfigurationError

logger = logging.getLogger(__name__)


class InstanceFactory:
    """Build raw mapper instances from their generated implementations.

    The implementation must expose exactly one constructor whose parameter
    count matches the supplied sources. Sources are passed positionally and
    as-is. Every failure surfaces as ``MapwireConfigurationError`` naming the
    implementation that was attempted.
    """

    def __init__(
        self,
        locator: ImplementationLocator,
        validator: ImplementationValidator | None = None,
    ) -> None:
        self._locator = locator
        self._validator = validator or ImplementationValidator()

    def create(self, identity: str, arguments: Sequence[Any] | None = None) -> Any:
        """Instantiate the implementation generated for ``identity``.

        Args:
            identity: Canonical dotted name of the mapper interface.
            arguments: Ordered constructor sources. ``None`` selects the
                no-argument constructor.

        Returns:
            A new, not yet wired mapper instance.

        Raises:
            MapwireConfigurationError: If the implementation cannot be found,
                has an ambiguous constructor, expects a different number of
                sources, or fails while being constructed.

        """
        ref = self._locator.locate(identity)
        implementation = self._validator.validate_implementation(ref)
        signature = self._validator.constructor_signature(ref, implementation)

        supplied = tuple(arguments) if arguments is not None else ()
        expected = len(signature.parameters)
        if expected != len(supplied):
            if arguments is None:
                msg = (
                    f"Mapper class '{ref.name}' constructor needs {expected} source(s) "
                    f"{signature}, but none were given."
                )
            else:
                msg = (
                    f"Mapper class '{ref.name}' constructor needs {expected} source(s) "
                    f"{signature}, got {len(supplied)}."
                )
            raise MapwireConfigurationError(msg, type_name=ref.name)

        logger.debug(
            "Instantiating mapper %s (%s) with %d source(s)",
            ref.name,
            ref.origin,
            len(supplied),
        )
        try:
            return implementation(*supplied)
        except Exception as exc:
            msg = f"Instantiation of mapper class '{ref.name}' failed: {exc}"
            raise MapwireConfigurationError(msg, type_name=ref.name) from exc


__all__ = ["InstanceFactory"]
