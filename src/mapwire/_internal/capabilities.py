from __future__ import annotations

import inspect
import logging
import threading
import typing
from collections.abc import Mapping
from dataclasses import dataclass
from inspect import Parameter
from typing import Any

from mapwire._internal.naming import DEFAULT_CAPABILITY_PREFIX, capability_name
from mapwire._internal.type_checks import is_runtime_class
from mapwire.exceptions import MapwireConfigurationError

logger = logging.getLogger(__name__)

_POSITIONAL_KINDS = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)


@dataclass(frozen=True, slots=True)
class CapabilityTable:
    """Map custom mapper types to the setters a generated implementation declares.

    A setter is registered for type ``T`` only when its name is exactly
    ``capability_name(T, prefix)`` and its single parameter is annotated with
    ``T`` itself.
    """

    implementation: type[Any]
    """Generated implementation class the table was built from."""
    prefix: str
    """Setter name prefix used while scanning."""
    setters: Mapping[type[Any], str]
    """Custom mapper type to setter name."""

    @classmethod
    def build(cls, implementation: type[Any], prefix: str = DEFAULT_CAPABILITY_PREFIX) -> CapabilityTable:
        """Scan ``implementation`` for custom mapper setters.

        Raises:
            MapwireConfigurationError: If a candidate setter has annotations
                that cannot be resolved.

        """
        setters: dict[type[Any], str] = {}
        for name in dir(implementation):
            if not name.startswith(prefix):
                continue
            setter = getattr(implementation, name, None)
            if not inspect.isfunction(setter):
                continue
            parameter_type = cls._single_parameter_type(implementation, name, setter)
            if parameter_type is None:
                continue
            if capability_name(parameter_type, prefix) != name:
                continue
            setters[parameter_type] = name
        return cls(implementation=implementation, prefix=prefix, setters=setters)

    @staticmethod
    def _single_parameter_type(
        implementation: type[Any],
        name: str,
        setter: Any,
    ) -> type[Any] | None:
        parameters = list(inspect.signature(setter).parameters.values())
        # self plus exactly one positional value
        if len(parameters) != 2 or parameters[1].kind not in _POSITIONAL_KINDS:  # noqa: PLR2004
            return None
        try:
            hints = typing.get_type_hints(setter)
        except Exception as exc:
            msg = (
                f"Setter '{name}' of mapper class '{implementation.__qualname__}' "
                f"has annotations that cannot be resolved: {exc}"
            )
            raise MapwireConfigurationError(msg, type_name=implementation.__qualname__) from exc
        annotation = hints.get(parameters[1].name)
        if not is_runtime_class(annotation):
            return None
        return annotation

    def lookup(self, delegate_type: type[Any]) -> tuple[type[Any], str] | None:
        """Return the most-derived ``(type, setter name)`` accepting ``delegate_type``.

        The delegate type itself is tried first, then its ancestors in method
        resolution order. ``object`` is never matched.
        """
        for candidate in delegate_type.__mro__:
            if candidate is object:
                break
            setter_name = self.setters.get(candidate)
            if setter_name is not None:
                return candidate, setter_name
        return None


class CapabilityBinder:
    """Wire custom mappers into mapper instances through their generated setters.

    Capability tables are built once per implementation class and reused for
    every later binding.
    """

    def __init__(self, prefix: str = DEFAULT_CAPABILITY_PREFIX) -> None:
        self._prefix = prefix
        self._tables: dict[type[Any], CapabilityTable] = {}
        self._tables_lock = threading.Lock()

    def table_for(self, implementation: type[Any]) -> CapabilityTable:
        table = self._tables.get(implementation)
        if table is None:
            with self._tables_lock:
                table = self._tables.get(implementation)
                if table is None:
                    table = CapabilityTable.build(implementation, self._prefix)
                    self._tables[implementation] = table
        return table

    def bind(self, instance: Any, delegate: Any) -> None:
        """Invoke the setter of ``instance`` accepting ``delegate``.

        Args:
            instance: Freshly constructed mapper instance.
            delegate: Custom mapper to hand to the instance.

        Raises:
            MapwireConfigurationError: If no setter accepts the delegate type or
                any of its ancestors, or if the setter raises.

        """
        implementation = type(instance)
        delegate_type = type(delegate)
        match = self.table_for(implementation).lookup(delegate_type)
        if match is None:
            expected = capability_name(delegate_type, self._prefix)
            msg = (
                f"Given a custom mapper of type '{delegate_type.__qualname__}' while setter "
                f"'{expected}' does not exist on '{implementation.__qualname__}', "
                "add it to the mapper interface."
            )
            raise MapwireConfigurationError(msg, type_name=delegate_type.__qualname__)

        matched_type, setter_name = match
        if matched_type is not delegate_type:
            logger.debug(
                "Binding custom mapper %s through ancestor setter %s on %s",
                delegate_type.__qualname__,
                setter_name,
                implementation.__qualname__,
            )
        try:
            getattr(instance, setter_name)(delegate)
        except Exception as exc:
            msg = (
                f"Setter '{setter_name}' of mapper class '{implementation.__qualname__}' "
                f"failed for custom mapper '{delegate_type.__qualname__}': {exc}"
            )
            raise MapwireConfigurationError(msg, type_name=delegate_type.__qualname__) from exc


__all__ = ["CapabilityBinder", "CapabilityTable"]
