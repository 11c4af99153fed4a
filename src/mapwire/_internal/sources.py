from __future__ import annotations

import importlib
import logging
import threading
from dataclasses import dataclass
from typing import Any

from mapwire._internal.naming import implementation_name
from mapwire.exceptions import MapwireConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ImplementationRef:
    """Generated implementation found for a mapper interface."""

    name: str
    """Dotted name the implementation was looked up under."""
    implementation: Any
    """The implementation object, normally a class."""
    origin: str
    """Where the implementation came from: ``"registration"`` or ``"module"``."""


class ImplementationRegistrations:
    """Explicit interface-to-implementation bindings.

    Generated code publishes itself here through ``mapper_implementation`` or
    ``MapperRegistry.add_implementation``. Re-registering an interface replaces
    the previous binding; mappers already cached keep their implementation.
    """

    def __init__(self) -> None:
        self._implementations: dict[str, Any] = {}
        self._lock = threading.Lock()

    def add(self, identity: str, implementation: Any) -> None:
        with self._lock:
            self._implementations[identity] = implementation

    def get(self, identity: str) -> Any | None:
        return self._implementations.get(identity)

    def __contains__(self, identity: object) -> bool:
        return identity in self._implementations

    def __len__(self) -> int:
        return len(self._implementations)


class ModuleImplementationDiscovery:
    """Find generated implementations by importing them under their conventional name.

    For the implementation name ``com.acme.UserMapperImpl`` the longest
    importable module prefix is imported (``com.acme``) and the remaining
    segments are read as attributes, which also covers nested classes such as
    ``com.acme.Mappers.UserMapperImpl``.
    """

    def find(self, name: str) -> Any:
        """Return the object published under the dotted ``name``.

        Args:
            name: Dotted implementation name.

        Raises:
            MapwireConfigurationError: If no module prefix is importable, if a
                module fails while importing, or if the attribute path is missing.

        """
        parts = name.split(".")
        for split_at in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split_at])
            module = self._import_module(module_name, name)
            if module is None:
                continue
            target: Any = module
            for attribute in parts[split_at:]:
                try:
                    target = getattr(target, attribute)
                except AttributeError as exc:
                    msg = (
                        f"Unable to load generated mapper class '{name}': "
                        f"module '{module_name}' has no attribute path "
                        f"'{'.'.join(parts[split_at:])}'."
                    )
                    raise MapwireConfigurationError(msg, type_name=name) from exc
            logger.debug("Discovered mapper implementation %s in module %s", name, module_name)
            return target

        msg = f"Unable to load generated mapper class '{name}': no importable module found."
        raise MapwireConfigurationError(msg, type_name=name)

    def _import_module(self, module_name: str, name: str) -> Any | None:
        try:
            return importlib.import_module(module_name)
        except ModuleNotFoundError as exc:
            # Only a missing candidate module (or one of its parents) means "try a shorter prefix".
            if exc.name is not None and (
                module_name == exc.name or module_name.startswith(exc.name + ".")
            ):
                return None
            msg = f"Unable to load generated mapper class '{name}': {exc}"
            raise MapwireConfigurationError(msg, type_name=name) from exc
        except Exception as exc:
            msg = f"Unable to load generated mapper class '{name}': importing '{module_name}' failed: {exc}"
            raise MapwireConfigurationError(msg, type_name=name) from exc


class ImplementationLocator:
    """Resolve the generated implementation for an interface identity.

    Explicit registrations take precedence; module discovery is consulted only
    when enabled and no registration exists.
    """

    def __init__(
        self,
        *,
        suffix: str,
        registrations: ImplementationRegistrations,
        discovery: ModuleImplementationDiscovery | None,
    ) -> None:
        self._suffix = suffix
        self._registrations = registrations
        self._discovery = discovery

    def locate(self, identity: str) -> ImplementationRef:
        name = implementation_name(identity, self._suffix)
        registered = self._registrations.get(identity)
        if registered is not None:
            return ImplementationRef(name=name, implementation=registered, origin="registration")

        if self._discovery is None:
            msg = (
                f"Unable to load generated mapper class '{name}': no implementation is "
                f"registered for '{identity}' and module discovery is disabled."
            )
            raise MapwireConfigurationError(msg, type_name=name)
        return ImplementationRef(
            name=name,
            implementation=self._discovery.find(name),
            origin="module",
        )


__all__ = [
    "ImplementationLocator",
    "ImplementationRef",
    "ImplementationRegistrations",
    "ModuleImplementationDiscovery",
]
