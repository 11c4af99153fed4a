from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mapwire._internal.lock_mode import LockMode
from mapwire._internal.naming import DEFAULT_CAPABILITY_PREFIX, DEFAULT_IMPLEMENTATION_SUFFIX


class MapwireSettings(BaseSettings):
    """Registry configuration read from ``MAPWIRE_*`` environment variables.

    Used by ``MapperRegistry.from_settings`` and by the default registry that
    ``registry_context`` creates on first use.
    """

    model_config = SettingsConfigDict(env_prefix="MAPWIRE_", frozen=True)

    implementation_suffix: str = Field(default=DEFAULT_IMPLEMENTATION_SUFFIX, min_length=1)
    """Suffix appended to an interface name to find its generated implementation."""
    capability_prefix: str = Field(default=DEFAULT_CAPABILITY_PREFIX, min_length=1)
    """Prefix of generated setters accepting custom mappers."""
    lock_mode: LockMode = LockMode.KEY
    """Locking strategy of the singleton cache."""
    discover_modules: bool = True
    """Import implementations by naming convention when none is registered."""


__all__ = ["MapwireSettings"]
