from mapwire.exceptions import MapwireConfigurationError, MapwireError
from mapwire.lock_mode import LockMode
from mapwire.registration_decorators import mapper_implementation
from mapwire.registry import MapperBuilder, MapperRegistry
from mapwire.registry_context import RegistryContext, registry_context
from mapwire.settings import MapwireSettings

resolve = registry_context.resolve
resolve_with_source = registry_context.resolve_with_source
resolve_with_custom = registry_context.resolve_with_custom
builder = registry_context.builder

__all__ = [
    "LockMode",
    "MapperBuilder",
    "MapperRegistry",
    "MapwireConfigurationError",
    "MapwireError",
    "MapwireSettings",
    "RegistryContext",
    "builder",
    "mapper_implementation",
    "registry_context",
    "resolve",
    "resolve_with_custom",
    "resolve_with_source",
]
