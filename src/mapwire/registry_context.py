from mapwire._internal.registry_context import RegistryContext, registry_context

__all__ = ["RegistryContext", "registry_context"]
