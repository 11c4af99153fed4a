import mapwire
from mapwire.exceptions import MapwireConfigurationError, MapwireError
from mapwire.lock_mode import LockMode
from mapwire.registration_decorators import mapper_implementation
from mapwire.registry import MapperBuilder, MapperRegistry
from mapwire.registry_context import RegistryContext, registry_context
from mapwire.settings import MapwireSettings


def test_top_level_exports() -> None:
    assert set(mapwire.__all__) == {
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
    }
    for name in mapwire.__all__:
        assert hasattr(mapwire, name), name


def test_top_level_names_are_public_module_objects() -> None:
    assert mapwire.MapperRegistry is MapperRegistry
    assert mapwire.MapperBuilder is MapperBuilder
    assert mapwire.RegistryContext is RegistryContext
    assert mapwire.registry_context is registry_context
    assert mapwire.LockMode is LockMode
    assert mapwire.MapwireSettings is MapwireSettings
    assert mapwire.MapwireError is MapwireError
    assert mapwire.MapwireConfigurationError is MapwireConfigurationError
    assert mapwire.mapper_implementation is mapper_implementation


def test_lock_mode_values() -> None:
    assert {mode.value for mode in LockMode} == {"key", "global"}
