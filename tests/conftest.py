"""Shared pytest fixtures for mapwire tests."""

import pytest

from mapwire.lock_mode import LockMode
from mapwire.registry import MapperRegistry


@pytest.fixture()
def registry() -> MapperRegistry:
    """Default registry with module discovery enabled."""
    return MapperRegistry()


@pytest.fixture()
def strict_registry() -> MapperRegistry:
    """Registry that only knows explicitly registered implementations."""
    return MapperRegistry(discover_modules=False)


@pytest.fixture(params=[LockMode.KEY, LockMode.GLOBAL], ids=lambda mode: mode.value)
def any_lock_registry(request: pytest.FixtureRequest) -> MapperRegistry:
    """Registry parametrized over every cache lock mode."""
    return MapperRegistry(lock_mode=request.param)
