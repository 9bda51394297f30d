"""Shared pytest fixtures for simpledi tests."""

import pytest

from simpledi.lock_mode import LockMode
from simpledi.policies import ScopeFallback
from simpledi.registry import BeanRegistry
from simpledi.scopes import ApplicationScope, DefaultScope, NewInstanceScope, SingletonScope


@pytest.fixture()
def registry() -> BeanRegistry:
    """Default registry with strict scope lookups."""
    return BeanRegistry()


@pytest.fixture()
def lenient_registry() -> BeanRegistry:
    """Registry that falls back to the default scope for unknown scope names."""
    return BeanRegistry(scope_fallback=ScopeFallback.DEFAULT_SCOPE)


@pytest.fixture()
def unlocked_registry() -> BeanRegistry:
    """Registry without locking, for single-threaded tests."""
    return BeanRegistry(lock_mode=LockMode.NONE)


@pytest.fixture()
def default_scope() -> DefaultScope:
    """Not-yet-started lazy caching scope."""
    return DefaultScope("default")


@pytest.fixture()
def singleton_scope() -> SingletonScope:
    return SingletonScope()


@pytest.fixture()
def new_instance_scope() -> NewInstanceScope:
    return NewInstanceScope()


@pytest.fixture()
def application_scope() -> ApplicationScope:
    return ApplicationScope()
