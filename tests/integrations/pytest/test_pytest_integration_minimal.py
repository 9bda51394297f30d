from __future__ import annotations

import pytest

from simpledi import ApplicationScope, BeanRegistry, FactoryBeanProvider, ScopeState

pytest_plugins = ["simpledi.integrations.pytest_plugin"]


class _Service:
    pass


class _FakeService(_Service):
    pass


@pytest.fixture()
def simpledi_registry() -> BeanRegistry:
    registry = BeanRegistry()
    registry.register(FactoryBeanProvider(_FakeService), _Service, ApplicationScope.NAME)
    return registry


def test_registry_fixture_can_be_overridden(simpledi_registry: BeanRegistry) -> None:
    assert simpledi_registry.has_bean(_Service, ApplicationScope.NAME) is False


def test_started_registry_fixture_starts_eager_scopes(
    simpledi_started_registry: BeanRegistry,
) -> None:
    assert isinstance(simpledi_started_registry.get_bean(_Service), _FakeService)
    assert (
        simpledi_started_registry.get_scope(ApplicationScope.NAME).state is ScopeState.STARTED
    )
