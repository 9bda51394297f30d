from __future__ import annotations

import pytest

import simpledi
from simpledi.exceptions import SimpleDIDuplicateRegistrationError, SimpleDIRegistryNotSetError
from simpledi.providers import FactoryBeanProvider
from simpledi.registry import BeanRegistry
from simpledi.registry_context import RegistryContext
from simpledi.scopes import ApplicationScope, DefaultScope


class _Service:
    pass


def test_top_level_registry_context_export_is_available() -> None:
    assert isinstance(simpledi.registry_context, RegistryContext)


def test_get_current_raises_when_context_is_unbound() -> None:
    context = RegistryContext()

    with pytest.raises(SimpleDIRegistryNotSetError, match="set_current"):
        context.get_current()


def test_get_bean_raises_when_context_is_unbound() -> None:
    context = RegistryContext()

    with pytest.raises(SimpleDIRegistryNotSetError):
        context.get_bean(_Service)


def test_deferred_registrations_are_replayed_in_order() -> None:
    context = RegistryContext()
    context.register_scope(DefaultScope("request"))
    context.register(FactoryBeanProvider(_Service), _Service, "request")
    registry = BeanRegistry()

    context.set_current(registry)
    registry.get_scope("request").start()

    assert isinstance(context.get_bean(_Service, "request"), _Service)


def test_registrations_apply_immediately_when_bound() -> None:
    context = RegistryContext()
    registry = BeanRegistry()
    context.set_current(registry)

    context.register(FactoryBeanProvider(_Service), _Service)

    assert registry.has_bean(_Service)


def test_failed_registration_is_not_recorded() -> None:
    context = RegistryContext()
    context.set_current(BeanRegistry())
    context.register(FactoryBeanProvider(_Service), "service")

    with pytest.raises(SimpleDIDuplicateRegistrationError):
        context.register(FactoryBeanProvider(_Service), "service")

    context.set_current(BeanRegistry())
    assert context.get_current().has_bean("service")


def test_rebinding_replays_into_new_registry() -> None:
    context = RegistryContext()
    context.register(FactoryBeanProvider(_Service), _Service)
    first = BeanRegistry()
    second = BeanRegistry()

    context.set_current(first)
    context.reset()
    context.set_current(second)

    assert first.get_bean(_Service) is not second.get_bean(_Service)


def test_clear_forgets_recorded_registrations() -> None:
    context = RegistryContext()
    context.register(FactoryBeanProvider(_Service), _Service)

    context.clear()
    context.set_current(BeanRegistry())

    assert not context.get_current().has_bean(_Service)


def test_lifecycle_calls_delegate_to_bound_registry() -> None:
    context = RegistryContext()
    registry = BeanRegistry()
    context.register(FactoryBeanProvider(_Service), "eager", ApplicationScope.NAME)
    context.set_current(registry)

    context.start_eager_scopes()
    eager = context.get_bean("eager")
    context.shutdown()

    assert isinstance(eager, _Service)
    assert not registry.has_bean("eager")
