"""Tests for custom exception hierarchy."""

import pytest

from simpledi.exceptions import (
    SimpleDIBootstrapError,
    SimpleDIConstructionError,
    SimpleDIDuplicateRegistrationError,
    SimpleDIDuplicateScopeError,
    SimpleDIError,
    SimpleDIIllegalOperationError,
    SimpleDIInvalidArgumentError,
    SimpleDINotStartedError,
    SimpleDIRegistryNotSetError,
    SimpleDIUnknownBeanError,
    SimpleDIUnknownScopeError,
)
from simpledi.registry import BeanRegistry
from simpledi.scopes import ApplicationScope, ScopeState


@pytest.mark.parametrize(
    "error_type",
    [
        SimpleDIBootstrapError,
        SimpleDIConstructionError,
        SimpleDIDuplicateRegistrationError,
        SimpleDIDuplicateScopeError,
        SimpleDIIllegalOperationError,
        SimpleDIInvalidArgumentError,
        SimpleDINotStartedError,
        SimpleDIRegistryNotSetError,
        SimpleDIUnknownBeanError,
        SimpleDIUnknownScopeError,
    ],
)
def test_every_error_derives_from_base(error_type: type[Exception]) -> None:
    assert issubclass(error_type, SimpleDIError)


def test_bootstrap_error_is_a_construction_error() -> None:
    assert issubclass(SimpleDIBootstrapError, SimpleDIConstructionError)


class TestSimpleDIUnknownBeanError:
    def test_message_names_the_bean(self, registry: BeanRegistry) -> None:
        with pytest.raises(SimpleDIUnknownBeanError) as exc_info:
            registry.get_bean("ghost")

        assert exc_info.value.bean_name == "ghost"
        assert "'ghost'" in str(exc_info.value)


class TestSimpleDINotStartedError:
    def test_carries_scope_name_and_state(self) -> None:
        scope = ApplicationScope()

        with pytest.raises(SimpleDINotStartedError) as exc_info:
            scope.has_bean("anything")

        assert exc_info.value.scope_name == ApplicationScope.NAME
        assert exc_info.value.state is ScopeState.NOT_STARTED
        assert "NOT_STARTED" in str(exc_info.value)


class TestSimpleDIUnknownScopeError:
    def test_default_message(self) -> None:
        error = SimpleDIUnknownScopeError("request")

        assert error.scope_name == "request"
        assert str(error) == "No scope registered under the name 'request'"
