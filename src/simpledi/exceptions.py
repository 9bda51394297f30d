from __future__ import annotations

from typing import Any


class SimpleDIError(Exception):
    """Represent a base class for all SimpleDI-specific failures.

    Catch this type when you want to handle any SimpleDI error path without
    matching each concrete exception class individually.
    """


class SimpleDIInvalidArgumentError(SimpleDIError):
    """Signal an absent or empty required argument.

    Raised by registration APIs such as ``BeanRegistry.register`` and
    ``BeanRegistry.register_scope`` when a provider, a scope, or a name is
    ``None`` or empty.
    """


class SimpleDIDuplicateRegistrationError(SimpleDIError):
    """Signal that a bean name is already registered in the target scope.

    Typical fix is choosing a different bean name or registering the provider
    in another scope.
    """


class SimpleDIDuplicateScopeError(SimpleDIError):
    """Signal that a scope name is already registered in the registry."""


class SimpleDIUnknownScopeError(SimpleDIError):
    """Signal that a strict scope lookup failed.

    Raised by ``BeanRegistry.register`` and ``BeanRegistry.get_bean`` when the
    given scope name was never registered. ``get_bean`` falls back to the
    default scope instead when ``ScopeFallback.DEFAULT_SCOPE`` is in effect.
    """

    def __init__(self, scope_name: str, message: str | None = None) -> None:
        self.scope_name = scope_name
        super().__init__(message or f"No scope registered under the name '{scope_name}'")


class SimpleDIUnknownBeanError(SimpleDIError):
    """Signal that no provider is registered under the requested bean name.

    Typical fixes include registering the provider before the first lookup or
    passing the scope name the provider was registered with.
    """

    def __init__(self, bean_name: str, message: str | None = None) -> None:
        self.bean_name = bean_name
        super().__init__(message or f"Cannot find a scope that provides a bean '{bean_name}'")


class SimpleDINotStartedError(SimpleDIError):
    """Signal ``has_bean``/``get_bean`` on a scope that is not started.

    Scopes answer lookups only in the ``STARTED`` state. Start the scope
    explicitly (``scope.start()``) or, for the application scope, call
    ``BeanRegistry.start_eager_scopes()`` during bootstrap.
    """

    def __init__(self, scope_name: str, state: Any) -> None:
        self.scope_name = scope_name
        self.state = state
        super().__init__(f"Scope '{scope_name}' is not started (state: {state.name})")


class SimpleDIIllegalOperationError(SimpleDIError):
    """Signal an operation the scope's lifetime policy forbids.

    Raised when ending the singleton scope, when starting an ended scope, and
    when registering a provider into an ended scope.
    """


class SimpleDIConstructionError(SimpleDIError):
    """Signal that a provider failed while constructing or wiring a bean.

    The original exception is kept as ``__cause__``.
    """

    def __init__(self, bean_name: str, message: str) -> None:
        self.bean_name = bean_name
        super().__init__(message)


class SimpleDIBootstrapError(SimpleDIConstructionError):
    """Signal a provider failure during the eager start of the application scope.

    A partially wired eager graph is unsafe to serve from, so this error is
    expected to abort the process. Partially constructed beans are left in
    place.
    """


class SimpleDIRegistryNotSetError(SimpleDIError):
    """Signal use of ``registry_context`` before a registry is bound.

    Typical fix is calling ``registry_context.set_current(registry)`` during
    application startup before lookups.
    """
