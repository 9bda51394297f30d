from __future__ import annotations

import logging
import threading
from contextlib import AbstractContextManager, nullcontext
from typing import Any, TypeVar, overload

from simpledi._internal.bean_store import ScopeState
from simpledi.exceptions import (
    SimpleDIDuplicateScopeError,
    SimpleDIError,
    SimpleDIInvalidArgumentError,
    SimpleDINotStartedError,
    SimpleDIUnknownBeanError,
    SimpleDIUnknownScopeError,
)
from simpledi.lock_mode import LockMode
from simpledi.policies import ScopeFallback
from simpledi.providers import BeanKey, BeanProvider, BeanReference, to_bean_name
from simpledi.scopes import ApplicationScope, NewInstanceScope, Scope, SingletonScope

T = TypeVar("T")

logger = logging.getLogger(__name__)


class BeanRegistry:
    """Route provider registrations and bean lookups to named scopes.

    A registry is created once at process start and shared by reference. It
    comes with three scopes: ``ApplicationScope`` (eager), ``SingletonScope``
    (the default scope) and ``NewInstanceScope`` (no caching). Further scopes
    can be added with ``register_scope``.

    Bootstrap is single threaded: register every provider, then call
    ``start_eager_scopes()`` once before the first lookup. Steady-state lookups
    may run concurrently.

    Examples:
        .. code-block:: python

            registry = BeanRegistry()
            registry.register(FactoryBeanProvider(Clock), Clock)
            registry.register(
                ClassBeanProvider(Cache, registry, fields={"clock": Clock}),
                Cache,
                ApplicationScope.NAME,
            )
            registry.start_eager_scopes()

            cache = registry.get_bean(Cache)

    """

    def __init__(
        self,
        *,
        lock_mode: LockMode = LockMode.THREAD,
        scope_fallback: ScopeFallback = ScopeFallback.STRICT,
    ) -> None:
        """Initialize a registry with the built-in scopes.

        Args:
            lock_mode: Locking used by the registry and its built-in scopes.
                ``LockMode.NONE`` is only safe for single-threaded use.
            scope_fallback: What ``get_bean`` does when the named scope is not
                registered. Registration is always strict.

        """
        logger.debug("Instantiating BeanRegistry")
        self._lock_mode = lock_mode
        self._scope_fallback = scope_fallback
        self._scopes: dict[str, Scope] = {}
        self._lock: AbstractContextManager[Any] = (
            threading.Lock() if lock_mode is LockMode.THREAD else nullcontext()
        )

        self.register_scope(ApplicationScope(lock_mode=lock_mode))
        singleton_scope = SingletonScope(lock_mode=lock_mode)
        self.register_scope(singleton_scope)
        self.register_scope(NewInstanceScope(lock_mode=lock_mode))
        self._default_scope_name = singleton_scope.name

    @property
    def default_scope_name(self) -> str:
        """Name of the scope used when a caller gives no scope name."""
        return self._default_scope_name

    @property
    def lock_mode(self) -> LockMode:
        return self._lock_mode

    @property
    def scope_fallback(self) -> ScopeFallback:
        return self._scope_fallback

    @property
    def scope_names(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._scopes)

    def register_scope(self, scope: Scope) -> None:
        """Add a lifetime policy to the registry.

        Args:
            scope: The scope to add, keyed by its name.

        Raises:
            SimpleDIInvalidArgumentError: If ``scope`` is ``None``.
            SimpleDIDuplicateScopeError: If a scope with the same name is registered.

        """
        if scope is None:
            msg = "Cannot register a None scope"
            raise SimpleDIInvalidArgumentError(msg)
        with self._lock:
            if scope.name in self._scopes:
                msg = f"Scope '{scope.name}' is already registered"
                raise SimpleDIDuplicateScopeError(msg)
            self._scopes[scope.name] = scope
        logger.debug("Registered scope %r", scope)

    def get_scope(self, scope_name: str) -> Scope:
        """Return the scope registered under ``scope_name``.

        Raises:
            SimpleDIUnknownScopeError: If no such scope is registered.

        """
        with self._lock:
            scope = self._scopes.get(scope_name)
        if scope is None:
            logger.error("No scope registered under the name '%s'", scope_name)
            raise SimpleDIUnknownScopeError(scope_name)
        return scope

    def register(
        self,
        provider: BeanProvider[Any],
        name: BeanReference,
        scope_name: str | None = None,
    ) -> None:
        """File a provider under a scope.

        Args:
            provider: The provider of the bean.
            name: Bean name; a class or a ``BeanKey`` is converted to its name.
            scope_name: Target scope. ``None`` selects the default scope; an
                unknown name is an error.

        Raises:
            SimpleDIInvalidArgumentError: If the provider or the name is absent.
            SimpleDIUnknownScopeError: If ``scope_name`` is not registered.
            SimpleDIDuplicateRegistrationError: If the scope already has the name.

        """
        bean_name = to_bean_name(name)
        if provider is None:
            msg = f"Cannot register a None provider under name '{bean_name}'"
            raise SimpleDIInvalidArgumentError(msg)
        target = self.get_scope(self._default_scope_name if scope_name is None else scope_name)
        target.register(provider, bean_name)

    @overload
    def get_bean(
        self,
        name: type[T] | BeanKey[T],
        scope_name: str | None = None,
        *,
        fallback: ScopeFallback | None = None,
    ) -> T: ...

    @overload
    def get_bean(
        self,
        name: str,
        scope_name: str | None = None,
        *,
        fallback: ScopeFallback | None = None,
    ) -> Any: ...

    def get_bean(
        self,
        name: BeanReference,
        scope_name: str | None = None,
        *,
        fallback: ScopeFallback | None = None,
    ) -> Any:
        """Return a bean, constructing it according to its scope's policy.

        Args:
            name: Bean name; a class or a ``BeanKey`` is converted to its name.
            scope_name: Scope to ask. ``None`` searches every started scope in
                registration order and uses the first one that has the bean.
            fallback: Overrides the registry's ``scope_fallback`` for this call.

        Raises:
            SimpleDIUnknownBeanError: If no scope provides the bean.
            SimpleDIUnknownScopeError: If ``scope_name`` is unknown under the
                strict policy.
            SimpleDINotStartedError: If the named scope is not started.

        """
        bean_name = to_bean_name(name)
        if scope_name is not None:
            return self._lookup_scope(scope_name, fallback).get_bean(bean_name)

        scope = self._find_scope_with(bean_name)
        if scope is None:
            raise SimpleDIUnknownBeanError(bean_name)
        return scope.get_bean(bean_name)

    def has_bean(
        self,
        name: BeanReference,
        scope_name: str | None = None,
        *,
        fallback: ScopeFallback | None = None,
    ) -> bool:
        """Return whether ``get_bean`` with the same arguments would find a provider."""
        bean_name = to_bean_name(name)
        if scope_name is None:
            return self._find_scope_with(bean_name) is not None
        scope = self._lookup_scope(scope_name, fallback)
        return scope.state is ScopeState.STARTED and scope.has_bean(bean_name)

    def start_eager_scopes(self) -> None:
        """Start the application scope, constructing and wiring all of its beans.

        Call once after every provider is registered and before the first
        lookup. Later calls are no-ops.

        Raises:
            SimpleDIBootstrapError: If a provider fails; the process should abort.

        """
        self.get_scope(ApplicationScope.NAME).start()

    def shutdown(self) -> None:
        """End every scope whose policy allows it, newest scope first.

        Idempotent. A scope that fails to end does not stop the others from
        ending; the first failure is re-raised afterwards.
        """
        with self._lock:
            scopes = list(self._scopes.values())

        first_error: SimpleDIError | None = None
        for scope in reversed(scopes):
            if not scope.endable:
                continue
            try:
                scope.end()
            except SimpleDIError as exc:
                logger.exception("Scope '%s' failed to end", scope.name)
                if first_error is None:
                    first_error = exc
        logger.info("BeanRegistry shut down")
        if first_error is not None:
            raise first_error

    def _lookup_scope(self, scope_name: str, fallback: ScopeFallback | None) -> Scope:
        policy = self._scope_fallback if fallback is None else fallback
        with self._lock:
            scope = self._scopes.get(scope_name)
            if scope is None and policy is ScopeFallback.DEFAULT_SCOPE:
                logger.debug(
                    "Scope '%s' is not registered, falling back to '%s'",
                    scope_name,
                    self._default_scope_name,
                )
                scope = self._scopes[self._default_scope_name]
        if scope is None:
            logger.error("No scope registered under the name '%s'", scope_name)
            raise SimpleDIUnknownScopeError(scope_name)
        return scope

    def _find_scope_with(self, bean_name: str) -> Scope | None:
        with self._lock:
            scopes = list(self._scopes.values())
        for scope in scopes:
            if scope.state is not ScopeState.STARTED:
                continue
            try:
                if scope.has_bean(bean_name):
                    return scope
            except SimpleDINotStartedError:
                # ended by another thread after the state check
                continue
        return None


__all__ = ["BeanRegistry"]
