from __future__ import annotations

import logging
import threading
from contextlib import AbstractContextManager, nullcontext
from enum import Enum
from typing import Any

from simpledi.exceptions import (
    SimpleDIConstructionError,
    SimpleDIDuplicateRegistrationError,
    SimpleDIError,
    SimpleDIIllegalOperationError,
    SimpleDIInvalidArgumentError,
    SimpleDINotStartedError,
    SimpleDIUnknownBeanError,
)
from simpledi.lock_mode import LockMode
from simpledi.providers import BeanProvider

logger = logging.getLogger(__name__)


class ScopeState(Enum):
    """Lifecycle of a scope. ``ENDED`` is terminal."""

    NOT_STARTED = "not_started"
    STARTED = "started"
    ENDED = "ended"


class BeanStore:
    """Hold the provider map, the bean cache and the lifecycle flag of one scope.

    The three are one unit of mutual exclusion: every read and write happens
    while ``lock`` is held. The lock is re-entrant so that a thread wiring a
    bean can look up the bean it has just cached.
    """

    def __init__(self, scope_name: str, lock_mode: LockMode = LockMode.THREAD) -> None:
        if not scope_name:
            msg = "Scope name must not be empty"
            raise SimpleDIInvalidArgumentError(msg)
        self.scope_name = scope_name
        self.state = ScopeState.NOT_STARTED
        self.providers: dict[str, BeanProvider[Any]] = {}
        self.cache: dict[str, Any] = {}
        self.lock: AbstractContextManager[Any] = (
            threading.RLock() if lock_mode is LockMode.THREAD else nullcontext()
        )

    def add_provider(self, provider: BeanProvider[Any], name: str) -> None:
        if provider is None:
            msg = f"Cannot register a None provider under name '{name}'"
            raise SimpleDIInvalidArgumentError(msg)
        if not name:
            msg = "Cannot register a provider with an empty name"
            raise SimpleDIInvalidArgumentError(msg)
        if self.state is ScopeState.ENDED:
            msg = f"Cannot register bean '{name}' in ended scope '{self.scope_name}'"
            raise SimpleDIIllegalOperationError(msg)
        if name in self.providers:
            msg = f"Bean '{name}' is already registered in scope '{self.scope_name}'"
            raise SimpleDIDuplicateRegistrationError(msg)
        self.providers[name] = provider
        logger.debug("Registered %r as '%s' in scope '%s'", provider, name, self.scope_name)

    def require_started(self) -> None:
        if self.state is not ScopeState.STARTED:
            raise SimpleDINotStartedError(self.scope_name, self.state)

    def provider_for(self, name: str) -> BeanProvider[Any]:
        try:
            return self.providers[name]
        except KeyError:
            msg = f"No bean '{name}' registered in scope '{self.scope_name}'"
            raise SimpleDIUnknownBeanError(name, msg) from None

    def mark_started(self) -> bool:
        """Move to ``STARTED``; return ``False`` when the scope was already started."""
        if self.state is ScopeState.ENDED:
            msg = f"Scope '{self.scope_name}' has ended and cannot be started again"
            raise SimpleDIIllegalOperationError(msg)
        if self.state is ScopeState.STARTED:
            return False
        self.state = ScopeState.STARTED
        logger.debug("Scope '%s' started", self.scope_name)
        return True

    def mark_ended(self) -> list[tuple[str, BeanProvider[Any]]]:
        """Move to ``ENDED`` and return the providers to notify (empty if already ended)."""
        if self.state is ScopeState.ENDED:
            return []
        self.state = ScopeState.ENDED
        self.cache.clear()
        logger.debug("Scope '%s' ended", self.scope_name)
        return list(self.providers.items())

    def construct(self, name: str, provider: BeanProvider[Any]) -> Any:
        try:
            instance = provider.provide()
        except SimpleDIError:
            raise
        except Exception as exc:
            msg = f"Provider of bean '{name}' failed to construct it: {exc}"
            raise SimpleDIConstructionError(name, msg) from exc
        logger.debug("Constructed bean '%s' in scope '%s'", name, self.scope_name)
        return instance

    def wire(self, name: str, provider: BeanProvider[Any], instance: Any) -> None:
        try:
            provider.set_soft_dependencies(instance)
        except SimpleDIError:
            raise
        except Exception as exc:
            msg = f"Provider of bean '{name}' failed to set its soft dependencies: {exc}"
            raise SimpleDIConstructionError(name, msg) from exc

    def construct_cached(self, name: str, provider: BeanProvider[Any]) -> Any:
        """Construct, cache before wiring, then wire; the cache entry is dropped if wiring fails."""
        instance = self.construct(name, provider)
        self.cache[name] = instance
        try:
            self.wire(name, provider, instance)
        except BaseException:
            self.cache.pop(name, None)
            raise
        return instance

    def notify_scope_ended(self, providers: list[tuple[str, BeanProvider[Any]]]) -> None:
        for name, provider in providers:
            try:
                provider.scope_ended()
            except Exception:
                logger.exception(
                    "Provider of bean '%s' failed while handling the end of scope '%s'",
                    name,
                    self.scope_name,
                )
