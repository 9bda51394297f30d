from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from simpledi._internal.bean_store import BeanStore, ScopeState
from simpledi.exceptions import SimpleDIBootstrapError, SimpleDIIllegalOperationError
from simpledi.lock_mode import LockMode
from simpledi.providers import BeanProvider

logger = logging.getLogger(__name__)


class Scope(ABC):
    """Named lifetime policy deciding when and how often providers run.

    Implementations own the providers registered with them and decide whether
    constructed beans are cached. Lookups are valid only while the scope is
    ``ScopeState.STARTED``.
    """

    endable: ClassVar[bool] = True
    """Whether ``end()`` is allowed by this policy. ``BeanRegistry.shutdown`` skips scopes that are not."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def state(self) -> ScopeState: ...

    @abstractmethod
    def register(self, provider: BeanProvider[Any], name: str) -> None: ...

    @abstractmethod
    def has_bean(self, name: str) -> bool: ...

    @abstractmethod
    def get_bean(self, name: str) -> Any: ...

    @abstractmethod
    def start(self) -> None: ...

    @abstractmethod
    def end(self) -> None: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, state={self.state.name})"


class DefaultScope(Scope):
    """Lazy, caching scope.

    ``start()`` is a pure state transition. A bean is constructed on its first
    ``get_bean`` call and cached before its soft dependencies are wired, so a
    bean that reaches itself through soft dependencies sees the cached,
    not-yet-wired instance instead of recursing.

    The scope lock is held while a bean is provided and wired. Two caching
    scopes whose beans reach each other can deadlock when both beans are first
    requested at the same time from two threads in opposite orders; resolve
    such beans once from a single thread (for example at bootstrap) first.
    """

    def __init__(self, name: str, *, lock_mode: LockMode = LockMode.THREAD) -> None:
        self._store = BeanStore(name, lock_mode)

    @property
    def name(self) -> str:
        return self._store.scope_name

    @property
    def state(self) -> ScopeState:
        return self._store.state

    def register(self, provider: BeanProvider[Any], name: str) -> None:
        with self._store.lock:
            self._store.add_provider(provider, name)

    def has_bean(self, name: str) -> bool:
        with self._store.lock:
            self._store.require_started()
            return name in self._store.providers

    def get_bean(self, name: str) -> Any:
        store = self._store
        with store.lock:
            store.require_started()
            provider = store.provider_for(name)
            if name in store.cache:
                return store.cache[name]
            return store.construct_cached(name, provider)

    def start(self) -> None:
        with self._store.lock:
            self._store.mark_started()

    def end(self) -> None:
        with self._store.lock:
            providers = self._store.mark_ended()
            self._store.notify_scope_ended(providers)


class SingletonScope(DefaultScope):
    """One instance per bean for the whole process.

    The scope is started on construction and refuses to end. It is the
    registry's default scope.
    """

    NAME: ClassVar[str] = "simpledi.scope.singleton"

    endable: ClassVar[bool] = False

    def __init__(self, name: str = NAME, *, lock_mode: LockMode = LockMode.THREAD) -> None:
        super().__init__(name, lock_mode=lock_mode)
        self.start()

    def end(self) -> None:
        msg = f"{self.name} cannot be ended"
        raise SimpleDIIllegalOperationError(msg)


class NewInstanceScope(DefaultScope):
    """Prototype scope: every ``get_bean`` runs the provider anew and nothing is cached.

    Started on construction so the registry serves its beans without an
    explicit start. Unlike the singleton scope it can be ended.
    """

    NAME: ClassVar[str] = "simpledi.scope.new_instance"

    def __init__(self, name: str = NAME, *, lock_mode: LockMode = LockMode.THREAD) -> None:
        super().__init__(name, lock_mode=lock_mode)
        self.start()

    def get_bean(self, name: str) -> Any:
        store = self._store
        with store.lock:
            store.require_started()
            provider = store.provider_for(name)
        instance = store.construct(name, provider)
        store.wire(name, provider, instance)
        return instance


class ApplicationScope(DefaultScope):
    """Eager scope that constructs all of its beans at bootstrap.

    ``start()`` runs two passes over the providers in registration order. The
    construction pass calls ``provide()`` on every provider and caches each raw
    instance; the wiring pass then calls ``set_soft_dependencies()`` on every
    instance. Beans whose soft dependencies form a cycle therefore all exist
    before any of them is wired. A bean must not need a wired peer inside its
    own ``provide()``.

    A failure in either pass raises ``SimpleDIBootstrapError``. Beans built up
    to that point stay in the cache; the process is expected to abort.
    """

    NAME: ClassVar[str] = "simpledi.scope.application"

    def __init__(self, name: str = NAME, *, lock_mode: LockMode = LockMode.THREAD) -> None:
        super().__init__(name, lock_mode=lock_mode)

    def start(self) -> None:
        store = self._store
        with store.lock:
            if not store.mark_started():
                logger.debug("Scope '%s' is already started", self.name)
                return

            constructed: list[tuple[str, BeanProvider[Any], Any]] = []
            for name, provider in list(store.providers.items()):
                # a provider earlier in this pass may have pulled the bean in lazily
                if name in store.cache:
                    continue
                try:
                    instance = provider.provide()
                except Exception as exc:
                    msg = f"Bean '{name}' could not be constructed while starting scope '{self.name}': {exc}"
                    raise SimpleDIBootstrapError(name, msg) from exc
                store.cache[name] = instance
                constructed.append((name, provider, instance))

            for name, provider, instance in constructed:
                try:
                    provider.set_soft_dependencies(instance)
                except Exception as exc:
                    msg = f"Bean '{name}' could not be wired while starting scope '{self.name}': {exc}"
                    raise SimpleDIBootstrapError(name, msg) from exc

        logger.info("Scope '%s' started eagerly with %d beans", self.name, len(constructed))


__all__ = [
    "ApplicationScope",
    "DefaultScope",
    "NewInstanceScope",
    "Scope",
    "ScopeState",
    "SingletonScope",
]
