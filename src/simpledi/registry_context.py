from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias, TypeVar, cast, overload

from simpledi.exceptions import SimpleDIRegistryNotSetError
from simpledi.policies import ScopeFallback
from simpledi.providers import BeanKey, BeanProvider, BeanReference
from simpledi.registry import BeanRegistry
from simpledi.scopes import Scope

T = TypeVar("T")

logger = logging.getLogger(__name__)

_RegistrationMethod: TypeAlias = Literal["register", "register_scope"]


@dataclass(frozen=True, slots=True)
class _RegistrationOperation:
    """Registry registration operation replayed by RegistryContext."""

    method_name: _RegistrationMethod
    args: tuple[Any, ...]

    def apply(self, registry: BeanRegistry) -> None:
        registration_method = cast("Callable[..., Any]", getattr(registry, self.method_name))
        registration_method(*self.args)


class RegistryContext:
    """Deferred-registration holder of the process-wide active registry.

    Modules can register scopes and providers at import time, before the
    registry exists; the operations are recorded and replayed in order when
    ``set_current`` binds a registry. Once bound, registrations are applied
    immediately (and still recorded, so that binding a new registry replays
    everything).

    The binding is process-global for this ``RegistryContext`` instance. It is
    not task-local or thread-local.
    """

    def __init__(self) -> None:
        self._registry: BeanRegistry | None = None
        self._operations: list[_RegistrationOperation] = []

    def set_current(self, registry: BeanRegistry) -> None:
        """Bind the active registry and replay deferred registrations.

        This method is expected to be called once during bootstrap, before
        ``start_eager_scopes``.
        """
        self._registry = registry
        logger.debug("Replaying %d deferred registrations", len(self._operations))
        for operation in self._operations:
            operation.apply(registry)

    def get_current(self) -> BeanRegistry:
        """Return the active registry or raise when not bound."""
        if self._registry is None:
            msg = (
                "Registry is not set for registry_context. "
                "Call registry_context.set_current(registry) before using registry_context."
            )
            raise SimpleDIRegistryNotSetError(msg)
        return self._registry

    def reset(self) -> None:
        """Unbind the active registry. Recorded registrations are kept."""
        self._registry = None

    def clear(self) -> None:
        """Unbind the active registry and forget recorded registrations."""
        self._registry = None
        self._operations.clear()

    def register_scope(self, scope: Scope) -> None:
        self._record_operation(_RegistrationOperation("register_scope", (scope,)))

    def register(
        self,
        provider: BeanProvider[Any],
        name: BeanReference,
        scope_name: str | None = None,
    ) -> None:
        self._record_operation(_RegistrationOperation("register", (provider, name, scope_name)))

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
        return self.get_current().get_bean(name, scope_name, fallback=fallback)

    def start_eager_scopes(self) -> None:
        self.get_current().start_eager_scopes()

    def shutdown(self) -> None:
        self.get_current().shutdown()

    def _record_operation(self, operation: _RegistrationOperation) -> None:
        if self._registry is not None:
            operation.apply(self._registry)
        self._operations.append(operation)


registry_context = RegistryContext()
"""Process-wide registry context shared by integrations."""


__all__ = ["RegistryContext", "registry_context"]
