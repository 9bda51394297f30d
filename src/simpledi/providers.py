from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeAlias, TypeVar, runtime_checkable

from simpledi.exceptions import SimpleDIInvalidArgumentError

T = TypeVar("T")

logger = logging.getLogger(__name__)


def bean_name_of(bean_type: type[Any]) -> str:
    """Return the default bean name of a class: its fully qualified ``module.QualName``."""
    return f"{bean_type.__module__}.{bean_type.__qualname__}"


@dataclass(frozen=True, slots=True)
class BeanKey(Generic[T]):
    """Identify a bean by logical name plus declared type.

    ``BeanKey.of(Service)`` names the bean after the class, while
    ``BeanKey("primary_db", Database)`` attaches a custom name to a type.
    Registry lookups by key return values typed as ``T``.
    """

    name: str
    """Logical bean name, unique within the whole registry."""
    bean_type: type[T] | None = None
    """Declared type of the bean, informational only."""

    @classmethod
    def of(cls, bean_type: type[T]) -> BeanKey[T]:
        return cls(bean_name_of(bean_type), bean_type)

    def __str__(self) -> str:
        return self.name


BeanReference: TypeAlias = "str | type[Any] | BeanKey[Any]"
"""Anything a registry accepts where a bean name is expected."""


def to_bean_name(reference: BeanReference | None) -> str:
    """Normalize a bean reference to its bean name.

    Args:
        reference: A plain name, a class (named by ``bean_name_of``) or a ``BeanKey``.

    Returns:
        The bean name.

    Raises:
        SimpleDIInvalidArgumentError: If the reference is absent, empty or of an
            unsupported kind.

    """
    if isinstance(reference, BeanKey):
        name = reference.name
    elif isinstance(reference, type):
        name = bean_name_of(reference)
    elif isinstance(reference, str):
        name = reference
    else:
        msg = f"Bean reference must be a name, a class or a BeanKey, got {reference!r}"
        raise SimpleDIInvalidArgumentError(msg)
    if not name:
        msg = "Bean name must not be empty"
        raise SimpleDIInvalidArgumentError(msg)
    return name


@runtime_checkable
class BeanProvider(Protocol[T]):
    """Construct and wire the instances of exactly one bean.

    A provider is owned by a single scope. It never stores instances itself;
    caching is the scope's job.
    """

    def provide(self) -> T:
        """Create a new raw instance without assuming any dependency is wired."""
        ...

    def set_soft_dependencies(self, instance: T) -> None:
        """Attach dependencies that were not passed through the constructor."""
        ...

    def scope_ended(self) -> None:
        """Release resources once the owning scope has ended."""
        ...


class BaseBeanProvider(ABC, Generic[T]):
    """Provider base with no soft dependencies and no cleanup."""

    @abstractmethod
    def provide(self) -> T: ...

    def set_soft_dependencies(self, instance: T) -> None:  # noqa: B027
        pass

    def scope_ended(self) -> None:  # noqa: B027
        pass


class FactoryBeanProvider(BaseBeanProvider[T]):
    """Build a provider from plain callables.

    Examples:
        .. code-block:: python

            registry.register(FactoryBeanProvider(Clock), "clock")
            registry.register(
                FactoryBeanProvider(Pool, on_scope_ended=pool.close),
                "pool",
                ApplicationScope.NAME,
            )

    """

    def __init__(
        self,
        factory: Callable[[], T],
        *,
        wire: Callable[[T], None] | None = None,
        on_scope_ended: Callable[[], None] | None = None,
    ) -> None:
        if factory is None:
            msg = "FactoryBeanProvider requires a factory"
            raise SimpleDIInvalidArgumentError(msg)
        self._factory = factory
        self._wire = wire
        self._on_scope_ended = on_scope_ended

    def provide(self) -> T:
        return self._factory()

    def set_soft_dependencies(self, instance: T) -> None:
        if self._wire is not None:
            self._wire(instance)

    def scope_ended(self) -> None:
        if self._on_scope_ended is not None:
            self._on_scope_ended()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._factory!r})"


class BeanLookup(Protocol):
    """Anything that hands out beans by reference, such as a ``BeanRegistry``."""

    def get_bean(self, name: Any, scope_name: str | None = None) -> Any: ...


@dataclass(frozen=True, slots=True)
class BeanDependency:
    """Reference to a dependency bean, optionally pinned to a scope."""

    reference: BeanReference
    scope_name: str | None = None


DependencySpec: TypeAlias = "BeanReference | BeanDependency"


class ClassBeanProvider(BaseBeanProvider[T]):
    """Construct a class from explicitly declared bean dependencies.

    ``constructor`` maps constructor parameter names to the beans passed as
    keyword arguments ("hard" dependencies). ``fields`` maps attribute names to
    the beans assigned after construction ("soft" dependencies); only soft
    dependencies may form cycles. Dependencies are looked up through
    ``lookup`` when the provider runs, never at registration time.

    Examples:
        .. code-block:: python

            registry.register(
                ClassBeanProvider(
                    OrderService,
                    registry,
                    constructor={"repository": OrderRepository},
                    fields={"notifier": BeanDependency("mailer", "request")},
                ),
                OrderService,
            )

    """

    def __init__(
        self,
        bean_type: type[T],
        lookup: BeanLookup,
        *,
        constructor: Mapping[str, DependencySpec] | None = None,
        fields: Mapping[str, DependencySpec] | None = None,
    ) -> None:
        if bean_type is None or lookup is None:
            msg = "ClassBeanProvider requires a bean type and a lookup"
            raise SimpleDIInvalidArgumentError(msg)
        self._bean_type = bean_type
        self._lookup = lookup
        self._constructor = {
            parameter: _as_dependency(spec) for parameter, spec in (constructor or {}).items()
        }
        self._fields = {attribute: _as_dependency(spec) for attribute, spec in (fields or {}).items()}

    @property
    def bean_type(self) -> type[T]:
        return self._bean_type

    def provide(self) -> T:
        kwargs = {
            parameter: self._resolve(dependency)
            for parameter, dependency in self._constructor.items()
        }
        return self._bean_type(**kwargs)

    def set_soft_dependencies(self, instance: T) -> None:
        for attribute, dependency in self._fields.items():
            logger.debug(
                "Injecting %s into %s.%s",
                dependency.reference,
                self._bean_type.__qualname__,
                attribute,
            )
            setattr(instance, attribute, self._resolve(dependency))

    def _resolve(self, dependency: BeanDependency) -> Any:
        return self._lookup.get_bean(dependency.reference, dependency.scope_name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._bean_type.__qualname__})"


def _as_dependency(spec: DependencySpec) -> BeanDependency:
    if isinstance(spec, BeanDependency):
        to_bean_name(spec.reference)
        return spec
    to_bean_name(spec)
    return BeanDependency(spec)


__all__ = [
    "BaseBeanProvider",
    "BeanDependency",
    "BeanKey",
    "BeanLookup",
    "BeanProvider",
    "BeanReference",
    "ClassBeanProvider",
    "FactoryBeanProvider",
    "bean_name_of",
    "to_bean_name",
]
