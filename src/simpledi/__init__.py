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
from simpledi.lock_mode import LockMode
from simpledi.policies import ScopeFallback
from simpledi.providers import (
    BaseBeanProvider,
    BeanDependency,
    BeanKey,
    BeanProvider,
    ClassBeanProvider,
    FactoryBeanProvider,
    bean_name_of,
)
from simpledi.registry import BeanRegistry
from simpledi.registry_context import RegistryContext, registry_context
from simpledi.scopes import (
    ApplicationScope,
    DefaultScope,
    NewInstanceScope,
    Scope,
    ScopeState,
    SingletonScope,
)

__all__ = [
    "ApplicationScope",
    "BaseBeanProvider",
    "BeanDependency",
    "BeanKey",
    "BeanProvider",
    "BeanRegistry",
    "ClassBeanProvider",
    "DefaultScope",
    "FactoryBeanProvider",
    "LockMode",
    "NewInstanceScope",
    "RegistryContext",
    "Scope",
    "ScopeFallback",
    "ScopeState",
    "SimpleDIBootstrapError",
    "SimpleDIConstructionError",
    "SimpleDIDuplicateRegistrationError",
    "SimpleDIDuplicateScopeError",
    "SimpleDIError",
    "SimpleDIIllegalOperationError",
    "SimpleDIInvalidArgumentError",
    "SimpleDINotStartedError",
    "SimpleDIRegistryNotSetError",
    "SimpleDIUnknownBeanError",
    "SimpleDIUnknownScopeError",
    "SingletonScope",
    "bean_name_of",
    "registry_context",
]
