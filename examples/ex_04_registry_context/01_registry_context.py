"""Process-wide registry context with deferred registrations.

This module covers:

1. Registering providers before a registry exists.
2. Replaying them with ``set_current``.
3. ``SimpleDIRegistryNotSetError`` while no registry is bound.
"""

from __future__ import annotations

from simpledi import ApplicationScope, BeanRegistry, FactoryBeanProvider, RegistryContext
from simpledi.exceptions import SimpleDIRegistryNotSetError


class Clock:
    def now(self) -> str:
        return "12:00"


def main() -> None:
    context = RegistryContext()
    context.register(FactoryBeanProvider(Clock), Clock, ApplicationScope.NAME)

    try:
        context.get_bean(Clock)
    except SimpleDIRegistryNotSetError as error:
        print(f"unbound={type(error).__name__}")  # => unbound=SimpleDIRegistryNotSetError

    context.set_current(BeanRegistry())
    context.start_eager_scopes()
    print(f"now={context.get_bean(Clock).now()}")  # => now=12:00

    context.shutdown()
    print(f"after_shutdown={context.get_current().has_bean(Clock)}")  # => after_shutdown=False


if __name__ == "__main__":
    main()
