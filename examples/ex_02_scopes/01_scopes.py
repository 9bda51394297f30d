"""Scopes: singleton, new-instance and custom lifetimes.

This module covers:

1. ``NewInstanceScope`` building a fresh bean for every lookup.
2. A custom ``DefaultScope`` with an explicit start and end.
3. ``scope_ended`` notifications for every registered provider.
4. ``SimpleDINotStartedError`` after a scope has ended.
5. ``SimpleDIIllegalOperationError`` when ending the singleton scope.
"""

from __future__ import annotations

from simpledi import (
    BeanRegistry,
    DefaultScope,
    FactoryBeanProvider,
    NewInstanceScope,
    SingletonScope,
)
from simpledi.exceptions import SimpleDIIllegalOperationError, SimpleDINotStartedError


class Message:
    pass


class Session:
    pass


def main() -> None:
    registry = BeanRegistry()

    registry.register(FactoryBeanProvider(Message), Message, NewInstanceScope.NAME)
    distinct = registry.get_bean(Message) is not registry.get_bean(Message)
    print(f"new_instance_distinct={distinct}")  # => new_instance_distinct=True

    ended: list[str] = []
    session_scope = DefaultScope("session")
    registry.register_scope(session_scope)
    registry.register(
        FactoryBeanProvider(Session, on_scope_ended=lambda: ended.append("session")),
        Session,
        "session",
    )
    registry.register(
        FactoryBeanProvider(object, on_scope_ended=lambda: ended.append("unused")),
        "unused",
        "session",
    )

    session_scope.start()
    cached = registry.get_bean(Session, "session") is registry.get_bean(Session, "session")
    print(f"session_cached={cached}")  # => session_cached=True

    session_scope.end()
    print(f"scope_ended={ended}")  # => scope_ended=['session', 'unused']

    try:
        registry.get_bean(Session, "session")
    except SimpleDINotStartedError as error:
        print(f"after_end={type(error).__name__}")  # => after_end=SimpleDINotStartedError

    try:
        registry.get_scope(SingletonScope.NAME).end()
    except SimpleDIIllegalOperationError as error:
        print(f"end_singleton={type(error).__name__}")  # => end_singleton=SimpleDIIllegalOperationError


if __name__ == "__main__":
    main()
