"""Quickstart: register providers, look beans up by class.

This module covers:

1. Registering a provider in the default (singleton) scope.
2. Constructor dependencies declared with ``ClassBeanProvider``.
3. Identity of singleton beans across lookups.
"""

from __future__ import annotations

from simpledi import BeanRegistry, ClassBeanProvider, FactoryBeanProvider


class Database:
    def __init__(self) -> None:
        self.url = "sqlite://"


class UserRepository:
    def __init__(self, database: Database) -> None:
        self.database = database


def main() -> None:
    registry = BeanRegistry()
    registry.register(FactoryBeanProvider(Database), Database)
    registry.register(
        ClassBeanProvider(UserRepository, registry, constructor={"database": Database}),
        UserRepository,
    )
    registry.start_eager_scopes()

    repository = registry.get_bean(UserRepository)
    print(f"database_url={repository.database.url}")  # => database_url=sqlite://

    same_instance = repository is registry.get_bean(UserRepository)
    print(f"same_instance={same_instance}")  # => same_instance=True

    shared_database = repository.database is registry.get_bean(Database)
    print(f"shared_database={shared_database}")  # => shared_database=True


if __name__ == "__main__":
    main()
