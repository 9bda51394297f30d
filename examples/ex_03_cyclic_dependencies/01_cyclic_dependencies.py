"""Cyclic dependencies resolved by the eager application scope.

This module covers:

1. Two beans that reference each other through soft dependencies.
2. Two-phase bootstrap with ``start_eager_scopes()``.
3. ``SimpleDIBootstrapError`` naming the bean that could not be wired.
"""

from __future__ import annotations

from simpledi import ApplicationScope, BeanRegistry, ClassBeanProvider, bean_name_of
from simpledi.exceptions import SimpleDIBootstrapError


class OrderService:
    inventory: InventoryService


class InventoryService:
    orders: OrderService


class AuditLog:
    sink: object


def main() -> None:
    registry = BeanRegistry()
    registry.register(
        ClassBeanProvider(OrderService, registry, fields={"inventory": InventoryService}),
        OrderService,
        ApplicationScope.NAME,
    )
    registry.register(
        ClassBeanProvider(InventoryService, registry, fields={"orders": OrderService}),
        InventoryService,
        ApplicationScope.NAME,
    )
    registry.start_eager_scopes()

    orders = registry.get_bean(OrderService)
    inventory = registry.get_bean(InventoryService)
    print(f"orders_wired={orders.inventory is inventory}")  # => orders_wired=True
    print(f"inventory_wired={inventory.orders is orders}")  # => inventory_wired=True

    broken = BeanRegistry()
    broken.register(
        ClassBeanProvider(AuditLog, broken, fields={"sink": "missing sink"}),
        AuditLog,
        ApplicationScope.NAME,
    )
    try:
        broken.start_eager_scopes()
    except SimpleDIBootstrapError as error:
        print(f"bootstrap_failed_for_audit_log={error.bean_name == bean_name_of(AuditLog)}")  # => bootstrap_failed_for_audit_log=True


if __name__ == "__main__":
    main()
