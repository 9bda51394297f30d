from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

from simpledi.providers import BeanReference, to_bean_name
from simpledi.registry import BeanRegistry
from simpledi.registry_context import RegistryContext, registry_context

try:
    from fastapi import FastAPI
except ModuleNotFoundError as exc:  # pragma: no cover - exercised in optional import scenarios
    message = "FastAPI integration requires fastapi. Install with 'simpledi[fastapi]'."
    raise ModuleNotFoundError(message) from exc

logger = logging.getLogger(__name__)


def bean_dependency(
    name: BeanReference,
    scope_name: str | None = None,
    *,
    context: RegistryContext = registry_context,
) -> Callable[[], Any]:
    """Return a FastAPI dependency that looks a bean up in the active registry.

    Examples:
        .. code-block:: python

            @app.get("/orders")
            def list_orders(
                service: Annotated[OrderService, Depends(bean_dependency(OrderService))],
            ) -> list[Order]:
                return service.list()

    Args:
        name: Bean name, class or ``BeanKey``.
        scope_name: Optional scope to look the bean up in.
        context: Registry context holding the active registry.

    Returns:
        A zero-argument callable suitable for ``fastapi.Depends``.

    """
    bean_name = to_bean_name(name)

    def _get_bean() -> Any:
        return context.get_current().get_bean(bean_name, scope_name)

    _get_bean.__name__ = f"get_bean_{bean_name.replace('.', '_')}"
    return _get_bean


def setup_simpledi(
    app: FastAPI,
    registry: BeanRegistry,
    *,
    context: RegistryContext = registry_context,
) -> None:
    """Bind ``registry`` to ``context`` and tie its lifecycle to the app's lifespan.

    Eager scopes are started when the app starts up, before the first request,
    and the registry is shut down when the app stops. Any lifespan already set
    on the app runs inside that window.
    """
    context.set_current(registry)
    original_lifespan = app.router.lifespan_context

    @asynccontextmanager
    async def _lifespan(lifespan_app: Any) -> AsyncIterator[Any]:
        registry.start_eager_scopes()
        try:
            async with original_lifespan(lifespan_app) as state:
                yield state
        finally:
            logger.debug("Application stopping, shutting down bean registry")
            registry.shutdown()

    app.router.lifespan_context = _lifespan


__all__ = ["bean_dependency", "setup_simpledi"]
