from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, Any

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from simpledi import (
    ApplicationScope,
    BeanRegistry,
    ClassBeanProvider,
    FactoryBeanProvider,
    NewInstanceScope,
    RegistryContext,
    ScopeState,
)
from simpledi.exceptions import SimpleDIRegistryNotSetError
from simpledi.integrations.fastapi import bean_dependency, setup_simpledi


class Greeter:
    def __init__(self) -> None:
        self.prefix = "hello"


class Counter:
    pass


@pytest.fixture()
def context() -> RegistryContext:
    return RegistryContext()


def test_bean_dependency_resolves_from_registry(context: RegistryContext) -> None:
    registry = BeanRegistry()
    registry.register(ClassBeanProvider(Greeter, registry), Greeter, ApplicationScope.NAME)
    app = FastAPI()
    setup_simpledi(app, registry, context=context)

    @app.get("/hello")
    def hello(
        greeter: Annotated[Greeter, Depends(bean_dependency(Greeter, context=context))],
    ) -> dict[str, str]:
        return {"value": greeter.prefix}

    with TestClient(app) as client:
        response = client.get("/hello")

    assert response.status_code == 200
    assert response.json() == {"value": "hello"}


def test_lifespan_starts_and_shuts_down_registry(context: RegistryContext) -> None:
    ended: list[str] = []
    registry = BeanRegistry()
    registry.register(
        FactoryBeanProvider(Greeter, on_scope_ended=lambda: ended.append("greeter")),
        Greeter,
        ApplicationScope.NAME,
    )
    app = FastAPI()
    setup_simpledi(app, registry, context=context)

    with TestClient(app):
        assert registry.get_scope(ApplicationScope.NAME).state is ScopeState.STARTED
        assert ended == []

    assert registry.get_scope(ApplicationScope.NAME).state is ScopeState.ENDED
    assert ended == ["greeter"]


def test_existing_lifespan_still_runs(context: RegistryContext) -> None:
    events: list[str] = []

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        events.append("startup")
        yield
        events.append("shutdown")

    app = FastAPI(lifespan=lifespan)
    setup_simpledi(app, BeanRegistry(), context=context)

    with TestClient(app):
        assert events == ["startup"]

    assert events == ["startup", "shutdown"]


def test_bean_dependency_with_scope_name(context: RegistryContext) -> None:
    registry = BeanRegistry()
    registry.register(FactoryBeanProvider(Counter), Counter, NewInstanceScope.NAME)
    app = FastAPI()
    setup_simpledi(app, registry, context=context)
    seen: list[Any] = []

    @app.get("/count")
    def count(
        counter: Annotated[
            Counter,
            Depends(bean_dependency(Counter, NewInstanceScope.NAME, context=context)),
        ],
    ) -> dict[str, int]:
        seen.append(counter)
        return {"seen": len(seen)}

    with TestClient(app) as client:
        client.get("/count")
        client.get("/count")

    assert len(seen) == 2
    assert seen[0] is not seen[1]


def test_bean_dependency_requires_bound_registry(context: RegistryContext) -> None:
    dependency = bean_dependency(Greeter, context=context)

    with pytest.raises(SimpleDIRegistryNotSetError):
        dependency()
