from __future__ import annotations

from collections.abc import Iterator

import pytest

from simpledi.registry import BeanRegistry


@pytest.fixture()
def simpledi_registry() -> Iterator[BeanRegistry]:
    """Create a per-test bean registry and shut it down after the test.

    The fixture is function-scoped, so registrations are isolated between tests
    unless users override fixture scope explicitly. Override the fixture to
    pre-register providers or to pass registry options.

    Yields:
        A new ``BeanRegistry`` instance.

    """
    registry = BeanRegistry()
    yield registry
    registry.shutdown()


@pytest.fixture()
def simpledi_started_registry(simpledi_registry: BeanRegistry) -> BeanRegistry:
    """Return ``simpledi_registry`` after its eager scopes were started."""
    simpledi_registry.start_eager_scopes()
    return simpledi_registry


__all__ = ["simpledi_registry", "simpledi_started_registry"]
