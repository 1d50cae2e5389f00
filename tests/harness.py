"""Test harness for unit and integration tests.

Integration tests assume docker-compose services are already running.
Settings are loaded from environment variables (configure via .env or export).
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

import pytest
import pytest_asyncio
from dishka import AsyncContainer
from fastapi.testclient import TestClient

from fundteam.interface.api.app import create_app
from fundteam.util.di import Component
from tests.di import build_test_container

T = TypeVar("T")


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Closes the container afterwards

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no docker needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_create_invite(unit_env):
            service = await unit_env.get(InviteService)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


@dataclass
class APIEnvironment:
    """HTTP test client bound to the container behind it."""

    client: TestClient
    container: AsyncContainer

    def run(self, fn: Callable[..., Awaitable[T]], *args) -> T:
        """Run a coroutine function on the app's event loop."""
        return self.client.portal.call(fn, *args)

    def get(self, dependency_type: type[T]) -> T:
        """Resolve an app-scoped dependency, e.g. a mocked repository."""
        return self.run(self.container.get, dependency_type)


def create_api_fixture(unmock: set[Component] | None = None):
    """Factory for fixtures driving the HTTP app through a TestClient.

    Usage:
        api_env = create_api_fixture()

        def test_health(api_env):
            response = api_env.client.get("/health")
    """

    @pytest.fixture
    def _api_environment():
        container = build_test_container(unmock=unmock or set(), with_fastapi=True)
        app = create_app(container=container, instrument=False)

        with TestClient(app) as client:
            yield APIEnvironment(client=client, container=container)
            client.portal.call(container.close)

    return _api_environment
