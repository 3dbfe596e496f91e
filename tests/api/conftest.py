"""Shared fixtures for API tests.

Uses the module-level ``app`` from ``boxoffice.api.main`` with the
ranker dependency overridden, so requests reach the fake TMDB backend.
"""

from collections.abc import AsyncGenerator, Iterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from boxoffice.api.dependencies import get_ranker
from boxoffice.api.main import app as main_app
from boxoffice.ranking import BoxOfficeRanker

# ---------------------------------------------------------------------------
# Auto-mark all tests in this directory as "integration"
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Auto-apply ``@pytest.mark.integration`` to every API test."""
    integration_marker = pytest.mark.integration
    for item in items:
        if "tests/api" in str(item.fspath).replace("\\", "/"):
            item.add_marker(integration_marker)


# ---------------------------------------------------------------------------
# Application fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def app(ranker: BoxOfficeRanker) -> Iterator[FastAPI]:
    """Application with the ranker bound to the fake backend."""
    main_app.dependency_overrides[get_ranker] = lambda: ranker
    yield main_app
    main_app.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client over ASGI.

    Unhandled errors are rendered by the catch-all handler; the transport
    must not re-raise them so the 500 response can be inspected.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
