"""Pytest configuration and fixtures."""

import os

import httpx
import pytest
import pytest_asyncio

# Keep the developer's environment out of the tests
os.environ["CORS_ORIGINS"] = ""
os.environ["JUPITER_API_KEY"] = ""
os.environ["DEBUG"] = "false"

from swapgate.api.app import create_app
from swapgate.api.limiter import limiter
from swapgate.config import Settings
from tests.fakes import FakeUpstream, make_settings


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start every test with an empty rate-limit window."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def test_app(settings, upstream):
    """Create test application wired to the fake upstream."""
    return create_app(settings, transport=upstream.transport)


@pytest_asyncio.fixture
async def client(test_app):
    """Create async test client."""
    transport = httpx.ASGITransport(app=test_app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
