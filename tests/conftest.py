import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from hasher.main import create_app

# Short enough to keep the suite fast, long enough for an immediate poll to
# land before the worker finishes.
TEST_HASH_DELAY = 0.3


@pytest_asyncio.fixture
async def app():
    """A fresh app with its own allocator, store and stats per test."""
    application = create_app(hash_delay=TEST_HASH_DELAY)
    yield application
    await application.state.services.scheduler.abandon()


@pytest.fixture
def services(app):
    return app.state.services


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
