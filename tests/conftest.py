"""Pytest configuration and fixtures."""

import os

import httpx
import pytest

# Set test environment variables before importing app modules
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./blog.db")
os.environ.setdefault("TEST_DATABASE_URL", "sqlite+aiosqlite:///./test-blog.db")

from blog_api.config import settings  # noqa: E402
from blog_api.db.repositories.post_repository import PostRepository  # noqa: E402
from blog_api.server import Server  # noqa: E402
from tests.factories import SEED_SIZE, generate_post  # noqa: E402


class Store:
    """Direct access to the posts table, one session per call"""

    def __init__(self, server: Server):
        self.server = server

    async def _call(self, method: str, *args):
        async with self.server.database.session() as session:
            return await getattr(PostRepository(session), method)(*args)

    async def count(self) -> int:
        return await self._call("count")

    async def find_one(self):
        return await self._call("find_one")

    async def get_by_id(self, post_id):
        return await self._call("get_by_id", post_id)

    async def seed(self, size: int = SEED_SIZE):
        return await self._call("create_many", [generate_post() for _ in range(size)])


@pytest.fixture
async def server():
    """Running server on an ephemeral port against the test database."""
    server = Server()
    await server.start(settings.test_database_url, host="127.0.0.1", port=0)
    try:
        yield server
    finally:
        await server.stop()


@pytest.fixture
async def store(server):
    """Seeded store; tables are dropped after each test."""
    store = Store(server)
    await server.database.drop_all()
    await store.seed()
    yield store
    await server.database.drop_all()


@pytest.fixture
async def client(server, store):
    async with httpx.AsyncClient(base_url=server.base_url, trust_env=False) as client:
        yield client
