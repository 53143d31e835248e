"""Pytest fixtures for all tests."""

import fakeredis
import pytest
from httpx import ASGITransport, AsyncClient

from shardable_uuid.main import app, get_generator
from shardable_uuid.services.generator import ShardableUUID
from shardable_uuid.services.sequence import RedisSequenceCounter


@pytest.fixture
def redis_server():
    """Create an isolated in-memory Redis server."""
    return fakeredis.FakeServer()


@pytest.fixture
async def redis_client(redis_server):
    """Create an async client bound to the test server."""
    client = fakeredis.FakeAsyncRedis(server=redis_server, decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
def counter(redis_client):
    """Create a sequence counter with default settings."""
    return RedisSequenceCounter(redis_client)


@pytest.fixture
def generator(counter):
    """Create a generator pinned to shard 0."""
    return ShardableUUID(counter=counter, sharding_hint=lambda: 0)


@pytest.fixture
async def client(generator):
    """Create async test client wired to the pinned generator."""
    app.dependency_overrides[get_generator] = lambda: generator
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
