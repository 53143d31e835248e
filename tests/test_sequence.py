"""Tests for the Redis sequence counter."""

import asyncio
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ResponseError

from shardable_uuid.core.exceptions import StoreOperationError, StoreUnavailableError
from shardable_uuid.services.sequence import RedisSequenceCounter


class TestKey:
    """Tests for the sequence key format."""

    def test_default_key_format(self, counter):
        """Keys follow uuid:{type}:{shard}."""
        assert counter.key(1, 0) == "uuid:1:0"
        assert counter.key(1023, 512) == "uuid:1023:512"

    def test_custom_prefix(self, redis_client):
        """The prefix is configurable."""
        counter = RedisSequenceCounter(redis_client, key_prefix="ids")
        assert counter.key(7, 9) == "ids:7:9"


class TestNext:
    """Tests for advancing counters in Redis."""

    async def test_starts_at_zero(self, counter):
        """First call on a fresh key returns 0."""
        assert await counter.next(1, 0) == 0

    async def test_writes_back(self, counter, redis_client):
        """The issued value is stored before returning."""
        await counter.next(1, 0)
        await counter.next(1, 0)
        assert await redis_client.get("uuid:1:0") == "1"
        assert await counter.current(1, 0) == 1

    async def test_wraparound_cycle(self, counter):
        """Consecutive calls yield 0..127 then start over."""
        await counter.reset(1, 0)
        values = [await counter.next(1, 0) for _ in range(300)]
        assert values == [i % 128 for i in range(300)]

    async def test_keys_are_independent(self, counter):
        """Different (type, shard) keys keep separate counters."""
        assert await counter.next(1, 0) == 0
        assert await counter.next(1, 0) == 1
        assert await counter.next(1, 1) == 0
        assert await counter.next(2, 0) == 0

    async def test_concurrent_callers_get_distinct_values(self, counter):
        """Concurrent callers on one key all succeed with distinct values."""
        values = await asyncio.gather(*(counter.next(5, 5) for _ in range(128)))
        assert sorted(values) == list(range(128))
        assert await counter.current(5, 5) == 127

    async def test_stored_value_at_max_wraps(self, counter, redis_client):
        """A stored 127 or above wraps to 0."""
        await redis_client.set("uuid:1:0", "500")
        assert await counter.next(1, 0) == 0

    async def test_non_integer_stored_value_restarts(self, counter, redis_client):
        """A non-numeric value is treated as absent."""
        await redis_client.set("uuid:1:0", "abc")
        assert await counter.next(1, 0) == 0

    async def test_script_rejected_by_store(self, counter):
        """Redis errors from the script become StoreOperationError."""
        counter._next_script = AsyncMock(side_effect=ResponseError("NOSCRIPT"))
        with pytest.raises(StoreOperationError):
            await counter.next(1, 0)

    async def test_store_unavailable(self, counter, redis_server):
        """A dropped connection surfaces as StoreUnavailableError."""
        redis_server.connected = False
        with pytest.raises(StoreUnavailableError):
            await counter.next(1, 0)


class TestReset:
    """Tests for resetting counters."""

    async def test_reset_restarts_at_zero(self, counter):
        """After reset the next value is 0."""
        for _ in range(5):
            await counter.next(3, 4)
        await counter.reset(3, 4)
        assert await counter.current(3, 4) is None
        assert await counter.next(3, 4) == 0

    async def test_reset_missing_key(self, counter):
        """Resetting an absent key is a no-op."""
        await counter.reset(9, 9)
        assert await counter.next(9, 9) == 0

    async def test_reset_store_unavailable(self, counter, redis_server):
        """Reset does not retry when Redis is down."""
        redis_server.connected = False
        with pytest.raises(StoreUnavailableError):
            await counter.reset(1, 0)

    async def test_reset_rejected_by_store(self, redis_client):
        """Redis errors on DEL become StoreOperationError."""
        redis_client.delete = AsyncMock(side_effect=ResponseError("READONLY"))
        counter = RedisSequenceCounter(redis_client)
        with pytest.raises(StoreOperationError):
            await counter.reset(1, 0)
