from typing import Optional

import redis.asyncio as redis
from redis.exceptions import ConnectionError, ResponseError, TimeoutError

from shardable_uuid.core.exceptions import StoreOperationError, StoreUnavailableError
from shardable_uuid.services.logger import setup_logger
from shardable_uuid.utils.bits import MAX_SEQ

logger = setup_logger()

# Read, wrap and write back in one server-side step. A missing or
# non-numeric value starts the counter at 0.
NEXT_SEQ_SCRIPT = """
local seq = tonumber(redis.call('get', KEYS[1]))

if not seq then seq = 0
elseif seq >= tonumber(ARGV[1]) then seq = 0
else seq = seq + 1
end

redis.call('set', KEYS[1], seq)
return seq
"""


class RedisSequenceCounter:
    """Bounded, wraparound sequence counters keyed by (type, shard).

    `next()` runs a registered Lua script, so the read-compute-write happens
    atomically on the Redis server in a single round trip. Concurrent callers
    on the same key are serialized by Redis and never receive the same value.

    Attributes:
        max_seq: Largest value before the counter wraps back to 0.
        key_prefix: Prefix of the Redis key, ``{prefix}:{type}:{shard}``.
    """

    def __init__(
        self,
        redis_client: redis.Redis,
        max_seq: int = MAX_SEQ,
        key_prefix: str = "uuid",
    ):
        self.redis_client = redis_client
        self.max_seq = max_seq
        self.key_prefix = key_prefix
        self._next_script = redis_client.register_script(NEXT_SEQ_SCRIPT)

    def key(self, type_: int, shard: int) -> str:
        return f"{self.key_prefix}:{type_}:{shard}"

    async def next(self, type_: int, shard: int) -> int:
        """Atomically advances the counter for (type, shard).

        Returns:
            The committed sequence value.

        Raises:
            StoreUnavailableError: If Redis cannot be reached.
            StoreOperationError: If Redis rejects the script.
        """
        key = self.key(type_, shard)
        try:
            seq = int(await self._next_script(keys=[key], args=[self.max_seq]))
        except (ConnectionError, TimeoutError) as e:
            logger.error("Redis unavailable while advancing %s: %s", key, e)
            raise StoreUnavailableError(f"Sequence store unavailable: {e}") from e
        except ResponseError as e:
            logger.error("Redis operation failed while advancing %s: %s", key, e)
            raise StoreOperationError(f"Sequence store operation failed: {e}") from e

        logger.debug("Issued sequence %s for key: %s", seq, key)
        return seq

    async def reset(self, type_: int, shard: int) -> None:
        """Deletes the counter so the next `next()` returns 0."""
        key = self.key(type_, shard)
        try:
            await self.redis_client.delete(key)
        except (ConnectionError, TimeoutError) as e:
            logger.error("Redis unavailable while resetting %s: %s", key, e)
            raise StoreUnavailableError(f"Sequence store unavailable: {e}") from e
        except ResponseError as e:
            logger.error("Redis operation failed while resetting %s: %s", key, e)
            raise StoreOperationError(f"Sequence store operation failed: {e}") from e

        logger.info("Reset sequence key: %s", key)

    async def current(self, type_: int, shard: int) -> Optional[int]:
        """Returns the last committed value for (type, shard), or None."""
        key = self.key(type_, shard)
        try:
            stored = await self.redis_client.get(key)
        except (ConnectionError, TimeoutError) as e:
            logger.error("Redis unavailable while reading %s: %s", key, e)
            raise StoreUnavailableError(f"Sequence store unavailable: {e}") from e

        return None if stored is None else int(stored)
