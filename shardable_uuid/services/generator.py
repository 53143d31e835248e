"""
Shardable UUID Generator Module

Generates compact, decodable identifiers that embed a shard number, a
timestamp, a caller-supplied type and a per-(type, shard) sequence.

Generation Flow:
    1. Validate the type (0-1023)
    2. Pick a shard slot through the sharding hint (default: uniform random)
    3. Advance the Redis sequence counter for (type, shard)
    4. Read the clock
    5. Pack the payload, mix in the shard bits, encode as a URL-safe token

Parsing reverses steps 5 back to the individual fields without touching Redis.

Uniqueness:
    Identifiers for the same (type, shard) differ as long as fewer than 128
    are issued within the same millisecond. Seconds wrap after 2^34, so
    duplicates become possible again past the year 2500.

Concurrency:
    The only suspension point is the Redis round trip in the sequence counter.
    Different (type, shard) keys never contend, so more shard slots mean more
    throughput. `reset_seq()` must not race with `generate()` on the same key.
"""

import random
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Union

import redis.asyncio as redis

from shardable_uuid.core.exceptions import ClockRangeError, DecodeError, TypeRangeError
from shardable_uuid.database.schema import GeneratedUUID, ParsedUUID, PayloadFields, Stamp
from shardable_uuid.services.logger import setup_logger
from shardable_uuid.services.sequence import RedisSequenceCounter
from shardable_uuid.utils import bits, codec
from shardable_uuid.utils.clock import stamp

logger = setup_logger()


def random_shard() -> int:
    return random.randrange(bits.SHARD_SLOT)


def _check_range(name: str, value: int, maximum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeRangeError(f"{name} must be an integer, got {value!r}")
    if not 0 <= value <= maximum:
        raise TypeRangeError(f"{name} must be between 0 and {maximum}, got {value}")


class ShardableUUID:
    """Facade that issues and parses shardable identifiers.

    Attributes:
        counter: The per-(type, shard) sequence counter.
        sharding_hint: Zero-argument callable returning a shard number; the
            result is taken modulo 1024.
        clock: Callable taking the epoch and returning a Stamp.
        epoch: Reference epoch in Unix seconds.
    """

    def __init__(
        self,
        redis_client: Optional[redis.Redis] = None,
        sharding_hint: Optional[Callable[[], int]] = None,
        clock: Callable[[int], Stamp] = stamp,
        epoch: int = 0,
        counter: Optional[RedisSequenceCounter] = None,
    ):
        if counter is None:
            if redis_client is None:
                raise ValueError("Either redis_client or counter is required")
            counter = RedisSequenceCounter(redis_client)

        self.counter = counter
        self.sharding_hint = sharding_hint or random_shard
        self.clock = clock
        self.epoch = epoch

    async def generate(self, type_: int) -> GeneratedUUID:
        """Issues a new identifier for ``type_``.

        Args:
            type_: Caller-defined type (0-1023).

        Returns:
            GeneratedUUID: The token plus the shard, sec, msec and seq in it.

        Raises:
            TypeRangeError: If the type is outside 0-1023. Raised before any I/O.
            StoreUnavailableError: If Redis cannot be reached.
            StoreOperationError: If the sequence counter cannot be advanced.
            ClockRangeError: If the clock is before the epoch or past the
                34-bit seconds range.
        """
        _check_range("Type", type_, bits.MAX_TYPE)

        shard = self.sharding_hint() % bits.SHARD_SLOT
        seq = await self.counter.next(type_, shard)
        now = self.clock(self.epoch)
        if not 0 <= now.sec <= bits.MAX_SEC:
            raise ClockRangeError(
                f"Seconds since epoch {self.epoch} out of range: {now.sec}"
            )

        data = bits.pack(PayloadFields(msec=now.msec, sec=now.sec, type=type_, seq=seq))
        token = codec.encode(bits.mix(data, shard))

        logger.debug("Generated %s (type=%s, shard=%s, seq=%s)", token, type_, shard, seq)

        return GeneratedUUID(uuid=token, shard=shard, sec=now.sec, msec=now.msec, seq=seq)

    def parse(self, uuid: Union[str, int]) -> ParsedUUID:
        """Recovers the fields from a token or an already decoded integer.

        Raises:
            DecodeError: If the token is malformed or the integer does not fit
                the 72-bit mixed width.
        """
        if isinstance(uuid, bool):
            raise DecodeError(f"Not an identifier: {uuid!r}")
        if isinstance(uuid, int):
            mixed = uuid
        else:
            mixed = codec.decode(uuid)

        if not 0 <= mixed <= bits.MAX_MIXED:
            raise DecodeError(f"Identifier out of range: {mixed}")

        data, shard = bits.unmix(mixed)
        fields = bits.unpack(data)

        return ParsedUUID(
            type=fields.type,
            shard=shard,
            sec=fields.sec,
            msec=fields.msec,
            seq=fields.seq,
        )

    def timestamp(self, uuid: Union[str, int]) -> datetime:
        """Returns the generation instant of an identifier as UTC."""
        parsed = self.parse(uuid)
        return datetime.fromtimestamp(self.epoch + parsed.sec, tz=timezone.utc) + timedelta(
            milliseconds=parsed.msec
        )

    async def reset_seq(self, type_: int, shard: int) -> None:
        """Deletes the sequence for (type, shard); the next issue returns 0."""
        _check_range("Type", type_, bits.MAX_TYPE)
        _check_range("Shard", shard, bits.MAX_SHARD)
        await self.counter.reset(type_, shard)
