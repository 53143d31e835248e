from shardable_uuid.core.exceptions import (
    ClockRangeError,
    DecodeError,
    NotInitializedError,
    ShardableUUIDError,
    StoreOperationError,
    StoreUnavailableError,
    TypeRangeError,
)
from shardable_uuid.services.generator import ShardableUUID
from shardable_uuid.services.sequence import RedisSequenceCounter

__all__ = [
    "ClockRangeError",
    "DecodeError",
    "NotInitializedError",
    "RedisSequenceCounter",
    "ShardableUUID",
    "ShardableUUIDError",
    "StoreOperationError",
    "StoreUnavailableError",
    "TypeRangeError",
]
