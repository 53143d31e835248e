class ShardableUUIDError(Exception):
    """Base class for every error raised by this package."""

    pass


class TypeRangeError(ShardableUUIDError, ValueError):
    """Raised when a type (or shard) falls outside its 10-bit range."""

    pass


class StoreUnavailableError(ShardableUUIDError):
    """Raised when the sequence store cannot be reached."""

    pass


class StoreOperationError(ShardableUUIDError):
    """Raised when the sequence store rejects or cannot complete an operation."""

    pass


class DecodeError(ShardableUUIDError, ValueError):
    """Raised when a token does not decode to a well-formed identifier."""

    pass


class NotInitializedError(ShardableUUIDError, RuntimeError):
    """Raised when the Redis client is used before connect_to_redis()."""

    def __init__(self, message: str = "Module initialization must be preceded."):
        super().__init__(message)


class ClockRangeError(ShardableUUIDError, ValueError):
    """Raised when the clock reading does not fit the 34-bit seconds field."""

    pass
