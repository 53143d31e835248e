from pydantic import BaseModel, Field


class Stamp(BaseModel):
    """Clock reading used for an identifier.

    Args:
        sec (int): Whole seconds since the configured epoch.
        msec (int): Millisecond-of-second at generation (0-999).
    """

    sec: int
    msec: int


class PayloadFields(BaseModel):
    """Logical fields packed into the 62-bit payload.

    Values are not range checked here; the packer truncates each field to its
    bit width.
    """

    msec: int
    sec: int
    type: int
    seq: int


class ParsedUUID(BaseModel):
    """Fields recovered from an identifier.

    Args:
        type (int): Caller-defined type (0-1023).
        shard (int): Shard slot the identifier was issued on (0-1023).
        sec (int): Seconds since the configured epoch.
        msec (int): Millisecond-of-second.
        seq (int): Sequence value for the (type, shard) key (0-127).
    """

    type: int = Field(..., description="Caller-defined type", example=1)
    shard: int = Field(..., description="Shard slot", example=512)
    sec: int = Field(..., description="Seconds since epoch", example=1700000000)
    msec: int = Field(..., description="Millisecond-of-second", example=250)
    seq: int = Field(..., description="Per (type, shard) sequence", example=3)


class GeneratedUUID(BaseModel):
    """Response model for a freshly generated identifier.

    Args:
        uuid (str): URL-safe token.
        shard (int): Shard slot chosen by the sharding hint.
        sec (int): Seconds since the configured epoch.
        msec (int): Millisecond-of-second.
        seq (int): Sequence value issued by the counter.
    """

    uuid: str = Field(..., description="URL-safe identifier token", example="gAAAAAAAAAAA")
    shard: int = Field(..., description="Shard slot", example=512)
    sec: int = Field(..., description="Seconds since epoch", example=1700000000)
    msec: int = Field(..., description="Millisecond-of-second", example=250)
    seq: int = Field(..., description="Per (type, shard) sequence", example=3)
