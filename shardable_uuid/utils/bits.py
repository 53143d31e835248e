"""
Bit Packing and Mixing Module

Packs the logical identifier fields into a single 62-bit payload and
interleaves a 10-bit shard number through it, producing the 72-bit value that
is encoded into the public token.

Payload Layout (MSB -> LSB, 62 bits):

    | 1 bit  | 10 bits |     34 bits      | 10 bits | 7 bits |
    | marker |  msec   |       sec        |  type   |  seq   |

    - Marker: Always 1, keeps the mixed value at a fixed 72-bit width
    - Msec: Millisecond-of-second (0-999, field holds up to 1023)
    - Sec: Seconds since the configured epoch (enough for dates past 2500)
    - Type: Caller-defined namespace (0-1023)
    - Seq: Per (type, shard) sequence (0-127)

Mixed Layout (72 bits):

    | 11 header bits | (5 payload bits, 1 shard bit) x 10 | 1 payload bit |

    Shard bits are emitted from most to least significant, one after every
    5-bit payload chunk, so consecutive sequence values do not show up as an
    incrementing number in the token. The transform is a bijection.
"""

from shardable_uuid.database.schema import PayloadFields

MARKER_BIT = 1
MSEC_BITS = 10
SEC_BITS = 34
TYPE_BITS = 10
SEQ_BITS = 7

DATA_BITS = MARKER_BIT + MSEC_BITS + SEC_BITS + TYPE_BITS + SEQ_BITS
DATA_HEAD_BITS = 11
SHARD_BITS = 10
CHUNK_BITS = 5
MIXED_BITS = DATA_BITS + SHARD_BITS

MAX_MSEC = (1 << MSEC_BITS) - 1
MAX_SEC = (1 << SEC_BITS) - 1
MAX_TYPE = (1 << TYPE_BITS) - 1
MAX_SEQ = (1 << SEQ_BITS) - 1
MAX_SHARD = (1 << SHARD_BITS) - 1
SHARD_SLOT = 1 << SHARD_BITS

MAX_DATA = (1 << DATA_BITS) - 1
MAX_MIXED = (1 << MIXED_BITS) - 1

_CHUNK_MASK = (1 << CHUNK_BITS) - 1
_MIXED_CHUNK_MASK = (1 << (CHUNK_BITS + 1)) - 1


def pack(fields: PayloadFields) -> int:
    """Packs the payload fields into a 62-bit integer.

    Each field is truncated to its bit width before it is shifted in.

    Args:
        fields: The msec, sec, type and seq values to pack.

    Returns:
        The 62-bit payload with the marker bit set.
    """
    data = MARKER_BIT
    data = (data << MSEC_BITS) | (fields.msec & MAX_MSEC)
    data = (data << SEC_BITS) | (fields.sec & MAX_SEC)
    data = (data << TYPE_BITS) | (fields.type & MAX_TYPE)
    data = (data << SEQ_BITS) | (fields.seq & MAX_SEQ)
    return data


def unpack(data: int) -> PayloadFields:
    """Extracts the payload fields, least significant first.

    The marker bit is dropped. No range validation is applied.
    """
    seq = data & MAX_SEQ
    data >>= SEQ_BITS

    type_ = data & MAX_TYPE
    data >>= TYPE_BITS

    sec = data & MAX_SEC
    data >>= SEC_BITS

    msec = data & MAX_MSEC

    return PayloadFields(msec=msec, sec=sec, type=type_, seq=seq)


def mix(data: int, shard: int) -> int:
    """Interleaves the shard bits into the payload.

    Args:
        data: The 62-bit payload.
        shard: The 10-bit shard number.

    Returns:
        The 72-bit mixed identifier.
    """
    body_bits = DATA_BITS - DATA_HEAD_BITS
    buffer = data >> body_bits
    for i in range(1, SHARD_BITS + 1):
        # next 5 payload bits, most significant first
        buffer = (buffer << CHUNK_BITS) | (
            (data >> (body_bits - i * CHUNK_BITS)) & _CHUNK_MASK
        )
        # next shard bit, most significant first
        buffer = (buffer << 1) | ((shard >> (SHARD_BITS - i)) & 1)

    # trailing payload bit
    return (buffer << 1) | (data & 1)


def unmix(mixed: int) -> tuple[int, int]:
    """Splits a mixed identifier back into ``(payload, shard)``."""
    body_bits = MIXED_BITS - DATA_HEAD_BITS
    data = mixed >> body_bits
    shard = 0
    for i in range(1, SHARD_BITS + 1):
        chunk = (mixed >> (body_bits - i * (CHUNK_BITS + 1))) & _MIXED_CHUNK_MASK
        data = (data << CHUNK_BITS) | (chunk >> 1)
        shard = (shard << 1) | (chunk & 1)

    data = (data << 1) | (mixed & 1)
    return data, shard
