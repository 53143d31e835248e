"""URL-safe token encoding for mixed identifiers.

Tokens are standard base64 of the big-endian bytes of the integer with
``+`` -> ``-``, ``/`` -> ``_`` and ``=`` -> ``.``. The integer is padded with
leading zero bits to a whole number of bytes, so a generated identifier (72
bits, top bit set by the marker) always encodes to 9 bytes / 12 characters.
"""

import base64
import binascii
import re

from shardable_uuid.core.exceptions import DecodeError
from shardable_uuid.utils.bits import MIXED_BITS

_TOKEN_RE = re.compile(r"[A-Za-z0-9_\-]+\.{0,2}")
_MAX_BYTES = (MIXED_BITS + 7) // 8


def encode(value: int) -> str:
    """Encodes a non-negative integer as a URL-safe token."""
    if value < 0:
        raise ValueError("Only non-negative integers can be encoded")

    length = max(1, (value.bit_length() + 7) // 8)
    raw = value.to_bytes(length, byteorder="big")
    return base64.urlsafe_b64encode(raw).decode("ascii").replace("=", ".")


def decode(token: str) -> int:
    """Decodes a URL-safe token back into its integer.

    Raises:
        DecodeError: If the token is not valid base64 of 1 to 9 bytes.
    """
    if not isinstance(token, str) or not _TOKEN_RE.fullmatch(token):
        raise DecodeError(f"Malformed token: {token!r}")

    try:
        raw = base64.urlsafe_b64decode(token.replace(".", "="))
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Token is not valid base64: {token!r}") from e

    if not raw or len(raw) > _MAX_BYTES:
        raise DecodeError(f"Token decodes to {len(raw)} bytes: {token!r}")

    return int.from_bytes(raw, byteorder="big")
