"""Operations on 128-bit blocks used by the OCB mode.

Blocks are 16-byte ``bytes`` values in memory order. Arithmetic that
works on a block as a number treats it as a big-endian 128-bit integer.
"""

import hmac
from collections.abc import Sequence

BLOCK_SIZE = 16
ZERO_BLOCK = bytes(BLOCK_SIZE)

_MASK64 = (1 << 64) - 1
_MASK128 = (1 << 128) - 1
_REDUCTION = 135


def _check_block(block: bytes, name: str = "block") -> None:
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"{name} must be {BLOCK_SIZE} bytes, got {len(block)}")


def xor_block(a: bytes, b: bytes) -> bytes:
    """Return the byte-wise exclusive or of two equal-length byte strings."""
    if len(a) != len(b):
        raise ValueError(f"cannot xor {len(a)} bytes with {len(b)} bytes")
    return (int.from_bytes(a, "big") ^ int.from_bytes(b, "big")).to_bytes(len(a), "big")


def double_block(block: bytes) -> bytes:
    """Multiply a block by two in GF(2^128), reducing by x^7 + x^2 + x + 1."""
    _check_block(block)
    value = int.from_bytes(block, "big")
    carry = value >> 127
    value = ((value << 1) & _MASK128) ^ (_REDUCTION if carry else 0)
    return value.to_bytes(BLOCK_SIZE, "big")


def ntz(value: int) -> int:
    """Return the number of trailing zero bits of a positive integer."""
    if value <= 0:
        raise ValueError("ntz is defined only for positive integers")
    return (value & -value).bit_length() - 1


def gen_offset(ktop_str: Sequence[int], bottom: int) -> bytes:
    """Build a nonce offset from the stretched key ``ktop_str``.

    ``ktop_str`` holds three 64-bit words; the result is the 128 bits
    starting ``bottom`` bits into their concatenation.
    """
    if len(ktop_str) != 3:
        raise ValueError("ktop_str must hold exactly three 64-bit words")
    if not 0 <= bottom < 64:
        raise ValueError("bottom must be in the range 0..63")
    k0, k1, k2 = (word & _MASK64 for word in ktop_str)
    if bottom:
        left = ((k0 << bottom) | (k1 >> (64 - bottom))) & _MASK64
        right = ((k1 << bottom) | (k2 >> (64 - bottom))) & _MASK64
    else:
        left, right = k0, k1
    return left.to_bytes(8, "big") + right.to_bytes(8, "big")


def constant_time_equal(a: bytes, b: bytes) -> bool:
    """Compare two byte strings in time that does not depend on their contents."""
    return hmac.compare_digest(bytes(a), bytes(b))