"""Key-dependent state for the OCB mode of AES-128.

An :class:`OCBKey` holds the AES key schedule and the values derived
from it once per key: ``L_*``, ``L_$`` and the table of ``L_i`` values.
It also turns nonces into initial offsets and hashes associated data.
"""

from collections.abc import Sequence

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .blocks import (
    BLOCK_SIZE,
    ZERO_BLOCK,
    double_block,
    gen_offset,
    ntz,
    xor_block,
)
from .errors import UnsupportedError

KEY_LEN = 16
NONCE_LEN = 12
L_TABLE_SIZE = 16

_MASK64 = (1 << 64) - 1


class OCBKey:
    """AES-128 key material and per-key OCB values."""

    def __init__(self, key: bytes) -> None:
        key = bytes(key)
        if len(key) != KEY_LEN:
            raise UnsupportedError(f"key must be {KEY_LEN} bytes, got {len(key)}")
        cipher = Cipher(algorithms.AES(key), modes.ECB())
        self._encryptor = cipher.encryptor()
        self._decryptor = cipher.decryptor()

        self.lstar = self.encrypt_block(ZERO_BLOCK)
        self.ldollar = double_block(self.lstar)
        table = [double_block(self.ldollar)]
        while len(table) < L_TABLE_SIZE:
            table.append(double_block(table[-1]))
        self._l_table: tuple[bytes, ...] = tuple(table)

        self._cached_top = ZERO_BLOCK
        self._ktop_str: Sequence[int] = (0, 0, 0)

    def encrypt_block(self, block: bytes) -> bytes:
        """Encrypt one 16-byte block with AES."""
        block = bytes(block)
        if len(block) != BLOCK_SIZE:
            raise ValueError(f"block must be {BLOCK_SIZE} bytes, got {len(block)}")
        return self._encryptor.update(block)

    def decrypt_block(self, block: bytes) -> bytes:
        """Decrypt one 16-byte block with AES."""
        block = bytes(block)
        if len(block) != BLOCK_SIZE:
            raise ValueError(f"block must be {BLOCK_SIZE} bytes, got {len(block)}")
        return self._decryptor.update(block)

    def l_value(self, index: int) -> bytes:
        """Return ``L_index``, computing it by doubling past the table."""
        if index < 0:
            raise ValueError("L index must be non-negative")
        if index < L_TABLE_SIZE:
            return self._l_table[index]
        value = self._l_table[-1]
        for _ in range(index - (L_TABLE_SIZE - 1)):
            value = double_block(value)
        return value

    def offset_from_nonce(self, nonce: bytes) -> bytes:
        """Return the initial offset for a 12-byte nonce."""
        nonce = bytes(nonce)
        if len(nonce) != NONCE_LEN:
            raise UnsupportedError(f"nonce must be {NONCE_LEN} bytes, got {len(nonce)}")
        formatted = b"\x00\x00\x00\x01" + nonce
        bottom = formatted[-1] & 0x3F
        top = formatted[:-1] + bytes([formatted[-1] & 0xC0])
        if top != self._cached_top:
            self._cached_top = top
            ktop = self.encrypt_block(top)
            k0 = int.from_bytes(ktop[:8], "big")
            k1 = int.from_bytes(ktop[8:], "big")
            k2 = (k0 ^ (k0 << 8) ^ (k1 >> 56)) & _MASK64
            self._ktop_str = (k0, k1, k2)
        return gen_offset(self._ktop_str, bottom)

    def hash_associated_data(self, data: bytes) -> bytes:
        """Return the OCB hash of associated data (all zeros when empty)."""
        data = bytes(data)
        full_len = len(data) - len(data) % BLOCK_SIZE
        offset = ZERO_BLOCK
        checksum = ZERO_BLOCK
        for number, start in enumerate(range(0, full_len, BLOCK_SIZE), start=1):
            offset = xor_block(offset, self.l_value(ntz(number)))
            chunk = data[start:start + BLOCK_SIZE]
            checksum = xor_block(checksum, self.encrypt_block(xor_block(chunk, offset)))
        tail = data[full_len:]
        if tail:
            offset = xor_block(offset, self.lstar)
            padded = tail + b"\x80" + bytes(BLOCK_SIZE - len(tail) - 1)
            checksum = xor_block(checksum, self.encrypt_block(xor_block(padded, offset)))
        return checksum