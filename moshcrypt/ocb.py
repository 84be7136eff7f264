"""Authenticated encryption with AES-128 in OCB mode.

Ciphertexts carry their 16-byte tag at the end. Passing ``None`` as the
associated data reuses the associated data of the previous message,
which saves hashing it again.
"""

from .blocks import BLOCK_SIZE, ZERO_BLOCK, constant_time_equal, ntz, xor_block
from .errors import AuthenticationError, CryptoError, UnsupportedError
from .ocbkey import NONCE_LEN, OCBKey

TAG_LEN = 16


class OCB:
    """An OCB context bound to one key."""

    def __init__(self, key: bytes, nonce_len: int = NONCE_LEN, tag_len: int = TAG_LEN) -> None:
        if nonce_len != NONCE_LEN:
            raise UnsupportedError(f"nonce length must be {NONCE_LEN} bytes, got {nonce_len}")
        if tag_len != TAG_LEN:
            raise UnsupportedError(f"tag length must be {TAG_LEN} bytes, got {tag_len}")
        self.nonce_len = nonce_len
        self.tag_len = tag_len
        self._key: OCBKey | None = OCBKey(key)
        self._ad_hash = ZERO_BLOCK

    def _require_key(self) -> OCBKey:
        if self._key is None:
            raise CryptoError("OCB context has been cleared")
        return self._key

    def _associated_hash(self, key: OCBKey, associated_data: bytes | None) -> bytes:
        if associated_data is not None:
            self._ad_hash = key.hash_associated_data(associated_data)
        return self._ad_hash

    @staticmethod
    def _process(key: OCBKey, offset: bytes, data: bytes, decrypting: bool):
        """Run the OCB block loop; return (output, checksum, final offset)."""
        out = bytearray()
        checksum = ZERO_BLOCK
        full_len = len(data) - len(data) % BLOCK_SIZE
        cipher = key.decrypt_block if decrypting else key.encrypt_block

        for number, start in enumerate(range(0, full_len, BLOCK_SIZE), start=1):
            offset = xor_block(offset, key.l_value(ntz(number)))
            block = data[start:start + BLOCK_SIZE]
            result = xor_block(cipher(xor_block(block, offset)), offset)
            checksum = xor_block(checksum, result if decrypting else block)
            out += result

        tail = data[full_len:]
        if tail:
            offset = xor_block(offset, key.lstar)
            pad = key.encrypt_block(offset)
            result = xor_block(tail, pad[:len(tail)])
            plain_tail = result if decrypting else tail
            padded = plain_tail + b"\x80" + bytes(BLOCK_SIZE - len(tail) - 1)
            checksum = xor_block(checksum, padded)
            out += result

        return bytes(out), checksum, offset

    @staticmethod
    def _tag(key: OCBKey, checksum: bytes, offset: bytes, ad_hash: bytes) -> bytes:
        final = xor_block(xor_block(checksum, offset), key.ldollar)
        return xor_block(key.encrypt_block(final), ad_hash)

    def encrypt(self, nonce: bytes, plaintext: bytes, associated_data: bytes | None = b"") -> bytes:
        """Encrypt ``plaintext`` and return the ciphertext followed by the tag."""
        key = self._require_key()
        offset = key.offset_from_nonce(nonce)
        ad_hash = self._associated_hash(key, associated_data)
        ciphertext, checksum, offset = self._process(key, offset, bytes(plaintext), False)
        return ciphertext + self._tag(key, checksum, offset, ad_hash)

    def decrypt(self, nonce: bytes, ciphertext: bytes, associated_data: bytes | None = b"") -> bytes:
        """Verify and decrypt a ciphertext with its tag appended.

        Raises AuthenticationError when the tag does not match.
        """
        key = self._require_key()
        ciphertext = bytes(ciphertext)
        if len(ciphertext) < self.tag_len:
            raise AuthenticationError("ciphertext is shorter than the tag")
        offset = key.offset_from_nonce(nonce)
        ad_hash = self._associated_hash(key, associated_data)
        body, received_tag = ciphertext[:-self.tag_len], ciphertext[-self.tag_len:]
        plaintext, checksum, offset = self._process(key, offset, body, True)
        expected_tag = self._tag(key, checksum, offset, ad_hash)
        if not constant_time_equal(expected_tag, received_tag):
            raise AuthenticationError("Packet failed integrity check.")
        return plaintext

    def clear(self) -> None:
        """Forget the key and all derived state."""
        self._key = None
        self._ad_hash = ZERO_BLOCK