"""Session keys, nonces and the encrypted-message session."""

import re
import sys
import threading
from dataclasses import dataclass

from .errors import AuthenticationError, CryptoError, UnsupportedError
from .keycodec import decode_key, encode_key
from .ocb import OCB
from .prng import PRNG

try:
    import resource
except ImportError:  # not available on every platform
    resource = None

_MASK64 = (1 << 64) - 1
_LONG_MIN = -(1 << 63)
_LONG_MAX = (1 << 63) - 1
_INTEGER = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


def parse_int(text: str) -> int:
    """Parse a whole string as a signed 64-bit decimal integer.

    Leading whitespace and a sign are accepted; anything after the digits
    is an error. An empty string parses as zero.
    """
    if text == "":
        return 0
    match = _INTEGER.fullmatch(text)
    if match is None:
        raise CryptoError("Bad integer.")
    value = int(match.group(1))
    if not _LONG_MIN <= value <= _LONG_MAX:
        raise CryptoError("Bad integer.")
    return value


class _Counter:
    """A process-wide counter that refuses to wrap around."""

    def __init__(self) -> None:
        self._next = 0
        self._lock = threading.Lock()

    def take(self) -> int:
        with self._lock:
            value = self._next
            self._next = (value + 1) & _MASK64
            if self._next == 0:
                raise CryptoError("Counter wrapped", True)
            return value


_unique_counter = _Counter()


def unique() -> int:
    """Return a number never returned before in this process."""
    return _unique_counter.take()


class Base64Key:
    """A 128-bit key with a 22-character printable form."""

    KEY_LEN = 16
    PRINTABLE_LEN = 22

    def __init__(self, printable_key: str | None = None, prng: PRNG | None = None) -> None:
        if printable_key is not None:
            self.key = self._parse(printable_key)
        elif prng is not None:
            self.key = prng.fill(self.KEY_LEN)
        else:
            with PRNG() as source:
                self.key = source.fill(self.KEY_LEN)

    def _parse(self, printable_key: str) -> bytes:
        if len(printable_key) != self.PRINTABLE_LEN:
            raise CryptoError("Key must be 22 letters long.")
        try:
            raw = decode_key(printable_key + "==")
        except ValueError:
            raise CryptoError("Key must be well-formed base64.") from None
        if len(raw) != self.KEY_LEN:
            raise CryptoError("Key must represent 16 octets.")
        if encode_key(raw)[: self.PRINTABLE_LEN] != printable_key:
            raise CryptoError("Base64 key was not encoded 128-bit key.")
        return raw

    def printable_key(self) -> str:
        """Return the key as 22 base64 characters, without padding."""
        encoded = encode_key(self.key)
        if not encoded.endswith("=="):
            raise CryptoError(f"Unexpected output from base64_encode: {encoded}")
        return encoded[: self.PRINTABLE_LEN]

    def __repr__(self) -> str:
        return "Base64Key(<hidden>)"


class Nonce:
    """A 12-byte nonce: four zero bytes then a big-endian 64-bit value."""

    NONCE_LEN = 12

    def __init__(self, value: int) -> None:
        self._bytes = bytes(4) + (value & _MASK64).to_bytes(8, "big")

    @classmethod
    def from_bytes(cls, data: bytes) -> "Nonce":
        """Build a nonce from its 8-byte wire form."""
        data = bytes(data)
        if len(data) != 8:
            raise CryptoError("Nonce representation must be 8 octets long.")
        return cls(int.from_bytes(data, "big"))

    def cc_bytes(self) -> bytes:
        """Return the 8 bytes sent on the wire."""
        return self._bytes[4:]

    def data(self) -> bytes:
        """Return the full 12-byte nonce."""
        return self._bytes

    def val(self) -> int:
        """Return the 64-bit value of the nonce."""
        return int.from_bytes(self._bytes[4:], "big")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Nonce):
            return NotImplemented
        return self._bytes == other._bytes

    def __hash__(self) -> int:
        return hash(self._bytes)

    def __repr__(self) -> str:
        return f"Nonce({self.val()})"


@dataclass(frozen=True)
class Message:
    """A nonce together with the plaintext it protects."""

    nonce: Nonce
    text: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "text", bytes(self.text))


class Session:
    """Encrypts and decrypts messages under one key with AES-128-OCB."""

    RECEIVE_MTU = 2048
    ADDED_BYTES = 16
    _TAG_LEN = 16
    _WIRE_NONCE_LEN = 8

    def __init__(self, key: Base64Key) -> None:
        self.key = key
        try:
            self._ocb = OCB(key.key, Nonce.NONCE_LEN, self._TAG_LEN)
        except UnsupportedError:
            raise CryptoError("Could not initialize AES-OCB context.") from None
        self.blocks_encrypted = 0

    def encrypt(self, message: Message) -> bytes:
        """Return the wire nonce followed by the ciphertext and tag."""
        pt_len = len(message.text)
        if pt_len + self._TAG_LEN > self.RECEIVE_MTU:
            raise ValueError(
                f"message of {pt_len} bytes does not fit in {self.RECEIVE_MTU} bytes"
            )
        ciphertext = self._ocb.encrypt(message.nonce.data(), message.text, b"")
        if len(ciphertext) != pt_len + self._TAG_LEN:
            raise CryptoError("ae_encrypt() returned error.")

        self.blocks_encrypted += -(-pt_len // 16)
        # Server and client share the key, so stop at 2^47 blocks each.
        if self.blocks_encrypted >> 47:
            raise CryptoError("Encrypted 2^47 blocks.", True)

        return message.nonce.cc_bytes() + ciphertext

    def decrypt(self, data: bytes) -> Message:
        """Verify and decrypt a wire packet into a Message."""
        data = bytes(data)
        if len(data) < self._WIRE_NONCE_LEN + self._TAG_LEN:
            raise CryptoError("Ciphertext must contain nonce and tag.")
        body = data[self._WIRE_NONCE_LEN:]
        if len(body) > self.RECEIVE_MTU:
            raise ValueError(
                f"ciphertext of {len(body)} bytes exceeds {self.RECEIVE_MTU} bytes"
            )
        nonce = Nonce.from_bytes(data[: self._WIRE_NONCE_LEN])
        try:
            plaintext = self._ocb.decrypt(nonce.data(), body, b"")
        except AuthenticationError:
            raise AuthenticationError("Packet failed integrity check.") from None
        return Message(nonce, plaintext)


_saved_core_limit: dict[str, int] = {}


def _require_resource():
    if resource is None:
        raise CryptoError("Core dump limits are not supported on this platform.")
    return resource


def disable_dumping_core() -> None:
    """Set the soft core-dump size limit to zero, remembering the old one."""
    res = _require_resource()
    soft, hard = res.getrlimit(res.RLIMIT_CORE)
    _saved_core_limit["soft"] = soft
    res.setrlimit(res.RLIMIT_CORE, (0, hard))


def reenable_dumping_core() -> None:
    """Restore the soft core-dump limit saved by disable_dumping_core."""
    if resource is None or "soft" not in _saved_core_limit:
        return
    try:
        _, hard = resource.getrlimit(resource.RLIMIT_CORE)
        resource.setrlimit(resource.RLIMIT_CORE, (_saved_core_limit["soft"], hard))
    except (OSError, ValueError):
        print("could not restore core dump limit", file=sys.stderr)