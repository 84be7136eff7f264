"""Base64 encoding of 128-bit session keys.

Only the fixed shape used for keys is handled: 16 raw bytes map to
24 characters, the last two of which are ``==``.
"""

import base64

KEY_BYTES = 16
ENCODED_LEN = 24

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_SIXBIT = {char: value for value, char in enumerate(_ALPHABET)}


def encode_key(raw: bytes) -> str:
    """Encode exactly 16 bytes as 24 base64 characters ending in ``==``."""
    if len(raw) != KEY_BYTES:
        raise ValueError(f"key must be {KEY_BYTES} bytes, got {len(raw)}")
    return base64.b64encode(bytes(raw)).decode("ascii")


def decode_key(text: str) -> bytes:
    """Decode 24 base64 characters ending in ``==`` into 16 bytes.

    The low four bits of the 22nd character do not contribute to the
    result. Raises ValueError on a wrong length, a character outside the
    base64 alphabet, or missing padding.
    """
    if len(text) != ENCODED_LEN:
        raise ValueError(f"encoded key must be {ENCODED_LEN} characters, got {len(text)}")

    try:
        sixbits = [_SIXBIT[char] for char in text[:22]]
    except KeyError as exc:
        raise ValueError(f"invalid base64 character {exc.args[0]!r}") from None

    out = bytearray()
    for start in range(0, 20, 4):
        a, b, c, d = sixbits[start:start + 4]
        group = (a << 18) | (b << 12) | (c << 6) | d
        out += group.to_bytes(3, "big")
    out.append(((sixbits[20] << 6 | sixbits[21]) >> 4) & 0xFF)

    if text[22:] != "==":
        raise ValueError("encoded key must end with '=='")
    return bytes(out)