"""Command-line tools that encrypt and decrypt standard input."""

import sys

from .errors import CryptoError
from .session import Base64Key, Message, Nonce, Session, parse_int


def _to_signed64(value: int) -> int:
    return value - (1 << 64) if value >= (1 << 63) else value


def encrypt_main(argv: list[str] | None = None) -> int:
    """Encrypt stdin under a fresh key with the nonce given as argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Usage: moshcrypt-encrypt NONCE", file=sys.stderr)
        return 1
    try:
        key = Base64Key()
        session = Session(key)
        nonce = Nonce(parse_int(args[0]))
        data = sys.stdin.buffer.read()
        ciphertext = session.encrypt(Message(nonce, data))
        print(f"Key: {key.printable_key()}", file=sys.stderr)
        sys.stdout.buffer.write(ciphertext)
        sys.stdout.buffer.flush()
    except CryptoError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


def decrypt_main(argv: list[str] | None = None) -> int:
    """Decrypt stdin with the printable key given as argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Usage: moshcrypt-decrypt KEY", file=sys.stderr)
        return 1
    try:
        session = Session(Base64Key(args[0]))
        data = sys.stdin.buffer.read()
        message = session.decrypt(data)
        print(f"Nonce = {_to_signed64(message.nonce.val())}", file=sys.stderr)
        sys.stdout.buffer.write(message.text)
        sys.stdout.buffer.flush()
    except CryptoError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0