"""AES-OCB3 authenticated encryption of datagrams with base64 session keys."""

__version__ = "0.1.0"