"""Exceptions raised by the cryptographic layer."""


class CryptoError(Exception):
    """A failure in key handling, encryption or decryption.

    ``fatal`` marks errors after which the session must not continue,
    such as an exhausted nonce counter or key usage limit.
    """

    def __init__(self, text: str, fatal: bool = False) -> None:
        super().__init__(text)
        self.text = text
        self.fatal = fatal

    def __str__(self) -> str:
        return self.text


class AuthenticationError(CryptoError):
    """A ciphertext or tag failed its integrity check."""


class UnsupportedError(CryptoError):
    """A requested option or parameter length is not supported."""