"""Random bytes read from the system randomness device."""

import sys

from .errors import CryptoError

RANDOM_DEVICE = "/dev/urandom"


class PRNG:
    """Reads random bytes from a device file, by default /dev/urandom."""

    def __init__(self, path: str = RANDOM_DEVICE) -> None:
        self.path = str(path)
        try:
            self._file = open(self.path, "rb")
        except OSError as exc:
            raise CryptoError(f"Could not read from {self.path}") from exc

    def fill(self, size: int) -> bytes:
        """Return exactly ``size`` random bytes."""
        if size == 0:
            return b""
        try:
            data = self._file.read(size)
        except (OSError, ValueError) as exc:
            raise CryptoError(f"Could not read from {self.path}") from exc
        if len(data) != size:
            raise CryptoError(f"Could not read from {self.path}")
        return data

    def _native_int(self, size: int) -> int:
        return int.from_bytes(self.fill(size), sys.byteorder)

    def uint8(self) -> int:
        return self._native_int(1)

    def uint32(self) -> int:
        return self._native_int(4)

    def uint64(self) -> int:
        return self._native_int(8)

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "PRNG":
        return self

    def __exit__(self, *args) -> None:
        self.close()