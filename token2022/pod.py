"""Fixed-width opaque byte blobs used by the confidential transfer extensions."""

from __future__ import annotations

from token2022.errors import InvalidAccountDataError


class _FixedBytes(bytes):
    """``bytes`` of one exact width, never interpreted by this package."""

    SIZE = 0

    def __new__(cls, data: bytes) -> _FixedBytes:
        if len(data) != cls.SIZE:
            raise InvalidAccountDataError(
                f"{cls.__name__} must be {cls.SIZE} bytes, got {len(data)}"
            )
        return super().__new__(cls, data)

    @classmethod
    def zeroed(cls):
        return cls(b"\x00" * cls.SIZE)

    def is_zero(self) -> bool:
        return not any(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.hex()})"


class ElGamalPubkey(_FixedBytes):
    SIZE = 32


class ElGamalCiphertext(_FixedBytes):
    SIZE = 64


class AeCiphertext(_FixedBytes):
    """Authenticated-encryption ciphertext (nonce + ciphertext + tag)."""

    SIZE = 36
