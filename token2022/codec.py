"""Primitive little-endian codecs for token program account data.

Provides a cursor-based reader and an append-only writer covering the
scalar, public key, string and C-option encodings used by base records
and extension payloads.
"""

from __future__ import annotations

import struct

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from token2022.errors import (
    BufferTooShortError,
    InvalidAccountDataError,
    InvalidOptionDiscriminantError,
)

PUBKEY_SIZE = 32

# One-byte tag options are used in instruction data and some payloads.
OPTION_TAG_SIZE = 1
# Base mint/account records use the four-byte tag inherited from the
# original token program.
COPTION_TAG_SIZE = 4

_ZERO_PUBKEY = b"\x00" * PUBKEY_SIZE


class IncrementalReader:
    """Cursor-based binary reader over an immutable buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def _unpack(self, fmt: str, size: int, name: str) -> tuple:
        if self._offset + size > len(self._data):
            raise BufferTooShortError(
                f"not enough data for {name} at offset {self._offset}"
            )
        vals = struct.unpack_from(fmt, self._data, self._offset)
        self._offset += size
        return vals

    # --- Scalars ---

    def read_u8(self) -> int:
        return self._unpack("<B", 1, "u8")[0]

    def read_bool(self) -> bool:
        return self.read_u8() != 0

    def read_u16(self) -> int:
        return self._unpack("<H", 2, "u16")[0]

    def read_i16(self) -> int:
        return self._unpack("<h", 2, "i16")[0]

    def read_u32(self) -> int:
        return self._unpack("<I", 4, "u32")[0]

    def read_u64(self) -> int:
        return self._unpack("<Q", 8, "u64")[0]

    def read_i64(self) -> int:
        return self._unpack("<q", 8, "i64")[0]

    def read_f64(self) -> float:
        return self._unpack("<d", 8, "f64")[0]

    def read_bytes(self, n: int) -> bytes:
        if self._offset + n > len(self._data):
            raise BufferTooShortError(
                f"not enough data for {n} bytes at offset {self._offset}"
            )
        v = bytes(self._data[self._offset : self._offset + n])
        self._offset += n
        return v

    # --- Keys and strings ---

    def read_pubkey(self) -> Pubkey:
        return Pubkey.from_bytes(self.read_bytes(PUBKEY_SIZE))

    def read_zeroable_pubkey(self) -> Pubkey | None:
        """Read a 32-byte key where all zeroes means "no key"."""
        raw = self.read_bytes(PUBKEY_SIZE)
        if raw == _ZERO_PUBKEY:
            return None
        return Pubkey.from_bytes(raw)

    def read_string(self) -> str:
        length = self.read_u32()
        if length == 0:
            return ""
        if self._offset + length > len(self._data):
            raise BufferTooShortError(
                f"not enough data for string of length {length} at offset {self._offset}"
            )
        raw = self._data[self._offset : self._offset + length]
        try:
            s = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidAccountDataError(
                f"string at offset {self._offset} is not valid UTF-8"
            ) from e
        self._offset += length
        return s

    # --- C-options ---

    def _read_tag(self, tag_size: int) -> bool:
        at = self._offset
        tag = self.read_u8() if tag_size == OPTION_TAG_SIZE else self.read_u32()
        if tag not in (0, 1):
            raise InvalidOptionDiscriminantError(
                f"invalid option discriminant {tag} at offset {at}"
            )
        return tag == 1

    def read_option_u64(self) -> int | None:
        if not self._read_tag(OPTION_TAG_SIZE):
            return None
        return self.read_u64()

    def read_option_pubkey(self) -> Pubkey | None:
        if not self._read_tag(OPTION_TAG_SIZE):
            return None
        return self.read_pubkey()

    def read_coption_u64(self) -> int | None:
        """Read a four-byte-tag option. The value slot is always present."""
        present = self._read_tag(COPTION_TAG_SIZE)
        value = self.read_u64()
        return value if present else None

    def read_coption_pubkey(self) -> Pubkey | None:
        present = self._read_tag(COPTION_TAG_SIZE)
        value = self.read_pubkey()
        return value if present else None


class Writer:
    """Append-only little-endian writer. Every call extends one buffer."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    def to_bytes(self) -> bytes:
        return bytes(self._buf)

    def _pack(self, fmt: str, value: int | float, name: str) -> None:
        try:
            self._buf += struct.pack(fmt, value)
        except struct.error as e:
            raise InvalidAccountDataError(f"cannot encode {value!r} as {name}") from e

    # --- Scalars ---

    def write_u8(self, v: int) -> None:
        self._pack("<B", v, "u8")

    def write_bool(self, v: bool) -> None:
        self.write_u8(1 if v else 0)

    def write_u16(self, v: int) -> None:
        self._pack("<H", v, "u16")

    def write_i16(self, v: int) -> None:
        self._pack("<h", v, "i16")

    def write_u32(self, v: int) -> None:
        self._pack("<I", v, "u32")

    def write_u64(self, v: int) -> None:
        self._pack("<Q", v, "u64")

    def write_i64(self, v: int) -> None:
        self._pack("<q", v, "i64")

    def write_f64(self, v: float) -> None:
        self._pack("<d", v, "f64")

    def write_bytes(self, data: bytes, size: int | None = None) -> None:
        if size is not None and len(data) != size:
            raise InvalidAccountDataError(
                f"expected {size} bytes, got {len(data)}"
            )
        self._buf += data

    # --- Keys and strings ---

    def write_pubkey(self, key: Pubkey) -> None:
        self.write_bytes(bytes(key), PUBKEY_SIZE)

    def write_zeroable_pubkey(self, key: Pubkey | None) -> None:
        if key is None:
            self._buf += _ZERO_PUBKEY
        else:
            self.write_pubkey(key)

    def write_string(self, s: str) -> None:
        encoded = s.encode("utf-8")
        self.write_u32(len(encoded))
        self._buf += encoded

    # --- C-options ---

    def write_option_u64(self, v: int | None) -> None:
        if v is None:
            self.write_u8(0)
            return
        self.write_u8(1)
        self.write_u64(v)

    def write_option_pubkey(self, key: Pubkey | None) -> None:
        if key is None:
            self.write_u8(0)
            return
        self.write_u8(1)
        self.write_pubkey(key)

    def write_coption_u64(self, v: int | None) -> None:
        self.write_u32(0 if v is None else 1)
        self.write_u64(0 if v is None else v)

    def write_coption_pubkey(self, key: Pubkey | None) -> None:
        self.write_u32(0 if key is None else 1)
        self.write_zeroable_pubkey(key)


def encoded_string_size(s: str) -> int:
    """Bytes taken by ``s`` once written with :meth:`Writer.write_string`."""
    return 4 + len(s.encode("utf-8"))
