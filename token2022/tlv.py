"""Type-length-value container codec for extended token accounts.

An extended mint or token account is laid out as::

    [base record][zero padding up to 165][account type u8][TLV records...]

Each TLV record is ``type u16 LE | length u16 LE | value``. Scanning stops
at the end of the buffer, when fewer than four bytes remain, or at a
record whose type is 0 (trailing padding).
"""

from __future__ import annotations

import struct

from loguru import logger

from token2022.codec import Writer
from token2022.errors import (
    AccountNotInitializedError,
    InvalidAccountDataError,
    InvalidAccountSizeError,
    InvalidAccountTypeError,
    TruncatedExtensionDataError,
)
from token2022.extension_type import AccountType, ExtensionType
from token2022.extensions import ExtensionRecord, UnparsedExtension, decode_extension

MINT_SIZE = 82
ACCOUNT_SIZE = 165
MULTISIG_SIZE = 355

# Extended mints are padded to the token account length so the account
# type byte lives at the same offset for both kinds.
BASE_ACCOUNT_LENGTH = ACCOUNT_SIZE
ACCOUNT_TYPE_SIZE = 1
TLV_START = BASE_ACCOUNT_LENGTH + ACCOUNT_TYPE_SIZE
TLV_HEADER_SIZE = 4

_BASE_SIZES = {
    AccountType.MINT: MINT_SIZE,
    AccountType.ACCOUNT: ACCOUNT_SIZE,
}


def decode_tlv(data: bytes) -> list[ExtensionRecord]:
    """Decode a bare run of TLV records."""
    extensions: list[ExtensionRecord] = []
    off = 0
    while len(data) - off >= TLV_HEADER_SIZE:
        ext_type, length = struct.unpack_from("<HH", data, off)
        if ext_type == ExtensionType.UNINITIALIZED:
            logger.debug("tlv scan stopped at padding, offset={}", off)
            break
        off += TLV_HEADER_SIZE
        if off + length > len(data):
            raise TruncatedExtensionDataError(
                f"extension type {ext_type} declares {length} bytes, "
                f"only {len(data) - off} remain"
            )
        ext = decode_extension(ext_type, bytes(data[off : off + length]))
        if isinstance(ext, UnparsedExtension):
            logger.debug("unknown extension type {} ({} bytes) kept unparsed", ext_type, length)
        extensions.append(ext)
        off += length
    return extensions


def decode_extensions(
    data: bytes, account_type: AccountType
) -> list[ExtensionRecord] | None:
    """Decode the extensions of a whole mint or token account blob.

    Returns None for an account of exactly its base size.
    """
    base_size = _BASE_SIZES[account_type]
    if len(data) < base_size:
        raise InvalidAccountSizeError(
            f"{account_type} data is {len(data)} bytes, need at least {base_size}"
        )
    if len(data) == base_size:
        return None
    if len(data) <= BASE_ACCOUNT_LENGTH or len(data) == MULTISIG_SIZE:
        raise InvalidAccountSizeError(
            f"{len(data)} bytes is not a valid extended {account_type} length"
        )

    tag = data[BASE_ACCOUNT_LENGTH]
    if tag == AccountType.UNINITIALIZED:
        raise AccountNotInitializedError(f"{account_type} has an uninitialized account type")
    if tag != account_type:
        raise InvalidAccountTypeError(f"expected account type {int(account_type)}, got {tag}")
    if any(data[base_size:BASE_ACCOUNT_LENGTH]):
        raise InvalidAccountDataError(f"{account_type} padding after the base record is not zeroed")

    return decode_tlv(data[TLV_START:])


def encode_extensions(extensions: list[ExtensionRecord]) -> bytes:
    """Concatenate TLV records in list order, without padding."""
    w = Writer()
    for ext in extensions:
        value = ext.to_bytes()
        w.write_u16(int(ext.extension_type))
        w.write_u16(len(value))
        w.write_bytes(value)
    return w.to_bytes()


def encode_account(
    base: bytes,
    account_type: AccountType,
    extensions: list[ExtensionRecord] | None,
) -> bytes:
    """Append padding, the account type and TLV records to a base record."""
    if extensions is None:
        return base
    out = bytearray(base)
    out += b"\x00" * (BASE_ACCOUNT_LENGTH - len(base))
    out.append(int(account_type))
    out += encode_extensions(extensions)
    if len(out) == MULTISIG_SIZE:
        out.append(0)
    return bytes(out)


def get_extension(
    extensions: list[ExtensionRecord] | None, extension_type: int
) -> ExtensionRecord | None:
    """First extension of ``extension_type``, or None."""
    for ext in extensions or []:
        if ext.extension_type == extension_type:
            return ext
    return None


def get_extension_types(extensions: list[ExtensionRecord] | None) -> list[int]:
    return [ext.extension_type for ext in extensions or []]
