"""Account size calculators."""

from __future__ import annotations

from token2022.errors import InvalidAccountDataError
from token2022.extension_type import ExtensionType, get_required_account_extensions
from token2022.extensions import ExtensionRecord, get_extension_size
from token2022.state import Mint
from token2022.tlv import ACCOUNT_SIZE, MINT_SIZE, MULTISIG_SIZE, TLV_HEADER_SIZE, TLV_START


def _extended_size(payload_sizes: list[int]) -> int:
    total = TLV_START + sum(TLV_HEADER_SIZE + n for n in payload_sizes)
    # An extended account must never be mistaken for a multisig.
    if total == MULTISIG_SIZE:
        total += 1
    return total


def get_mint_size(extensions: list[ExtensionRecord] | None = None) -> int:
    """Bytes needed to store a mint with ``extensions`` (None means a plain mint)."""
    if extensions is None:
        return MINT_SIZE
    return _extended_size([ext.size for ext in extensions])


def get_token_size(extensions: list[ExtensionRecord] | None = None) -> int:
    """Bytes needed to store a token account with ``extensions``."""
    if extensions is None:
        return ACCOUNT_SIZE
    return _extended_size([ext.size for ext in extensions])


def get_size_for_extension_types(
    extension_types: list[ExtensionType], base_size: int = ACCOUNT_SIZE
) -> int:
    """Size of an account holding default values of fixed-size ``extension_types``."""
    if not extension_types:
        return base_size
    sizes = []
    for t in extension_types:
        n = get_extension_size(t)
        if n is None:
            raise InvalidAccountDataError(f"extension type {int(t)} has no fixed size")
        sizes.append(n)
    return _extended_size(sizes)


def get_account_len_for_mint(mint: Mint) -> int:
    """Size of a token account initialized for ``mint``."""
    required = get_required_account_extensions(mint.extension_types)
    return get_size_for_extension_types(required)
