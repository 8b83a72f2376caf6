"""Mainnet compatibility tests.

These tests fetch live mainnet-beta data and verify that our account
deserialization works against real on-chain mints.

Run with:
    TOKEN2022_COMPAT_TEST=1 uv run pytest -k compat -v

Requires network access to Solana mainnet RPC.
"""

import os
import struct

import pytest
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from token2022.client import Client
from token2022.config import NATIVE_MINT, TOKEN_2022_PROGRAM_ID, TOKEN_PROGRAM_ID
from token2022.extension_type import ExtensionType
from token2022.size import get_mint_size

# PayPal USD, a 2022-program mint with metadata, pointer and fee extensions.
PYUSD_MINT = Pubkey.from_string("2b1kV6DkPAnxd5ixfnxCpjxmKwqjjaYmCZfHsFu24GXo")


def skip_unless_compat() -> None:
    if not os.environ.get("TOKEN2022_COMPAT_TEST"):
        pytest.skip("set TOKEN2022_COMPAT_TEST=1 to run compatibility tests against mainnet")


def _rpc_url() -> str:
    return os.environ.get("SOLANA_RPC_URL", "https://api.mainnet-beta.solana.com")


def compat_client(program_id: str = TOKEN_2022_PROGRAM_ID) -> Client:
    from solana.rpc.api import Client as SolanaHTTPClient  # type: ignore[import-untyped]

    return Client(SolanaHTTPClient(_rpc_url()), Pubkey.from_string(program_id))


def fetch_raw_account(addr: Pubkey) -> bytes:
    from solana.rpc.api import Client as SolanaHTTPClient  # type: ignore[import-untyped]

    rpc = SolanaHTTPClient(_rpc_url())
    resp = rpc.get_account_info(addr)
    assert resp.value is not None, f"account not found: {addr}"
    return bytes(resp.value.data)


def read_u64(raw: bytes, offset: int) -> int:
    return struct.unpack_from("<Q", raw, offset)[0]


class TestCompatMint:
    def test_token_2022_mint(self) -> None:
        skip_unless_compat()
        client = compat_client()

        mint = client.fetch_mint(PYUSD_MINT)
        raw = fetch_raw_account(PYUSD_MINT)

        assert mint.is_initialized
        assert mint.supply == read_u64(raw, 36)
        assert mint.decimals == raw[44]
        assert mint.extensions is not None
        assert ExtensionType.METADATA_POINTER in mint.extension_types
        assert get_mint_size(mint.extensions) == len(raw)
        assert mint.to_bytes() == raw

    def test_legacy_native_mint(self) -> None:
        skip_unless_compat()
        client = compat_client(TOKEN_PROGRAM_ID)

        mint = client.fetch_mint(Pubkey.from_string(NATIVE_MINT))

        assert mint.decimals == 9
        assert mint.extensions is None
        assert mint.mint_authority is None


class TestCompatClock:
    def test_clock_and_ui_amount(self) -> None:
        skip_unless_compat()
        client = compat_client()

        clock = client.fetch_clock()
        assert clock.unix_timestamp > 1_600_000_000

        mint = client.fetch_mint(PYUSD_MINT)
        ui = client.amount_to_ui_amount(PYUSD_MINT, 10**mint.decimals)
        assert float(ui) > 0
