"""RPC client for fetching token program accounts."""

from __future__ import annotations

from typing import Protocol

from solders.pubkey import Pubkey  # type: ignore[import-untyped]
from solders.rpc.responses import GetAccountInfoResp  # type: ignore[import-untyped]

from token2022.amount import amount_to_ui_amount_for_mint, ui_amount_to_amount_for_mint
from token2022.config import PROGRAM_IDS, SOLANA_RPC_URLS, SYSVAR_CLOCK_ID, TOKEN_PROGRAM_ID
from token2022.errors import AccountNotFoundError, InvalidAccountOwnerError
from token2022.pda import derive_associated_token_address
from token2022.rpc import new_rpc_client
from token2022.state import Account, Clock, Mint, Multisig


class SolanaClient(Protocol):
    def get_account_info(self, pubkey: Pubkey) -> GetAccountInfoResp: ...

    def get_program_accounts(self, pubkey: Pubkey, encoding: str = ..., filters: list = ...): ...


class Client:
    """Read-only client for mint, token and multisig accounts of one token program."""

    def __init__(self, solana_rpc: SolanaClient, program_id: Pubkey) -> None:
        self._solana_rpc = solana_rpc
        self._program_id = program_id

    @classmethod
    def from_env(cls, env: str, program: str = "token-2022") -> Client:
        """Create a client configured for the given environment.

        Args:
            env: Environment name ("mainnet-beta", "testnet", "devnet", "localnet")
            program: Token program to read ("token" or "token-2022")
        """
        return cls(
            new_rpc_client(SOLANA_RPC_URLS[env]),
            Pubkey.from_string(PROGRAM_IDS[program]),
        )

    @classmethod
    def mainnet_beta(cls) -> Client:
        return cls.from_env("mainnet-beta")

    @classmethod
    def testnet(cls) -> Client:
        return cls.from_env("testnet")

    @classmethod
    def devnet(cls) -> Client:
        return cls.from_env("devnet")

    @classmethod
    def localnet(cls) -> Client:
        return cls.from_env("localnet")

    @property
    def program_id(self) -> Pubkey:
        return self._program_id

    # -- Accounts --

    def fetch_mint(self, address: Pubkey) -> Mint:
        data = self._fetch_program_account_data(address)
        return Mint.from_bytes(data, self._program_id)

    def fetch_account(self, address: Pubkey) -> Account:
        data = self._fetch_program_account_data(address)
        return Account.from_bytes(data, self._program_id)

    def fetch_multisig(self, address: Pubkey) -> Multisig:
        data = self._fetch_program_account_data(address)
        return Multisig.from_bytes(data)

    def fetch_associated_token_account(self, owner: Pubkey, mint: Pubkey) -> Account:
        addr, _ = derive_associated_token_address(owner, mint, self._program_id)
        return self.fetch_account(addr)

    def fetch_clock(self) -> Clock:
        data = self._fetch_account_data(Pubkey.from_string(SYSVAR_CLOCK_ID))
        return Clock.from_bytes(data)

    def fetch_token_accounts_by_mint(self, mint: Pubkey) -> list[tuple[Pubkey, Account]]:
        """All token accounts of ``mint`` owned by this client's program."""
        from solana.rpc.types import MemcmpOpts  # type: ignore[import-untyped]

        import base58  # type: ignore[import-untyped]

        filters: list = [MemcmpOpts(offset=0, bytes=base58.b58encode(bytes(mint)).decode())]
        if str(self._program_id) == TOKEN_PROGRAM_ID:
            filters.insert(0, Account.STRUCT_SIZE)
        resp = self._solana_rpc.get_program_accounts(
            self._program_id,
            encoding="base64",
            filters=filters,
        )
        results = []
        for acct in resp.value:
            data = bytes(acct.account.data)
            results.append((acct.pubkey, Account.from_bytes(data, self._program_id)))
        return results

    # -- UI amounts --

    def amount_to_ui_amount(self, mint_address: Pubkey, amount: int) -> str:
        """Render a raw amount of ``mint_address`` as of the cluster clock."""
        mint = self.fetch_mint(mint_address)
        return amount_to_ui_amount_for_mint(mint, amount, self.fetch_clock().unix_timestamp)

    def ui_amount_to_amount(self, mint_address: Pubkey, ui_amount: str) -> int:
        mint = self.fetch_mint(mint_address)
        return ui_amount_to_amount_for_mint(mint, ui_amount, self.fetch_clock().unix_timestamp)

    # -- Internal helpers --

    def _fetch_account_data(self, addr: Pubkey) -> bytes:
        resp = self._solana_rpc.get_account_info(addr)
        if resp.value is None:
            raise AccountNotFoundError(f"account not found: {addr}")
        return bytes(resp.value.data)

    def _fetch_program_account_data(self, addr: Pubkey) -> bytes:
        resp = self._solana_rpc.get_account_info(addr)
        if resp.value is None:
            raise AccountNotFoundError(f"account not found: {addr}")
        if resp.value.owner != self._program_id:
            raise InvalidAccountOwnerError(
                f"account {addr} is owned by {resp.value.owner}, expected {self._program_id}"
            )
        return bytes(resp.value.data)
