"""Base account records for the token programs.

Binary layouts match the on-chain ``Pack`` implementations: little-endian
scalars and four-byte-tag C-options whose value slot is always present.
Mints and token accounts owned by the 2022 program may carry extensions
after the base record; see :mod:`token2022.tlv` for that layout.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from token2022.codec import IncrementalReader, Writer
from token2022.config import TOKEN_PROGRAM_ID
from token2022.errors import InvalidAccountDataError, InvalidAccountSizeError
from token2022.extension_type import AccountState, AccountType, ExtensionType
from token2022.extensions import ExtensionRecord
from token2022.tlv import (
    ACCOUNT_SIZE,
    MINT_SIZE,
    MULTISIG_SIZE,
    decode_extensions,
    encode_account,
    get_extension,
    get_extension_types,
)

__all__ = ["Account", "AccountState", "Clock", "Mint", "Multisig"]


def _check_size(data: bytes, base_size: int, program_id: Pubkey | None, kind: str) -> None:
    if len(data) < base_size:
        raise InvalidAccountSizeError(
            f"{kind} data is {len(data)} bytes, need at least {base_size}"
        )
    # The original token program has no extensions.
    if program_id is not None and str(program_id) == TOKEN_PROGRAM_ID and len(data) != base_size:
        raise InvalidAccountSizeError(
            f"{kind} owned by the token program must be {base_size} bytes, got {len(data)}"
        )


class _Extensible:
    extensions: list[ExtensionRecord] | None

    def get_extension(self, extension_type: ExtensionType) -> ExtensionRecord | None:
        return get_extension(self.extensions, extension_type)

    @property
    def extension_types(self) -> list[int]:
        return get_extension_types(self.extensions)


@dataclass
class Mint(_Extensible):
    mint_authority: Pubkey | None
    supply: int  # u64
    decimals: int  # u8
    is_initialized: bool
    freeze_authority: Pubkey | None
    extensions: list[ExtensionRecord] | None = None

    STRUCT_SIZE = MINT_SIZE  # 36+8+1+1+36

    @classmethod
    def from_bytes(cls, data: bytes, program_id: Pubkey | None = None) -> Mint:
        _check_size(data, cls.STRUCT_SIZE, program_id, "mint")
        r = IncrementalReader(data[: cls.STRUCT_SIZE])
        mint_authority = r.read_coption_pubkey()
        supply = r.read_u64()
        decimals = r.read_u8()
        is_initialized = r.read_bool()
        freeze_authority = r.read_coption_pubkey()
        assert r.offset == cls.STRUCT_SIZE, f"Mint byte coverage: {r.offset} != {cls.STRUCT_SIZE}"
        return cls(
            mint_authority=mint_authority,
            supply=supply,
            decimals=decimals,
            is_initialized=is_initialized,
            freeze_authority=freeze_authority,
            extensions=decode_extensions(data, AccountType.MINT),
        )

    def to_bytes(self) -> bytes:
        w = Writer()
        w.write_coption_pubkey(self.mint_authority)
        w.write_u64(self.supply)
        w.write_u8(self.decimals)
        w.write_bool(self.is_initialized)
        w.write_coption_pubkey(self.freeze_authority)
        return encode_account(w.to_bytes(), AccountType.MINT, self.extensions)


@dataclass
class Account(_Extensible):
    mint: Pubkey
    owner: Pubkey
    amount: int  # u64
    delegate: Pubkey | None
    state: AccountState
    is_native: int | None  # u64 rent-exempt reserve of wrapped SOL accounts
    delegated_amount: int  # u64
    close_authority: Pubkey | None
    extensions: list[ExtensionRecord] | None = None

    STRUCT_SIZE = ACCOUNT_SIZE  # 32+32+8+36+1+12+8+36

    @classmethod
    def from_bytes(cls, data: bytes, program_id: Pubkey | None = None) -> Account:
        _check_size(data, cls.STRUCT_SIZE, program_id, "token account")
        r = IncrementalReader(data[: cls.STRUCT_SIZE])
        mint = r.read_pubkey()
        owner = r.read_pubkey()
        amount = r.read_u64()
        delegate = r.read_coption_pubkey()
        raw_state = r.read_u8()
        try:
            state = AccountState(raw_state)
        except ValueError:
            raise InvalidAccountDataError(f"invalid account state {raw_state}") from None
        is_native = r.read_coption_u64()
        delegated_amount = r.read_u64()
        close_authority = r.read_coption_pubkey()
        assert r.offset == cls.STRUCT_SIZE, f"Account byte coverage: {r.offset} != {cls.STRUCT_SIZE}"
        return cls(
            mint=mint,
            owner=owner,
            amount=amount,
            delegate=delegate,
            state=state,
            is_native=is_native,
            delegated_amount=delegated_amount,
            close_authority=close_authority,
            extensions=decode_extensions(data, AccountType.ACCOUNT),
        )

    def to_bytes(self) -> bytes:
        w = Writer()
        w.write_pubkey(self.mint)
        w.write_pubkey(self.owner)
        w.write_u64(self.amount)
        w.write_coption_pubkey(self.delegate)
        w.write_u8(int(self.state))
        w.write_coption_u64(self.is_native)
        w.write_u64(self.delegated_amount)
        w.write_coption_pubkey(self.close_authority)
        return encode_account(w.to_bytes(), AccountType.ACCOUNT, self.extensions)

    @property
    def is_initialized(self) -> bool:
        return self.state != AccountState.UNINITIALIZED

    @property
    def is_frozen(self) -> bool:
        return self.state == AccountState.FROZEN


@dataclass
class Multisig:
    m: int  # u8 signatures required
    n: int  # u8 valid signers
    is_initialized: bool
    signers: list[Pubkey] = field(default_factory=list)  # up to 11, zero-filled

    MAX_SIGNERS = 11
    STRUCT_SIZE = MULTISIG_SIZE  # 1+1+1+11*32

    @classmethod
    def from_bytes(cls, data: bytes) -> Multisig:
        if len(data) != cls.STRUCT_SIZE:
            raise InvalidAccountSizeError(
                f"multisig data must be {cls.STRUCT_SIZE} bytes, got {len(data)}"
            )
        r = IncrementalReader(data)
        m = r.read_u8()
        n = r.read_u8()
        is_initialized = r.read_bool()
        signers = [r.read_pubkey() for _ in range(cls.MAX_SIGNERS)]
        assert r.offset == cls.STRUCT_SIZE, f"Multisig byte coverage: {r.offset} != {cls.STRUCT_SIZE}"
        return cls(m, n, is_initialized, signers)

    def to_bytes(self) -> bytes:
        if len(self.signers) > self.MAX_SIGNERS:
            raise InvalidAccountDataError(
                f"multisig holds at most {self.MAX_SIGNERS} signers, got {len(self.signers)}"
            )
        w = Writer()
        w.write_u8(self.m)
        w.write_u8(self.n)
        w.write_bool(self.is_initialized)
        for signer in self.signers:
            w.write_pubkey(signer)
        for _ in range(self.MAX_SIGNERS - len(self.signers)):
            w.write_pubkey(Pubkey.default())
        return w.to_bytes()

    @property
    def active_signers(self) -> list[Pubkey]:
        return self.signers[: self.n]


@dataclass
class Clock:
    slot: int  # u64
    epoch_start_timestamp: int  # i64
    epoch: int  # u64
    leader_schedule_epoch: int  # u64
    unix_timestamp: int  # i64

    STRUCT_SIZE = 40

    @classmethod
    def from_bytes(cls, data: bytes) -> Clock:
        r = IncrementalReader(data)
        return cls(r.read_u64(), r.read_i64(), r.read_u64(), r.read_u64(), r.read_i64())

    def to_bytes(self) -> bytes:
        w = Writer()
        w.write_u64(self.slot)
        w.write_i64(self.epoch_start_timestamp)
        w.write_u64(self.epoch)
        w.write_u64(self.leader_schedule_epoch)
        w.write_i64(self.unix_timestamp)
        return w.to_bytes()
