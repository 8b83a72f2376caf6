"""Typed payloads for every Token-2022 extension.

Each extension is a dataclass with a class-level ``EXTENSION_TYPE`` and,
for fixed-width layouts, a ``STRUCT_SIZE``. ``from_bytes`` parses one TLV
value exactly (trailing or missing bytes are rejected) and ``to_bytes``
produces the canonical encoding of the same value.

Authority fields are "optional non-zero pubkeys": 32 zero bytes on the
wire decode to ``None`` and ``None`` encodes back to 32 zero bytes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from token2022.codec import PUBKEY_SIZE, IncrementalReader, Writer, encoded_string_size
from token2022.errors import InvalidAccountDataError, MissingExtensionFieldError
from token2022.extension_type import AccountState, ExtensionType
from token2022.pod import AeCiphertext, ElGamalCiphertext, ElGamalPubkey

ONE_IN_BASIS_POINTS = 10_000


def _read_elgamal_pubkey(r: IncrementalReader) -> ElGamalPubkey:
    return ElGamalPubkey(r.read_bytes(ElGamalPubkey.SIZE))


def _read_zeroable_elgamal_pubkey(r: IncrementalReader) -> ElGamalPubkey | None:
    key = _read_elgamal_pubkey(r)
    return None if key.is_zero() else key


def _read_ciphertext(r: IncrementalReader) -> ElGamalCiphertext:
    return ElGamalCiphertext(r.read_bytes(ElGamalCiphertext.SIZE))


def _read_ae_ciphertext(r: IncrementalReader) -> AeCiphertext:
    return AeCiphertext(r.read_bytes(AeCiphertext.SIZE))


def _write_zeroable_elgamal_pubkey(w: Writer, key: ElGamalPubkey | None) -> None:
    w.write_bytes(bytes(ElGamalPubkey.zeroed() if key is None else key), ElGamalPubkey.SIZE)


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------


class Extension:
    """Shared encode/decode plumbing for extension dataclasses."""

    EXTENSION_TYPE = ExtensionType.UNINITIALIZED
    STRUCT_SIZE: int | None = None
    # Fields that must not be None when encoding.
    REQUIRED_FIELDS: tuple[str, ...] = ()

    @property
    def extension_type(self) -> ExtensionType:
        return self.EXTENSION_TYPE

    @property
    def size(self) -> int:
        """Length of the TLV value this extension encodes to."""
        assert self.STRUCT_SIZE is not None
        return self.STRUCT_SIZE

    @classmethod
    def from_bytes(cls, data: bytes):
        if cls.STRUCT_SIZE is not None and len(data) != cls.STRUCT_SIZE:
            raise InvalidAccountDataError(
                f"{cls.__name__} payload must be {cls.STRUCT_SIZE} bytes, got {len(data)}"
            )
        r = IncrementalReader(data)
        ext = cls._read(r)
        if r.remaining != 0:
            raise InvalidAccountDataError(
                f"{cls.__name__} payload has {r.remaining} unread trailing bytes"
            )
        return ext

    def check_required_fields(self) -> None:
        for name in self.REQUIRED_FIELDS:
            if getattr(self, name) is None:
                raise MissingExtensionFieldError(
                    f"{type(self).__name__}.{name} is required"
                )

    def to_bytes(self) -> bytes:
        self.check_required_fields()
        w = Writer()
        self._write(w)
        out = w.to_bytes()
        assert len(out) == self.size, f"{type(self).__name__} byte coverage: {len(out)} != {self.size}"
        return out

    @classmethod
    def _read(cls, r: IncrementalReader):
        return cls()

    def _write(self, w: Writer) -> None:
        pass


# ---------------------------------------------------------------------------
# Transfer fees
# ---------------------------------------------------------------------------


@dataclass
class TransferFee:
    epoch: int  # u64
    maximum_fee: int  # u64
    transfer_fee_basis_points: int  # u16

    STRUCT_SIZE = 18

    @classmethod
    def read(cls, r: IncrementalReader) -> TransferFee:
        return cls(r.read_u64(), r.read_u64(), r.read_u16())

    def write(self, w: Writer) -> None:
        w.write_u64(self.epoch)
        w.write_u64(self.maximum_fee)
        w.write_u16(self.transfer_fee_basis_points)

    def calculate_fee(self, pre_fee_amount: int) -> int:
        """Fee withheld on a transfer of ``pre_fee_amount``, rounded up and capped."""
        if self.transfer_fee_basis_points == 0 or pre_fee_amount == 0:
            return 0
        numerator = pre_fee_amount * self.transfer_fee_basis_points
        raw_fee = (numerator + ONE_IN_BASIS_POINTS - 1) // ONE_IN_BASIS_POINTS
        return min(raw_fee, self.maximum_fee)


@dataclass
class TransferFeeConfig(Extension):
    transfer_fee_config_authority: Pubkey | None
    withdraw_withheld_authority: Pubkey | None
    withheld_amount: int  # u64
    older_transfer_fee: TransferFee
    newer_transfer_fee: TransferFee

    EXTENSION_TYPE = ExtensionType.TRANSFER_FEE_CONFIG
    STRUCT_SIZE = 108  # 32+32+8+18+18
    REQUIRED_FIELDS = ("withheld_amount", "older_transfer_fee", "newer_transfer_fee")

    @classmethod
    def _read(cls, r: IncrementalReader) -> TransferFeeConfig:
        return cls(
            transfer_fee_config_authority=r.read_zeroable_pubkey(),
            withdraw_withheld_authority=r.read_zeroable_pubkey(),
            withheld_amount=r.read_u64(),
            older_transfer_fee=TransferFee.read(r),
            newer_transfer_fee=TransferFee.read(r),
        )

    def _write(self, w: Writer) -> None:
        w.write_zeroable_pubkey(self.transfer_fee_config_authority)
        w.write_zeroable_pubkey(self.withdraw_withheld_authority)
        w.write_u64(self.withheld_amount)
        self.older_transfer_fee.write(w)
        self.newer_transfer_fee.write(w)

    def get_epoch_fee(self, epoch: int) -> TransferFee:
        if epoch >= self.newer_transfer_fee.epoch:
            return self.newer_transfer_fee
        return self.older_transfer_fee

    def calculate_epoch_fee(self, epoch: int, pre_fee_amount: int) -> int:
        return self.get_epoch_fee(epoch).calculate_fee(pre_fee_amount)


@dataclass
class TransferFeeAmount(Extension):
    withheld_amount: int  # u64

    EXTENSION_TYPE = ExtensionType.TRANSFER_FEE_AMOUNT
    STRUCT_SIZE = 8
    REQUIRED_FIELDS = ("withheld_amount",)

    @classmethod
    def _read(cls, r: IncrementalReader) -> TransferFeeAmount:
        return cls(r.read_u64())

    def _write(self, w: Writer) -> None:
        w.write_u64(self.withheld_amount)


# ---------------------------------------------------------------------------
# Authorities and flags
# ---------------------------------------------------------------------------


@dataclass
class MintCloseAuthority(Extension):
    close_authority: Pubkey | None

    EXTENSION_TYPE = ExtensionType.MINT_CLOSE_AUTHORITY
    STRUCT_SIZE = PUBKEY_SIZE

    @classmethod
    def _read(cls, r: IncrementalReader) -> MintCloseAuthority:
        return cls(r.read_zeroable_pubkey())

    def _write(self, w: Writer) -> None:
        w.write_zeroable_pubkey(self.close_authority)


@dataclass
class DefaultAccountState(Extension):
    state: AccountState

    EXTENSION_TYPE = ExtensionType.DEFAULT_ACCOUNT_STATE
    STRUCT_SIZE = 1
    REQUIRED_FIELDS = ("state",)

    @classmethod
    def _read(cls, r: IncrementalReader) -> DefaultAccountState:
        raw = r.read_u8()
        try:
            return cls(AccountState(raw))
        except ValueError:
            raise InvalidAccountDataError(f"invalid account state {raw}") from None

    def _write(self, w: Writer) -> None:
        w.write_u8(int(self.state))


@dataclass
class ImmutableOwner(Extension):
    EXTENSION_TYPE = ExtensionType.IMMUTABLE_OWNER
    STRUCT_SIZE = 0


@dataclass
class MemoTransfer(Extension):
    require_incoming_transfer_memos: bool

    EXTENSION_TYPE = ExtensionType.MEMO_TRANSFER
    STRUCT_SIZE = 1
    REQUIRED_FIELDS = ("require_incoming_transfer_memos",)

    @classmethod
    def _read(cls, r: IncrementalReader) -> MemoTransfer:
        return cls(r.read_bool())

    def _write(self, w: Writer) -> None:
        w.write_bool(self.require_incoming_transfer_memos)


@dataclass
class NonTransferable(Extension):
    EXTENSION_TYPE = ExtensionType.NON_TRANSFERABLE
    STRUCT_SIZE = 0


@dataclass
class NonTransferableAccount(Extension):
    EXTENSION_TYPE = ExtensionType.NON_TRANSFERABLE_ACCOUNT
    STRUCT_SIZE = 0


@dataclass
class CpiGuard(Extension):
    lock_cpi: bool

    EXTENSION_TYPE = ExtensionType.CPI_GUARD
    STRUCT_SIZE = 1
    REQUIRED_FIELDS = ("lock_cpi",)

    @classmethod
    def _read(cls, r: IncrementalReader) -> CpiGuard:
        return cls(r.read_bool())

    def _write(self, w: Writer) -> None:
        w.write_bool(self.lock_cpi)


@dataclass
class PermanentDelegate(Extension):
    delegate: Pubkey | None

    EXTENSION_TYPE = ExtensionType.PERMANENT_DELEGATE
    STRUCT_SIZE = PUBKEY_SIZE

    @classmethod
    def _read(cls, r: IncrementalReader) -> PermanentDelegate:
        return cls(r.read_zeroable_pubkey())

    def _write(self, w: Writer) -> None:
        w.write_zeroable_pubkey(self.delegate)


@dataclass
class TransferHook(Extension):
    authority: Pubkey | None
    program_id: Pubkey | None

    EXTENSION_TYPE = ExtensionType.TRANSFER_HOOK
    STRUCT_SIZE = 64

    @classmethod
    def _read(cls, r: IncrementalReader) -> TransferHook:
        return cls(r.read_zeroable_pubkey(), r.read_zeroable_pubkey())

    def _write(self, w: Writer) -> None:
        w.write_zeroable_pubkey(self.authority)
        w.write_zeroable_pubkey(self.program_id)


@dataclass
class TransferHookAccount(Extension):
    transferring: bool

    EXTENSION_TYPE = ExtensionType.TRANSFER_HOOK_ACCOUNT
    STRUCT_SIZE = 1
    REQUIRED_FIELDS = ("transferring",)

    @classmethod
    def _read(cls, r: IncrementalReader) -> TransferHookAccount:
        return cls(r.read_bool())

    def _write(self, w: Writer) -> None:
        w.write_bool(self.transferring)


@dataclass
class PausableConfig(Extension):
    authority: Pubkey | None
    paused: bool

    EXTENSION_TYPE = ExtensionType.PAUSABLE_CONFIG
    STRUCT_SIZE = 33
    REQUIRED_FIELDS = ("paused",)

    @classmethod
    def _read(cls, r: IncrementalReader) -> PausableConfig:
        return cls(r.read_zeroable_pubkey(), r.read_bool())

    def _write(self, w: Writer) -> None:
        w.write_zeroable_pubkey(self.authority)
        w.write_bool(self.paused)


@dataclass
class PausableAccount(Extension):
    EXTENSION_TYPE = ExtensionType.PAUSABLE_ACCOUNT
    STRUCT_SIZE = 0


@dataclass
class PermissionedBurn(Extension):
    authority: Pubkey | None

    EXTENSION_TYPE = ExtensionType.PERMISSIONED_BURN
    STRUCT_SIZE = PUBKEY_SIZE

    @classmethod
    def _read(cls, r: IncrementalReader) -> PermissionedBurn:
        return cls(r.read_zeroable_pubkey())

    def _write(self, w: Writer) -> None:
        w.write_zeroable_pubkey(self.authority)


@dataclass
class PermissionedBurnAccount(Extension):
    EXTENSION_TYPE = ExtensionType.PERMISSIONED_BURN_ACCOUNT
    STRUCT_SIZE = 0


# ---------------------------------------------------------------------------
# UI amount configs
# ---------------------------------------------------------------------------


@dataclass
class InterestBearingConfig(Extension):
    rate_authority: Pubkey | None
    initialization_timestamp: int  # i64 unix seconds
    pre_update_average_rate: int  # i16 basis points
    last_update_timestamp: int  # i64 unix seconds
    current_rate: int  # i16 basis points

    EXTENSION_TYPE = ExtensionType.INTEREST_BEARING_CONFIG
    STRUCT_SIZE = 52  # 32+8+2+8+2
    REQUIRED_FIELDS = (
        "initialization_timestamp",
        "pre_update_average_rate",
        "last_update_timestamp",
        "current_rate",
    )

    @classmethod
    def _read(cls, r: IncrementalReader) -> InterestBearingConfig:
        return cls(
            rate_authority=r.read_zeroable_pubkey(),
            initialization_timestamp=r.read_i64(),
            pre_update_average_rate=r.read_i16(),
            last_update_timestamp=r.read_i64(),
            current_rate=r.read_i16(),
        )

    def _write(self, w: Writer) -> None:
        w.write_zeroable_pubkey(self.rate_authority)
        w.write_i64(self.initialization_timestamp)
        w.write_i16(self.pre_update_average_rate)
        w.write_i64(self.last_update_timestamp)
        w.write_i16(self.current_rate)


@dataclass
class ScaledUiAmountConfig(Extension):
    authority: Pubkey | None
    multiplier: float  # f64
    new_multiplier_effective_timestamp: int  # i64 unix seconds
    new_multiplier: float  # f64

    EXTENSION_TYPE = ExtensionType.SCALED_UI_AMOUNT_CONFIG
    STRUCT_SIZE = 56  # 32+8+8+8
    REQUIRED_FIELDS = ("multiplier", "new_multiplier_effective_timestamp", "new_multiplier")

    @classmethod
    def _read(cls, r: IncrementalReader) -> ScaledUiAmountConfig:
        return cls(
            authority=r.read_zeroable_pubkey(),
            multiplier=r.read_f64(),
            new_multiplier_effective_timestamp=r.read_i64(),
            new_multiplier=r.read_f64(),
        )

    def _write(self, w: Writer) -> None:
        w.write_zeroable_pubkey(self.authority)
        w.write_f64(self.multiplier)
        w.write_i64(self.new_multiplier_effective_timestamp)
        w.write_f64(self.new_multiplier)

    def current_multiplier(self, unix_timestamp: int) -> float:
        if unix_timestamp >= self.new_multiplier_effective_timestamp:
            return self.new_multiplier
        return self.multiplier


# ---------------------------------------------------------------------------
# Confidential transfers (ciphertexts are carried opaquely)
# ---------------------------------------------------------------------------


@dataclass
class ConfidentialTransferMint(Extension):
    authority: Pubkey | None
    auto_approve_new_accounts: bool
    auditor_elgamal_pubkey: ElGamalPubkey | None

    EXTENSION_TYPE = ExtensionType.CONFIDENTIAL_TRANSFER_MINT
    STRUCT_SIZE = 65  # 32+1+32
    REQUIRED_FIELDS = ("auto_approve_new_accounts",)

    @classmethod
    def _read(cls, r: IncrementalReader) -> ConfidentialTransferMint:
        return cls(
            authority=r.read_zeroable_pubkey(),
            auto_approve_new_accounts=r.read_bool(),
            auditor_elgamal_pubkey=_read_zeroable_elgamal_pubkey(r),
        )

    def _write(self, w: Writer) -> None:
        w.write_zeroable_pubkey(self.authority)
        w.write_bool(self.auto_approve_new_accounts)
        _write_zeroable_elgamal_pubkey(w, self.auditor_elgamal_pubkey)


@dataclass
class ConfidentialTransferAccount(Extension):
    approved: bool
    elgamal_pubkey: ElGamalPubkey
    pending_balance_lo: ElGamalCiphertext
    pending_balance_hi: ElGamalCiphertext
    available_balance: ElGamalCiphertext
    decryptable_available_balance: AeCiphertext
    allow_confidential_credits: bool
    allow_non_confidential_credits: bool
    pending_balance_credit_counter: int  # u64
    maximum_pending_balance_credit_counter: int  # u64
    expected_pending_balance_credit_counter: int  # u64
    actual_pending_balance_credit_counter: int  # u64

    EXTENSION_TYPE = ExtensionType.CONFIDENTIAL_TRANSFER_ACCOUNT
    STRUCT_SIZE = 295  # 1+32+3*64+36+1+1+4*8
    REQUIRED_FIELDS = (
        "approved",
        "elgamal_pubkey",
        "pending_balance_lo",
        "pending_balance_hi",
        "available_balance",
        "decryptable_available_balance",
        "allow_confidential_credits",
        "allow_non_confidential_credits",
        "pending_balance_credit_counter",
        "maximum_pending_balance_credit_counter",
        "expected_pending_balance_credit_counter",
        "actual_pending_balance_credit_counter",
    )

    @classmethod
    def _read(cls, r: IncrementalReader) -> ConfidentialTransferAccount:
        return cls(
            approved=r.read_bool(),
            elgamal_pubkey=_read_elgamal_pubkey(r),
            pending_balance_lo=_read_ciphertext(r),
            pending_balance_hi=_read_ciphertext(r),
            available_balance=_read_ciphertext(r),
            decryptable_available_balance=_read_ae_ciphertext(r),
            allow_confidential_credits=r.read_bool(),
            allow_non_confidential_credits=r.read_bool(),
            pending_balance_credit_counter=r.read_u64(),
            maximum_pending_balance_credit_counter=r.read_u64(),
            expected_pending_balance_credit_counter=r.read_u64(),
            actual_pending_balance_credit_counter=r.read_u64(),
        )

    def _write(self, w: Writer) -> None:
        w.write_bool(self.approved)
        w.write_bytes(bytes(self.elgamal_pubkey), ElGamalPubkey.SIZE)
        w.write_bytes(bytes(self.pending_balance_lo), ElGamalCiphertext.SIZE)
        w.write_bytes(bytes(self.pending_balance_hi), ElGamalCiphertext.SIZE)
        w.write_bytes(bytes(self.available_balance), ElGamalCiphertext.SIZE)
        w.write_bytes(bytes(self.decryptable_available_balance), AeCiphertext.SIZE)
        w.write_bool(self.allow_confidential_credits)
        w.write_bool(self.allow_non_confidential_credits)
        w.write_u64(self.pending_balance_credit_counter)
        w.write_u64(self.maximum_pending_balance_credit_counter)
        w.write_u64(self.expected_pending_balance_credit_counter)
        w.write_u64(self.actual_pending_balance_credit_counter)


@dataclass
class ConfidentialTransferFeeConfig(Extension):
    authority: Pubkey | None
    withdraw_withheld_authority_elgamal_pubkey: ElGamalPubkey
    harvest_to_mint_enabled: bool
    withheld_amount: ElGamalCiphertext

    EXTENSION_TYPE = ExtensionType.CONFIDENTIAL_TRANSFER_FEE_CONFIG
    STRUCT_SIZE = 129  # 32+32+1+64
    REQUIRED_FIELDS = (
        "withdraw_withheld_authority_elgamal_pubkey",
        "harvest_to_mint_enabled",
        "withheld_amount",
    )

    @classmethod
    def _read(cls, r: IncrementalReader) -> ConfidentialTransferFeeConfig:
        return cls(
            authority=r.read_zeroable_pubkey(),
            withdraw_withheld_authority_elgamal_pubkey=_read_elgamal_pubkey(r),
            harvest_to_mint_enabled=r.read_bool(),
            withheld_amount=_read_ciphertext(r),
        )

    def _write(self, w: Writer) -> None:
        w.write_zeroable_pubkey(self.authority)
        w.write_bytes(bytes(self.withdraw_withheld_authority_elgamal_pubkey), ElGamalPubkey.SIZE)
        w.write_bool(self.harvest_to_mint_enabled)
        w.write_bytes(bytes(self.withheld_amount), ElGamalCiphertext.SIZE)


@dataclass
class ConfidentialTransferFeeAmount(Extension):
    withheld_amount: ElGamalCiphertext

    EXTENSION_TYPE = ExtensionType.CONFIDENTIAL_TRANSFER_FEE_AMOUNT
    STRUCT_SIZE = 64
    REQUIRED_FIELDS = ("withheld_amount",)

    @classmethod
    def _read(cls, r: IncrementalReader) -> ConfidentialTransferFeeAmount:
        return cls(_read_ciphertext(r))

    def _write(self, w: Writer) -> None:
        w.write_bytes(bytes(self.withheld_amount), ElGamalCiphertext.SIZE)


@dataclass
class ConfidentialMintBurn(Extension):
    confidential_supply: ElGamalCiphertext
    decryptable_supply: AeCiphertext
    supply_elgamal_pubkey: ElGamalPubkey
    pending_burn: ElGamalCiphertext

    EXTENSION_TYPE = ExtensionType.CONFIDENTIAL_MINT_BURN
    STRUCT_SIZE = 196  # 64+36+32+64
    REQUIRED_FIELDS = (
        "confidential_supply",
        "decryptable_supply",
        "supply_elgamal_pubkey",
        "pending_burn",
    )

    @classmethod
    def _read(cls, r: IncrementalReader) -> ConfidentialMintBurn:
        return cls(
            confidential_supply=_read_ciphertext(r),
            decryptable_supply=_read_ae_ciphertext(r),
            supply_elgamal_pubkey=_read_elgamal_pubkey(r),
            pending_burn=_read_ciphertext(r),
        )

    def _write(self, w: Writer) -> None:
        w.write_bytes(bytes(self.confidential_supply), ElGamalCiphertext.SIZE)
        w.write_bytes(bytes(self.decryptable_supply), AeCiphertext.SIZE)
        w.write_bytes(bytes(self.supply_elgamal_pubkey), ElGamalPubkey.SIZE)
        w.write_bytes(bytes(self.pending_burn), ElGamalCiphertext.SIZE)


# ---------------------------------------------------------------------------
# Metadata and groups
# ---------------------------------------------------------------------------


@dataclass
class MetadataPointer(Extension):
    authority: Pubkey | None
    metadata_address: Pubkey | None

    EXTENSION_TYPE = ExtensionType.METADATA_POINTER
    STRUCT_SIZE = 64

    @classmethod
    def _read(cls, r: IncrementalReader) -> MetadataPointer:
        return cls(r.read_zeroable_pubkey(), r.read_zeroable_pubkey())

    def _write(self, w: Writer) -> None:
        w.write_zeroable_pubkey(self.authority)
        w.write_zeroable_pubkey(self.metadata_address)


@dataclass
class GroupPointer(Extension):
    authority: Pubkey | None
    group_address: Pubkey | None

    EXTENSION_TYPE = ExtensionType.GROUP_POINTER
    STRUCT_SIZE = 64

    @classmethod
    def _read(cls, r: IncrementalReader) -> GroupPointer:
        return cls(r.read_zeroable_pubkey(), r.read_zeroable_pubkey())

    def _write(self, w: Writer) -> None:
        w.write_zeroable_pubkey(self.authority)
        w.write_zeroable_pubkey(self.group_address)


@dataclass
class GroupMemberPointer(Extension):
    authority: Pubkey | None
    member_address: Pubkey | None

    EXTENSION_TYPE = ExtensionType.GROUP_MEMBER_POINTER
    STRUCT_SIZE = 64

    @classmethod
    def _read(cls, r: IncrementalReader) -> GroupMemberPointer:
        return cls(r.read_zeroable_pubkey(), r.read_zeroable_pubkey())

    def _write(self, w: Writer) -> None:
        w.write_zeroable_pubkey(self.authority)
        w.write_zeroable_pubkey(self.member_address)


@dataclass
class TokenMetadata(Extension):
    """Variable-length metadata stored directly in the mint.

    ``additional_metadata`` is an ordered list of (key, value) pairs; the
    order on the wire is preserved across decode and encode.
    """

    update_authority: Pubkey | None
    mint: Pubkey
    name: str
    symbol: str
    uri: str
    additional_metadata: list[tuple[str, str]] = field(default_factory=list)

    EXTENSION_TYPE = ExtensionType.TOKEN_METADATA
    STRUCT_SIZE = None
    REQUIRED_FIELDS = ("mint", "name", "symbol", "uri", "additional_metadata")

    @property
    def size(self) -> int:
        self.check_required_fields()
        n = 2 * PUBKEY_SIZE
        n += encoded_string_size(self.name)
        n += encoded_string_size(self.symbol)
        n += encoded_string_size(self.uri)
        n += 4
        for key, value in self.additional_metadata:
            n += encoded_string_size(key) + encoded_string_size(value)
        return n

    @classmethod
    def _read(cls, r: IncrementalReader) -> TokenMetadata:
        update_authority = r.read_zeroable_pubkey()
        mint = r.read_pubkey()
        name = r.read_string()
        symbol = r.read_string()
        uri = r.read_string()
        count = r.read_u32()
        additional = []
        for _ in range(count):
            key = r.read_string()
            additional.append((key, r.read_string()))
        return cls(update_authority, mint, name, symbol, uri, additional)

    def _write(self, w: Writer) -> None:
        w.write_zeroable_pubkey(self.update_authority)
        w.write_pubkey(self.mint)
        w.write_string(self.name)
        w.write_string(self.symbol)
        w.write_string(self.uri)
        w.write_u32(len(self.additional_metadata))
        for key, value in self.additional_metadata:
            w.write_string(key)
            w.write_string(value)


@dataclass
class TokenGroup(Extension):
    update_authority: Pubkey | None
    mint: Pubkey
    group_size: int  # u64 current member count
    max_size: int  # u64

    EXTENSION_TYPE = ExtensionType.TOKEN_GROUP
    STRUCT_SIZE = 80  # 32+32+8+8
    REQUIRED_FIELDS = ("mint", "group_size", "max_size")

    @classmethod
    def _read(cls, r: IncrementalReader) -> TokenGroup:
        return cls(r.read_zeroable_pubkey(), r.read_pubkey(), r.read_u64(), r.read_u64())

    def _write(self, w: Writer) -> None:
        w.write_zeroable_pubkey(self.update_authority)
        w.write_pubkey(self.mint)
        w.write_u64(self.group_size)
        w.write_u64(self.max_size)


@dataclass
class TokenGroupMember(Extension):
    mint: Pubkey
    group: Pubkey
    member_number: int  # u64

    EXTENSION_TYPE = ExtensionType.TOKEN_GROUP_MEMBER
    STRUCT_SIZE = 72  # 32+32+8
    REQUIRED_FIELDS = ("mint", "group", "member_number")

    @classmethod
    def _read(cls, r: IncrementalReader) -> TokenGroupMember:
        return cls(r.read_pubkey(), r.read_pubkey(), r.read_u64())

    def _write(self, w: Writer) -> None:
        w.write_pubkey(self.mint)
        w.write_pubkey(self.group)
        w.write_u64(self.member_number)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@dataclass
class UnparsedExtension:
    """A TLV record whose type this package does not know, kept verbatim."""

    extension_type: int
    data: bytes

    def __post_init__(self) -> None:
        # Type 0 marks trailing padding and would end the scan on decode.
        if not 0 < self.extension_type <= 0xFFFF:
            raise InvalidAccountDataError(
                f"extension type {self.extension_type} cannot be stored in a TLV record"
            )
        if len(self.data) > 0xFFFF:
            raise InvalidAccountDataError(
                f"extension payload of {len(self.data)} bytes exceeds the u16 length field"
            )

    @property
    def size(self) -> int:
        return len(self.data)

    def to_bytes(self) -> bytes:
        return bytes(self.data)


ExtensionRecord = Union[Extension, UnparsedExtension]

EXTENSION_CLASSES: dict[ExtensionType, type[Extension]] = {
    cls.EXTENSION_TYPE: cls
    for cls in (
        TransferFeeConfig,
        TransferFeeAmount,
        MintCloseAuthority,
        ConfidentialTransferMint,
        ConfidentialTransferAccount,
        DefaultAccountState,
        ImmutableOwner,
        MemoTransfer,
        NonTransferable,
        InterestBearingConfig,
        CpiGuard,
        PermanentDelegate,
        NonTransferableAccount,
        TransferHook,
        TransferHookAccount,
        ConfidentialTransferFeeConfig,
        ConfidentialTransferFeeAmount,
        MetadataPointer,
        TokenMetadata,
        GroupPointer,
        TokenGroup,
        GroupMemberPointer,
        TokenGroupMember,
        ConfidentialMintBurn,
        ScaledUiAmountConfig,
        PausableConfig,
        PausableAccount,
        PermissionedBurn,
        PermissionedBurnAccount,
    )
}

_missing = set(ExtensionType) - set(EXTENSION_CLASSES) - {ExtensionType.UNINITIALIZED}
if _missing:
    raise RuntimeError(f"extension types without a layout: {sorted(_missing)}")


def get_extension_size(extension_type: ExtensionType) -> int | None:
    """Fixed payload length for ``extension_type``; None when it varies."""
    try:
        cls = EXTENSION_CLASSES.get(ExtensionType(extension_type))
    except ValueError:
        cls = None
    if cls is None:
        raise InvalidAccountDataError(f"extension type {int(extension_type)} has no known layout")
    return cls.STRUCT_SIZE


def decode_extension(extension_type: int, data: bytes) -> ExtensionRecord:
    try:
        cls = EXTENSION_CLASSES.get(ExtensionType(extension_type))
    except ValueError:
        cls = None
    if cls is None:
        return UnparsedExtension(extension_type, bytes(data))
    return cls.from_bytes(data)
