"""Extension and account type discriminants.

Values are part of the on-chain wire format and are never renumbered.
"""

from __future__ import annotations

from enum import IntEnum


class AccountType(IntEnum):
    """Tag byte stored at offset 165 of every extended account."""

    UNINITIALIZED = 0
    MINT = 1
    ACCOUNT = 2

    def __str__(self) -> str:
        _names = {0: "uninitialized", 1: "mint", 2: "account"}
        return _names.get(self.value, "unknown")


class AccountState(IntEnum):
    UNINITIALIZED = 0
    INITIALIZED = 1
    FROZEN = 2

    def __str__(self) -> str:
        _names = {0: "uninitialized", 1: "initialized", 2: "frozen"}
        return _names.get(self.value, "unknown")


class ExtensionType(IntEnum):
    UNINITIALIZED = 0
    TRANSFER_FEE_CONFIG = 1
    TRANSFER_FEE_AMOUNT = 2
    MINT_CLOSE_AUTHORITY = 3
    CONFIDENTIAL_TRANSFER_MINT = 4
    CONFIDENTIAL_TRANSFER_ACCOUNT = 5
    DEFAULT_ACCOUNT_STATE = 6
    IMMUTABLE_OWNER = 7
    MEMO_TRANSFER = 8
    NON_TRANSFERABLE = 9
    INTEREST_BEARING_CONFIG = 10
    CPI_GUARD = 11
    PERMANENT_DELEGATE = 12
    NON_TRANSFERABLE_ACCOUNT = 13
    TRANSFER_HOOK = 14
    TRANSFER_HOOK_ACCOUNT = 15
    CONFIDENTIAL_TRANSFER_FEE_CONFIG = 16
    CONFIDENTIAL_TRANSFER_FEE_AMOUNT = 17
    METADATA_POINTER = 18
    TOKEN_METADATA = 19
    GROUP_POINTER = 20
    TOKEN_GROUP = 21
    GROUP_MEMBER_POINTER = 22
    TOKEN_GROUP_MEMBER = 23
    CONFIDENTIAL_MINT_BURN = 24
    SCALED_UI_AMOUNT_CONFIG = 25
    PAUSABLE_CONFIG = 26
    PAUSABLE_ACCOUNT = 27
    PERMISSIONED_BURN = 28
    PERMISSIONED_BURN_ACCOUNT = 29


MINT_EXTENSION_TYPES = frozenset(
    {
        ExtensionType.TRANSFER_FEE_CONFIG,
        ExtensionType.MINT_CLOSE_AUTHORITY,
        ExtensionType.CONFIDENTIAL_TRANSFER_MINT,
        ExtensionType.DEFAULT_ACCOUNT_STATE,
        ExtensionType.NON_TRANSFERABLE,
        ExtensionType.INTEREST_BEARING_CONFIG,
        ExtensionType.PERMANENT_DELEGATE,
        ExtensionType.TRANSFER_HOOK,
        ExtensionType.CONFIDENTIAL_TRANSFER_FEE_CONFIG,
        ExtensionType.METADATA_POINTER,
        ExtensionType.TOKEN_METADATA,
        ExtensionType.GROUP_POINTER,
        ExtensionType.TOKEN_GROUP,
        ExtensionType.GROUP_MEMBER_POINTER,
        ExtensionType.TOKEN_GROUP_MEMBER,
        ExtensionType.CONFIDENTIAL_MINT_BURN,
        ExtensionType.SCALED_UI_AMOUNT_CONFIG,
        ExtensionType.PAUSABLE_CONFIG,
        ExtensionType.PERMISSIONED_BURN,
    }
)

ACCOUNT_EXTENSION_TYPES = frozenset(
    {
        ExtensionType.TRANSFER_FEE_AMOUNT,
        ExtensionType.CONFIDENTIAL_TRANSFER_ACCOUNT,
        ExtensionType.IMMUTABLE_OWNER,
        ExtensionType.MEMO_TRANSFER,
        ExtensionType.CPI_GUARD,
        ExtensionType.NON_TRANSFERABLE_ACCOUNT,
        ExtensionType.TRANSFER_HOOK_ACCOUNT,
        ExtensionType.CONFIDENTIAL_TRANSFER_FEE_AMOUNT,
        ExtensionType.PAUSABLE_ACCOUNT,
        ExtensionType.PERMISSIONED_BURN_ACCOUNT,
    }
)

# Mint extensions that force a companion extension onto every token account
# initialized for that mint.
REQUIRED_ACCOUNT_EXTENSIONS = {
    ExtensionType.TRANSFER_FEE_CONFIG: ExtensionType.TRANSFER_FEE_AMOUNT,
    ExtensionType.NON_TRANSFERABLE: ExtensionType.NON_TRANSFERABLE_ACCOUNT,
    ExtensionType.TRANSFER_HOOK: ExtensionType.TRANSFER_HOOK_ACCOUNT,
    ExtensionType.PAUSABLE_CONFIG: ExtensionType.PAUSABLE_ACCOUNT,
    ExtensionType.PERMISSIONED_BURN: ExtensionType.PERMISSIONED_BURN_ACCOUNT,
}


def get_required_account_extensions(
    mint_extension_types: list[ExtensionType],
) -> list[ExtensionType]:
    """Account extension types implied by a mint's extensions, in order, once each."""
    out: list[ExtensionType] = []
    for t in mint_extension_types:
        required = REQUIRED_ACCOUNT_EXTENSIONS.get(t)
        if required is not None and required not in out:
            out.append(required)
    return out
