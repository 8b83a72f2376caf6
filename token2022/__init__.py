from token2022.amount import (
    amount_to_ui_amount_for_interest_bearing_mint,
    amount_to_ui_amount_for_mint,
    amount_to_ui_amount_for_scaled_ui_amount_mint,
    calculate_total_scale,
    format_ui_amount,
    get_scaled_ui_multiplier,
    ui_amount_to_amount_for_interest_bearing_mint,
    ui_amount_to_amount_for_mint,
    ui_amount_to_amount_for_scaled_ui_amount_mint,
)
from token2022.client import Client
from token2022.config import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    NATIVE_MINT,
    NATIVE_MINT_2022,
    PROGRAM_IDS,
    SOLANA_RPC_URLS,
    SYSVAR_CLOCK_ID,
    TOKEN_2022_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)
from token2022.errors import (
    AccountNotFoundError,
    AccountNotInitializedError,
    BufferTooShortError,
    InvalidAccountDataError,
    InvalidAccountOwnerError,
    InvalidAccountSizeError,
    InvalidAccountTypeError,
    InvalidOptionDiscriminantError,
    InvalidTimespanError,
    InvalidUiAmountError,
    MissingExtensionFieldError,
    TokenError,
    TruncatedExtensionDataError,
)
from token2022.extension_type import (
    AccountState,
    AccountType,
    ExtensionType,
    get_required_account_extensions,
)
from token2022.extensions import (
    EXTENSION_CLASSES,
    ConfidentialMintBurn,
    ConfidentialTransferAccount,
    ConfidentialTransferFeeAmount,
    ConfidentialTransferFeeConfig,
    ConfidentialTransferMint,
    CpiGuard,
    DefaultAccountState,
    Extension,
    ExtensionRecord,
    GroupMemberPointer,
    GroupPointer,
    ImmutableOwner,
    InterestBearingConfig,
    MemoTransfer,
    MetadataPointer,
    MintCloseAuthority,
    NonTransferable,
    NonTransferableAccount,
    PausableAccount,
    PausableConfig,
    PermanentDelegate,
    PermissionedBurn,
    PermissionedBurnAccount,
    ScaledUiAmountConfig,
    TokenGroup,
    TokenGroupMember,
    TokenMetadata,
    TransferFee,
    TransferFeeAmount,
    TransferFeeConfig,
    TransferHook,
    TransferHookAccount,
    UnparsedExtension,
    decode_extension,
    get_extension_size,
)
from token2022.pda import derive_associated_token_address, derive_native_mint_address
from token2022.pod import AeCiphertext, ElGamalCiphertext, ElGamalPubkey
from token2022.rpc import new_rpc_client
from token2022.size import (
    get_account_len_for_mint,
    get_mint_size,
    get_size_for_extension_types,
    get_token_size,
)
from token2022.state import Account, Clock, Mint, Multisig
from token2022.tlv import (
    decode_extensions,
    decode_tlv,
    encode_extensions,
    get_extension,
    get_extension_types,
)

__all__ = [
    "Client",
    "new_rpc_client",
    "ASSOCIATED_TOKEN_PROGRAM_ID",
    "NATIVE_MINT",
    "NATIVE_MINT_2022",
    "PROGRAM_IDS",
    "SOLANA_RPC_URLS",
    "SYSVAR_CLOCK_ID",
    "TOKEN_2022_PROGRAM_ID",
    "TOKEN_PROGRAM_ID",
    "Account",
    "AccountState",
    "AccountType",
    "Clock",
    "Mint",
    "Multisig",
    "ExtensionType",
    "Extension",
    "ExtensionRecord",
    "EXTENSION_CLASSES",
    "UnparsedExtension",
    "ConfidentialMintBurn",
    "ConfidentialTransferAccount",
    "ConfidentialTransferFeeAmount",
    "ConfidentialTransferFeeConfig",
    "ConfidentialTransferMint",
    "CpiGuard",
    "DefaultAccountState",
    "GroupMemberPointer",
    "GroupPointer",
    "ImmutableOwner",
    "InterestBearingConfig",
    "MemoTransfer",
    "MetadataPointer",
    "MintCloseAuthority",
    "NonTransferable",
    "NonTransferableAccount",
    "PausableAccount",
    "PausableConfig",
    "PermanentDelegate",
    "PermissionedBurn",
    "PermissionedBurnAccount",
    "ScaledUiAmountConfig",
    "TokenGroup",
    "TokenGroupMember",
    "TokenMetadata",
    "TransferFee",
    "TransferFeeAmount",
    "TransferFeeConfig",
    "TransferHook",
    "TransferHookAccount",
    "AeCiphertext",
    "ElGamalCiphertext",
    "ElGamalPubkey",
    "decode_extension",
    "decode_extensions",
    "decode_tlv",
    "encode_extensions",
    "get_extension",
    "get_extension_size",
    "get_extension_types",
    "get_required_account_extensions",
    "get_account_len_for_mint",
    "get_mint_size",
    "get_size_for_extension_types",
    "get_token_size",
    "amount_to_ui_amount_for_interest_bearing_mint",
    "amount_to_ui_amount_for_mint",
    "amount_to_ui_amount_for_scaled_ui_amount_mint",
    "calculate_total_scale",
    "format_ui_amount",
    "get_scaled_ui_multiplier",
    "ui_amount_to_amount_for_interest_bearing_mint",
    "ui_amount_to_amount_for_mint",
    "ui_amount_to_amount_for_scaled_ui_amount_mint",
    "derive_associated_token_address",
    "derive_native_mint_address",
    "TokenError",
    "AccountNotFoundError",
    "AccountNotInitializedError",
    "BufferTooShortError",
    "InvalidAccountDataError",
    "InvalidAccountOwnerError",
    "InvalidAccountSizeError",
    "InvalidAccountTypeError",
    "InvalidOptionDiscriminantError",
    "InvalidTimespanError",
    "InvalidUiAmountError",
    "MissingExtensionFieldError",
    "TruncatedExtensionDataError",
]
