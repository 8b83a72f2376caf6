"""Account size calculator tests."""

import pytest
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from token2022.errors import InvalidAccountDataError, MissingExtensionFieldError
from token2022.extension_type import ExtensionType, get_required_account_extensions
from token2022.extensions import (
    ConfidentialTransferFeeConfig,
    ImmutableOwner,
    InterestBearingConfig,
    MintCloseAuthority,
    PausableConfig,
    PermissionedBurn,
    TokenMetadata,
    TransferFee,
    TransferFeeAmount,
    TransferFeeConfig,
    TransferHook,
)
from token2022.pod import ElGamalCiphertext, ElGamalPubkey
from token2022.size import (
    get_account_len_for_mint,
    get_mint_size,
    get_size_for_extension_types,
    get_token_size,
)
from token2022.state import Mint

AUTHORITY = Pubkey.from_string("FdrdFuo1RQ9LrQ3FRfQUE7RigyANe5kFNLyMhCYk1xgJ")


def _mint(extensions) -> Mint:
    return Mint(AUTHORITY, 0, 0, True, None, extensions)


def _transfer_fee_config() -> TransferFeeConfig:
    fee = TransferFee(0, 0, 0)
    return TransferFeeConfig(None, None, 0, fee, fee)


class TestMintSize:
    def test_plain(self):
        assert get_mint_size() == 82
        assert get_mint_size(None) == 82

    def test_empty_extensions(self):
        assert get_mint_size([]) == 166

    def test_close_authority(self):
        assert get_mint_size([MintCloseAuthority(AUTHORITY)]) == 166 + 36

    def test_transfer_hook(self):
        assert get_mint_size([TransferHook(AUTHORITY, AUTHORITY)]) == 166 + 68

    def test_variable_metadata(self):
        md = TokenMetadata(AUTHORITY, AUTHORITY, "Name", "SYM", "uri", [("k", "v")])
        assert get_mint_size([md]) == 166 + 4 + md.size == 166 + len(md.to_bytes()) + 4

    def test_multisig_collision_bumped(self):
        exts = [
            ConfidentialTransferFeeConfig(
                None, ElGamalPubkey.zeroed(), False, ElGamalCiphertext.zeroed()
            ),
            InterestBearingConfig(None, 0, 0, 0, 0),
        ]
        # 166 + (4 + 129) + (4 + 52) == 355
        assert get_mint_size(exts) == 356
        assert len(_mint(exts).to_bytes()) == 356


class TestTokenSize:
    def test_plain(self):
        assert get_token_size(None) == 165

    def test_empty_extensions(self):
        assert get_token_size([]) == 166

    def test_immutable_owner(self):
        assert get_token_size([ImmutableOwner()]) == 170

    def test_transfer_fee_amount(self):
        assert get_token_size([ImmutableOwner(), TransferFeeAmount(0)]) == 170 + 12


class TestAccountLenForMint:
    def test_required_extensions(self):
        assert get_required_account_extensions(
            [ExtensionType.TRANSFER_FEE_CONFIG, ExtensionType.MINT_CLOSE_AUTHORITY, ExtensionType.PAUSABLE_CONFIG]
        ) == [ExtensionType.TRANSFER_FEE_AMOUNT, ExtensionType.PAUSABLE_ACCOUNT]

    def test_no_requirements(self):
        assert get_account_len_for_mint(_mint(None)) == 165
        assert get_account_len_for_mint(_mint([])) == 165
        assert get_account_len_for_mint(_mint([MintCloseAuthority(AUTHORITY)])) == 165

    def test_pausable(self):
        assert get_account_len_for_mint(_mint([PausableConfig(AUTHORITY, False)])) == 170

    def test_fees_and_permissioned_burn(self):
        mint = _mint([_transfer_fee_config(), PermissionedBurn(AUTHORITY)])
        assert get_account_len_for_mint(mint) == 166 + 12 + 4

    def test_variable_size_type_rejected(self):
        with pytest.raises(InvalidAccountDataError):
            get_size_for_extension_types([ExtensionType.TOKEN_METADATA])

    def test_unregistered_type_rejected(self):
        with pytest.raises(InvalidAccountDataError):
            get_size_for_extension_types([ExtensionType.UNINITIALIZED])


class TestIncompleteExtensions:
    def test_metadata_missing_name(self):
        with pytest.raises(MissingExtensionFieldError):
            get_mint_size([TokenMetadata(None, AUTHORITY, None, "", "")])
