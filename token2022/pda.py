"""Address derivation for associated token accounts and native mints."""

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from token2022.config import ASSOCIATED_TOKEN_PROGRAM_ID, TOKEN_2022_PROGRAM_ID

SEED_NATIVE_MINT = b"native-mint"
NATIVE_MINT_BUMP = 255


def derive_associated_token_address(
    owner: Pubkey,
    mint: Pubkey,
    token_program_id: Pubkey | None = None,
) -> tuple[Pubkey, int]:
    """Associated token account of ``owner`` for ``mint`` under a token program."""
    if token_program_id is None:
        token_program_id = Pubkey.from_string(TOKEN_2022_PROGRAM_ID)
    return Pubkey.find_program_address(
        [bytes(owner), bytes(token_program_id), bytes(mint)],
        Pubkey.from_string(ASSOCIATED_TOKEN_PROGRAM_ID),
    )


def derive_native_mint_address(program_id: Pubkey | None = None) -> Pubkey:
    """Wrapped SOL mint owned by ``program_id``, created with a fixed bump."""
    if program_id is None:
        program_id = Pubkey.from_string(TOKEN_2022_PROGRAM_ID)
    return Pubkey.create_program_address(
        [SEED_NATIVE_MINT, bytes([NATIVE_MINT_BUMP])], program_id
    )
