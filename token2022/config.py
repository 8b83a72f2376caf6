"""Network configuration and well-known addresses for the token programs."""

PROGRAM_IDS = {
    "token": "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA",
    "token-2022": "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb",
}

TOKEN_PROGRAM_ID = PROGRAM_IDS["token"]
TOKEN_2022_PROGRAM_ID = PROGRAM_IDS["token-2022"]

ASSOCIATED_TOKEN_PROGRAM_ID = "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"

# Wrapped SOL mints. The 2022 variant is a program address of the 2022 program.
NATIVE_MINT = "So11111111111111111111111111111111111111112"
NATIVE_MINT_2022 = "9pan9bMn5HatX4EJdBwg9VgCa7Uz5HL8N1m5D3NdXejP"

SYSVAR_CLOCK_ID = "SysvarC1ock11111111111111111111111111111111"

SOLANA_RPC_URLS = {
    "mainnet-beta": "https://api.mainnet-beta.solana.com",
    "testnet": "https://api.testnet.solana.com",
    "devnet": "https://api.devnet.solana.com",
    "localnet": "http://localhost:8899",
}
