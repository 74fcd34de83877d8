"""
Outcry protocol constants.

Program ids, PDA seeds and derivation limits shared by the
on-chain program and its clients.
"""

# Program IDs
PROGRAM_ID = "J7r5mzvVUjSNQteoqn6Hd3LjZ3ksmwoD5xsnUvMJwPZo"
TOKEN_METADATA_PROGRAM_ID = "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s"

# RPC endpoints
DEVNET_RPC = "https://api.devnet.solana.com"

# PDA seeds
AUCTION_SEED = b"auction"
VAULT_SEED = b"vault"
DEPOSIT_SEED = b"deposit"
METADATA_SEED = b"metadata"

# PDA derivation limits (Solana runtime)
MAX_SEED_LENGTH = 32
MAX_SEEDS = 16
PDA_MARKER = b"ProgramDerivedAddress"

# Unit conversion
LAMPORTS_PER_SOL = 1_000_000_000
