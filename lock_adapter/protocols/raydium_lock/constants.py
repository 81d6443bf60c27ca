"""
Raydium Liquidity-Lock Constants

Program identifiers here are mainnet defaults only. Builders receive the ids
they use through ProgramIds (see lock_adapter.config.ProgramConfig), so every
one of them can be overridden from the environment.
"""

# Raydium liquidity-locking program (mainnet)
LOCK_PROGRAM_ID = "LockrWmn6K5twhz3y9w1dQERbmgSaRkfnTeTKbpofwE"

# Raydium CP-Swap (constant product) program (mainnet)
CP_SWAP_PROGRAM_ID = "CPMMoo8L3F4NbTegBCKVNunggL7H1ZpdTHKxQB5qKP1C"

# Raydium CLMM program (mainnet)
CLMM_PROGRAM_ID = "CAMMCzo5YL8w4VFF8KVHrK22GGUsp5VTaW7grrKgrWqK"

# Token Programs
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
TOKEN_2022_PROGRAM_ID = "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb"

# Associated Token Program
ASSOCIATED_TOKEN_PROGRAM_ID = "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"

# Metadata Program (Metaplex)
METADATA_PROGRAM_ID = "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s"

# Memo Program
MEMO_PROGRAM_ID = "MemoSq4gqABAXKb96qnH8TysNcWxMyWCqXgDLGmfcHr"

# System Program
SYSTEM_PROGRAM_ID = "11111111111111111111111111111111"

# Rent Sysvar
RENT_SYSVAR_ID = "SysvarRent111111111111111111111111111111111"

# PDA seeds fixed by the lock program
LOCK_CP_AUTH_SEED = b"lock_cp_authority_seed"
LOCK_CLMM_AUTH_SEED = b"program_authority_seed"
LOCKED_LIQUIDITY_SEED = b"locked_liquidity"
LOCKED_POSITION_SEED = b"locked_position"

# Seeds owned by other programs
METADATA_PREFIX = b"metadata"
CP_SWAP_AUTH_SEED = b"vault_and_lp_mint_auth_seed"
CLMM_POSITION_SEED = b"position"

# Instruction discriminators, taken verbatim from the lock program ABI
LOCK_CLMM_POSITION_INS = bytes([188, 37, 179, 131, 82, 150, 84, 73])
COLLECT_CLMM_FEES_INS = bytes([16, 72, 250, 198, 14, 162, 212, 19])
LOCK_CP_LIQUIDITY_INS = bytes([216, 157, 29, 78, 38, 51, 31, 26])
COLLECT_CP_FEES_INS = bytes([8, 30, 51, 199, 209, 184, 247, 133])

DISCRIMINATORS = {
    "lock_clmm_position": LOCK_CLMM_POSITION_INS,
    "collect_clmm_fees": COLLECT_CLMM_FEES_INS,
    "lock_cp_liquidity": LOCK_CP_LIQUIDITY_INS,
    "collect_cp_fees": COLLECT_CP_FEES_INS,
}

# Account discriminators for parsing
LOCKED_CP_LIQUIDITY_DISCRIMINATOR = bytes([25, 10, 238, 197, 207, 234, 73, 22])
LOCKED_CLMM_POSITION_DISCRIMINATOR = bytes([52, 23, 5, 7, 170, 90, 108, 213])

# Max u64. The lock program reads this as "collect every fee owed".
U64_MAX = 2 ** 64 - 1
