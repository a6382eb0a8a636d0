"""Protocol constants for the exchange program.

Centralizes derivation seeds, the fixed initial pool-token supply and
the integer bounds of the token ledger.
"""

# Program id of the deployed exchange program (overridable via config)
DEFAULT_PROGRAM_ID = "HndsTUfB2AZbQifHN9WdKMMQqXghGVwmak2gy3oyzwqV"

# Seeds for program-derived addresses
POOL_SEED = b"pool"
AUTHORITY_SEED = b"authority"
POOL_MINT_SEED = b"pool_mint"

# Every pool starts with exactly this many pool tokens, whatever the reserves hold
INITIAL_POOL_TOKEN_SUPPLY = 1_000_000_000

# Decimals of a pool-token mint created during initialization
POOL_MINT_DECIMALS = 9

# Token ledger amounts are u64; intermediate math is bounded to u128
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1

# Square-root ratios are evaluated exactly, bounded like a 256-bit precise number
U256_MAX = 2**256 - 1
