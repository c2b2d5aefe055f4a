"""Protocol constants for the constant-product AMM.

Centralizes seeds, bounds and protocol parameters.
"""

# Liquidity permanently locked on the first deposit into a pool
MINIMUM_LIQUIDITY = 100

# Fees are expressed in basis points: fee_bps / FEE_DENOMINATOR
FEE_DENOMINATOR = 10_000

# Amount bounds (ledger balances are unsigned 64-bit)
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1

# Seeds for derived identifiers
AUTHORITY_SEED = b"authority"
LIQUIDITY_SEED = b"liquidity"

# Holder of the locked minimum liquidity; nobody can sign for it
LOCKED_LIQUIDITY_HOLDER = "locked-liquidity"
