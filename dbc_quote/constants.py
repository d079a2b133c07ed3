"""Meteora Dynamic Bonding Curve (DBC) program and math constants.

Values mirror the on-chain program so off-chain quotes match execution.
"""

DBC_PROGRAM_ID = "dbcij3LWUppWqq96dh6gJWwBifmcGfLSB5D4DuSMaqN"

# First 8 bytes of VirtualPool account data (Anchor discriminator)
VIRTUAL_POOL_DISCRIMINATOR = bytes([213, 224, 5, 209, 98, 69, 119, 92])

# Integer widths used by the program
U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1
U256_MAX = (1 << 256) - 1

# Q64 fixed point
RESOLUTION = 64
ONE_Q64 = 1 << RESOLUTION

# sqrt price bounds (Q64)
MIN_SQRT_PRICE = 4_295_048_016
MAX_SQRT_PRICE = 79_226_673_521_066_979_257_578_248_091

MAX_CURVE_POINT = 16

# Fees
BASIS_POINT_MAX = 10_000
FEE_DENOMINATOR = 1_000_000_000
MAX_FEE_NUMERATOR = 500_000_000  # 50%
MAX_PERCENT = 100

# Variable fee is scaled down to FEE_DENOMINATOR units by this factor
DYNAMIC_FEE_SCALING_FACTOR = 100_000_000_000

# Dynamic fee defaults used when deriving parameters for a new config
DYNAMIC_FEE_FILTER_PERIOD_DEFAULT = 10
DYNAMIC_FEE_DECAY_PERIOD_DEFAULT = 120
DYNAMIC_FEE_REDUCTION_FACTOR_DEFAULT = 5000  # 50%
BIN_STEP_BPS_DEFAULT = 1
BIN_STEP_BPS_U128_DEFAULT = 1_844_674_407_370_955  # bin_step << 64 / BASIS_POINT_MAX
MAX_PRICE_CHANGE_BPS_DEFAULT = 1500  # 15%
