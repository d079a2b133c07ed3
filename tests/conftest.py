"""Shared test fixtures.

The reference curve has two segments with round numbers:

  segment 0: sqrt 1.0 -> 2.0 (Q64), L = 1e9 << 64, holds 1e9 quote / 5e8 base
  segment 1: sqrt 2.0 -> 4.0 (Q64), L = 1e9 << 64, holds 2e9 quote / 2.5e8 base
"""

import struct

import pytest

from dbc_quote.chain.decoder import VIRTUAL_POOL_SIZE
from dbc_quote.constants import ONE_Q64, VIRTUAL_POOL_DISCRIMINATOR
from dbc_quote.models import (
    CollectFeeMode,
    CurvePoint,
    FeeSchedulerConfig,
    PoolConfig,
    PoolFeesConfig,
    VirtualPool,
)

LIQUIDITY = 1_000_000_000 * ONE_Q64
SQRT_START = ONE_Q64
CURVE = (
    CurvePoint(sqrt_price=2 * ONE_Q64, liquidity=LIQUIDITY),
    CurvePoint(sqrt_price=4 * ONE_Q64, liquidity=LIQUIDITY),
)
CURVE_QUOTE_CAPACITY = 3_000_000_000


def make_config(
    *,
    cliff_fee_numerator: int = 0,
    collect_fee_mode: CollectFeeMode = CollectFeeMode.QUOTE_TOKEN,
    protocol_fee_percent: int = 20,
    referral_fee_percent: int = 20,
    base_fee=None,
    **overrides,
) -> PoolConfig:
    fees = PoolFeesConfig(
        base_fee=base_fee or FeeSchedulerConfig(cliff_fee_numerator=cliff_fee_numerator),
        protocol_fee_percent=protocol_fee_percent,
        referral_fee_percent=referral_fee_percent,
    )
    params = {
        "collect_fee_mode": collect_fee_mode,
        "migration_quote_threshold": CURVE_QUOTE_CAPACITY,
        "sqrt_start_price": SQRT_START,
        "pool_fees": fees,
        "curve": CURVE,
    }
    params.update(overrides)
    return PoolConfig(**params)


def make_pool(*, sqrt_price: int = SQRT_START, quote_reserve: int = 0, **overrides) -> VirtualPool:
    return VirtualPool(sqrt_price=sqrt_price, quote_reserve=quote_reserve, **overrides)


def build_pool_data() -> bytes:
    """VirtualPool account bytes with a distinct value per field, priced at sqrt 3.0."""
    buf = bytearray(VIRTUAL_POOL_SIZE)
    buf[0:8] = VIRTUAL_POOL_DISCRIMINATOR

    # volatility tracker
    struct.pack_into("<Q", buf, 8, 1_700_000_000)
    buf[40:56] = (12345).to_bytes(16, "little")

    # config, creator, base_mint, base_vault, quote_vault
    for index, offset in enumerate(range(72, 232, 32)):
        buf[offset : offset + 32] = bytes([index + 1] * 32)

    struct.pack_into("<6Q", buf, 232, 1_000_000_000, 500_000_000, 11, 12, 13, 14)
    buf[280:296] = (3 * ONE_Q64).to_bytes(16, "little")
    struct.pack_into("<Q", buf, 296, 250_000_000)
    struct.pack_into("<7Q", buf, 312, 21, 22, 23, 24, 1_700_000_500, 31, 32)
    return bytes(buf)


@pytest.fixture
def zero_fee_config() -> PoolConfig:
    return make_config()


@pytest.fixture
def one_percent_config() -> PoolConfig:
    """Constant 1% fee, 20% protocol share, 20% of that to referrers."""
    return make_config(cliff_fee_numerator=10_000_000)


@pytest.fixture
def fresh_pool() -> VirtualPool:
    return make_pool()
