"""Sanity checks on PoolConfig snapshots.

A config that fails here was either corrupted in transit or never valid
on-chain; quoting against it would produce meaningless numbers.
"""

from __future__ import annotations

from collections.abc import Sequence

from dbc_quote.constants import (
    BASIS_POINT_MAX,
    MAX_CURVE_POINT,
    MAX_FEE_NUMERATOR,
    MAX_PERCENT,
    MAX_SQRT_PRICE,
    MIN_SQRT_PRICE,
)
from dbc_quote.exceptions import ConfigurationInvariantViolated
from dbc_quote.models.config import (
    CollectFeeMode,
    CurvePoint,
    FeeSchedulerConfig,
    FeeSchedulerMode,
    MigrationOption,
    PoolConfig,
    PoolFeesConfig,
    RateLimiterConfig,
    TokenType,
)


def validate_curve(curve: Sequence[CurvePoint], sqrt_start_price: int) -> None:
    if not curve or len(curve) > MAX_CURVE_POINT:
        raise ConfigurationInvariantViolated(
            f"curve must have 1..{MAX_CURVE_POINT} points, got {len(curve)}"
        )

    previous = sqrt_start_price
    for index, point in enumerate(curve):
        if point.sqrt_price <= previous:
            raise ConfigurationInvariantViolated(
                f"curve point {index} is not strictly above the previous one"
            )
        if point.liquidity == 0:
            raise ConfigurationInvariantViolated(f"curve point {index} has zero liquidity")
        previous = point.sqrt_price

    if curve[-1].sqrt_price > MAX_SQRT_PRICE:
        raise ConfigurationInvariantViolated("last curve point is above MAX_SQRT_PRICE")


def validate_pool_fees(pool_fees: PoolFeesConfig, collect_fee_mode: CollectFeeMode) -> None:
    base_fee = pool_fees.base_fee
    if base_fee.cliff_fee_numerator > MAX_FEE_NUMERATOR:
        raise ConfigurationInvariantViolated(
            f"cliff fee numerator {base_fee.cliff_fee_numerator} above {MAX_FEE_NUMERATOR}"
        )

    if isinstance(base_fee, FeeSchedulerConfig):
        if base_fee.mode is FeeSchedulerMode.EXPONENTIAL and base_fee.reduction_factor >= BASIS_POINT_MAX:
            raise ConfigurationInvariantViolated(
                f"exponential reduction factor {base_fee.reduction_factor} must be below {BASIS_POINT_MAX}"
            )
    elif isinstance(base_fee, RateLimiterConfig):
        if collect_fee_mode is not CollectFeeMode.QUOTE_TOKEN:
            raise ConfigurationInvariantViolated("rate limiter requires fees collected in quote")
        if base_fee.reference_amount == 0 or base_fee.fee_increment_bps == 0:
            raise ConfigurationInvariantViolated(
                "rate limiter needs a positive reference amount and fee increment"
            )

    if pool_fees.protocol_fee_percent > MAX_PERCENT:
        raise ConfigurationInvariantViolated(
            f"protocol fee percent {pool_fees.protocol_fee_percent} above {MAX_PERCENT}"
        )
    if pool_fees.referral_fee_percent > MAX_PERCENT:
        raise ConfigurationInvariantViolated(
            f"referral fee percent {pool_fees.referral_fee_percent} above {MAX_PERCENT}"
        )


def validate_pool_config(config: PoolConfig) -> None:
    """Raise ConfigurationInvariantViolated on the first broken invariant."""
    validate_pool_fees(config.pool_fees, config.collect_fee_mode)

    if config.migration_option is MigrationOption.MET_DAMM and config.token_type is not TokenType.SPL:
        raise ConfigurationInvariantViolated("token type must be SPL for DAMM v1 migration")
    if config.migration_quote_threshold == 0:
        raise ConfigurationInvariantViolated("migration quote threshold must be positive")
    if not MIN_SQRT_PRICE <= config.sqrt_start_price < MAX_SQRT_PRICE:
        raise ConfigurationInvariantViolated(f"sqrt start price {config.sqrt_start_price} out of range")

    validate_curve(config.curve, config.sqrt_start_price)
