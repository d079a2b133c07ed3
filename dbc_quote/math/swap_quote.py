"""Exact-in swap quote against a DBC pool snapshot."""

from __future__ import annotations

from loguru import logger

from dbc_quote.checks import validate_pool_config
from dbc_quote.constants import BASIS_POINT_MAX, U64_MAX
from dbc_quote.exceptions import InvalidAmountError, PoolCompletedError
from dbc_quote.math.fee_math import get_fee_mode, get_fee_on_amount, get_total_fee_numerator
from dbc_quote.math.metrics import is_curve_complete
from dbc_quote.math.safe_math import Rounding, mul_div, to_u64
from dbc_quote.math.segment_walker import advance
from dbc_quote.math.units import get_price_from_sqrt_price
from dbc_quote.models.config import PoolConfig
from dbc_quote.models.pool import VirtualPool
from dbc_quote.models.quote import FeeBreakdown, QuoteResult, TradeDirection


def get_minimum_amount_out(amount_out: int, slippage_bps: int) -> int:
    """amount_out * (10_000 - slippage) / 10_000, rounded down."""
    return mul_div(amount_out, BASIS_POINT_MAX - slippage_bps, BASIS_POINT_MAX, Rounding.DOWN)


def _validate_trade(amount_in: int, slippage_bps: int) -> None:
    if amount_in <= 0:
        raise InvalidAmountError(f"amount_in must be positive, got {amount_in}")
    if amount_in > U64_MAX:
        raise InvalidAmountError(f"amount_in {amount_in} does not fit u64")
    if not 0 <= slippage_bps <= BASIS_POINT_MAX:
        raise InvalidAmountError(f"slippage_bps must be within 0..{BASIS_POINT_MAX}, got {slippage_bps}")


def quote(
    pool: VirtualPool,
    config: PoolConfig,
    swap_base_for_quote: bool,
    amount_in: int,
    slippage_bps: int = 0,
    has_referral: bool = False,
    current_point: int = 0,
) -> QuoteResult:
    """Quote an exact-in swap without touching ``pool`` or ``config``.

    ``current_point`` is a slot or a unix timestamp depending on the
    config's activation type. The fee is taken from the input before the
    curve walk or from the output after it, as the fee mode dictates.
    """
    _validate_trade(amount_in, slippage_bps)
    validate_pool_config(config)
    if is_curve_complete(pool, config):
        raise PoolCompletedError(
            f"pool reached its migration threshold ({pool.quote_reserve} >= "
            f"{config.migration_quote_threshold})"
        )

    direction = TradeDirection.BASE_TO_QUOTE if swap_base_for_quote else TradeDirection.QUOTE_TO_BASE
    fee_mode = get_fee_mode(config.collect_fee_mode, direction, has_referral)
    fee_numerator = get_total_fee_numerator(
        config.pool_fees,
        pool.volatility_tracker,
        current_point,
        pool.activation_point,
        direction,
        fee_mode.fees_on_input,
        amount_in,
    )

    fee = FeeBreakdown()
    actual_amount_in = amount_in
    if fee_mode.fees_on_input:
        fee_result = get_fee_on_amount(amount_in, fee_numerator, config.pool_fees, has_referral)
        fee = FeeBreakdown(
            trading=fee_result.trading_fee,
            protocol=fee_result.protocol_fee,
            referral=fee_result.referral_fee,
        )
        actual_amount_in = fee_result.amount

    walk = advance(pool.sqrt_price, config.curve, actual_amount_in, direction, config.sqrt_start_price)

    amount_out = walk.amount_out
    if not fee_mode.fees_on_input:
        fee_result = get_fee_on_amount(walk.amount_out, fee_numerator, config.pool_fees, has_referral)
        fee = FeeBreakdown(
            trading=fee_result.trading_fee,
            protocol=fee_result.protocol_fee,
            referral=fee_result.referral_fee,
        )
        amount_out = fee_result.amount

    amount_out = to_u64(amount_out)
    minimum_amount_out = get_minimum_amount_out(amount_out, slippage_bps)

    logger.debug(
        f"[DBC] quote {direction.name} in={amount_in} out={amount_out} "
        f"min_out={minimum_amount_out} fee={fee.total} fee_num={fee_numerator} "
        f"segments={walk.segments_crossed}"
    )

    return QuoteResult(
        amount_in=amount_in,
        amount_out=amount_out,
        minimum_amount_out=minimum_amount_out,
        next_sqrt_price=walk.next_sqrt_price,
        fee=fee,
        fee_numerator=fee_numerator,
        price_before=get_price_from_sqrt_price(pool.sqrt_price),
        price_after=get_price_from_sqrt_price(walk.next_sqrt_price),
        segments_crossed=walk.segments_crossed,
    )
