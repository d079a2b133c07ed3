"""Trading fee: charge point, numerator selection and recipient split."""

from __future__ import annotations

from dbc_quote.constants import FEE_DENOMINATOR, MAX_FEE_NUMERATOR, MAX_PERCENT
from dbc_quote.exceptions import ConfigurationInvariantViolated
from dbc_quote.math.dynamic_fee import get_variable_fee
from dbc_quote.math.fee_scheduler import get_current_scheduler_fee_numerator
from dbc_quote.math.rate_limiter import get_current_rate_limiter_fee_numerator
from dbc_quote.math.safe_math import Rounding, add, mul_div, sub
from dbc_quote.models.config import (
    CollectFeeMode,
    FeeSchedulerConfig,
    PoolFeesConfig,
    RateLimiterConfig,
)
from dbc_quote.models.pool import VolatilityTracker
from dbc_quote.models.quote import FeeMode, FeeOnAmountResult, TradeDirection


def get_fee_mode(
    collect_fee_mode: CollectFeeMode, trade_direction: TradeDirection, has_referral: bool
) -> FeeMode:
    """QUOTE_TOKEN: fee always in quote, so on input for buys, output for sells.
    OUTPUT_TOKEN: fee always on the output token.
    """
    if collect_fee_mode == CollectFeeMode.QUOTE_TOKEN:
        fees_on_input = trade_direction == TradeDirection.QUOTE_TO_BASE
        return FeeMode(fees_on_input=fees_on_input, fees_on_base_token=False, has_referral=has_referral)
    if collect_fee_mode == CollectFeeMode.OUTPUT_TOKEN:
        fees_on_base_token = trade_direction == TradeDirection.QUOTE_TO_BASE
        return FeeMode(fees_on_input=False, fees_on_base_token=fees_on_base_token, has_referral=has_referral)
    raise ConfigurationInvariantViolated(f"invalid collect fee mode {collect_fee_mode!r}")


def get_base_fee_numerator(
    pool_fees: PoolFeesConfig,
    current_point: int,
    activation_point: int,
    trade_direction: TradeDirection,
    fees_on_input: bool,
    amount: int,
) -> int:
    base_fee = pool_fees.base_fee
    if isinstance(base_fee, FeeSchedulerConfig):
        return get_current_scheduler_fee_numerator(base_fee, current_point, activation_point)
    if isinstance(base_fee, RateLimiterConfig):
        return get_current_rate_limiter_fee_numerator(
            base_fee, current_point, activation_point, trade_direction, fees_on_input, amount
        )
    raise ConfigurationInvariantViolated(f"unknown base fee variant {type(base_fee).__name__}")


def get_total_fee_numerator(
    pool_fees: PoolFeesConfig,
    volatility_tracker: VolatilityTracker,
    current_point: int,
    activation_point: int,
    trade_direction: TradeDirection,
    fees_on_input: bool,
    amount: int,
) -> int:
    """Base fee plus variable fee, capped at MAX_FEE_NUMERATOR."""
    total = get_base_fee_numerator(
        pool_fees, current_point, activation_point, trade_direction, fees_on_input, amount
    )
    if pool_fees.dynamic_fee.initialized:
        total = add(total, get_variable_fee(pool_fees.dynamic_fee, volatility_tracker))
    return min(total, MAX_FEE_NUMERATOR)


def get_fee_on_amount(
    amount: int,
    fee_numerator: int,
    pool_fees: PoolFeesConfig,
    has_referral: bool,
) -> FeeOnAmountResult:
    """Take the fee from ``amount`` and split it by recipient.

    The fee rounds up; the protocol and referral cuts round down, so the
    parts always add back up to the fee taken.
    """
    if pool_fees.protocol_fee_percent > MAX_PERCENT or pool_fees.referral_fee_percent > MAX_PERCENT:
        raise ConfigurationInvariantViolated("fee percentages must be within 0..100")

    trading_fee = mul_div(amount, fee_numerator, FEE_DENOMINATOR, Rounding.UP)
    amount_after_fee = sub(amount, trading_fee)

    protocol_fee = mul_div(trading_fee, pool_fees.protocol_fee_percent, MAX_PERCENT, Rounding.DOWN)
    trading_fee_after_protocol = sub(trading_fee, protocol_fee)

    referral_fee = 0
    if has_referral:
        referral_fee = mul_div(protocol_fee, pool_fees.referral_fee_percent, MAX_PERCENT, Rounding.DOWN)
    protocol_fee_after_referral = sub(protocol_fee, referral_fee)

    return FeeOnAmountResult(
        amount=amount_after_fee,
        trading_fee=trading_fee_after_protocol,
        protocol_fee=protocol_fee_after_referral,
        referral_fee=referral_fee,
        fee_numerator=fee_numerator,
    )
