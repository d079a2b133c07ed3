"""Rate-limiter base fee: larger buys pay a progressively higher fee.

The input is cut into ``reference_amount`` sized chunks. The first chunk
pays the cliff fee, each later chunk pays ``fee_increment`` more, until
the fee reaches MAX_FEE_NUMERATOR and stays there.
"""

from __future__ import annotations

from dbc_quote.constants import BASIS_POINT_MAX, FEE_DENOMINATOR, MAX_FEE_NUMERATOR
from dbc_quote.exceptions import ConfigurationInvariantViolated
from dbc_quote.math.safe_math import Rounding, add, div, mul, mul_div, sub
from dbc_quote.models.config import RateLimiterConfig
from dbc_quote.models.quote import TradeDirection


def get_fee_increment_numerator(fee_increment_bps: int) -> int:
    return mul_div(fee_increment_bps, FEE_DENOMINATOR, BASIS_POINT_MAX, Rounding.DOWN)


def get_max_index(cliff_fee_numerator: int, fee_increment_bps: int) -> int:
    """Number of chunks after which the fee is pinned at MAX_FEE_NUMERATOR."""
    delta_numerator = sub(MAX_FEE_NUMERATOR, cliff_fee_numerator)
    return div(delta_numerator, get_fee_increment_numerator(fee_increment_bps))


def get_fee_numerator_on_rate_limiter(
    cliff_fee_numerator: int,
    reference_amount: int,
    fee_increment_bps: int,
    input_amount: int,
) -> int:
    """Blended fee numerator for ``input_amount``, in [cliff, MAX_FEE_NUMERATOR]."""
    if cliff_fee_numerator > MAX_FEE_NUMERATOR:
        raise ConfigurationInvariantViolated(
            f"cliff fee numerator {cliff_fee_numerator} above max {MAX_FEE_NUMERATOR}"
        )
    if input_amount <= reference_amount:
        return cliff_fee_numerator
    if reference_amount == 0 or fee_increment_bps == 0:
        raise ConfigurationInvariantViolated(
            "rate limiter needs a positive reference amount and fee increment"
        )

    c = cliff_fee_numerator
    x0 = reference_amount
    diff = sub(input_amount, reference_amount)
    a, b = divmod(diff, x0)
    max_index = get_max_index(c, fee_increment_bps)
    i = get_fee_increment_numerator(fee_increment_bps)

    if a < max_index:
        # chunks 0..a at c + k*i, then b units at c + (a+1)*i
        numerator_1 = add(add(c, mul(c, a)), div(mul(mul(i, a), a + 1), 2))
        numerator_2 = add(c, mul(i, a + 1))
        first_fee = mul(x0, numerator_1)
        second_fee = mul(b, numerator_2)
    else:
        numerator_1 = add(add(c, mul(c, max_index)), div(mul(mul(i, max_index), max_index + 1), 2))
        first_fee = mul(x0, numerator_1)
        left_amount = add(mul(sub(a, max_index), x0), b)
        second_fee = mul(left_amount, MAX_FEE_NUMERATOR)

    trading_fee = div(add(first_fee, second_fee), FEE_DENOMINATOR, Rounding.UP)

    # back to a numerator: input * numerator / FEE_DENOMINATOR = trading_fee
    fee_numerator = mul_div(trading_fee, FEE_DENOMINATOR, input_amount, Rounding.UP)
    return max(min(fee_numerator, MAX_FEE_NUMERATOR), cliff_fee_numerator)


def is_rate_limiter_applied(
    fee: RateLimiterConfig,
    current_point: int,
    activation_point: int,
    trade_direction: TradeDirection,
    fees_on_input: bool,
) -> bool:
    """The limiter only guards buys charged on input, inside its window."""
    if trade_direction is not TradeDirection.QUOTE_TO_BASE or not fees_on_input:
        return False
    if current_point < activation_point:
        return False
    last_effective_point = add(activation_point, fee.max_limiter_duration)
    return current_point <= last_effective_point


def get_current_rate_limiter_fee_numerator(
    fee: RateLimiterConfig,
    current_point: int,
    activation_point: int,
    trade_direction: TradeDirection,
    fees_on_input: bool,
    input_amount: int,
) -> int:
    if not is_rate_limiter_applied(fee, current_point, activation_point, trade_direction, fees_on_input):
        return fee.cliff_fee_numerator
    return get_fee_numerator_on_rate_limiter(
        fee.cliff_fee_numerator,
        fee.reference_amount,
        fee.fee_increment_bps,
        input_amount,
    )
