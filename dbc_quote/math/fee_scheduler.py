"""Fee scheduler: base fee decaying from a cliff over elapsed periods.

Linear:      cliff - period * reduction_factor, floored at zero
Exponential: cliff * (1 - reduction_factor / 10_000) ** period, in Q64
"""

from __future__ import annotations

from dbc_quote.constants import BASIS_POINT_MAX, ONE_Q64, RESOLUTION
from dbc_quote.exceptions import ConfigurationInvariantViolated
from dbc_quote.math.safe_math import Rounding, div, mul, mul_div, mul_shr, pow_q64, shl, sub
from dbc_quote.models.config import FeeSchedulerConfig, FeeSchedulerMode


def get_fee_numerator_on_linear_fee_scheduler(
    cliff_fee_numerator: int, reduction_factor: int, period: int
) -> int:
    reduction = mul(period, reduction_factor)
    if reduction > cliff_fee_numerator:
        return 0
    return sub(cliff_fee_numerator, reduction)


def get_fee_numerator_on_exponential_fee_scheduler(
    cliff_fee_numerator: int, reduction_factor: int, period: int
) -> int:
    if reduction_factor >= BASIS_POINT_MAX:
        raise ConfigurationInvariantViolated(
            f"exponential reduction factor {reduction_factor} must be below {BASIS_POINT_MAX}"
        )
    if period == 0:
        return cliff_fee_numerator

    # One period is exact in basis points, no Q64 round trip needed
    if period == 1:
        return mul_div(
            cliff_fee_numerator,
            BASIS_POINT_MAX - reduction_factor,
            BASIS_POINT_MAX,
            Rounding.DOWN,
        )

    reduction_q64 = div(shl(reduction_factor, RESOLUTION), BASIS_POINT_MAX)
    base = sub(ONE_Q64, reduction_q64)
    result = pow_q64(base, period)
    return mul_shr(cliff_fee_numerator, result, RESOLUTION)


def get_fee_numerator(
    cliff_fee_numerator: int,
    reduction_factor: int,
    period: int,
    mode: FeeSchedulerMode,
) -> int:
    """Effective fee numerator after ``period`` elapsed periods."""
    if period < 0:
        raise ValueError(f"period must be non-negative, got {period}")
    if mode is FeeSchedulerMode.CONSTANT:
        return cliff_fee_numerator
    if mode is FeeSchedulerMode.LINEAR:
        return get_fee_numerator_on_linear_fee_scheduler(
            cliff_fee_numerator, reduction_factor, period
        )
    if mode is FeeSchedulerMode.EXPONENTIAL:
        return get_fee_numerator_on_exponential_fee_scheduler(
            cliff_fee_numerator, reduction_factor, period
        )
    raise ConfigurationInvariantViolated(f"unknown fee scheduler mode {mode!r}")


def get_scheduler_period(
    current_point: int,
    activation_point: int,
    number_of_period: int,
    period_frequency: int,
) -> int:
    """Elapsed periods since activation, capped at ``number_of_period``.

    Before activation the pool quotes at the fully decayed (minimum) fee.
    """
    if period_frequency == 0:
        return 0
    if current_point < activation_point:
        return number_of_period
    elapsed = sub(current_point, activation_point)
    return min(div(elapsed, period_frequency), number_of_period)


def get_current_scheduler_fee_numerator(
    fee: FeeSchedulerConfig, current_point: int, activation_point: int
) -> int:
    period = get_scheduler_period(
        current_point, activation_point, fee.number_of_period, fee.period_frequency
    )
    return get_fee_numerator(fee.cliff_fee_numerator, fee.reduction_factor, period, fee.mode)
