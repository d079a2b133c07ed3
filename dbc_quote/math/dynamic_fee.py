"""Variable (volatility) fee added on top of the base fee."""

from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal

from dbc_quote.constants import (
    BASIS_POINT_MAX,
    BIN_STEP_BPS_DEFAULT,
    BIN_STEP_BPS_U128_DEFAULT,
    DYNAMIC_FEE_DECAY_PERIOD_DEFAULT,
    DYNAMIC_FEE_FILTER_PERIOD_DEFAULT,
    DYNAMIC_FEE_REDUCTION_FACTOR_DEFAULT,
    DYNAMIC_FEE_SCALING_FACTOR,
    MAX_PRICE_CHANGE_BPS_DEFAULT,
    ONE_Q64,
)
from dbc_quote.math.safe_math import Rounding, div, mul
from dbc_quote.math.units import bps_to_fee_numerator
from dbc_quote.models.config import DynamicFeeConfig
from dbc_quote.models.pool import VolatilityTracker


def get_variable_fee(dynamic_fee: DynamicFeeConfig, tracker: VolatilityTracker) -> int:
    """ceil((accumulator * bin_step) ** 2 * variable_fee_control / 1e11)."""
    if not dynamic_fee.initialized or tracker.volatility_accumulator == 0:
        return 0
    volatility_times_bin_step = mul(tracker.volatility_accumulator, dynamic_fee.bin_step)
    squared = mul(volatility_times_bin_step, volatility_times_bin_step)
    v_fee = mul(squared, dynamic_fee.variable_fee_control)
    return div(v_fee, DYNAMIC_FEE_SCALING_FACTOR, Rounding.UP)


def get_dynamic_fee_params(
    base_fee_bps: int, max_price_change_bps: int = MAX_PRICE_CHANGE_BPS_DEFAULT
) -> DynamicFeeConfig:
    """Default dynamic fee capped at 20% of the base fee.

    The cap is reached when price moves ``max_price_change_bps`` within the
    filter window.
    """
    if max_price_change_bps > MAX_PRICE_CHANGE_BPS_DEFAULT:
        raise ValueError(
            f"max_price_change_bps ({max_price_change_bps}) must be <= "
            f"{MAX_PRICE_CHANGE_BPS_DEFAULT}"
        )

    price_ratio = Decimal(max_price_change_bps) / Decimal(BASIS_POINT_MAX) + 1
    sqrt_price_ratio_q64 = int((price_ratio.sqrt() * ONE_Q64).to_integral_value(rounding=ROUND_FLOOR))
    delta_bin_id = (sqrt_price_ratio_q64 - ONE_Q64) // BIN_STEP_BPS_U128_DEFAULT * 2
    max_volatility_accumulator = delta_bin_id * BASIS_POINT_MAX
    square_vfa_bin = (max_volatility_accumulator * BIN_STEP_BPS_DEFAULT) ** 2

    base_fee_numerator = bps_to_fee_numerator(base_fee_bps)
    max_dynamic_fee_numerator = base_fee_numerator * 20 // 100
    v_fee = max_dynamic_fee_numerator * DYNAMIC_FEE_SCALING_FACTOR - (DYNAMIC_FEE_SCALING_FACTOR - 1)

    return DynamicFeeConfig(
        initialized=True,
        max_volatility_accumulator=max_volatility_accumulator,
        variable_fee_control=v_fee // square_vfa_bin,
        bin_step=BIN_STEP_BPS_DEFAULT,
        bin_step_u128=BIN_STEP_BPS_U128_DEFAULT,
        filter_period=DYNAMIC_FEE_FILTER_PERIOD_DEFAULT,
        decay_period=DYNAMIC_FEE_DECAY_PERIOD_DEFAULT,
        reduction_factor=DYNAMIC_FEE_REDUCTION_FACTOR_DEFAULT,
    )
