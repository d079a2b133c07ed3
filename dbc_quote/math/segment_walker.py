"""Walk a fee-free amount across the piecewise curve.

Segment ``i`` spans ``(curve[i-1].sqrt_price, curve[i].sqrt_price]`` and
trades at ``curve[i].liquidity``; segment 0 starts at the config's
``sqrt_start_price``. Selling base walks the price down, buying base walks
it up. Max input per segment rounds up, outputs round down.
"""

from __future__ import annotations

from collections.abc import Sequence

from dbc_quote.constants import MAX_CURVE_POINT
from dbc_quote.exceptions import ConfigurationInvariantViolated, CurveExhaustedError
from dbc_quote.math.curve import (
    get_delta_amount_base_unsigned,
    get_delta_amount_quote_unsigned,
    swap_within_segment,
)
from dbc_quote.math.safe_math import Rounding, add, sub
from dbc_quote.models.config import CurvePoint
from dbc_quote.models.quote import SegmentWalk, TradeDirection


def _check_curve(curve: Sequence[CurvePoint]) -> None:
    if not curve:
        raise ConfigurationInvariantViolated("curve has no points")
    if len(curve) > MAX_CURVE_POINT:
        raise ConfigurationInvariantViolated(
            f"curve has {len(curve)} points, max is {MAX_CURVE_POINT}"
        )


def swap_amount_from_base_to_quote(
    curve: Sequence[CurvePoint],
    current_sqrt_price: int,
    amount_in: int,
    sqrt_start_price: int,
) -> SegmentWalk:
    _check_curve(curve)
    last = len(curve) - 1
    if current_sqrt_price > curve[last].sqrt_price:
        raise ConfigurationInvariantViolated(
            f"sqrt price {current_sqrt_price} above last curve point {curve[last].sqrt_price}"
        )

    total_out = 0
    sqrt_price = current_sqrt_price
    amount_left = amount_in
    crossed = 0

    for i in range(last, -1, -1):
        if amount_left == 0:
            break
        lower = curve[i].sqrt_price
        if lower >= sqrt_price:
            continue

        # price sits above curve[i], so it is inside segment i + 1
        liquidity = curve[i + 1].liquidity
        max_amount_in = get_delta_amount_base_unsigned(lower, sqrt_price, liquidity, Rounding.UP)
        crossed += 1
        if amount_left < max_amount_in:
            out, sqrt_price = swap_within_segment(sqrt_price, liquidity, amount_left, True)
            total_out = add(total_out, out)
            amount_left = 0
            break

        out = get_delta_amount_quote_unsigned(lower, sqrt_price, liquidity, Rounding.DOWN)
        total_out = add(total_out, out)
        sqrt_price = lower
        amount_left = sub(amount_left, max_amount_in)

    if amount_left:
        # resulting price must stay at or above the start price
        next_sqrt_price = sqrt_start_price - 1
        if sqrt_price > sqrt_start_price:
            out, next_sqrt_price = swap_within_segment(
                sqrt_price, curve[0].liquidity, amount_left, True
            )
        if next_sqrt_price < sqrt_start_price:
            raise CurveExhaustedError(
                f"not enough liquidity: {amount_left} base left below the start price"
            )
        crossed += 1
        sqrt_price = next_sqrt_price
        total_out = add(total_out, out)

    return SegmentWalk(amount_out=total_out, next_sqrt_price=sqrt_price, segments_crossed=crossed)


def swap_amount_from_quote_to_base(
    curve: Sequence[CurvePoint],
    current_sqrt_price: int,
    amount_in: int,
) -> SegmentWalk:
    _check_curve(curve)

    total_out = 0
    sqrt_price = current_sqrt_price
    amount_left = amount_in
    crossed = 0

    for point in curve:
        if amount_left == 0:
            break
        if point.sqrt_price <= sqrt_price:
            continue

        max_amount_in = get_delta_amount_quote_unsigned(
            sqrt_price, point.sqrt_price, point.liquidity, Rounding.UP
        )
        crossed += 1
        if amount_left < max_amount_in:
            out, sqrt_price = swap_within_segment(sqrt_price, point.liquidity, amount_left, False)
            total_out = add(total_out, out)
            amount_left = 0
            break

        out = get_delta_amount_base_unsigned(
            sqrt_price, point.sqrt_price, point.liquidity, Rounding.DOWN
        )
        total_out = add(total_out, out)
        sqrt_price = point.sqrt_price
        amount_left = sub(amount_left, max_amount_in)

    if amount_left:
        raise CurveExhaustedError(
            f"not enough liquidity: {amount_left} quote left past the last curve point"
        )

    return SegmentWalk(amount_out=total_out, next_sqrt_price=sqrt_price, segments_crossed=crossed)


def advance(
    current_sqrt_price: int,
    curve: Sequence[CurvePoint],
    amount_in: int,
    direction: TradeDirection,
    sqrt_start_price: int,
) -> SegmentWalk:
    """Output and resulting sqrt price for a fee-free ``amount_in``."""
    if direction is TradeDirection.BASE_TO_QUOTE:
        return swap_amount_from_base_to_quote(curve, current_sqrt_price, amount_in, sqrt_start_price)
    return swap_amount_from_quote_to_base(curve, current_sqrt_price, amount_in)
