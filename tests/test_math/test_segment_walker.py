"""Tests for walking amounts across curve segments."""

import pytest
from conftest import CURVE, CURVE_QUOTE_CAPACITY, LIQUIDITY, SQRT_START

from dbc_quote.constants import MAX_CURVE_POINT, ONE_Q64
from dbc_quote.exceptions import ConfigurationInvariantViolated, CurveExhaustedError
from dbc_quote.math.curve import (
    get_delta_amount_base_unsigned,
    get_delta_amount_quote_unsigned,
    swap_within_segment,
)
from dbc_quote.math.safe_math import Rounding
from dbc_quote.math.segment_walker import (
    advance,
    swap_amount_from_base_to_quote,
    swap_amount_from_quote_to_base,
)
from dbc_quote.models import CurvePoint, TradeDirection

LONG_CURVE = tuple(
    CurvePoint(sqrt_price=(k + 2) * ONE_Q64, liquidity=LIQUIDITY) for k in range(MAX_CURVE_POINT)
)


class TestBuyWalk:
    def test_single_segment_matches_closed_form(self) -> None:
        walk = swap_amount_from_quote_to_base(CURVE, SQRT_START, 500_000_000)
        amount_out, next_price = swap_within_segment(SQRT_START, LIQUIDITY, 500_000_000, False)
        assert (walk.amount_out, walk.next_sqrt_price) == (amount_out, next_price)
        assert walk.segments_crossed == 1

    def test_exact_segment_boundary(self) -> None:
        walk = swap_amount_from_quote_to_base(CURVE, SQRT_START, 1_000_000_000)
        assert walk.amount_out == 500_000_000
        assert walk.next_sqrt_price == 2 * ONE_Q64
        assert walk.segments_crossed == 1

    def test_crosses_into_second_segment(self) -> None:
        walk = swap_amount_from_quote_to_base(CURVE, SQRT_START, 2_000_000_000)
        # 5e8 from segment 0, 1e9 / 6 from segment 1
        assert walk.amount_out == 500_000_000 + 166_666_666
        assert walk.next_sqrt_price == 3 * ONE_Q64
        assert walk.segments_crossed == 2

    def test_drains_whole_curve(self) -> None:
        walk = swap_amount_from_quote_to_base(CURVE, SQRT_START, CURVE_QUOTE_CAPACITY)
        assert walk.amount_out == 750_000_000
        assert walk.next_sqrt_price == 4 * ONE_Q64

    def test_beyond_last_point(self) -> None:
        with pytest.raises(CurveExhaustedError):
            swap_amount_from_quote_to_base(CURVE, SQRT_START, CURVE_QUOTE_CAPACITY + 1)

    def test_iterations_bounded(self) -> None:
        walk = swap_amount_from_quote_to_base(LONG_CURVE, SQRT_START, 16_000_000_000)
        assert walk.segments_crossed == MAX_CURVE_POINT
        assert walk.next_sqrt_price == 17 * ONE_Q64

    def test_too_many_points(self) -> None:
        curve = LONG_CURVE + (CurvePoint(sqrt_price=30 * ONE_Q64, liquidity=LIQUIDITY),)
        with pytest.raises(ConfigurationInvariantViolated):
            swap_amount_from_quote_to_base(curve, SQRT_START, 1)


class TestSellWalk:
    def test_back_to_start(self) -> None:
        walk = swap_amount_from_base_to_quote(CURVE, 2 * ONE_Q64, 500_000_000, SQRT_START)
        assert walk.amount_out == 1_000_000_000
        assert walk.next_sqrt_price == SQRT_START

    def test_crosses_both_segments(self) -> None:
        walk = swap_amount_from_base_to_quote(CURVE, 4 * ONE_Q64, 750_000_000, SQRT_START)
        assert walk.amount_out == CURVE_QUOTE_CAPACITY
        assert walk.next_sqrt_price == SQRT_START
        assert walk.segments_crossed == 2

    def test_partial_fill(self) -> None:
        walk = swap_amount_from_base_to_quote(CURVE, 3 * ONE_Q64, 100_000_000, SQRT_START)
        assert walk.amount_out > 0
        assert 2 * ONE_Q64 < walk.next_sqrt_price < 3 * ONE_Q64
        assert walk.segments_crossed == 1

    def test_below_start_price(self) -> None:
        with pytest.raises(CurveExhaustedError):
            swap_amount_from_base_to_quote(CURVE, 2 * ONE_Q64, 500_000_001, SQRT_START)

    def test_rounded_up_max_cannot_cross_start_price(self) -> None:
        price = 28946702205375066614
        max_in = get_delta_amount_base_unsigned(SQRT_START, price, LIQUIDITY, Rounding.UP)
        with pytest.raises(CurveExhaustedError):
            swap_amount_from_base_to_quote(CURVE, price, max_in, SQRT_START)

    def test_sell_to_start_price_stays_bounded(self) -> None:
        price = 28946702205375066614
        max_in = get_delta_amount_base_unsigned(SQRT_START, price, LIQUIDITY, Rounding.UP)
        walk = swap_amount_from_base_to_quote(CURVE, price, max_in - 1, SQRT_START)
        assert walk.next_sqrt_price >= SQRT_START
        assert walk.amount_out <= get_delta_amount_quote_unsigned(
            SQRT_START, price, LIQUIDITY, Rounding.DOWN
        )

    def test_price_above_last_point(self) -> None:
        with pytest.raises(ConfigurationInvariantViolated):
            swap_amount_from_base_to_quote(CURVE, 5 * ONE_Q64, 1, SQRT_START)


class TestRoundTrip:
    @pytest.mark.parametrize("quote_in", [1_000_000_000, 777_777_777, 2_345_678_901])
    def test_never_returns_more_than_paid(self, quote_in: int) -> None:
        buy = advance(SQRT_START, CURVE, quote_in, TradeDirection.QUOTE_TO_BASE, SQRT_START)
        sell = advance(
            buy.next_sqrt_price, CURVE, buy.amount_out, TradeDirection.BASE_TO_QUOTE, SQRT_START
        )
        assert sell.amount_out <= quote_in
        # one base unit lost to flooring is worth at most the top price (16) in quote
        assert quote_in - sell.amount_out <= 32
