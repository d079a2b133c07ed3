"""Constant-liquidity curve primitives on Q64 sqrt prices.

Liquidity is scaled so that quote deltas carry a 2**128 factor:

    delta_base  = L * (sqrt_upper - sqrt_lower) / (sqrt_lower * sqrt_upper)
    delta_quote = L * (sqrt_upper - sqrt_lower) / 2**128
"""

from __future__ import annotations

from dbc_quote.constants import RESOLUTION
from dbc_quote.exceptions import ConfigurationInvariantViolated
from dbc_quote.math.safe_math import Rounding, add, div, mul, mul_div, shl, shr, sub


def get_delta_amount_base_unsigned(
    lower_sqrt_price: int, upper_sqrt_price: int, liquidity: int, rounding: Rounding
) -> int:
    denominator = mul(lower_sqrt_price, upper_sqrt_price)
    if denominator == 0:
        raise ConfigurationInvariantViolated("sqrt price bound cannot be zero")
    return mul_div(liquidity, sub(upper_sqrt_price, lower_sqrt_price), denominator, rounding)


def get_delta_amount_quote_unsigned(
    lower_sqrt_price: int, upper_sqrt_price: int, liquidity: int, rounding: Rounding
) -> int:
    prod = mul(liquidity, sub(upper_sqrt_price, lower_sqrt_price))
    if rounding is Rounding.UP:
        return div(prod, 1 << (RESOLUTION * 2), Rounding.UP)
    return shr(prod, RESOLUTION * 2)


def get_next_sqrt_price_from_amount_base_rounding_up(
    sqrt_price: int, liquidity: int, amount: int
) -> int:
    """sqrt' = L * sqrt / (L + amount * sqrt), rounded up so the price never overshoots."""
    if amount == 0:
        return sqrt_price
    denominator = add(liquidity, mul(amount, sqrt_price))
    return mul_div(liquidity, sqrt_price, denominator, Rounding.UP)


def get_next_sqrt_price_from_amount_quote_rounding_down(
    sqrt_price: int, liquidity: int, amount: int
) -> int:
    """sqrt' = sqrt + (amount << 128) / L."""
    return add(sqrt_price, div(shl(amount, RESOLUTION * 2), liquidity))


def get_next_sqrt_price_from_input(
    sqrt_price: int, liquidity: int, amount_in: int, base_for_quote: bool
) -> int:
    if sqrt_price == 0 or liquidity == 0:
        raise ConfigurationInvariantViolated("sqrt price and liquidity must be non-zero")
    if base_for_quote:
        return get_next_sqrt_price_from_amount_base_rounding_up(sqrt_price, liquidity, amount_in)
    return get_next_sqrt_price_from_amount_quote_rounding_down(sqrt_price, liquidity, amount_in)


def swap_within_segment(
    sqrt_price: int, liquidity: int, amount_in: int, base_for_quote: bool
) -> tuple[int, int]:
    """Output and next sqrt price for a trade that stays inside one segment.

    Outputs round down.
    """
    next_sqrt_price = get_next_sqrt_price_from_input(sqrt_price, liquidity, amount_in, base_for_quote)
    if base_for_quote:
        amount_out = get_delta_amount_quote_unsigned(
            next_sqrt_price, sqrt_price, liquidity, Rounding.DOWN
        )
    else:
        amount_out = get_delta_amount_base_unsigned(
            sqrt_price, next_sqrt_price, liquidity, Rounding.DOWN
        )
    return amount_out, next_sqrt_price


def get_initial_liquidity_from_delta_quote(
    quote_amount: int, sqrt_min_price: int, sqrt_price: int
) -> int:
    """L = (quote << 128) / (sqrt_price - sqrt_min_price)."""
    price_delta = sub(sqrt_price, sqrt_min_price)
    return div(shl(quote_amount, RESOLUTION * 2), price_delta)


def get_initialize_amounts(
    sqrt_min_price: int, sqrt_max_price: int, sqrt_price: int, liquidity: int
) -> tuple[int, int]:
    """Base and quote needed to seed ``liquidity`` at ``sqrt_price``, both rounded up."""
    amount_base = get_delta_amount_base_unsigned(sqrt_price, sqrt_max_price, liquidity, Rounding.UP)
    amount_quote = get_delta_amount_quote_unsigned(sqrt_min_price, sqrt_price, liquidity, Rounding.UP)
    return amount_base, amount_quote
