"""Conversions between human units and on-chain integer encodings."""

from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal, localcontext

from dbc_quote.constants import BASIS_POINT_MAX, FEE_DENOMINATOR, ONE_Q64


def bps_to_fee_numerator(bps: int) -> int:
    """1 bps = 0.01% -> 100_000 over FEE_DENOMINATOR."""
    return bps * FEE_DENOMINATOR // BASIS_POINT_MAX


def fee_numerator_to_bps(fee_numerator: int) -> int:
    return fee_numerator * BASIS_POINT_MAX // FEE_DENOMINATOR


def get_sqrt_price_from_price(
    price: Decimal | str | int, base_decimals: int, quote_decimals: int
) -> int:
    """Q64 sqrt price for a human price (quote per base), floored.

    price = (sqrt_price / 2**64) ** 2 * 10 ** (base_decimals - quote_decimals)
    """
    with localcontext() as ctx:
        ctx.prec = 60
        adjusted = Decimal(price) / (Decimal(10) ** (base_decimals - quote_decimals))
        sqrt_q64 = adjusted.sqrt() * ONE_Q64
        return int(sqrt_q64.to_integral_value(rounding=ROUND_FLOOR))


def get_price_from_sqrt_price(
    sqrt_price: int, base_decimals: int = 0, quote_decimals: int = 0
) -> Decimal:
    """Human price (quote per base) for a Q64 sqrt price."""
    with localcontext() as ctx:
        ctx.prec = 60
        raw = Decimal(sqrt_price) * Decimal(sqrt_price) / Decimal(ONE_Q64 * ONE_Q64)
        return +(raw * (Decimal(10) ** (base_decimals - quote_decimals)))
