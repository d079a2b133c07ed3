"""Overflow-checked integer arithmetic and Q64 fixed point.

Python ints never wrap, so every operation checks its result against the
U256 range the on-chain program computes in. A result outside that range
raises instead of being clamped.
"""

from __future__ import annotations

from enum import IntEnum

from dbc_quote.constants import ONE_Q64, RESOLUTION, U64_MAX, U128_MAX, U256_MAX
from dbc_quote.exceptions import ArithmeticOverflowError, ArithmeticUnderflowError


class Rounding(IntEnum):
    """Direction of every integer division."""

    UP = 0
    DOWN = 1


def _check(value: int, op: str) -> int:
    if value < 0:
        raise ArithmeticUnderflowError(f"{op} underflow: {value}")
    if value > U256_MAX:
        raise ArithmeticOverflowError(f"{op} overflow: result exceeds 256 bits")
    return value


def add(a: int, b: int) -> int:
    return _check(a + b, "add")


def sub(a: int, b: int) -> int:
    return _check(a - b, "sub")


def mul(a: int, b: int) -> int:
    return _check(a * b, "mul")


def div(a: int, b: int, rounding: Rounding = Rounding.DOWN) -> int:
    if b == 0:
        raise ArithmeticOverflowError("division by zero")
    _check(a, "div")
    quotient, remainder = divmod(a, b)
    if rounding is Rounding.UP and remainder:
        quotient += 1
    return quotient


def shl(a: int, bits: int) -> int:
    """a << bits, failing if any set bit is pushed past 256."""
    return _check(a << bits, "shl")


def shr(a: int, bits: int) -> int:
    return _check(a, "shr") >> bits


def mul_div(x: int, y: int, denominator: int, rounding: Rounding) -> int:
    """(x * y) / denominator with an exact wide intermediate.

    The product is never truncated before the division, so the result is
    exact up to the single rounding step selected by ``rounding``.
    """
    if denominator == 0:
        raise ArithmeticOverflowError("mul_div: division by zero")
    prod = _check(x, "mul_div") * _check(y, "mul_div")
    quotient, remainder = divmod(prod, denominator)
    if rounding is Rounding.UP and remainder:
        quotient += 1
    return _check(quotient, "mul_div")


def mul_shr(x: int, y: int, offset: int) -> int:
    """(x * y) >> offset, rounding down."""
    return _check((_check(x, "mul_shr") * _check(y, "mul_shr")) >> offset, "mul_shr")


def pow_q64(base: int, exponent: int) -> int:
    """base ** exponent in Q64 fixed point via square-and-multiply.

    ``base`` is Q64 scaled; each multiply is widened then shifted right by
    64, which is the floor of dividing by ONE_Q64.
    """
    if exponent < 0:
        raise ValueError(f"pow_q64: negative exponent {exponent}")
    if exponent == 0:
        return ONE_Q64
    if base == 0:
        return 0
    if base == ONE_Q64:
        return ONE_Q64

    result = ONE_Q64
    current = base
    exp = exponent
    while exp:
        if exp & 1:
            result = mul_shr(result, current, RESOLUTION)
        exp >>= 1
        if exp:
            current = mul_shr(current, current, RESOLUTION)
    return result


def to_u64(value: int) -> int:
    """Narrow to u64 the way the program's ``try_into`` does."""
    if value < 0:
        raise ArithmeticUnderflowError(f"negative value {value} does not fit u64")
    if value > U64_MAX:
        raise ArithmeticOverflowError(f"value {value} does not fit u64")
    return value


def to_u128(value: int) -> int:
    if value < 0:
        raise ArithmeticUnderflowError(f"negative value {value} does not fit u128")
    if value > U128_MAX:
        raise ArithmeticOverflowError(f"value {value} does not fit u128")
    return value
