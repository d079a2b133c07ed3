"""Result types produced by the quote engine."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import IntEnum


class TradeDirection(IntEnum):
    BASE_TO_QUOTE = 0
    QUOTE_TO_BASE = 1


@dataclass(frozen=True)
class FeeMode:
    """Where the fee is charged for one trade."""

    fees_on_input: bool
    fees_on_base_token: bool
    has_referral: bool


@dataclass(frozen=True)
class FeeOnAmountResult:
    """Fee taken from one amount, split by recipient.

    ``amount`` is what remains after the whole fee; ``trading_fee``,
    ``protocol_fee`` and ``referral_fee`` add up to the fee taken.
    """

    amount: int
    trading_fee: int
    protocol_fee: int
    referral_fee: int
    fee_numerator: int

    @property
    def total_fee(self) -> int:
        return self.trading_fee + self.protocol_fee + self.referral_fee


@dataclass(frozen=True)
class SegmentWalk:
    """Outcome of walking the curve with a fee-free amount."""

    amount_out: int
    next_sqrt_price: int
    segments_crossed: int


@dataclass(frozen=True)
class FeeBreakdown:
    trading: int = 0
    protocol: int = 0
    referral: int = 0

    @property
    def total(self) -> int:
        return self.trading + self.protocol + self.referral


@dataclass(frozen=True)
class QuoteResult:
    """Priced exact-in quote. ``minimum_amount_out`` feeds the swap instruction."""

    amount_in: int
    amount_out: int
    minimum_amount_out: int
    next_sqrt_price: int
    fee: FeeBreakdown
    fee_numerator: int
    price_before: Decimal
    price_after: Decimal
    segments_crossed: int = 0
