"""Pydantic v2 models for the DBC VirtualPool account."""

from pydantic import BaseModel, Field

from dbc_quote.models.config import U64, U128


class VolatilityTracker(BaseModel):
    last_update_timestamp: U64 = 0
    sqrt_price_reference: U128 = 0
    volatility_accumulator: U128 = 0
    volatility_reference: U128 = 0

    model_config = {"extra": "ignore", "frozen": True}


class PoolMetrics(BaseModel):
    """Lifetime fee accumulators."""

    total_protocol_base_fee: U64 = 0
    total_protocol_quote_fee: U64 = 0
    total_trading_base_fee: U64 = 0
    total_trading_quote_fee: U64 = 0

    model_config = {"extra": "ignore", "frozen": True}


class VirtualPool(BaseModel):
    """Read-only snapshot of a VirtualPool account.

    The quote engine never mutates it; derive a new snapshot with
    ``model_copy(update=...)`` to simulate a follow-up trade.
    """

    address: str | None = None
    config: str | None = None
    creator: str | None = None
    base_mint: str | None = None
    base_vault: str | None = None
    quote_vault: str | None = None
    base_reserve: U64 = 0
    quote_reserve: U64 = 0
    protocol_base_fee: U64 = 0
    protocol_quote_fee: U64 = 0
    partner_base_fee: U64 = 0
    partner_quote_fee: U64 = 0
    creator_base_fee: U64 = 0
    creator_quote_fee: U64 = 0
    sqrt_price: U128
    activation_point: U64 = 0
    pool_type: int = Field(default=0, ge=0, le=255)
    is_migrated: bool = False
    finish_curve_timestamp: U64 = 0
    volatility_tracker: VolatilityTracker = VolatilityTracker()
    metrics: PoolMetrics = PoolMetrics()

    model_config = {"extra": "ignore", "frozen": True}
