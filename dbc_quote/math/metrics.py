"""Read-only views over pool snapshots: curve progress and fee totals."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from dbc_quote.models.config import PoolConfig
from dbc_quote.models.pool import VirtualPool


@dataclass(frozen=True)
class PoolFeeMetrics:
    """Unclaimed partner/creator fees and lifetime trading fees."""

    partner_base_fee: int
    partner_quote_fee: int
    creator_base_fee: int
    creator_quote_fee: int
    total_trading_base_fee: int
    total_trading_quote_fee: int


def is_curve_complete(pool: VirtualPool, config: PoolConfig) -> bool:
    return pool.quote_reserve >= config.migration_quote_threshold


def get_curve_progress(pool: VirtualPool, config: PoolConfig) -> Decimal:
    """quote_reserve / migration_quote_threshold, clamped to [0, 1]."""
    if config.migration_quote_threshold == 0:
        return Decimal(1)
    progress = Decimal(pool.quote_reserve) / Decimal(config.migration_quote_threshold)
    return min(max(progress, Decimal(0)), Decimal(1))


def get_pool_fee_metrics(pool: VirtualPool) -> PoolFeeMetrics:
    return PoolFeeMetrics(
        partner_base_fee=pool.partner_base_fee,
        partner_quote_fee=pool.partner_quote_fee,
        creator_base_fee=pool.creator_base_fee,
        creator_quote_fee=pool.creator_quote_fee,
        total_trading_base_fee=pool.metrics.total_trading_base_fee,
        total_trading_quote_fee=pool.metrics.total_trading_quote_fee,
    )
