from dbc_quote.models.config import (
    ActivationType,
    BaseFeeMode,
    CollectFeeMode,
    CurvePoint,
    DynamicFeeConfig,
    FeeSchedulerConfig,
    FeeSchedulerMode,
    MigrationOption,
    PoolConfig,
    PoolFeesConfig,
    RateLimiterConfig,
    TokenType,
    base_fee_from_factors,
)
from dbc_quote.models.pool import PoolMetrics, VirtualPool, VolatilityTracker
from dbc_quote.models.quote import (
    FeeBreakdown,
    FeeMode,
    FeeOnAmountResult,
    QuoteResult,
    SegmentWalk,
    TradeDirection,
)

__all__ = [
    "ActivationType",
    "BaseFeeMode",
    "CollectFeeMode",
    "CurvePoint",
    "DynamicFeeConfig",
    "FeeSchedulerConfig",
    "FeeSchedulerMode",
    "MigrationOption",
    "PoolConfig",
    "PoolFeesConfig",
    "RateLimiterConfig",
    "TokenType",
    "base_fee_from_factors",
    "PoolMetrics",
    "VirtualPool",
    "VolatilityTracker",
    "FeeBreakdown",
    "FeeMode",
    "FeeOnAmountResult",
    "QuoteResult",
    "SegmentWalk",
    "TradeDirection",
]
