"""Pydantic v2 models for the DBC PoolConfig account (partner config)."""

from enum import Enum, IntEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

U64 = Annotated[int, Field(ge=0, le=(1 << 64) - 1)]
U128 = Annotated[int, Field(ge=0, le=(1 << 128) - 1)]


class CollectFeeMode(IntEnum):
    QUOTE_TOKEN = 0
    OUTPUT_TOKEN = 1


class ActivationType(IntEnum):
    SLOT = 0
    TIMESTAMP = 1


class TokenType(IntEnum):
    SPL = 0
    TOKEN_2022 = 1


class MigrationOption(IntEnum):
    MET_DAMM = 0
    MET_DAMM_V2 = 1


class BaseFeeMode(IntEnum):
    """On-chain ``base_fee_mode`` byte."""

    FEE_SCHEDULER_LINEAR = 0
    FEE_SCHEDULER_EXPONENTIAL = 1
    RATE_LIMITER = 2


class FeeSchedulerMode(str, Enum):
    CONSTANT = "constant"
    LINEAR = "linear"
    EXPONENTIAL = "exponential"


class CurvePoint(BaseModel):
    """One liquidity segment: ``liquidity`` applies up to ``sqrt_price`` (Q64)."""

    sqrt_price: U128
    liquidity: U128

    model_config = {"extra": "ignore", "frozen": True}


class FeeSchedulerConfig(BaseModel):
    """Base fee decaying from ``cliff_fee_numerator`` every ``period_frequency`` points."""

    kind: Literal["fee_scheduler"] = "fee_scheduler"
    cliff_fee_numerator: U64
    mode: FeeSchedulerMode = FeeSchedulerMode.CONSTANT
    number_of_period: int = Field(default=0, ge=0, le=0xFFFF)
    period_frequency: U64 = 0
    reduction_factor: U64 = 0

    model_config = {"extra": "ignore", "frozen": True}


class RateLimiterConfig(BaseModel):
    """Base fee that grows with trade size above ``reference_amount``.

    ``cliff_fee_numerator`` is the floor; MAX_FEE_NUMERATOR is the ceiling.
    """

    kind: Literal["rate_limiter"] = "rate_limiter"
    cliff_fee_numerator: U64
    fee_increment_bps: int = Field(ge=0, le=10_000)
    max_limiter_duration: U64
    reference_amount: U64

    model_config = {"extra": "ignore", "frozen": True}


BaseFee = Annotated[FeeSchedulerConfig | RateLimiterConfig, Field(discriminator="kind")]


class DynamicFeeConfig(BaseModel):
    initialized: bool = False
    max_volatility_accumulator: int = Field(default=0, ge=0, le=0xFFFFFFFF)
    variable_fee_control: int = Field(default=0, ge=0, le=0xFFFFFFFF)
    bin_step: int = Field(default=0, ge=0, le=0xFFFF)
    bin_step_u128: U128 = 0
    filter_period: int = Field(default=0, ge=0, le=0xFFFF)
    decay_period: int = Field(default=0, ge=0, le=0xFFFF)
    reduction_factor: int = Field(default=0, ge=0, le=0xFFFF)

    model_config = {"extra": "ignore", "frozen": True}


class PoolFeesConfig(BaseModel):
    base_fee: BaseFee
    dynamic_fee: DynamicFeeConfig = DynamicFeeConfig()
    protocol_fee_percent: int = Field(default=20, ge=0, le=255)
    referral_fee_percent: int = Field(default=0, ge=0, le=255)

    model_config = {"extra": "ignore", "frozen": True}


class PoolConfig(BaseModel):
    """Read-only snapshot of a PoolConfig account.

    Percent fields accept the raw u8 range; whether they are sane is
    checked by ``dbc_quote.checks``, not by the model.
    """

    address: str | None = None
    quote_mint: str | None = None
    fee_claimer: str | None = None
    collect_fee_mode: CollectFeeMode = CollectFeeMode.QUOTE_TOKEN
    activation_type: ActivationType = ActivationType.SLOT
    token_type: TokenType = TokenType.SPL
    quote_token_flag: TokenType = TokenType.SPL
    migration_option: MigrationOption = MigrationOption.MET_DAMM_V2
    token_decimal: int = Field(default=6, ge=0, le=18)
    swap_base_amount: U64 = 0
    migration_quote_threshold: U64
    migration_base_threshold: U64 = 0
    migration_sqrt_price: U128 = 0
    sqrt_start_price: U128
    pool_fees: PoolFeesConfig
    curve: tuple[CurvePoint, ...]

    model_config = {"extra": "ignore", "frozen": True}


def base_fee_from_factors(
    *,
    cliff_fee_numerator: int,
    first_factor: int,
    second_factor: int,
    third_factor: int,
    base_fee_mode: int,
) -> FeeSchedulerConfig | RateLimiterConfig:
    """Build the tagged base fee from the raw on-chain BaseFeeConfig fields.

    Fee scheduler: first = number_of_period, second = period_frequency,
    third = reduction_factor.
    Rate limiter: first = fee_increment_bps, second = max_limiter_duration,
    third = reference_amount.
    """
    mode = BaseFeeMode(base_fee_mode)
    if mode is BaseFeeMode.RATE_LIMITER:
        return RateLimiterConfig(
            cliff_fee_numerator=cliff_fee_numerator,
            fee_increment_bps=first_factor,
            max_limiter_duration=second_factor,
            reference_amount=third_factor,
        )

    if second_factor == 0 or first_factor == 0:
        scheduler_mode = FeeSchedulerMode.CONSTANT
    elif mode is BaseFeeMode.FEE_SCHEDULER_LINEAR:
        scheduler_mode = FeeSchedulerMode.LINEAR
    else:
        scheduler_mode = FeeSchedulerMode.EXPONENTIAL
    return FeeSchedulerConfig(
        cliff_fee_numerator=cliff_fee_numerator,
        mode=scheduler_mode,
        number_of_period=first_factor,
        period_frequency=second_factor,
        reduction_factor=third_factor,
    )
