"""Tests for PoolConfig sanity checks."""

import pytest
from conftest import CURVE, LIQUIDITY, make_config

from dbc_quote.checks import validate_curve, validate_pool_config, validate_pool_fees
from dbc_quote.constants import MAX_CURVE_POINT, MAX_FEE_NUMERATOR, MIN_SQRT_PRICE, ONE_Q64
from dbc_quote.exceptions import ConfigurationInvariantViolated
from dbc_quote.models import (
    CollectFeeMode,
    CurvePoint,
    FeeSchedulerConfig,
    FeeSchedulerMode,
    MigrationOption,
    PoolFeesConfig,
    RateLimiterConfig,
    TokenType,
)


class TestValidateCurve:
    def test_valid(self) -> None:
        validate_curve(CURVE, ONE_Q64)

    def test_empty(self) -> None:
        with pytest.raises(ConfigurationInvariantViolated):
            validate_curve((), ONE_Q64)

    def test_too_long(self) -> None:
        curve = tuple(
            CurvePoint(sqrt_price=(k + 2) * ONE_Q64, liquidity=LIQUIDITY)
            for k in range(MAX_CURVE_POINT + 1)
        )
        with pytest.raises(ConfigurationInvariantViolated):
            validate_curve(curve, ONE_Q64)

    def test_first_point_at_start_price(self) -> None:
        with pytest.raises(ConfigurationInvariantViolated):
            validate_curve(CURVE, 2 * ONE_Q64)

    def test_not_ascending(self) -> None:
        curve = (CURVE[0], CURVE[0])
        with pytest.raises(ConfigurationInvariantViolated):
            validate_curve(curve, ONE_Q64)

    def test_zero_liquidity(self) -> None:
        curve = (CURVE[0], CurvePoint(sqrt_price=4 * ONE_Q64, liquidity=0))
        with pytest.raises(ConfigurationInvariantViolated):
            validate_curve(curve, ONE_Q64)


class TestValidatePoolFees:
    def test_cliff_above_max(self) -> None:
        fees = PoolFeesConfig(base_fee=FeeSchedulerConfig(cliff_fee_numerator=MAX_FEE_NUMERATOR + 1))
        with pytest.raises(ConfigurationInvariantViolated):
            validate_pool_fees(fees, CollectFeeMode.QUOTE_TOKEN)

    def test_exponential_reduction_factor(self) -> None:
        fees = PoolFeesConfig(
            base_fee=FeeSchedulerConfig(
                cliff_fee_numerator=1000,
                mode=FeeSchedulerMode.EXPONENTIAL,
                number_of_period=2,
                period_frequency=1,
                reduction_factor=10_000,
            )
        )
        with pytest.raises(ConfigurationInvariantViolated):
            validate_pool_fees(fees, CollectFeeMode.QUOTE_TOKEN)

    def test_rate_limiter_needs_quote_mode(self) -> None:
        fees = PoolFeesConfig(
            base_fee=RateLimiterConfig(
                cliff_fee_numerator=1000,
                fee_increment_bps=10,
                max_limiter_duration=10,
                reference_amount=1_000,
            )
        )
        validate_pool_fees(fees, CollectFeeMode.QUOTE_TOKEN)
        with pytest.raises(ConfigurationInvariantViolated):
            validate_pool_fees(fees, CollectFeeMode.OUTPUT_TOKEN)

    @pytest.mark.parametrize("field", ["protocol_fee_percent", "referral_fee_percent"])
    def test_percent_above_hundred(self, field: str) -> None:
        fees = PoolFeesConfig(base_fee=FeeSchedulerConfig(cliff_fee_numerator=1000), **{field: 101})
        with pytest.raises(ConfigurationInvariantViolated):
            validate_pool_fees(fees, CollectFeeMode.QUOTE_TOKEN)


class TestValidatePoolConfig:
    def test_valid(self, one_percent_config) -> None:
        validate_pool_config(one_percent_config)

    def test_zero_threshold(self) -> None:
        with pytest.raises(ConfigurationInvariantViolated):
            validate_pool_config(make_config(migration_quote_threshold=0))

    def test_start_price_below_min(self) -> None:
        config = make_config(sqrt_start_price=MIN_SQRT_PRICE - 1)
        with pytest.raises(ConfigurationInvariantViolated):
            validate_pool_config(config)

    def test_token_2022_needs_damm_v2(self) -> None:
        config = make_config(migration_option=MigrationOption.MET_DAMM, token_type=TokenType.TOKEN_2022)
        with pytest.raises(ConfigurationInvariantViolated):
            validate_pool_config(config)
