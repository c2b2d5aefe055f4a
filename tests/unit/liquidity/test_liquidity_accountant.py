"""Tests for deposit and withdrawal accounting."""

import pytest

from cpamm.config import AmmConfig
from cpamm.errors import DepositTooSmall, DivisionByZero
from cpamm.liquidity import DepositPlan, LiquidityAccountant, WithdrawPlan, liquidity_accountant


@pytest.fixture
def accountant() -> LiquidityAccountant:
    return LiquidityAccountant()


class TestPoolCreation:
    """First deposit into a pool with no reserves."""

    def test_first_deposit_locks_minimum(self, accountant: LiquidityAccountant):
        # sqrt(1000 * 2000) = 1414.21..., 100 locked
        plan = accountant.plan_deposit(0, 0, 0, 1000, 2000)
        assert plan == DepositPlan(
            applied_a=1000,
            applied_b=2000,
            minted_liquidity=1314,
            locked_liquidity=100,
            pool_creation=True,
        )

    def test_deposit_below_minimum_rejected(self, accountant: LiquidityAccountant):
        with pytest.raises(DepositTooSmall) as exc_info:
            accountant.plan_deposit(0, 0, 0, 5, 5)
        assert exc_info.value.code == 6002

    def test_deposit_at_minimum_mints_nothing(self, accountant: LiquidityAccountant):
        plan = accountant.plan_deposit(0, 0, 0, 100, 100)
        assert plan.minted_liquidity == 0
        assert plan.locked_liquidity == 100

    def test_creation_is_gated_on_reserves(self, accountant: LiquidityAccountant):
        """A donation before the first deposit fixes the price."""
        assert LiquidityAccountant.is_pool_creation(0, 0)
        assert not LiquidityAccountant.is_pool_creation(5, 5)

        plan = accountant.plan_deposit(5, 5, 0, 10, 20)
        assert not plan.pool_creation
        assert plan.applied_a == 10
        assert plan.applied_b == 10
        assert plan.minted_liquidity == 10
        assert plan.locked_liquidity == 0

    def test_one_sided_reserves_divide_by_zero(self, accountant: LiquidityAccountant):
        with pytest.raises(DivisionByZero):
            accountant.plan_deposit(10, 0, 0, 10, 10)
        with pytest.raises(DivisionByZero):
            accountant.plan_deposit(0, 10, 0, 10, 10)

    def test_custom_minimum(self):
        plan = LiquidityAccountant(AmmConfig(minimum_liquidity=1000)).plan_deposit(
            0, 0, 0, 1000, 2000
        )
        assert plan.minted_liquidity == 414
        assert plan.locked_liquidity == 1000

    def test_zero_minimum(self):
        plan = LiquidityAccountant(AmmConfig(minimum_liquidity=0)).plan_deposit(
            0, 0, 0, 1000, 2000
        )
        assert plan.minted_liquidity == 1414
        assert plan.locked_liquidity == 0


class TestRatioAdjustment:
    """Subsequent deposits follow the reserve ratio."""

    def test_a_heavy_pool_derives_a_from_b(self, accountant: LiquidityAccountant):
        """The derived a leg can exceed the requested amount.

        With reserve_a > reserve_b the a leg is requested_b * ratio, so a
        50/50 request on 200/100 reserves applies 100 of asset a: more than
        was offered. The instruction layer relies on the ledger transfer to
        reject a depositor who cannot cover it.
        """
        plan = accountant.plan_deposit(200, 100, 141, 50, 50)
        assert (plan.applied_a, plan.applied_b) == (100, 50)
        assert plan.minted_liquidity == 70
        assert plan.locked_liquidity == 0

    def test_b_heavy_pool_derives_b_from_a(self, accountant: LiquidityAccountant):
        # ratio 0.5, b = 50 / 0.5
        plan = accountant.plan_deposit(100, 200, 141, 50, 300)
        assert (plan.applied_a, plan.applied_b) == (50, 100)

    def test_equal_reserves_derive_b_from_a(self, accountant: LiquidityAccountant):
        plan = accountant.plan_deposit(500, 500, 500, 40, 90)
        assert (plan.applied_a, plan.applied_b) == (40, 40)

    def test_fractional_ratio_truncates(self, accountant: LiquidityAccountant):
        # 3 * (1000 / 300) lands just below 10 in fixed point
        plan = accountant.plan_deposit(1000, 300, 547, 100, 3)
        assert plan.applied_a == 9
        assert plan.applied_b == 3


class TestWithdraw:
    def test_pro_rata_payout(self, accountant: LiquidityAccountant):
        assert accountant.plan_withdraw(1000, 2000, 1414, 707) == WithdrawPlan(500, 1000)

    def test_zero_burn(self, accountant: LiquidityAccountant):
        assert accountant.plan_withdraw(1000, 2000, 1414, 0) == WithdrawPlan(0, 0)

    def test_zero_supply_divides_by_zero(self, accountant: LiquidityAccountant):
        with pytest.raises(DivisionByZero):
            accountant.plan_withdraw(1000, 2000, 0, 10)

    def test_withdraw_after_first_deposit_keeps_locked_share(
        self, accountant: LiquidityAccountant
    ):
        """Burning every withdrawable share leaves the locked fraction behind."""
        deposit = accountant.plan_deposit(0, 0, 0, 1000, 2000)
        supply = deposit.minted_liquidity + deposit.locked_liquidity

        plan = accountant.plan_withdraw(1000, 2000, supply, deposit.minted_liquidity)
        assert plan == WithdrawPlan(929, 1858)

    def test_burning_whole_supply_pays_everything(self, accountant: LiquidityAccountant):
        assert accountant.plan_withdraw(1000, 2000, 1414, 1414) == WithdrawPlan(1000, 2000)


def test_singleton_uses_default_config():
    assert liquidity_accountant.config.minimum_liquidity == 100
