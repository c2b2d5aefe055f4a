"""Liquidity accounting: deposits, share minting and withdrawals.

All inputs are ledger figures read by the caller immediately before the
call; nothing is cached. Results are amounts for the caller to move,
mint or burn.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from cpamm.config import DEFAULT_AMM_CONFIG, AmmConfig
from cpamm.errors import DepositTooSmall
from cpamm.math.fixed_point import FixedPoint

logger = structlog.get_logger()


@dataclass(frozen=True)
class DepositPlan:
    """Amounts to apply for a deposit.

    Attributes:
        applied_a: Amount of asset a to move from depositor to pool
        applied_b: Amount of asset b to move from depositor to pool
        minted_liquidity: Shares to mint to the depositor
        locked_liquidity: Shares permanently locked (first deposit only)
        pool_creation: True if this deposit set the pool's initial price
    """

    applied_a: int
    applied_b: int
    minted_liquidity: int
    locked_liquidity: int = 0
    pool_creation: bool = False


@dataclass(frozen=True)
class WithdrawPlan:
    """Pro-rata payout for burning liquidity shares."""

    payout_a: int
    payout_b: int


class LiquidityAccountant:
    """Deposit and withdrawal math for a constant-product pool.

    Shares are sized by the geometric mean of the deposited amounts,
    sqrt(a * b). The first deposit into an empty pool sets the price and
    forfeits `minimum_liquidity` shares, which keeps a floor under the
    pool that can never be withdrawn.
    """

    def __init__(self, config: AmmConfig = DEFAULT_AMM_CONFIG) -> None:
        self.config = config

    @staticmethod
    def is_pool_creation(reserve_a: int, reserve_b: int) -> bool:
        """True if the pool holds no reserves at all.

        Gated on reserves rather than share supply: a donation made before
        the first deposit leaves supply at zero but fixes the price, and
        every later deposit must respect it.
        """
        return reserve_a == 0 and reserve_b == 0

    def plan_deposit(
        self,
        reserve_a: int,
        reserve_b: int,
        liquidity_supply: int,
        requested_a: int,
        requested_b: int,
    ) -> DepositPlan:
        """Compute applied amounts and minted shares for a deposit.

        On a non-empty pool one leg is recomputed from the other at the
        current reserve ratio: when reserve_a > reserve_b the a leg is
        derived from requested_b, otherwise the b leg is derived from
        requested_a.

        Args:
            reserve_a: Current pool balance of asset a
            reserve_b: Current pool balance of asset b
            liquidity_supply: Outstanding shares (informational)
            requested_a: Amount of asset a offered
            requested_b: Amount of asset b offered

        Returns:
            DepositPlan with the amounts to move and mint

        Raises:
            DivisionByZero: If reserve_b is zero on a non-empty pool
            DepositTooSmall: If a first deposit mints less than the minimum
            ArithmeticOverflow: If an intermediate result is not representable
        """
        pool_creation = self.is_pool_creation(reserve_a, reserve_b)

        if pool_creation:
            applied_a, applied_b = requested_a, requested_b
        else:
            # ratio = reserve_a / reserve_b
            ratio = FixedPoint.from_int(reserve_a) / FixedPoint.from_int(reserve_b)
            if reserve_a > reserve_b:
                applied_a = (FixedPoint.from_int(requested_b) * ratio).to_u64()
                applied_b = requested_b
            else:
                applied_a = requested_a
                applied_b = (FixedPoint.from_int(requested_a) / ratio).to_u64()

        liquidity = (
            (FixedPoint.from_int(applied_a) * FixedPoint.from_int(applied_b)).sqrt().to_u64()
        )

        locked = 0
        if pool_creation:
            minimum = self.config.minimum_liquidity
            if liquidity < minimum:
                raise DepositTooSmall(f"minted {liquidity} < minimum {minimum}")
            liquidity -= minimum
            locked = minimum

        logger.debug(
            "deposit_planned",
            pool_creation=pool_creation,
            applied_a=applied_a,
            applied_b=applied_b,
            minted=liquidity,
            supply=liquidity_supply,
        )

        return DepositPlan(
            applied_a=applied_a,
            applied_b=applied_b,
            minted_liquidity=liquidity,
            locked_liquidity=locked,
            pool_creation=pool_creation,
        )

    def plan_withdraw(
        self,
        reserve_a: int,
        reserve_b: int,
        liquidity_supply: int,
        burn_amount: int,
    ) -> WithdrawPlan:
        """Compute the pro-rata payout for burning shares.

        liquidity_supply must include the locked minimum, so burning every
        withdrawable share still leaves the locked fraction in the pool.

        Raises:
            DivisionByZero: If liquidity_supply is zero
        """
        burn = FixedPoint.from_int(burn_amount)
        supply = FixedPoint.from_int(liquidity_supply)

        payout_a = (burn * FixedPoint.from_int(reserve_a) / supply).to_u64()
        payout_b = (burn * FixedPoint.from_int(reserve_b) / supply).to_u64()

        logger.debug(
            "withdraw_planned",
            burn=burn_amount,
            supply=liquidity_supply,
            payout_a=payout_a,
            payout_b=payout_b,
        )

        return WithdrawPlan(payout_a=payout_a, payout_b=payout_b)


# Singleton instance
liquidity_accountant = LiquidityAccountant()


__all__ = [
    "DepositPlan",
    "WithdrawPlan",
    "LiquidityAccountant",
    "liquidity_accountant",
]
