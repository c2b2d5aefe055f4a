"""AMM instructions against a ledger.

AmmProgram is the ledger-integration layer around the pure core: it
checks that the records passed in match what is stored, reads reserves
and supply, clamps requests to the caller's balances, asks the
accountant or swap engine for exact amounts, and applies them. Every
instruction runs inside one ledger atomic section, so a failure at any
step leaves balances untouched.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from cpamm.config import DEFAULT_AMM_CONFIG, AmmConfig
from cpamm.constants import LOCKED_LIQUIDITY_HOLDER
from cpamm.errors import AccountMismatch, AmmError, Unauthorized
from cpamm.ledger.base import Holding, Ledger, PoolAuthority, Signer
from cpamm.liquidity import DepositPlan, LiquidityAccountant, WithdrawPlan
from cpamm.models.requests import DepositRequest, SwapRequest, WithdrawRequest
from cpamm.pools.registry import MarketStore, create_market, create_pool
from cpamm.pools.types import Market, Pool
from cpamm.swap import SwapEngine, SwapQuote

logger = structlog.get_logger()


class AmmProgram:
    """Executes market, pool, liquidity and swap instructions.

    Args:
        ledger: Balance-holding collaborator
        store: Market/pool records (a fresh store if omitted)
        config: Core configuration
    """

    def __init__(
        self,
        ledger: Ledger,
        store: MarketStore | None = None,
        config: AmmConfig = DEFAULT_AMM_CONFIG,
    ) -> None:
        self.ledger = ledger
        self.store = store if store is not None else MarketStore()
        self.config = config
        self.accountant = LiquidityAccountant(config)
        self.swap_engine = SwapEngine(config)

    @contextmanager
    def _instruction(self, name: str, **context: object) -> Iterator[None]:
        with self.ledger.atomic():
            try:
                yield
            except AmmError as err:
                logger.warning(
                    "instruction_failed",
                    instruction=name,
                    error=type(err).__name__,
                    code=err.code,
                    detail=err.detail,
                    **context,
                )
                raise

    # --- Account reads and checks ---

    def _load_pool(self, pool: Pool) -> Pool:
        stored = self.store.get_pool(pool.market_ref, pool.asset_a_id, pool.asset_b_id)
        if stored != pool:
            raise AccountMismatch(f"pool {pool.key}")
        return stored

    def _load_market_for(self, pool: Pool, market: Market) -> Market:
        if pool.market_ref != market.key:
            raise AccountMismatch(f"pool {pool.key} does not belong to market {market.id}")
        stored = self.store.get_market(market.key)
        if stored != market:
            raise AccountMismatch(f"market {market.id}")
        return stored

    def reserves(self, pool: Pool) -> tuple[int, int]:
        """Current (reserve_a, reserve_b) of a pool."""
        return (
            self.ledger.balance(Holding(pool.authority, pool.asset_a_id)),
            self.ledger.balance(Holding(pool.authority, pool.asset_b_id)),
        )

    def liquidity_supply(self, pool: Pool) -> int:
        """Outstanding shares, including the locked minimum."""
        return self.ledger.supply(pool.liquidity_asset_id)

    def liquidity_balance(self, pool: Pool, owner: str) -> int:
        return self.ledger.balance(Holding(owner, pool.liquidity_asset_id))

    # --- Instructions ---

    def create_amm(self, admin: str, id: str, fee_bps: int) -> Market:
        """Create and store a market.

        Raises:
            InvalidFee: If fee_bps >= 10000
            AccountAlreadyExists: If a market with this id exists
        """
        with self._instruction("create_amm", market_id=id, fee_bps=fee_bps):
            market = self.store.add_market(create_market(admin, id, fee_bps, self.config))
        logger.info("amm_created", market=market.key[:8], admin=admin, fee_bps=fee_bps)
        return market

    def create_pool(self, market: Market, asset_a_id: str, asset_b_id: str) -> Pool:
        """Create and store a pool, and register its liquidity-share asset.

        Raises:
            InvalidMint: If the assets are the same
            AccountNotFound: If the market is not stored
            AccountAlreadyExists: If the pool exists
        """
        with self._instruction("create_pool", asset_a=asset_a_id, asset_b=asset_b_id):
            stored_market = self.store.get_market(market.key)
            pool = create_pool(stored_market, asset_a_id, asset_b_id)
            self.ledger.create_asset(pool.liquidity_asset_id, mint_authority=pool.authority)
            self.store.add_pool(pool)
        logger.info("pool_created", pool=pool.key[:8], asset_a=asset_a_id, asset_b=asset_b_id)
        return pool

    def deposit_liquidity(
        self, pool: Pool, depositor: Signer, request: DepositRequest
    ) -> DepositPlan:
        """Deposit into a pool and mint shares to the depositor.

        Each requested leg is first clamped to the depositor's balance.

        Raises:
            DepositTooSmall: If a first deposit is below the minimum liquidity
            InsufficientFunds: If a ratio-adjusted leg exceeds the balance
        """
        with self._instruction("deposit_liquidity", pool=pool.key[:8]):
            pool = self._load_pool(pool)
            holding_a = Holding(depositor.owner, pool.asset_a_id)
            holding_b = Holding(depositor.owner, pool.asset_b_id)
            amount_a = min(request.amount_a, self.ledger.balance(holding_a))
            amount_b = min(request.amount_b, self.ledger.balance(holding_b))

            reserve_a, reserve_b = self.reserves(pool)
            plan = self.accountant.plan_deposit(
                reserve_a, reserve_b, self.liquidity_supply(pool), amount_a, amount_b
            )

            self.ledger.transfer(
                holding_a, Holding(pool.authority, pool.asset_a_id), plan.applied_a, depositor
            )
            self.ledger.transfer(
                holding_b, Holding(pool.authority, pool.asset_b_id), plan.applied_b, depositor
            )

            authority = PoolAuthority.for_pool(pool)
            self.ledger.mint(
                Holding(depositor.owner, pool.liquidity_asset_id),
                plan.minted_liquidity,
                authority,
            )
            if plan.locked_liquidity:
                self.ledger.mint(
                    Holding(LOCKED_LIQUIDITY_HOLDER, pool.liquidity_asset_id),
                    plan.locked_liquidity,
                    authority,
                )

        logger.info(
            "liquidity_deposited",
            pool=pool.key[:8],
            depositor=depositor.owner,
            amount_a=plan.applied_a,
            amount_b=plan.applied_b,
            minted=plan.minted_liquidity,
            pool_creation=plan.pool_creation,
        )
        return plan

    def withdraw_liquidity(
        self, pool: Pool, owner: Signer, request: WithdrawRequest
    ) -> WithdrawPlan:
        """Burn shares and pay out both reserves pro rata.

        Raises:
            Unauthorized: If the owner is the locked-liquidity holder
            InsufficientFunds: If the owner holds fewer shares than requested
        """
        with self._instruction("withdraw_liquidity", pool=pool.key[:8]):
            if owner.owner == LOCKED_LIQUIDITY_HOLDER:
                raise Unauthorized("locked liquidity cannot be withdrawn")
            pool = self._load_pool(pool)
            reserve_a, reserve_b = self.reserves(pool)
            plan = self.accountant.plan_withdraw(
                reserve_a, reserve_b, self.liquidity_supply(pool), request.amount
            )

            self.ledger.burn(Holding(owner.owner, pool.liquidity_asset_id), request.amount, owner)

            authority = PoolAuthority.for_pool(pool)
            self.ledger.transfer(
                Holding(pool.authority, pool.asset_a_id),
                Holding(owner.owner, pool.asset_a_id),
                plan.payout_a,
                authority,
            )
            self.ledger.transfer(
                Holding(pool.authority, pool.asset_b_id),
                Holding(owner.owner, pool.asset_b_id),
                plan.payout_b,
                authority,
            )

        logger.info(
            "liquidity_withdrawn",
            pool=pool.key[:8],
            owner=owner.owner,
            burned=request.amount,
            payout_a=plan.payout_a,
            payout_b=plan.payout_b,
        )
        return plan

    def swap_exact_tokens_for_tokens(
        self, market: Market, pool: Pool, trader: Signer, request: SwapRequest
    ) -> SwapQuote:
        """Swap an exact input for at least `min_output_amount`.

        The input is clamped to the trader's balance of the input asset.

        Raises:
            OutputTooSmall: If the output is below min_output_amount
            InvariantViolated: If the reserve product decreased
        """
        with self._instruction(
            "swap_exact_tokens_for_tokens", pool=pool.key[:8], direction=request.direction.value
        ):
            pool = self._load_pool(pool)
            market = self._load_market_for(pool, market)

            asset_in, asset_out = pool.get_assets(request.direction.input_is_a)
            pool_in = Holding(pool.authority, asset_in)
            pool_out = Holding(pool.authority, asset_out)
            trader_in = Holding(trader.owner, asset_in)
            trader_out = Holding(trader.owner, asset_out)
            authority = PoolAuthority.for_pool(pool)

            def apply(quote: SwapQuote) -> tuple[int, int]:
                self.ledger.transfer(trader_in, pool_in, quote.input_amount, trader)
                self.ledger.transfer(pool_out, trader_out, quote.output, authority)
                return self.ledger.balance(pool_in), self.ledger.balance(pool_out)

            quote = self.swap_engine.execute_swap(
                reserve_in=self.ledger.balance(pool_in),
                reserve_out=self.ledger.balance(pool_out),
                fee_bps=market.fee_bps,
                requested_input=request.input_amount,
                min_output_amount=request.min_output_amount,
                apply=apply,
                available_balance=self.ledger.balance(trader_in),
            )

        logger.info(
            "swap_executed",
            pool=pool.key[:8],
            trader=trader.owner,
            direction=request.direction.value,
            input_amount=quote.input_amount,
            output=quote.output,
            fee=quote.fee_amount,
            price=str(pool.spot_price(*self.reserves(pool))),
        )
        return quote


__all__ = ["AmmProgram"]
