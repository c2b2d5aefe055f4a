"""Market and pool creation, and the store that holds them.

Markets are keyed by their derived key (from `id`); pools by
(market_ref, asset_a_id, asset_b_id). The store is owned by the ledger
layer: core functions only ever receive Market and Pool values.
"""

from __future__ import annotations

import structlog

from cpamm.config import DEFAULT_AMM_CONFIG, AmmConfig
from cpamm.errors import AccountAlreadyExists, AccountNotFound, InvalidFee, InvalidMint
from cpamm.pools.types import Market, Pool

logger = structlog.get_logger()


def create_market(
    admin: str, id: str, fee_bps: int, config: AmmConfig = DEFAULT_AMM_CONFIG
) -> Market:
    """Create a market record.

    Raises:
        InvalidFee: If fee_bps is negative or not below the fee denominator
    """
    if fee_bps < 0 or fee_bps >= config.fee_denominator:
        raise InvalidFee(f"fee_bps={fee_bps}")
    return Market(admin=admin, id=id, fee_bps=fee_bps)


def create_pool(market: Market, asset_a_id: str, asset_b_id: str) -> Pool:
    """Create a zero-reserve pool record under a market.

    Raises:
        InvalidMint: If both assets are the same
    """
    if asset_a_id == asset_b_id:
        raise InvalidMint(f"asset_a_id == asset_b_id == {asset_a_id}")
    return Pool(market_ref=market.key, asset_a_id=asset_a_id, asset_b_id=asset_b_id)


class MarketStore:
    """Key-value store of markets and pools.

    Records are immutable once added; adding a second record under the
    same key fails instead of replacing.
    """

    def __init__(self) -> None:
        self._markets: dict[str, Market] = {}
        self._pools: dict[tuple[str, str, str], Pool] = {}

    def add_market(self, market: Market) -> Market:
        if market.key in self._markets:
            raise AccountAlreadyExists(f"market {market.id}")
        self._markets[market.key] = market
        logger.debug("market_added", market=market.key[:8], fee_bps=market.fee_bps)
        return market

    def get_market(self, key: str) -> Market:
        market = self._markets.get(key)
        if market is None:
            raise AccountNotFound(f"market {key}")
        return market

    def add_pool(self, pool: Pool) -> Pool:
        pool_key = (pool.market_ref, pool.asset_a_id, pool.asset_b_id)
        if pool_key in self._pools:
            raise AccountAlreadyExists(f"pool {pool.key}")
        self._pools[pool_key] = pool
        logger.debug(
            "pool_added",
            market=pool.market_ref[:8],
            asset_a=pool.asset_a_id,
            asset_b=pool.asset_b_id,
        )
        return pool

    def get_pool(self, market_ref: str, asset_a_id: str, asset_b_id: str) -> Pool:
        """Get the pool for an ordered asset pair under a market.

        Pair order matters: (a, b) and (b, a) are different pools.
        """
        pool = self._pools.get((market_ref, asset_a_id, asset_b_id))
        if pool is None:
            raise AccountNotFound(f"pool {asset_a_id}/{asset_b_id}")
        return pool

