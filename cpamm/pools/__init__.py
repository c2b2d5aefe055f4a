"""Market and pool management package."""

from .registry import MarketStore, create_market, create_pool
from .types import Market, Pool

__all__ = [
    "Market",
    "Pool",
    "MarketStore",
    "create_market",
    "create_pool",
]
