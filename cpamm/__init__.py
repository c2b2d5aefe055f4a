"""Constant-product AMM accounting core."""

from cpamm.liquidity import DepositPlan, LiquidityAccountant, WithdrawPlan
from cpamm.program import AmmProgram
from cpamm.swap import SwapEngine, SwapQuote

__version__ = "0.1.0"
__all__ = [
    "AmmProgram",
    "LiquidityAccountant",
    "DepositPlan",
    "WithdrawPlan",
    "SwapEngine",
    "SwapQuote",
    "__version__",
]
