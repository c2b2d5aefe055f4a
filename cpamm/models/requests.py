"""Pydantic models for instruction requests.

Requests are ephemeral value objects: they carry amounts and a swap
direction into the instruction layer and have no persistent identity.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from cpamm.models.types import U64


class SwapDirection(str, Enum):
    """Which reserve receives the trader's input."""

    A_TO_B = "a_to_b"
    B_TO_A = "b_to_a"

    @property
    def input_is_a(self) -> bool:
        return self is SwapDirection.A_TO_B


class DepositRequest(BaseModel):
    """Deposit up to amount_a and amount_b into a pool."""

    model_config = ConfigDict(frozen=True)

    amount_a: U64
    amount_b: U64


class WithdrawRequest(BaseModel):
    """Burn `amount` liquidity shares for a pro-rata payout."""

    model_config = ConfigDict(frozen=True)

    amount: U64


class SwapRequest(BaseModel):
    """Swap an exact input amount for at least min_output_amount."""

    model_config = ConfigDict(frozen=True)

    direction: SwapDirection
    input_amount: U64
    min_output_amount: U64 = 0
