"""Request models and shared types."""

from cpamm.models.requests import DepositRequest, SwapDirection, SwapRequest, WithdrawRequest
from cpamm.models.types import U64, derive_address, validate_u64

__all__ = [
    "DepositRequest",
    "WithdrawRequest",
    "SwapRequest",
    "SwapDirection",
    "U64",
    "derive_address",
    "validate_u64",
]
