"""AMM error classes.

Program errors carry a stable numeric code (6000-based, one per failure
kind) so an integrating system can react to a specific failure.
Arithmetic errors also derive from ArithmeticError.
"""

from __future__ import annotations

from typing import ClassVar


class AmmError(Exception):
    """Base error for AMM operations."""

    code: ClassVar[int | None] = None
    message: ClassVar[str] = "AMM error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        text = self.message if detail is None else f"{self.message}: {detail}"
        super().__init__(text)


class InvalidFee(AmmError):
    """Fee must be below 10000 basis points."""

    code = 6000
    message = "Invalid fee value"


class InvalidMint(AmmError):
    """Pool assets must be distinct."""

    code = 6001
    message = "Invalid mint for the pool"


class DepositTooSmall(AmmError):
    """First deposit mints less than the minimum liquidity."""

    code = 6002
    message = "Depositing too little liquidity"


class OutputTooSmall(AmmError):
    """Swap output is below the caller's minimum."""

    code = 6003
    message = "Output is below the minimum expected"


class InvariantViolated(AmmError):
    """Reserve product decreased across a swap."""

    code = 6004
    message = "Invariant does not hold"


class EmptyReserve(AmmError):
    """A swap was priced against a pool side holding nothing."""

    message = "Pool reserve is empty"


class MathError(AmmError, ArithmeticError):
    """Base class for checked arithmetic errors."""

    message = "Arithmetic error"


class ArithmeticOverflow(MathError):
    """Result does not fit in the representable range."""

    message = "Arithmetic overflow"


class DivisionByZero(MathError):
    """Division or modulo by zero."""

    message = "Division by zero"


# =============================================================================
# Collaborator (ledger / account) errors
# =============================================================================


class LedgerError(AmmError):
    """Base error for ledger and account checks."""

    message = "Ledger error"


class InsufficientFunds(LedgerError):
    """Holding balance is smaller than the amount moved out of it."""

    message = "Insufficient funds"


class AccountMismatch(LedgerError):
    """An account passed to an instruction does not match the pool record."""

    message = "Account does not match"


class AccountNotFound(LedgerError):
    """No record stored under the requested key."""

    message = "Account not found"


class AccountAlreadyExists(LedgerError):
    """A record is already stored under the key."""

    message = "Account already exists"


class Unauthorized(LedgerError):
    """The supplied authority does not own the holding or asset."""

    message = "Unauthorized"


__all__ = [
    "AmmError",
    "InvalidFee",
    "InvalidMint",
    "DepositTooSmall",
    "OutputTooSmall",
    "InvariantViolated",
    "EmptyReserve",
    "MathError",
    "ArithmeticOverflow",
    "DivisionByZero",
    "LedgerError",
    "InsufficientFunds",
    "AccountMismatch",
    "AccountNotFound",
    "AccountAlreadyExists",
    "Unauthorized",
]
