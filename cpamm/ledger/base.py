"""Ledger collaborator interfaces.

The AMM core never moves balances itself. An integrating system supplies
a ledger that can read balances, transfer between holdings and mint or
burn liquidity shares, each authorized by a capability it controls.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from cpamm.pools.types import Pool


@dataclass(frozen=True)
class Holding:
    """Balance of one asset held by one owner."""

    owner: str
    asset: str


@dataclass(frozen=True)
class Authority:
    """Capability to move funds out of holdings owned by `owner`."""

    owner: str


@dataclass(frozen=True)
class Signer(Authority):
    """Authority of an end user (depositor, trader)."""


@dataclass(frozen=True)
class PoolAuthority(Authority):
    """Authority scoped to one pool's reserves and share asset.

    Issued by the instruction layer; the core never sees it.
    """

    pool_key: str

    @classmethod
    def for_pool(cls, pool: Pool) -> PoolAuthority:
        return cls(owner=pool.authority, pool_key=pool.key)


@runtime_checkable
class Ledger(Protocol):
    """Protocol for the balance-holding collaborator.

    All amounts are u64. Every method that moves value raises an AmmError
    subclass on failure and leaves balances unchanged.
    """

    def balance(self, holding: Holding) -> int:
        """Current balance of a holding (0 if it never held anything)."""
        ...

    def supply(self, asset: str) -> int:
        """Total outstanding units of an asset."""
        ...

    def create_asset(self, asset: str, mint_authority: str) -> None:
        """Register an asset that `mint_authority` may mint."""
        ...

    def transfer(
        self, source: Holding, destination: Holding, amount: int, authority: Authority
    ) -> None:
        """Move `amount` between two holdings of the same asset."""
        ...

    def mint(self, destination: Holding, amount: int, authority: Authority) -> None:
        """Create `amount` new units into a holding."""
        ...

    def burn(self, source: Holding, amount: int, authority: Authority) -> None:
        """Destroy `amount` units from a holding."""
        ...

    def atomic(self) -> AbstractContextManager[None]:
        """Run a block as one read-modify-write unit.

        No other atomic block runs concurrently, and all changes made in
        the block are undone if it raises.
        """
        ...
