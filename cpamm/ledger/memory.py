"""In-memory reference ledger.

Holds balances and supplies in dicts, enforces u64 bounds and
authorities, and provides the single-writer atomic section the AMM
instructions need. Used by tests and by embedders that keep state in
process.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from cpamm.constants import LOCKED_LIQUIDITY_HOLDER
from cpamm.errors import (
    AccountAlreadyExists,
    AccountMismatch,
    AccountNotFound,
    InsufficientFunds,
    Unauthorized,
)
from cpamm.ledger.base import Authority, Holding
from cpamm.safe_int import S

logger = structlog.get_logger()


class InMemoryLedger:
    """Dict-backed ledger implementing the Ledger protocol."""

    def __init__(self) -> None:
        self._balances: dict[Holding, int] = {}
        self._supply: dict[str, int] = {}
        self._mint_authority: dict[str, str] = {}
        # Single writer: one atomic section at a time (re-entrant for nesting)
        self._lock = threading.RLock()
        # Undo log of (table, key, previous value) for the open atomic section
        self._journal: list[tuple[dict, object, object]] | None = None

    # --- Reads ---

    def balance(self, holding: Holding) -> int:
        return self._balances.get(holding, 0)

    def supply(self, asset: str) -> int:
        self._require_asset(asset)
        return self._supply[asset]

    # --- Writes ---

    def create_asset(self, asset: str, mint_authority: str) -> None:
        with self.atomic():
            if asset in self._mint_authority:
                raise AccountAlreadyExists(f"asset {asset}")
            self._set(self._mint_authority, asset, mint_authority)
            self._set(self._supply, asset, 0)

    def transfer(
        self, source: Holding, destination: Holding, amount: int, authority: Authority
    ) -> None:
        if source.asset != destination.asset:
            raise AccountMismatch(
                f"cannot transfer {source.asset} into a {destination.asset} holding"
            )
        self._require_owner(source, authority)
        with self.atomic():
            self._debit(source, amount)
            self._credit(destination, amount)
        logger.debug(
            "ledger_transfer",
            asset=source.asset[:8],
            source=source.owner[:8],
            destination=destination.owner[:8],
            amount=amount,
        )

    def mint(self, destination: Holding, amount: int, authority: Authority) -> None:
        self._require_asset(destination.asset)
        if self._mint_authority[destination.asset] != authority.owner:
            raise Unauthorized(f"{authority.owner} cannot mint {destination.asset}")
        amount = S(amount).to_u64()
        with self.atomic():
            supply = (S(self._supply[destination.asset]) + S(amount)).to_u64()
            self._credit(destination, amount)
            self._set(self._supply, destination.asset, supply)

    def burn(self, source: Holding, amount: int, authority: Authority) -> None:
        self._require_asset(source.asset)
        self._require_owner(source, authority)
        with self.atomic():
            self._debit(source, amount)
            supply = (S(self._supply[source.asset]) - S(amount)).to_u64()
            self._set(self._supply, source.asset, supply)

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Serialize and journal a block; undo every change if it raises."""
        with self._lock:
            if self._journal is not None:
                # Nested: the outer section owns the journal
                yield
                return
            journal = self._journal = []
            try:
                yield
            except BaseException:
                self._rollback(journal)
                raise
            finally:
                self._journal = None

    # --- Internals ---

    def _require_asset(self, asset: str) -> None:
        if asset not in self._mint_authority:
            raise AccountNotFound(f"asset {asset}")

    @staticmethod
    def _require_owner(holding: Holding, authority: Authority) -> None:
        if holding.owner == LOCKED_LIQUIDITY_HOLDER:
            raise Unauthorized(f"{holding.owner}/{holding.asset} is locked")
        if holding.owner != authority.owner:
            raise Unauthorized(f"{authority.owner} does not own {holding.owner}/{holding.asset}")

    def _debit(self, holding: Holding, amount: int) -> None:
        amount = S(amount).to_u64()
        current = self.balance(holding)
        if amount > current:
            raise InsufficientFunds(f"{holding.owner}/{holding.asset}: {amount} > {current}")
        self._set(self._balances, holding, (S(current) - S(amount)).to_u64())

    def _credit(self, holding: Holding, amount: int) -> None:
        amount = S(amount).to_u64()
        self._set(self._balances, holding, (S(self.balance(holding)) + S(amount)).to_u64())

    def _set(self, table: dict, key: object, value: object) -> None:
        if self._journal is not None:
            self._journal.append((table, key, table.get(key)))
        table[key] = value

    def _rollback(self, journal: list[tuple[dict, object, object]]) -> None:
        for table, key, previous in reversed(journal):
            if previous is None:
                table.pop(key, None)
            else:
                table[key] = previous
        logger.debug("ledger_rollback", changes=len(journal))
