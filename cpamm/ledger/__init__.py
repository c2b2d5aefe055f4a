"""Ledger collaborators: interfaces, capabilities and an in-memory ledger."""

from cpamm.ledger.base import Authority, Holding, Ledger, PoolAuthority, Signer
from cpamm.ledger.memory import InMemoryLedger

__all__ = [
    "Authority",
    "Holding",
    "Ledger",
    "PoolAuthority",
    "Signer",
    "InMemoryLedger",
]
