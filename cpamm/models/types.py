"""Shared type definitions for AMM models.

These types are used across request models, pools and the ledger.
"""

import hashlib
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from cpamm.constants import U64_MAX


def validate_u64(value: Any) -> int:
    """Validate that a value is a valid u64 ledger amount.

    Args:
        value: Value to validate (int or decimal string)

    Returns:
        Valid u64 as int

    Raises:
        ValueError: If value is not a non-negative integer within u64 range
    """
    if isinstance(value, bool):
        raise ValueError("U64 must be an integer, got bool")

    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"U64 must be a decimal integer string: '{value}'") from err

    if not isinstance(value, int):
        raise ValueError(f"U64 must be string or int, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"U64 cannot be negative: {value}")
    if value > U64_MAX:
        raise ValueError(f"U64 overflow: {value} > 2^64-1")

    return value


# 64-bit unsigned ledger amount
U64 = Annotated[
    int,
    BeforeValidator(validate_u64),
    Field(description="64-bit unsigned amount"),
]


def derive_address(*seeds: str | bytes) -> str:
    """Derive a deterministic identifier from an ordered list of seeds.

    Each seed is length-prefixed before hashing so that different seed
    splits never collide (["ab", "c"] != ["a", "bc"]).

    Args:
        seeds: Identifiers or raw seed bytes

    Returns:
        SHA-256 hex digest of the encoded seeds
    """
    digest = hashlib.sha256()
    for seed in seeds:
        raw = seed.encode() if isinstance(seed, str) else seed
        digest.update(len(raw).to_bytes(4, "big"))
        digest.update(raw)
    return digest.hexdigest()
