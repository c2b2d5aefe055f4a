"""Test helpers module for shared test utilities."""

from tests.helpers.constants import DECIMALS, FUNDED_AMOUNT, ISSUER, TOKEN_A, TOKEN_B, TOKEN_C

__all__ = [
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_C",
    "ISSUER",
    "DECIMALS",
    "FUNDED_AMOUNT",
]
