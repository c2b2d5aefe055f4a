"""Pytest configuration and fixtures."""

from collections.abc import Callable

import pytest

from cpamm.ledger import Holding, InMemoryLedger, Signer
from cpamm.pools import Market, Pool
from cpamm.program import AmmProgram
from tests.helpers import FUNDED_AMOUNT, ISSUER, TOKEN_A, TOKEN_B

FundFn = Callable[[str, str, int], None]


@pytest.fixture
def ledger() -> InMemoryLedger:
    """A ledger with both pool assets registered to a common issuer."""
    ledger = InMemoryLedger()
    ledger.create_asset(TOKEN_A, mint_authority=ISSUER)
    ledger.create_asset(TOKEN_B, mint_authority=ISSUER)
    return ledger


@pytest.fixture
def fund(ledger: InMemoryLedger) -> FundFn:
    """Mint `amount` of an asset to an owner."""

    def _fund(owner: str, asset: str, amount: int) -> None:
        ledger.mint(Holding(owner, asset), amount, Signer(ISSUER))

    return _fund


@pytest.fixture
def program(ledger: InMemoryLedger) -> AmmProgram:
    return AmmProgram(ledger)


@pytest.fixture
def market(program: AmmProgram) -> Market:
    """A stored market with a 5% fee."""
    return program.create_amm(admin="admin", id="market-1", fee_bps=500)


@pytest.fixture
def pool(program: AmmProgram, market: Market) -> Pool:
    """A stored, empty token-a/token-b pool."""
    return program.create_pool(market, TOKEN_A, TOKEN_B)


@pytest.fixture
def alice(fund: FundFn) -> Signer:
    """A liquidity provider holding FUNDED_AMOUNT of both tokens."""
    fund("alice", TOKEN_A, FUNDED_AMOUNT)
    fund("alice", TOKEN_B, FUNDED_AMOUNT)
    return Signer("alice")


@pytest.fixture
def bob(fund: FundFn) -> Signer:
    """A trader holding FUNDED_AMOUNT of both tokens."""
    fund("bob", TOKEN_A, FUNDED_AMOUNT)
    fund("bob", TOKEN_B, FUNDED_AMOUNT)
    return Signer("bob")
