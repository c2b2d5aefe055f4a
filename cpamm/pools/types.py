"""Market and pool records."""

from __future__ import annotations

from dataclasses import dataclass

from cpamm.constants import AUTHORITY_SEED, LIQUIDITY_SEED
from cpamm.math.fixed_point import FixedPoint
from cpamm.models.types import derive_address


@dataclass(frozen=True)
class Market:
    """One AMM instance.

    Attributes:
        admin: Identity allowed to configure the market
        id: Creator-chosen unique identifier; the market key derives from it
        fee_bps: Swap fee in basis points, strictly below 10000
    """

    admin: str
    id: str
    fee_bps: int

    @property
    def key(self) -> str:
        """Derived address of the market."""
        return derive_address(self.id)


@dataclass(frozen=True)
class Pool:
    """One asset pair under a market.

    Reserves and liquidity supply are not stored here: they belong to the
    ledger and are read fresh for every operation.
    """

    market_ref: str
    asset_a_id: str
    asset_b_id: str

    @property
    def _seeds(self) -> tuple[str, str, str]:
        return (self.market_ref, self.asset_a_id, self.asset_b_id)

    @property
    def key(self) -> str:
        """Derived address of the pool."""
        return derive_address(*self._seeds)

    @property
    def authority(self) -> str:
        """Identity that owns the pool's reserve holdings and share asset."""
        return derive_address(*self._seeds, AUTHORITY_SEED)

    @property
    def liquidity_asset_id(self) -> str:
        """Asset id of the pool's liquidity shares."""
        return derive_address(*self._seeds, LIQUIDITY_SEED)

    def get_assets(self, input_is_a: bool) -> tuple[str, str]:
        """Get assets ordered as (asset_in, asset_out)."""
        if input_is_a:
            return self.asset_a_id, self.asset_b_id
        return self.asset_b_id, self.asset_a_id

    @staticmethod
    def spot_price(reserve_a: int, reserve_b: int) -> FixedPoint:
        """Units of asset b per unit of asset a at the current reserves.

        Raises:
            DivisionByZero: If reserve_a is zero
        """
        return FixedPoint.from_int(reserve_b) / FixedPoint.from_int(reserve_a)
