"""Configuration for the AMM core."""

from __future__ import annotations

import os
from dataclasses import dataclass

from cpamm.constants import FEE_DENOMINATOR, MINIMUM_LIQUIDITY


@dataclass(frozen=True)
class AmmConfig:
    """Centralized configuration for liquidity accounting and logging.

    Attributes:
        minimum_liquidity: Shares permanently locked on the first deposit
            into a pool (default: 100)
        fee_denominator: Basis-point denominator for swap fees (10,000)
        log_level: Level passed to configure_logging (default: INFO)
    """

    minimum_liquidity: int = MINIMUM_LIQUIDITY
    fee_denominator: int = FEE_DENOMINATOR
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.minimum_liquidity < 0:
            raise ValueError(f"minimum_liquidity cannot be negative: {self.minimum_liquidity}")

    @classmethod
    def from_env(cls) -> AmmConfig:
        """Build a config from environment variables.

        - CPAMM_MINIMUM_LIQUIDITY: locked first-deposit shares (default: 100)
        - CPAMM_LOG_LEVEL: log level name (default: INFO)
        """
        return cls(
            minimum_liquidity=int(
                os.environ.get("CPAMM_MINIMUM_LIQUIDITY", str(MINIMUM_LIQUIDITY))
            ),
            log_level=os.environ.get("CPAMM_LOG_LEVEL", "INFO").upper(),
        )


# Default configuration instance
DEFAULT_AMM_CONFIG = AmmConfig()
