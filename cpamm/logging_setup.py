"""structlog setup for applications embedding the AMM."""

from __future__ import annotations

import logging

import structlog

from cpamm.config import AmmConfig


def configure_logging(config: AmmConfig | None = None) -> None:
    """Configure structlog with console output.

    Args:
        config: Source of the log level; read from the environment
            (CPAMM_LOG_LEVEL) when omitted
    """
    if config is None:
        config = AmmConfig.from_env()
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(config.log_level.upper())
        ),
    )
