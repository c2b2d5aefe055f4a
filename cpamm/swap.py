"""Constant-product swap engine.

Formula: output = taxed_input * reserve_out / (reserve_in + taxed_input)

The fee is taken from the input leg before the curve is applied, so it
stays in the pool and grows reserve_in * reserve_out.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import structlog

from cpamm.config import DEFAULT_AMM_CONFIG, AmmConfig
from cpamm.errors import EmptyReserve, InvariantViolated, OutputTooSmall
from cpamm.math.fixed_point import FixedPoint
from cpamm.safe_int import S

logger = structlog.get_logger()


@dataclass(frozen=True)
class SwapQuote:
    """Result of pricing a swap.

    Attributes:
        input_amount: Input actually taken from the trader (after clamping)
        taxed_input: Input left after the fee, used on the curve
        output: Amount paid out of reserve_out
        fee_amount: Part of the input retained by the pool as fee
    """

    input_amount: int
    taxed_input: int
    output: int
    fee_amount: int


# Applies a quote to the ledger and returns the re-read (reserve_in, reserve_out)
ApplySwap = Callable[[SwapQuote], tuple[int, int]]


class SwapEngine:
    """Swap pricing and post-trade checks."""

    def __init__(self, config: AmmConfig = DEFAULT_AMM_CONFIG) -> None:
        self.config = config

    def quote_swap(
        self,
        reserve_in: int,
        reserve_out: int,
        fee_bps: int,
        requested_input: int,
        available_balance: int | None = None,
    ) -> SwapQuote:
        """Calculate output for an exact input.

        Args:
            reserve_in: Pool balance of the asset being sold
            reserve_out: Pool balance of the asset being bought
            fee_bps: Market fee in basis points
            requested_input: Input the trader asked to sell
            available_balance: Trader's balance of the input asset; a larger
                request is clamped to it (partial fill)

        Returns:
            SwapQuote with the clamped input, fee and output

        Raises:
            EmptyReserve: If either reserve is zero
            ArithmeticOverflow: If an intermediate result is not representable
        """
        # With reserve_in == 0 any input would buy the whole of reserve_out
        if reserve_in == 0 or reserve_out == 0:
            raise EmptyReserve(f"reserve_in={reserve_in} reserve_out={reserve_out}")

        amount_in = S(requested_input)
        if available_balance is not None:
            amount_in = amount_in.min(available_balance)

        fee_amount = (amount_in * S(fee_bps)) // S(self.config.fee_denominator)
        taxed_input = (amount_in - fee_amount).to_u64()

        # reserve_out - k / (reserve_in + taxed) == taxed * reserve_out / (reserve_in + taxed)
        taxed = FixedPoint.from_int(taxed_input)
        output = (
            taxed * FixedPoint.from_int(reserve_out) / (FixedPoint.from_int(reserve_in) + taxed)
        ).to_u64()

        return SwapQuote(
            input_amount=amount_in.to_u64(),
            taxed_input=taxed_input,
            output=output,
            fee_amount=fee_amount.to_u64(),
        )

    @staticmethod
    def check_slippage(quote: SwapQuote, min_output_amount: int) -> None:
        """Raise OutputTooSmall if the quote pays less than the minimum."""
        if quote.output < min_output_amount:
            raise OutputTooSmall(f"output {quote.output} < minimum {min_output_amount}")

    @staticmethod
    def verify_invariant(
        reserve_in_before: int,
        reserve_out_before: int,
        reserve_in_after: int,
        reserve_out_after: int,
    ) -> None:
        """Raise InvariantViolated if the reserve product decreased."""
        invariant_before = (S(reserve_in_before) * S(reserve_out_before)).to_u128()
        invariant_after = (S(reserve_in_after) * S(reserve_out_after)).to_u128()
        if invariant_before > invariant_after:
            raise InvariantViolated(f"{invariant_before} > {invariant_after}")

    def execute_swap(
        self,
        reserve_in: int,
        reserve_out: int,
        fee_bps: int,
        requested_input: int,
        min_output_amount: int,
        apply: ApplySwap,
        available_balance: int | None = None,
    ) -> SwapQuote:
        """Quote, check slippage, apply, and verify the invariant.

        Args:
            reserve_in: Pool balance of the asset being sold
            reserve_out: Pool balance of the asset being bought
            fee_bps: Market fee in basis points
            requested_input: Input the trader asked to sell
            min_output_amount: Smallest acceptable output
            apply: Moves the input in and the output out, then returns the
                re-read (reserve_in, reserve_out)
            available_balance: Trader's balance of the input asset

        Returns:
            The applied SwapQuote

        Raises:
            OutputTooSmall: Before anything is applied
            InvariantViolated: After apply; the caller must discard the
                ledger changes
        """
        quote = self.quote_swap(
            reserve_in, reserve_out, fee_bps, requested_input, available_balance
        )
        self.check_slippage(quote, min_output_amount)

        reserve_in_after, reserve_out_after = apply(quote)
        self.verify_invariant(reserve_in, reserve_out, reserve_in_after, reserve_out_after)

        logger.debug(
            "swap_verified",
            input_amount=quote.input_amount,
            taxed_input=quote.taxed_input,
            output=quote.output,
            reserve_in_after=reserve_in_after,
            reserve_out_after=reserve_out_after,
        )
        return quote


# Singleton instance
swap_engine = SwapEngine()


__all__ = [
    "SwapQuote",
    "ApplySwap",
    "SwapEngine",
    "swap_engine",
]
