"""Mathematical utilities for the AMM.

This package provides mathematical primitives for AMM calculations:
- FixedPoint: U128F64 checked fixed-point arithmetic
"""

from cpamm.math.fixed_point import FixedPoint

__all__ = ["FixedPoint"]
