"""Tests for U128F64 fixed-point arithmetic."""

import pytest

from cpamm.constants import U64_MAX
from cpamm.errors import ArithmeticOverflow, DivisionByZero
from cpamm.math.fixed_point import ONE, RAW_MAX, FixedPoint


def fp(n: int) -> FixedPoint:
    return FixedPoint.from_int(n)


class TestFixedPointConstruction:
    """Tests for building fixed-point values."""

    def test_from_int_scales_by_two_pow_64(self):
        assert fp(3).raw == 3 * ONE
        assert fp(3).to_int() == 3

    def test_from_negative_raises(self):
        with pytest.raises(ArithmeticOverflow):
            fp(-1)

    def test_from_int_beyond_integer_bits_raises(self):
        """Integer part holds 128 bits."""
        assert fp(2**128 - 1).to_int() == 2**128 - 1
        with pytest.raises(ArithmeticOverflow):
            fp(2**128)

    def test_raw_out_of_range_raises(self):
        FixedPoint(RAW_MAX)
        with pytest.raises(ArithmeticOverflow):
            FixedPoint(RAW_MAX + 1)
        with pytest.raises(ArithmeticOverflow):
            FixedPoint(-1)

    def test_zero(self):
        assert fp(0).raw == 0
        assert fp(0) == FixedPoint(0)


class TestFixedPointMulDiv:
    """Tests for checked multiplication and division."""

    def test_mul_integers(self):
        assert fp(6) * fp(7) == fp(42)

    def test_mul_fraction_truncates(self):
        # (1/3) * 3 is just below 1 after truncation
        third = fp(1) / fp(3)
        assert (third * fp(3)).to_int() == 0
        assert (third * fp(3)).raw == ONE - 1

    def test_mul_of_two_u64_amounts_fits(self):
        product = fp(U64_MAX) * fp(U64_MAX)
        assert product.to_int() == U64_MAX * U64_MAX

    def test_mul_overflow_raises(self):
        with pytest.raises(ArithmeticOverflow):
            fp(2**127) * fp(2)

    def test_div_exact(self):
        assert fp(200) / fp(100) == fp(2)

    def test_div_fraction(self):
        assert (fp(1) / fp(2)).raw == ONE // 2
        assert (fp(1) / fp(3)).raw == ONE // 3

    def test_div_by_zero_raises(self):
        with pytest.raises(DivisionByZero):
            fp(1) / fp(0)

    def test_div_overflow_raises(self):
        tiny = FixedPoint(1)  # 2^-64
        with pytest.raises(ArithmeticOverflow):
            fp(2**127) / tiny

    def test_math_errors_are_arithmetic_errors(self):
        """Callers catching ArithmeticError see fixed-point failures too."""
        with pytest.raises(ArithmeticError):
            fp(1) / fp(0)
        with pytest.raises(ArithmeticError):
            fp(2**127) * fp(2)


class TestFixedPointAddSub:
    def test_add(self):
        assert fp(2) + fp(3) == fp(5)

    def test_add_overflow_raises(self):
        with pytest.raises(ArithmeticOverflow):
            FixedPoint(RAW_MAX) + FixedPoint(1)

    def test_sub(self):
        assert fp(5) - fp(3) == fp(2)

    def test_sub_negative_raises(self):
        with pytest.raises(ArithmeticOverflow):
            fp(3) - fp(5)


class TestFixedPointSqrt:
    """Tests for truncating square root."""

    def test_perfect_square(self):
        assert fp(25).sqrt() == fp(5)
        assert fp(10_000).sqrt() == fp(100)

    def test_non_square_truncates(self):
        assert fp(2).sqrt().to_int() == 1
        assert fp(2_000_000).sqrt().to_int() == 1414

    def test_sqrt_keeps_fraction_bits(self):
        # sqrt(2) ~ 1.41421356..., fractional bits preserved
        root = fp(2).sqrt()
        assert 1.4142135 < root.raw / ONE < 1.4142136

    def test_sqrt_of_zero(self):
        assert fp(0).sqrt() == fp(0)

    def test_sqrt_of_largest_u64_product(self):
        assert (fp(U64_MAX) * fp(U64_MAX)).sqrt().to_int() == U64_MAX


class TestFixedPointConversion:
    def test_to_u64_truncates(self):
        assert (fp(7) / fp(2)).to_u64() == 3

    def test_to_u64_overflow_raises(self):
        with pytest.raises(ArithmeticOverflow):
            fp(U64_MAX + 1).to_u64()

    def test_str(self):
        assert str(fp(7)) == "7"
        assert str(fp(1) / fp(2)) == "0.5"
        assert str(fp(3) / fp(4)) == "0.75"

    def test_comparisons(self):
        assert fp(1) < fp(2)
        assert fp(2) <= fp(2)
        assert fp(3) > fp(2)
        assert fp(3) >= fp(3)
        assert fp(1) != fp(2)
