"""Tests for the operation table."""

import math
import warnings

import numpy as np
import pytest

from teza._ops import Add, AddVar, Mul, Pow, Sin, Sub, apply, operands, symbol, to_float32


def f32(*values: float) -> list[np.float32]:
    return [np.float32(v) for v in values]


class TestOperands:
    """Tests for operand extraction."""

    def test_binary_operations(self) -> None:
        assert operands(Add(0, 1)) == (0, 1)
        assert operands(Sub(2, 3)) == (2, 3)
        assert operands(Mul(4, 5)) == (4, 5)

    def test_unary_operations(self) -> None:
        assert operands(Pow(7, 2.0)) == (7,)
        assert operands(Sin(8)) == (8,)

    def test_add_var_keeps_repeats_and_order(self) -> None:
        assert operands(AddVar((3, 1, 3))) == (3, 1, 3)

    def test_add_var_empty(self) -> None:
        assert operands(AddVar(())) == ()

    def test_unknown_operation(self) -> None:
        with pytest.raises(TypeError, match="Unknown operation"):
            operands("not an operation")  # type: ignore[arg-type]


class TestApply:
    """Tests for operator semantics."""

    def test_add(self) -> None:
        assert apply(Add(0, 1), f32(1.0, 2.0)) == 3.0

    def test_sub(self) -> None:
        assert apply(Sub(0, 1), f32(1.0, 2.0)) == -1.0

    def test_mul(self) -> None:
        assert apply(Mul(0, 1), f32(2.0, 3.0)) == 6.0

    def test_add_var_folds_left(self) -> None:
        assert apply(AddVar((0, 1, 2)), f32(1.0, 2.0, 3.0)) == 6.0

    def test_add_var_empty_is_zero(self) -> None:
        result = apply(AddVar(()), [])
        assert result == 0.0
        assert isinstance(result, np.float32)

    def test_pow(self) -> None:
        assert apply(Pow(0, 3.0), f32(2.0)) == pytest.approx(8.0)

    def test_pow_zero_to_zero_is_one(self) -> None:
        assert apply(Pow(0, 0.0), f32(0.0)) == 1.0

    def test_pow_negative_base_fractional_exponent_is_nan(self) -> None:
        assert math.isnan(apply(Pow(0, 0.5), f32(-8.0)))

    def test_pow_zero_to_negative_is_infinite(self) -> None:
        assert math.isinf(apply(Pow(0, -1.0), f32(0.0)))

    def test_sin(self) -> None:
        assert apply(Sin(0), f32(math.pi / 2)) == pytest.approx(1.0)
        assert apply(Sin(0), f32(math.pi)) == pytest.approx(0.0, abs=1e-6)

    def test_nan_propagates(self) -> None:
        assert math.isnan(apply(Add(0, 1), f32(float("nan"), 1.0)))

    def test_results_are_single_precision(self) -> None:
        result = apply(Add(0, 1), f32(0.1, 0.2))
        assert isinstance(result, np.float32)
        assert float(result) == float(np.float32(0.1) + np.float32(0.2))
        assert float(result) != 0.1 + 0.2


class TestSymbol:
    """Tests for operation descriptions."""

    def test_symbols(self) -> None:
        assert symbol(Add(0, 1)) == "+"
        assert symbol(Sub(0, 1)) == "-"
        assert symbol(Mul(0, 1)) == "*"
        assert symbol(AddVar((0, 1, 2))) == "sum[3]"
        assert symbol(Pow(0, 3.0)) == "** 3"
        assert symbol(Sin(0)) == "sin"


class TestToFloat32:
    """Tests for to_float32."""

    def test_rounds_to_single_precision(self) -> None:
        value = to_float32(0.1)
        assert isinstance(value, np.float32)
        assert float(value) == float(np.float32(0.1))

    def test_overflow_is_silent(self) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert to_float32(1e40) == math.inf
            assert to_float32(-1e40) == -math.inf
