"""Tests for evaluating expression trees."""

from __future__ import annotations

import math

import pytest
import sympy as sp

from graphing_calculator.engine import calculate, compile_expression
from graphing_calculator.errors import UnknownVariable
from graphing_calculator.expr import Operation, Value, Variable, derivative
from graphing_calculator.tokens import OpKind


class TestArithmetic:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("2+3*4", 14.0),
            ("2*3+4", 10.0),
            ("8-3-2", 3.0),
            ("(2+3)*4", 20.0),
            ("2-(3-4)", 3.0),
            ("16/4/2", 2.0),
            ("0x10 / 0b100", 4.0),
            ("0o17 + 042", 57.0),
        ],
    )
    def test_calculate(self, text, expected) -> None:
        assert calculate(text) == expected

    def test_whitespace_and_noise_are_ignored(self) -> None:
        assert calculate(" 1 +\t2 , ") == 3.0


class TestNonFinite:
    def test_division_by_zero_is_infinity(self) -> None:
        assert calculate("1/0") == math.inf

    def test_negative_infinity(self) -> None:
        assert calculate("0-1/0") == -math.inf

    def test_zero_over_zero_is_nan(self) -> None:
        assert math.isnan(calculate("0/0"))

    def test_nan_propagates(self) -> None:
        assert math.isnan(calculate("(0/0)*2+1"))

    def test_math_domain_errors_are_nan(self) -> None:
        assert math.isnan(calculate("ln(0-1)"))
        assert math.isnan(calculate("sqrt(0-4)"))

    def test_overflow_is_infinity(self) -> None:
        assert calculate("exp(1000)") == math.inf

    def test_log_of_zero_through_calculate(self) -> None:
        assert calculate("ln(0)") == -math.inf
        assert calculate("lb(0)") == -math.inf

    def test_cosh_of_large_negative(self) -> None:
        assert calculate("cosh(0-1000)") == math.inf


class TestFunctions:
    def test_sin_of_zero(self) -> None:
        assert calculate("sin(0)") == 0.0

    def test_builtins(self) -> None:
        assert calculate("cos(0)") == 1.0
        assert calculate("lb(8)") == pytest.approx(3.0)
        assert calculate("log(100)") == pytest.approx(2.0)
        assert calculate("floor(7/2)") == 3.0
        assert calculate("ceil(7/2)") == 4.0
        assert calculate("add(1)") == 2.0

    def test_function_of_variable(self) -> None:
        assert calculate("sqrt(x*x)", variables={"x": 3.0}) == 3.0


class TestVariables:
    def test_unbound_variable(self) -> None:
        with pytest.raises(UnknownVariable) as exc_info:
            calculate("x+1")
        assert exc_info.value.name == "x"
        assert str(exc_info.value) == "Couldn't find variable `x`"

    def test_bound_variable(self) -> None:
        assert calculate("x+1", variables={"x": 4.0}) == 5.0

    def test_left_side_fails_first(self) -> None:
        with pytest.raises(UnknownVariable) as exc_info:
            calculate("a+b")
        assert exc_info.value.name == "a"

    def test_evaluation_does_not_modify_bindings(self) -> None:
        variables = {"x": 2.0}
        calculate("x*x", variables=variables)
        assert variables == {"x": 2.0}


class TestTrees:
    def test_hand_built_tree(self) -> None:
        tree = Operation(OpKind.MUL, Variable("y"), Value(0.5))
        assert tree.evaluate({"y": 8.0}) == 4.0

    def test_repeated_evaluation_is_identical(self) -> None:
        tree = compile_expression("sin(x)/3 + cos(x*x)")
        variables = {"x": 1.234}
        assert tree.evaluate(variables) == tree.evaluate(variables)

    def test_trees_are_immutable(self) -> None:
        tree = Value(1.0)
        with pytest.raises(AttributeError):
            tree.value = 2.0


class TestSympy:
    def test_to_sympy_keeps_value(self) -> None:
        assert sp.simplify(compile_expression("8-3-2").to_sympy()) == 3

    def test_to_sympy_maps_builtin_functions(self) -> None:
        x = sp.Symbol("x")
        assert compile_expression("sin(x)").to_sympy() == sp.sin(x)

    def test_to_sympy_unknown_function(self) -> None:
        tree = compile_expression("double(x)", functions={"double": lambda value: value * 2})
        assert tree.to_sympy() == sp.Function("double")(sp.Symbol("x"))

    def test_to_sympy_uses_bound_callable(self) -> None:
        tree = compile_expression("sin(x)", functions={"sin": lambda value: 2 * value})
        x = sp.Symbol("x")
        assert tree.to_sympy() == sp.Function("sin")(x)
        assert derivative(tree) != sp.cos(x)

    def test_derivative(self) -> None:
        x = sp.Symbol("x")
        assert derivative(compile_expression("x*x")) == 2 * x
        assert derivative(compile_expression("sin(x)")) == sp.cos(x)
