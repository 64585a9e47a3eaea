"""Benchmarks for differentiation using symtree.

Differentiation using symtree is currently benchmarked against SymPy's
symbolic differentiation.

"""
from typing import Callable, TypeVar

import pytest
import sympy
import symtree

ExprType = TypeVar("ExprType")
Fixture = Callable[..., ExprType]


@pytest.mark.benchmark(group="differentiate nested sine first derivative")
class TestNestedSineFirstDerivative:
    """Differentiate ``sin(sin(sin(sin(sin(sin(x))))))`` w.r.t. ``x`` once."""

    @staticmethod
    def test_symtree(benchmark: Fixture[symtree.Expr]) -> None:
        """Differentiate using symtree."""
        sin = symtree.Sin
        expr = sin(sin(sin(sin(sin(sin(symtree.Variable("x")))))))
        result = benchmark(symtree.differentiate, expr, "x")
        value = symtree.evaluate(result, {"x": 1.0})
        assert value == pytest.approx(0.13877489681259086)

    @staticmethod
    def test_sympy(benchmark: Fixture[sympy.Expr]) -> None:
        """Differentiate using SymPy."""
        x = sympy.Symbol("x")
        sin = sympy.sin
        expr = sin(sin(sin(sin(sin(sin(x))))))
        result = benchmark(expr.diff, x)
        assert result.evalf(subs={x: 1.0}) == pytest.approx(0.13877489681259086)


@pytest.mark.benchmark(group="differentiate x**x third derivative")
class TestSelfPowerThirdDerivative:
    """Differentiate ``x**x`` w.r.t. ``x`` three times."""

    @staticmethod
    def test_symtree(benchmark: Fixture[symtree.Expr]) -> None:
        """Differentiate using symtree."""
        x = symtree.Variable("x")
        result = benchmark(symtree.differentiate, x**x, "x", 3)
        sx = sympy.Symbol("x")
        expected = float(sympy.diff(sx**sx, sx, 3).subs(sx, 2.0))
        assert symtree.evaluate(result, {"x": 2.0}) == pytest.approx(expected)

    @staticmethod
    def test_sympy(benchmark: Fixture[sympy.Expr]) -> None:
        """Differentiate using SymPy."""
        x = sympy.Symbol("x")
        expr = x**x
        result = benchmark(expr.diff, x, 3)
        assert result.subs(x, 2.0) > 0
