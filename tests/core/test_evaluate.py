import math

from pytest import approx, raises

from symtree.core.evaluate import Evaluator, evaluate
from symtree.core.exceptions import NoRuleError, SymTreeError, UnboundVariableError
from symtree.core.expr import (
    Constant,
    Cos,
    Divide,
    Ln,
    Minus,
    Multiply,
    Plus,
    Pow,
    Sin,
    Variable,
)

x = Variable("x")
y = Variable("y")


def test_evaluate_plus() -> None:
    """Test evaluating a sum with a variable."""
    expr = Plus(Plus(Constant(5), x), Constant(3))
    assert evaluate(expr, {"x": 2.5}) == 10.5


def test_evaluate_operations() -> None:
    """Test evaluating each kind of expression."""
    test_cases = [
        (Constant(1.5), {}, 1.5),
        (x, {"x": 4.0}, 4.0),
        (Minus(x, y), {"x": 1.0, "y": 3.0}, -2.0),
        (Multiply(x, y), {"x": 1.5, "y": 3.0}, 4.5),
        (Divide(x, y), {"x": 1.0, "y": 4.0}, 0.25),
        (Pow(x, Constant(10)), {"x": 2.0}, 1024.0),
        (Pow(Constant(9), Constant(0.5)), {}, 3.0),
        (Sin(Constant(0)), {}, 0.0),
        (Cos(Constant(0)), {}, 1.0),
        (Ln(Constant(1)), {}, 0.0),
    ]
    for expr, vals, expected in test_cases:
        assert evaluate(expr, vals) == expected


def test_evaluate_transcendental() -> None:
    """Test the trigonometric functions and logarithm."""
    vals = {"x": 0.7}
    assert evaluate(Sin(x), vals) == approx(math.sin(0.7))
    assert evaluate(Cos(x), vals) == approx(math.cos(0.7))
    assert evaluate(Ln(x), vals) == approx(math.log(0.7))
    pythagoras = Plus(Pow(Sin(x), Constant(2)), Pow(Cos(x), Constant(2)))
    assert evaluate(pythagoras, vals) == approx(1.0)


def test_evaluate_returns_float() -> None:
    """Test that the result is a plain float even for int bindings."""
    result = evaluate(Multiply(x, x), {"x": 3})
    assert type(result) is float
    assert result == 9.0


def test_evaluate_ieee_semantics() -> None:
    """Test that invalid operations give inf or nan rather than errors."""
    zero = Constant(0)
    one = Constant(1)
    assert evaluate(Divide(one, zero), {}) == math.inf
    assert evaluate(Divide(Constant(-1), zero), {}) == -math.inf
    assert evaluate(Divide(one, Constant(-0.0)), {}) == -math.inf
    assert math.isnan(evaluate(Divide(zero, zero), {}))
    assert evaluate(Ln(zero), {}) == -math.inf
    assert math.isnan(evaluate(Ln(Constant(-1)), {}))
    assert math.isnan(evaluate(Pow(Constant(-8), Constant(1 / 3)), {}))
    assert evaluate(Pow(zero, Constant(-1)), {}) == math.inf
    assert evaluate(Pow(Constant(10), Constant(400)), {}) == math.inf
    assert math.isnan(evaluate(Sin(Constant(math.inf)), {}))
    assert evaluate(Divide(one, x), {"x": 0.0}) == math.inf


def test_evaluate_unbound_variable() -> None:
    """Test that a missing variable is an error."""
    with raises(UnboundVariableError) as excinfo:
        evaluate(Plus(x, y), {"x": 1.0})
    assert excinfo.value.name == "y"
    assert "'y'" in str(excinfo.value)

    raises(UnboundVariableError, lambda: evaluate(x, {}))
    raises(UnboundVariableError, lambda: evaluate(Sin(Divide(Constant(1), x)), {}))
    raises(KeyError, lambda: evaluate(x, {"y": 1.0}))
    raises(SymTreeError, lambda: evaluate(x, {"y": 1.0}))


def test_Evaluator() -> None:
    """Test defining and using a simple Evaluator."""
    eval_str = Evaluator[str](lambda v: f"{v:g}")
    eval_str.add_op2(Plus, lambda a, b: f"({a} + {b})")
    eval_str.add_op1(Sin, lambda a: f"sin({a})")

    assert eval_str(Plus(Constant(1), Sin(Constant(2)))) == "(1 + sin(2))"
    assert eval_str(Sin(x), {"x": 3.0}) == "sin(3)"
    assert eval_str.eval_recursive(Sin(x), {"x": 3.0}) == "sin(3)"

    raises(NoRuleError, lambda: eval_str(Cos(x), {"x": 3.0}))
    raises(UnboundVariableError, lambda: eval_str(Sin(x)))
