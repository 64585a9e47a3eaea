from pytest import raises

from symtree.core.differentiate import differentiate
from symtree.core.evaluate import evaluate
from symtree.core.exceptions import NoRuleError
from symtree.core.expr import Constant, UnaryOp, Variable, expr_equal
from symtree.core.simplify import cancel_factor, simplify


class Tan(UnaryOp):
    """A kind of expression that no pass knows about."""


def test_unknown_expression_kind() -> None:
    """Test that every pass rejects an unregistered kind of expression."""
    x = Variable("x")
    tan_x = Tan(x)

    raises(NoRuleError, lambda: evaluate(tan_x, {"x": 1.0}))
    raises(NoRuleError, lambda: evaluate(Tan(Constant(1)), {}))
    raises(NoRuleError, lambda: differentiate(tan_x, "x"))
    raises(NoRuleError, lambda: simplify(tan_x))
    raises(NoRuleError, lambda: simplify(Tan(Constant(1))))
    raises(NoRuleError, lambda: cancel_factor(tan_x, x))
    raises(NoRuleError, lambda: expr_equal(tan_x, Tan(x)))


def test_unknown_expression_kind_nested() -> None:
    """Test that an unregistered kind is found below known ones."""
    x = Variable("x")
    expr = Constant(2) * Tan(x)

    raises(NoRuleError, lambda: evaluate(expr, {"x": 1.0}))
    raises(NoRuleError, lambda: differentiate(expr, "x"))
    raises(NoRuleError, lambda: simplify(expr))
