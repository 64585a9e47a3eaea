"""Best-effort algebraic simplification of expression trees.

:func:`simplify` makes a single bottom-up pass over an expression. A subtree
that contains no :class:`Variable` is folded into one :class:`Constant`.
Otherwise a fixed catalogue of identities is applied to each node after its
operands have been simplified:

- Identity: :math:`x + 0 = x`, :math:`x - 0 = x`, :math:`0 - x = -1 x`,
  :math:`1 x = x`, :math:`x / 1 = x`, :math:`x^1 = x`.
- Zero: :math:`0 x = 0`, :math:`0 / x = 0`, :math:`0^x = 0`, :math:`x^0 = 1`.
- Fractions: products and quotients of quotients are merged into a single
  quotient.
- Squares: :math:`x x = x^2` for a variable :math:`x`.
- Division by a variable cancels one factor of it where possible (see
  :func:`cancel_factor`).

This is not a canonical form. Two equal expressions can simplify to
different trees.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING as _TYPE_CHECKING
from typing import Any
from typing import Callable

from symtree.core.evaluate import evaluate
from symtree.core.exceptions import NoRuleError
from symtree.core.expr import Constant
from symtree.core.expr import Cos
from symtree.core.expr import Divide
from symtree.core.expr import Expr
from symtree.core.expr import Ln
from symtree.core.expr import Minus
from symtree.core.expr import Multiply
from symtree.core.expr import Plus
from symtree.core.expr import Pow
from symtree.core.expr import Sin
from symtree.core.expr import Variable
from symtree.core.expr import free_variables

if _TYPE_CHECKING:
    from typing import Optional


__all__ = [
    "simplify",
    "cancel_factor",
]


logger = logging.getLogger(__name__)


def _is_zero(expr: Expr) -> bool:
    return isinstance(expr, Constant) and expr.value == 0.0


def _is_one(expr: Expr) -> bool:
    return isinstance(expr, Constant) and expr.value == 1.0


def simplify(expr: Expr) -> Expr:
    """Simplify ``expr`` in one bottom-up pass.

    >>> from symtree import Constant, Sin, Variable, simplify
    >>> x = Variable('x')
    >>> simplify(Sin(Constant(0)) + 2 * Constant(3))
    Constant(value=6.0)
    >>> simplify(1 * x + 0)
    Variable(name='x')
    >>> simplify(x * x)
    Pow(base=Variable(name='x'), exponent=Constant(value=2.0))
    """
    # A tree without variables is folded completely. Checking for variables
    # first means the evaluation below cannot fail on an unbound variable.
    if not free_variables(expr):
        return Constant(evaluate(expr, {}))

    rule = _simplify_rules.get(type(expr))
    if rule is None:
        raise NoRuleError("No simplification rule for: " + type(expr).__name__)
    return rule(expr)


def _simplify_atom(expr: Expr) -> Expr:
    return expr


def _simplify_plus(expr: Plus) -> Expr:
    left = simplify(expr.left)
    right = simplify(expr.right)
    if _is_zero(right):
        return left
    elif _is_zero(left):
        return right
    else:
        return Plus(left, right)


def _simplify_minus(expr: Minus) -> Expr:
    left = simplify(expr.left)
    right = simplify(expr.right)
    if _is_zero(right):
        return left
    elif _is_zero(left):
        return Multiply(Constant(-1), right)
    else:
        # XXX: The operands are not replaced by their simplified forms here.
        return expr


def _simplify_multiply(expr: Multiply) -> Expr:
    left = simplify(expr.left)
    right = simplify(expr.right)

    if _is_zero(left) or _is_zero(right):
        return Constant(0)
    elif _is_one(left):
        return right
    elif _is_one(right):
        return left
    elif isinstance(left, Divide) and isinstance(right, Divide):
        # (a/b)*(c/d) -> (a*c)/(b*d)
        numerator = simplify(Multiply(left.left, right.left))
        denominator = simplify(Multiply(left.right, right.right))
        return simplify(Divide(numerator, denominator))
    elif isinstance(left, Divide):
        # (a/b)*c -> (a*c)/b
        return simplify(Divide(simplify(Multiply(left.left, right)), left.right))
    elif isinstance(right, Divide):
        # a*(c/d) -> (a*c)/d
        return simplify(Divide(simplify(Multiply(left, right.left)), right.right))
    elif (
        isinstance(left, Variable)
        and isinstance(right, Variable)
        and left.name == right.name
    ):
        return Pow(left, Constant(2))
    else:
        return Multiply(left, right)


def _simplify_divide(expr: Divide) -> Expr:
    left = simplify(expr.left)
    right = simplify(expr.right)

    if _is_zero(left):
        return Constant(0)
    elif _is_one(right):
        return left
    elif isinstance(left, Divide) and isinstance(right, Divide):
        # (a/b)/(c/d) -> (a*d)/(b*c)
        numerator = simplify(Multiply(left.left, right.right))
        denominator = simplify(Multiply(left.right, right.left))
        return simplify(Divide(numerator, denominator))
    elif isinstance(left, Divide):
        # (a/b)/c -> a/(b*c)
        return simplify(Divide(left.left, simplify(Multiply(left.right, right))))
    elif isinstance(right, Divide):
        # a/(c/d) -> (a*d)/c
        # XXX: c is used as it is and is not combined with anything in a.
        return simplify(Divide(simplify(Multiply(left, right.right)), right.left))
    elif isinstance(right, Variable):
        cancelled = cancel_factor(left, right)
        if cancelled is not None:
            return cancelled
        logger.debug("No factor of %s to cancel in %r", right.name, left)
        # XXX: As for Minus the operands are not replaced by their simplified
        # forms here.
        return expr
    elif left == right:
        return Constant(1)
    else:
        return Divide(left, right)


def _simplify_pow(expr: Pow) -> Expr:
    base = simplify(expr.base)
    exponent = simplify(expr.exponent)

    # Note that 0**0 gives 0 here because the base is checked first.
    if _is_zero(base):
        return Constant(0)
    elif _is_zero(exponent):
        return Constant(1)
    elif _is_one(base):
        return Constant(1)
    elif _is_one(exponent):
        return base
    else:
        return Pow(base, exponent)


def _unary_rule(kind: type[Expr]) -> Callable[[Any], Expr]:
    def _simplify_unary(expr: Any) -> Expr:
        return kind(simplify(expr.arg))

    return _simplify_unary


_simplify_rules: dict[type[Expr], Callable[[Any], Expr]] = {
    Constant: _simplify_atom,
    Variable: _simplify_atom,
    Plus: _simplify_plus,
    Minus: _simplify_minus,
    Multiply: _simplify_multiply,
    Divide: _simplify_divide,
    Sin: _unary_rule(Sin),
    Cos: _unary_rule(Cos),
    Ln: _unary_rule(Ln),
    Pow: _simplify_pow,
}


# ------------------------------------------------------------------------- #
#                                                                           #
#     Cancellation of a variable factor                                     #
#                                                                           #
# ------------------------------------------------------------------------- #


def cancel_factor(expr: Expr, var: Variable) -> Optional[Expr]:
    """Divide one factor of ``var`` out of ``expr``.

    Returns ``None`` if no factor of ``var`` can be found.

    >>> from symtree import Constant, Pow, Variable, cancel_factor
    >>> x, y = Variable('x'), Variable('y')
    >>> cancel_factor(Pow(x, Constant(3)), x)
    Pow(base=Variable(name='x'), exponent=Constant(value=2.0))
    >>> cancel_factor(y * x, x)
    Variable(name='y')
    >>> cancel_factor(y, x) is None
    True

    In a sum each term has a factor cancelled where possible and is otherwise
    left as it is so the result is not always a correct quotient:

    >>> cancel_factor(x + y, x)
    Plus(left=Constant(value=1.0), right=Variable(name='y'))
    """
    rule = _cancel_rules.get(type(expr))
    if rule is None:
        raise NoRuleError("No cancellation rule for: " + type(expr).__name__)
    return rule(expr, var)


def _cancel_none(expr: Expr, var: Variable) -> Optional[Expr]:
    return None


def _cancel_variable(expr: Variable, var: Variable) -> Optional[Expr]:
    if expr == var:
        return Constant(1)
    return None


def _cancel_multiply(expr: Multiply, var: Variable) -> Optional[Expr]:
    left = cancel_factor(expr.left, var)
    if left is not None:
        return simplify(Multiply(left, expr.right))
    right = cancel_factor(expr.right, var)
    if right is not None:
        return simplify(Multiply(expr.left, right))
    return None


def _cancel_plus(expr: Plus, var: Variable) -> Optional[Expr]:
    left = cancel_factor(expr.left, var)
    right = cancel_factor(expr.right, var)
    if left is None:
        left = expr.left
    if right is None:
        right = expr.right
    return simplify(Plus(left, right))


def _cancel_pow(expr: Pow, var: Variable) -> Optional[Expr]:
    if expr.base == var:
        exponent = simplify(Minus(expr.exponent, Constant(1)))
        return simplify(Pow(var, exponent))
    return None


_cancel_rules: dict[type[Expr], Callable[[Any, Variable], Optional[Expr]]] = {
    Constant: _cancel_none,
    Variable: _cancel_variable,
    Plus: _cancel_plus,
    Minus: _cancel_none,
    Multiply: _cancel_multiply,
    Divide: _cancel_none,
    Sin: _cancel_none,
    Cos: _cancel_none,
    Ln: _cancel_none,
    Pow: _cancel_pow,
}
