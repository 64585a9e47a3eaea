"""Core routines for symbolic differentiation.

Each kind of expression has a rule giving the (unsimplified) derivative in
terms of its operands and their derivatives. The public :func:`differentiate`
always passes the result of these rules through
:func:`~symtree.core.simplify.simplify`.
"""
from __future__ import annotations

import logging
from typing import Any
from typing import Callable

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
from symtree.core.simplify import simplify


__all__ = [
    "differentiate",
]


logger = logging.getLogger(__name__)


_DiffRule = Callable[[Any, str], Expr]


def differentiate(expr: Expr, name: str, ntimes: int = 1) -> Expr:
    """Derivative of ``expr`` wrt the variable called ``name``.

    >>> from symtree import Constant, Sin, Variable, differentiate
    >>> x = Variable('x')
    >>> differentiate(x * 5 + 7, 'x')
    Constant(value=5.0)
    >>> differentiate(Sin(x), 'x')
    Cos(arg=Variable(name='x'))

    Higher derivatives are computed by differentiating ``ntimes`` times,
    simplifying after each step:

    >>> differentiate(Sin(x), 'x', 2)
    Multiply(left=Constant(value=-1.0), right=Sin(arg=Variable(name='x')))

    Every ``Pow`` is differentiated by logarithmic differentiation so the
    exponent may also depend on the variable.
    """
    if ntimes < 0:
        raise ValueError("ntimes must be nonnegative")

    logger.debug("Differentiating %r wrt %s (%d times)", expr, name, ntimes)

    deriv = expr
    for _ in range(ntimes):
        deriv = simplify(_diff_raw(deriv, name))
    return deriv


def _diff_raw(expr: Expr, name: str) -> Expr:
    """Unsimplified derivative of ``expr`` wrt ``name``."""
    rule = _diff_rules.get(type(expr))
    if rule is None:
        raise NoRuleError("No differentiation rule for: " + type(expr).__name__)
    return rule(expr, name)


def _diff_constant(expr: Constant, name: str) -> Expr:
    return Constant(0)


def _diff_variable(expr: Variable, name: str) -> Expr:
    return Constant(1) if expr.name == name else Constant(0)


def _diff_plus(expr: Plus, name: str) -> Expr:
    return Plus(_diff_raw(expr.left, name), _diff_raw(expr.right, name))


def _diff_minus(expr: Minus, name: str) -> Expr:
    return Minus(_diff_raw(expr.left, name), _diff_raw(expr.right, name))


def _diff_multiply(expr: Multiply, name: str) -> Expr:
    # (u*v)' = u'*v + u*v'
    u, v = expr.left, expr.right
    return Plus(
        Multiply(_diff_raw(u, name), v),
        Multiply(u, _diff_raw(v, name)),
    )


def _diff_divide(expr: Divide, name: str) -> Expr:
    # (u/v)' = (u'*v - u*v')/v**2
    u, v = expr.left, expr.right
    return Divide(
        Minus(
            Multiply(_diff_raw(u, name), v),
            Multiply(u, _diff_raw(v, name)),
        ),
        Pow(v, Constant(2)),
    )


def _diff_sin(expr: Sin, name: str) -> Expr:
    return Multiply(_diff_raw(expr.arg, name), Cos(expr.arg))


def _diff_cos(expr: Cos, name: str) -> Expr:
    return Multiply(Constant(-1), Multiply(_diff_raw(expr.arg, name), Sin(expr.arg)))


def _diff_ln(expr: Ln, name: str) -> Expr:
    return Divide(_diff_raw(expr.arg, name), expr.arg)


def _diff_pow(expr: Pow, name: str) -> Expr:
    # (b**p)' = b**p * (p'*ln(b) + p*ln(b)')
    base, exponent = expr.base, expr.exponent
    return Multiply(
        expr,
        Plus(
            Multiply(_diff_raw(exponent, name), Ln(base)),
            Multiply(exponent, _diff_raw(Ln(base), name)),
        ),
    )


_diff_rules: dict[type[Expr], _DiffRule] = {
    Constant: _diff_constant,
    Variable: _diff_variable,
    Plus: _diff_plus,
    Minus: _diff_minus,
    Multiply: _diff_multiply,
    Divide: _diff_divide,
    Sin: _diff_sin,
    Cos: _diff_cos,
    Ln: _diff_ln,
    Pow: _diff_pow,
}
