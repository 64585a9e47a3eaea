"""Conversions to and from SymPy expressions.

These are defined in their own module so that SymPy will not be imported if it is
not needed.
"""
from __future__ import annotations

import math
from functools import reduce
from typing import Any

import sympy

from symtree.core.expr import (
    Constant,
    Cos,
    Divide,
    Expr,
    Ln,
    Minus,
    Multiply,
    Plus,
    Pow,
    Sin,
    Variable,
)

__all__ = [
    "to_sympy",
    "from_sympy",
]


def _sympy_number(value: float) -> Any:
    if math.isnan(value):
        return sympy.nan
    elif math.isinf(value):
        return sympy.oo if value > 0 else -sympy.oo
    elif value.is_integer():
        return sympy.Integer(int(value))
    else:
        return sympy.Float(value)


_to_sympy_ops = {
    Plus: lambda a, b: sympy.Add(a, b),
    Minus: lambda a, b: a - b,
    Multiply: lambda a, b: sympy.Mul(a, b),
    Divide: lambda a, b: a / b,
    Pow: lambda a, b: sympy.Pow(a, b),
    Sin: sympy.sin,
    Cos: sympy.cos,
    Ln: sympy.log,
}


def to_sympy(expr: Expr) -> Any:
    """Convert ``Expr`` to a SymPy expression.

    >>> # xdoctest: +REQUIRES(module:sympy)
    >>> from symtree import Variable, Sin
    >>> from symtree.sympy_conversions import to_sympy
    >>> x = Variable('x')
    >>> to_sympy(Sin(x) * 2)
    2*sin(x)
    """
    if isinstance(expr, Constant):
        return _sympy_number(expr.value)
    elif isinstance(expr, Variable):
        return sympy.Symbol(expr.name)

    op = _to_sympy_ops.get(type(expr))
    if op is None:
        raise NotImplementedError("Cannot convert " + type(expr).__name__)
    return op(*[to_sympy(arg) for arg in expr.args])


def from_sympy(expr: sympy.Basic) -> Expr:
    """Convert a SymPy expression to ``Expr``.

    SymPy's ``Add`` and ``Mul`` take any number of arguments. They are turned
    into nested binary :class:`Plus` and :class:`Multiply` nodes:

    >>> # xdoctest: +REQUIRES(module:sympy)
    >>> import sympy
    >>> from symtree.sympy_conversions import from_sympy
    >>> x = sympy.Symbol('x')
    >>> from_sympy(sympy.sin(x))
    Sin(arg=Variable(name='x'))
    >>> from symtree import Constant, Plus, Variable
    >>> from_sympy(x + 1) == Plus(Variable('x'), Constant(1))
    True
    """
    return _from_sympy_cache(expr, {})


def _from_sympy_cache(expr: sympy.Basic, cache: dict[sympy.Basic, Expr]) -> Expr:
    ret = cache.get(expr)
    if ret is not None:
        return ret
    elif expr is sympy.E:
        ret = Constant(math.e)
    elif expr.args:
        ret = _from_sympy_cache_args(expr, cache)
    elif expr.is_Number:
        ret = Constant(float(expr))
    elif isinstance(expr, sympy.Symbol):
        ret = Variable(expr.name)
    else:
        raise NotImplementedError("Cannot convert " + type(expr).__name__)
    cache[expr] = ret
    return ret


def _from_sympy_cache_args(expr: Any, cache: dict[Any, Expr]) -> Expr:
    args = [_from_sympy_cache(arg, cache) for arg in expr.args]
    if expr.is_Add:
        return reduce(Plus, args)
    elif expr.is_Mul:
        return reduce(Multiply, args)
    elif expr.is_Pow:
        return Pow(*args)
    elif isinstance(expr, sympy.sin):
        return Sin(*args)
    elif isinstance(expr, sympy.cos):
        return Cos(*args)
    elif isinstance(expr, sympy.log) and len(args) == 1:
        return Ln(*args)
    elif isinstance(expr, sympy.exp):
        return Pow(Constant(math.e), *args)
    else:
        raise NotImplementedError("Cannot convert " + type(expr).__name__)
