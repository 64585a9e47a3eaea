"""A small engine for evaluating, differentiating and simplifying expressions.

>>> from symtree import Variable, Sin, differentiate, evaluate
>>> x = Variable('x')
>>> expr = x * Sin(x)
>>> deriv = differentiate(expr, 'x')
>>> evaluate(deriv, {'x': 0.0})
0.0
"""
from __future__ import annotations

from symtree.core.differentiate import differentiate
from symtree.core.evaluate import Evaluator, evaluate
from symtree.core.exceptions import (
    ExpressifyError,
    NoRuleError,
    SymTreeError,
    UnboundVariableError,
)
from symtree.core.expr import (
    BinaryOp,
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
    UnaryOp,
    Variable,
    count_ops_tree,
    expr_equal,
    expressify,
    free_variables,
)
from symtree.core.simplify import cancel_factor, simplify

__all__ = [
    "Expr",
    "Constant",
    "Variable",
    "BinaryOp",
    "Plus",
    "Minus",
    "Multiply",
    "Divide",
    "UnaryOp",
    "Sin",
    "Cos",
    "Ln",
    "Pow",
    "expr_equal",
    "expressify",
    "free_variables",
    "count_ops_tree",
    "Evaluator",
    "evaluate",
    "differentiate",
    "simplify",
    "cancel_factor",
    "SymTreeError",
    "UnboundVariableError",
    "NoRuleError",
    "ExpressifyError",
]
