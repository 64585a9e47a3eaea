"""Define the core evaluation code."""
from __future__ import annotations

from typing import Callable
from typing import Generic
from typing import TYPE_CHECKING as _TYPE_CHECKING
from typing import TypeVar

import numpy as np

from symtree.core.exceptions import NoRuleError
from symtree.core.exceptions import UnboundVariableError
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


if _TYPE_CHECKING:
    from typing import Any, Mapping, Optional, Sequence


__all__ = [
    "Evaluator",
    "eval_f64",
    "evaluate",
]


_T = TypeVar("_T")


if _TYPE_CHECKING:
    Op1 = Callable[[_T], _T]
    Op2 = Callable[[_T, _T], _T]


class Evaluator(Generic[_T]):
    """Objects that evaluate expressions.

    An :class:`Evaluator` holds one rule per kind of operation. Atoms are
    converted with ``from_constant`` and variables are looked up by name in
    the bindings given when calling the evaluator.

    >>> import math
    >>> from symtree import Constant, Sin, Variable
    >>> from symtree.core.evaluate import Evaluator
    >>> evalf = Evaluator[float](float)
    >>> evalf.add_op1(Sin, math.sin)
    >>> evalf(Sin(Constant(1)))  # doctest: +ELLIPSIS
    0.84147098480789...

    Values for variables are supplied as a mapping from names:

    >>> x = Variable('x')
    >>> evalf(Sin(x), {'x': 1.0})  # doctest: +ELLIPSIS
    0.84147098480789...

    Any kind of expression without a rule is an error:

    >>> from symtree import Cos
    >>> evalf(Cos(x), {'x': 1.0})
    Traceback (most recent call last):
        ...
    symtree.core.exceptions.NoRuleError: No rule for operation: Cos
    """

    operations: dict[type[Expr], Callable[..., _T]]
    from_constant: Callable[[float], _T]

    def __init__(self, from_constant: Callable[[float], _T]) -> None:
        """Create an evaluator with no operation rules."""
        self.operations = {}
        self.from_constant = from_constant

    def add_op1(self, kind: type[Expr], func: Op1[_T]) -> None:
        """Add an evaluation rule for a unary kind of expression."""
        self.operations[kind] = func

    def add_op2(self, kind: type[Expr], func: Op2[_T]) -> None:
        """Add an evaluation rule for a binary kind of expression."""
        self.operations[kind] = func

    def eval_atom(self, atom: Expr, values: Mapping[str, Any]) -> _T:
        """Evaluate a :class:`Constant` or :class:`Variable`."""
        if isinstance(atom, Constant):
            return self.from_constant(atom.value)
        elif isinstance(atom, Variable):
            try:
                value = values[atom.name]
            except KeyError:
                raise UnboundVariableError(atom.name) from None
            return self.from_constant(value)
        else:
            raise NoRuleError("No rule for atom: " + type(atom).__name__)

    def eval_operation(self, kind: type[Expr], argvals: Sequence[_T]) -> _T:
        """Evaluate one operation with some values."""
        op_func = self.operations.get(kind)
        if op_func is None:
            raise NoRuleError("No rule for operation: " + kind.__name__)
        return op_func(*argvals)

    def eval_recursive(self, expr: Expr, values: Mapping[str, Any]) -> _T:
        """Evaluate the expression using recursion."""
        if isinstance(expr, (Constant, Variable)):
            return self.eval_atom(expr, values)
        else:
            # Evaluate children first. The first failure propagates.
            argvals = [self.eval_recursive(c, values) for c in expr.args]
            return self.eval_operation(type(expr), argvals)

    def __call__(
        self, expr: Expr, values: Optional[Mapping[str, Any]] = None
    ) -> _T:
        """Short-hand for :meth:`eval_recursive`."""
        if values is None:
            values = {}
        return self.eval_recursive(expr, values)


#
# 64 bit floating point evaluation. NumPy scalars are used rather than Python
# floats because Python raises on e.g. 1.0/0.0 or math.log(0.0) whereas here
# those follow IEEE 754 and give inf or nan.
#
eval_f64 = Evaluator[np.float64](np.float64)
eval_f64.add_op2(Plus, np.add)
eval_f64.add_op2(Minus, np.subtract)
eval_f64.add_op2(Multiply, np.multiply)
eval_f64.add_op2(Divide, np.divide)
eval_f64.add_op1(Sin, np.sin)
eval_f64.add_op1(Cos, np.cos)
eval_f64.add_op1(Ln, np.log)
eval_f64.add_op2(Pow, np.power)


def evaluate(expr: Expr, bindings: Mapping[str, float]) -> float:
    """Evaluate ``expr`` as a ``float`` with variables taken from ``bindings``.

    >>> from symtree import Constant, Plus, Variable, evaluate
    >>> x = Variable('x')
    >>> evaluate(Plus(Plus(Constant(5), x), Constant(3)), {'x': 2.5})
    10.5

    Invalid floating point operations are not errors:

    >>> evaluate(Constant(1) / Constant(0), {})
    inf

    A variable missing from ``bindings`` is an error though:

    >>> evaluate(x + 1, {})
    Traceback (most recent call last):
        ...
    symtree.core.exceptions.UnboundVariableError: There is no variable 'x' in the bindings
    """
    with np.errstate(all="ignore"):
        return float(eval_f64(expr, bindings))
