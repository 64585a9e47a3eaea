"""symtree.core.expr module.

This module defines the expression tree types. Every expression is an
immutable :class:`Expr` built from the closed set of variants below:

=============  ========================  ==============================
Variant        Fields                    Meaning
=============  ========================  ==============================
Constant       ``value``                 literal ``float``
Variable       ``name``                  free variable reference
Plus           ``left``, ``right``       sum
Minus          ``left``, ``right``       difference
Multiply       ``left``, ``right``       product
Divide         ``left``, ``right``       quotient
Sin, Cos, Ln   ``arg``                   unary functions
Pow            ``base``, ``exponent``    real power
=============  ========================  ==============================

Equality is structural but not uniform: :class:`Plus` and :class:`Multiply`
compare equal with their operands swapped whereas every other variant is
order-sensitive. See :func:`expr_equal`.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import TYPE_CHECKING as _TYPE_CHECKING
from typing import Any
from typing import Callable
from typing import Union

from symtree.core.exceptions import ExpressifyError
from symtree.core.exceptions import NoRuleError


if _TYPE_CHECKING:
    Expressifiable = Union["Expr", int, float]
    ExprBinOp = Callable[["Expr", "Expr"], "Expr"]
    ExpressifyBinOp = Callable[["Expr", Expressifiable], "Expr"]


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
]


def expressify(obj: Any) -> Expr:
    """Convert a native Python number to an :class:`Expr`.

    >>> from symtree import expressify, Variable
    >>> expressify(2)
    Constant(value=2.0)
    >>> x = Variable('x')
    >>> expressify(x) is x
    True
    """
    if isinstance(obj, Expr):
        return obj
    elif isinstance(obj, (int, float)):
        return Constant(obj)
    else:
        raise ExpressifyError(f"Cannot convert {type(obj).__name__} to Expr")


def expressify_other(method: ExprBinOp) -> ExpressifyBinOp:
    """Call ``expressify`` on operands in ``__add__`` etc."""

    @wraps(method)
    def expressify_method(self: Expr, other: Expressifiable) -> Expr:
        if not isinstance(other, Expr):
            try:
                other = expressify(other)
            except ExpressifyError:
                return NotImplemented
        return method(self, other)

    return expressify_method


class Expr:
    """Base class for all expression nodes.

    Expressions are built by calling the variant classes directly or with the
    usual Python operators:

    >>> from symtree import Variable, Plus, Constant
    >>> x = Variable('x')
    >>> x + 1 == Plus(x, Constant(1))
    True

    Nothing is simplified at construction time so ``x + 0`` stays as it is:

    >>> x + 0
    Plus(left=Variable(name='x'), right=Constant(value=0.0))
    """

    __slots__ = ()

    @property
    def args(self) -> tuple[Expr, ...]:
        """The child expressions of this node."""
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        """Structural equality, see :func:`expr_equal`."""
        if not isinstance(other, Expr):
            return NotImplemented
        return expr_equal(self, other)

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Expr):
            return NotImplemented
        return not expr_equal(self, other)

    def __hash__(self) -> int:
        return expr_hash(self)

    def __pos__(self) -> Expr:
        """+Expr -> Expr."""
        return self

    def __neg__(self) -> Expr:
        """-Expr -> Expr."""
        return Multiply(Constant(-1), self)

    @expressify_other
    def __add__(self, other: Expr) -> Expr:
        """Expr + Expr -> Expr."""
        return Plus(self, other)

    @expressify_other
    def __radd__(self, other: Expr) -> Expr:
        """Expr + Expr -> Expr."""
        return Plus(other, self)

    @expressify_other
    def __sub__(self, other: Expr) -> Expr:
        """Expr - Expr -> Expr."""
        return Minus(self, other)

    @expressify_other
    def __rsub__(self, other: Expr) -> Expr:
        """Expr - Expr -> Expr."""
        return Minus(other, self)

    @expressify_other
    def __mul__(self, other: Expr) -> Expr:
        """Expr * Expr -> Expr."""
        return Multiply(self, other)

    @expressify_other
    def __rmul__(self, other: Expr) -> Expr:
        """Expr * Expr -> Expr."""
        return Multiply(other, self)

    @expressify_other
    def __truediv__(self, other: Expr) -> Expr:
        """Expr / Expr -> Expr."""
        return Divide(self, other)

    @expressify_other
    def __rtruediv__(self, other: Expr) -> Expr:
        """Expr / Expr -> Expr."""
        return Divide(other, self)

    @expressify_other
    def __pow__(self, other: Expr) -> Expr:
        """Expr ** Expr -> Expr."""
        return Pow(self, other)

    @expressify_other
    def __rpow__(self, other: Expr) -> Expr:
        """Expr ** Expr -> Expr."""
        return Pow(other, self)


@dataclass(frozen=True, eq=False)
class Constant(Expr):
    """A numeric literal. The value is always stored as a ``float``.

    >>> from symtree import Constant
    >>> Constant(1)
    Constant(value=1.0)
    >>> Constant(0.0) == Constant(-0.0)
    False
    """

    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    @property
    def args(self) -> tuple[Expr, ...]:
        return ()


@dataclass(frozen=True, eq=False)
class Variable(Expr):
    """A reference to a named free variable."""

    name: str

    @property
    def args(self) -> tuple[Expr, ...]:
        return ()


@dataclass(frozen=True, eq=False)
class BinaryOp(Expr):
    """Common base for the four arithmetic operators."""

    left: Expr
    right: Expr

    @property
    def args(self) -> tuple[Expr, ...]:
        return (self.left, self.right)


class Plus(BinaryOp):
    """Sum ``left + right``."""


class Minus(BinaryOp):
    """Difference ``left - right``."""


class Multiply(BinaryOp):
    """Product ``left * right``."""


class Divide(BinaryOp):
    """Quotient ``left / right``."""


@dataclass(frozen=True, eq=False)
class UnaryOp(Expr):
    """Common base for the unary functions."""

    arg: Expr

    @property
    def args(self) -> tuple[Expr, ...]:
        return (self.arg,)


class Sin(UnaryOp):
    """Sine of ``arg``."""


class Cos(UnaryOp):
    """Cosine of ``arg``."""


class Ln(UnaryOp):
    """Natural logarithm of ``arg``."""


@dataclass(frozen=True, eq=False)
class Pow(Expr):
    """Real power ``base ** exponent`` for arbitrary subexpressions."""

    base: Expr
    exponent: Expr

    @property
    def args(self) -> tuple[Expr, ...]:
        return (self.base, self.exponent)


# ------------------------------------------------------------------------- #
#                                                                           #
#     Equality and hashing                                                  #
#                                                                           #
# ------------------------------------------------------------------------- #


def _equal_constant(a: Constant, b: Constant) -> bool:
    # float.hex distinguishes -0.0 from 0.0 and maps every NaN to 'nan'.
    return a.value.hex() == b.value.hex()


def _equal_variable(a: Variable, b: Variable) -> bool:
    return a.name == b.name


def _equal_ordered(a: Expr, b: Expr) -> bool:
    return all(expr_equal(sa, sb) for sa, sb in zip(a.args, b.args))


def _equal_commutative(a: BinaryOp, b: BinaryOp) -> bool:
    return (expr_equal(a.left, b.left) and expr_equal(a.right, b.right)) or (
        expr_equal(a.left, b.right) and expr_equal(a.right, b.left)
    )


_equality_rules: dict[type[Expr], Callable[[Any, Any], bool]] = {
    Constant: _equal_constant,
    Variable: _equal_variable,
    Plus: _equal_commutative,
    Multiply: _equal_commutative,
    Minus: _equal_ordered,
    Divide: _equal_ordered,
    Sin: _equal_ordered,
    Cos: _equal_ordered,
    Ln: _equal_ordered,
    Pow: _equal_ordered,
}


def expr_equal(a: Expr, b: Expr) -> bool:
    """Structural equality of two expressions.

    :class:`Plus` and :class:`Multiply` accept their operands in either order
    but only at the top level of each node:

    >>> from symtree import Constant, Minus, Plus, expr_equal
    >>> one, two = Constant(1), Constant(2)
    >>> expr_equal(Plus(one, two), Plus(two, one))
    True
    >>> expr_equal(Minus(one, two), Minus(two, one))
    False

    Every other variant compares its operands in order.
    """
    rule = _equality_rules.get(type(a))
    if rule is None:
        raise NoRuleError("No equality rule for: " + type(a).__name__)
    if type(a) is not type(b):
        return False
    return rule(a, b)


def expr_hash(expr: Expr) -> int:
    """Hash consistent with :func:`expr_equal`."""
    if isinstance(expr, Constant):
        return hash((Constant, expr.value.hex()))
    elif isinstance(expr, Variable):
        return hash((Variable, expr.name))
    elif isinstance(expr, (Plus, Multiply)):
        return hash((type(expr), hash(expr.left) + hash(expr.right)))
    else:
        return hash((type(expr), *(hash(arg) for arg in expr.args)))


# ------------------------------------------------------------------------- #
#                                                                           #
#     Structural helpers                                                    #
#                                                                           #
# ------------------------------------------------------------------------- #


def free_variables(expr: Expr) -> frozenset[str]:
    """Names of all :class:`Variable` nodes in ``expr``.

    >>> from symtree import Variable, Sin, free_variables
    >>> x, y = Variable('x'), Variable('y')
    >>> sorted(free_variables(Sin(x) * y + 1))
    ['x', 'y']
    """
    names = set()
    stack = [expr]
    while stack:
        node = stack.pop()
        if isinstance(node, Variable):
            names.add(node.name)
        else:
            stack.extend(node.args)
    return frozenset(names)


def count_ops_tree(expr: Expr) -> int:
    """Count the nodes of ``expr`` with their multiplicity.

    Shared subtrees are counted once for every place they occur:

    >>> from symtree import Variable, count_ops_tree
    >>> x = Variable('x')
    >>> e = x * x
    >>> count_ops_tree(e + e)
    7
    """
    return 1 + sum(count_ops_tree(arg) for arg in expr.args)
