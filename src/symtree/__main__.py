"""Demonstration entry point: ``python -m symtree``."""
import logging

from symtree.core.differentiate import differentiate
from symtree.core.evaluate import evaluate
from symtree.core.expr import Constant


def main() -> None:
    """Differentiate and evaluate a constant expression."""
    logging.basicConfig(level=logging.WARNING)

    expr = Constant(0)
    bindings: dict[str, float] = {}

    print(differentiate(expr, "x"))
    print(evaluate(expr, bindings))


if __name__ == "__main__":
    main()
