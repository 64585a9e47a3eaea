"""Module for all symtree exceptions."""


class SymTreeError(Exception):
    """Superclass for all symtree exceptions."""

    pass


class UnboundVariableError(SymTreeError, KeyError):
    """Raised when evaluating a :class:`Variable` that has no value.

    :ivar name: The name of the variable that could not be found.
    """

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"There is no variable {self.name!r} in the bindings"


class NoRuleError(SymTreeError):
    """Raised when a pass has no rule for a kind of expression."""

    pass


class ExpressifyError(SymTreeError, TypeError):
    """Raised when an object cannot be expressified."""

    pass
