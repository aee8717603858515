class ExpressionError(Exception):
    """Base class for every failure raised while building or differentiating an expression."""


class DivisionByZero(ExpressionError, ZeroDivisionError):
    """Raised by Div.create when the divisor is the literal constant 0."""


class DomainError(ExpressionError, ValueError):
    """Raised by Ln.create when the operand is the literal constant 0."""


class UnsupportedDerivative(ExpressionError, NotImplementedError):
    """Raised when no differentiation rule covers the shape of a node."""


class InvalidOperation(ExpressionError, TypeError):
    """Raised when a node is asked for something its kind does not have."""
