from .errors import (
    ExpressionError,
    DivisionByZero,
    DomainError,
    UnsupportedDerivative,
    InvalidOperation,
)
from .nodes import (
    E,
    Expression,
    Operator,
    BinaryOperator,
    Constant,
    Variable,
    Add,
    Sub,
    Mul,
    Div,
    Pow,
    Ln,
    BINARY_OPERATORS,
)
from .derivative import differentiate, compute_derivative
from .display import display, to_latex, to_tree
from .sympy_bridge import to_sympy, sympy_derivative
