import sympy

from .errors import InvalidOperation
from .nodes import Expression, Constant, Variable, Add, Sub, Mul, Div, Pow, Ln


def _constant_to_sympy(node: Constant):
    if node.is_constant_e():
        return sympy.E
    value = node.value
    if value.is_integer():
        return sympy.Integer(int(value))
    return sympy.Float(value)


def to_sympy(node: Expression):
    """Convert an expression tree into the equivalent SymPy expression.

    Integral constants become exact integers and the constant e becomes ``sympy.E``,
    so derivatives can be compared with ``sympy.diff`` or evaluated by substitution.
    """
    if isinstance(node, Constant):
        return _constant_to_sympy(node)
    if isinstance(node, Variable):
        return sympy.Symbol(node.name)
    if isinstance(node, Ln):
        return sympy.log(to_sympy(node.operand))

    if isinstance(node, Add):
        return sympy.Add(to_sympy(node.lhs), to_sympy(node.rhs))
    if isinstance(node, Sub):
        return sympy.Add(to_sympy(node.lhs), -to_sympy(node.rhs))
    if isinstance(node, Mul):
        return sympy.Mul(to_sympy(node.lhs), to_sympy(node.rhs))
    if isinstance(node, Div):
        return sympy.Mul(to_sympy(node.lhs), sympy.Pow(to_sympy(node.rhs), -1))
    if isinstance(node, Pow):
        return sympy.Pow(to_sympy(node.base), to_sympy(node.exponent))

    raise InvalidOperation(f"cannot convert {type(node).__name__} to SymPy")


def sympy_derivative(node: Expression, wrt: Variable):
    """Reference derivative computed by SymPy, used to cross-check the engine."""
    return sympy.diff(to_sympy(node), sympy.Symbol(wrt.name))
