import io

from .errors import InvalidOperation
from .nodes import Expression, Constant, Variable, BinaryOperator, Add, Sub, Mul, Div, Pow, Ln


def display(expr: Expression) -> str:
    """Fully parenthesized infix text, e.g. ``((5 * (x ^ 69)) + 1)``."""
    sink = io.StringIO()
    expr.display(sink)
    return sink.getvalue()


# --- LaTeX Formatting ---
PRECEDENCE = {Add: 1, Sub: 1, Mul: 2, Div: 2, Pow: 3}


def _format_constant(node: Constant) -> str:
    if node.is_constant_e():
        return "e"
    value = node.value
    return str(int(value)) if value.is_integer() else str(value)


def to_latex(node: Expression) -> str:
    if isinstance(node, Constant):
        return _format_constant(node)
    if isinstance(node, Variable):
        return node.name
    if isinstance(node, Ln):
        return f"\\ln({to_latex(node.operand)})"
    if not isinstance(node, BinaryOperator):
        raise InvalidOperation(f"cannot render {type(node).__name__} as LaTeX")

    op = type(node)

    def format_child(child_node, is_left_child=False):
        child_latex = to_latex(child_node)
        if not isinstance(child_node, BinaryOperator):
            return child_latex

        op_prec = PRECEDENCE.get(op, 99)
        child_prec = PRECEDENCE.get(type(child_node), 99)

        if child_prec < op_prec:
            return f"({child_latex})"
        if child_prec == op_prec:
            if op is Pow and is_left_child:
                return f"({child_latex})"
            if op in (Add, Sub, Mul, Div) and not is_left_child:
                return f"({child_latex})"
        return child_latex

    left_latex = format_child(node.lhs, is_left_child=True)
    right_latex = format_child(node.rhs)

    if op is Add:
        return f"{left_latex} + {right_latex}"
    if op is Sub:
        return f"{left_latex} - {right_latex}"
    if op is Mul:
        left_child, right_child = node.lhs, node.rhs
        # Unary minus: -1 * X
        if left_child.is_constant() and left_child.value == -1:
            return f"-{right_latex}"
        # Implicit multiplication for a number and a non-number (4x)
        if left_child.is_constant() and not right_child.is_constant():
            return f"{left_latex}{right_latex}"
        return f"{left_latex} \\cdot {right_latex}"
    if op is Div:
        return f"\\frac{{{to_latex(node.lhs)}}}{{{to_latex(node.rhs)}}}"
    return f"{{{left_latex}}}^{{{right_latex}}}"


# --- JSON Tree ---
def to_tree(node: Expression) -> dict:
    """Nested dict with a ``kind`` tag per node, the shape accepted by the HTTP API."""
    if isinstance(node, Constant):
        return {"kind": node.kind, "value": node.value}
    if isinstance(node, Variable):
        return {"kind": node.kind, "name": node.name}
    if isinstance(node, Ln):
        return {"kind": node.kind, "operand": to_tree(node.operand)}
    if isinstance(node, BinaryOperator):
        return {"kind": node.kind, "lhs": to_tree(node.lhs), "rhs": to_tree(node.rhs)}
    raise InvalidOperation(f"cannot serialize {type(node).__name__}")
