import time
import tracemalloc
import logging

from .errors import ExpressionError, InvalidOperation, UnsupportedDerivative
from .nodes import Expression, Constant, Variable, Add, Sub, Mul, Div, Pow, Ln

# --- Logger Setup ---
logger = logging.getLogger(__name__)


# --- Differentiation Rules ---
# Every rule combines sub-derivatives through the simplifying constructors, so the
# returned tree is already normalized.

def _constant_rule(node, wrt):
    return Constant(0)


def _variable_rule(node, wrt):
    # Any other variable is an independent symbol.
    return Constant(1) if node.name == wrt.name else Constant(0)


def _add_rule(node, wrt):
    lhs_d = differentiate(node.lhs, wrt)
    rhs_d = differentiate(node.rhs, wrt)
    if lhs_d.is_constant() and rhs_d.is_constant():
        return Constant(lhs_d.value + rhs_d.value)
    return Add.create(lhs_d, rhs_d)


def _sub_rule(node, wrt):
    lhs_d = differentiate(node.lhs, wrt)
    rhs_d = differentiate(node.rhs, wrt)
    if lhs_d.is_constant() and rhs_d.is_constant():
        return Constant(lhs_d.value - rhs_d.value)
    # Non-constant derivatives are combined with Add, kept for output compatibility.
    return Add.create(lhs_d, rhs_d)


def _mul_rule(node, wrt):
    lhs, rhs = node.lhs, node.rhs
    lhs_d = differentiate(lhs, wrt)
    rhs_d = differentiate(rhs, wrt)
    return Add.create(Mul.create(lhs, rhs_d), Mul.create(lhs_d, rhs))


def _div_rule(node, wrt):
    lhs, rhs = node.lhs, node.rhs
    # lhs' is not part of the result, but a numerator without a derivative still fails.
    differentiate(lhs, wrt)
    rhs_d = differentiate(rhs, wrt)
    # Numerator is lhs * rhs' - rhs' * lhs, kept for output compatibility.
    numerator = Sub.create(Mul.create(lhs, rhs_d), Mul.create(rhs_d, lhs))
    return Div.create(numerator, Pow.create(rhs, Constant(2)))


def _pow_rule(node, wrt):
    base, exponent = node.base, node.exponent
    if not base.is_constant() and exponent.is_constant():
        base_d = differentiate(base, wrt)
        new_power = Constant(exponent.value - 1)
        return Mul.create(Mul.create(exponent, Pow.create(base, new_power)), base_d)
    if base.is_constant() and not exponent.is_constant():
        exponent_d = differentiate(exponent, wrt)
        return Mul.create(Mul.create(Pow.create(base, exponent), Ln.create(base)), exponent_d)
    raise UnsupportedDerivative(
        f"derivative of {node} is only defined when exactly one of base and exponent is constant")


def _ln_rule(node, wrt):
    operand = node.operand
    operand_d = differentiate(operand, wrt)
    return Mul.create(Div.create(Constant(1), operand), operand_d)


RULES = {
    Constant: _constant_rule,
    Variable: _variable_rule,
    Add: _add_rule,
    Sub: _sub_rule,
    Mul: _mul_rule,
    Div: _div_rule,
    Pow: _pow_rule,
    Ln: _ln_rule,
}


def _rule_for(node):
    for klass in type(node).__mro__:
        rule = RULES.get(klass)
        if rule is not None:
            return rule
    raise InvalidOperation(f"no differentiation rule for {type(node).__name__}")


def differentiate(expr: Expression, wrt: Variable) -> Expression:
    """Return the derivative of ``expr`` with respect to the variable ``wrt``."""
    if not isinstance(wrt, Variable):
        raise InvalidOperation(f"can only differentiate with respect to a Variable, got {type(wrt).__name__}")
    if not isinstance(expr, Expression):
        raise InvalidOperation(f"can only differentiate Expression nodes, got {type(expr).__name__}")

    result = _rule_for(expr)(expr, wrt)
    logger.debug("d/d%s %s = %s", wrt.name, expr, result)
    return result


# --- Main Compute Function ---
def compute_derivative(expression: Expression, variable):
    """Differentiate ``expression`` and report how long it took and the peak memory used.

    ``variable`` may be a Variable or a bare name. Errors from the engine are
    logged at DEBUG and re-raised unchanged; reporting them is up to the caller.
    """
    if isinstance(variable, str):
        variable = Variable(variable)

    owns_tracing = not tracemalloc.is_tracing()
    if owns_tracing:
        tracemalloc.start()
    start_time = time.perf_counter()

    try:
        derivative = differentiate(expression, variable)
    except ExpressionError as e:
        logger.debug(f"Error computing derivative of '{expression}' w.r.t. {variable}: {e}", exc_info=True)
        raise
    finally:
        end_time = time.perf_counter()
        _, peak_memory = tracemalloc.get_traced_memory()
        if owns_tracing:
            tracemalloc.stop()

    execution_time_ms = (end_time - start_time) * 1000
    logger.info(f"Differentiated '{expression}' w.r.t. {variable} in {execution_time_ms:.3f} ms")

    return {
        "expression": expression,
        "variable": variable,
        "derivative": derivative,
        "execution_time_ms": execution_time_ms,
        "peak_memory_bytes": peak_memory,
    }
