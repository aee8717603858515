import cmath

import pytest
import sympy

from Expressions import Variable, to_sympy


@pytest.fixture
def x():
    return Variable("x")


@pytest.fixture
def y():
    return Variable("y")


def evaluate(sympy_expr, **values):
    """Substitute numeric values into a SymPy expression and return a complex number."""
    substitutions = {sympy.Symbol(name): value for name, value in values.items()}
    return complex(sympy.N(sympy_expr.subs(substitutions)))


@pytest.fixture
def assert_numerically_equal():
    """Compare an expression tree with a SymPy expression at the given point."""
    def check(expr, expected, rel=1e-9, **values):
        actual = evaluate(to_sympy(expr), **values)
        reference = evaluate(expected, **values)
        assert cmath.isclose(actual, reference, rel_tol=rel, abs_tol=1e-12), (actual, reference)
    return check
