import sympy

from Expressions import E, Constant, Variable, Add, Sub, Mul, Div, Pow, Ln, to_sympy, sympy_derivative

X, Y = sympy.symbols("x y")


def test_leaves():
    assert to_sympy(Constant(3)) == sympy.Integer(3)
    assert to_sympy(Constant(0.25)) == sympy.Float(0.25)
    assert to_sympy(Constant(E)) == sympy.E
    assert to_sympy(Variable("x")) == X


def test_operators(x, y):
    assert to_sympy(Add.create(x, y)) == X + Y
    assert to_sympy(Sub.create(x, y)) == X - Y
    assert to_sympy(Mul.create(x, y)) == X * Y
    assert to_sympy(Div.create(x, y)) == X / Y
    assert to_sympy(Pow.create(x, Constant(3))) == X**3
    assert to_sympy(Ln.create(x)) == sympy.log(X)


def test_reference_derivative(x):
    expr = Mul.create(Constant(5), Pow.create(x, Constant(4)))
    assert sympy_derivative(expr, x) == 20 * X**3
