import random
from functools import reduce

from Expressions import Constant, Variable, Add, Mul, Pow, Ln, E, display, to_latex


def generate_random_expression(variables, num_terms=3, max_depth=2, rng=None):
    """Build a random, differentiable expression from the simplifying constructors.

    Returns the expression, its display text and its LaTeX representation.
    """
    rng = rng or random.Random()

    # Ensure all variables are Variable nodes
    variables = [Variable(v) if isinstance(v, str) else v for v in variables]
    if not variables:
        raise ValueError("At least one variable is required")
    if num_terms < 1:
        raise ValueError("num_terms must be at least 1")

    operators = ["add", "mul", "pow"]

    def create_leaf():
        if rng.random() < 0.7:
            return rng.choice(variables)  # variable
        else:
            return Constant(rng.randint(1, 10))  # constant

    # Only constant exponents (1 to 5), so the power rule always applies.
    def safe_exponent():
        return Constant(rng.randint(1, 5))

    # Constant bases and ln operands are swapped for a variable so no node needs
    # the exponential rule with a constant exponent or ln of a literal.
    def non_constant(node):
        return rng.choice(variables) if node.is_constant() else node

    def create_node(current_depth):
        if current_depth >= max_depth or rng.random() < 0.4:
            return create_leaf()

        choice = rng.choice(operators + ["func"])

        # function node
        if choice == "func":
            return Ln.create(non_constant(create_node(current_depth + 1)))

        # operator node
        left = create_node(current_depth + 1)
        right = create_node(current_depth + 1)

        if choice == "add":
            return Add.create(left, right)
        elif choice == "mul":
            return Mul.create(left, right)
        return Pow.create(non_constant(left), safe_exponent())

    terms = [create_node(0) for _ in range(num_terms)]
    expr = reduce(Add.create, terms)

    return expr, display(expr), to_latex(expr)


def sample_expressions(variable="x"):
    """The three showcase expressions: 5*x^69 + 5*x^420, 5^(69*x) and e^(69*x)."""
    x = Variable(variable)
    c69, c420, c5, ce = Constant(69), Constant(420), Constant(5), Constant(E)

    return [
        Add.create(Mul.create(c5, Pow.create(x, c69)), Mul.create(c5, Pow.create(x, c420))),
        Pow.create(c5, Mul.create(c69, x)),
        Pow.create(ce, Mul.create(c69, x)),
    ]


if __name__ == '__main__':
    expr, expr_str, expr_latex = generate_random_expression(["x", "y"], num_terms=2, max_depth=3)
    print(f"Generated Expression: {expr!r}")
    print(f"Generated Expression String: {expr_str}")
    print(f"Generated Expression LaTeX: {expr_latex}")
