import pytest

from Expressions import (
    E,
    Constant,
    Variable,
    Add,
    Sub,
    Mul,
    Div,
    Pow,
    Ln,
    DivisionByZero,
    DomainError,
    InvalidOperation,
)


def operand_trees(x, y):
    return [
        x,
        Constant(7),
        Mul.create(Constant(3), x),
        Pow.create(x, Constant(2)),
        Ln.create(Add.create(x, y)),
        Div.create(x, y),
    ]


class TestPredicates:
    def test_is_constant_only_for_constants(self, x):
        assert Constant(3).is_constant()
        assert not x.is_constant()
        assert not Add.create(x, Constant(1)).is_constant()
        assert not Ln.create(x).is_constant()

    def test_is_constant_e_uses_tolerance(self):
        assert Constant(E).is_constant_e()
        assert Constant(E + 1e-12).is_constant_e()
        assert not Constant(2.718).is_constant_e()
        assert not Constant(1).is_constant_e()

    def test_value_on_non_constant_fails(self, x):
        assert Constant(2.5).value == 2.5
        with pytest.raises(InvalidOperation):
            x.value
        with pytest.raises(InvalidOperation):
            Mul.create(x, x).value

    def test_variable_needs_a_name(self):
        with pytest.raises(InvalidOperation):
            Variable("")

    @pytest.mark.parametrize("value", ["abc", None, [1]])
    def test_constant_needs_a_number(self, value):
        with pytest.raises(InvalidOperation):
            Constant(value)

    def test_constant_accepts_numeric_strings(self):
        assert Constant("2.5") == Constant(2.5)


class TestStructure:
    def test_structural_equality(self, x):
        assert Variable("x") == x
        assert Variable("x") != Variable("y")
        assert Constant(2) == Constant(2.0)
        assert Add.create(x, Constant(1)) == Add.create(Variable("x"), Constant(1))
        assert Add.create(x, Constant(1)) != Sub.create(x, Constant(1))
        assert hash(Pow.create(x, Constant(3))) == hash(Pow.create(Variable("x"), Constant(3)))

    def test_nodes_are_immutable(self, x):
        node = Add.create(x, Constant(1))
        with pytest.raises(AttributeError):
            node._operands = (x, x)
        with pytest.raises(AttributeError):
            Constant(1)._value = 2.0
        with pytest.raises(AttributeError):
            x.name = "y"

    def test_operators_cannot_bypass_create(self, x):
        with pytest.raises(TypeError):
            Add(x, Constant(0))
        with pytest.raises(TypeError):
            Ln(x)

    def test_create_rejects_non_expressions(self, x):
        with pytest.raises(InvalidOperation):
            Add.create(x, 1)
        with pytest.raises(InvalidOperation):
            Ln.create("x")

    def test_children_and_accessors(self, x, y):
        node = Pow.create(x, y)
        assert node.children == (x, y)
        assert node.base is x and node.exponent is y
        assert node.lhs is x and node.rhs is y
        assert Ln.create(x).operand is x
        assert Constant(1).children == ()


class TestAdd:
    def test_zero_is_absorbed_on_either_side(self, x, y):
        for e in operand_trees(x, y):
            assert Add.create(Constant(0), e) == e
            assert Add.create(e, Constant(0)) == e

    def test_two_constants_are_not_folded(self):
        node = Add.create(Constant(2), Constant(3))
        assert isinstance(node, Add)
        assert str(node) == "(2 + 3)"


class TestSub:
    def test_subtracting_zero(self, x):
        assert Sub.create(x, Constant(0)) == x

    def test_zero_minus_is_kept(self, x):
        node = Sub.create(Constant(0), x)
        assert isinstance(node, Sub)


class TestMul:
    def test_identity_and_absorption(self, x, y):
        for e in operand_trees(x, y):
            assert Mul.create(Constant(1), e) == e
            assert Mul.create(e, Constant(1)) == e
            assert str(Mul.create(Constant(0), e)) == "0"
            assert Mul.create(e, Constant(0)) == Constant(0)

    def test_left_constant_rules_checked_first(self):
        assert Mul.create(Constant(0), Constant(1)) == Constant(0)
        assert Mul.create(Constant(1), Constant(0)) == Constant(0)

    def test_two_constants_are_not_folded(self):
        assert isinstance(Mul.create(Constant(2), Constant(3)), Mul)


class TestPow:
    def test_exponent_zero_and_one(self, x):
        base = Add.create(x, Constant(2))
        assert Pow.create(base, Constant(0)) == Constant(1)
        assert Pow.create(base, Constant(1)) == base

    def test_constant_base_is_never_simplified(self):
        assert isinstance(Pow.create(Constant(5), Constant(0)), Pow)
        assert isinstance(Pow.create(Constant(5), Constant(1)), Pow)

    def test_non_constant_exponent(self, x):
        assert isinstance(Pow.create(x, x), Pow)


class TestDiv:
    def test_division_by_zero_fails(self, x, y):
        for e in operand_trees(x, y):
            with pytest.raises(DivisionByZero):
                Div.create(e, Constant(0))

    def test_division_by_zero_is_a_zero_division_error(self, x):
        with pytest.raises(ZeroDivisionError):
            Div.create(x, Constant(0))

    def test_division_by_one(self, x):
        assert Div.create(x, Constant(1)) == x

    def test_zero_dividend(self, x):
        assert Div.create(Constant(0), x) == Constant(0)

    def test_divisor_checked_before_dividend(self):
        with pytest.raises(DivisionByZero):
            Div.create(Constant(0), Constant(0))
        assert Div.create(Constant(0), Constant(1)) == Constant(0)


class TestLn:
    def test_ln_of_zero_fails(self):
        with pytest.raises(DomainError):
            Ln.create(Constant(0))

    def test_ln_of_e_is_one(self):
        assert Ln.create(Constant(2.718281828459045)) == Constant(1)

    def test_ln_of_other_constants_is_kept(self):
        assert isinstance(Ln.create(Constant(5)), Ln)
        assert isinstance(Ln.create(Constant(1)), Ln)


def test_constructors_are_idempotent(x, y):
    nodes = [
        Add.create(x, y),
        Sub.create(x, Constant(2)),
        Mul.create(Constant(3), x),
        Div.create(x, y),
        Pow.create(x, Constant(3)),
        Pow.create(Constant(2), x),
    ]
    for node in nodes:
        assert type(node).create(*node.children) == node
    ln_node = Ln.create(x)
    assert Ln.create(ln_node.operand) == ln_node
