import io
import math
from typing import Tuple

from .errors import DivisionByZero, DomainError, InvalidOperation

E = 2.718281828459045
E_TOLERANCE = 1e-10


# --- Base Expression Node ---
class Expression:
    """Immutable node of an expression tree.

    Leaves (Constant, Variable) are built with their class directly. Operator nodes
    are only ever built through ``<Operator>.create(...)``, which applies the local
    simplification rules before a node is allocated.
    """

    __slots__ = ()
    kind = None

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} nodes are immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} nodes are immutable")

    def is_constant(self) -> bool:
        return False

    @property
    def value(self) -> float:
        raise InvalidOperation(f"{type(self).__name__} node has no constant value")

    @property
    def children(self) -> Tuple["Expression", ...]:
        return ()

    def display(self, sink):
        raise NotImplementedError

    def _key(self):
        raise NotImplementedError

    def __eq__(self, other):
        if not isinstance(other, Expression):
            return NotImplemented
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self):
        return hash((type(self).__name__, self._key()))

    def __str__(self):
        sink = io.StringIO()
        self.display(sink)
        return sink.getvalue()

    def __repr__(self):
        return f"{type(self).__name__}({', '.join(map(repr, self._key()))})"


# --- Leaves ---
class Constant(Expression):
    __slots__ = ('_value',)
    kind = 'constant'

    def __init__(self, value):
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise InvalidOperation(f"constant value must be a number, got {value!r}") from None
        object.__setattr__(self, '_value', value)

    def is_constant(self) -> bool:
        return True

    @property
    def value(self) -> float:
        return self._value

    def is_constant_e(self) -> bool:
        return math.fabs(self._value - E) < E_TOLERANCE

    def display(self, sink):
        # Same text as a C stream / printf("%g"): 5.0 -> "5", e -> "2.71828"
        sink.write(format(self._value, 'g'))

    def _key(self):
        return (self._value,)


class Variable(Expression):
    __slots__ = ('_name',)
    kind = 'variable'

    def __init__(self, name: str):
        if not isinstance(name, str) or not name:
            raise InvalidOperation(f"variable name must be a non-empty string, got {name!r}")
        object.__setattr__(self, '_name', name)

    @property
    def name(self) -> str:
        return self._name

    def display(self, sink):
        sink.write(self._name)

    def _key(self):
        return (self._name,)


def _is_literal(node: Expression, target: float) -> bool:
    return node.is_constant() and node.value == target


def _check_operands(*operands):
    for operand in operands:
        if not isinstance(operand, Expression):
            raise InvalidOperation(f"operands must be Expression nodes, got {type(operand).__name__}")


# --- Operator Nodes ---
class Operator(Expression):
    __slots__ = ('_operands',)

    def __init__(self, *operands):
        raise TypeError(f"{type(self).__name__} nodes are built with {type(self).__name__}.create()")

    @classmethod
    def _raw(cls, *operands):
        node = object.__new__(cls)
        object.__setattr__(node, '_operands', operands)
        return node

    @property
    def children(self):
        return self._operands

    def _key(self):
        return self._operands


class BinaryOperator(Operator):
    __slots__ = ()
    symbol = None

    @property
    def lhs(self) -> Expression:
        return self._operands[0]

    @property
    def rhs(self) -> Expression:
        return self._operands[1]

    def display(self, sink):
        sink.write('(')
        self.lhs.display(sink)
        sink.write(f" {self.symbol} ")
        self.rhs.display(sink)
        sink.write(')')


class Add(BinaryOperator):
    __slots__ = ()
    kind = 'add'
    symbol = '+'

    @classmethod
    def create(cls, lhs: Expression, rhs: Expression) -> Expression:
        _check_operands(lhs, rhs)
        if _is_literal(lhs, 0):
            return rhs
        if _is_literal(rhs, 0):
            return lhs
        return cls._raw(lhs, rhs)


class Sub(BinaryOperator):
    __slots__ = ()
    kind = 'sub'
    symbol = '-'

    @classmethod
    def create(cls, lhs: Expression, rhs: Expression) -> Expression:
        _check_operands(lhs, rhs)
        if _is_literal(rhs, 0):
            return lhs
        return cls._raw(lhs, rhs)


class Mul(BinaryOperator):
    __slots__ = ()
    kind = 'mul'
    symbol = '*'

    @classmethod
    def create(cls, lhs: Expression, rhs: Expression) -> Expression:
        _check_operands(lhs, rhs)
        if lhs.is_constant():
            if lhs.value == 0:
                return Constant(0)
            if lhs.value == 1:
                return rhs
        if rhs.is_constant():
            if rhs.value == 0:
                return Constant(0)
            if rhs.value == 1:
                return lhs
        return cls._raw(lhs, rhs)


class Div(BinaryOperator):
    __slots__ = ()
    kind = 'div'
    symbol = '/'

    @classmethod
    def create(cls, lhs: Expression, rhs: Expression) -> Expression:
        _check_operands(lhs, rhs)
        if rhs.is_constant():
            if rhs.value == 0:
                raise DivisionByZero("math error: attempted to divide by zero")
            if rhs.value == 1:
                return lhs
        if _is_literal(lhs, 0):
            return Constant(0)
        return cls._raw(lhs, rhs)


class Pow(BinaryOperator):
    __slots__ = ()
    kind = 'pow'
    symbol = '^'

    @property
    def base(self) -> Expression:
        return self._operands[0]

    @property
    def exponent(self) -> Expression:
        return self._operands[1]

    @classmethod
    def create(cls, base: Expression, exponent: Expression) -> Expression:
        _check_operands(base, exponent)
        if not base.is_constant() and exponent.is_constant():
            if exponent.value == 0:
                return Constant(1)
            if exponent.value == 1:
                return base
        return cls._raw(base, exponent)


class Ln(Operator):
    __slots__ = ()
    kind = 'ln'

    @property
    def operand(self) -> Expression:
        return self._operands[0]

    @classmethod
    def create(cls, operand: Expression) -> Expression:
        _check_operands(operand)
        if operand.is_constant():
            if operand.value == 0:
                raise DomainError("math error: argument of ln is zero")
            if operand.is_constant_e():
                return Constant(1)
        return cls._raw(operand)

    def display(self, sink):
        sink.write(' ln(')
        self.operand.display(sink)
        sink.write(')')


BINARY_OPERATORS = {cls.kind: cls for cls in (Add, Sub, Mul, Div, Pow)}
