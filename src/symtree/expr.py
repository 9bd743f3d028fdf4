"""RULES OF EXPRs:

1. Exprs shall NOT be mutated in place after __post_init__. Every dataclass here is frozen.
Engines build new trees; they never edit old ones, so subtrees can be shared freely.

2. Every Compound has a fixed number of operands for its operator, checked when it is constructed.
Binary arithmetic takes 2, trig takes 1, pi takes 0, an integral takes 2 or 4.

Note on equality: (expr1 == expr2) compares the canonical text (repr) of the two exprs.
It does NOT know about commutativity: (x + 2) != (2 + x). The simplifier's fixpoint check
and its "same subexpression" rules (x + x -> 2 * x etc) all rely on this.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union


class ArityError(ValueError):
    """A Compound was given the wrong number of operands for its operator."""


class UnknownOperation(NotImplementedError):
    """The operator tag is not one this library knows about."""


class UnsupportedDifferentiation(NotImplementedError):
    """d/dx of f(x)^g(x) where neither the base nor the exponent is a literal."""


class Op(str, Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"

    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    COT = "cot"
    SEC = "sec"
    CSC = "csc"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"

    PI = "pi"
    INTEGRAL = "integral"

    def __str__(self) -> str:
        return self.value

    @property
    def is_arithmetic(self) -> bool:
        return self in ARITHMETIC_OPS

    @property
    def is_trig(self) -> bool:
        return self in TRIG_OPS or self in INVERSE_TRIG_OPS


ARITHMETIC_OPS = (Op.ADD, Op.SUB, Op.MUL, Op.DIV, Op.POW)
TRIG_OPS = (Op.SIN, Op.COS, Op.TAN, Op.COT, Op.SEC, Op.CSC)
INVERSE_TRIG_OPS = (Op.ASIN, Op.ACOS, Op.ATAN)

_ARITY: Dict[Op, Tuple[int, ...]] = {
    **{op: (2,) for op in ARITHMETIC_OPS},
    **{op: (1,) for op in TRIG_OPS + INVERSE_TRIG_OPS},
    Op.PI: (0,),
    Op.INTEGRAL: (2, 4),
}


def to_op(tag: Union[Op, str]) -> Op:
    """'+' -> Op.ADD. Raises UnknownOperation for tags we don't have."""
    if isinstance(tag, Op):
        return tag
    try:
        return Op(tag)
    except ValueError:
        raise UnknownOperation(f"Unknown operation: {tag}") from None


def format_number(value: float) -> str:
    """The shortest text for a double, written the way a JS number prints.

    >>> format_number(2.0)
    '2'
    >>> format_number(0.5)
    '0.5'
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        # includes -0.0
        return "0"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def _cast(x):
    """Cast x to an Expr if possible."""
    if x is None or isinstance(x, Expr):
        return x

    # bool is an int subclass, but True + x is almost certainly a bug.
    if isinstance(x, bool):
        raise NotImplementedError(f"Cannot cast {x} to Expr")
    if isinstance(x, (int, float)):
        return Literal(x)

    if isinstance(x, tuple):
        return tuple(_cast(v) for v in x)
    elif isinstance(x, list):
        return [_cast(v) for v in x]
    elif isinstance(x, dict):
        return {k: _cast(v) for k, v in x.items()}

    raise NotImplementedError(f"Cannot cast {x} to Expr")


def cast(func):
    """Decorator to cast all arguments to Expr."""

    def wrapper(*args, **kwargs) -> "Expr":
        return func(*map(_cast, args), **{k: _cast(v) for k, v in kwargs.items()})

    return wrapper


class Expr(ABC):
    """Base class for all expressions."""

    # Filled lazily; canonical text never changes because exprs never change.
    _repr_cache = None

    def _cache(self, name: str, value):
        object.__setattr__(self, name, value)
        return value

    @abstractmethod
    def _repr(self) -> str:
        raise NotImplementedError(f"Cannot represent {self.__class__.__name__}")

    def __repr__(self) -> str:
        if self._repr_cache is None:
            return self._cache("_repr_cache", self._repr())
        return self._repr_cache

    def __eq__(self, other) -> bool:
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            other = Literal(other)
        if not isinstance(other, Expr):
            return NotImplemented
        return repr(self) == repr(other)

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash(repr(self))

    @property
    def op(self) -> Optional[Op]:
        """The operator tag. Leaves have none."""
        return None

    @abstractmethod
    def children(self) -> List["Expr"]:
        raise NotImplementedError(f"Cannot get children of {self.__class__.__name__}")

    @abstractmethod
    def subs(self, subs: Dict[str, "Expr"]) -> "Expr":
        """Substitute variables (by name) with expressions."""
        pass

    def contains(self, var: "Variable") -> bool:
        is_var = isinstance(self, Variable) and self.name == var.name
        return is_var or any(e.contains(var) for e in self.children())

    def symbols(self) -> List["Variable"]:
        """All distinct variables in the expression, in order of first appearance."""
        seen = {}
        for child in self.children():
            for s in child.symbols():
                seen.setdefault(s.name, s)
        return list(seen.values())

    # Builders. Nothing here simplifies; (x + 0) stays (x + 0) until you call simplify.

    @cast
    def add(self, other) -> "Expr":
        return Compound(Op.ADD, (self, other))

    @cast
    def sub(self, other) -> "Expr":
        return Compound(Op.SUB, (self, other))

    @cast
    def mul(self, other) -> "Expr":
        return Compound(Op.MUL, (self, other))

    @cast
    def div(self, other) -> "Expr":
        return Compound(Op.DIV, (self, other))

    @cast
    def pow(self, other) -> "Expr":
        return Compound(Op.POW, (self, other))

    def neg(self) -> "Expr":
        return Literal(-1).mul(self)

    def diff(self, var: "Variable") -> "Expr":
        from .differentiation import diff

        return diff(self, var)

    def integrate(self, var: "Variable", lower=None, upper=None) -> "Expr":
        from .integration import integrate

        return integrate(self, var, lower, upper)

    def simplify(self, max_iterations: int = 10) -> "Expr":
        from .simplify import simplify

        return simplify(self, max_iterations)

    def __add__(self, other) -> "Expr":
        return self.add(other)

    def __radd__(self, other) -> "Expr":
        return _cast(other).add(self)

    def __sub__(self, other) -> "Expr":
        return self.sub(other)

    def __rsub__(self, other) -> "Expr":
        return _cast(other).sub(self)

    def __mul__(self, other) -> "Expr":
        return self.mul(other)

    def __rmul__(self, other) -> "Expr":
        return _cast(other).mul(self)

    def __truediv__(self, other) -> "Expr":
        return self.div(other)

    def __rtruediv__(self, other) -> "Expr":
        return _cast(other).div(self)

    def __pow__(self, other) -> "Expr":
        return self.pow(other)

    def __rpow__(self, other) -> "Expr":
        return _cast(other).pow(self)

    def __neg__(self) -> "Expr":
        return self.neg()


@dataclass(frozen=True, eq=False, repr=False)
class Variable(Expr):
    """A symbol. A free variable."""

    name: str

    def __post_init__(self):
        assert len(self.name) > 0, "Variable name cannot be empty"

    def _repr(self) -> str:
        return self.name

    def children(self) -> List[Expr]:
        return []

    def symbols(self) -> List["Variable"]:
        return [self]

    @cast
    def subs(self, subs: Dict[str, Expr]) -> Expr:
        return subs.get(self.name, self)


@dataclass(frozen=True, eq=False, repr=False)
class Literal(Expr):
    """A numeric constant. Always a double."""

    value: float

    def __post_init__(self):
        object.__setattr__(self, "value", float(self.value))

    def _repr(self) -> str:
        return format_number(self.value)

    def children(self) -> List[Expr]:
        return []

    def symbols(self) -> List[Variable]:
        return []

    def subs(self, subs: Dict[str, Expr]) -> Expr:
        return self


@dataclass(frozen=True, eq=False, repr=False)
class Compound(Expr):
    """An operator applied to an ordered, fixed-size tuple of operands.

    Operand order matters everywhere (the product rule, by-parts, the simplifier's
    literal-to-front rule), so operands are a tuple and never a set.
    """

    operator: Op
    operands: Tuple[Expr, ...] = field(default=())

    def __post_init__(self):
        op = to_op(self.operator)
        operands = tuple(_cast(o) for o in self.operands)
        if any(not isinstance(o, Expr) for o in operands):
            raise TypeError(f"Operands of {op.value} must be Exprs, got {operands}")
        if len(operands) not in _ARITY[op]:
            expected = " or ".join(str(n) for n in _ARITY[op])
            raise ArityError(f"'{op.value}' takes {expected} operand(s), got {len(operands)}")
        object.__setattr__(self, "operator", op)
        object.__setattr__(self, "operands", operands)

    @property
    def op(self) -> Op:
        return self.operator

    def children(self) -> List[Expr]:
        return list(self.operands)

    def _repr(self) -> str:
        op = self.operator
        if op == Op.POW:
            return f"({self.operands[0]}^{self.operands[1]})"
        if op.is_arithmetic:
            return f"({self.operands[0]} {op.value} {self.operands[1]})"
        if op == Op.PI:
            return "pi"
        if op.is_trig:
            return f"{op.value}({self.operands[0]})"
        return f"{op.value}({', '.join(repr(o) for o in self.operands)})"

    @cast
    def subs(self, subs: Dict[str, Expr]) -> Expr:
        return Compound(self.operator, tuple(o.subs(subs) for o in self.operands))


def variable(name: str) -> Variable:
    return Variable(name)


def literal(value: float) -> Literal:
    return Literal(value)


def compound(operator: Union[Op, str], operands) -> Compound:
    return Compound(operator, tuple(operands))


def symbols(symbols: str) -> Union[Variable, List[Variable]]:
    """Creates variables from a string of names seperated by spaces."""
    symbols = [Variable(name=s) for s in symbols.split()]
    return symbols if len(symbols) > 1 else symbols[0]


def canonical_text(expr: Expr) -> str:
    """The deterministic text of an expr. Two exprs are equal iff this is equal."""
    return repr(expr)


def is_literal(expr: Expr, value: Optional[float] = None) -> bool:
    """True if expr is a Literal (with exactly `value`, if given)."""
    if not isinstance(expr, Literal):
        return False
    return value is None or expr.value == value


def is_op(expr: Expr, *ops: Op) -> bool:
    return isinstance(expr, Compound) and expr.operator in ops
