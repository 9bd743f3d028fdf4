"""Trigonometric functions: node builders, derivative table & exact values.

The trig nodes are plain Compounds (sin(x) is Compound(Op.SIN, (x,))) so diff, simplify
and integrate all walk them without knowing anything special. What *is* special lives here:

- TRIG_DERIVATIVES: the closed-form derivatives, chain-ruled by differentiation.diff
- EXACT_VALUES: values at the standard angles, used by trig_simplify
- trig_simplify: exact values, ratio identities & a few reflection identities

simplify() never looks at this module. sin(x)^2 + cos(x)^2 stays as it is there.
"""

import math
from typing import Callable, Dict, Optional

from .expr import TRIG_OPS, Compound, Expr, Literal, Op, cast, is_literal, is_op
from .utils import is_close

# Common angles, in radians.
COMMON_ANGLES: Dict[str, float] = {
    "0": 0,
    "π/6": math.pi / 6,
    "π/4": math.pi / 4,
    "π/3": math.pi / 3,
    "π/2": math.pi / 2,
    "π": math.pi,
    "3π/2": 3 * math.pi / 2,
    "2π": 2 * math.pi,
}

_inf = float("inf")

EXACT_VALUES: Dict[str, Dict[str, float]] = {
    "0": {"sin": 0, "cos": 1, "tan": 0, "cot": _inf, "sec": 1, "csc": _inf},
    "π/6": {
        "sin": 1 / 2,
        "cos": math.sqrt(3) / 2,
        "tan": 1 / math.sqrt(3),
        "cot": math.sqrt(3),
        "sec": 2 / math.sqrt(3),
        "csc": 2,
    },
    "π/4": {
        "sin": math.sqrt(2) / 2,
        "cos": math.sqrt(2) / 2,
        "tan": 1,
        "cot": 1,
        "sec": math.sqrt(2),
        "csc": math.sqrt(2),
    },
    "π/3": {
        "sin": math.sqrt(3) / 2,
        "cos": 1 / 2,
        "tan": math.sqrt(3),
        "cot": 1 / math.sqrt(3),
        "sec": 2,
        "csc": 2 / math.sqrt(3),
    },
    "π/2": {"sin": 1, "cos": 0, "tan": _inf, "cot": 0, "sec": _inf, "csc": 1},
    "π": {"sin": 0, "cos": -1, "tan": 0, "cot": _inf, "sec": -1, "csc": _inf},
    "3π/2": {"sin": -1, "cos": 0, "tan": _inf, "cot": 0, "sec": _inf, "csc": -1},
    "2π": {"sin": 0, "cos": 1, "tan": 0, "cot": _inf, "sec": 1, "csc": _inf},
}

_PI_DENOMINATORS = (2, 3, 4, 6)


def pi() -> Compound:
    """The symbolic constant π. Prints as `pi`."""
    return Compound(Op.PI, ())


@cast
def sin(inner: Expr) -> Compound:
    return Compound(Op.SIN, (inner,))


@cast
def cos(inner: Expr) -> Compound:
    return Compound(Op.COS, (inner,))


@cast
def tan(inner: Expr) -> Compound:
    return Compound(Op.TAN, (inner,))


@cast
def cot(inner: Expr) -> Compound:
    return Compound(Op.COT, (inner,))


@cast
def sec(inner: Expr) -> Compound:
    return Compound(Op.SEC, (inner,))


@cast
def csc(inner: Expr) -> Compound:
    return Compound(Op.CSC, (inner,))


@cast
def asin(inner: Expr) -> Compound:
    return Compound(Op.ASIN, (inner,))


@cast
def acos(inner: Expr) -> Compound:
    return Compound(Op.ACOS, (inner,))


@cast
def atan(inner: Expr) -> Compound:
    return Compound(Op.ATAN, (inner,))


def _sqrt_one_minus_square(u: Expr) -> Expr:
    return Literal(1).sub(u.pow(2)).pow(0.5)


# (u, du) -> d/dx f(u). du is the already-computed derivative of the argument.
TRIG_DERIVATIVES: Dict[Op, Callable[[Expr, Expr], Expr]] = {
    Op.SIN: lambda u, du: cos(u).mul(du),
    Op.COS: lambda u, du: Literal(-1).mul(sin(u).mul(du)),
    Op.TAN: lambda u, du: Literal(1).div(cos(u).pow(2)).mul(du),
    Op.COT: lambda u, du: Literal(-1).mul(Literal(1).div(sin(u).pow(2)).mul(du)),
    Op.SEC: lambda u, du: sec(u).mul(tan(u)).mul(du),
    Op.CSC: lambda u, du: Literal(-1).mul(csc(u).mul(cot(u)).mul(du)),
    Op.ASIN: lambda u, du: du.div(_sqrt_one_minus_square(u)),
    Op.ACOS: lambda u, du: Literal(-1).mul(du.div(_sqrt_one_minus_square(u))),
    Op.ATAN: lambda u, du: du.div(Literal(1).add(u.pow(2))),
}


def is_pi(expr: Expr) -> bool:
    return is_op(expr, Op.PI)


def match_angle(angle: Expr) -> Optional[str]:
    """Returns the key into EXACT_VALUES if `angle` is one of the common angles.

    Matches a literal within 1e-10 of a common angle, `pi`, or `pi / d` for d in 2, 3, 4, 6.
    """
    if isinstance(angle, Literal):
        for key, value in COMMON_ANGLES.items():
            if is_close(angle.value, value):
                return key
        # Negative multiples (-π/6 and friends) have no table entry.
        return None

    if is_pi(angle):
        return "π"

    if is_op(angle, Op.DIV):
        numerator, denominator = angle.operands
        if is_pi(numerator) and isinstance(denominator, Literal) and denominator.value in _PI_DENOMINATORS:
            return f"π/{int(denominator.value)}"

    return None


def exact_value(op: Op, angle: Expr) -> Optional[float]:
    """The tabulated value of op(angle), or None if angle isn't tabulated.

    Infinite entries (tan(π/2), csc(0) etc) are returned as inf; callers decide what to do with them.
    """
    if op not in TRIG_OPS:
        return None
    key = match_angle(angle)
    if key is None:
        return None
    return float(EXACT_VALUES[key][op.value])


def _negated(expr: Expr) -> Optional[Expr]:
    """x if expr looks like -x, i.e. (0 - x) or (-1 * x)."""
    if is_op(expr, Op.SUB) and is_literal(expr.operands[0], 0):
        return expr.operands[1]
    if is_op(expr, Op.MUL) and is_literal(expr.operands[0], -1):
        return expr.operands[1]
    return None


def _pi_shifted(expr: Expr, op: Op) -> Optional[Expr]:
    """x if expr is (pi <op> x)."""
    if is_op(expr, op) and is_pi(expr.operands[0]):
        return expr.operands[1]
    return None


def _simplify_sin(arg: Expr) -> Expr:
    # check pi - x before -x; (pi - x) is also a subtraction.
    inner = _pi_shifted(arg, Op.SUB)
    if inner is not None:
        return sin(inner)
    inner = _pi_shifted(arg, Op.ADD)
    if inner is not None:
        return Literal(-1).mul(sin(inner))
    inner = _negated(arg)
    if inner is not None:
        return Literal(-1).mul(sin(inner))
    return sin(arg)


def _simplify_cos(arg: Expr) -> Expr:
    inner = _pi_shifted(arg, Op.SUB)
    if inner is not None:
        return Literal(-1).mul(cos(inner))
    inner = _pi_shifted(arg, Op.ADD)
    if inner is not None:
        return Literal(-1).mul(cos(inner))
    inner = _negated(arg)
    if inner is not None:
        return cos(inner)
    return cos(arg)


_FALLBACKS: Dict[Op, Callable[[Expr], Expr]] = {
    Op.SIN: _simplify_sin,
    Op.COS: _simplify_cos,
    Op.TAN: lambda x: sin(x).div(cos(x)),
    Op.COT: lambda x: cos(x).div(sin(x)),
    Op.SEC: lambda x: Literal(1).div(cos(x)),
    Op.CSC: lambda x: Literal(1).div(sin(x)),
}


def trig_simplify(expr: Expr) -> Expr:
    """Simplify the trig function at the top of expr.

    1. At a tabulated angle with a finite value: the value, as a Literal.
    2. Otherwise tan/cot/sec/csc are rewritten in terms of sin & cos,
       and sin/cos get the -x, pi - x, pi + x identities.

    Anything that isn't sin/cos/tan/cot/sec/csc comes back unchanged. Only the top node is looked at.
    """
    if not is_op(expr, *TRIG_OPS):
        return expr

    arg = expr.operands[0]
    value = exact_value(expr.op, arg)
    if value is not None and math.isfinite(value):
        return Literal(value)

    return _FALLBACKS[expr.op](arg)


simplify_trig = trig_simplify
