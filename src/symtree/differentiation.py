"""Symbolic differentiation.

diff() never simplifies. d/dx (x * 3) comes back as ((x * 0) + (3 * 1)); call simplify on it.
"""

from .expr import (
    Compound,
    Expr,
    Literal,
    Op,
    UnknownOperation,
    UnsupportedDifferentiation,
    Variable,
    cast,
)
from .trig import TRIG_DERIVATIVES
from .utils import ieee_log


@cast
def diff(expr: Expr, var: Variable) -> Expr:
    """Takes the derivative of expr relative to var.

    Raises:
        UnsupportedDifferentiation: for f(x)^g(x) where neither side is a literal.
        UnknownOperation: for operators without a derivative rule (ex. an unevaluated integral).
    """
    if isinstance(expr, Literal):
        return Literal(0)
    if isinstance(expr, Variable):
        return Literal(1) if expr.name == var.name else Literal(0)
    if not isinstance(expr, Compound):
        raise UnknownOperation(f"Cannot differentiate expression: {expr}")

    op = expr.op
    if op in (Op.ADD, Op.SUB):
        a, b = expr.operands
        return Compound(op, (diff(a, var), diff(b, var)))

    if op == Op.MUL:
        u, v = expr.operands
        return u.mul(diff(v, var)).add(v.mul(diff(u, var)))

    if op == Op.DIV:
        u, v = expr.operands
        return v.mul(diff(u, var)).sub(u.mul(diff(v, var))).div(v.pow(2))

    if op == Op.POW:
        return _diff_power(expr, var)

    if op in TRIG_DERIVATIVES:
        u = expr.operands[0]
        return TRIG_DERIVATIVES[op](u, diff(u, var))

    if op == Op.PI:
        return Literal(0)

    raise UnknownOperation(f"Unknown operation: {op.value}")


def _diff_power(expr: Compound, var: Variable) -> Expr:
    base, exponent = expr.operands

    # power rule: n * base^(n-1). Neither the base nor the exponent is chained through.
    if isinstance(exponent, Literal):
        n = exponent.value
        return Literal(n).mul(base.pow(n - 1))

    # a^u -> a^u * ln(a) * du
    if isinstance(base, Literal):
        return expr.mul(Literal(ieee_log(base.value)).mul(diff(exponent, var)))

    raise UnsupportedDifferentiation(
        f"Power differentiation not implemented when neither base nor exponent is a literal: {expr}"
    )


differentiate = diff
