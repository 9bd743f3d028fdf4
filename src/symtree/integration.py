"""Elementary symbolic integration.

A handful of pattern rules, tried top-down:

    c           -> c * x
    x           -> 0.5 * x^2
    f + g       -> integral(f) + integral(g)
    c * f       -> c * integral(f)            (exactly one operand is a literal)
    x^n         -> x^(n+1) * (1 / (n+1))      (n a literal, n != -1)
    u * dv      -> u*v - integral(v * du)     (by parts, no literal operand; u is always operand 0)

Anything else comes back as an unevaluated integral(f, x) node. Integration never raises and
never simplifies: integrate(1, x) is (1 * x), not x.

By parts is applied unconditionally, so it can make things worse instead of better
(ex. x^2 * x keeps producing bigger products). Integration.MAX_BY_PARTS_DEPTH and
MAX_BY_PARTS_STEPS cap how far it goes; past that, the sub-integral is left unevaluated.
"""

import time
import warnings
from typing import Optional

from .differentiation import diff
from .expr import (
    Compound,
    Expr,
    Literal,
    Op,
    UnknownOperation,
    UnsupportedDifferentiation,
    Variable,
    _cast,
    cast,
)


@cast
def integral(integrand: Expr, var: Variable, lower: Optional[Expr] = None, upper: Optional[Expr] = None) -> Compound:
    """An unevaluated integral. Bounds are kept only if both are given."""
    if lower is not None and upper is not None:
        return Compound(Op.INTEGRAL, (integrand, var, lower, upper))
    return Compound(Op.INTEGRAL, (integrand, var))


def integrate(
    expr: Expr, var: Variable, lower: Optional[Expr] = None, upper: Optional[Expr] = None, **kwargs
) -> Expr:
    """
    Integrates an expression.

    Args:
        expr: the integrand
        var: the variable of integration
        lower, upper: bounds. If both are given you get back integral(expr, var, lower, upper)
            as-is; definite integrals are not evaluated. If only one is given it's ignored.
    kwargs:
        max_by_parts_depth, max_by_parts_steps: override the runaway guards for this call.

    Examples of valid uses:
        integrate(x**2, x)
        integrate(3 * x + y, x)
        integrate(x, x, 0, 1)

    Returns:
        The antiderivative, or an unevaluated integral node. Never None, never raises.
    """
    expr, var, lower, upper = _cast((expr, var, lower, upper))
    return Integration(**kwargs).integrate(expr, var, lower, upper)


class Integration:
    """
    Keeps track of integration work as we go
    """

    logger = None

    # tweakable params
    MAX_BY_PARTS_DEPTH = 10  # same as the simplifier's default pass count.
    MAX_BY_PARTS_STEPS = 64

    def __init__(self, *, max_by_parts_depth: Optional[int] = None, max_by_parts_steps: Optional[int] = None):
        self.max_by_parts_depth = self.MAX_BY_PARTS_DEPTH if max_by_parts_depth is None else max_by_parts_depth
        self.max_by_parts_steps = self.MAX_BY_PARTS_STEPS if max_by_parts_steps is None else max_by_parts_steps
        self.by_parts_steps = 0
        self.hit_limit = False

    def integrate(
        self, integrand: Expr, var: Variable, lower: Optional[Expr] = None, upper: Optional[Expr] = None
    ) -> Expr:
        start = time.time()
        self.by_parts_steps = 0
        self.hit_limit = False

        if lower is not None and upper is not None:
            result = integral(integrand, var, lower, upper)
        else:
            result = self._integrate(integrand, var, depth=0)

        if self.hit_limit:
            warnings.warn(
                f"Gave up on integration by parts for {integrand} wrt {var} "
                f"after {self.by_parts_steps} step(s); part of the result is left unevaluated",
                RuntimeWarning,
            )
        if self.logger is not None:
            self.logger.log(integrand, time.time() - start, f"{self.by_parts_steps} by-parts step(s)")
        return result

    def _integrate(self, expr: Expr, var: Variable, depth: int) -> Expr:
        if isinstance(expr, Literal):
            return expr.mul(var)
        if isinstance(expr, Variable) and expr.name == var.name:
            return Literal(0.5).mul(var.pow(2))
        if not isinstance(expr, Compound):
            return integral(expr, var)

        if expr.op == Op.ADD:
            a, b = expr.operands
            return self._integrate(a, var, depth).add(self._integrate(b, var, depth))

        if expr.op == Op.MUL:
            a, b = expr.operands
            if isinstance(a, Literal) and not isinstance(b, Literal):
                return a.mul(self._integrate(b, var, depth))
            if isinstance(b, Literal) and not isinstance(a, Literal):
                return b.mul(self._integrate(a, var, depth))
            if not isinstance(a, Literal) and not isinstance(b, Literal):
                return self._by_parts(expr, var, depth)

        if expr.op == Op.POW:
            base, exponent = expr.operands
            is_var = isinstance(base, Variable) and base.name == var.name
            if is_var and isinstance(exponent, Literal) and exponent.value != -1:
                n = exponent.value
                return var.pow(n + 1).mul(Literal(1).div(n + 1))

        return integral(expr, var)

    def _by_parts(self, expr: Compound, var: Variable, depth: int) -> Expr:
        """integral(u dv) = u*v - integral(v du), with u = operand 0 and dv = operand 1."""
        if depth >= self.max_by_parts_depth or self.by_parts_steps >= self.max_by_parts_steps:
            self.hit_limit = True
            return integral(expr, var)
        self.by_parts_steps += 1

        u, dv = expr.operands
        try:
            du = diff(u, var)
        except (UnknownOperation, UnsupportedDifferentiation):
            # u has no derivative (ex. x^x), so by parts can't go anywhere.
            return integral(expr, var)

        v = self._integrate(dv, var, depth + 1)
        return u.mul(v).sub(self._integrate(v.mul(du), var, depth + 1))
