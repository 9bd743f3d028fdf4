"""Taylor series.

The coefficients come from differentiating over & over. The derivative is simplified after
EVERY differentiation step, not just at the end. Otherwise products and quotients double in
size at each order.
"""

from typing import List, Union

import numpy as np

from .differentiation import diff
from .expr import Compound, Expr, Literal, Op, Variable, _cast
from .simplify import fold, simplify
from .utils import factorial, ieee_div, is_near_zero

Point = Union[int, float, complex]


def _real(point: Point) -> float:
    """Complex expansion points aren't supported; their real part is used."""
    if isinstance(point, Literal):
        return point.value
    if isinstance(point, complex):
        return point.real
    return float(point)


def expand(func: Expr, var: Variable, point: Point = 0, order: int = 5) -> List[Expr]:
    """Coefficients [a0, a1, ..., a_order] of the Taylor series of func around point.

    a_n = f^(n)(point) / n!. A coefficient is a Literal when everything folds, otherwise
    whatever expression is left (ex. sin(0.3) / 6).
    """
    coefficients = []
    derivative = simplify(_cast(func))
    for n in range(order + 1):
        if n > 0:
            derivative = simplify(diff(derivative, var))
        at_point = evaluate_at(derivative, var, point)
        coefficients.append(divide_by_factorial(at_point, n))
    return coefficients


def evaluate_at(expr: Expr, var: Variable, point: Point) -> Expr:
    """Substitute point for var (matched by name) and fold whatever becomes all-literal.

    Folding is the simplifier's literal folding, except a division by (nearly) zero is left alone.
    """
    substituted = expr.subs({var.name: Literal(_real(point))})
    return _fold_literals(substituted)


def _fold_literals(expr: Expr) -> Expr:
    if not isinstance(expr, Compound):
        return expr

    operands = tuple(_fold_literals(o) for o in expr.operands)
    op = expr.op
    if op.is_arithmetic and all(isinstance(o, Literal) for o in operands):
        a, b = operands
        if op == Op.DIV and is_near_zero(b.value):
            return Compound(op, operands)
        return fold(op, a, b)

    return Compound(op, operands)


def divide_by_factorial(expr: Expr, n: int) -> Expr:
    if n == 0:
        return expr
    f = factorial(n)
    if isinstance(expr, Literal):
        return Literal(ieee_div(expr.value, f))
    return expr.div(Literal(f))


def _is_zero(expr: Expr) -> bool:
    return isinstance(expr, Literal) and is_near_zero(expr.value)


def to_polynomial(coefficients: List[Expr], var: Variable, point: Point = 0) -> Expr:
    """a0 + a1*(x - point) + a2*(x - point)^2 + ..., simplified.

    Coefficients that are (nearly) zero literals are skipped, except a0 which is always kept.
    """
    coefficients = _cast(list(coefficients))
    if not coefficients:
        return Literal(0)

    point = _real(point)
    shifted = var if point == 0 else var.sub(Literal(point))

    polynomial = coefficients[0]
    for n, coefficient in enumerate(coefficients[1:], start=1):
        if _is_zero(coefficient):
            continue
        power = shifted if n == 1 else shifted.pow(n)
        polynomial = polynomial.add(coefficient.mul(power))

    return simplify(polynomial)


def numeric_coefficients(coefficients: List[Expr]) -> np.ndarray:
    """Literal coefficients as floats. Anything symbolic becomes nan."""
    return np.array([c.value if isinstance(c, Literal) else np.nan for c in _cast(list(coefficients))], dtype=float)


def radius_of_convergence(coefficients: List[Expr]) -> float:
    """Ratio test estimate: the largest |a_n / a_(n+1)| for n >= 1.

    Symbolic coefficients count as magnitude 1. Returns inf when there's nothing to go on.
    """
    if len(coefficients) < 2:
        return float("inf")

    magnitudes = np.abs(numeric_coefficients(coefficients))
    magnitudes[np.isnan(magnitudes)] = 1.0

    current, following = magnitudes[1:-1], magnitudes[2:]
    nonzero = current != 0
    if not nonzero.any():
        return float("inf")
    with np.errstate(divide="ignore"):
        ratios = np.abs(current[nonzero] / following[nonzero])

    max_ratio = float(ratios.max())
    return max_ratio if max_ratio != 0 else float("inf")


def error_bound(point: float, evaluation_point: float, order: int, max_derivative: float = 1.0) -> float:
    """Lagrange remainder bound: M * |x - a|^(n+1) / (n+1)!

    max_derivative is M, a bound on |f^(n+1)| between point and evaluation_point.
    """
    distance = abs(evaluation_point - point)
    return max_derivative * distance ** (order + 1) / factorial(order + 1)


# Known series, for checking expand() against.


def exp_series(order: int = 5) -> List[Literal]:
    """e^x around 0."""
    return [Literal(1 / factorial(n)) for n in range(order + 1)]


def sin_series(order: int = 5) -> List[Literal]:
    """sin(x) around 0."""
    coefficients = []
    for n in range(order + 1):
        if n % 2 == 0:
            coefficients.append(Literal(0))
        else:
            sign = 1 if n % 4 == 1 else -1
            coefficients.append(Literal(sign / factorial(n)))
    return coefficients


def cos_series(order: int = 5) -> List[Literal]:
    """cos(x) around 0."""
    coefficients = []
    for n in range(order + 1):
        if n % 2 == 1:
            coefficients.append(Literal(0))
        else:
            sign = 1 if n % 4 == 0 else -1
            coefficients.append(Literal(sign / factorial(n)))
    return coefficients


def ln_series(order: int = 5) -> List[Literal]:
    """ln(1 + x) around 0."""
    coefficients = [Literal(0)]
    for n in range(1, order + 1):
        sign = -1 if n % 2 == 0 else 1
        coefficients.append(Literal(sign / n))
    return coefficients
