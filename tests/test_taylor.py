import math

import numpy as np
import pytest

from symtree.debug.test_utils import assert_eq_strict, assert_literal, assert_literals, assert_text, x, y
from symtree.expr import *
from symtree.simplify import Simplifier
from symtree.taylor import (
    cos_series,
    divide_by_factorial,
    error_bound,
    evaluate_at,
    exp_series,
    expand,
    ln_series,
    numeric_coefficients,
    radius_of_convergence,
    sin_series,
    to_polynomial,
)
from symtree.trig import cos, pi, sin


def values(coefficients):
    return [c.value for c in coefficients]


def test_exponential():
    coefficients = expand(literal(math.e) ** x, x, 0, 5)
    assert_literals(coefficients, [1, 1, 0.5, 0.1666667, 0.0416667, 0.0083333])
    assert_literals(coefficients, values(exp_series(5)))


def test_sin():
    # trig nodes are left for trig_simplify; evaluate_at only folds arithmetic
    coefficients = expand(sin(x), x, 0, 3)
    texts = ["sin(0)", "(cos(0) / 1)", "((-1 * sin(0)) / 2)", "((-1 * cos(0)) / 6)"]
    assert [repr(c) for c in coefficients] == texts


def test_cos():
    coefficients = expand(cos(x), x, 0, 2)
    texts = ["cos(0)", "((-1 * sin(0)) / 1)", "((-1 * cos(0)) / 2)"]
    assert [repr(c) for c in coefficients] == texts


def test_polynomial():
    assert_literals(expand(x**2, x, 0, 3), [0, 0, 1, 0])
    assert_literals(expand(x**2, x, 1, 3), [1, 2, 1, 0])
    assert_literals(expand(x**3 + 2 * x, x, 0, 4), [0, 2, 0, 1, 0])


def test_quotient():
    # 1 / (1 + x) = 1 - x + x^2 - x^3 ... The power rule doesn't chain through (1 + x)^2 in the
    # denominators, so from order 3 on the coefficients drift away from the true series.
    assert_literals(expand(1 / (1 + x), x, 0, 3), [1, -1, 1, -1 / 3])


def test_product():
    # x e^x = x + x^2 + x^3 / 2 + x^4 / 6 + ...
    assert_literals(expand(x * literal(math.e) ** x, x, 0, 4), [0, 1, 1, 0.5, 1 / 6])


def test_derivatives_are_simplified_once_per_order():
    calls = []

    class CountingLogger:
        def log(self, expr, time_spent, detail=""):
            calls.append(expr)

    Simplifier.logger = CountingLogger()
    try:
        expand(x**2, x, 0, 3)
    finally:
        Simplifier.logger = None
    assert len(calls) == 4


def test_order_zero():
    assert_literals(expand(literal(math.e) ** x, x, 0, 0), [1])


def test_symbolic_coefficients():
    coefficients = expand(sin(x), x, 0.3, 1)
    assert_text(coefficients[0], "sin(0.3)")
    assert_text(coefficients[1], "(cos(0.3) / 1)")

    coefficients = expand(x * y, x, 2, 2)
    assert_text(coefficients[0], "(2 * y)")
    assert_text(coefficients[1], "(y / 1)")
    assert_literal(coefficients[2], 0)


def test_complex_point_uses_real_part():
    assert_literals(expand(x**2, x, 1 + 5j, 2), [1, 2, 1])


def test_evaluate_at():
    assert_text(evaluate_at(x * y + x, x, 2), "((2 * y) + 2)")
    assert_literal(evaluate_at(x**2 + 1, x, 3), 10)
    assert_literal(evaluate_at(x, variable("x"), 3), 3)
    assert_literal(evaluate_at(x, x, 2 + 3j), 2)
    assert_text(evaluate_at(cos(x), x, 0), "cos(0)")
    assert_text(evaluate_at(sin(pi() / 6), x, 0), "sin((pi / 6))")
    assert_text(evaluate_at(sin(x) * (x + 1), x, 0), "(sin(0) * 1)")
    assert_text(evaluate_at(sin(x), x, 0.3), "sin(0.3)")


def test_evaluate_at_leaves_division_by_zero():
    assert_text(evaluate_at(1 / x, x, 0), "(1 / 0)")
    assert_text(evaluate_at(x / (x - 1), x, 1), "(1 / 0)")


def test_divide_by_factorial():
    assert_literal(divide_by_factorial(literal(6), 3), 1)
    assert_eq_strict(divide_by_factorial(x, 0), x)
    assert_eq_strict(divide_by_factorial(x, 1), x / 1)
    assert_text(divide_by_factorial(x, 2), "(x / 2)")


def test_to_polynomial():
    assert_text(to_polynomial(expand(x**2, x, 0, 3), x), "(x^2)")
    assert_text(to_polynomial([1, 2, 1, 0], x, 1), "((1 + (2 * (x - 1))) + ((x - 1)^2))")
    assert_text(to_polynomial([1, 1e-12, 3], x), "(1 + (3 * (x^2)))")
    assert_text(to_polynomial([0, 1], x), "x")
    assert_text(to_polynomial([5], x), "5")
    assert_eq_strict(to_polynomial([], x), 0)


def test_to_polynomial_symbolic_coefficient():
    assert_text(to_polynomial([sin(literal(0.3)), y], x), "(sin(0.3) + (y * x))")


def test_exp_polynomial():
    polynomial = to_polynomial(expand(literal(math.e) ** x, x, 0, 5), x)
    assert_literal(evaluate_at(polynomial, x, 0.1), math.exp(0.1), atol=1e-8)


def test_numeric_coefficients():
    array = numeric_coefficients([literal(1), x, 0.5])
    assert array[0] == 1
    assert np.isnan(array[1])
    assert array[2] == 0.5


def test_radius_of_convergence():
    assert radius_of_convergence(exp_series(5)) == pytest.approx(5)
    assert radius_of_convergence(ln_series(5)) == pytest.approx(2)
    assert radius_of_convergence([literal(1)]) == math.inf
    assert radius_of_convergence([1, 0, 0, 0]) == math.inf


def test_error_bound():
    assert error_bound(0, 1, 3) == pytest.approx(1 / 24)
    assert error_bound(0, 2, 1, max_derivative=3) == pytest.approx(6)


def test_known_series():
    assert_literals(sin_series(3), [0, 1, 0, -1 / 6])
    assert_literals(cos_series(4), [1, 0, -0.5, 0, 1 / 24])
    assert_literals(ln_series(3), [0, 1, -0.5, 1 / 3])
    assert_literals(exp_series(2), [1, 1, 0.5])
