import math

import pytest

from symtree.debug.test_utils import assert_eq_strict, assert_literal, assert_text, eq_float, x, y
from symtree.differentiation import diff, differentiate
from symtree.expr import *
from symtree.integration import integral
from symtree.simplify import simplify
from symtree.taylor import evaluate_at
from symtree.trig import acos, asin, atan, cos, cot, csc, pi, sec, sin, tan


def assert_diff(expr: Expr, expected: str):
    assert_text(diff(expr, x), expected)


def assert_diff_simplified(expr: Expr, expected: str):
    assert_text(simplify(diff(expr, x)), expected)


def assert_diff_at(expr: Expr, point: float, value: float):
    assert_literal(evaluate_at(simplify(diff(expr, x)), x, point), value)


def test_leaves():
    assert_eq_strict(diff(literal(5), x), 0)
    assert_eq_strict(diff(x, x), 1)
    assert_eq_strict(diff(y, x), 0)
    assert_eq_strict(diff(5, x), 0)


def test_sum_and_difference():
    assert_diff(x + y, "(1 + 0)")
    assert_diff(x - 3, "(1 - 0)")


def test_product_rule():
    assert_diff(x * y, "((x * 0) + (y * 1))")
    assert_diff(x * 3, "((x * 0) + (3 * 1))")


def test_quotient_rule():
    assert_diff(x / y, "(((y * 1) - (x * 0)) / (y^2))")


def test_power_rule():
    assert_diff(x**3, "(3 * (x^2))")
    assert_diff(x**0.5, "(0.5 * (x^-0.5))")
    assert_diff_simplified(x**2, "(2 * x)")


def test_power_rule_doesnt_chain_through_the_base():
    assert_diff((x + 1) ** 2, "(2 * ((x + 1)^1))")
    assert_diff_simplified((3 * x) ** 2, "(2 * (3 * x))")
    assert_diff_simplified(y**2, "(2 * y)")
    assert_diff_simplified(literal(2) ** 3, "12")


def test_exponential():
    expected = (2**x) * (literal(math.log(2)) * 1)
    assert eq_float(diff(2**x, x), expected, atol=1e-12)
    assert_diff_at(literal(math.e) ** x, 0, 1)
    assert_diff_at(literal(math.e) ** (2 * x), 0, 2)


def test_unsupported_power():
    with pytest.raises(UnsupportedDifferentiation):
        diff(x**x, x)
    with pytest.raises(UnsupportedDifferentiation):
        diff(x**y, x)
    with pytest.raises(UnsupportedDifferentiation):
        diff(sin(x ** (x + 1)), x)


def test_unknown_operation():
    with pytest.raises(UnknownOperation):
        diff(integral(x, x), x)
    with pytest.raises(UnknownOperation):
        diff(x + integral(x, x), x)


def test_pi_is_a_constant():
    assert_eq_strict(diff(pi(), x), 0)
    assert_diff_simplified(pi() * x, "pi")


def test_trig_derivatives():
    assert_diff(sin(x), "(cos(x) * 1)")
    assert_diff(cos(x), "(-1 * (sin(x) * 1))")
    assert_diff(tan(x), "((1 / (cos(x)^2)) * 1)")
    assert_diff(cot(x), "(-1 * ((1 / (sin(x)^2)) * 1))")
    assert_diff(sec(x), "((sec(x) * tan(x)) * 1)")
    assert_diff(csc(x), "(-1 * ((csc(x) * cot(x)) * 1))")
    assert_diff(asin(x), "(1 / ((1 - (x^2))^0.5))")
    assert_diff(acos(x), "(-1 * (1 / ((1 - (x^2))^0.5)))")
    assert_diff(atan(x), "(1 / (1 + (x^2)))")


def test_trig_derivative_values():
    # evaluate_at only folds arithmetic, so trig nodes stay symbolic
    assert_text(evaluate_at(simplify(diff(tan(x), x)), x, 0), "(1 / (cos(0)^2))")
    assert_diff_at(asin(x), 0, 1)
    assert_diff_at(acos(x), 0, -1)
    assert_diff_at(atan(x), 1, 0.5)


def test_chain_rule():
    assert_diff(sin(x**2), "(cos((x^2)) * (2 * (x^1)))")
    assert_diff_simplified(sin(x**2), "(cos((x^2)) * (2 * x))")
    assert_diff_simplified(cos(3 * x), "(-1 * (3 * sin((3 * x))))")


def test_diff_doesnt_touch_its_input():
    e = x * sin(x)
    before = repr(e)
    diff(e, x)
    assert repr(e) == before


def test_aliases():
    assert_eq_strict(differentiate(x**3, x), diff(x**3, x))
    assert_eq_strict((x**3).diff(x), diff(x**3, x))
