"""Algebraic simplification.

One pass simplifies every operand first (bottom-up), rebuilds the node, then applies the
local rule for the node's operator. Passes are repeated until the canonical text stops changing,
or max_iterations passes have run. Non-convergence is not an error; you get the last result.

Only a fixed, finite set of rules:

    +   0+x -> x, x+0 -> x, x+x -> 2*x, fold literals
    -   x-0 -> x, x-x -> 0, fold literals
    *   0*x -> 0, x*0 -> 0, 1*x -> x, x*1 -> x, x*x -> x^2, fold literals,
        x*c -> c*x (a lone literal on the right moves to the front; nothing else is reordered)
    /   x/1 -> x, x/x -> 1, 0/x -> 0, fold literals
    ^   x^0 -> 1, x^1 -> x, 0^x -> 0, 1^x -> 1, fold literals

No trig identities in here; see trig.trig_simplify.
"""

import time
from typing import Callable, Dict

from .expr import Compound, Expr, Literal, Op, is_literal
from .utils import ieee_div, ieee_mul, ieee_pow

_FOLDS: Dict[Op, Callable[[float, float], float]] = {
    Op.ADD: lambda a, b: a + b,
    Op.SUB: lambda a, b: a - b,
    Op.MUL: ieee_mul,
    Op.DIV: ieee_div,
    Op.POW: ieee_pow,
}


def fold(op: Op, a: Literal, b: Literal) -> Literal:
    """Evaluate a binary arithmetic op on two literals with IEEE-754 double semantics.

    There is no zero-denominator guard: 1/0 is Infinity, 0/0 is NaN.
    """
    return Literal(_FOLDS[op](a.value, b.value))


def _both_literals(a: Expr, b: Expr) -> bool:
    return isinstance(a, Literal) and isinstance(b, Literal)


def _simplify_add(a: Expr, b: Expr) -> Expr:
    if is_literal(a, 0):
        return b
    if is_literal(b, 0):
        return a
    if a == b:
        return Literal(2).mul(a)
    if _both_literals(a, b):
        return fold(Op.ADD, a, b)
    return Compound(Op.ADD, (a, b))


def _simplify_sub(a: Expr, b: Expr) -> Expr:
    if is_literal(b, 0):
        return a
    if a == b:
        return Literal(0)
    if _both_literals(a, b):
        return fold(Op.SUB, a, b)
    return Compound(Op.SUB, (a, b))


def _simplify_mul(a: Expr, b: Expr) -> Expr:
    if is_literal(a, 0) or is_literal(b, 0):
        return Literal(0)
    if is_literal(a, 1):
        return b
    if is_literal(b, 1):
        return a
    if a == b:
        return a.pow(2)
    if _both_literals(a, b):
        return fold(Op.MUL, a, b)
    if isinstance(b, Literal):
        return Compound(Op.MUL, (b, a))
    return Compound(Op.MUL, (a, b))


def _simplify_div(a: Expr, b: Expr) -> Expr:
    if is_literal(b, 1):
        return a
    if a == b:
        return Literal(1)
    if is_literal(a, 0):
        return Literal(0)
    if _both_literals(a, b):
        return fold(Op.DIV, a, b)
    return Compound(Op.DIV, (a, b))


def _simplify_pow(base: Expr, exponent: Expr) -> Expr:
    if is_literal(exponent, 0):
        return Literal(1)
    if is_literal(exponent, 1):
        return base
    if is_literal(base, 0):
        return Literal(0)
    if is_literal(base, 1):
        return Literal(1)
    if _both_literals(base, exponent):
        return fold(Op.POW, base, exponent)
    return Compound(Op.POW, (base, exponent))


RULES: Dict[Op, Callable[[Expr, Expr], Expr]] = {
    Op.ADD: _simplify_add,
    Op.SUB: _simplify_sub,
    Op.MUL: _simplify_mul,
    Op.DIV: _simplify_div,
    Op.POW: _simplify_pow,
}


class Simplifier:
    """Runs simplification passes to a fixpoint."""

    logger = None

    # tweakable params
    MAX_ITERATIONS = 10

    def __init__(self, max_iterations: int = MAX_ITERATIONS):
        self.max_iterations = max_iterations
        self.passes = 0

    def simplify(self, expr: Expr) -> Expr:
        start = time.time()
        current = expr
        self.passes = 0
        while self.passes < self.max_iterations:
            simplified = self.simplify_once(current)
            self.passes += 1
            if repr(simplified) == repr(current):
                break
            current = simplified

        if self.logger is not None:
            self.logger.log(expr, time.time() - start, f"{self.passes} pass(es)")
        return current

    def simplify_once(self, expr: Expr) -> Expr:
        """One full bottom-up pass."""
        if not isinstance(expr, Compound):
            return expr

        operands = tuple(self.simplify_once(o) for o in expr.operands)
        rule = RULES.get(expr.op)
        if rule is None:
            return Compound(expr.op, operands)
        return rule(*operands)


def simplify(expr: Expr, max_iterations: int = Simplifier.MAX_ITERATIONS) -> Expr:
    """Simplify expr with the rules above. Never raises."""
    return Simplifier(max_iterations).simplify(expr)
