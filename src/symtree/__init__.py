from .differentiation import diff, differentiate
from .expr import (
    ArityError,
    Compound,
    Expr,
    Literal,
    Op,
    UnknownOperation,
    UnsupportedDifferentiation,
    Variable,
    canonical_text,
    compound,
    literal,
    symbols,
    variable,
)
from .integration import Integration, integral, integrate
from .simplify import Simplifier, simplify
from .taylor import evaluate_at, expand, to_polynomial
from .trig import acos, asin, atan, cos, cot, csc, pi, sec, sin, simplify_trig, tan, trig_simplify
