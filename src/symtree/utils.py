import math

import numpy as np

# Near-zero tolerance used for angle matching & "is this coefficient zero" checks.
TOLERANCE = 1e-10


def ieee_div(a: float, b: float) -> float:
    """a / b the way a double does it: 1/0 -> inf, 0/0 -> nan. Python would raise."""
    with np.errstate(all="ignore"):
        return float(np.divide(np.float64(a), np.float64(b)))


def ieee_pow(a: float, b: float) -> float:
    """a ** b without python's complex results & overflow errors.

    (-8) ** (1/3) is nan here, not a complex number. 10 ** 400 is inf.
    """
    with np.errstate(all="ignore"):
        return float(np.power(np.float64(a), np.float64(b)))


def ieee_log(a: float) -> float:
    """Natural log. ln(0) = -inf, ln(negative) = nan."""
    with np.errstate(all="ignore"):
        return float(np.log(np.float64(a)))


def ieee_mul(a: float, b: float) -> float:
    with np.errstate(all="ignore"):
        return float(np.multiply(np.float64(a), np.float64(b)))


def is_near_zero(value: float) -> bool:
    return abs(value) < TOLERANCE


def is_close(a: float, b: float) -> bool:
    return abs(a - b) < TOLERANCE


def factorial(n: int) -> float:
    """n! as a double. n <= 1 gives 1."""
    if n <= 1:
        return 1.0
    return float(math.factorial(n))
