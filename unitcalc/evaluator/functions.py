"""
Decimal implementations of the calculator's math functions.

Everything here works on ``Decimal`` under the caller's current context:
results are rounded to its precision, with a few internal guard digits.
Domain violations raise ``ValueError``; the evaluator turns them into
``DomainError`` with a source location.

Author: xwest
"""

import math
from decimal import Decimal, ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP, getcontext, localcontext

# internal digits carried by series and iterations
GUARD_DIGITS = 4

_MAX_NEWTON_STEPS = 100


# ============================================================================
# Constants
# ============================================================================

def pi() -> Decimal:
    """Pi to the current precision."""
    with localcontext() as ctx:
        ctx.prec += GUARD_DIGITS
        three = Decimal(3)
        last, term, total, n, na, d, da = 0, three, three, 1, 0, 0, 24
        while total != last:
            last = total
            n, na = n + na, na + 8
            d, da = d + da, da + 32
            term = (term * n) / d
            total += term
    return +total


def e() -> Decimal:
    """Euler's number to the current precision."""
    return Decimal(1).exp()


# ============================================================================
# Roots, logarithms and exponentials
# ============================================================================

def sqrt(x: Decimal) -> Decimal:
    if x < 0:
        raise ValueError(f"sqrt is undefined for negative numbers, got {x}")
    return x.sqrt()


def cbrt(x: Decimal) -> Decimal:
    """
    Real cube root, defined for negative arguments too.

    Perfect cubes of integers come out exact: cbrt(27) is 3, not
    2.999...
    """
    if x == 0:
        return x

    magnitude = abs(x)
    with localcontext() as ctx:
        ctx.prec += GUARD_DIGITS
        root = (magnitude.ln() / 3).exp()
        for _ in range(_MAX_NEWTON_STEPS):
            refined = (2 * root + magnitude / (root * root)) / 3
            if refined == root:
                break
            root = refined

    root = +root
    integral = root.to_integral_value()
    if integral ** 3 == magnitude:
        root = integral

    return root if x > 0 else -root


def ln(x: Decimal) -> Decimal:
    if x <= 0:
        raise ValueError(f"ln is undefined for values that are not positive, got {x}")
    return x.ln()


def log10(x: Decimal) -> Decimal:
    if x <= 0:
        raise ValueError(f"log is undefined for values that are not positive, got {x}")
    return x.log10()


def exp(x: Decimal) -> Decimal:
    return x.exp()


# ============================================================================
# Trigonometry (radians)
# ============================================================================

def _reduce_angle(x: Decimal) -> Decimal:
    """Bring ``x`` into [-pi, pi]; runs under the caller's widened context."""
    if x.adjusted() >= getcontext().prec:
        raise ValueError(f"angle {x} is too large to reduce at this precision")

    half_turn = pi()
    full_turn = 2 * half_turn
    reduced = x % full_turn
    if reduced > half_turn:
        reduced -= full_turn
    elif reduced < -half_turn:
        reduced += full_turn
    return reduced


def _is_noise(result: Decimal, argument: Decimal) -> bool:
    """True when ``result`` is smaller than the rounding error already in ``argument``."""
    return abs(result) < abs(argument).scaleb(1 - getcontext().prec)


def _taylor(x: Decimal, first_term: Decimal, first_index: int) -> Decimal:
    index, last, total, factorial, power, sign = first_index, 0, first_term, 1, first_term, 1
    while total != last:
        last = total
        index += 2
        factorial *= index * (index - 1)
        power *= x * x
        sign = -sign
        total += power / factorial * sign
    return total


def sin(x: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec += GUARD_DIGITS
        reduced = _reduce_angle(x)
        result = _taylor(reduced, reduced, 1)
    result = +result
    return Decimal(0) if _is_noise(result, x) else result


def cos(x: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec += GUARD_DIGITS
        reduced = _reduce_angle(x)
        result = _taylor(reduced, Decimal(1), 0)
    result = +result
    return Decimal(0) if _is_noise(result, x) else result


def tan(x: Decimal) -> Decimal:
    cosine = cos(x)
    if cosine == 0:
        raise ValueError(f"tan is undefined at odd multiples of pi/2, got {x}")
    return sin(x) / cosine


# ============================================================================
# Rounding and integers
# ============================================================================

def round_half_up(x: Decimal) -> Decimal:
    """Round to the nearest integer, halves away from zero."""
    return x.to_integral_value(rounding=ROUND_HALF_UP)


def ceil(x: Decimal) -> Decimal:
    return x.to_integral_value(rounding=ROUND_CEILING)


def floor(x: Decimal) -> Decimal:
    return x.to_integral_value(rounding=ROUND_FLOOR)


def is_integral(x: Decimal) -> bool:
    return x.is_finite() and x == x.to_integral_value()


def factorial(n: int) -> Decimal:
    """n! rounded to the current precision."""
    return +Decimal(math.factorial(n))
