"""Transcendental functions evaluated to a requested scale.

Every function takes exact :class:`BigRational` input and a *scale* (digits
after the decimal point) and returns ``result.with_scale(scale)``, rounded
half up. Series are summed until the last term drops below an accuracy
threshold tighter than the requested scale:

* ``10**(-scale-2)`` for :func:`sqrt`, :func:`log` and :func:`exp`
* ``10**(-scale-1)`` for :func:`sin` and :func:`cos`

:func:`sqrt` and :func:`log` round their iterates to a few guard digits past
the requested scale, so operand sizes stay bounded; the other series keep
intermediate sums in lowest terms. There is no iteration cap: the loops end
on the threshold alone.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from .caches import factorial
from .errors import DomainError
from .rational import (
    ONE,
    TEN,
    TWO,
    ZERO,
    BigRational,
    NumberLike,
    _count_digits,
    _ensure_int,
    rationalize,
)

logger = logging.getLogger(__name__)

DEFAULT_SCALE = 16

# Extra digits kept by iterations that round their intermediate values.
_GUARD_DIGITS = 4

# Integer exponents up to this bound are raised exactly by pow().
_MAX_EXACT_EXPONENT = 2 ** 31 - 1


def _accuracy(scale: int) -> BigRational:
    return TEN.pow(-scale - 2)


def _alternating_accuracy(scale: int) -> BigRational:
    return TEN.pow(-scale - 1)


def sqrt(x: NumberLike, scale: int) -> BigRational:
    """Square root by Newton's method, seeded at ``x/2``."""
    x = rationalize(x)
    scale = _ensure_int(scale, name="scale")
    if x.is_zero():
        return ZERO
    if x.signum() < 0:
        raise DomainError(f"square root of negative value {x}")

    accuracy = _accuracy(scale)
    working_scale = max(scale, 0) + _GUARD_DIGITS
    result = x.divide(TWO)
    iterations = 0
    while True:
        last = result
        # Rounded iterates stay at or above one unit of working_scale.
        result = x.divide(last).add(last).divide(TWO).with_scale(working_scale)
        iterations += 1
        if last.subtract(result).abs() < accuracy:
            break
    logger.debug("sqrt(%s) converged after %d iterations at scale %d", x, iterations, scale)
    return result.with_scale(scale)


def log(x: NumberLike, scale: int) -> BigRational:
    """Natural logarithm.

    Uses the area hyperbolic tangent series
    ``log(x) = 2 * sum(m**(2i+1) / (2i+1))`` with ``m = (x-1)/(x+1)``, which
    converges for every positive *x* but slowly far away from 1.
    """
    x = rationalize(x)
    scale = _ensure_int(scale, name="scale")
    if x.signum() <= 0:
        raise DomainError(f"logarithm of non-positive value {x}")
    if x == ONE:
        return ZERO

    # The tail after a term is at most term / (1 - magic**2) = term * (x+1)**2 / 4x,
    # and rounding error grows with the number of terms by the same factor.
    spread = int(x.increment().pow(2).divide(x.multiply(4))) + 1
    accuracy = _accuracy(scale).divide(spread)
    working_scale = max(scale, 0) + _GUARD_DIGITS + _count_digits(spread) + _count_digits(scale)
    magic = x.decrement().divide(x.increment()).reduce()
    magic_squared = magic.multiply(magic).reduce()
    power = magic.with_scale(working_scale)
    result = ZERO
    i = 0
    while True:
        step = power.divide(2 * i + 1).with_scale(working_scale)
        result = result.add(step)
        i += 1
        if step.abs() < accuracy:
            break
        power = power.multiply(magic_squared).with_scale(working_scale)
    logger.debug("log(%s) converged after %d terms at scale %d", x, i, scale)
    return result.multiply(TWO).with_scale(scale)


def exp(x: NumberLike, scale: int) -> BigRational:
    """Exponential function from the Taylor series ``sum(x**i / i!)``."""
    x = rationalize(x)
    scale = _ensure_int(scale, name="scale")

    accuracy = _accuracy(scale)
    result = ZERO
    i = 0
    while True:
        step = x.pow(i).divide(factorial(i))
        result = result.add(step).reduce()
        i += 1
        if step.abs() < accuracy:
            break
    logger.debug("exp(%s) converged after %d terms at scale %d", x, i, scale)
    return result.with_scale(scale)


def sin(x: NumberLike, scale: int) -> BigRational:
    """Sine from the alternating series ``sum((-1)**i * x**(2i+1) / (2i+1)!)``."""
    x = rationalize(x)
    scale = _ensure_int(scale, name="scale")

    accuracy = _alternating_accuracy(scale)
    result = ZERO
    sign = ONE
    i = 0
    while True:
        step = sign.multiply(x.pow(2 * i + 1)).divide(factorial(2 * i + 1))
        sign = sign.negate()
        result = result.add(step).reduce()
        i += 1
        if step.abs() < accuracy:
            break
    logger.debug("sin(%s) converged after %d terms at scale %d", x, i, scale)
    return result.with_scale(scale)


def cos(x: NumberLike, scale: int) -> BigRational:
    """Cosine from the alternating series ``sum((-1)**i * x**(2i) / (2i)!)``."""
    x = rationalize(x)
    scale = _ensure_int(scale, name="scale")

    accuracy = _alternating_accuracy(scale)
    result = ZERO
    sign = ONE
    i = 0
    while True:
        step = sign.multiply(x.pow(2 * i)).divide(factorial(2 * i))
        sign = sign.negate()
        result = result.add(step).reduce()
        i += 1
        if step.abs() < accuracy:
            break
    logger.debug("cos(%s) converged after %d terms at scale %d", x, i, scale)
    return result.with_scale(scale)


def pi(scale: int) -> BigRational:
    """Pi from the Chudnovsky series.

    Each term adds about 14 correct digits, so the number of terms is fixed
    up front from *scale*.
    """
    scale = _ensure_int(scale, name="scale")

    divisor_base = BigRational(640320).pow(3).divide(24)
    sum_a = ONE
    sum_b = ZERO
    a = ONE
    dividend_term1 = 5  # -(6k - 5)
    dividend_term2 = -1  # 2k - 1
    dividend_term3 = -1  # 6k - 1
    iterations = max((scale + 13) // 14, 0)
    for k in range(1, iterations + 1):
        dividend_term1 -= 6
        dividend_term2 += 2
        dividend_term3 += 6
        dividend = dividend_term1 * dividend_term2 * dividend_term3
        divisor = divisor_base.multiply(k ** 3)
        a = a.multiply(dividend).divide(divisor).reduce()
        sum_a = sum_a.add(a).reduce()
        sum_b = sum_b.add(a.multiply(k)).reduce()
    logger.debug("pi summed %d Chudnovsky terms at scale %d", iterations, scale)

    factor = sqrt(BigRational(10005), scale + 10).multiply(426880)
    result = factor.divide(sum_a.multiply(13591409).add(sum_b.multiply(545140134)))
    return result.with_scale(scale)


def pow(x: NumberLike, y: NumberLike, scale: int) -> BigRational:
    """Return ``x ** y``.

    An integer exponent (after reduction) below ``2**31 - 1`` is applied
    exactly, without rounding to *scale*. Anything else is evaluated as
    ``exp(y * log(x))`` and rounded to *scale*.
    """
    x = rationalize(x)
    y = rationalize(y)
    scale = _ensure_int(scale, name="scale")

    reduced_exponent = y.reduce()
    if reduced_exponent.denominator == 1 and reduced_exponent.numerator < _MAX_EXACT_EXPONENT:
        return x.pow(reduced_exponent.numerator)
    return exp(reduced_exponent.multiply(log(x, scale + 4)), scale)


@dataclass(frozen=True)
class Context:
    """Fixed scale for the functions of this module.

    >>> Context(5).pi()
    BigRational(314159, 100000)
    """

    scale: int = DEFAULT_SCALE

    def __post_init__(self) -> None:
        object.__setattr__(self, "scale", _ensure_int(self.scale, name="scale"))

    def pi(self) -> BigRational:
        return pi(self.scale)

    def sqrt(self, x: NumberLike) -> BigRational:
        return sqrt(x, self.scale)

    def pow(self, x: NumberLike, y: NumberLike) -> BigRational:
        return pow(x, y, self.scale)

    def exp(self, x: NumberLike) -> BigRational:
        return exp(x, self.scale)

    def log(self, x: NumberLike) -> BigRational:
        return log(x, self.scale)

    def sin(self, x: NumberLike) -> BigRational:
        return sin(x, self.scale)

    def cos(self, x: NumberLike) -> BigRational:
        return cos(x, self.scale)


DEFAULT = Context(DEFAULT_SCALE)


__all__ = [
    "DEFAULT_SCALE",
    "DEFAULT",
    "Context",
    "sqrt",
    "log",
    "exp",
    "sin",
    "cos",
    "pi",
    "pow",
]
