"""Exact rational arithmetic with bounded-precision transcendental functions."""

from .caches import bernoulli, factorial
from .errors import DomainError, RationalError, RationalFormatError
from .functions import DEFAULT, DEFAULT_SCALE, Context, cos, exp, log, pi, pow, sin, sqrt
from .parsing import parse, value_of, value_of_parts
from .rational import (
    MIN_DECIMAL_PRECISION,
    ONE,
    TEN,
    TWO,
    ZERO,
    BigRational,
    as_rational_array,
    rationalize,
    zeros,
    zeros_like,
)

__all__ = [
    "BigRational",
    "ZERO",
    "ONE",
    "TWO",
    "TEN",
    "MIN_DECIMAL_PRECISION",
    "rationalize",
    "as_rational_array",
    "zeros",
    "zeros_like",
    "parse",
    "value_of",
    "value_of_parts",
    "factorial",
    "bernoulli",
    "Context",
    "DEFAULT",
    "DEFAULT_SCALE",
    "sqrt",
    "log",
    "exp",
    "sin",
    "cos",
    "pi",
    "pow",
    "RationalError",
    "DomainError",
    "RationalFormatError",
]
