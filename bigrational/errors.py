"""Exceptions raised by :mod:`bigrational`.

Division by zero is reported with the builtin :class:`ZeroDivisionError`, in
line with ``int`` and :class:`fractions.Fraction`.
"""
from __future__ import annotations


class RationalError(Exception):
    """Base class for errors specific to :mod:`bigrational`."""


class DomainError(RationalError, ValueError):
    """Argument outside the domain of a function (``log(0)``, ``factorial(-1)``)."""


class RationalFormatError(RationalError, ValueError):
    """Text or floating point input that has no rational value."""


__all__ = ["RationalError", "DomainError", "RationalFormatError"]
