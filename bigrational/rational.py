"""Exact rational numbers with NumPy interoperability.

:class:`BigRational` stores a numerator and a positive denominator as Python
integers. Addition, subtraction, multiplication, division and integer powers
never lose precision, which makes it usable in place of :class:`decimal.Decimal`
whenever absolute accuracy is required.

Values are not reduced to lowest terms automatically: ``BigRational(4, 4)``
keeps its ``4/4`` representation (and prints as such with
:meth:`BigRational.to_rational_string`) until :meth:`BigRational.reduce` is
called. Equality, ordering and hashing are based on the value only.
"""
from __future__ import annotations

import math
import numbers
import operator
from decimal import MAX_EMAX, MIN_EMIN, ROUND_HALF_UP, Decimal, localcontext
from fractions import Fraction
from typing import Any, Optional, Union

try:  # NumPy is optional but recommended for array workflows.
    import numpy as np  # type: ignore
except ModuleNotFoundError:  # pragma: no cover - optional dependency may be absent.
    np = None  # type: ignore

from .errors import RationalFormatError

NumberLike = Union["BigRational", Fraction, Decimal, numbers.Real]

# Precision floor of :meth:`BigRational.to_decimal` (decimal128 digits).
MIN_DECIMAL_PRECISION = 34

_LOG10_2 = math.log10(2)


def _ensure_int(value: Any, *, name: str) -> int:
    """Convert *value* to ``int`` when it represents an integer."""
    if isinstance(value, numbers.Integral):
        return int(value)
    raise TypeError(f"{name} must be an integer, got {type(value)!r}")


def _count_digits(value: int) -> int:
    """Number of decimal digits of ``abs(value)`` (``0`` has one digit)."""
    value = abs(value)
    if value == 0:
        return 1
    digits = int(_LOG10_2 * value.bit_length()) + 1
    if 10 ** (digits - 1) > value:
        return digits - 1
    return digits


def _truncated_remainder(numerator: int, denominator: int) -> int:
    # Sign follows the numerator; denominator is positive.
    remainder = abs(numerator) % denominator
    return -remainder if numerator < 0 else remainder


def _int_to_str(value: int) -> str:
    # Decimal conversions are not subject to the int/str digit limit.
    return str(Decimal(value))


def _str_to_int(digits: str) -> int:
    return int(Decimal(digits))


def _non_finite(value: Any) -> Optional[float]:
    """Return *value* as a float when it is a NaN or an infinity, else ``None``."""
    if isinstance(value, Decimal):
        if value.is_finite():
            return None
        return math.nan if value.is_nan() else float(value)
    if isinstance(value, float) or (np is not None and isinstance(value, np.floating)):
        if math.isfinite(value):
            return None
        return float(value)
    return None


def _plain_decimal_string(value: Decimal) -> str:
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class BigRational:
    """Immutable quotient of two integers with a positive denominator."""

    __slots__ = ("_numerator", "_denominator")
    __array_priority__ = 1000.0  # Prefer BigRational semantics in NumPy expressions.

    def __init__(
        self,
        numerator: Union[int, numbers.Integral] = 0,
        denominator: Union[int, numbers.Integral] = 1,
    ) -> None:
        num = _ensure_int(numerator, name="numerator")
        den = _ensure_int(denominator, name="denominator")
        if den == 0:
            raise ZeroDivisionError("denominator must be non-zero")
        if den < 0:
            num, den = -num, -den

        self._numerator = num
        self._denominator = den

    # ------------------------------------------------------------------
    # Constructors
    @classmethod
    def from_integer(cls, value: Union[int, numbers.Integral]) -> "BigRational":
        """Create the integral value ``value/1``."""
        return cls(_ensure_int(value, name="value"), 1)

    @classmethod
    def from_mixed(
        cls,
        integer: Union[int, numbers.Integral],
        fraction_numerator: Union[int, numbers.Integral],
        fraction_denominator: Union[int, numbers.Integral],
    ) -> "BigRational":
        """Create ``integer fraction_numerator/fraction_denominator``.

        The sign is taken from *integer*: ``from_mixed(-3, 1, 2)`` is ``-3.5``.
        Negative fraction parts are rejected.
        """
        integer = _ensure_int(integer, name="integer")
        fraction_numerator = _ensure_int(fraction_numerator, name="fraction_numerator")
        fraction_denominator = _ensure_int(fraction_denominator, name="fraction_denominator")
        if fraction_numerator < 0 or fraction_denominator < 0:
            raise ValueError(
                "fraction parts must not be negative, got "
                f"{fraction_numerator}/{fraction_denominator}"
            )

        integer_part = cls(integer)
        fraction_part = cls(fraction_numerator, fraction_denominator)
        if integer >= 0:
            return integer_part.add(fraction_part)
        return integer_part.subtract(fraction_part)

    @classmethod
    def from_decimal(cls, value: Decimal) -> "BigRational":
        """Create the exact value of a finite :class:`decimal.Decimal`."""
        if not value.is_finite():
            raise RationalFormatError(f"cannot convert {value} to BigRational")
        sign, digits, exponent = value.as_tuple()
        coefficient = 0
        for digit in digits:
            coefficient = coefficient * 10 + digit
        if sign:
            coefficient = -coefficient
        if coefficient == 0:
            return ZERO
        if exponent >= 0:
            return cls(coefficient * 10 ** exponent, 1)
        return cls(coefficient, 10 ** -exponent)

    @classmethod
    def from_float(cls, value: float) -> "BigRational":
        """Return the decimal value of *value* as shown by ``repr``.

        ``BigRational.from_float(0.1)`` is exactly ``1/10``, not the binary
        approximation stored by the float.
        """
        if isinstance(value, bool):  # bool is a subclass of int; treat explicitly.
            return cls(int(value), 1)
        value = float(value)
        if math.isnan(value) or math.isinf(value):
            raise RationalFormatError("cannot convert NaN or infinity to BigRational")
        return cls.from_decimal(Decimal(repr(value)))

    @classmethod
    def from_fraction(cls, value: Fraction) -> "BigRational":
        """Create a :class:`BigRational` from :class:`fractions.Fraction`."""
        return cls(value.numerator, value.denominator)

    @classmethod
    def rationalize(cls, value: NumberLike) -> "BigRational":
        """Coerce a numeric-like value into :class:`BigRational` without loss."""
        if isinstance(value, BigRational):
            return value
        if isinstance(value, Fraction):
            return cls.from_fraction(value)
        if isinstance(value, Decimal):
            return cls.from_decimal(value)
        if isinstance(value, numbers.Integral):
            return cls(int(value), 1)
        if np is not None and isinstance(value, np.generic):
            return cls.rationalize(value.item())
        if isinstance(value, numbers.Real):
            return cls.from_float(float(value))
        raise TypeError(f"Cannot interpret {type(value)!r} as BigRational")

    # ------------------------------------------------------------------
    # Properties and helpers
    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        """Always positive, never reduced implicitly."""
        return self._denominator

    def as_fraction(self) -> Fraction:
        """Return a :class:`Fraction` with the same value."""
        return Fraction(self._numerator, self._denominator)

    def reduce(self) -> "BigRational":
        """Return the same value with numerator and denominator in lowest terms."""
        gcd = math.gcd(self._numerator, self._denominator)
        if gcd == 1:
            return self
        return BigRational(self._numerator // gcd, self._denominator // gcd)

    def integer_part(self) -> "BigRational":
        """Return the integer part, truncated toward zero (``-4/3`` gives ``-1``)."""
        remainder = _truncated_remainder(self._numerator, self._denominator)
        return BigRational(self._numerator - remainder, self._denominator)

    def fraction_part(self) -> "BigRational":
        """Return the fraction part, signed like the value (``-4/3`` gives ``-1/3``)."""
        remainder = _truncated_remainder(self._numerator, self._denominator)
        return BigRational(remainder, self._denominator)

    def is_zero(self) -> bool:
        return self._numerator == 0

    def _is_one(self) -> bool:
        return self._numerator == self._denominator

    def is_integer(self) -> bool:
        """Return ``True`` if the value is integral, reduced or not."""
        return self._denominator == 1 or self.reduce()._denominator == 1

    def signum(self) -> int:
        return (self._numerator > 0) - (self._numerator < 0)

    def negate(self) -> "BigRational":
        if self.is_zero():
            return self
        return BigRational(-self._numerator, self._denominator)

    def abs(self) -> "BigRational":
        return self if self._numerator >= 0 else self.negate()

    def reciprocal(self) -> "BigRational":
        """Return ``1/self``; raises :class:`ZeroDivisionError` for zero."""
        if self.is_zero():
            raise ZeroDivisionError("reciprocal of zero")
        return BigRational(self._denominator, self._numerator)

    def increment(self) -> "BigRational":
        return BigRational(self._numerator + self._denominator, self._denominator)

    def decrement(self) -> "BigRational":
        return BigRational(self._numerator - self._denominator, self._denominator)

    # ------------------------------------------------------------------
    # Exact arithmetic
    def add(self, value: NumberLike) -> "BigRational":
        other = BigRational.rationalize(value)
        if self._denominator == other._denominator:
            return BigRational(self._numerator + other._numerator, self._denominator)
        return BigRational(
            self._numerator * other._denominator + other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def subtract(self, value: NumberLike) -> "BigRational":
        other = BigRational.rationalize(value)
        if self._denominator == other._denominator:
            return BigRational(self._numerator - other._numerator, self._denominator)
        return BigRational(
            self._numerator * other._denominator - other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def multiply(self, value: NumberLike) -> "BigRational":
        other = BigRational.rationalize(value)
        if self.is_zero() or other.is_zero():
            return ZERO
        if self._is_one():
            return other
        if other._is_one():
            return self
        return BigRational(
            self._numerator * other._numerator,
            self._denominator * other._denominator,
        )

    def divide(self, value: NumberLike) -> "BigRational":
        other = BigRational.rationalize(value)
        if other.is_zero():
            raise ZeroDivisionError("division by zero")
        if other._is_one():
            return self
        return BigRational(
            self._numerator * other._denominator,
            self._denominator * other._numerator,
        )

    def pow(self, exponent: Union[int, numbers.Integral]) -> "BigRational":
        """Raise to an integer power without loss of precision.

        Non-integer exponents are handled by :func:`bigrational.functions.pow`,
        which needs a scale.
        """
        exponent = _ensure_int(exponent, name="exponent")
        if exponent == 0:
            return ONE
        if exponent == 1:
            return self
        if exponent > 0:
            return BigRational(self._numerator ** exponent, self._denominator ** exponent)
        if self.is_zero():
            raise ZeroDivisionError("0 cannot be raised to a negative power")
        positive = -exponent
        return BigRational(self._denominator ** positive, self._numerator ** positive)

    # ------------------------------------------------------------------
    # Rounding and conversion
    def _precision(self) -> int:
        return _count_digits(self._numerator) + _count_digits(self._denominator)

    def to_decimal(self, precision: Optional[int] = None) -> Decimal:
        """Return the quotient as :class:`Decimal` with *precision* significant digits.

        Rounds half up. Without *precision* enough digits are used to show
        every terminating expansion of this value exactly, and never fewer
        than :data:`MIN_DECIMAL_PRECISION`.
        """
        if precision is None:
            precision = max(self._precision(), MIN_DECIMAL_PRECISION)
        with localcontext() as ctx:
            ctx.prec = precision
            ctx.rounding = ROUND_HALF_UP
            ctx.Emax = MAX_EMAX
            ctx.Emin = MIN_EMIN
            return Decimal(self._numerator) / Decimal(self._denominator)

    def to_float(self) -> float:
        # int / int is correctly rounded, even for huge operands.
        return self._numerator / self._denominator

    def with_scale(self, scale: Union[int, numbers.Integral]) -> "BigRational":
        """Round half up to *scale* digits after the decimal point.

        A negative *scale* rounds to the left of the point:
        ``with_scale(-1)`` of ``123.456`` is ``120``.
        """
        scale = _ensure_int(scale, name="scale")
        if scale >= 0:
            numerator = self._numerator * 10 ** scale
            denominator = self._denominator
        else:
            numerator = self._numerator
            denominator = self._denominator * 10 ** -scale

        quotient, remainder = divmod(abs(numerator), denominator)
        if 2 * remainder >= denominator:
            quotient += 1
        if numerator < 0:
            quotient = -quotient

        if quotient == 0:
            return ZERO
        if scale >= 0:
            return BigRational(quotient, 10 ** scale)
        return BigRational(quotient * 10 ** -scale, 1)

    def with_precision(self, precision: Union[int, numbers.Integral]) -> "BigRational":
        """Round half up to *precision* significant digits."""
        precision = _ensure_int(precision, name="precision")
        if precision <= 0:
            raise ValueError(f"precision must be positive, got {precision}")
        return BigRational.from_decimal(self.to_decimal(precision))

    # ------------------------------------------------------------------
    # Bounded-precision functions (see bigrational.functions)
    def sqrt(self, scale: Optional[int] = None) -> "BigRational":
        """Square root rounded to *scale* digits (default context if omitted)."""
        from . import functions  # functions builds on this module

        if scale is None:
            return functions.DEFAULT.sqrt(self)
        return functions.sqrt(self, scale)

    def exp(self, scale: Optional[int] = None) -> "BigRational":
        """``e`` raised to this value, rounded to *scale* digits."""
        from . import functions

        if scale is None:
            return functions.DEFAULT.exp(self)
        return functions.exp(self, scale)

    def log(self, scale: Optional[int] = None) -> "BigRational":
        from . import functions

        if scale is None:
            return functions.DEFAULT.log(self)
        return functions.log(self, scale)

    def sin(self, scale: Optional[int] = None) -> "BigRational":
        from . import functions

        if scale is None:
            return functions.DEFAULT.sin(self)
        return functions.sin(self, scale)

    def cos(self, scale: Optional[int] = None) -> "BigRational":
        from . import functions

        if scale is None:
            return functions.DEFAULT.cos(self)
        return functions.cos(self, scale)

    # ------------------------------------------------------------------
    # Numeric protocol
    def __float__(self) -> float:
        return self.to_float()

    def __int__(self) -> int:
        remainder = _truncated_remainder(self._numerator, self._denominator)
        return (self._numerator - remainder) // self._denominator

    def __bool__(self) -> bool:
        return self._numerator != 0

    # ------------------------------------------------------------------
    # Representation
    def to_string(self) -> str:
        """Decimal representation, exact whenever the expansion terminates."""
        if self.is_zero():
            return "0"
        if self._denominator == 1:
            return _int_to_str(self._numerator)
        return _plain_decimal_string(self.to_decimal())

    def to_rational_string(self) -> str:
        """Return ``"numerator/denominator"`` of the current representation."""
        if self.is_zero():
            return "0"
        if self._denominator == 1:
            return _int_to_str(self._numerator)
        return f"{_int_to_str(self._numerator)}/{_int_to_str(self._denominator)}"

    def to_integer_rational_string(self) -> str:
        """Return the mixed form ``"integer numerator/denominator"``.

        ``7/3`` prints as ``"2 1/3"``, ``-7/3`` as ``"-2 1/3"`` and ``-1/3``
        as ``"-1/3"``.
        """
        fraction_numerator = _truncated_remainder(self._numerator, self._denominator)
        integer_part = (self._numerator - fraction_numerator) // self._denominator

        parts = []
        if integer_part != 0:
            parts.append(_int_to_str(integer_part))
            fraction_numerator = abs(fraction_numerator)
        if fraction_numerator != 0:
            parts.append(f"{_int_to_str(fraction_numerator)}/{_int_to_str(self._denominator)}")
        if not parts:
            return "0"
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"BigRational({_int_to_str(self._numerator)}, {_int_to_str(self._denominator)})"

    def __str__(self) -> str:
        return self.to_string()

    def __format__(self, format_spec: str) -> str:
        if format_spec == "":
            return str(self)
        if format_spec in ("r", "R"):
            return self.to_rational_string()
        try:
            return format(self.to_decimal(), format_spec)
        except (ValueError, TypeError):
            return format(str(self), format_spec)

    # ------------------------------------------------------------------
    # Internal helpers
    def _vectorize_iterable(self, iterable, func):
        mapped = [func(item) for item in iterable]
        if np is not None:
            return np.array(mapped, dtype=object)
        if isinstance(iterable, tuple):
            return tuple(mapped)
        return mapped

    def _binary_operation(self, other: Any, op):
        if np is not None and isinstance(other, np.ndarray):
            vectorised = np.vectorize(
                lambda x: op(self, BigRational.rationalize(x)),
                otypes=[object],
            )
            return vectorised(other)
        if isinstance(other, (list, tuple)):
            return self._vectorize_iterable(
                other,
                lambda x: op(self, BigRational.rationalize(x)),
            )
        return op(self, BigRational.rationalize(other))

    def _reflected_operation(self, other: Any, op):
        if np is not None and isinstance(other, np.ndarray):
            vectorised = np.vectorize(
                lambda x: op(BigRational.rationalize(x), self),
                otypes=[object],
            )
            return vectorised(other)
        if isinstance(other, (list, tuple)):
            return self._vectorize_iterable(
                other,
                lambda x: op(BigRational.rationalize(x), self),
            )
        return op(BigRational.rationalize(other), self)

    @staticmethod
    def _coerce_power(value: Any) -> int:
        if isinstance(value, numbers.Integral):
            return int(value)
        if isinstance(value, BigRational):
            if not value.is_integer():
                raise ValueError("Exponent must be an integer")
            return int(value)
        if np is not None and isinstance(value, np.generic):
            return BigRational._coerce_power(value.item())
        if isinstance(value, numbers.Real):
            if not float(value).is_integer():
                raise ValueError("Exponent must be an integer")
            return int(value)
        raise TypeError("Unsupported exponent type")

    # ------------------------------------------------------------------
    # Arithmetic operators
    def __add__(self, other: Any) -> Any:
        return self._binary_operation(other, BigRational.add)

    def __radd__(self, other: Any) -> Any:
        return self._reflected_operation(other, BigRational.add)

    def __sub__(self, other: Any) -> Any:
        return self._binary_operation(other, BigRational.subtract)

    def __rsub__(self, other: Any) -> Any:
        return self._reflected_operation(other, BigRational.subtract)

    def __mul__(self, other: Any) -> Any:
        return self._binary_operation(other, BigRational.multiply)

    def __rmul__(self, other: Any) -> Any:
        return self._reflected_operation(other, BigRational.multiply)

    def __truediv__(self, other: Any) -> Any:
        return self._binary_operation(other, BigRational.divide)

    def __rtruediv__(self, other: Any) -> Any:
        return self._reflected_operation(other, BigRational.divide)

    def __pow__(self, exponent: Any) -> Any:
        if np is not None and isinstance(exponent, np.ndarray):
            vectorised = np.vectorize(lambda x: self.__pow__(x), otypes=[object])
            return vectorised(exponent)
        return self.pow(self._coerce_power(exponent))

    def __neg__(self) -> "BigRational":
        return self.negate()

    def __pos__(self) -> "BigRational":  # pragma: no cover - trivial
        return self

    def __abs__(self) -> "BigRational":
        return self.abs()

    # ------------------------------------------------------------------
    # Comparisons
    def compare(self, other: NumberLike) -> int:
        """Return -1, 0 or 1 as this value is less than, equal to or greater than *other*.

        Infinities compare by sign; NaN has no order and raises
        :class:`RationalFormatError`.
        """
        special = _non_finite(other)
        if special is not None and not math.isnan(special):
            return -1 if special > 0 else 1
        other_rat = BigRational.rationalize(other)
        left = self._numerator * other_rat._denominator
        right = other_rat._numerator * self._denominator
        return (left > right) - (left < right)

    def _compare(self, other: Any, op) -> bool:
        special = _non_finite(other)
        if special is not None:
            # Any finite value orders like zero against infinities; NaN is unordered.
            return op(0.0, special)
        other_rat = BigRational.rationalize(other)
        return op(
            self._numerator * other_rat._denominator,
            other_rat._numerator * self._denominator,
        )

    def __eq__(self, other: Any) -> bool:
        try:
            return self._compare(other, operator.eq)
        except (TypeError, RationalFormatError):
            return False

    def __lt__(self, other: Any) -> bool:
        return self._compare(other, operator.lt)

    def __le__(self, other: Any) -> bool:
        return self._compare(other, operator.le)

    def __gt__(self, other: Any) -> bool:
        return self._compare(other, operator.gt)

    def __ge__(self, other: Any) -> bool:
        return self._compare(other, operator.ge)

    def __hash__(self) -> int:
        # Equal values hash alike whatever their representation, and like int/Fraction.
        return hash(Fraction(self._numerator, self._denominator))

    # ------------------------------------------------------------------
    # NumPy interoperability
    if np is not None:
        _UFUNC_DISPATCH = {
            np.add: operator.add,
            np.subtract: operator.sub,
            np.multiply: operator.mul,
            np.divide: operator.truediv,
            np.true_divide: operator.truediv,
            np.negative: operator.neg,
            np.positive: operator.pos,
            np.absolute: operator.abs,
            np.power: operator.pow,
            np.exp: lambda a: a.exp(),
            np.sqrt: lambda a: a.sqrt(),
            np.log: lambda a: a.log(),
            np.sin: lambda a: a.sin(),
            np.cos: lambda a: a.cos(),
        }
    else:  # pragma: no cover - executed when NumPy unavailable
        _UFUNC_DISPATCH = {}

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        if np is None:  # pragma: no cover
            return NotImplemented
        if method != "__call__":
            return NotImplemented
        if kwargs.get("out") is not None:
            raise NotImplementedError("`out` argument is not supported for BigRational ufuncs")
        op = self._UFUNC_DISPATCH.get(ufunc)
        if op is None:
            return NotImplemented

        coerced = []
        has_array = False
        for value in inputs:
            if isinstance(value, BigRational):
                coerced.append(value)
            elif isinstance(value, np.ndarray):
                vectorised = np.vectorize(BigRational.rationalize, otypes=[object])
                coerced.append(vectorised(value))
                has_array = True
            else:
                coerced.append(BigRational.rationalize(value))
        if has_array:
            vectorised = np.vectorize(lambda *args: op(*args), otypes=[object])
            return vectorised(*coerced)
        return op(*coerced)


ZERO = BigRational(0)
ONE = BigRational(1)
TWO = BigRational(2)
TEN = BigRational(10)


def rationalize(value: NumberLike) -> BigRational:
    """Public helper to convert *value* into :class:`BigRational`."""

    return BigRational.rationalize(value)


def as_rational_array(values: Any, *, copy: bool = True) -> "np.ndarray":
    """Return a ``numpy.ndarray`` of :class:`BigRational` values.

    ``values`` can be any iterable containing numeric-like entries or an existing
    NumPy array. When ``copy`` is ``False`` and ``values`` is already a NumPy
    array with ``dtype=object`` holding only :class:`BigRational` entries, the
    original array is returned.
    """

    if np is None:
        raise RuntimeError("NumPy is required to construct BigRational arrays")

    if isinstance(values, np.ndarray):
        array = values.copy() if copy else values
        if array.dtype == object and all(isinstance(item, BigRational) for item in array.flat):
            return array
        vectorised = np.vectorize(BigRational.rationalize, otypes=[object])
        return vectorised(array)

    if isinstance(values, (list, tuple)):
        coerced = [BigRational.rationalize(item) for item in values]
        array = np.empty(len(coerced), dtype=object)
        array[:] = coerced
        return array

    return as_rational_array(list(values), copy=copy)


def zeros(shape: Any) -> "np.ndarray":
    """Return an object array of the given shape filled with :data:`ZERO`."""

    if np is None:
        raise RuntimeError("NumPy is required to construct BigRational arrays")
    array = np.empty(shape, dtype=object)
    array.fill(ZERO)
    return array


def zeros_like(values: Any) -> "np.ndarray":
    """Return a zero-filled array that matches the shape of ``values``."""

    if np is None:
        raise RuntimeError("NumPy is required to construct BigRational arrays")
    return zeros(np.shape(values))


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
]
