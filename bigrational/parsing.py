"""Text grammar for :class:`~bigrational.rational.BigRational`.

Accepted forms::

    123        -123.456       1.23456E5       .5
    2/3        123.456/-0.1   1/2/3           (divided left to right)
    0.1[6]     1.[3]          0.12[34]e-2     (bracketed repeating block)
"""
from __future__ import annotations

import re
from typing import Any, Optional

from .errors import RationalFormatError
from .rational import ZERO, BigRational, _str_to_int

_NUMBER = re.compile(
    r"""
    (?P<sign>[+-])?
    (?P<integer>\d*)
    (?:
        \.
        (?P<fraction>\d*)
        (?:\[(?P<repeat>\d+)\])?
    )?
    (?:[eE](?P<exponent>[+-]?\d+))?
    """,
    re.VERBOSE,
)


def value_of_parts(
    positive: bool,
    integer_part: Optional[str],
    fraction_part: Optional[str],
    fraction_repeat_part: Optional[str],
    exponent_part: Optional[str],
) -> BigRational:
    """Build a value from the digit groups of a decimal number.

    ``None`` or an empty string marks an absent part. The repeating block
    ``r`` stands for ``r / (10**len(r) - 1)`` placed right after the fraction
    digits, so ``value_of_parts(True, "1", "2", "3", "")`` is ``1.2333... = 37/30``.
    """
    result = ZERO
    if fraction_repeat_part:
        lots_of_nines = 10 ** len(fraction_repeat_part) - 1
        result = BigRational(_str_to_int(fraction_repeat_part), lots_of_nines)
    if fraction_part:
        result = result.add(_str_to_int(fraction_part))
        result = result.divide(10 ** len(fraction_part))
    if integer_part:
        result = result.add(_str_to_int(integer_part))
    if exponent_part:
        exponent = int(exponent_part)
        power_of_ten = 10 ** abs(exponent)
        result = result.multiply(power_of_ten) if exponent >= 0 else result.divide(power_of_ten)
    if not positive:
        result = result.negate()
    return result


def _parse_segment(text: str) -> BigRational:
    segment = text.strip()
    match = _NUMBER.fullmatch(segment)
    if match is None or not (match.group("integer") or match.group("fraction") or match.group("repeat")):
        raise RationalFormatError(f"invalid rational number {text!r}")
    return value_of_parts(
        match.group("sign") != "-",
        match.group("integer"),
        match.group("fraction"),
        match.group("repeat"),
        match.group("exponent"),
    )


def parse(text: str) -> BigRational:
    """Parse *text*, dividing ``/``-separated segments from left to right."""
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text)!r}")
    segments = text.split("/")
    result = _parse_segment(segments[0])
    for segment in segments[1:]:
        result = result.divide(_parse_segment(segment))
    return result


def value_of(value: Any) -> BigRational:
    """Convert text or any numeric-like value into :class:`BigRational`."""
    if isinstance(value, str):
        return parse(value)
    return BigRational.rationalize(value)


__all__ = ["parse", "value_of", "value_of_parts"]
