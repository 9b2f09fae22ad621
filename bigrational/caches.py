"""Process-wide tables of factorials and Bernoulli numbers."""
from __future__ import annotations

import logging
import threading
from typing import List, Tuple

from .errors import DomainError
from .rational import ONE, ZERO, BigRational, _ensure_int

logger = logging.getLogger(__name__)

FACTORIAL_CACHE_SIZE = 100


def _build_factorials(size: int) -> List[BigRational]:
    result = ONE
    table = [result]
    for i in range(1, size):
        result = result.multiply(i)
        table.append(result)
    return table


_factorial_cache: List[BigRational] = _build_factorials(FACTORIAL_CACHE_SIZE)
_factorial_lock = threading.Lock()

# B(0), B(2), ..., B(20)
_BERNOULLI_EVEN: Tuple[BigRational, ...] = (
    BigRational(1, 1),
    BigRational(1, 6),
    BigRational(-1, 30),
    BigRational(1, 42),
    BigRational(-1, 30),
    BigRational(5, 66),
    BigRational(-691, 2730),
    BigRational(7, 6),
    BigRational(-3617, 510),
    BigRational(43867, 798),
    BigRational(-17611, 330),
)


def factorial(n: int) -> BigRational:
    """Return ``n!`` as an exact :class:`BigRational`.

    Values beyond the cached range extend the cache, so repeated series
    evaluations do not recompute them.
    """
    n = _ensure_int(n, name="n")
    if n < 0:
        raise DomainError(f"factorial of negative value {n}")
    if n < len(_factorial_cache):
        return _factorial_cache[n]

    with _factorial_lock:
        size = len(_factorial_cache)
        if n >= size:
            result = _factorial_cache[-1]
            for i in range(size, n + 1):
                result = result.multiply(i)
                _factorial_cache.append(result)
            logger.debug("factorial cache extended from %d to %d entries", size, n + 1)
        return _factorial_cache[n]


def bernoulli(n: int) -> BigRational:
    """Return the Bernoulli number ``B(n)`` (with ``B(1) = 1/2``).

    Even indices are available up to 20.
    """
    n = _ensure_int(n, name="n")
    if n < 0:
        raise DomainError(f"bernoulli of negative value {n}")
    if n == 1:
        return BigRational(1, 2)
    if n % 2 == 1:
        return ZERO
    index = n // 2
    if index >= len(_BERNOULLI_EVEN):
        raise DomainError(f"bernoulli({n}) is outside the table (even n <= 20)")
    return _BERNOULLI_EVEN[index]


__all__ = ["FACTORIAL_CACHE_SIZE", "factorial", "bernoulli"]
