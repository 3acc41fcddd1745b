"""Greatest-common-divisor collaborators used when reducing rationals."""
from __future__ import annotations

import logging
import math
from typing import Callable, Optional

logger = logging.getLogger(__name__)

GcdFunction = Callable[[int, int], int]

DEFAULT_GCD: GcdFunction = math.gcd

_active_gcd: GcdFunction = DEFAULT_GCD


def _lowest_set_bit(value: int) -> int:
    return (value & -value).bit_length() - 1


def binary_gcd(a: int, b: int) -> int:
    """Return the non-negative gcd of *a* and *b* using Stein's algorithm.

    Only shifts, subtraction and comparison are used, so the routine works
    for integers of any size.  ``binary_gcd(0, 0)`` is ``0``.
    """
    a = abs(int(a))
    b = abs(int(b))
    if a == 0:
        return b
    if b == 0:
        return a

    shift = _lowest_set_bit(a | b)
    a >>= _lowest_set_bit(a)
    while b:
        b >>= _lowest_set_bit(b)
        if a > b:
            a, b = b, a
        b -= a
    return a << shift


def get_gcd() -> GcdFunction:
    """Return the gcd collaborator currently used by :meth:`Rational.reduce`."""
    return _active_gcd


def set_gcd(func: Optional[GcdFunction]) -> GcdFunction:
    """Install *func* as the gcd collaborator and return the previous one.

    Passing ``None`` restores :data:`DEFAULT_GCD`.
    """
    global _active_gcd
    if func is None:
        func = DEFAULT_GCD
    if not callable(func):
        raise TypeError(f"gcd collaborator must be callable, got {type(func)!r}")
    previous = _active_gcd
    _active_gcd = func
    logger.debug("gcd collaborator set to %r (was %r)", func, previous)
    return previous


__all__ = ["DEFAULT_GCD", "GcdFunction", "binary_gcd", "get_gcd", "set_gcd"]
