"""Exact rational arithmetic on arbitrary-precision integers."""

from .gcd import DEFAULT_GCD, binary_gcd, get_gcd, set_gcd
from .rational import (
    InvalidDenominator,
    Rational,
    as_rational_array,
    rationalize,
    zeros,
    zeros_like,
)

__all__ = [
    "Rational",
    "InvalidDenominator",
    "rationalize",
    "as_rational_array",
    "zeros",
    "zeros_like",
    "DEFAULT_GCD",
    "binary_gcd",
    "get_gcd",
    "set_gcd",
]
