"""Exact rational numbers over arbitrary-precision integers with NumPy interoperability."""
from __future__ import annotations

import logging
import math
import numbers
import operator
from fractions import Fraction
from typing import Any, Iterable, Optional, Tuple, Union

import numpy as np

from .gcd import GcdFunction, get_gcd

logger = logging.getLogger(__name__)

NumberLike = Union["Rational", Fraction, numbers.Real]


class InvalidDenominator(ZeroDivisionError):
    """Raised when an operation would produce a rational with a zero denominator."""

    def __init__(self, message: str = "denominator must be non-zero") -> None:
        super().__init__(message)


def _ensure_int(value: Any, *, name: str) -> int:
    """Convert *value* to ``int`` when it represents an integer."""
    if isinstance(value, numbers.Integral):
        return int(value)
    raise TypeError(f"{name} must be an integer, got {type(value)!r}")


class Rational:
    """Immutable quotient of two integers.

    The pair is stored exactly as given: ``Rational(2, 4)`` and
    ``Rational(1, -2)`` keep their components.  Call :meth:`reduce` to obtain
    lowest terms.  Arithmetic never reduces on its own.
    """

    __slots__ = ("_numerator", "_denominator")
    __array_priority__ = 1000.0  # Prefer Rational semantics in NumPy expressions.

    def __init__(self, numerator: numbers.Integral, denominator: numbers.Integral = 1) -> None:
        num = _ensure_int(numerator, name="numerator")
        den = _ensure_int(denominator, name="denominator")
        if den == 0:
            logger.debug("rejected rational %d / 0", num)
            raise InvalidDenominator()
        object.__setattr__(self, "_numerator", num)
        object.__setattr__(self, "_denominator", den)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._numerator, self._denominator))

    # ------------------------------------------------------------------
    # Constructors
    @classmethod
    def from_fraction(cls, value: Fraction) -> "Rational":
        """Create a :class:`Rational` from :class:`fractions.Fraction`."""
        return cls(value.numerator, value.denominator)

    @classmethod
    def from_float(cls, value: float) -> "Rational":
        """Return the exact rational value of the binary float *value*."""
        if isinstance(value, bool):  # bool is a subclass of int; treat explicitly.
            return cls(int(value), 1)
        if math.isnan(value) or math.isinf(value):
            raise ValueError("cannot convert NaN or infinity to Rational")
        return cls.from_fraction(Fraction.from_float(float(value)))

    @classmethod
    def rationalize(cls, value: NumberLike) -> "Rational":
        """Coerce a numeric-like value into :class:`Rational`."""
        if isinstance(value, Rational):
            return value
        if isinstance(value, Fraction):
            return cls.from_fraction(value)
        if isinstance(value, numbers.Integral):
            return cls(int(value), 1)
        if isinstance(value, np.generic):
            return cls.rationalize(value.item())
        if isinstance(value, numbers.Real):
            return cls.from_float(float(value))
        raise TypeError(f"Cannot convert {type(value)!r} to Rational")

    # ------------------------------------------------------------------
    # Accessors
    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def as_pair(self) -> Tuple[int, int]:
        """Return ``(numerator, denominator)`` as stored."""
        return (self._numerator, self._denominator)

    def as_fraction(self) -> Fraction:
        """Return a :class:`Fraction` with the same value."""
        return Fraction(self._numerator, self._denominator)

    # ------------------------------------------------------------------
    # Arithmetic
    def abs(self) -> "Rational":
        return Rational(abs(self._numerator), abs(self._denominator))

    def negate(self) -> "Rational":
        return Rational(-self._numerator, self._denominator)

    def add(self, other: "Rational") -> "Rational":
        """Sum over the product of both denominators, left unreduced."""
        numerator, denominator = other.as_pair()
        return Rational(
            numerator * self._denominator + self._numerator * denominator,
            self._denominator * denominator,
        )

    def subtract(self, other: "Rational") -> "Rational":
        return self.add(other.negate())

    def inverse(self) -> "Rational":
        """Swap numerator and denominator.

        Raises :class:`InvalidDenominator` for a zero value.
        """
        return Rational(self._denominator, self._numerator)

    def mul(self, other: "Rational") -> "Rational":
        return Rational(
            other._numerator * self._numerator,
            other._denominator * self._denominator,
        )

    def div(self, other: "Rational") -> "Rational":
        return self.mul(other.inverse())

    def reduce(self, *, gcd: Optional[GcdFunction] = None) -> "Rational":
        """Return the value in lowest terms.

        Both components are divided by their gcd.  Signs are kept where they
        were stored, so ``Rational(3, -6).reduce()`` is ``Rational(1, -2)``.
        ``gcd`` overrides the configured collaborator for this call.
        """
        if gcd is None:
            gcd = get_gcd()
        divisor = gcd(self._numerator, self._denominator)
        # divisor divides both components, so floor division is exact here.
        return Rational(self._numerator // divisor, self._denominator // divisor)

    # ------------------------------------------------------------------
    # Comparisons
    def lte(self, other: "Rational") -> bool:
        """Return whether ``self <= other`` by cross-multiplication."""
        numerator, denominator = other.as_pair()
        left = self._numerator * denominator
        right = numerator * self._denominator
        # Exactly one negative denominator flips the sign of both products.
        if (denominator < 0) != (self._denominator < 0):
            return left >= right
        return left <= right

    def lt(self, other: "Rational") -> bool:
        return self.lte(other) and not other.lte(self)

    def eq(self, other: "Rational") -> bool:
        return self.lte(other) and other.lte(self)

    def gte(self, other: "Rational") -> bool:
        return other.lte(self)

    def gt(self, other: "Rational") -> bool:
        return other.lt(self)

    def is_positive(self) -> bool:
        return (self._numerator > 0 and self._denominator > 0) or (
            self._numerator < 0 and self._denominator < 0
        )

    def is_negative(self) -> bool:
        return self._numerator != 0 and not self.is_positive()

    # ------------------------------------------------------------------
    # Numeric protocol
    def __float__(self) -> float:
        return self._numerator / self._denominator

    def __int__(self) -> int:
        return int(self.as_fraction())

    def __bool__(self) -> bool:
        return self._numerator != 0

    def __hash__(self) -> int:
        # Equal values hash alike regardless of representation.
        return hash(self.as_fraction())

    # ------------------------------------------------------------------
    # Representation
    def __repr__(self) -> str:
        return f"Rational({self._numerator}, {self._denominator})"

    def __str__(self) -> str:
        return f"{self._numerator} / {self._denominator}"

    # ------------------------------------------------------------------
    # Internal helpers
    @staticmethod
    def _coerce_scalar(value: Any) -> "Rational":
        if isinstance(value, Rational):
            return value
        if isinstance(value, Fraction):
            return Rational.from_fraction(value)
        if isinstance(value, numbers.Integral):
            return Rational(int(value), 1)
        if isinstance(value, np.generic):  # NumPy scalars
            return Rational._coerce_scalar(value.item())
        raise TypeError(f"Cannot interpret {type(value)!r} as Rational")

    def _binary_operation(self, other: Any, op):
        if isinstance(other, np.ndarray):
            vectorised = np.vectorize(
                lambda x: op(self, self._coerce_scalar(x)),
                otypes=[object],
            )
            return vectorised(other)
        try:
            other_rat = self._coerce_scalar(other)
        except TypeError:
            return NotImplemented
        return op(self, other_rat)

    def _reflected_operation(self, other: Any, op):
        # ndarray operands on the left are routed through __array_ufunc__.
        try:
            other_rat = self._coerce_scalar(other)
        except TypeError:
            return NotImplemented
        return op(other_rat, self)

    @staticmethod
    def _coerce_power(value: Any) -> int:
        if isinstance(value, numbers.Integral):
            return int(value)
        if isinstance(value, Rational):
            reduced = value.reduce()
            if abs(reduced.denominator) != 1:
                raise ValueError("Exponent must be an integer")
            return reduced.numerator * reduced.denominator
        if isinstance(value, np.generic):
            return Rational._coerce_power(value.item())
        if isinstance(value, numbers.Real):
            if not float(value).is_integer():
                raise ValueError("Exponent must be an integer")
            return int(value)
        raise TypeError("Unsupported exponent type")

    # ------------------------------------------------------------------
    # Arithmetic operators
    def __add__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.add)

    def __radd__(self, other: Any) -> Any:
        return self._reflected_operation(other, Rational.add)

    def __sub__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.subtract)

    def __rsub__(self, other: Any) -> Any:
        return self._reflected_operation(other, Rational.subtract)

    def __mul__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.mul)

    def __rmul__(self, other: Any) -> Any:
        return self._reflected_operation(other, Rational.mul)

    def __truediv__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.div)

    def __rtruediv__(self, other: Any) -> Any:
        return self._reflected_operation(other, Rational.div)

    def __pow__(self, exponent: Any) -> Any:
        if isinstance(exponent, np.ndarray):
            vectorised = np.vectorize(lambda x: self.__pow__(x), otypes=[object])
            return vectorised(exponent)
        power = self._coerce_power(exponent)
        base = self if power >= 0 else self.inverse()
        power = abs(power)
        return Rational(base._numerator ** power, base._denominator ** power)

    def __neg__(self) -> "Rational":
        return self.negate()

    def __pos__(self) -> "Rational":
        return self

    def __abs__(self) -> "Rational":
        return self.abs()

    # ------------------------------------------------------------------
    # Comparison operators
    def _compare(self, other: Any, op) -> Any:
        if isinstance(other, np.ndarray):
            vectorised = np.vectorize(lambda x: op(self, x), otypes=[bool])
            return vectorised(other)
        if isinstance(other, numbers.Real) and not isinstance(other, numbers.Rational):
            value = float(other)
            if math.isnan(value) or math.isinf(value):
                # Every finite value orders like zero against NaN or infinity.
                return op(0.0, value)
            other_rat = Rational.from_float(value)
        else:
            try:
                other_rat = self._coerce_scalar(other)
            except TypeError:
                return NotImplemented
        return _COMPARISONS[op](self, other_rat)

    def __eq__(self, other: Any) -> Any:
        return self._compare(other, operator.eq)

    def __ne__(self, other: Any) -> Any:
        return self._compare(other, operator.ne)

    def __lt__(self, other: Any) -> Any:
        return self._compare(other, operator.lt)

    def __le__(self, other: Any) -> Any:
        return self._compare(other, operator.le)

    def __gt__(self, other: Any) -> Any:
        return self._compare(other, operator.gt)

    def __ge__(self, other: Any) -> Any:
        return self._compare(other, operator.ge)

    # ------------------------------------------------------------------
    # NumPy interoperability
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
        np.equal: operator.eq,
        np.not_equal: operator.ne,
        np.less: operator.lt,
        np.less_equal: operator.le,
        np.greater: operator.gt,
        np.greater_equal: operator.ge,
    }

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        if method != "__call__":
            return NotImplemented
        if kwargs.get("out") is not None:
            raise NotImplementedError("`out` argument is not supported for Rational ufuncs")
        op = self._UFUNC_DISPATCH.get(ufunc)
        if op is None:
            return NotImplemented

        is_comparison = op in _COMPARISONS
        coerced = []
        has_array = False
        for position, value in enumerate(inputs):
            has_array = has_array or isinstance(value, np.ndarray)
            if isinstance(value, Rational) or is_comparison or (op is operator.pow and position == 1):
                # Rational's own operators check these operands.
                coerced.append(value)
            elif isinstance(value, np.ndarray):
                vectorised = np.vectorize(self._coerce_scalar, otypes=[object])
                coerced.append(vectorised(value))
            else:
                coerced.append(self._coerce_scalar(value))
        if has_array:
            vectorised = np.vectorize(
                lambda *args: op(*args),
                otypes=[bool if is_comparison else object],
            )
            return vectorised(*coerced)
        return op(*coerced)


_COMPARISONS = {
    operator.eq: Rational.eq,
    operator.ne: lambda a, b: not a.eq(b),
    operator.lt: Rational.lt,
    operator.le: Rational.lte,
    operator.gt: Rational.gt,
    operator.ge: Rational.gte,
}


def rationalize(value: NumberLike) -> Rational:
    """Public helper to convert *value* into :class:`Rational`."""

    return Rational.rationalize(value)


def as_rational_array(values: Union[Iterable[Any], np.ndarray], *, copy: bool = True) -> np.ndarray:
    """Return an object array whose elements are all :class:`Rational`.

    An object array that already holds only rationals is returned as is when
    ``copy`` is false.
    """
    array = np.array(values, dtype=object, copy=True) if copy else np.asarray(values, dtype=object)
    if not copy and all(isinstance(item, Rational) for item in array.flat):
        return array
    result = np.empty(array.shape, dtype=object)
    for index, item in np.ndenumerate(array):
        result[index] = Rational.rationalize(item)
    return result


def zeros(shape: Union[int, Tuple[int, ...]]) -> np.ndarray:
    """Return an object array of the given shape filled with ``Rational(0, 1)``."""
    result = np.empty(shape, dtype=object)
    for index in np.ndindex(result.shape):
        result[index] = Rational(0, 1)
    return result


def zeros_like(array: Any) -> np.ndarray:
    """Return :func:`zeros` with the shape of *array*."""
    return zeros(np.shape(array))


__all__ = [
    "InvalidDenominator",
    "NumberLike",
    "Rational",
    "as_rational_array",
    "rationalize",
    "zeros",
    "zeros_like",
]
