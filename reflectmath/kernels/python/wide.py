"""
Double-word unsigned integer kernel.

Native values are 256-bit words. Products of two words are held exactly in a
`Wide` value made of two words (`hi`, `lo`), so nothing in the conversion
engine ever truncates before the final division.

Each multiplication shape gets its own `Wide` subclass (`BalanceXShares`,
`BalanceXBasisPointsXShares2`, ...). The unit factors live on the class, not
on the value:
- `add` / `sub` / comparisons only accept two values of the same class,
- `div` only accepts a denominator whose units cancel all but one factor
  of the numerator,
so mismatched quantities are rejected before any arithmetic happens.

Rounding: `div` floors, `div_up` ceils. Both operate on non-negative values.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from functools import reduce
from typing import ClassVar, Type, TypeVar, Union


WORD_BITS = 256
WORD_MAX = (1 << WORD_BITS) - 1
WIDE_BITS = 2 * WORD_BITS
WIDE_MAX = (1 << WIDE_BITS) - 1


class WideArithmeticError(ArithmeticError):
    """Base class for kernel arithmetic failures."""


class DivisionByZero(WideArithmeticError, ZeroDivisionError):
    """Denominator is zero."""


class Overflow(WideArithmeticError, OverflowError):
    """Value does not fit the native or wide representation."""


class Underflow(WideArithmeticError):
    """Value would be negative."""


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def require_word(name: str, value: int) -> int:
    """Check that `value` is a native 256-bit unsigned word and return it."""
    _require_int(name, value)
    if value < 0:
        raise Underflow(f"{name} must be non-negative: {value}")
    if value > WORD_MAX:
        raise Overflow(f"{name} exceeds {WORD_BITS} bits")
    return value


W = TypeVar("W", bound="Wide")


@dataclass(frozen=True, order=True)
class Wide:
    """512-bit unsigned value stored as two native words."""

    UNITS: ClassVar[tuple[str, ...]] = ()

    hi: int = 0
    lo: int = 0

    def __post_init__(self) -> None:
        require_word("hi", self.hi)
        require_word("lo", self.lo)

    @classmethod
    def from_int(cls: Type[W], value: int) -> W:
        _require_int("value", value)
        if value < 0:
            raise Underflow(f"{cls.__name__} cannot be negative: {value}")
        if value > WIDE_MAX:
            raise Overflow(f"{cls.__name__} exceeds {WIDE_BITS} bits")
        return cls(hi=value >> WORD_BITS, lo=value & WORD_MAX)

    @property
    def value(self) -> int:
        return (self.hi << WORD_BITS) | self.lo

    def is_zero(self) -> bool:
        return self.hi == 0 and self.lo == 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value})"


class BalanceXShares(Wide):
    UNITS = ("balance", "shares")


class BalanceXShares2(Wide):
    UNITS = ("balance", "shares", "shares")


class BalanceXBasisPoints(Wide):
    UNITS = ("balance", "basis_points")


class BalanceXBasisPointsXShares(Wide):
    UNITS = ("balance", "basis_points", "shares")


class BalanceXBasisPointsXShares2(Wide):
    UNITS = ("balance", "basis_points", "shares", "shares")


class SharesXBasisPoints(Wide):
    UNITS = ("basis_points", "shares")


class Shares2XBasisPoints(Wide):
    UNITS = ("basis_points", "shares", "shares")


Operand = Union[Wide, int]


def _require_shape(shape: type) -> None:
    if not (isinstance(shape, type) and issubclass(shape, Wide)) or shape is Wide:
        raise TypeError(f"shape must be a concrete Wide subclass, got {shape!r}")


def _same_shape(op: str, a: Wide, b: Operand) -> int:
    """Return `b` as a plain int after checking it may be combined with `a`."""
    if isinstance(b, Wide):
        if type(b) is not type(a):
            raise TypeError(f"cannot {op} {type(a).__name__} and {type(b).__name__}")
        return b.value
    return require_word("b", b)


def alloc(shape: Type[W]) -> W:
    """Zero-valued scratch value of `shape`."""
    _require_shape(shape)
    return shape()


def mul(shape: Type[W], a: int, b: int) -> W:
    """Exact product of two native words. Always fits in 512 bits."""
    _require_shape(shape)
    return shape.from_int(require_word("a", a) * require_word("b", b))


def scale(shape: Type[W], w: Wide, k: int) -> W:
    """Multiply a wide value by a native word into a richer shape."""
    _require_shape(shape)
    if not isinstance(w, Wide):
        raise TypeError("w must be a Wide value")
    return shape.from_int(w.value * require_word("k", k))


def add(a: W, b: Operand) -> W:
    """`a + b`; `b` is a value of the same shape or a native word."""
    if not isinstance(a, Wide):
        raise TypeError("a must be a Wide value")
    return type(a).from_int(a.value + _same_shape("add", a, b))


def sub(a: W, b: Operand) -> W:
    """`a - b`; raises `Underflow` when `b > a`."""
    if not isinstance(a, Wide):
        raise TypeError("a must be a Wide value")
    rhs = _same_shape("subtract", a, b)
    if rhs > a.value:
        raise Underflow(f"{type(a).__name__}: subtrahend exceeds minuend")
    return type(a).from_int(a.value - rhs)


def total(shape: Type[W], *terms: W) -> W:
    """Sum of same-shape terms, starting from a scratch zero."""
    return reduce(add, terms, alloc(shape))


def _denominator(n: Wide, d: Operand) -> int:
    if not isinstance(n, Wide):
        raise TypeError("numerator must be a Wide value")
    if isinstance(d, Wide):
        num_units = Counter(n.UNITS)
        den_units = Counter(d.UNITS)
        left = num_units - den_units
        if den_units - num_units or sum(left.values()) != 1:
            raise TypeError(
                f"{type(n).__name__} / {type(d).__name__} does not reduce to a single unit"
            )
        if d.is_zero():
            raise DivisionByZero(f"{type(n).__name__} divided by zero {type(d).__name__}")
        return d.value
    den = require_word("d", d)
    if den == 0:
        raise DivisionByZero(f"{type(n).__name__} divided by zero")
    return den


def _require_quotient(q: int) -> int:
    if q > WORD_MAX:
        raise Overflow(f"quotient exceeds {WORD_BITS} bits")
    return q


def div(n: Wide, d: Operand) -> int:
    """Floor division of a wide numerator, returning a native word."""
    den = _denominator(n, d)
    return _require_quotient(n.value // den)


def div_up(n: Wide, d: Operand) -> int:
    """Ceiling division of a wide numerator, returning a native word."""
    den = _denominator(n, d)
    return _require_quotient(-(-n.value // den))
