"""Exact rationals.

The core works on ``fractions.Fraction`` throughout: it is already an
immutable, always-reduced value with a positive denominator. This module adds
constructors that report failures through the package error taxonomy, plus
the decimal-expansion helpers used when printing statistics.
"""

from __future__ import annotations

from fractions import Fraction
from numbers import Rational as _RationalABC

from rep_stability.core.errors import DivisionByZero, InvalidArgument

Rational = Fraction


def rational(numerator: int | Fraction, denominator: int | Fraction = 1) -> Fraction:
    """Build the reduced fraction numerator/denominator."""
    if denominator == 0:
        raise DivisionByZero("No zero denominator allowed")
    return Fraction(numerator, denominator)


def as_rational(value: int | Fraction) -> Fraction:
    """Coerce an int (or any exact rational) to a Fraction."""
    if isinstance(value, Fraction):
        return value
    if isinstance(value, bool) or not isinstance(value, _RationalABC):
        raise InvalidArgument(f"Expected an exact rational, got {value!r}")
    return Fraction(value)


def divide(a: int | Fraction, b: int | Fraction) -> Fraction:
    """a / b, raising DivisionByZero when b is zero."""
    if b == 0:
        raise DivisionByZero(f"Cannot divide {a} by zero")
    return as_rational(a) / as_rational(b)


def format_rational(q: Fraction) -> str:
    """``"A"`` for integers, ``"A/B"`` otherwise."""
    if q.denominator == 1:
        return str(q.numerator)
    return f"{q.numerator}/{q.denominator}"


def decimal_digits(q: int | Fraction, n: int) -> list[int]:
    """Decimal expansion of q to n digits.

    The first entry is the decimal place of the leading digit, so 0.0045623
    starts with -3 and 78.432 starts with 1. The remaining n entries are the
    digits; for negative q the first digit carries the sign.
    """
    q = as_rational(q)
    if n < 0:
        raise InvalidArgument("Number of digits must be nonnegative")
    if q == 0:
        return [0] * (n + 1)

    num = abs(q.numerator)
    den = q.denominator
    place = 0
    scale = 1
    if num < den:
        while num * scale < den:
            scale *= 10
            place -= 1
    else:
        while den * scale * 10 <= num:
            scale *= 10
            place += 1

    digits = [place]
    if place < 0:
        remainder, divisor = num * scale, den
    else:
        remainder, divisor = num, den * scale
    for _ in range(n):
        digit, remainder = divmod(remainder, divisor)
        digits.append(digit)
        remainder *= 10

    if q < 0 and n > 0:
        digits[1] = -digits[1]
    return digits


def decimal_string(digits: list[int]) -> str:
    """Render a list produced by :func:`decimal_digits`."""
    if len(digits) < 2:
        raise InvalidArgument("Need a place entry and at least one digit")
    place = digits[0]
    out = "-" if digits[1] < 0 else ""

    if place < 0:
        out += "0." + "0" * (-1 - place)
        return out + "".join(str(abs(d)) for d in digits[1:])

    for d in digits[1:]:
        if place == -1:
            out += "."
        out += str(abs(d))
        place -= 1

    while place >= 0:
        out += "0"
        place -= 1
    return out
