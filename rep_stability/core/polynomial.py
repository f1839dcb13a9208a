"""Univariate polynomials over the rationals, in the variable q.

Coefficients are stored lowest degree first with no trailing zeros; the zero
polynomial is the single coefficient (0,). Degree of the zero polynomial is
reported as 0.
"""

from __future__ import annotations

from collections.abc import Iterable
from fractions import Fraction

from rep_stability.core.arithmetic import divisors, moebius
from rep_stability.core.errors import DivisionByZero, InvalidArgument
from rep_stability.core.memo import PrecisionCache
from rep_stability.core.rational import as_rational, format_rational

Scalar = int | Fraction


def _normalize(coefficients: Iterable[Scalar]) -> tuple[Fraction, ...]:
    values = [as_rational(c) for c in coefficients]
    while len(values) > 1 and values[-1] == 0:
        values.pop()
    if not values:
        values = [Fraction(0)]
    return tuple(values)


class Polynomial:
    """Immutable polynomial c_0 + c_1 q + ... + c_n q^n."""

    __slots__ = ("_coefficients",)

    def __init__(self, coefficients: Iterable[Scalar] = (0,)) -> None:
        self._coefficients = _normalize(coefficients)

    @classmethod
    def constant(cls, value: Scalar) -> "Polynomial":
        return cls((value,))

    @classmethod
    def monomial(cls, degree: int, coefficient: Scalar = 1) -> "Polynomial":
        """coefficient * q^degree."""
        if degree < 0:
            raise InvalidArgument(f"Polynomial degree must be nonnegative, got {degree}")
        return cls([0] * degree + [coefficient])

    @property
    def coefficients(self) -> tuple[Fraction, ...]:
        return self._coefficients

    @property
    def degree(self) -> int:
        return len(self._coefficients) - 1

    @property
    def leading_coefficient(self) -> Fraction:
        return self._coefficients[-1]

    def is_zero(self) -> bool:
        return self._coefficients == (0,)

    def __getitem__(self, degree: int) -> Fraction:
        if 0 <= degree < len(self._coefficients):
            return self._coefficients[degree]
        return Fraction(0)

    def __call__(self, x: Scalar) -> Fraction:
        x = as_rational(x)
        total = Fraction(0)
        for c in reversed(self._coefficients):
            total = total * x + c
        return total

    def monic(self) -> "Polynomial":
        """Scale so the leading coefficient is 1 (the zero polynomial is returned as is)."""
        if self.is_zero():
            return self
        lead = self.leading_coefficient
        return Polynomial(c / lead for c in self._coefficients)

    # ── ring operations ──────────────────────────────────────────

    @staticmethod
    def _coerce(other: object) -> "Polynomial | None":
        if isinstance(other, Polynomial):
            return other
        if isinstance(other, (int, Fraction)) and not isinstance(other, bool):
            return Polynomial.constant(other)
        return None

    def __add__(self, other: object) -> "Polynomial":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        a, b = self._coefficients, rhs._coefficients
        if len(a) < len(b):
            a, b = b, a
        return Polynomial(x + (b[i] if i < len(b) else 0) for i, x in enumerate(a))

    __radd__ = __add__

    def __neg__(self) -> "Polynomial":
        return Polynomial(-c for c in self._coefficients)

    def __sub__(self, other: object) -> "Polynomial":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self + (-rhs)

    def __rsub__(self, other: object) -> "Polynomial":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs - self

    def __mul__(self, other: object) -> "Polynomial":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        a, b = self._coefficients, rhs._coefficients
        product = [Fraction(0)] * (len(a) + len(b) - 1)
        for i, x in enumerate(a):
            if x == 0:
                continue
            for j, y in enumerate(b):
                product[i + j] += x * y
        return Polynomial(product)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> "Polynomial":
        """Division by a scalar only; use divmod() for polynomial division."""
        if isinstance(other, Polynomial):
            return NotImplemented
        if not isinstance(other, (int, Fraction)) or isinstance(other, bool):
            return NotImplemented
        if other == 0:
            raise DivisionByZero("Cannot divide a polynomial by zero")
        return Polynomial(c / other for c in self._coefficients)

    def __divmod__(self, other: object) -> tuple["Polynomial", "Polynomial"]:
        """(quotient, remainder) by repeated leading-term elimination."""
        divisor = self._coerce(other)
        if divisor is None:
            return NotImplemented
        if divisor.is_zero():
            raise DivisionByZero("Cannot divide by the zero polynomial")

        remainder = list(self._coefficients)
        d = divisor.degree
        lead = divisor.leading_coefficient
        quotient = [Fraction(0)] * max(len(remainder) - d, 1)

        while len(remainder) - 1 >= d and any(remainder):
            shift = len(remainder) - 1 - d
            factor = remainder[-1] / lead
            quotient[shift] = factor
            for i, c in enumerate(divisor._coefficients):
                remainder[shift + i] -= factor * c
            remainder.pop()
            while len(remainder) > 1 and remainder[-1] == 0:
                remainder.pop()

        return Polynomial(quotient), Polynomial(remainder)

    def __floordiv__(self, other: object) -> "Polynomial":
        result = self.__divmod__(other)
        if result is NotImplemented:
            return NotImplemented
        return result[0]

    def __mod__(self, other: object) -> "Polynomial":
        result = self.__divmod__(other)
        if result is NotImplemented:
            return NotImplemented
        return result[1]

    def __pow__(self, exponent: int) -> "Polynomial":
        if exponent < 0:
            raise InvalidArgument("Polynomial powers must be nonnegative")
        result = Polynomial.constant(1)
        for _ in range(exponent):
            result = result * self
        return result

    # ── value semantics ─────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._coefficients == rhs._coefficients

    def __hash__(self) -> int:
        return hash(self._coefficients)

    def __str__(self) -> str:
        if self.is_zero():
            return "0"
        pieces: list[str] = []
        for degree in range(self.degree, -1, -1):
            c = self._coefficients[degree]
            if c == 0:
                continue
            sign = "-" if c < 0 else "+"
            magnitude = abs(c)
            if degree == 0:
                body = format_rational(magnitude)
            else:
                power = "q" if degree == 1 else f"q^{degree}"
                body = power if magnitude == 1 else f"{format_rational(magnitude)}*{power}"
            pieces.append(f"{sign} {body}")
        text = " ".join(pieces)
        return text[2:] if text.startswith("+ ") else "-" + text[2:]

    def __repr__(self) -> str:
        return f"Polynomial([{', '.join(format_rational(c) for c in self._coefficients)}])"


def gcd(a: Polynomial, b: Polynomial) -> Polynomial:
    """Monic Euclidean GCD; the constant 1 when both inputs are constants."""
    if a.degree == 0 and b.degree == 0:
        return Polynomial.constant(1)
    if a.degree < b.degree:
        a, b = b, a
    while not b.is_zero():
        a, b = b, a % b
    return a.monic()


def choose(p: Polynomial, k: int) -> Polynomial:
    """p (p - 1) ... (p - k + 1) / k!, the identity for k <= 0."""
    if k <= 0:
        return Polynomial.constant(1)
    result = p
    for i in range(1, k):
        result = result * (p - i) / (i + 1)
    return result


# ── Möbius sums ─────────────────────────────────────────────────

_MOEBIUS_SUMS: PrecisionCache[Polynomial] = PrecisionCache("moebius_sums")
_CHOOSE_MOEBIUS_SUMS: PrecisionCache[Polynomial] = PrecisionCache("choose_moebius_sums")


def moebius_sum(k: int) -> Polynomial:
    """(1/k) * sum over d | k of mu(k/d) q^d: the number of primitive necklaces
    of length k over q letters. 1 for k <= 0."""

    def compute() -> Polynomial:
        if k <= 0:
            return Polynomial.constant(1)
        coefficients: list[Fraction] = [Fraction(0)] * (k + 1)
        for d in divisors(k):
            coefficients[d] += Fraction(moebius(k // d), k)
        return Polynomial(coefficients)

    return _MOEBIUS_SUMS.get_or_compute(k, compute)


def choose_moebius_sum(n: int, j: int) -> Polynomial:
    """C(moebius_sum(n), j), built up one factor at a time from j - 1."""
    if n < 0 or j < 0:
        raise InvalidArgument(f"Arguments must be nonnegative, got ({n}, {j})")

    cached = _CHOOSE_MOEBIUS_SUMS.lookup((n, j))
    if cached is not None:
        return cached

    if j == 0:
        result = Polynomial.constant(1)
    else:
        previous = choose_moebius_sum(n, j - 1)
        result = previous * (moebius_sum(n) - (j - 1)) / j
    return _CHOOSE_MOEBIUS_SUMS.store((n, j), result)

