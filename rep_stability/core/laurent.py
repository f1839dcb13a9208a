"""Laurent polynomials in z over the rationals, with truncation windows.

A LaurentPolynomial stores a lead exponent and the contiguous block of
coefficients for z^lead, z^(lead+1), ..., z^degree. Stored blocks never start
or end with a zero; the zero polynomial is ((0,), lead=0).

Values are immutable. The truncation operators (round_to_nth_degree,
round_lead_to_n, leading_n_terms, first_n_terms) return new instances and are
how the statistic transform keeps series products to a finite precision.
"""

from __future__ import annotations

from collections.abc import Iterable
from fractions import Fraction

from rep_stability.core.errors import DivisionByZero, InvalidArgument
from rep_stability.core.rational import as_rational, format_rational

Scalar = int | Fraction


class LaurentPolynomial:
    """Immutable sum of c_e z^e over a finite window of integer exponents."""

    __slots__ = ("_lead", "_coefficients")

    def __init__(self, coefficients: Iterable[Scalar] = (0,), lead: int = 0) -> None:
        values = [as_rational(c) for c in coefficients]
        start = 0
        while start < len(values) and values[start] == 0:
            start += 1
        end = len(values)
        while end > start and values[end - 1] == 0:
            end -= 1

        if start == end:
            self._lead = 0
            self._coefficients: tuple[Fraction, ...] = (Fraction(0),)
        else:
            self._lead = lead + start
            self._coefficients = tuple(values[start:end])

    @classmethod
    def constant(cls, value: Scalar) -> "LaurentPolynomial":
        return cls((value,))

    @classmethod
    def monomial(cls, exponent: int, coefficient: Scalar = 1) -> "LaurentPolynomial":
        """coefficient * z^exponent."""
        return cls((coefficient,), lead=exponent)

    @classmethod
    def zero(cls) -> "LaurentPolynomial":
        return cls()

    @classmethod
    def one(cls) -> "LaurentPolynomial":
        return cls((1,))

    # ── window ───────────────────────────────────────────────────

    @property
    def lead(self) -> int:
        return self._lead

    @property
    def coefficients(self) -> tuple[Fraction, ...]:
        return self._coefficients

    @property
    def degree(self) -> int:
        return self._lead + len(self._coefficients) - 1

    def is_zero(self) -> bool:
        return self._coefficients == (0,)

    def __getitem__(self, exponent: int) -> Fraction:
        i = exponent - self._lead
        if 0 <= i < len(self._coefficients):
            return self._coefficients[i]
        return Fraction(0)

    def coefficients_up_to(self, n: int) -> list[Fraction]:
        """Coefficients of z^0, z^1, ..., z^n."""
        return [self[e] for e in range(n + 1)]

    def __call__(self, z: Scalar) -> Fraction:
        z = as_rational(z)
        if z == 0 and self._lead < 0 and not self.is_zero():
            raise DivisionByZero("Negative powers of z are undefined at z = 0")
        return sum((c * z**(self._lead + i) for i, c in enumerate(self._coefficients)), Fraction(0))

    def monic(self) -> "LaurentPolynomial":
        if self.is_zero():
            return self
        top = self._coefficients[-1]
        return LaurentPolynomial((c / top for c in self._coefficients), self._lead)

    # ── arithmetic ──────────────────────────────────────────────

    @staticmethod
    def _coerce(other: object) -> "LaurentPolynomial | None":
        if isinstance(other, LaurentPolynomial):
            return other
        if isinstance(other, (int, Fraction)) and not isinstance(other, bool):
            return LaurentPolynomial.constant(other)
        return None

    def __add__(self, other: object) -> "LaurentPolynomial":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        if self.is_zero():
            return rhs
        if rhs.is_zero():
            return self
        lead = min(self._lead, rhs._lead)
        top = max(self.degree, rhs.degree)
        return LaurentPolynomial((self[e] + rhs[e] for e in range(lead, top + 1)), lead)

    __radd__ = __add__

    def __neg__(self) -> "LaurentPolynomial":
        return LaurentPolynomial((-c for c in self._coefficients), self._lead)

    def __sub__(self, other: object) -> "LaurentPolynomial":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self + (-rhs)

    def __rsub__(self, other: object) -> "LaurentPolynomial":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs - self

    def __mul__(self, other: object) -> "LaurentPolynomial":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        if self.is_zero() or rhs.is_zero():
            return LaurentPolynomial.zero()
        a, b = self._coefficients, rhs._coefficients
        product = [Fraction(0)] * (len(a) + len(b) - 1)
        for i, x in enumerate(a):
            if x == 0:
                continue
            for j, y in enumerate(b):
                product[i + j] += x * y
        return LaurentPolynomial(product, self._lead + rhs._lead)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> "LaurentPolynomial":
        """Division by a scalar."""
        if not isinstance(other, (int, Fraction)) or isinstance(other, bool):
            return NotImplemented
        if other == 0:
            raise DivisionByZero("Cannot divide a Laurent polynomial by zero")
        return LaurentPolynomial((c / other for c in self._coefficients), self._lead)

    # ── substitutions ───────────────────────────────────────────

    def formally_invert(self) -> "LaurentPolynomial":
        """Substitute z -> 1/z, e.g. -z^-2 + 2 + z^3 -> z^-3 + 2 - z^2."""
        if self.is_zero():
            return self
        return LaurentPolynomial(reversed(self._coefficients), -self.degree)

    def raise_z_to_ith_power(self, i: int) -> "LaurentPolynomial":
        """Substitute z -> z^i.

        i = 0 collapses the window to the constant sum of its coefficients.
        """
        if i == 0:
            return LaurentPolynomial.constant(sum(self._coefficients, Fraction(0)))
        if i == 1:
            return self
        if i < 0:
            return self.formally_invert().raise_z_to_ith_power(-i)

        spread: list[Fraction] = []
        for c in self._coefficients:
            spread.append(c)
            spread.extend([Fraction(0)] * (i - 1))
        return LaurentPolynomial(spread, self._lead * i)

    # ── truncation ──────────────────────────────────────────────

    def round_to_nth_degree(self, n: int) -> "LaurentPolynomial":
        """Drop every term z^k with k > n."""
        keep = n - self._lead + 1
        if keep <= 0:
            return LaurentPolynomial.zero()
        return LaurentPolynomial(self._coefficients[:keep], self._lead)

    def round_lead_to_n(self, n: int) -> "LaurentPolynomial":
        """Drop every term z^k with k < n."""
        skip = n - self._lead
        if skip <= 0:
            return self
        return LaurentPolynomial(self._coefficients[skip:], n)

    def leading_n_terms(self, n: int) -> "LaurentPolynomial":
        """Keep the n highest-degree slots of the window."""
        if n <= 0:
            return LaurentPolynomial.zero()
        if n >= len(self._coefficients):
            return self
        return LaurentPolynomial(self._coefficients[-n:], self.degree - n + 1)

    def first_n_terms(self, n: int) -> "LaurentPolynomial":
        """Keep the n lowest-degree slots of the window."""
        if n <= 0:
            return LaurentPolynomial.zero()
        return LaurentPolynomial(self._coefficients[:n], self._lead)

    # ── value semantics ─────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._lead == rhs._lead and self._coefficients == rhs._coefficients

    def __hash__(self) -> int:
        return hash((self._lead, self._coefficients))

    def _term(self, exponent: int, c: Fraction, latex: bool) -> str:
        if exponent == 0:
            return format_rational(c)
        power = f"z^{{{exponent}}}" if latex else f"z^{exponent}"
        if c == 1:
            return power
        return f"{format_rational(c)}{power}" if latex else f"{format_rational(c)}*{power}"

    def to_string(self) -> str:
        """Terms in ascending degree joined by " + "."""
        terms = [
            self._term(self._lead + i, c, latex=False)
            for i, c in enumerate(self._coefficients)
            if c != 0
        ]
        return " + ".join(terms) if terms else "0"

    def to_reversed_string(self, latex: bool = False) -> str:
        """Terms in descending degree with explicit signs between them."""
        out = ""
        for i in range(len(self._coefficients) - 1, -1, -1):
            c = self._coefficients[i]
            if c == 0:
                continue
            if not out:
                out = self._term(self._lead + i, c, latex)
                continue
            out += " + " if c > 0 else " - "
            out += self._term(self._lead + i, abs(c), latex)
        return out or "0"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        coefs = ", ".join(format_rational(c) for c in self._coefficients)
        return f"LaurentPolynomial([{coefs}], lead={self._lead})"


def power_series(coefficients: Iterable[Scalar], start: int = 0) -> LaurentPolynomial:
    """sum c_l z^(start + l), the form used for truncated power series."""
    if start < 0:
        raise InvalidArgument(f"Power series must start at a nonnegative degree, got {start}")
    return LaurentPolynomial(coefficients, start)
