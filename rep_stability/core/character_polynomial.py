"""Character polynomials in the binomial basis.

A character polynomial is a combination sum_i c_i T_i, where each T_i is a
product of binomials (X_1 C a_1)(X_2 C a_2)...(X_r C a_r) in the cycle-count
variables X_k. T_i is stored as the Partition whose cycle type is (a_1, ..., a_r),
so the term (X_1 C 2)(X_3 C 1) is Partition([3, 1, 1]).

Evaluated at a conjugacy class of S_n (a Partition read as a cycle type), X_k
becomes the number of k-cycles. Terms are kept in insertion order and
duplicates are not merged unless simplified() is called.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from fractions import Fraction

from rep_stability.core.arithmetic import binomial
from rep_stability.core.errors import InvalidArgument
from rep_stability.core.partition import Partition
from rep_stability.core.rational import as_rational, format_rational

TermSpec = Partition | Sequence[tuple[int, int]]


def _as_term(term: TermSpec) -> Partition:
    if isinstance(term, Partition):
        return term
    return Partition.from_multiplicities(term)


class CharacterPolynomial:
    __slots__ = ("_terms", "_coefficients")

    def __init__(
        self,
        terms: Iterable[TermSpec] = (),
        coefficients: Iterable[int | Fraction] = (),
    ) -> None:
        term_list = [_as_term(t) for t in terms]
        coef_list = [as_rational(c) for c in coefficients]
        if len(term_list) != len(coef_list):
            raise InvalidArgument(
                f"Terms and coefficients must have the same length, got {len(term_list)} and {len(coef_list)}"
            )
        self._terms: tuple[Partition, ...] = tuple(term_list)
        self._coefficients: tuple[Fraction, ...] = tuple(coef_list)

    @classmethod
    def constant(cls, value: int | Fraction) -> "CharacterPolynomial":
        return cls([Partition()], [value])

    @property
    def terms(self) -> tuple[Partition, ...]:
        return self._terms

    @property
    def coefficients(self) -> tuple[Fraction, ...]:
        return self._coefficients

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self) -> Iterator[tuple[Partition, Fraction]]:
        return zip(self._terms, self._coefficients)

    def evaluate(self, conjugacy_class: Partition) -> Fraction:
        """Value at the class with conjugacy_class.cycle_count(k) k-cycles."""
        total = Fraction(0)
        for term, c in self:
            value = c
            for k, a in enumerate(term.cycles, start=1):
                if a == 0:
                    continue
                value *= binomial(conjugacy_class.cycle_count(k), a)
                if value == 0:
                    break
            total += value
        return total

    __call__ = evaluate

    def simplified(self) -> "CharacterPolynomial":
        """Merge repeated terms and drop zero coefficients, keeping first-seen order."""
        merged: dict[Partition, Fraction] = {}
        for term, c in self:
            merged[term] = merged.get(term, Fraction(0)) + c
        kept = [(t, c) for t, c in merged.items() if c != 0]
        return CharacterPolynomial([t for t, _ in kept], [c for _, c in kept])

    def __add__(self, other: object) -> "CharacterPolynomial":
        if not isinstance(other, CharacterPolynomial):
            return NotImplemented
        return CharacterPolynomial(
            self._terms + other._terms,
            self._coefficients + other._coefficients,
        )

    def __mul__(self, other: object) -> "CharacterPolynomial":
        if not isinstance(other, (int, Fraction)) or isinstance(other, bool):
            return NotImplemented
        r = as_rational(other)
        return CharacterPolynomial(self._terms, (c * r for c in self._coefficients))

    __rmul__ = __mul__

    def __neg__(self) -> "CharacterPolynomial":
        return self * -1

    def __eq__(self, other: object) -> bool:
        """Equal as functions: compared after simplification, ignoring order."""
        if not isinstance(other, CharacterPolynomial):
            return NotImplemented
        return dict(self.simplified()) == dict(other.simplified())

    def __hash__(self) -> int:
        return hash(frozenset(self.simplified()))

    @staticmethod
    def _term_to_string(term: Partition, c: Fraction) -> str:
        out = format_rational(c)
        for k, a in enumerate(term.cycles, start=1):
            if a:
                out += f" * (X_{k} C {a})"
        return out

    def __str__(self) -> str:
        if not self._terms:
            return "0"
        return " + ".join(self._term_to_string(t, c) for t, c in self)

    def __repr__(self) -> str:
        return f"CharacterPolynomial({len(self)} terms)"
