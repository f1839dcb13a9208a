"""Symmetric functions in infinitely many variables, in the monomial basis.

An element is a finite combination of monomial symmetric functions m_lambda,
where m_lambda is the sum of every distinct monomial t_{i_1}^{l_1} t_{i_2}^{l_2} ...
with exponent pattern lambda. Coefficients are stored by index into a
MonomialBasis: an append-only list of partitions ordered by size, then
reverse-lexicographically, so that

  index:     0   1    2    3       4    5       6          7   ...
  partition: []  [1]  [2]  [1, 1]  [3]  [2, 1]  [1, 1, 1]  [4] ...

The basis grows one whole degree at a time when an index beyond its current
length is needed. An index, once assigned, never changes.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Iterator
from fractions import Fraction

from rep_stability.core.arithmetic import divisors, moebius, placements
from rep_stability.core.errors import DivisionByZero, InvalidArgument
from rep_stability.core.memo import PrecisionCache
from rep_stability.core.partition import Partition, all_partitions
from rep_stability.core.rational import as_rational, format_rational

Scalar = int | Fraction


class MonomialBasis:
    """Shared, ordered registry of monomial-basis partitions.

    Also owns the cache of monomial products, which are expressed in its own
    indices and so cannot be shared with another registry.
    """

    def __init__(self) -> None:
        self._partitions: list[Partition] = [Partition()]
        self._complete_degree = 0
        self.products: PrecisionCache[tuple[tuple[Partition, Fraction], ...]] = PrecisionCache(
            "monomial_products"
        )

    def __len__(self) -> int:
        return len(self._partitions)

    def __getitem__(self, index: int) -> Partition:
        if index >= len(self._partitions):
            self.ensure_length(index + 1)
        return self._partitions[index]

    def __iter__(self) -> Iterator[Partition]:
        return iter(list(self._partitions))

    @property
    def complete_degree(self) -> int:
        """Every partition of size <= complete_degree is registered."""
        return self._complete_degree

    def extend_to_degree(self, degree: int) -> None:
        while self._complete_degree < degree:
            self._complete_degree += 1
            self._partitions.extend(all_partitions(self._complete_degree))

    def ensure_length(self, length: int) -> None:
        while len(self._partitions) < length:
            self.extend_to_degree(self._complete_degree + 1)

    def index(self, partition: Partition) -> int:
        """Position of partition in the basis, extending the basis if needed."""
        if partition.is_empty():
            return 0
        self.extend_to_degree(partition.size)
        i = bisect_left(self._partitions, partition)
        if i == len(self._partitions) or self._partitions[i] != partition:
            raise InvalidArgument(f"{partition} is missing from the monomial basis")
        return i

    def __repr__(self) -> str:
        return f"MonomialBasis(size={len(self)}, complete_degree={self._complete_degree})"


DEFAULT_BASIS = MonomialBasis()


def _multiply_monomials(p: Partition, q: Partition) -> dict[Partition, Fraction]:
    """Expand m_p * m_q in the monomial basis.

    q's parts sit on variables t_1..t_len(q). Each part of p is placed on a
    distinct variable: one of q's, or the next unused one. Equal consecutive
    parts of p take nondecreasing variables. Each placement gives an exponent
    pattern r, weighted by the number of ways to lay out q and the new
    variables inside r, over the number of layouts of r itself.
    """
    if len(p) < len(q):
        p, q = q, p
    parts = p.parts
    original = list(q.parts)
    result: dict[Partition, Fraction] = {}

    exponents = list(original)
    fresh: list[int] = []
    taken: set[int] = set()

    def place(index: int, previous: int) -> None:
        if index == len(parts):
            r = Partition(sorted(exponents, reverse=True))
            n = len(exponents)
            weight = Fraction(
                placements(original, n) * placements(fresh, n - len(original)),
                placements(r.parts, n),
            )
            result[r] = result.get(r, Fraction(0)) + weight
            return

        part = parts[index]
        for slot in range(len(exponents) + 1):
            if slot in taken:
                continue
            if index > 0 and parts[index - 1] == part and slot < previous:
                continue

            taken.add(slot)
            if slot == len(exponents):
                exponents.append(part)
                fresh.append(part)
                place(index + 1, slot)
                fresh.pop()
                exponents.pop()
            else:
                exponents[slot] += part
                place(index + 1, slot)
                exponents[slot] -= part
            taken.discard(slot)

    place(0, -1)
    return result


class SymmetricFunction:
    """Immutable element of the ring of symmetric functions."""

    __slots__ = ("_coefficients", "_basis")

    def __init__(
        self,
        coefficients: Iterable[Scalar] = (),
        basis: MonomialBasis | None = None,
    ) -> None:
        values = [as_rational(c) for c in coefficients]
        while values and values[-1] == 0:
            values.pop()
        self._coefficients: tuple[Fraction, ...] = tuple(values)
        self._basis = basis if basis is not None else DEFAULT_BASIS
        self._basis.ensure_length(len(values))

    # ── constructors ────────────────────────────────────────────

    @classmethod
    def constant(cls, value: Scalar, basis: MonomialBasis | None = None) -> "SymmetricFunction":
        return cls((value,), basis)

    @classmethod
    def monomial(
        cls,
        partition: Partition | Iterable[int],
        coefficient: Scalar = 1,
        basis: MonomialBasis | None = None,
    ) -> "SymmetricFunction":
        """coefficient * m_partition."""
        basis = basis if basis is not None else DEFAULT_BASIS
        if not isinstance(partition, Partition):
            partition = Partition(partition)
        index = basis.index(partition)
        return cls([0] * index + [coefficient], basis)

    @classmethod
    def power(cls, k: int, basis: MonomialBasis | None = None) -> "SymmetricFunction":
        """p_k = sum t_i^k."""
        if k < 1:
            raise InvalidArgument(f"Power sums are indexed from 1, got {k}")
        return cls.monomial(Partition([k]), basis=basis)

    @classmethod
    def elementary(cls, k: int, basis: MonomialBasis | None = None) -> "SymmetricFunction":
        """e_k = sum over i_1 < ... < i_k of t_{i_1} ... t_{i_k}; e_0 = 1."""
        if k < 0:
            raise InvalidArgument(f"Elementary symmetric functions need k >= 0, got {k}")
        return cls.monomial(Partition([1] * k), basis=basis)

    @classmethod
    def power_prime(cls, k: int, basis: MonomialBasis | None = None) -> "SymmetricFunction":
        """(1/k) * sum over d | k of mu(k/d) p_d."""
        if k < 1:
            raise InvalidArgument(f"power_prime is indexed from 1, got {k}")
        output = cls((), basis)
        for d in divisors(k):
            output = output + moebius(k // d) * cls.power(d, basis)
        return output / k

    # ── access ──────────────────────────────────────────────────

    @property
    def coefficients(self) -> tuple[Fraction, ...]:
        return self._coefficients

    @property
    def basis(self) -> MonomialBasis:
        return self._basis

    def is_zero(self) -> bool:
        return not self._coefficients

    def coefficient(self, partition: Partition | Iterable[int]) -> Fraction:
        if not isinstance(partition, Partition):
            partition = Partition(partition)
        index = self._basis.index(partition)
        if index < len(self._coefficients):
            return self._coefficients[index]
        return Fraction(0)

    def terms(self) -> Iterator[tuple[Partition, Fraction]]:
        """Nonzero (partition, coefficient) pairs in basis order."""
        for i, c in enumerate(self._coefficients):
            if c != 0:
                yield self._basis[i], c

    @property
    def degree(self) -> int:
        """Largest size among terms with a nonzero coefficient (0 for zero)."""
        return max((p.size for p, _ in self.terms()), default=0)

    # ── arithmetic ──────────────────────────────────────────────

    def _coerce(self, other: object) -> "SymmetricFunction | None":
        if isinstance(other, SymmetricFunction):
            if other._basis is not self._basis:
                raise InvalidArgument("Cannot combine symmetric functions from different bases")
            return other
        if isinstance(other, (int, Fraction)) and not isinstance(other, bool):
            return SymmetricFunction.constant(other, self._basis)
        return None

    def __add__(self, other: object) -> "SymmetricFunction":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        a, b = self._coefficients, rhs._coefficients
        if len(a) < len(b):
            a, b = b, a
        return SymmetricFunction(
            (x + (b[i] if i < len(b) else 0) for i, x in enumerate(a)),
            self._basis,
        )

    __radd__ = __add__

    def __neg__(self) -> "SymmetricFunction":
        return SymmetricFunction((-c for c in self._coefficients), self._basis)

    def __sub__(self, other: object) -> "SymmetricFunction":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self + (-rhs)

    def __rsub__(self, other: object) -> "SymmetricFunction":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs - self

    def _scale(self, k: Fraction) -> "SymmetricFunction":
        return SymmetricFunction((c * k for c in self._coefficients), self._basis)

    def _monomial_product(self, i: int, j: int) -> tuple[tuple[Partition, Fraction], ...]:
        if i > j:
            i, j = j, i
        basis = self._basis
        return basis.products.get_or_compute(
            (i, j),
            lambda: tuple(_multiply_monomials(basis[i], basis[j]).items()),
        )

    def __mul__(self, other: object) -> "SymmetricFunction":
        if isinstance(other, (int, Fraction)) and not isinstance(other, bool):
            return self._scale(as_rational(other))
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented

        accumulated: dict[int, Fraction] = {}
        for i, a in enumerate(self._coefficients):
            if a == 0:
                continue
            for j, b in enumerate(rhs._coefficients):
                if b == 0:
                    continue
                for r, weight in self._monomial_product(i, j):
                    k = self._basis.index(r)
                    accumulated[k] = accumulated.get(k, Fraction(0)) + a * b * weight

        if not accumulated:
            return SymmetricFunction((), self._basis)
        values = [Fraction(0)] * (max(accumulated) + 1)
        for k, c in accumulated.items():
            values[k] = c
        return SymmetricFunction(values, self._basis)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> "SymmetricFunction":
        if not isinstance(other, (int, Fraction)) or isinstance(other, bool):
            return NotImplemented
        if other == 0:
            raise DivisionByZero("Cannot divide a symmetric function by zero")
        return self._scale(1 / as_rational(other))

    def __pow__(self, exponent: int) -> "SymmetricFunction":
        if exponent < 0:
            raise InvalidArgument("Symmetric function powers must be nonnegative")
        result = SymmetricFunction.constant(1, self._basis)
        for _ in range(exponent):
            result = result * self
        return result

    # ── value semantics ─────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SymmetricFunction):
            return self._basis is other._basis and self._coefficients == other._coefficients
        if isinstance(other, (int, Fraction)) and not isinstance(other, bool):
            return self._coefficients == SymmetricFunction.constant(other, self._basis)._coefficients
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._coefficients)

    def __str__(self) -> str:
        pieces: list[str] = []
        for partition, c in self.terms():
            if partition.is_empty():
                pieces.append(format_rational(c))
            elif c == 1:
                pieces.append(f"m{partition}")
            else:
                pieces.append(f"{format_rational(c)}*m{partition}")
        return " + ".join(pieces) if pieces else "0"

    def __repr__(self) -> str:
        coefs = ", ".join(format_rational(c) for c in self._coefficients)
        return f"SymmetricFunction([{coefs}])"


def choose(p: SymmetricFunction, k: int) -> SymmetricFunction:
    """p (p - 1) ... (p - k + 1) / k!, the identity for k <= 0."""
    if k <= 0:
        return SymmetricFunction.constant(1, p.basis)
    output = p
    for i in range(1, k):
        output = output * ((p - i) / (i + 1))
    return output
