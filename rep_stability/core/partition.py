"""Integer partitions and partition enumeration.

A Partition holds two interconvertible views of the same multiset:

  parts  - nonincreasing tuple of positive integers, e.g. (5, 2, 2, 2, 1, 1)
  cycles - multiplicity of each part size, 1-indexed, e.g. (2, 3, 0, 0, 1)

Either view may be supplied at construction; the other is derived on first
access and kept. The empty partition is () in both views.

Partitions are totally ordered by size, then reverse-lexicographically on the
parts, so that [3] < [4] < [3, 1] < [1, 1, 1, 1] < [5]. This is also the order
in which all_partitions() enumerates a fixed size.
"""

from __future__ import annotations

import operator
import re
from collections.abc import Iterable, Iterator, Sequence
from fractions import Fraction
from functools import total_ordering

from rep_stability.core.arithmetic import binomial_coefficient, generalized_pentagonal
from rep_stability.core.errors import InvalidArgument
from rep_stability.core.memo import PrecisionCache


def _as_int(value: object) -> int:
    try:
        return operator.index(value)  # type: ignore[arg-type]
    except TypeError:
        raise InvalidArgument(f"Partition entries must be integers, got {value!r}") from None


@total_ordering
class Partition:
    """Immutable integer partition with lazily derived cycle type."""

    __slots__ = ("_parts", "_cycles")

    def __init__(self, parts: Iterable[int] = ()) -> None:
        values = tuple(_as_int(p) for p in parts)
        for i, p in enumerate(values):
            if p <= 0:
                raise InvalidArgument(f"Partition parts must be positive, got {list(values)}")
            if i > 0 and p > values[i - 1]:
                raise InvalidArgument(f"Partition parts must be nonincreasing, got {list(values)}")
        self._parts: tuple[int, ...] | None = values
        self._cycles: tuple[int, ...] | None = None

    @classmethod
    def from_cycles(cls, cycles: Iterable[int]) -> "Partition":
        """Build from a cycle type: cycles[i] is the number of parts equal to i + 1."""
        counts = [_as_int(c) for c in cycles]
        if any(c < 0 for c in counts):
            raise InvalidArgument(f"Cycle counts must be nonnegative, got {counts}")
        while counts and counts[-1] == 0:
            counts.pop()
        obj = cls.__new__(cls)
        obj._parts = None
        obj._cycles = tuple(counts)
        return obj

    @classmethod
    def from_multiplicities(cls, pairs: Iterable[tuple[int, int]]) -> "Partition":
        """Build from (part size, multiplicity) pairs, e.g. [(4, 2), (1, 3)] -> [4, 4, 1, 1, 1]."""
        parts: list[int] = []
        for size, count in pairs:
            size, count = _as_int(size), _as_int(count)
            if count < 0:
                raise InvalidArgument(f"Multiplicity must be nonnegative, got {count}")
            if count and size <= 0:
                raise InvalidArgument(f"Cycle sizes must be positive, got {size}")
            parts.extend([size] * count)
        parts.sort(reverse=True)
        return cls(parts)

    # ── views ────────────────────────────────────────────────────

    @property
    def parts(self) -> tuple[int, ...]:
        if self._parts is None:
            assert self._cycles is not None
            self._parts = tuple(
                size
                for size in range(len(self._cycles), 0, -1)
                for _ in range(self._cycles[size - 1])
            )
        return self._parts

    @property
    def cycles(self) -> tuple[int, ...]:
        if self._cycles is None:
            assert self._parts is not None
            if not self._parts:
                self._cycles = ()
            else:
                counts = [0] * self._parts[0]
                for p in self._parts:
                    counts[p - 1] += 1
                self._cycles = tuple(counts)
        return self._cycles

    def cycle_count(self, size: int) -> int:
        """Number of parts equal to `size` (1-indexed)."""
        cycles = self.cycles
        if 1 <= size <= len(cycles):
            return cycles[size - 1]
        return 0

    @property
    def size(self) -> int:
        return sum(self.parts)

    @property
    def length(self) -> int:
        return len(self.parts)

    def is_empty(self) -> bool:
        return not self.parts

    # ── value semantics ─────────────────────────────────────────

    def sort_key(self) -> tuple[int, tuple[int, ...]]:
        return self.size, tuple(-p for p in self.parts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Partition):
            return NotImplemented
        return self.parts == other.parts

    def __lt__(self, other: "Partition") -> bool:
        if not isinstance(other, Partition):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self) -> int:
        return hash(self.parts)

    def __len__(self) -> int:
        return len(self.parts)

    def __iter__(self) -> Iterator[int]:
        return iter(self.parts)

    def __getitem__(self, index: int) -> int:
        return self.parts[index]

    def to_string(self, separator: str = ", ") -> str:
        return "[" + separator.join(str(p) for p in self.parts) + "]"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Partition({list(self.parts)})"


def parse_partition(text: str) -> Partition:
    """Parse "3,1,1", "[3, 1, 1]" or "3 1 1". Blank input is the empty partition."""
    tokens = [t for t in re.split(r"[\s,\[\]()]+", text) if t]
    try:
        parts = [int(t) for t in tokens]
    except ValueError:
        raise InvalidArgument(f"Cannot parse partition from {text!r}") from None
    return Partition(parts)


# ── enumeration ──────────────────────────────────────────────────


def all_partitions(n: int) -> Iterator[Partition]:
    """All partitions of n in the order (n), (n-1, 1), (n-2, 2), (n-2, 1, 1), ...

    Iterative: a stack of parts is greedily filled, then the last part is
    decremented and exhausted parts are popped.
    """
    if n < 0:
        return
    if n == 0:
        yield Partition()
        return

    stack = [n]
    total = n
    while stack[0] > 0:
        k = min(n - total, stack[-1])
        if k > 0:
            stack.append(k)
            total += k
            continue

        if total == n:
            yield Partition(stack)

        stack[-1] -= 1
        total -= 1
        while len(stack) > 1 and stack[-1] <= 0:
            stack.pop()
            stack[-1] -= 1
            total -= 1


def k_partitions(n: int, k: int, min_part: int = 1) -> Iterator[Partition]:
    """Partitions of n into exactly k parts, each at least min_part."""
    if k < 1:
        return
    if k == 1:
        if n >= min_part:
            yield Partition([n])
        return

    for smallest in range(min_part, n + 1):
        for rest in k_partitions(n - smallest, k - 1, smallest):
            yield Partition(rest.parts + (smallest,))


def all_partition_lists(sizes: Sequence[int]) -> Iterator[tuple[Partition, ...]]:
    """Cross product of all_partitions(sizes[i]); the first entry varies fastest."""
    sizes = list(sizes)
    if not sizes or any(s < 0 for s in sizes):
        return
    if len(sizes) == 1:
        for part in all_partitions(sizes[0]):
            yield (part,)
        return

    for last in all_partitions(sizes[-1]):
        for head in all_partition_lists(sizes[:-1]):
            yield head + (last,)


# ── counting ─────────────────────────────────────────────────────

_PARTITION_COUNTS: PrecisionCache[int] = PrecisionCache("partition_counts")


def _next_partition_count(n: int) -> int:
    """p(n) from the table p(0..n-1) via Euler's pentagonal recurrence."""
    if n == 0:
        return 1
    total = 0
    k = 1
    while True:
        g, g_prime = generalized_pentagonal(k)
        if g > n:
            break
        term = _PARTITION_COUNTS.entry(n - g).value
        if g_prime <= n:
            term += _PARTITION_COUNTS.entry(n - g_prime).value
        total += term if k % 2 == 1 else -term
        k += 1
    return total


def partition_count(n: int) -> int:
    """Number of partitions of n (0 for negative n)."""
    if n < 0:
        return 0
    if n in _PARTITION_COUNTS:
        return _PARTITION_COUNTS.entry(n).value

    first_missing = n
    while first_missing > 0 and first_missing - 1 not in _PARTITION_COUNTS:
        first_missing -= 1
    for m in range(first_missing, n + 1):
        _PARTITION_COUNTS.store(m, _next_partition_count(m))
    return _PARTITION_COUNTS.entry(n).value


def iter_partition_counts() -> Iterator[int]:
    """p(0), p(1), p(2), ... without end."""
    n = 0
    while True:
        yield partition_count(n)
        n += 1


_POWER_SERIES_COEFS: PrecisionCache[Fraction] = PrecisionCache("power_series_coefs")


def coef_of_power_series(l: int, j: int) -> Fraction:
    """Coefficient of z^l in (z - z^2 + z^3 - ...)^j, i.e. (-1)^(l-j) C(l-1, l-j)."""
    if l < 0 or j < 0:
        raise InvalidArgument(f"Arguments must be nonnegative, got ({l}, {j})")

    def compute() -> Fraction:
        if j == 0:
            return Fraction(1 if l == 0 else 0)
        if l < j:
            return Fraction(0)
        sign = -1 if (l - j) % 2 else 1
        return Fraction(sign * binomial_coefficient(l - 1, l - j))

    return _POWER_SERIES_COEFS.get_or_compute((l, j), compute)
