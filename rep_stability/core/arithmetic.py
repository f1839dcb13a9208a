"""Integer combinatorics and number theory used across the core.

SymPy is only imported here (and in reports/): factorisation and divisor
enumeration go through ``sympy.ntheory``; everything else is plain integer
arithmetic.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable

from sympy import divisors as _sympy_divisors
from sympy import factorint

from rep_stability.core.errors import InvalidArgument


def factorial(n: int) -> int:
    if n < 0:
        raise InvalidArgument("Factorial only makes sense with nonnegative numbers")
    return math.factorial(n)


def binomial(n: int, k: int) -> int:
    """n choose k, or 0 when either argument is negative or k > n."""
    if n < 0 or k < 0 or k > n:
        return 0
    return math.comb(n, k)


def binomial_coefficient(n: int, k: int) -> int:
    """Strict n choose k: requires n >= 0 and 0 <= k <= n."""
    if n < 0:
        raise InvalidArgument(f"n must be nonnegative, got {n}")
    if k < 0 or k > n:
        raise InvalidArgument(f"k must be between 0 and {n}, got {k}")
    return math.comb(n, k)


def multinomial(n: int, ks: Iterable[int]) -> int:
    """n! / (k_1! k_2! ...), or 0 when an argument is negative or sum(k) > n."""
    ks = list(ks)
    if n < 0 or any(k < 0 for k in ks) or sum(ks) > n:
        return 0
    denom = 1
    for k in ks:
        denom *= math.factorial(k)
    return math.factorial(n) // denom


def placements(exponents: Iterable[int], slots: int) -> int:
    """Ways to lay a multiset of exponents onto `slots` ordered variables.

    slots! / (slots - len)! divided by the factorial of each multiplicity.
    An empty multiset has exactly one placement.
    """
    exponents = list(exponents)
    if not exponents:
        return 1
    result = math.perm(slots, len(exponents))
    for multiplicity in Counter(exponents).values():
        result //= math.factorial(multiplicity)
    return result


def moebius(n: int) -> int:
    """Möbius function; 0 for n <= 0."""
    if n <= 0:
        return 0
    factors = factorint(n)
    if any(e > 1 for e in factors.values()):
        return 0
    return -1 if len(factors) % 2 else 1


def divisors(n: int) -> list[int]:
    """Positive divisors of n in increasing order (empty for n <= 0)."""
    if n <= 0:
        return []
    return [int(d) for d in _sympy_divisors(n)]


def generalized_pentagonal(k: int) -> tuple[int, int]:
    """The pair k(3k-1)/2, k(3k+1)/2."""
    return k * (3 * k - 1) // 2, k * (3 * k + 1) // 2
