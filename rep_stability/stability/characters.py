"""Stable character polynomials of symmetric-group irreducibles.

For a partition lambda, the family of S_n irreducibles V(lambda)_n (lambda with
a long first row of n - |lambda| boxes added) has a character given, for all n,
by one character polynomial. It is assembled from the branching rule

    chi_lambda = sum over i, rho |- i of
                 (-1)^(|lambda| - i) * (sum over mu of chi^mu(rho)) * (X C rho)

where mu ranges over partitions of i with lambda / mu a vertical strip
(Macdonald, I.7 ex. 14). The values chi^mu(rho) come from the recursive
Murnaghan-Nakayama rule.
"""

from __future__ import annotations

from fractions import Fraction

from rep_stability.core.character_polynomial import CharacterPolynomial
from rep_stability.core.errors import InvalidArgument
from rep_stability.core.memo import PrecisionCache
from rep_stability.core.partition import Partition, all_partitions


def is_vertical_strip(outer: Partition, inner: Partition) -> bool:
    """True when outer / inner has at most one box in every row."""
    big, small = outer.parts, inner.parts
    if len(small) > len(big):
        return False
    for j, part in enumerate(small):
        if not 0 <= big[j] - part <= 1:
            return False
    return all(part <= 1 for part in big[len(small):])


def vertical_strip_removals(partition: Partition, size: int) -> list[Partition]:
    """Every mu |- size with partition / mu a vertical strip."""
    return [mu for mu in all_partitions(size) if is_vertical_strip(partition, mu)]


def border_strip_removals(mu: Partition, strip_size: int) -> list[tuple[Partition, int]]:
    """(mu minus strip, height) for every border strip of strip_size boxes.

    A border strip is fixed by its top row: it starts at the end of that row
    and follows the rim downwards, taking from each row just enough boxes to
    reach the next row's length. A strip that would leave a row shorter than
    the row beneath it is not a strip.
    """
    rows = mu.parts
    found: list[tuple[Partition, int]] = []

    for start in range(len(rows)):
        taken: list[int] = []
        total = 0
        i = start
        while total < strip_size:
            if i == len(rows):
                break
            remaining = strip_size - total
            if i == len(rows) - 1:
                taken.append(min(rows[-1], remaining))
            else:
                overhang = rows[i] - rows[i + 1] + 1
                if remaining == overhang:
                    break
                taken.append(min(overhang, remaining))
            total += taken[-1]
            i += 1

        if total < strip_size:
            continue

        remainder = list(rows)
        for offset, boxes in enumerate(taken):
            remainder[start + offset] -= boxes
        found.append((Partition(r for r in remainder if r > 0), len(taken)))

    return found


class CharacterGenerator:
    """Murnaghan-Nakayama character values and stable character polynomials.

    Both results are memoised for the lifetime of the generator.
    """

    def __init__(self) -> None:
        self.characters: PrecisionCache[Fraction] = PrecisionCache("irreducible_characters")
        self.polynomials: PrecisionCache[CharacterPolynomial] = PrecisionCache(
            "character_polynomials"
        )

    def irreducible_character(self, mu: Partition, rho: Partition) -> Fraction:
        """chi^mu evaluated at the conjugacy class of cycle type rho."""
        if mu.size != rho.size:
            raise InvalidArgument(f"mu and rho must have the same size, got {mu} and {rho}")

        cached = self.characters.lookup((mu, rho))
        if cached is not None:
            return cached

        if mu.is_empty():
            return self.characters.store((mu, rho), Fraction(1))

        rest = Partition(rho.parts[1:])
        value = Fraction(0)
        for smaller, height in border_strip_removals(mu, rho[0]):
            sign = 1 if height % 2 else -1
            value += sign * self.irreducible_character(smaller, rest)
        return self.characters.store((mu, rho), value)

    def part_to_char_poly(self, partition: Partition) -> CharacterPolynomial:
        """Character polynomial of the family V(partition)."""
        cached = self.polynomials.lookup(partition)
        if cached is not None:
            return cached

        size = partition.size
        terms: list[Partition] = []
        coefficients: list[Fraction] = []
        for i in range(size + 1):
            removals = vertical_strip_removals(partition, i)
            for rho in all_partitions(i):
                coef = sum(
                    (self.irreducible_character(mu, rho) for mu in removals),
                    Fraction(0),
                )
                if (size - i) % 2 == 1:
                    coef = -coef
                if coef == 0:
                    continue
                terms.append(rho)
                coefficients.append(coef)

        return self.polynomials.store(partition, CharacterPolynomial(terms, coefficients))

    def clear(self) -> None:
        self.characters.clear()
        self.polynomials.clear()


_DEFAULT = CharacterGenerator()


def part_to_char_poly(partition: Partition) -> CharacterPolynomial:
    return _DEFAULT.part_to_char_poly(partition)


def irreducible_character(mu: Partition, rho: Partition) -> Fraction:
    return _DEFAULT.irreducible_character(mu, rho)
