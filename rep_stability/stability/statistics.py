"""Character polynomial -> limiting statistic as a truncated series in z = 1/q.

For a character polynomial P the statistic

    lim_{n -> oo} q^(-n) * sum over squarefree monic f of degree n over F_q of P(f)

is a power series in z. Term by term,

    (X_1 C j_1) ... (X_r C j_r)  ->  (1 - z) * prod_k Inv(C(M_k(q), j_k)) * (z^k - z^2k + ...)^j_k

where M_k is the Moebius sum (number of monic irreducibles of degree k) and
Inv substitutes q -> 1/z. Every product is truncated at max_degree.
"""

from __future__ import annotations

from rep_stability.core.character_polynomial import CharacterPolynomial
from rep_stability.core.errors import InvalidArgument
from rep_stability.core.laurent import LaurentPolynomial
from rep_stability.core.memo import PrecisionCache
from rep_stability.core.partition import Partition, coef_of_power_series
from rep_stability.core.polynomial import choose_moebius_sum
from rep_stability.stability.characters import part_to_char_poly

ONE_MINUS_Z = LaurentPolynomial((1, -1))


def mult_by_power_series(poly: LaurentPolynomial, max_degree: int, k: int, j: int) -> LaurentPolynomial:
    """poly * (z^k - z^2k + z^3k - ...)^j, exact through z^max_degree."""
    highest = (max_degree - poly.lead) // k
    series = LaurentPolynomial.zero()
    for l in range(j, highest + 1):
        series = series + LaurentPolynomial.monomial(l, coef_of_power_series(l, j))
    series = series.raise_z_to_ith_power(k)
    return (series * poly).round_to_nth_degree(max_degree)


class StatisticTransform:
    """Computes statistics with per-term and per-factor memoisation.

    Cached series are stored with the max_degree they were computed to and
    reused for any request of equal or lower precision.
    """

    def __init__(self) -> None:
        self.terms: PrecisionCache[LaurentPolynomial] = PrecisionCache("statistic_terms")
        self.factors: PrecisionCache[LaurentPolynomial] = PrecisionCache("statistic_factors")

    def factor_series(self, k: int, j: int, max_degree: int) -> LaurentPolynomial:
        """Series for the single binomial factor (X_k C j)."""
        key = Partition([k] * j)
        cached = self.factors.lookup(key, max_degree)
        if cached is not None:
            return cached.round_to_nth_degree(max_degree)

        choose = LaurentPolynomial(choose_moebius_sum(k, j).coefficients)
        series = mult_by_power_series(choose.formally_invert(), max_degree, k, j)
        return self.factors.store(key, series, max_degree)

    def term_series(self, term: Partition, max_degree: int) -> LaurentPolynomial:
        """Series for a product of binomial factors, without its coefficient."""
        cached = self.terms.lookup(term, max_degree)
        if cached is not None:
            return cached.round_to_nth_degree(max_degree)

        series = LaurentPolynomial.one()
        for k, j in enumerate(term.cycles, start=1):
            if j == 0:
                continue
            series = (series * self.factor_series(k, j, max_degree)).round_to_nth_degree(max_degree)
        return self.terms.store(term, series, max_degree)

    def char_poly_to_pow_series(self, chi: CharacterPolynomial, max_degree: int) -> LaurentPolynomial:
        if max_degree < 0:
            raise InvalidArgument(f"max_degree must be nonnegative, got {max_degree}")

        total = LaurentPolynomial.zero()
        for term, coefficient in chi:
            total = total + self.term_series(term, max_degree) * coefficient
        return (total * ONE_MINUS_Z).round_to_nth_degree(max_degree)

    def clear(self) -> None:
        self.terms.clear()
        self.factors.clear()


_DEFAULT = StatisticTransform()


def char_poly_to_pow_series(chi: CharacterPolynomial, max_degree: int) -> LaurentPolynomial:
    return _DEFAULT.char_poly_to_pow_series(chi, max_degree)


def young_to_series(partition: Partition, max_degree: int = 10) -> LaurentPolynomial:
    """Statistic of the irreducible family V(partition), through z^max_degree."""
    return char_poly_to_pow_series(part_to_char_poly(partition), max_degree)
