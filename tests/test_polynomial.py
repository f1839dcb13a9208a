"""Tests for univariate polynomials, GCD and Moebius sums."""

from __future__ import annotations

import random
from fractions import Fraction

import pytest

from rep_stability.core.errors import DivisionByZero, InvalidArgument
from rep_stability.core.polynomial import (
    Polynomial,
    choose,
    choose_moebius_sum,
    gcd,
    moebius_sum,
)


def P(*coefficients: int | Fraction) -> Polynomial:
    return Polynomial(coefficients)


class TestNormalization:
    def test_trailing_zeros_dropped(self) -> None:
        assert P(1, 2, 0, 0).coefficients == (1, 2)

    def test_zero(self) -> None:
        assert Polynomial().is_zero()
        assert P(0, 0).coefficients == (0,)
        assert Polynomial([]).is_zero()
        assert Polynomial().degree == 0

    def test_monomial(self) -> None:
        assert Polynomial.monomial(3) == P(0, 0, 0, 1)
        with pytest.raises(InvalidArgument):
            Polynomial.monomial(-1)


class TestRing:
    def test_subtract(self) -> None:
        assert P(4, 1, 0, 1) - P(1, -1) == P(3, 2, 0, 1)

    def test_multiply(self) -> None:
        assert P(4, 1, 0, 1) * P(1, -1) == P(4, -3, -1, 1, -1)

    def test_scalar_arithmetic(self) -> None:
        assert 2 * P(1, 1) == P(2, 2)
        assert P(1, 1) + 1 == P(2, 1)
        assert 1 - P(1, 1) == P(0, -1)
        assert P(2, 4) / 4 == P(Fraction(1, 2), 1)

    def test_scalar_division_by_zero(self) -> None:
        with pytest.raises(DivisionByZero):
            P(1, 1) / 0

    def test_power(self) -> None:
        assert P(1, 1) ** 3 == P(1, 3, 3, 1)
        assert P(5, 7) ** 0 == P(1)

    def test_evaluate(self) -> None:
        assert P(1, -3, 2)(2) == 3
        assert P(0, 1)(Fraction(1, 3)) == Fraction(1, 3)

    def test_str(self) -> None:
        assert str(P(1, 0, -2, 1)) == "q^3 - 2*q^2 + 1"
        assert str(P(Fraction(-1, 2), 1)) == "q - 1/2"
        assert str(P(0, -1)) == "-q"
        assert str(Polynomial()) == "0"


class TestDivision:
    def test_exact(self) -> None:
        quotient, remainder = divmod(P(-2, 1, 0, 1), P(1, -1))
        assert quotient == P(-2, -1, -1)
        assert remainder.is_zero()

    def test_with_remainder(self) -> None:
        quotient, remainder = divmod(P(2, 1, 0, 1), P(1, -1))
        assert quotient == P(-2, -1, -1)
        assert remainder == P(4)

    def test_operators(self) -> None:
        assert P(2, 1, 0, 1) // P(1, -1) == P(-2, -1, -1)
        assert P(2, 1, 0, 1) % P(1, -1) == P(4)

    def test_smaller_dividend(self) -> None:
        quotient, remainder = divmod(P(1, 1), P(0, 0, 1))
        assert quotient.is_zero()
        assert remainder == P(1, 1)

    def test_by_constant(self) -> None:
        quotient, remainder = divmod(P(2, 4), P(2))
        assert quotient == P(1, 2)
        assert remainder.is_zero()

    def test_by_zero(self) -> None:
        with pytest.raises(DivisionByZero):
            divmod(P(1, 1), Polynomial())

    def test_division_identity(self) -> None:
        rng = random.Random(7)
        for _ in range(40):
            f = Polynomial(rng.randint(-5, 5) for _ in range(rng.randint(1, 7)))
            g = Polynomial(rng.randint(-5, 5) for _ in range(rng.randint(1, 4)))
            if g.is_zero():
                continue
            q, r = divmod(f, g)
            assert q * g + r == f
            assert r.is_zero() or r.degree < g.degree


class TestGcd:
    def test_common_factor(self) -> None:
        assert gcd(P(-2, 1, 0, 1), P(1, -1)) == P(-1, 1)

    def test_argument_order(self) -> None:
        assert gcd(P(1, -1), P(-2, 1, 0, 1)) == P(-1, 1)

    def test_coprime(self) -> None:
        assert gcd(P(1, 1), P(-1, 1)) == P(1)

    def test_constants(self) -> None:
        assert gcd(P(3), P(5)) == P(1)
        assert gcd(Polynomial(), Polynomial()) == P(1)

    def test_monic(self) -> None:
        g = gcd(P(2, 4) * P(3, 1), P(6, 2) * P(0, 5))
        assert g == P(3, 1)


class TestMoebiusSums:
    def test_moebius_sum(self) -> None:
        assert 4 * moebius_sum(4) == P(0, 0, -1, 0, 1)
        assert 12 * moebius_sum(12) == P(0, 0, 1, 0, -1, 0, -1, 0, 0, 0, 0, 0, 1)

    def test_moebius_sum_counts_irreducibles(self) -> None:
        # monic irreducible polynomials over F_2 of degree 1..5
        assert [moebius_sum(k)(2) for k in range(1, 6)] == [2, 1, 2, 3, 6]

    def test_nonpositive_index(self) -> None:
        assert moebius_sum(0) == P(1)

    def test_choose_moebius_sum(self) -> None:
        m = moebius_sum(2)
        assert choose_moebius_sum(2, 0) == P(1)
        assert choose_moebius_sum(2, 1) == m
        assert choose_moebius_sum(2, 3) == choose(m, 3)

    def test_choose_moebius_sum_negative(self) -> None:
        with pytest.raises(InvalidArgument):
            choose_moebius_sum(-1, 2)
        with pytest.raises(InvalidArgument):
            choose_moebius_sum(2, -1)


class TestChoose:
    def test_identity_for_nonpositive(self) -> None:
        assert choose(P(0, 1), 0) == P(1)
        assert choose(P(0, 1), -3) == P(1)

    def test_binomial_values(self) -> None:
        c = choose(P(0, 1), 3)
        assert [c(n) for n in range(6)] == [0, 0, 0, 1, 4, 10]
