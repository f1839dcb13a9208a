"""Tests for symmetric functions in the monomial basis."""

from __future__ import annotations

import random
from fractions import Fraction

import pytest

from rep_stability.core.errors import InvalidArgument
from rep_stability.core.partition import Partition, partition_count
from rep_stability.core.symmetric import MonomialBasis, SymmetricFunction, choose


def S(basis: MonomialBasis, *coefficients: int | Fraction) -> SymmetricFunction:
    return SymmetricFunction(coefficients, basis)


def m(basis: MonomialBasis, *parts: int) -> SymmetricFunction:
    return SymmetricFunction.monomial(Partition(parts), basis=basis)


class TestMonomialBasis:
    def test_initial_order(self, basis: MonomialBasis) -> None:
        basis.extend_to_degree(4)
        assert [basis[i].parts for i in range(8)] == [
            (), (1,), (2,), (1, 1), (3,), (2, 1), (1, 1, 1), (4,),
        ]

    def test_grows_whole_degrees(self, basis: MonomialBasis) -> None:
        basis.ensure_length(5)
        assert basis.complete_degree == 3
        assert len(basis) == sum(partition_count(n) for n in range(4))

    def test_index_extends_on_demand(self, basis: MonomialBasis) -> None:
        assert len(basis) == 1
        assert basis.index(Partition([2, 1])) == 5
        assert basis.index(Partition()) == 0
        assert basis.complete_degree == 3

    def test_indices_never_move(self, basis: MonomialBasis) -> None:
        before = basis.index(Partition([3, 1]))
        basis.extend_to_degree(9)
        assert basis.index(Partition([3, 1])) == before
        assert basis[before] == Partition([3, 1])

    def test_index_round_trip(self, basis: MonomialBasis) -> None:
        basis.extend_to_degree(6)
        for i in range(len(basis)):
            assert basis.index(basis[i]) == i


class TestConstruction:
    def test_trailing_zeros(self, basis: MonomialBasis) -> None:
        assert S(basis, 1, 2, 0, 0).coefficients == (1, 2)
        assert S(basis).is_zero()
        assert S(basis, 0, 0).is_zero()

    def test_generators(self, basis: MonomialBasis) -> None:
        assert SymmetricFunction.power(2, basis) == S(basis, 0, 0, 1)
        assert SymmetricFunction.elementary(2, basis) == S(basis, 0, 0, 0, 1)
        assert SymmetricFunction.elementary(0, basis) == S(basis, 1)

    def test_power_prime(self, basis: MonomialBasis) -> None:
        assert 4 * SymmetricFunction.power_prime(4, basis) == S(basis, 0, 0, -1, 0, 0, 0, 0, 1)

    def test_bad_generator_index(self, basis: MonomialBasis) -> None:
        with pytest.raises(InvalidArgument):
            SymmetricFunction.power(0, basis)
        with pytest.raises(InvalidArgument):
            SymmetricFunction.elementary(-1, basis)

    def test_coefficient_lookup(self, basis: MonomialBasis) -> None:
        f = S(basis, 4, 4, 1, 2)
        assert f.coefficient(Partition([1, 1])) == 2
        assert f.coefficient([3, 2]) == 0
        assert list(f.terms()) == [
            (Partition(), 4), (Partition([1]), 4), (Partition([2]), 1), (Partition([1, 1]), 2),
        ]
        assert f.degree == 2

    def test_str(self, basis: MonomialBasis) -> None:
        assert str(S(basis, 4, 4, 1, 2)) == "4 + 4*m[1] + m[2] + 2*m[1, 1]"
        assert str(S(basis)) == "0"


class TestMonomialProducts:
    def test_m1_squared(self, basis: MonomialBasis) -> None:
        assert m(basis, 1) * m(basis, 1) == m(basis, 2) + 2 * m(basis, 1, 1)

    def test_m11_times_m1(self, basis: MonomialBasis) -> None:
        assert m(basis, 1, 1) * m(basis, 1) == m(basis, 2, 1) + 3 * m(basis, 1, 1, 1)

    def test_m2_times_m1(self, basis: MonomialBasis) -> None:
        assert m(basis, 2) * m(basis, 1) == m(basis, 3) + m(basis, 2, 1)

    def test_m11_squared(self, basis: MonomialBasis) -> None:
        expected = m(basis, 2, 2) + 2 * m(basis, 2, 1, 1) + 6 * m(basis, 1, 1, 1, 1)
        assert m(basis, 1, 1) * m(basis, 1, 1) == expected

    def test_constant_is_identity(self, basis: MonomialBasis) -> None:
        f = m(basis, 2, 1)
        assert S(basis, 1) * f == f
        assert (S(basis) * f).is_zero()

    def test_products_are_cached(self, basis: MonomialBasis) -> None:
        m(basis, 2) * m(basis, 1)
        computed = len(basis.products)
        m(basis, 1) * m(basis, 2)
        assert len(basis.products) == computed
        assert basis.products.hits >= 1


class TestMultiplication:
    def test_square_of_binomial(self, basis: MonomialBasis) -> None:
        f = S(basis, 2, 1)
        assert f * f == S(basis, 4, 4, 1, 2)

    def test_rational_coefficients(self, basis: MonomialBasis) -> None:
        a = S(basis, Fraction(2, 7), Fraction(-1, 2))
        b = S(basis, Fraction(-4, 3), 7)
        assert a * b == S(basis, Fraction(-8, 21), Fraction(8, 3), Fraction(-7, 2), -7)

    def test_large_product(self, basis: MonomialBasis) -> None:
        a = S(basis, 1, 0, -2, 0, 0, 0, 1, 1)
        b = S(basis, 0, 1, 0, 1, 1)
        expected = S(
            basis,
            0, 1, 0, 1, -1, -2, 0, 0, -2, 0, -1, 4, -1, 1, -2, 0, 1, 3, 10, 0,
            1, 0, 2, 0, 0, 1, 0, 0, 0, 0, 1, 0, 0, 0, 1,
        )
        assert a * b == expected

    def test_newton_identity(self, basis: MonomialBasis) -> None:
        e1 = SymmetricFunction.elementary(1, basis)
        e2 = SymmetricFunction.elementary(2, basis)
        assert e1 * e1 - 2 * e2 == SymmetricFunction.power(2, basis)

    def test_power_sums_times_elementary(self, basis: MonomialBasis) -> None:
        # p_1 e_2 = m_21 + 3 e_3
        p1 = SymmetricFunction.power(1, basis)
        e2 = SymmetricFunction.elementary(2, basis)
        e3 = SymmetricFunction.elementary(3, basis)
        assert p1 * e2 == m(basis, 2, 1) + 3 * e3

    def test_choose(self, basis: MonomialBasis) -> None:
        assert 6 * choose(S(basis, 1, 1), 3) == S(basis, 0, -1, 0, 0, 1, 3, 6)

    def test_choose_identity(self, basis: MonomialBasis) -> None:
        assert choose(S(basis, 3, 1), 0) == S(basis, 1)
        assert choose(S(basis, 3, 1), -2) == S(basis, 1)

    def test_power(self, basis: MonomialBasis) -> None:
        f = S(basis, 2, 1)
        assert f ** 2 == f * f
        assert f ** 0 == S(basis, 1)


def _random_element(basis: MonomialBasis, rng: random.Random) -> SymmetricFunction:
    f = SymmetricFunction.constant(rng.randint(-2, 2), basis)
    for _ in range(2):
        k = rng.randint(1, 2)
        gen = SymmetricFunction.power(k, basis) if rng.random() < 0.5 else SymmetricFunction.elementary(k, basis)
        f = f + rng.randint(-3, 3) * gen
    return f


class TestRingLaws:
    def test_commutative(self, basis: MonomialBasis, rng: random.Random) -> None:
        for _ in range(15):
            a, b = _random_element(basis, rng), _random_element(basis, rng)
            assert a * b == b * a

    def test_associative(self, basis: MonomialBasis, rng: random.Random) -> None:
        for _ in range(10):
            a, b, c = (_random_element(basis, rng) for _ in range(3))
            assert (a * b) * c == a * (b * c)

    def test_distributive(self, basis: MonomialBasis, rng: random.Random) -> None:
        for _ in range(10):
            a, b, c = (_random_element(basis, rng) for _ in range(3))
            assert a * (b + c) == a * b + a * c


class TestRegistries:
    def test_cannot_mix_bases(self, basis: MonomialBasis) -> None:
        other = MonomialBasis()
        with pytest.raises(InvalidArgument):
            S(basis, 1, 1) + S(other, 1, 1)
        with pytest.raises(InvalidArgument):
            S(basis, 1, 1) * S(other, 1, 1)

    def test_default_basis(self) -> None:
        f = SymmetricFunction.power(1)
        assert f * f == SymmetricFunction.power(2) + 2 * SymmetricFunction.elementary(2)
