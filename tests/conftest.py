"""Shared fixtures for rep-stability tests."""

from __future__ import annotations

import random

import pytest

from rep_stability.core.partition import Partition
from rep_stability.core.symmetric import MonomialBasis
from rep_stability.stability.characters import CharacterGenerator
from rep_stability.stability.statistics import StatisticTransform


@pytest.fixture
def basis() -> MonomialBasis:
    """An empty monomial basis, independent of the module default."""
    return MonomialBasis()


@pytest.fixture
def generator() -> CharacterGenerator:
    return CharacterGenerator()


@pytest.fixture
def transform() -> StatisticTransform:
    return StatisticTransform()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(20240917)


@pytest.fixture
def big_class() -> Partition:
    """Cycle type with three fixed points and four 2-cycles."""
    return Partition([4, 3, 2, 2, 2, 2, 1, 1, 1])
