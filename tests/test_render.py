"""Tests for SymPy and Rich rendering."""

from __future__ import annotations

import sympy as sp
from rich.console import Console

from rep_stability.core.character_polynomial import CharacterPolynomial
from rep_stability.core.laurent import LaurentPolynomial
from rep_stability.core.partition import Partition
from rep_stability.pipelines.stable_statistics import rows_for_size
from rep_stability.reports.render import (
    char_poly_to_latex,
    char_poly_to_sympy,
    laurent_to_latex,
    laurent_to_sympy,
    render_statistics_table,
    z,
)
from rep_stability.stability.characters import part_to_char_poly


class TestLaurent:
    def test_to_sympy(self) -> None:
        series = LaurentPolynomial([2, 0, -1], lead=-1)
        assert sp.simplify(laurent_to_sympy(series) - (2 / z - z)) == 0

    def test_latex_descending(self) -> None:
        assert laurent_to_latex(LaurentPolynomial([1, 0, 3])) == "3 z^{2} + 1"

    def test_latex_zero(self) -> None:
        assert laurent_to_latex(LaurentPolynomial.zero()) == "0"


class TestCharacterPolynomial:
    def test_matches_evaluate(self, big_class: Partition) -> None:
        chi = part_to_char_poly(Partition([2, 1]))
        expr = char_poly_to_sympy(chi)
        counts = {sp.Symbol(f"X_{k}"): n for k, n in enumerate(big_class.cycles, start=1)}
        value = chi.evaluate(big_class)
        assert expr.subs(counts) == sp.Rational(value.numerator, value.denominator)

    def test_expands_to_polynomial(self) -> None:
        chi = CharacterPolynomial([Partition([1, 1])], [1])
        x = sp.Symbol("X_1")
        assert sp.expand(sp.expand_func(char_poly_to_sympy(chi))) == sp.expand(x * (x - 1) / 2)

    def test_constant(self) -> None:
        assert char_poly_to_sympy(CharacterPolynomial.constant(3)) == 3
        assert char_poly_to_latex(CharacterPolynomial([], [])) == "0"


class TestTable:
    def test_renders_rows(self) -> None:
        console = Console(record=True, width=120)
        render_statistics_table(rows_for_size(3, 4), console=console, columns=3)
        text = console.export_text()
        assert "Stable Statistics" in text
        assert "[2,1]" in text
        assert "z^2" in text
        assert "z^3" not in text
