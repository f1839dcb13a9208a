"""SymPy and Rich rendering of statistics and character polynomials.

This is one of two places where SymPy is allowed (the other is core/arithmetic.py).
"""

from __future__ import annotations

from fractions import Fraction

import sympy as sp
from rich.console import Console
from rich.table import Table

from rep_stability.core.character_polynomial import CharacterPolynomial
from rep_stability.core.laurent import LaurentPolynomial
from rep_stability.pipelines.stable_statistics import StatisticRow

z = sp.Symbol("z")


def _rational(c: Fraction) -> sp.Rational:
    return sp.Rational(c.numerator, c.denominator)


def laurent_to_sympy(series: LaurentPolynomial, symbol: sp.Symbol = z) -> sp.Expr:
    """sum c_e * symbol**e as a SymPy expression."""
    return sp.Add(
        *(_rational(c) * symbol ** (series.lead + i) for i, c in enumerate(series.coefficients) if c != 0)
    )


def laurent_to_latex(series: LaurentPolynomial) -> str:
    """LaTeX in descending powers of z."""
    if series.is_zero():
        return "0"
    return sp.latex(laurent_to_sympy(series), order="lex")


def char_poly_to_sympy(chi: CharacterPolynomial) -> sp.Expr:
    """sum c * prod binomial(X_k, a_k) with one symbol X_k per cycle length."""
    expr = sp.Integer(0)
    for term, c in chi:
        product = _rational(c)
        for k, a in enumerate(term.cycles, start=1):
            if a:
                product *= sp.binomial(sp.Symbol(f"X_{k}"), a)
        expr += product
    return expr


def char_poly_to_latex(chi: CharacterPolynomial) -> str:
    return sp.latex(char_poly_to_sympy(chi))


def render_statistics_table(
    rows: list[StatisticRow],
    console: Console | None = None,
    columns: int = 6,
) -> None:
    """Print the leading coefficients of each row."""
    if console is None:
        console = Console()

    table = Table(title="Stable Statistics")
    table.add_column("Partition", style="cyan")
    shown = min(columns, max((len(r.coefficients) for r in rows), default=0))
    for i in range(shown):
        table.add_column(f"z^{i}", justify="right")

    for row in rows:
        table.add_row(row.partition, *row.coefficients[:shown])

    console.print(table)
