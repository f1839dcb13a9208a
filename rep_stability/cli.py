"""CLI entry point using Typer."""

from __future__ import annotations

from pathlib import Path

import typer

from rep_stability.core.errors import InvalidArgument
from rep_stability.core.partition import Partition, parse_partition

app = typer.Typer(name="repstab", help="Representation stability statistics")


def _partition_or_exit(text: str) -> Partition:
    try:
        return parse_partition(text)
    except InvalidArgument as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)


@app.command("char-poly")
def char_poly(
    partition: str = typer.Argument(..., help='Partition, e.g. "2,1"'),
    latex: bool = typer.Option(False, "--latex", help="Print as LaTeX"),
) -> None:
    """Print the character polynomial of the family V(partition)."""
    from rep_stability.stability.characters import part_to_char_poly

    chi = part_to_char_poly(_partition_or_exit(partition))
    if latex:
        from rep_stability.reports.render import char_poly_to_latex

        typer.echo(char_poly_to_latex(chi))
    else:
        typer.echo(str(chi))


@app.command("character")
def character(
    mu: str = typer.Argument(..., help="Irreducible, e.g. 3,1"),
    rho: str = typer.Argument(..., help="Cycle type, e.g. 2,2"),
) -> None:
    """Print the irreducible character value chi^mu(rho)."""
    from rep_stability.core.rational import format_rational
    from rep_stability.stability.characters import irreducible_character

    try:
        value = irreducible_character(_partition_or_exit(mu), _partition_or_exit(rho))
    except InvalidArgument as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    typer.echo(format_rational(value))


@app.command("series")
def series(
    partition: str = typer.Argument(..., help='Partition, e.g. "2,1"'),
    max_degree: int = typer.Option(10, help="Highest power of z to compute"),
    latex: bool = typer.Option(False, "--latex", help="Print as LaTeX"),
) -> None:
    """Print the stable statistic of V(partition) as a series in z = 1/q."""
    from rep_stability.stability.statistics import young_to_series

    try:
        result = young_to_series(_partition_or_exit(partition), max_degree)
    except InvalidArgument as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    if latex:
        from rep_stability.reports.render import laurent_to_latex

        typer.echo(laurent_to_latex(result))
    else:
        typer.echo(result.to_string())


@app.command("export")
def export(
    min_boxes: int = typer.Option(1, help="Smallest partition size"),
    max_boxes: int = typer.Option(6, help="Largest partition size (exclusive)"),
    max_degree: int = typer.Option(10, help="Highest power of z to compute"),
    output: Path = typer.Option(
        Path("artifacts/stable_statistics/results.csv"), "--out", help="Output path",
    ),
    json_output: bool = typer.Option(False, "--json", help="Write JSON instead of CSV"),
) -> None:
    """Compute statistics for every partition in a box range and export them."""
    from pydantic import ValidationError

    from rep_stability.pipelines.settings import StatisticsSettings
    from rep_stability.pipelines.stable_statistics import run_stable_statistics

    try:
        settings = StatisticsSettings(
            min_boxes=min_boxes,
            max_boxes=max_boxes,
            max_degree=max_degree,
            output=output,
        )
    except ValidationError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    run_stable_statistics(settings, json_output=json_output)


if __name__ == "__main__":
    app()
