"""Stable statistics batch: every partition in a box range -> series coefficients."""

from __future__ import annotations

from fractions import Fraction

from pydantic import BaseModel
from rich.console import Console

from rep_stability.core.laurent import LaurentPolynomial
from rep_stability.core.partition import Partition, all_partitions
from rep_stability.core.rational import format_rational
from rep_stability.pipelines.settings import StatisticsSettings
from rep_stability.stability.statistics import young_to_series


class StatisticRow(BaseModel):
    """Coefficients of z^0..z^max_degree in the statistic of V(partition)."""

    model_config = {"frozen": True}

    partition: str
    size: int
    coefficients: tuple[str, ...]

    @classmethod
    def from_series(
        cls, partition: Partition, series: LaurentPolynomial, max_degree: int
    ) -> "StatisticRow":
        return cls(
            partition=partition.to_string(","),
            size=partition.size,
            coefficients=tuple(format_rational(c) for c in series.coefficients_up_to(max_degree)),
        )

    def values(self) -> list[Fraction]:
        return [Fraction(c) for c in self.coefficients]

    def magnitudes(self) -> list[Fraction]:
        """Absolute values; signs alternate predictably and are dropped on export."""
        return [abs(v) for v in self.values()]


def rows_for_size(size: int, max_degree: int) -> list[StatisticRow]:
    return [
        StatisticRow.from_series(p, young_to_series(p, max_degree), max_degree)
        for p in all_partitions(size)
    ]


def stable_statistics(settings: StatisticsSettings) -> list[StatisticRow]:
    """One row per partition with min_boxes <= size < max_boxes, in canonical order."""
    rows: list[StatisticRow] = []
    for size in settings.sizes():
        rows.extend(rows_for_size(size, settings.max_degree))
    return rows


def run_stable_statistics(
    settings: StatisticsSettings | None = None,
    json_output: bool = False,
    console: Console | None = None,
) -> list[StatisticRow]:
    """CLI entry point: compute the batch and write CSV (or JSON) artifacts."""
    from rep_stability.reports.csv_export import write_statistics_csv
    from rep_stability.reports.render import render_statistics_table
    from rep_stability.reports.serialize import export_rows

    if settings is None:
        settings = StatisticsSettings()
    if console is None:
        console = Console()

    console.print(
        f"[bold]Stable statistics[/bold] boxes [{settings.min_boxes}, {settings.max_boxes})"
        f" max_degree={settings.max_degree}"
    )

    rows: list[StatisticRow] = []
    for size in settings.sizes():
        batch = rows_for_size(size, settings.max_degree)
        console.print(f"  {size} boxes: {len(batch)} partitions")
        rows.extend(batch)

    if json_output:
        path = settings.output.with_suffix(".json")
        export_rows(rows, path)
    else:
        path = settings.output
        write_statistics_csv(rows, settings.max_degree, path)

    render_statistics_table(rows, console=console)
    console.print(f"{len(rows)} rows written to {path}")
    return rows
