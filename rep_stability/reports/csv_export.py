"""CSV export of stable statistics.

Layout, one row per partition:

    perms,i=0,i=1,...,i=<max_degree>
    "[2,1]",0,1,3,...

Coefficients are written as absolute values.
"""

from __future__ import annotations

import csv
from fractions import Fraction
from pathlib import Path

from rep_stability.pipelines.stable_statistics import StatisticRow


def statistics_header(max_degree: int) -> list[str]:
    return ["perms"] + [f"i={i}" for i in range(max_degree + 1)]


def write_statistics_csv(rows: list[StatisticRow], max_degree: int, path: str | Path) -> Path:
    """Write rows to path, creating parent directories.

    Magnitudes go to the writer as Fractions, which QUOTE_NONNUMERIC leaves
    bare ("1/2", "3"); only the partition key is quoted.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="") as f:
        csv.writer(f).writerow(statistics_header(max_degree))
        writer = csv.writer(f, quoting=csv.QUOTE_NONNUMERIC)
        for row in rows:
            magnitudes = row.magnitudes()[: max_degree + 1]
            magnitudes += [Fraction(0)] * (max_degree + 1 - len(magnitudes))
            writer.writerow([row.partition, *magnitudes])
    return path


def read_statistics_csv(path: str | Path) -> dict[str, list[Fraction]]:
    """Partition key -> coefficient magnitudes, as written by write_statistics_csv."""
    path = Path(path)
    with open(path, newline="") as f:
        reader = csv.reader(f)
        next(reader, None)
        return {line[0]: [Fraction(v) for v in line[1:]] for line in reader if line}
