"""JSON export of statistic rows."""

from __future__ import annotations

import json
from pathlib import Path

from rep_stability.pipelines.stable_statistics import StatisticRow


def export_rows(rows: list[StatisticRow], path: str | Path) -> Path:
    """Write rows as {"rows": [...]}, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"rows": [row.model_dump(mode="json") for row in rows]}
    path.write_text(json.dumps(payload, indent=2))
    return path


def import_rows(path: str | Path) -> list[StatisticRow]:
    """Rows previously written by export_rows."""
    data = json.loads(Path(path).read_text())
    return [StatisticRow.model_validate(row) for row in data["rows"]]
