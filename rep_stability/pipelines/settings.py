"""Run configuration for the stable-statistics batch export."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

DEFAULT_OUTPUT = Path("artifacts/stable_statistics/results.csv")


class StatisticsSettings(BaseModel):
    """Which partitions to export and how far to expand each series.

    Partitions of every size in [min_boxes, max_boxes) are processed.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    min_boxes: int = Field(default=1, ge=1)
    max_boxes: int = 6
    max_degree: int = Field(default=10, ge=0)
    output: Path = DEFAULT_OUTPUT

    @model_validator(mode="after")
    def _validate_box_range(self) -> "StatisticsSettings":
        if self.max_boxes <= self.min_boxes:
            raise ValueError(
                f"max_boxes ({self.max_boxes}) must exceed min_boxes ({self.min_boxes})"
            )
        return self

    def sizes(self) -> range:
        return range(self.min_boxes, self.max_boxes)

    def with_updates(self, **kwargs: object) -> "StatisticsSettings":
        """Return new settings with the given fields replaced (re-validated)."""
        data = self.model_dump()
        data.update(kwargs)
        return StatisticsSettings(**data)
