"""Horizontal coordinate system: packing measures into rows."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

from snview.errors import ConfigurationError, StructureError


@dataclass(frozen=True)
class RowPlan:
    """
    How measures are distributed over rows.

    Attributes:
        row_count:        Number of rows, ``ceil(measures / measures_per_row)``.
        measures_per_row: Configured number of measures in a full row.
        row_sizes:        Measures in each row; only the last may be partial.
        measure_width:    Pixel width of every measure, partial rows included.
        centering_offset: Extra left padding that centres a row of
                          ``measures_per_row`` measures in the available width.
    """

    row_count: int
    measures_per_row: int
    row_sizes: tuple[int, ...]
    measure_width: float
    centering_offset: float

    def rows(self) -> Iterator[tuple[int, int, int]]:
        """Yield ``(row_index, first_measure_index, measure_count)`` per row."""
        for row_index, size in enumerate(self.row_sizes):
            yield row_index, row_index * self.measures_per_row, size

    def is_first_in_row(self, measure_index: int) -> bool:
        return measure_index % self.measures_per_row == 0

    def is_last_in_row(self, measure_index: int) -> bool:
        return (measure_index + 1) % self.measures_per_row == 0


def partition_rows(
    measure_count: int,
    measures_per_row: int,
    available_width: float,
    measure_width: float,
) -> RowPlan:
    """
    Split ``measure_count`` measures into rows of ``measures_per_row``.

    Raises:
        StructureError:     If there are no measures.
        ConfigurationError: If ``measures_per_row`` is not positive.
    """
    if measure_count <= 0:
        raise StructureError("Failed to identify number of measures.")
    if measures_per_row <= 0:
        raise ConfigurationError(f"measures_per_row must be positive, got {measures_per_row}.")

    row_count = math.ceil(measure_count / measures_per_row)
    last_row = measure_count - (row_count - 1) * measures_per_row
    row_sizes = (measures_per_row,) * (row_count - 1) + (last_row,)

    return RowPlan(
        row_count=row_count,
        measures_per_row=measures_per_row,
        row_sizes=row_sizes,
        measure_width=measure_width,
        centering_offset=(available_width - measures_per_row * measure_width) / 2,
    )
