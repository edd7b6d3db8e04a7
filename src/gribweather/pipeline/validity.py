"""Invalid-value filtering and running range tracking."""

from __future__ import annotations

import math
from typing import Iterable, Iterator

from gribweather.pipeline.walk import GridCell


class ValidityFilter:
    """
    Drop NaN cells, plus any cell equal to a configured fill value.

    Some producers encode missing data as a sentinel such as ``9999`` instead
    of NaN; those are only filtered when listed in ``fill_values``.
    """

    def __init__(self, fill_values: Iterable[float] = ()) -> None:
        self.fill_values = frozenset(float(value) for value in fill_values)

    def is_valid(self, value: float) -> bool:
        if math.isnan(value):
            return False
        return value not in self.fill_values

    def __call__(self, cells: Iterable[GridCell]) -> Iterator[GridCell]:
        for cell in cells:
            if self.is_valid(cell.value):
                yield cell


class RangeTracker:
    """Running minimum/maximum over accepted values."""

    def __init__(self) -> None:
        self.minimum = math.inf
        self.maximum = -math.inf
        self.count = 0

    def update(self, value: float) -> float:
        if value < self.minimum:
            self.minimum = value
        if value > self.maximum:
            self.maximum = value
        self.count += 1
        return value

    def track(self, cells: Iterable[GridCell]) -> Iterator[GridCell]:
        for cell in cells:
            self.update(cell.value)
            yield cell

    def bounds(self) -> tuple[float, float]:
        """Return ``(min, max)``, or ``(0.0, 0.0)`` when nothing was tracked."""

        if self.count == 0:
            return 0.0, 0.0
        return float(self.minimum), float(self.maximum)
