"""Value objects produced by the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import pandas as pd


class Parameter(str, Enum):
    """Logical weather parameters exposed by the API."""

    WAVE_HEIGHT = "WAVE_HEIGHT"
    WIND_SPEED = "WIND_SPEED"
    WIND_DIRECTION = "WIND_DIRECTION"
    CURRENT_SPEED = "CURRENT_SPEED"
    CURRENT_DIRECTION = "CURRENT_DIRECTION"
    PRECIPITATION = "PRECIPITATION"


@dataclass(frozen=True)
class GeoSample:
    latitude: float
    longitude: float
    value: float
    timestamp: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "value": self.value,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class ExtractionResult:
    """
    Samples for one parameter plus the range of the full filtered grid.

    ``min_value``/``max_value`` cover every valid cell, including cells that
    were dropped by decimation. Both are ``0.0`` when ``samples`` is empty.
    """

    parameter: Parameter
    samples: tuple[GeoSample, ...] = ()
    min_value: float = 0.0
    max_value: float = 0.0
    source_variables: tuple[str, ...] = field(default=(), compare=False)

    @classmethod
    def empty(cls, parameter: Parameter) -> "ExtractionResult":
        return cls(parameter=parameter)

    @property
    def is_empty(self) -> bool:
        return not self.samples

    def to_dict(self) -> dict[str, Any]:
        """Serialize into the wire shape returned by the web API."""

        return {
            "data": [sample.to_dict() for sample in self.samples],
            "minValue": self.min_value,
            "maxValue": self.max_value,
            "parameter": self.parameter.value,
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Return the samples as a DataFrame with one row per grid point."""

        df = pd.DataFrame(
            [sample.to_dict() for sample in self.samples],
            columns=["latitude", "longitude", "value", "timestamp"],
        )
        df["parameter"] = self.parameter.value
        return df


@dataclass(frozen=True)
class GridAxes:
    """One-dimensional latitude/longitude coordinates shared by every field of a dataset."""

    latitudes: tuple[float, ...]
    longitudes: tuple[float, ...]

    @property
    def shape(self) -> tuple[int, int]:
        return len(self.latitudes), len(self.longitudes)
