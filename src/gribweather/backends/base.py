"""Core interfaces for download backends and dataset readers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

import numpy as np
import pandas as pd

from gribweather.records import GridAxes


class BackendError(Exception):
    """Raised when a backend cannot satisfy a request."""


class FetchBackend(ABC):
    """Abstract base class for GRIB download backends."""

    @abstractmethod
    def build_url(self, product: str, area: str) -> str:
        """Return the upstream URL serving ``product`` for ``area``."""

    @abstractmethod
    def download(self, url: str, outdir: Path) -> Path:
        """Download ``url`` into ``outdir`` and return the written file."""


class DatasetReader(ABC):
    """
    Scoped, read-only view of one decoded gridded dataset.

    Readers are context managers; leaving the ``with`` block releases the
    underlying file handles even when extraction fails.
    """

    @abstractmethod
    def variables(self) -> Sequence[str]:
        """Return the names of every variable the dataset exposes."""

    @abstractmethod
    def find_variable(self, name: str) -> str | None:
        """Return the dataset's own name for ``name``, or ``None`` when absent."""

    @abstractmethod
    def shape(self, name: str) -> tuple[int, ...]:
        """Return the dimension sizes of a variable."""

    @abstractmethod
    def read(self, name: str) -> np.ndarray:
        """Read a variable fully, latitude and longitude as the trailing axes."""

    @abstractmethod
    def axes(self) -> GridAxes:
        """Return the latitude/longitude axes, raising ``AxisNotFound`` if absent."""

    def valid_time(self) -> pd.Timestamp | None:
        """Return the first valid time of the dataset when it carries one."""

        return None

    def close(self) -> None:
        """Release underlying resources."""

    def __enter__(self) -> "DatasetReader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
