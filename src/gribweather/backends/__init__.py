"""Backend implementations for fetching and reading GRIB data."""

from __future__ import annotations

from .base import BackendError, DatasetReader, FetchBackend
from .cfgrib_helpers import GribDataset, open_grib_dataset
from .metno_backend import MetnoBackend

__all__ = ["BackendError", "DatasetReader", "FetchBackend", "GribDataset", "MetnoBackend", "open_grib_dataset"]
