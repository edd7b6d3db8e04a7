"""Helpers for opening GRIB files with cfgrib and reading them as plain arrays."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

import logging

import cfgrib
import numpy as np
import pandas as pd
import xarray as xr

from gribweather.backends.base import DatasetReader
from gribweather.config import get_engine
from gribweather.pipeline.errors import AxisNotFound
from gribweather.records import GridAxes

logger = logging.getLogger(__name__)

LATITUDE_NAMES = ("latitude", "lat")
LONGITUDE_NAMES = ("longitude", "lon")


def _find_coord(ds: xr.Dataset, candidates: Iterable[str]) -> str | None:
    for name in candidates:
        if name in ds.coords or name in ds.data_vars:
            return name
    return None


def get_coord_names(ds: xr.Dataset) -> tuple[str, str]:
    """Identify the latitude/longitude coordinate names in the dataset."""

    lat_name = _find_coord(ds, LATITUDE_NAMES)
    if lat_name is None:
        raise AxisNotFound("Could not find latitude coordinate in dataset.")
    lon_name = _find_coord(ds, LONGITUDE_NAMES)
    if lon_name is None:
        raise AxisNotFound("Could not find longitude coordinate in dataset.")
    return lat_name, lon_name


class GribDataset(DatasetReader):
    """
    Reader over the hypercubes of one decoded file.

    cfgrib splits a GRIB file into one ``xarray.Dataset`` per level type;
    lookups walk them in order and the first hit wins.
    """

    def __init__(self, datasets: Sequence[xr.Dataset], *, source: str = "<memory>") -> None:
        self.datasets = list(datasets)
        self.source = source
        self._axes: GridAxes | None = None
        self._axis_dims: tuple[str, str] | None = None

    def variables(self) -> list[str]:
        names: list[str] = []
        for ds in self.datasets:
            for name in list(ds.data_vars) + list(ds.coords):
                if str(name) not in names:
                    names.append(str(name))
        return names

    def find_variable(self, name: str) -> str | None:
        for ds in self.datasets:
            if name in ds.data_vars or name in ds.coords:
                return name
        for ds in self.datasets:
            for var_name, da in ds.data_vars.items():
                if da.attrs.get("GRIB_shortName") == name:
                    return str(var_name)
        return None

    def _lookup(self, name: str) -> xr.DataArray:
        for ds in self.datasets:
            if name in ds.data_vars or name in ds.coords:
                return ds[name]
        raise KeyError(f"Variable {name!r} not found in {self.source}")

    def shape(self, name: str) -> tuple[int, ...]:
        return tuple(int(size) for size in self._lookup(name).shape)

    def read(self, name: str) -> np.ndarray:
        da = self._lookup(name)
        dims = self._axis_dims
        if dims is None:
            try:
                self.axes()
            except AxisNotFound:
                pass
            dims = self._axis_dims
        if dims is not None and all(dim in da.dims for dim in dims):
            da = da.transpose(..., *dims)
        logger.debug("Read %s with dims %s and shape %s", name, da.dims, da.shape)
        return np.asarray(da.values, dtype=float)

    def axes(self) -> GridAxes:
        if self._axes is not None:
            return self._axes
        for ds in self.datasets:
            try:
                lat_name, lon_name = get_coord_names(ds)
            except AxisNotFound:
                continue
            lat_da = ds[lat_name]
            lon_da = ds[lon_name]
            if lat_da.ndim != 1 or lon_da.ndim != 1:
                raise AxisNotFound(
                    f"Latitude/longitude must be one-dimensional, got {lat_da.dims} and {lon_da.dims}"
                )
            self._axis_dims = (str(lat_da.dims[0]), str(lon_da.dims[0]))
            self._axes = GridAxes(
                latitudes=tuple(float(value) for value in lat_da.values),
                longitudes=tuple(float(value) for value in lon_da.values),
            )
            return self._axes
        raise AxisNotFound(f"Could not find lat/lon variables in {self.source}")

    def valid_time(self) -> pd.Timestamp | None:
        for ds in self.datasets:
            if "valid_time" in ds.coords:
                stamp = pd.to_datetime(np.ravel(ds["valid_time"].values)[0])
            elif "time" in ds.coords:
                stamp = pd.to_datetime(np.ravel(ds["time"].values)[0])
                if "step" in ds.coords:
                    stamp = stamp + pd.to_timedelta(np.ravel(ds["step"].values)[0])
            else:
                continue
            if pd.isna(stamp):
                continue
            return pd.Timestamp(stamp)
        return None

    def close(self) -> None:
        for ds in self.datasets:
            ds.close()


def open_grib_dataset(path: Path, *, engine: str | None = None) -> GribDataset:
    """
    Open ``path`` as a :class:`GribDataset`.

    The cfgrib engine opens every hypercube in the file without writing
    ``.idx`` sidecar files; other engines open a single dataset.
    """

    engine = engine or get_engine()
    if engine == "cfgrib":
        datasets = cfgrib.open_datasets(str(path), backend_kwargs={"indexpath": ""})
    else:
        datasets = [xr.open_dataset(path, engine=engine)]
    reader = GribDataset(datasets, source=str(path))
    for ds in datasets:
        for name, da in ds.data_vars.items():
            logger.debug("Found variable: %s with dims %s and shape %s", name, da.dims, da.shape)
    return reader
