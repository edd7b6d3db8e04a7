from __future__ import annotations

import numpy as np
import pytest
import xarray as xr

from gribweather.backends.cfgrib_helpers import GribDataset

DIMS_BY_RANK = {
    2: ("latitude", "longitude"),
    3: ("time", "latitude", "longitude"),
    4: ("time", "level", "latitude", "longitude"),
}


def build_dataset(
    variables: dict[str, np.ndarray],
    *,
    lats=(60.0, 59.5),
    lons=(10.0, 10.5, 11.0),
    with_axes: bool = True,
    attrs: dict[str, dict[str, str]] | None = None,
) -> xr.Dataset:
    """Build an in-memory dataset whose variables use the rank-based dimension layout."""

    data_vars = {}
    for name, values in variables.items():
        values = np.asarray(values, dtype=float)
        data_vars[name] = xr.Variable(DIMS_BY_RANK[values.ndim], values, attrs=(attrs or {}).get(name, {}))
    coords = {}
    if with_axes:
        coords = {"latitude": list(lats), "longitude": list(lons)}
    return xr.Dataset(data_vars=data_vars, coords=coords)


@pytest.fixture
def make_reader():
    def _make(variables, **kwargs) -> GribDataset:
        return GribDataset([build_dataset(variables, **kwargs)])

    return _make


@pytest.fixture
def wind_dataset() -> xr.Dataset:
    u = np.array([[3.0, 1.0, 0.0], [np.nan, -1.0, 0.0]])
    v = np.array([[4.0, 0.0, 1.0], [2.0, 0.0, -1.0]])
    ds = build_dataset(
        {"u10": u, "v10": v},
        attrs={"u10": {"GRIB_shortName": "10u"}, "v10": {"GRIB_shortName": "10v"}},
    )
    return ds.assign_coords(valid_time=np.datetime64("2024-01-01T06:00", "ns"))


@pytest.fixture
def dataset_builder():
    return build_dataset
