"""Rank-generic traversal of gridded arrays."""

from __future__ import annotations

from typing import Iterator, NamedTuple

import numpy as np

from gribweather.pipeline.errors import GridShapeMismatch, UnsupportedRank
from gribweather.records import GridAxes


class GridCell(NamedTuple):
    lat_index: int
    lon_index: int
    latitude: float
    longitude: float
    value: float


def horizontal_slice(values: np.ndarray) -> np.ndarray:
    """
    Reduce an array to its first (time, level) latitude/longitude plane.

    Rank 2 is ``(lat, lon)``, rank 3 ``(time, lat, lon)`` and rank 4
    ``(time, level, lat, lon)``.
    """

    array = np.asarray(values)
    if array.ndim == 2:
        return array
    if array.ndim == 3:
        return array[0]
    if array.ndim == 4:
        return array[0, 0]
    raise UnsupportedRank(array.ndim)


def _checked_slice(values: np.ndarray, axes: GridAxes) -> np.ndarray:
    plane = horizontal_slice(values)
    if plane.shape != axes.shape:
        raise GridShapeMismatch(
            f"Grid slice shape {plane.shape} does not match axes {axes.shape}"
        )
    return plane


def walk(values: np.ndarray, axes: GridAxes) -> Iterator[GridCell]:
    """
    Yield every cell of the first plane, latitude outer, longitude inner.

    Downstream stride decimation depends on this row-major order.
    """

    plane = _checked_slice(values, axes)
    for lat_idx, lat in enumerate(axes.latitudes):
        row = plane[lat_idx]
        for lon_idx, lon in enumerate(axes.longitudes):
            yield GridCell(lat_idx, lon_idx, lat, lon, float(row[lon_idx]))


def walk_pair(
    u_values: np.ndarray,
    v_values: np.ndarray,
    axes: GridAxes,
) -> Iterator[tuple[GridCell, float]]:
    """Walk two component grids in lockstep, yielding the u cell and the matching v value."""

    v_plane = _checked_slice(v_values, axes)
    for cell in walk(u_values, axes):
        yield cell, float(v_plane[cell.lat_index, cell.lon_index])
