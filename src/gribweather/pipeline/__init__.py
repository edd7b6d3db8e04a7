"""Pipeline stages that turn gridded datasets into geo-referenced samples."""

from __future__ import annotations

from .decimate import DEFAULT_MAX_POINTS, decimate
from .derive import derive_bearing, derive_magnitude
from .errors import AxisNotFound, ExtractionError, GridShapeMismatch, UnsupportedRank, VariableNotFound
from .extract import ExtractionPipeline, extract
from .resolve import Direct, VectorComponents, resolve
from .validity import RangeTracker, ValidityFilter
from .walk import GridCell, horizontal_slice, walk, walk_pair

__all__ = [
    "AxisNotFound",
    "DEFAULT_MAX_POINTS",
    "Direct",
    "ExtractionError",
    "ExtractionPipeline",
    "GridCell",
    "GridShapeMismatch",
    "RangeTracker",
    "UnsupportedRank",
    "ValidityFilter",
    "VariableNotFound",
    "VectorComponents",
    "decimate",
    "derive_bearing",
    "derive_magnitude",
    "extract",
    "horizontal_slice",
    "resolve",
    "walk",
    "walk_pair",
]
