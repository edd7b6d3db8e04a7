"""Locate the variable(s) backing a parameter inside a dataset."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union
import logging

import numpy as np

from gribweather.backends.base import DatasetReader
from gribweather.parameters.base import VariableSpec
from gribweather.pipeline.errors import VariableNotFound

LOGGER = logging.getLogger("gribweather.pipeline.resolve")


@dataclass(frozen=True)
class Direct:
    """A parameter stored as its own variable."""

    name: str
    values: np.ndarray = field(repr=False)


@dataclass(frozen=True)
class VectorComponents:
    """A parameter that must be derived from eastward/northward components."""

    u_name: str
    v_name: str
    u_values: np.ndarray = field(repr=False)
    v_values: np.ndarray = field(repr=False)


ResolvedField = Union[Direct, VectorComponents]


def first_match(dataset: DatasetReader, candidates: Iterable[str]) -> str | None:
    """Return the dataset name of the first candidate present, in priority order."""

    for candidate in candidates:
        name = dataset.find_variable(candidate)
        if name is not None:
            return name
    return None


def resolve(dataset: DatasetReader, spec: VariableSpec) -> ResolvedField:
    """
    Resolve ``spec`` against ``dataset``.

    Direct names win over the vector pair. The u and v candidate lists are
    searched independently, so a dataset may pair ``u10`` with ``VGRD``.
    """

    name = first_match(dataset, spec.direct_names)
    if name is not None:
        LOGGER.info("Found %s variable: %s", spec.parameter.value, name)
        return Direct(name=name, values=dataset.read(name))

    tried = spec.direct_names
    pair = spec.vector_pair
    if pair is not None:
        tried = tried + pair.u_names + pair.v_names
        u_name = first_match(dataset, pair.u_names)
        v_name = first_match(dataset, pair.v_names)
        if u_name is not None and v_name is not None:
            LOGGER.info(
                "Found U/V components %s/%s, will derive %s",
                u_name,
                v_name,
                spec.parameter.value,
            )
            return VectorComponents(
                u_name=u_name,
                v_name=v_name,
                u_values=dataset.read(u_name),
                v_values=dataset.read(v_name),
            )
        if u_name is not None or v_name is not None:
            LOGGER.debug(
                "Incomplete vector pair for %s (u=%s, v=%s)",
                spec.parameter.value,
                u_name,
                v_name,
            )

    raise VariableNotFound(spec.parameter.value, tried)
