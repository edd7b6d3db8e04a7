"""Declarative variable lookup tables for the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from gribweather.records import Parameter


class Derivation(str, Enum):
    """How a vector pair collapses into a scalar field."""

    MAGNITUDE = "magnitude"
    BEARING = "bearing"


@dataclass(frozen=True)
class VectorPair:
    """Candidate names for the eastward (u) and northward (v) components."""

    u_names: tuple[str, ...]
    v_names: tuple[str, ...]


@dataclass(frozen=True)
class VariableSpec:
    """
    Everything the pipeline needs to locate one parameter in a dataset.

    ``direct_names`` are tried in order before ``vector_pair``; ``derivation``
    is only consulted when the vector pair is used.
    """

    parameter: Parameter
    direct_names: tuple[str, ...]
    vector_pair: VectorPair | None = None
    derivation: Derivation | None = None
    unit: str = ""

    def __post_init__(self) -> None:
        if self.vector_pair is not None and self.derivation is None:
            raise ValueError(f"{self.parameter.value} declares a vector pair without a derivation")


@dataclass(frozen=True)
class Product:
    """An upstream product and the parameters extracted from each of its files."""

    name: str
    parameters: tuple[Parameter, ...]

    def specs(self, registry: Mapping[Parameter, VariableSpec]) -> list[VariableSpec]:
        return [registry[parameter] for parameter in self.parameters]
