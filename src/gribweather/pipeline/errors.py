"""Exceptions raised while turning a dataset into samples."""

from __future__ import annotations


class ExtractionError(Exception):
    """Base class for failures inside the extraction pipeline."""


class VariableNotFound(ExtractionError):
    """No direct variable or complete vector pair backs a parameter."""

    def __init__(self, parameter: str, candidates: tuple[str, ...] = ()) -> None:
        self.parameter = parameter
        self.candidates = candidates
        super().__init__(f"No variable found for {parameter} (tried {', '.join(candidates) or 'nothing'})")


class AxisNotFound(ExtractionError):
    """The dataset has no usable latitude or longitude coordinate."""


class UnsupportedRank(ExtractionError):
    """A field array has a rank other than 2, 3 or 4."""

    def __init__(self, rank: int) -> None:
        self.rank = rank
        super().__init__(f"Unsupported array rank {rank}; expected 2, 3 or 4")


class GridShapeMismatch(ExtractionError):
    """A field's horizontal slice does not line up with the dataset axes."""
