"""Turn one opened dataset into an :class:`ExtractionResult` per parameter."""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Sequence
import logging
import time

from gribweather.backends.base import DatasetReader
from gribweather.config import get_fill_values, get_max_points
from gribweather.parameters.base import VariableSpec
from gribweather.pipeline.decimate import decimate
from gribweather.pipeline.derive import derive
from gribweather.pipeline.errors import VariableNotFound
from gribweather.pipeline.resolve import Direct, ResolvedField, resolve
from gribweather.pipeline.validity import RangeTracker, ValidityFilter
from gribweather.pipeline.walk import GridCell, walk, walk_pair
from gribweather.records import ExtractionResult, GeoSample, GridAxes

LOGGER = logging.getLogger("gribweather.pipeline")

Clock = Callable[[], int]


def _now_ms() -> int:
    return int(time.time() * 1000)


class ExtractionPipeline:
    """Resolve, walk, filter, track and decimate fields from a dataset."""

    def __init__(
        self,
        *,
        max_points: int | None = None,
        fill_values: Iterable[float] | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.max_points = max_points or get_max_points()
        self.validity = ValidityFilter(get_fill_values() if fill_values is None else fill_values)
        self.clock = clock or _now_ms

    def extract(
        self,
        dataset: DatasetReader,
        spec: VariableSpec,
        *,
        axes: GridAxes | None = None,
        timestamp: int | None = None,
    ) -> ExtractionResult:
        """
        Extract one parameter.

        A missing variable yields an empty result; missing axes, bad ranks and
        reader errors propagate.
        """

        if axes is None:
            axes = dataset.axes()
        if timestamp is None:
            timestamp = self._timestamp(dataset)

        try:
            field = resolve(dataset, spec)
        except VariableNotFound as exc:
            LOGGER.warning("%s", exc)
            return ExtractionResult.empty(spec.parameter)

        tracker = RangeTracker()
        cells = tracker.track(self._cells(field, spec, axes))
        samples = [
            GeoSample(
                latitude=float(cell.latitude),
                longitude=float(cell.longitude),
                value=cell.value,
                timestamp=timestamp,
            )
            for cell in cells
        ]
        min_value, max_value = tracker.bounds()
        total = len(samples)
        samples = decimate(samples, self.max_points)
        if len(samples) < total:
            LOGGER.info("Sampled %s down to %d of %d points", spec.parameter.value, len(samples), total)
        LOGGER.info(
            "Parsed %d %s points. Min value: %s, Max value: %s",
            total,
            spec.parameter.value,
            min_value,
            max_value,
        )
        return ExtractionResult(
            parameter=spec.parameter,
            samples=tuple(samples),
            min_value=min_value,
            max_value=max_value,
            source_variables=_source_names(field),
        )

    def extract_many(self, dataset: DatasetReader, specs: Sequence[VariableSpec]) -> list[ExtractionResult]:
        """Extract several parameters, resolving axes and the timestamp once."""

        axes = dataset.axes()
        timestamp = self._timestamp(dataset)
        return [self.extract(dataset, spec, axes=axes, timestamp=timestamp) for spec in specs]

    def _cells(self, field: ResolvedField, spec: VariableSpec, axes: GridAxes) -> Iterator[GridCell]:
        if isinstance(field, Direct):
            yield from self.validity(walk(field.values, axes))
            return

        is_valid = self.validity.is_valid
        for cell, v_value in walk_pair(field.u_values, field.v_values, axes):
            if not (is_valid(cell.value) and is_valid(v_value)):
                continue
            value = float(derive(spec.derivation, cell.value, v_value))
            if is_valid(value):
                yield cell._replace(value=value)

    def _timestamp(self, dataset: DatasetReader) -> int:
        valid_time = dataset.valid_time()
        if valid_time is None:
            return self.clock()
        return int(valid_time.value // 1_000_000)


def _source_names(field: ResolvedField) -> tuple[str, ...]:
    if isinstance(field, Direct):
        return (field.name,)
    return (field.u_name, field.v_name)


def extract(dataset: DatasetReader, spec: VariableSpec, **kwargs) -> ExtractionResult:
    """Run a default-configured pipeline for a single parameter."""

    return ExtractionPipeline(**kwargs).extract(dataset, spec)
