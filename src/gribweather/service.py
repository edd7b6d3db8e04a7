"""Orchestrate downloads and extraction for each upstream product."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, ContextManager, Sequence
import logging

from gribweather.backends.base import DatasetReader, FetchBackend
from gribweather.backends.cfgrib_helpers import open_grib_dataset
from gribweather.backends.metno_backend import MetnoBackend
from gribweather.config import ensure_dir, get_work_dir
from gribweather.parameters import VARIABLE_SPECS, VariableSpec, get_product
from gribweather.pipeline.extract import ExtractionPipeline
from gribweather.records import ExtractionResult
from gribweather.storage import FileCache

LOGGER = logging.getLogger("gribweather.service")

Opener = Callable[[Path], DatasetReader]


class GribService:
    """Execute a full download -> open -> extract workflow per product."""

    def __init__(
        self,
        *,
        backend: FetchBackend | None = None,
        cache: FileCache | None = None,
        pipeline: ExtractionPipeline | None = None,
        work_dir: Path | str | None = None,
        opener: Opener | None = None,
    ) -> None:
        self.backend = backend or MetnoBackend()
        self.cache = cache if cache is not None else FileCache()
        self.pipeline = pipeline or ExtractionPipeline()
        self.work_dir = Path(work_dir or get_work_dir())
        self.opener = opener or open_grib_dataset

    def fetch(self, product: str, area: str) -> ContextManager[Path]:
        """
        Lease a local file for ``product``/``area``, downloading on a cache miss.

        Expired downloads are swept first; files still being read by other
        requests are deleted once those requests finish.
        """

        url = self.backend.build_url(product, area)
        swept = self.cache.evict_expired()
        if swept:
            LOGGER.info("Expired %d cached GRIB file(s)", swept)
        return self.cache.lease(url, lambda: self.backend.download(url, ensure_dir(self.work_dir)))

    def extract_file(self, path: Path, specs: Sequence[VariableSpec]) -> list[ExtractionResult]:
        """Open ``path`` once and extract every spec from it."""

        LOGGER.info("Starting to parse %s from: %s", ", ".join(s.parameter.value for s in specs), path)
        with self.opener(path) as dataset:
            LOGGER.debug("Dataset variables: %s", ", ".join(dataset.variables()))
            return self.pipeline.extract_many(dataset, specs)

    def get_product(self, product: str, area: str) -> list[ExtractionResult]:
        """Download and extract every parameter of ``product`` for ``area``."""

        specs = get_product(product).specs(VARIABLE_SPECS)
        with self.fetch(product, area) as path:
            return self.extract_file(path, specs)

    def get_wave_data(self, area: str) -> ExtractionResult:
        return self.get_product("waves", area)[0]

    def get_wind_data(self, area: str) -> list[ExtractionResult]:
        """Return ``[WIND_SPEED, WIND_DIRECTION]`` for ``area``."""

        return self.get_product("wind", area)

    def get_current_data(self, area: str) -> list[ExtractionResult]:
        """Return ``[CURRENT_SPEED, CURRENT_DIRECTION]`` for ``area``."""

        return self.get_product("current", area)

    def get_precipitation_data(self, area: str) -> ExtractionResult:
        return self.get_product("precipitation", area)[0]

    def close(self) -> None:
        self.cache.clear()
