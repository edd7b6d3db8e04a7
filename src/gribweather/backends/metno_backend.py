"""MET Norway gribfiles implementation of :class:`FetchBackend`."""

from __future__ import annotations

from pathlib import Path
import hashlib
import logging
import os
import tempfile

import requests

from gribweather.backends.base import BackendError, FetchBackend
from gribweather.backends.metno_urls import build_metno_url
from gribweather.config import get_base_url, get_timeout, get_user_agent

LOGGER = logging.getLogger("gribweather.backends")


class MetnoBackend(FetchBackend):
    """Fetch backend for ``api.met.no/weatherapi/gribfiles``."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = base_url or get_base_url()
        self.user_agent = user_agent or get_user_agent()
        self.timeout = timeout or get_timeout()

    def build_url(self, product: str, area: str) -> str:
        return build_metno_url(product, area, base_url=self.base_url)

    def download(self, url: str, outdir: Path) -> Path:
        """
        Download a GRIB payload into a fresh file under ``outdir``.
        """

        outdir.mkdir(parents=True, exist_ok=True)
        LOGGER.info("Downloading GRIB data from: %s", url)
        try:
            response = requests.get(url, headers={"User-Agent": self.user_agent}, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise BackendError(f"Download failed for {url}: {exc}") from exc

        content = response.content or b""
        if not content:
            raise BackendError(f"Empty GRIB payload from {url}")

        prefix = f"grib_{hashlib.sha1(url.encode('utf-8')).hexdigest()[:12]}_"
        fd, name = tempfile.mkstemp(prefix=prefix, suffix=".grb", dir=outdir)
        with os.fdopen(fd, "wb") as handle:
            handle.write(content)
        path = Path(name)
        LOGGER.info("File downloaded to: %s, size: %d bytes", path, len(content))
        return path
