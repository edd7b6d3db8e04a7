"""Shared configuration helpers for gribweather."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Sequence

LOGGER = logging.getLogger("gribweather.config")

REPO_ROOT = Path(__file__).resolve().parents[2]

DEFAULT_BASE_URL = "https://api.met.no/weatherapi/gribfiles/1.1"
DEFAULT_USER_AGENT = "gribweather/0.1 (https://github.com/evenoes/grib-api)"
DEFAULT_MAX_POINTS = 1000
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_CACHE_TTL_SECONDS = 1800.0


def _resolve_path_from_env(name: str, default: Path) -> Path:
    value = os.environ.get(name)
    if not value:
        return default
    candidate = Path(value).expanduser()
    if not candidate.is_absolute():
        candidate = (REPO_ROOT / candidate).resolve()
    return candidate


def _parse_float(name: str, default: float) -> float:
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def get_work_dir() -> Path:
    """Return the directory downloaded GRIB files are written to."""

    return _resolve_path_from_env("GRIBWEATHER_WORK_DIR", REPO_ROOT / "data")


def ensure_dir(path: Path) -> Path:
    """Ensure a directory exists."""

    path.mkdir(parents=True, exist_ok=True)
    return path


def get_base_url() -> str:
    """Return the gribfiles API root, without a trailing slash."""

    return os.environ.get("GRIBWEATHER_BASE_URL", DEFAULT_BASE_URL).rstrip("/")


def get_user_agent() -> str:
    """Return the User-Agent sent upstream; api.met.no rejects anonymous clients."""

    return os.environ.get("GRIBWEATHER_USER_AGENT", DEFAULT_USER_AGENT)


def get_timeout() -> float:
    return _parse_float("GRIBWEATHER_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)


def get_max_points() -> int:
    """Return the decimation cap for a single parameter result."""

    value = int(_parse_float("GRIBWEATHER_MAX_POINTS", DEFAULT_MAX_POINTS))
    return value if value > 0 else DEFAULT_MAX_POINTS


def _parse_fill_values(value: str) -> Sequence[float]:
    values: list[float] = []
    for fragment in value.split(","):
        fragment = fragment.strip()
        if not fragment:
            continue
        try:
            values.append(float(fragment))
        except ValueError:
            LOGGER.warning("Ignoring malformed GRIBWEATHER_FILL_VALUES entry: %r", fragment)
    return tuple(values)


def get_fill_values() -> tuple[float, ...]:
    """Return sentinel values treated as missing, from GRIBWEATHER_FILL_VALUES."""

    raw = os.environ.get("GRIBWEATHER_FILL_VALUES", "").strip()
    if not raw:
        return ()
    return tuple(_parse_fill_values(raw))


def get_cache_ttl() -> float:
    """Return how long a downloaded file stays cached; 0 disables expiry."""

    return max(0.0, _parse_float("GRIBWEATHER_CACHE_TTL_SECONDS", DEFAULT_CACHE_TTL_SECONDS))


def get_engine() -> str:
    """Return the xarray engine used to decode downloaded files."""

    return os.environ.get("GRIBWEATHER_ENGINE", "cfgrib").strip().lower() or "cfgrib"


def get_log_level() -> int:
    level_name = os.environ.get("GRIBWEATHER_LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def configure_logging() -> None:
    """Install a single stream handler on the gribweather logger tree."""

    level = get_log_level()
    logger = logging.getLogger("gribweather")
    logger.setLevel(level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    logger.addHandler(handler)
