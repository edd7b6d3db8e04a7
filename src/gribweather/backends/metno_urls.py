"""Helper utilities for constructing MET Norway gribfiles URLs."""

from __future__ import annotations

import re

import requests

from gribweather.config import get_base_url

PRODUCT_PATHS = {
    "waves": "waves",
    "wind": "wind",
    "current": "current",
    "precipitation": "precipitation",
}

AREA_PATTERN = re.compile(r"^[a-z0-9_-]+$")


def validate_area(area: str) -> str:
    """Return a normalized area slug or raise ``ValueError``."""

    slug = area.strip().lower()
    if not AREA_PATTERN.match(slug):
        raise ValueError(f"Invalid area name: {area!r}")
    return slug


def build_metno_url(product: str, area: str, *, base_url: str | None = None) -> str:
    """
    Return the gribfiles URL for a product/area combination.
    """

    path = PRODUCT_PATHS.get(product.lower())
    if path is None:
        raise ValueError(f"No gribfiles endpoint defined for {product}")
    root = (base_url or get_base_url()).rstrip("/")
    request = requests.Request("GET", f"{root}/{path}", params={"area": validate_area(area)}).prepare()
    return request.url
