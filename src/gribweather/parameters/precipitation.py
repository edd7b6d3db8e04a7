"""Precipitation lookup table."""

from __future__ import annotations

from gribweather.parameters.base import Product, VariableSpec
from gribweather.records import Parameter

PRECIPITATION = VariableSpec(
    parameter=Parameter.PRECIPITATION,
    direct_names=(
        "precipitation_amount",
        "tp",
        "APCP",
        "precipitation",
        "total_precipitation",
        "Total_precipitation_surface",
    ),
    unit="mm",
)

PRECIPITATION_PRODUCT = Product(name="precipitation", parameters=(Parameter.PRECIPITATION,))
