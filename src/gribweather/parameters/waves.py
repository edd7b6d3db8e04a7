"""Wave height lookup table."""

from __future__ import annotations

from gribweather.parameters.base import Product, VariableSpec
from gribweather.records import Parameter

WAVE_HEIGHT = VariableSpec(
    parameter=Parameter.WAVE_HEIGHT,
    direct_names=(
        "SHWW",
        "significant_wave_height",
        "swh",
        "VHM0",
        "Significant_height_of_combined_wind_waves_and_swell_height_above_ground",
    ),
    unit="m",
)

WAVES = Product(name="waves", parameters=(Parameter.WAVE_HEIGHT,))
