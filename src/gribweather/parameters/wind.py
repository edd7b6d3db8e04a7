"""10 m wind lookup tables."""

from __future__ import annotations

from gribweather.parameters.base import Derivation, Product, VariableSpec, VectorPair
from gribweather.records import Parameter

# cfgrib exposes 10u/10v as u10/v10; the GRIB short names still match through
# the GRIB_shortName attribute.
WIND_COMPONENTS = VectorPair(
    u_names=("10u", "u10", "UGRD", "eastward_wind"),
    v_names=("10v", "v10", "VGRD", "northward_wind"),
)

WIND_SPEED = VariableSpec(
    parameter=Parameter.WIND_SPEED,
    direct_names=(
        "WIND",
        "wind_speed",
        "si10",
        "ff10",
        "wind_speed_10m",
        "10_meter_wind_speed",
    ),
    vector_pair=WIND_COMPONENTS,
    derivation=Derivation.MAGNITUDE,
    unit="m/s",
)

WIND_DIRECTION = VariableSpec(
    parameter=Parameter.WIND_DIRECTION,
    direct_names=(
        "wind_direction",
        "wind_dir",
        "dd10",
        "10m_wind_direction",
        "wind_direction_10m",
        "wind_from_direction",
    ),
    vector_pair=WIND_COMPONENTS,
    derivation=Derivation.BEARING,
    unit="degrees",
)

WIND = Product(name="wind", parameters=(Parameter.WIND_SPEED, Parameter.WIND_DIRECTION))
