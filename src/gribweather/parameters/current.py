"""Surface ocean current lookup tables."""

from __future__ import annotations

from gribweather.parameters.base import Derivation, Product, VariableSpec, VectorPair
from gribweather.records import Parameter

CURRENT_COMPONENTS = VectorPair(
    u_names=("uogrd", "ucurr", "uo", "eastward_sea_water_velocity"),
    v_names=("vogrd", "vcurr", "vo", "northward_sea_water_velocity"),
)

CURRENT_SPEED = VariableSpec(
    parameter=Parameter.CURRENT_SPEED,
    direct_names=(
        "current_speed",
        "sea_water_speed",
        "water_speed",
        "sea_surface_current_speed",
        "surface_current_speed",
        "current_speed_surface",
        "speed_of_current",
    ),
    vector_pair=CURRENT_COMPONENTS,
    derivation=Derivation.MAGNITUDE,
    unit="m/s",
)

CURRENT_DIRECTION = VariableSpec(
    parameter=Parameter.CURRENT_DIRECTION,
    direct_names=(
        "current_direction",
        "sea_water_direction",
        "direction_of_sea_water_velocity",
        "current_direction_surface",
    ),
    vector_pair=CURRENT_COMPONENTS,
    derivation=Derivation.BEARING,
    unit="degrees",
)

CURRENT = Product(name="current", parameters=(Parameter.CURRENT_SPEED, Parameter.CURRENT_DIRECTION))
