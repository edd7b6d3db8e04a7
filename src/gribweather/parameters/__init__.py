"""Variable specs for every supported parameter, grouped by upstream product."""

from __future__ import annotations

from .base import Derivation, Product, VariableSpec, VectorPair
from .current import CURRENT, CURRENT_DIRECTION, CURRENT_SPEED
from .precipitation import PRECIPITATION, PRECIPITATION_PRODUCT
from .waves import WAVE_HEIGHT, WAVES
from .wind import WIND, WIND_DIRECTION, WIND_SPEED

from gribweather.records import Parameter

VARIABLE_SPECS: dict[Parameter, VariableSpec] = {
    spec.parameter: spec
    for spec in (
        WAVE_HEIGHT,
        WIND_SPEED,
        WIND_DIRECTION,
        CURRENT_SPEED,
        CURRENT_DIRECTION,
        PRECIPITATION,
    )
}

PRODUCTS: dict[str, Product] = {
    product.name: product for product in (WAVES, WIND, CURRENT, PRECIPITATION_PRODUCT)
}


def get_spec(parameter: Parameter | str) -> VariableSpec:
    """Return the VariableSpec for a parameter enum or its string tag."""

    return VARIABLE_SPECS[Parameter(parameter)]


def get_product(name: str) -> Product:
    product = PRODUCTS.get(name.lower())
    if product is None:
        raise ValueError(f"Unsupported product: {name}")
    return product


__all__ = [
    "Derivation",
    "PRODUCTS",
    "Product",
    "VARIABLE_SPECS",
    "VariableSpec",
    "VectorPair",
    "get_product",
    "get_spec",
]
