"""Scalar fields derived from eastward/northward vector components."""

from __future__ import annotations

import numpy as np

from gribweather.parameters.base import Derivation


def derive_magnitude(u, v):
    """Return the vector speed ``sqrt(u**2 + v**2)``."""

    u = np.asarray(u, dtype=float)
    v = np.asarray(v, dtype=float)
    return np.sqrt(u * u + v * v)


def derive_bearing(u, v):
    """
    Return the compass bearing the flow is coming from, in ``[0, 360)``.

    ``atan2(v, u)`` is the heading the vector points to, counter-clockwise from
    east. Rotating into clockwise-from-north and reversing the heading gives
    ``270 - atan2(v, u)``: an eastward vector (u=1, v=0) comes from 270 degrees
    and a northward one (u=0, v=1) from 180 degrees.
    """

    u = np.asarray(u, dtype=float)
    v = np.asarray(v, dtype=float)
    bearing = np.mod(270.0 - np.degrees(np.arctan2(v, u)), 360.0)
    return np.where(bearing >= 360.0, 0.0, bearing)


DERIVATIONS = {
    Derivation.MAGNITUDE: derive_magnitude,
    Derivation.BEARING: derive_bearing,
}


def derive(derivation: Derivation, u, v):
    """Apply the named derivation to component values."""

    return DERIVATIONS[Derivation(derivation)](u, v)
