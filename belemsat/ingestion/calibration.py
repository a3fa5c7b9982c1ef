"""Unit conversions applied to raw band samples before index computation."""

import numpy as np

from belemsat.core.constants import DB_EPSILON, REFLECTANCE_SCALE


def dn_to_reflectance(dn, scale: float = REFLECTANCE_SCALE):
    """Scale digital numbers to surface reflectance.

    Scalars return ``float``; arrays return a float64 ``ndarray``.
    """
    if np.ndim(dn) == 0:
        return float(dn) * scale
    return np.asarray(dn, dtype=np.float64) * scale


def linear_to_db(linear):
    """Convert linear backscatter to decibels.

    ``DB_EPSILON`` keeps a zero input finite (about -90 dB) instead of
    ``-inf``. Negative inputs give NaN.
    """
    with np.errstate(invalid="ignore"):
        out = 10.0 * np.log10(np.asarray(linear, dtype=np.float64) + DB_EPSILON)
    if out.ndim == 0:
        return float(out)
    return out
