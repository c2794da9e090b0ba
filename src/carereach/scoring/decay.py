from __future__ import annotations

import math

import numpy as np
import pandas as pd

from carereach.errors import InvalidParameter


def check_sigma(sigma: float) -> float:
    try:
        s = float(sigma)
    except (TypeError, ValueError) as e:
        raise InvalidParameter("scale_sigma", sigma, "must be a number") from e
    if not math.isfinite(s) or s <= 0:
        raise InvalidParameter("scale_sigma", sigma, "must be a finite number > 0")
    return s


def gaussian_weight(distance: float, sigma: float) -> float:
    """
    Gaussian distance decay: w = exp(-(distance / sigma)^2).

    `distance` may be a raw travel time or a complexity-adjusted one; both are minutes.

    The weight is positive in exact arithmetic, but in float64 it underflows to 0.0
    once (distance / sigma)^2 exceeds about 745 (e.g. 2000 min at sigma 60). That 0.0
    is returned as is, never clamped up.
    """
    s = check_sigma(sigma)
    try:
        d = float(distance)
    except (TypeError, ValueError) as e:
        raise InvalidParameter("distance", distance, "must be a number") from e
    if not math.isfinite(d) or d < 0:
        raise InvalidParameter("distance", distance, "must be a finite number >= 0")
    if d == 0.0:
        return 1.0
    return math.exp(-((d / s) ** 2))


def decay_curve(sigma: float, *, max_distance: float = 120.0, step: float = 2.0) -> pd.DataFrame:
    s = check_sigma(sigma)
    if step <= 0:
        raise InvalidParameter("step", step, "must be > 0")
    if max_distance < 0:
        raise InvalidParameter("max_distance", max_distance, "must be >= 0")
    n = int(math.floor(max_distance / step + 1e-9)) + 1
    distances = np.arange(n, dtype=float) * float(step)
    weights = np.exp(-np.square(distances / s))
    return pd.DataFrame({"distance_min": distances, "weight": weights})
