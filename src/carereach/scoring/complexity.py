from __future__ import annotations

import math
from typing import Any, Iterable

import pandas as pd

from carereach.errors import InvalidParameter

DEFAULT_ROUTES: list[dict[str, Any]] = [
    {"name": "Rural Route", "base_time_min": 20.0, "intersection_density": 0.2},
    {"name": "Urban Route", "base_time_min": 20.0, "intersection_density": 1.5},
]


def _require_finite(name: str, value: float) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidParameter(name, value, "must be a number") from e
    if not math.isfinite(v):
        raise InvalidParameter(name, value, "must be finite")
    return v


def adjust_travel_time(
    base_time: float,
    intersection_density: float,
    alpha: float,
    *,
    alpha_bounds: tuple[float, float] = (0.0, 1.0),
) -> float:
    """
    Inflate a base travel time for urban friction:
    adjusted = base_time * (1 + alpha * intersection_density)
    """
    t = _require_finite("base_travel_time", base_time)
    d = _require_finite("intersection_density", intersection_density)
    a = _require_finite("complexity_coefficient", alpha)
    if t <= 0:
        raise InvalidParameter("base_travel_time", base_time, "must be > 0")
    if d < 0:
        raise InvalidParameter("intersection_density", intersection_density, "must be >= 0")
    lo, hi = alpha_bounds
    if a < lo or a > hi:
        raise InvalidParameter("complexity_coefficient", alpha, f"must be within [{lo}, {hi}]")
    return t * (1.0 + a * d)


def compare_routes(
    routes: Iterable[dict[str, Any]] | None = None,
    *,
    alpha: float,
    alpha_bounds: tuple[float, float] = (0.0, 1.0),
) -> pd.DataFrame:
    rows: list[dict[str, Any]] = []
    for route in routes if routes is not None else DEFAULT_ROUTES:
        base = float(route["base_time_min"])
        density = float(route["intersection_density"])
        adjusted = adjust_travel_time(base, density, alpha, alpha_bounds=alpha_bounds)
        rows.append(
            {
                "name": str(route.get("name", "")),
                "base_time_min": base,
                "intersection_density": density,
                "adjusted_time_min": adjusted,
                "increase_pct": (adjusted - base) / base * 100.0,
            }
        )
    return pd.DataFrame(
        rows,
        columns=["name", "base_time_min", "intersection_density", "adjusted_time_min", "increase_pct"],
    )
