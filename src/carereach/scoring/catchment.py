from __future__ import annotations

import math
from typing import Any, Iterable

from carereach.errors import InvalidParameter
from carereach.scoring.model import (
    CatchmentScore,
    Classification,
    ClassificationThresholds,
    ProviderOffer,
)


def _as_float(name: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidParameter(name, value, "must be a number") from e


def supply_ratio(offer: ProviderOffer) -> float:
    capacity = _as_float("appointment_capacity", offer.appointment_capacity)
    population = _as_float("competing_population", offer.competing_population)
    if not math.isfinite(capacity) or capacity < 0:
        raise InvalidParameter("appointment_capacity", offer.appointment_capacity, "must be a finite number >= 0")
    if not math.isfinite(population) or population <= 0:
        raise InvalidParameter("competing_population", offer.competing_population, "must be a finite number > 0")
    return capacity / population


def classify(annual_score: float, thresholds: ClassificationThresholds) -> Classification:
    if annual_score >= thresholds.adequate:
        return Classification.ADEQUATE
    if annual_score >= thresholds.poor:
        return Classification.POOR
    return Classification.DESERT


def score_catchment(
    pairs: Iterable[tuple[ProviderOffer, float]],
    *,
    thresholds: ClassificationThresholds | None = None,
    periods_per_year: int = 52,
) -> CatchmentScore:
    """
    Sum decay-weighted supply ratios over every provider reachable from one point.

    Capacities are weekly, so the weekly sum is scaled by `periods_per_year` before
    being compared against the annual thresholds. No providers means no access.
    """
    thresholds = thresholds or ClassificationThresholds()
    weekly = 0.0
    for offer, weight in pairs:
        w = _as_float("decay_weight", weight)
        if not math.isfinite(w) or w < 0 or w > 1:
            raise InvalidParameter("decay_weight", weight, "must be within [0, 1]")
        weekly += supply_ratio(offer) * w
    annual = weekly * periods_per_year
    return CatchmentScore(
        weekly_score=weekly,
        annual_score=annual,
        classification=classify(annual, thresholds),
    )
