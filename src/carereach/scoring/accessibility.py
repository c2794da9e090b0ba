from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from carereach.errors import InvalidParameter
from carereach.scoring.catchment import score_catchment, supply_ratio
from carereach.scoring.complexity import adjust_travel_time
from carereach.scoring.decay import check_sigma, gaussian_weight
from carereach.scoring.model import (
    AccessibilityResult,
    ClassificationThresholds,
    DecayParameters,
    ModelConfig,
    ProviderBreakdown,
    ProviderOffer,
    RouteParameters,
)

logger = logging.getLogger("carereach.scoring.accessibility")


@dataclass(frozen=True)
class CalculatorInputs:
    travel_time: float = 15.0
    intersection_density: float = 1.67
    appointments: int = 40
    population: int = 2988


@dataclass(frozen=True)
class ExampleClinic:
    name: str
    distance_min: float
    appointments_per_week: float


@dataclass(frozen=True)
class TwoClinicExample:
    clinics: tuple[ExampleClinic, ...] = (
        ExampleClinic(name="Clinic A", distance_min=15.0, appointments_per_week=40.0),
        ExampleClinic(name="Clinic B", distance_min=45.0, appointments_per_week=25.0),
    )
    population: int = 2988


def _parse_thresholds(raw: dict[str, Any]) -> ClassificationThresholds:
    adequate = float(raw.get("adequate", 1.0))
    poor = float(raw.get("poor", 0.5))
    if poor < 0 or adequate < poor:
        raise ValueError(f"Classification thresholds must satisfy 0 <= poor <= adequate (got poor={poor}, adequate={adequate})")
    return ClassificationThresholds(adequate=adequate, poor=poor)


def build_model_config(settings: dict[str, Any]) -> ModelConfig:
    model = settings.get("model", {}) or {}
    scoring = settings.get("scoring", {}) or {}
    bounds = model.get("alpha_bounds", [0.0, 1.0])
    if len(bounds) != 2 or float(bounds[0]) > float(bounds[1]):
        raise ValueError(f"model.alpha_bounds must be [low, high] (got {bounds!r})")
    periods = int(model.get("periods_per_year", 52))
    if periods <= 0:
        raise ValueError("model.periods_per_year must be > 0")
    return ModelConfig(
        alpha=float(model.get("alpha", 0.15)),
        alpha_bounds=(float(bounds[0]), float(bounds[1])),
        sigma=float(model.get("sigma", 60.0)),
        periods_per_year=periods,
        thresholds=_parse_thresholds(scoring.get("thresholds", {}) or {}),
    )


def build_two_clinic_example(settings: dict[str, Any]) -> TwoClinicExample:
    raw = settings.get("example", {}) or {}
    clinics_raw = raw.get("clinics")
    if not clinics_raw:
        return TwoClinicExample(population=int(raw.get("population", 2988)))
    clinics = tuple(
        ExampleClinic(
            name=str(c["name"]),
            distance_min=float(c["distance_min"]),
            appointments_per_week=float(c["appointments_per_week"]),
        )
        for c in clinics_raw
    )
    return TwoClinicExample(clinics=clinics, population=int(raw.get("population", 2988)))


def evaluate(
    route_or_distances: RouteParameters | Sequence[float],
    decay: DecayParameters,
    offers: Sequence[ProviderOffer],
    *,
    config: ModelConfig | None = None,
) -> AccessibilityResult:
    """
    Run complexity adjustment, decay weighting and catchment scoring in order.

    A `RouteParameters` is adjusted once and its adjusted time is used as the distance
    to every provider. A plain sequence of distances (one per offer) skips the
    adjustment. The scalar fields of the result describe the first provider; the
    per-provider breakdown carries all of them.
    """
    config = config or ModelConfig()
    sigma = check_sigma(decay.scale_sigma)

    if isinstance(route_or_distances, RouteParameters):
        route = route_or_distances
        adjusted = adjust_travel_time(
            route.base_travel_time,
            route.intersection_density,
            route.complexity_coefficient,
            alpha_bounds=config.alpha_bounds,
        )
        distances = [adjusted] * len(offers)
        headline_distance: float | None = adjusted
    else:
        distances = [float(d) for d in route_or_distances]
        if len(distances) != len(offers):
            raise InvalidParameter(
                "distances",
                list(route_or_distances),
                f"expected one distance per provider ({len(offers)}), got {len(distances)}",
            )
        headline_distance = distances[0] if distances else None

    breakdown: list[ProviderBreakdown] = []
    pairs: list[tuple[ProviderOffer, float]] = []
    for offer, distance in zip(offers, distances):
        w = gaussian_weight(distance, sigma)
        ratio = supply_ratio(offer)
        pairs.append((offer, w))
        breakdown.append(
            ProviderBreakdown(
                name=offer.name,
                distance=distance,
                decay_weight=w,
                supply_ratio=ratio,
                contribution=ratio * w,
            )
        )

    score = score_catchment(
        pairs,
        thresholds=config.thresholds,
        periods_per_year=config.periods_per_year,
    )

    if headline_distance is None:
        adjusted_time, weight, ratio = 0.0, 0.0, 0.0
    elif breakdown:
        adjusted_time = headline_distance
        weight = breakdown[0].decay_weight
        ratio = breakdown[0].supply_ratio
    else:
        adjusted_time = headline_distance
        weight = gaussian_weight(headline_distance, sigma)
        ratio = 0.0

    logger.debug(
        "Evaluated %d provider(s): annual=%.6f classification=%s",
        len(breakdown),
        score.annual_score,
        score.classification.value,
    )
    return AccessibilityResult(
        adjusted_travel_time=adjusted_time,
        decay_weight=weight,
        supply_ratio=ratio,
        weekly_score=score.weekly_score,
        annual_score=score.annual_score,
        classification=score.classification,
        providers=tuple(breakdown),
    )


def evaluate_calculator(inputs: CalculatorInputs, *, config: ModelConfig | None = None) -> AccessibilityResult:
    config = config or ModelConfig()
    route = RouteParameters(
        base_travel_time=inputs.travel_time,
        intersection_density=inputs.intersection_density,
        complexity_coefficient=config.alpha,
    )
    offer = ProviderOffer(
        appointment_capacity=inputs.appointments,
        competing_population=inputs.population,
    )
    return evaluate(route, DecayParameters(scale_sigma=config.sigma), [offer], config=config)


def evaluate_two_clinic_example(
    sigma: float | None = None,
    *,
    example: TwoClinicExample | None = None,
    config: ModelConfig | None = None,
) -> AccessibilityResult:
    config = config or ModelConfig()
    example = example or TwoClinicExample()
    offers = [
        ProviderOffer(
            appointment_capacity=c.appointments_per_week,
            competing_population=example.population,
            name=c.name,
        )
        for c in example.clinics
    ]
    distances = [c.distance_min for c in example.clinics]
    decay = DecayParameters(scale_sigma=config.sigma if sigma is None else sigma)
    return evaluate(distances, decay, offers, config=config)
