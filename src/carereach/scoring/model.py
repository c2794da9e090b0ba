from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Classification(str, Enum):
    ADEQUATE = "ADEQUATE"
    POOR = "POOR"
    DESERT = "DESERT"


@dataclass(frozen=True)
class ClassificationThresholds:
    # Annual appointments per person; lower bounds are inclusive.
    adequate: float = 1.0
    poor: float = 0.5


@dataclass(frozen=True)
class ModelConfig:
    alpha: float = 0.15
    alpha_bounds: tuple[float, float] = (0.0, 1.0)
    sigma: float = 60.0
    periods_per_year: int = 52
    thresholds: ClassificationThresholds = field(default_factory=ClassificationThresholds)


@dataclass(frozen=True)
class RouteParameters:
    base_travel_time: float
    intersection_density: float
    complexity_coefficient: float = 0.15


@dataclass(frozen=True)
class DecayParameters:
    scale_sigma: float
    distance_or_time: float = 0.0


@dataclass(frozen=True)
class ProviderOffer:
    appointment_capacity: float
    competing_population: float
    name: str | None = None


@dataclass(frozen=True)
class CatchmentScore:
    weekly_score: float
    annual_score: float
    classification: Classification


@dataclass(frozen=True)
class ProviderBreakdown:
    name: str | None
    distance: float
    decay_weight: float
    supply_ratio: float
    contribution: float


@dataclass(frozen=True)
class AccessibilityResult:
    adjusted_travel_time: float
    decay_weight: float
    supply_ratio: float
    weekly_score: float
    annual_score: float
    classification: Classification
    providers: tuple[ProviderBreakdown, ...] = ()
