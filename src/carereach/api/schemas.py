from __future__ import annotations

from pydantic import BaseModel, Field


class ProviderOfferIn(BaseModel):
    appointment_capacity: float
    competing_population: float
    name: str | None = None


class RouteIn(BaseModel):
    base_travel_time: float
    intersection_density: float
    complexity_coefficient: float | None = None


class ScoreRequest(BaseModel):
    offers: list[ProviderOfferIn] = Field(default_factory=list)
    route: RouteIn | None = None
    distances: list[float] | None = None
    sigma: float | None = None


class CalculatorRequest(BaseModel):
    # Raw form values; empty or unparseable fields fall back to configured defaults.
    travel_time: str | float | None = None
    intersection_density: str | float | None = None
    appointments: str | float | None = None
    population: str | float | None = None


class ProviderBreakdownOut(BaseModel):
    name: str | None = None
    distance: float
    decay_weight: float
    supply_ratio: float
    contribution: float


class AccessibilityResultOut(BaseModel):
    adjusted_travel_time: float
    decay_weight: float
    supply_ratio: float
    weekly_score: float
    annual_score: float
    classification: str
    label: str
    message: str = ""
    providers: list[ProviderBreakdownOut] = Field(default_factory=list)
    display: dict[str, str] = Field(default_factory=dict)
    explain_text: str | None = None


class DecayPoint(BaseModel):
    distance_min: float
    weight: float = Field(ge=0.0, le=1.0)


class RouteComparison(BaseModel):
    name: str
    base_time_min: float
    intersection_density: float
    adjusted_time_min: float
    increase_pct: float
