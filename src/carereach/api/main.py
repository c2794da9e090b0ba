from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from carereach.api.schemas import (
    AccessibilityResultOut,
    CalculatorRequest,
    DecayPoint,
    ProviderBreakdownOut,
    RouteComparison,
    ScoreRequest,
)
from carereach.errors import InvalidParameter
from carereach.inputs import calculator_inputs_from_fields
from carereach.scoring.accessibility import (
    build_model_config,
    build_two_clinic_example,
    evaluate,
    evaluate_calculator,
    evaluate_two_clinic_example,
)
from carereach.scoring.complexity import compare_routes
from carereach.scoring.decay import decay_curve
from carereach.scoring.explain import (
    LABELS,
    build_explain_payload,
    build_explain_text,
    classification_message,
    format_result,
)
from carereach.scoring.model import AccessibilityResult, DecayParameters, ModelConfig, ProviderOffer, RouteParameters
from carereach.settings import load_settings

logger = logging.getLogger("carereach.api")

app = FastAPI(title="CareReach API", version="0.1.0")

CONFIG_PATH = Path(os.getenv("CAREREACH_CONFIG", "config/default.yaml")).resolve()
DEFAULT_SCENARIO = os.getenv("CAREREACH_SCENARIO", "baseline")


@lru_cache(maxsize=8)
def _settings_for_scenario(scenario: str) -> dict[str, Any]:
    return load_settings(CONFIG_PATH, scenario=scenario)


def _config_for(scenario: str) -> tuple[dict[str, Any], ModelConfig]:
    settings = _settings_for_scenario(scenario)
    return settings, build_model_config(settings)


def _result_out(result: AccessibilityResult, *, config: ModelConfig, sigma: float) -> AccessibilityResultOut:
    payload = build_explain_payload(result, config=config, sigma=sigma)
    return AccessibilityResultOut(
        adjusted_travel_time=result.adjusted_travel_time,
        decay_weight=result.decay_weight,
        supply_ratio=result.supply_ratio,
        weekly_score=result.weekly_score,
        annual_score=result.annual_score,
        classification=result.classification.value,
        label=LABELS[result.classification],
        message=classification_message(result.classification, config),
        providers=[
            ProviderBreakdownOut(
                name=p.name,
                distance=p.distance,
                decay_weight=p.decay_weight,
                supply_ratio=p.supply_ratio,
                contribution=p.contribution,
            )
            for p in result.providers
        ],
        display=format_result(result),
        explain_text=build_explain_text(payload),
    )


@app.exception_handler(InvalidParameter)
async def _invalid_parameter_handler(request: Request, exc: InvalidParameter) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc), "parameter": exc.name})


@app.get("/health")
def health() -> dict[str, Any]:
    return {"status": "ok"}


@app.get("/config")
def get_config(scenario: str = Query(DEFAULT_SCENARIO)) -> dict[str, Any]:
    settings, _ = _config_for(scenario)
    return {
        "meta": settings.get("_meta", {}),
        "model": settings.get("model", {}),
        "scoring": settings.get("scoring", {}),
        "defaults": settings.get("defaults", {}),
    }


@app.post("/score", response_model=AccessibilityResultOut)
def score(req: ScoreRequest, scenario: str = Query(DEFAULT_SCENARIO)) -> AccessibilityResultOut:
    _, config = _config_for(scenario)
    if (req.route is None) == (req.distances is None):
        raise HTTPException(status_code=400, detail="Provide exactly one of 'route' or 'distances'")

    if req.route is not None:
        alpha = req.route.complexity_coefficient
        route_or_distances: RouteParameters | list[float] = RouteParameters(
            base_travel_time=req.route.base_travel_time,
            intersection_density=req.route.intersection_density,
            complexity_coefficient=config.alpha if alpha is None else alpha,
        )
    else:
        route_or_distances = list(req.distances or [])

    sigma = config.sigma if req.sigma is None else req.sigma
    offers = [
        ProviderOffer(
            appointment_capacity=o.appointment_capacity,
            competing_population=o.competing_population,
            name=o.name,
        )
        for o in req.offers
    ]
    result = evaluate(route_or_distances, DecayParameters(scale_sigma=sigma), offers, config=config)
    return _result_out(result, config=config, sigma=sigma)


@app.post("/calculator", response_model=AccessibilityResultOut)
def calculator(req: CalculatorRequest, scenario: str = Query(DEFAULT_SCENARIO)) -> AccessibilityResultOut:
    settings, config = _config_for(scenario)
    inputs = calculator_inputs_from_fields(req.model_dump(), settings.get("defaults", {}) or {})
    result = evaluate_calculator(inputs, config=config)
    return _result_out(result, config=config, sigma=config.sigma)


@app.get("/example", response_model=AccessibilityResultOut)
def example(
    sigma: float | None = Query(None),
    scenario: str = Query(DEFAULT_SCENARIO),
) -> AccessibilityResultOut:
    settings, config = _config_for(scenario)
    sigma_used = config.sigma if sigma is None else sigma
    result = evaluate_two_clinic_example(sigma_used, example=build_two_clinic_example(settings), config=config)
    return _result_out(result, config=config, sigma=sigma_used)


@app.get("/decay-curve", response_model=list[DecayPoint])
def get_decay_curve(
    sigma: float | None = Query(None),
    scenario: str = Query(DEFAULT_SCENARIO),
) -> list[DecayPoint]:
    settings, config = _config_for(scenario)
    curve_cfg = settings.get("decay_curve", {}) or {}
    df = decay_curve(
        config.sigma if sigma is None else sigma,
        max_distance=float(curve_cfg.get("max_distance_min", 120)),
        step=float(curve_cfg.get("step_min", 2)),
    )
    return [DecayPoint(**row) for row in df.to_dict(orient="records")]


@app.get("/routes", response_model=list[RouteComparison])
def get_routes(
    alpha: float | None = Query(None),
    scenario: str = Query(DEFAULT_SCENARIO),
) -> list[RouteComparison]:
    settings, config = _config_for(scenario)
    df = compare_routes(
        settings.get("routes"),
        alpha=config.alpha if alpha is None else alpha,
        alpha_bounds=config.alpha_bounds,
    )
    return [RouteComparison(**row) for row in df.to_dict(orient="records")]
