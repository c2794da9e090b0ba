from __future__ import annotations

from typing import Any

from carereach.scoring.model import AccessibilityResult, Classification, ModelConfig

LABELS = {
    Classification.ADEQUATE: "ADEQUATE ACCESS",
    Classification.POOR: "POOR ACCESS",
    Classification.DESERT: "GP DESERT",
}


def classification_message(classification: Classification, config: ModelConfig) -> str:
    t = config.thresholds
    if classification is Classification.POOR:
        return f"Below adequate threshold of {t.adequate:.1f}"
    if classification is Classification.DESERT:
        return f"Critical shortage - less than {t.poor:.1f}"
    return ""


def format_result(result: AccessibilityResult) -> dict[str, str]:
    """Display strings for a result; the model itself never rounds."""
    out = {
        "adjusted_travel_time": f"{result.adjusted_travel_time:.2f}",
        "decay_weight": f"{result.decay_weight:.3f}",
        "supply_ratio": f"{result.supply_ratio:.4f}",
        "weekly_score": f"{result.weekly_score:.4f}",
        "annual_score": f"{result.annual_score:.2f}",
        "classification": LABELS[result.classification],
    }
    for i, p in enumerate(result.providers):
        key = p.name or f"provider_{i + 1}"
        out[f"{key} weight"] = f"{p.decay_weight:.2f}"
        out[f"{key} ratio"] = f"{p.supply_ratio:.4f}"
    return out


def build_explain_payload(result: AccessibilityResult, *, config: ModelConfig, sigma: float) -> dict[str, Any]:
    return {
        "method": "e2sfca_gaussian_complexity",
        "parameters": {
            "alpha": float(config.alpha),
            "sigma": float(sigma),
            "periods_per_year": int(config.periods_per_year),
        },
        "thresholds": {
            "adequate": float(config.thresholds.adequate),
            "poor": float(config.thresholds.poor),
        },
        "adjusted_travel_time": result.adjusted_travel_time,
        "decay_weight": result.decay_weight,
        "supply_ratio": result.supply_ratio,
        "weekly_score": result.weekly_score,
        "annual_score": result.annual_score,
        "classification": result.classification.value,
        "message": classification_message(result.classification, config),
        "components": [
            {
                "name": p.name,
                "distance_min": p.distance,
                "decay_weight": p.decay_weight,
                "supply_ratio": p.supply_ratio,
                "contribution_weekly": p.contribution,
            }
            for p in result.providers
        ],
    }


def build_explain_text(explain_payload: dict[str, Any]) -> str:
    annual = float(explain_payload.get("annual_score", 0.0))
    classification = Classification(explain_payload.get("classification", Classification.DESERT.value))
    parts = [f"{LABELS[classification]}: {annual:.2f} appointments/person/year."]
    message = explain_payload.get("message")
    if message:
        parts.append(f"{message}.")

    comps = list(explain_payload.get("components", []))
    comps_sorted = sorted(comps, key=lambda x: float(x.get("contribution_weekly", 0.0)), reverse=True)
    if comps_sorted:
        drivers = []
        for i, c in enumerate(comps_sorted[:3], start=1):
            name = c.get("name") or f"provider {i}"
            drivers.append(
                f"{name} {float(c.get('distance_min', 0.0)):.1f} min "
                f"(weight {float(c.get('decay_weight', 0.0)):.2f})"
            )
        parts.append("Top providers: " + "; ".join(drivers) + ".")
    return " ".join(parts)
