from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from carereach.errors import InvalidParameter
from carereach.settings import load_settings

logger = logging.getLogger("carereach.cli")


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default="config/default.yaml", help="Path to config YAML")
    common.add_argument("--scenario", default="baseline", help="Scenario name (config/scenarios/<name>.yaml)")
    common.add_argument("--json", action="store_true", help="Print machine-readable JSON")

    parser = argparse.ArgumentParser(prog="carereach", description="CareReach accessibility model", parents=[common])

    sub = parser.add_subparsers(dest="command", required=True)
    calc = sub.add_parser("calculate", parents=[common], help="Score one provider from calculator fields")
    calc.add_argument("--travel-time", default=None, help="Base travel time (minutes)")
    calc.add_argument("--intersections", default=None, help="Intersection density (per minute)")
    calc.add_argument("--appointments", default=None, help="Appointments per week")
    calc.add_argument("--population", default=None, help="Competing population")

    example = sub.add_parser("example", parents=[common], help="Score the two-clinic walkthrough")
    example.add_argument("--sigma", type=float, default=None, help="Decay scale (minutes); defaults to config")

    curve = sub.add_parser("decay-curve", parents=[common], help="Print the Gaussian decay curve")
    curve.add_argument("--sigma", type=float, default=None, help="Decay scale (minutes); defaults to config")

    routes = sub.add_parser("routes", parents=[common], help="Compare complexity-adjusted route times")
    routes.add_argument("--alpha", type=float, default=None, help="Complexity coefficient; defaults to config")

    sub.add_parser("api-info", parents=[common], help="Print API run instructions")
    return parser


def _print_result(result: Any, *, config: Any, sigma: float, as_json: bool) -> None:
    from carereach.scoring.explain import build_explain_payload, build_explain_text, format_result

    payload = build_explain_payload(result, config=config, sigma=sigma)
    if as_json:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return
    for key, value in format_result(result).items():
        print(f"{key:>24}: {value}")
    print(build_explain_text(payload))


def _run(args: argparse.Namespace, settings: dict[str, Any]) -> None:
    from carereach.scoring.accessibility import build_model_config

    config = build_model_config(settings)

    if args.command == "api-info":
        api = settings.get("api", {}) or {}
        host = api.get("host", "127.0.0.1")
        port = api.get("port", 8000)
        print(f"Run: uvicorn carereach.api.main:app --reload --host {host} --port {port}")
        return

    if args.command == "calculate":
        from carereach.inputs import calculator_inputs_from_fields
        from carereach.scoring.accessibility import evaluate_calculator

        fields = {
            "travel_time": args.travel_time,
            "intersection_density": args.intersections,
            "appointments": args.appointments,
            "population": args.population,
        }
        inputs = calculator_inputs_from_fields(fields, settings.get("defaults", {}) or {})
        result = evaluate_calculator(inputs, config=config)
        _print_result(result, config=config, sigma=config.sigma, as_json=args.json)
        return

    if args.command == "example":
        from carereach.scoring.accessibility import build_two_clinic_example, evaluate_two_clinic_example

        sigma = config.sigma if args.sigma is None else args.sigma
        result = evaluate_two_clinic_example(sigma, example=build_two_clinic_example(settings), config=config)
        _print_result(result, config=config, sigma=sigma, as_json=args.json)
        return

    if args.command == "decay-curve":
        from carereach.scoring.decay import decay_curve

        curve_cfg = settings.get("decay_curve", {}) or {}
        sigma = config.sigma if args.sigma is None else args.sigma
        df = decay_curve(
            sigma,
            max_distance=float(curve_cfg.get("max_distance_min", 120)),
            step=float(curve_cfg.get("step_min", 2)),
        )
        if args.json:
            print(df.to_json(orient="records"))
        else:
            print(df.to_string(index=False, float_format=lambda v: f"{v:.3f}"))
        return

    if args.command == "routes":
        from carereach.scoring.complexity import compare_routes

        alpha = config.alpha if args.alpha is None else args.alpha
        df = compare_routes(settings.get("routes"), alpha=alpha, alpha_bounds=config.alpha_bounds)
        if args.json:
            print(df.to_json(orient="records"))
        else:
            print(df.to_string(index=False, float_format=lambda v: f"{v:.1f}"))
        return

    raise SystemExit(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = load_settings(Path(args.config), scenario=args.scenario)
    try:
        _run(args, settings)
    except InvalidParameter as e:
        logger.error("Rejected input: %s", e)
        if args.json:
            print(json.dumps({"error": str(e), "parameter": e.name}), file=sys.stderr)
        else:
            print(f"error: {e}", file=sys.stderr)
        raise SystemExit(2) from e


if __name__ == "__main__":
    main()
