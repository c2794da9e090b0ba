"""
Settings bootstrap for CareReach.

Every CLI command and API request reads model parameters through `load_settings()`:
a base YAML file plus an optional scenario override (e.g. a wider decay scale).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

# PyYAML keeps the model knobs (alpha, sigma, thresholds) human-editable.
import yaml

from carereach.log import configure_logging


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    # Never mutate the caller's mapping; scenarios override only the keys they name.
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> dict[str, Any]:
    # A missing file means "no overrides".
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML must be a mapping: {path}")
    return data


def _load_dotenv_if_present(dotenv_path: Path) -> None:
    if not dotenv_path.exists():
        return
    for raw_line in dotenv_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        # Existing environment variables win over .env values.
        os.environ.setdefault(key.strip(), value.strip().strip('"').strip("'"))


def _resolve_project_root(config_path: Path) -> Path:
    # config/default.yaml -> the repo root is the parent of `config/`.
    config_dir = config_path.resolve().parent
    if config_dir.name == "config":
        return config_dir.parent
    return config_dir


def load_settings(config_path: Path, scenario: str = "baseline") -> dict[str, Any]:
    """
    Load the base config and merge config/scenarios/<scenario>.yaml over it.
    Also creates the log directory and configures logging.
    """
    config_path = config_path.resolve()
    root = _resolve_project_root(config_path)

    _load_dotenv_if_present(root / ".env")

    base = _load_yaml(config_path)
    scenario_path = root / "config" / "scenarios" / f"{scenario}.yaml"
    settings = _deep_merge(base, _load_yaml(scenario_path))

    project = settings.setdefault("project", {})
    logs_dir = root / project.get("logs_dir", "logs")
    logger = configure_logging(logs_dir, level=str(project.get("log_level", "INFO")))

    settings["_meta"] = {
        "config_path": str(config_path),
        "scenario": scenario,
        "scenario_path": str(scenario_path),
    }
    settings["paths"] = {"root": str(root), "logs_dir": str(logs_dir)}
    logger.info("Loaded settings: config=%s scenario=%s", config_path, scenario)
    return settings
