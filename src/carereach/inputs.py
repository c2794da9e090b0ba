"""
Field parsing for user-editable inputs (CLI flags, API query values, calculator forms).

The scoring model refuses bad values outright; this is the layer that decides to fall
back to a documented default instead. Fields are read the way the calculator form reads
them: the leading numeric part counts ("12abc" -> 12, "41.9" as an integer -> 41), and a
field with no numeric prefix, a non-finite value, or zero is treated as "not provided".
"""

from __future__ import annotations

import math
import re
from typing import Any

from carereach.scoring.accessibility import CalculatorInputs

_FLOAT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"[+-]?\d+")


def parse_number(raw: Any, default: float, *, integer: bool = False) -> float:
    if raw is None:
        return default
    text = raw.strip() if isinstance(raw, str) else str(raw)
    match = (_INT_PREFIX if integer else _FLOAT_PREFIX).match(text)
    if match is None:
        return default
    value = float(match.group(0))
    if not math.isfinite(value) or value == 0:
        return default
    if integer:
        return int(value)
    return value


def calculator_inputs_from_fields(fields: dict[str, Any], defaults: dict[str, Any]) -> CalculatorInputs:
    base = CalculatorInputs()
    return CalculatorInputs(
        travel_time=parse_number(fields.get("travel_time"), float(defaults.get("travel_time", base.travel_time))),
        intersection_density=parse_number(
            fields.get("intersection_density"),
            float(defaults.get("intersection_density", base.intersection_density)),
        ),
        appointments=int(
            parse_number(fields.get("appointments"), int(defaults.get("appointments", base.appointments)), integer=True)
        ),
        population=int(
            parse_number(fields.get("population"), int(defaults.get("population", base.population)), integer=True)
        ),
    )
