from __future__ import annotations

from typing import Any


class InvalidParameter(ValueError):
    """
    Raised when a model input is outside its valid domain.

    The scoring functions never clamp or substitute defaults; callers that want a
    fallback (CLI, API, UI callbacks) catch this and decide for themselves.
    """

    def __init__(self, name: str, value: Any, reason: str) -> None:
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {name}={value!r}: {reason}")
