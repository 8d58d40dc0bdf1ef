"""
Validation errors shared by the pallet stacking models and planner.
"""

from __future__ import annotations

import math

# Smallest accepted dimension in mm (0.01 mm resolution).
MIN_DIMENSION = 0.01


class InvalidDimension(ValueError):
    """Raised when a dimension or height limit is zero, negative or not finite."""

    def __init__(self, name: str, value: object, requirement: str = "positive") -> None:
        super().__init__(f"{name} must be {requirement} and finite, got {value!r}")
        self.name = name
        self.value = value


def require_number(name: str, value: object) -> float:
    """Coerce ``value`` to float, raising ``InvalidDimension`` when it is not numeric."""
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidDimension(name, value, "numeric") from exc


def _as_finite(name: str, value: float, requirement: str) -> float:
    number = require_number(name, value)
    if not math.isfinite(number):
        raise InvalidDimension(name, value, requirement)
    return number


def require_positive(name: str, value: float) -> float:
    number = _as_finite(name, value, f"at least {MIN_DIMENSION:g}")
    if number < MIN_DIMENSION:
        raise InvalidDimension(name, value, f"at least {MIN_DIMENSION:g}")
    return number


def require_non_negative(name: str, value: float) -> float:
    number = _as_finite(name, value, "non-negative")
    if number < 0:
        raise InvalidDimension(name, value, "non-negative")
    return number
