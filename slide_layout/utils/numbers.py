"""
Numeric helpers shared by the geometry services.
"""
import math
from typing import Any


def round_numbers(obj: Any, digits: int = 2) -> Any:
    """Round every float nested in dicts/lists, leaving other values alone"""
    if isinstance(obj, bool):
        return obj
    if isinstance(obj, float):
        return round(obj, digits)
    elif isinstance(obj, dict):
        return {k: round_numbers(v, digits) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [round_numbers(item, digits) for item in obj]
    else:
        return obj


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def non_negative(value: float) -> float:
    """Collapse negative or NaN values to zero"""
    if value != value or value < 0:
        return 0.0
    return value


def scale_ratio(width: float, height: float, ref_width: float, ref_height: float) -> float:
    """Uniform scale that fits (width, height) against a reference canvas"""
    return min(width / ref_width, height / ref_height)


def capped_scale(value: float, reference: float, cap: float) -> float:
    """Linear scale against a reference, never above cap"""
    return min(value / reference, cap)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive inputs, matching slide tooling"""
    return int(math.floor(value + 0.5))


def is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
