"""
Numerical guards shared by every kernel of the climate response model.

The model never lets a NaN or infinity escape a kernel: each operation that
can leave the real line (log, division, acos/asin, exp) goes through one of
the helpers below, and every helper falls back to a caller-chosen finite
value. The exception types defined here are raised only inside the point
solver, which converts them into a fallback result.
"""

import math
from typing import Optional


class ClimateModelError(Exception):
    """Base class for errors raised inside the climate response model."""


class NumericFailure(ClimateModelError):
    """A non-finite intermediate value was produced or supplied."""


class DomainOutOfRange(ClimateModelError):
    """A parameter lies outside its documented paleoclimate range."""


def is_finite(value) -> bool:
    """Return True when ``value`` is a real, finite number."""
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def finite_or(value, fallback: float) -> float:
    """
    Return ``value`` as a float when finite, else ``fallback``.

    Parameters
    ----------
    value : float
        Candidate value (may be NaN, ±inf or not a number at all).
    fallback : float
        Finite replacement.

    Returns
    -------
    float
    """
    if is_finite(value):
        return float(value)
    return fallback


def require_finite(name: str, value) -> float:
    """Return ``value`` as a float or raise :class:`NumericFailure`."""
    if not is_finite(value):
        raise NumericFailure(f"{name} is not finite: {value!r}")
    return float(value)


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp ``value`` into ``[lower, upper]``."""
    if lower > upper:
        raise ValueError(f"lower ({lower}) must not exceed upper ({upper})")
    return max(lower, min(upper, value))


def safe_log(value: float, floor: float = 1e-12, fallback: float = 0.0) -> float:
    """Natural log of ``max(value, floor)``; ``fallback`` for non-finite input."""
    if not is_finite(value):
        return fallback
    return math.log(max(value, floor))


def safe_divide(
    numerator: float,
    denominator: float,
    fallback: float = 0.0,
    eps: float = 1e-12,
) -> float:
    """Divide, returning ``fallback`` when the denominator is ~0 or the result is not finite."""
    if not (is_finite(numerator) and is_finite(denominator)):
        return fallback
    if abs(denominator) < eps:
        return fallback
    return finite_or(numerator / denominator, fallback)


def safe_acos(value: float) -> float:
    """acos with its argument clamped to [-1, 1]."""
    return math.acos(clamp(finite_or(value, 0.0), -1.0, 1.0))


def safe_asin(value: float) -> float:
    """asin with its argument clamped to [-1, 1]."""
    return math.asin(clamp(finite_or(value, 0.0), -1.0, 1.0))


def safe_exp(value: float, limit: float = 50.0) -> float:
    """exp of ``value`` clipped to ``[-limit, limit]``."""
    return math.exp(clamp(finite_or(value, 0.0), -limit, limit))


def first_non_finite(**values: float) -> Optional[str]:
    """Return the name of the first non-finite keyword argument, or None."""
    for name, value in values.items():
        if not is_finite(value):
            return name
    return None
