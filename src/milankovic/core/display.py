"""Helpers for presenting temperatures on colour scales and animated readouts."""

from milankovic.core.guards import clamp, finite_or, is_finite


def normalize_temperature(temperature: float, min_temp: float = -30.0, max_temp: float = 30.0) -> float:
    """
    Map a temperature onto [0, 1] for colour scales.

    Values outside ``[min_temp, max_temp]`` saturate. A non-finite
    temperature maps to the middle of the scale; a degenerate range
    (``max_temp <= min_temp``) gives 0.5 as well.
    """
    if not is_finite(temperature):
        return 0.5
    span = max_temp - min_temp
    if not is_finite(span) or span <= 0:
        return 0.5
    return clamp((temperature - min_temp) / span, 0.0, 1.0)


def smooth_temperature(current: float, target: float, factor: float = 0.5) -> float:
    """
    Move ``current`` a fraction ``factor`` of the way toward ``target``.

    ``factor`` is clamped to [0, 1]. A non-finite target leaves ``current``
    unchanged; a non-finite current jumps straight to the target.
    """
    if not is_finite(target):
        return finite_or(current, 0.0)
    if not is_finite(current):
        return float(target)
    alpha = clamp(finite_or(factor, 0.5), 0.0, 1.0)
    return current + alpha * (target - current)
