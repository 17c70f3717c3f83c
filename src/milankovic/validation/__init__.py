"""Parameter and model validation."""

from milankovic.validation.validator import (
    CheckResult,
    ValidationReport,
    check_co2_monotonicity,
    check_insolation_pattern,
    check_parameter_ranges,
    check_temperature,
    validate,
)

__all__ = [
    "CheckResult",
    "ValidationReport",
    "check_co2_monotonicity",
    "check_insolation_pattern",
    "check_parameter_ranges",
    "check_temperature",
    "validate",
]
