"""
Scientific validation of the presets and the model.

Four groups of checks:

1. Orbital parameters (and the PETM CO2 level) of every preset lie within
   PARAMETER_RANGES.
2. The regional mean of every preset at s = 0.5 and a 5000-year response
   time falls inside the preset's reconstructed temperature range.
3. CO2 forcing increases strictly across 180, 280, 400, 560, 800, 1500 ppm.
4. At 65°N the present-day insolation at s = 0.25 exceeds that at s = 0.75.

Checks never raise; failures are recorded in the report.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from milankovic.core.forcing import co2_forcing
from milankovic.core.guards import DomainOutOfRange
from milankovic.core.insolation import baseline_insolation
from milankovic.core.model import regional_temperatures
from milankovic.scenarios import PARAMETER_RANGES, PRESETS, Preset

logger = logging.getLogger(__name__)

CO2_MONOTONICITY_LEVELS = (180.0, 280.0, 400.0, 560.0, 800.0, 1500.0)
VALIDATION_SEASON = 0.5
VALIDATION_TIME_SCALE = 5000.0
INSOLATION_LATITUDE = 65.0


@dataclass(frozen=True)
class CheckResult:
    """Outcome of a single check."""

    name: str
    passed: bool
    diagnostics: Sequence[str] = ()

    def line(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        detail = f" ({'; '.join(self.diagnostics)})" if self.diagnostics else ""
        return f"[{status}] {self.name}{detail}"


@dataclass
class ValidationReport:
    """Collected check results; the caller decides how to render them."""

    checks: List[CheckResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failures(self) -> List[CheckResult]:
        return [c for c in self.checks if not c.passed]

    def add(self, check: CheckResult) -> None:
        self.checks.append(check)

    def get(self, name: str) -> CheckResult:
        for check in self.checks:
            if check.name == name:
                return check
        raise KeyError(name)

    def lines(self) -> List[str]:
        out = [c.line() for c in self.checks]
        out.append(f"OVERALL: {'PASS' if self.passed else 'FAIL'} "
                   f"({len(self.checks) - len(self.failures)}/{len(self.checks)} checks passed)")
        return out

    def to_dict(self) -> Dict[str, object]:
        return {
            "passed": self.passed,
            "checks": [
                {"name": c.name, "passed": c.passed, "diagnostics": list(c.diagnostics)}
                for c in self.checks
            ],
        }


def _require_within(label: str, value: float, lower: float, upper: float) -> None:
    if not lower <= value <= upper:
        raise DomainOutOfRange(f"{label}={value} outside [{lower}, {upper}]")


def _run_check(name: str, func: Callable[[], List[str]]) -> CheckResult:
    """
    Run ``func``; it returns diagnostics (empty on success) or raises.

    DomainOutOfRange and any other exception turn into a failed check.
    """
    try:
        problems = func()
    except DomainOutOfRange as e:
        return CheckResult(name, False, (str(e),))
    except Exception as e:
        logger.debug(f"Check {name} raised", exc_info=True)
        return CheckResult(name, False, (f"{type(e).__name__}: {e}",))
    return CheckResult(name, not problems, tuple(problems))


def check_parameter_ranges(preset: Preset) -> CheckResult:
    """
    Orbital parameters within PARAMETER_RANGES; PETM CO2 within its range.

    OrbitalState stores precession modulo 360, so any finite precession
    lands in [0, 360) and passes; the precession check only rejects
    non-finite values.
    """

    def run() -> List[str]:
        problems = []
        orbit = preset.orbit
        for label, value in (
            ("eccentricity", orbit.eccentricity),
            ("axial_tilt", orbit.axial_tilt),
            ("precession", orbit.precession),
        ):
            bounds = PARAMETER_RANGES[label]
            try:
                _require_within(label, value, bounds["min"], bounds["max"])
            except DomainOutOfRange as e:
                problems.append(str(e))
        if preset.key == "petm":
            lower, upper = PARAMETER_RANGES["co2"]["petm"]
            try:
                _require_within("co2", preset.co2, lower, upper)
            except DomainOutOfRange as e:
                problems.append(str(e))
        return problems

    return _run_check(f"parameters: {preset.name}", run)


def check_temperature(preset: Preset) -> CheckResult:
    """Regional mean at s = 0.5 and τ = 5000 y within the expected range."""

    def run() -> List[str]:
        inputs = preset.inputs(season=VALIDATION_SEASON, time_scale_years=VALIDATION_TIME_SCALE)
        region = regional_temperatures(inputs, name=preset.name)
        lower, upper = preset.expected_temp_range
        problems = []
        if region.n_errors:
            problems.append(f"{region.n_errors} band(s) fell back")
        try:
            _require_within("global_temperature", region.global_temperature, lower, upper)
        except DomainOutOfRange as e:
            problems.append(str(e))
        return problems

    return _run_check(f"temperature: {preset.name}", run)


def check_co2_monotonicity(levels: Iterable[float] = CO2_MONOTONICITY_LEVELS) -> CheckResult:
    """CO2 forcing strictly increasing in concentration."""

    def run() -> List[str]:
        levels_ = list(levels)
        forcings = [co2_forcing(c) for c in levels_]
        problems = []
        for (c1, f1), (c2, f2) in zip(zip(levels_, forcings), zip(levels_[1:], forcings[1:])):
            if not f2 > f1:
                problems.append(f"F({c2:g})={f2:.3f} not above F({c1:g})={f1:.3f}")
        return problems

    return _run_check("co2 forcing monotonicity", run)


def check_insolation_pattern(latitude: float = INSOLATION_LATITUDE) -> CheckResult:
    """Present-day insolation at s = 0.25 above that at s = 0.75."""

    def run() -> List[str]:
        q_early = baseline_insolation(latitude, 0.25)
        q_late = baseline_insolation(latitude, 0.75)
        if q_early > q_late:
            return []
        return [f"Q({latitude:g}, 0.25)={q_early:.1f} W/m² not above Q({latitude:g}, 0.75)={q_late:.1f} W/m²"]

    return _run_check("insolation pattern", run)


def validate(presets: Optional[Iterable[Preset]] = None) -> ValidationReport:
    """
    Run every check and return the report.

    Parameters
    ----------
    presets : iterable of Preset, optional
        Presets to check. Defaults to the built-in catalog.
    """
    presets = list(PRESETS.values()) if presets is None else list(presets)
    report = ValidationReport()

    for preset in presets:
        report.add(check_parameter_ranges(preset))
    for preset in presets:
        report.add(check_temperature(preset))
    report.add(check_co2_monotonicity())
    report.add(check_insolation_pattern())

    logger.debug(f"Validation finished: {len(report.failures)} of {len(report.checks)} checks failed")
    return report
