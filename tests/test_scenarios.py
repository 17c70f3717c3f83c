"""Tests for the preset catalog and the validation suite."""

import pytest

from milankovic import PARAMETER_RANGES, PRESETS, OrbitalState, get_preset, list_presets
from milankovic.scenarios import Preset, preset_inputs
from milankovic.validation import (
    CheckResult,
    ValidationReport,
    check_co2_monotonicity,
    check_insolation_pattern,
    check_parameter_ranges,
    check_temperature,
    validate,
)
from milankovic.validation.__main__ import main as validation_main


class TestPresets:
    def test_list_presets(self):
        presets = list_presets()
        assert presets == ["lgm", "mid_holocene", "mpt", "petm", "future"]

    def test_get_preset_by_key_name_and_alias(self):
        assert get_preset("lgm").co2 == 180.0
        assert get_preset("LGM").key == "lgm"
        assert get_preset("Mid-Holocene").key == "mid_holocene"
        assert get_preset("Last Glacial Maximum (21,000 BP)").key == "lgm"
        assert get_preset("glacial").key == "lgm"

    def test_invalid_preset(self):
        with pytest.raises(KeyError, match="Unknown preset"):
            get_preset("invalid")

    def test_preset_values(self):
        petm = PRESETS["petm"]
        assert petm.orbit.eccentricity == 0.052
        assert petm.co2 == 1500.0
        assert petm.year == -56_000_000
        lo, hi = petm.expected_temp_range
        assert lo < hi

    def test_preset_inputs(self):
        inputs = preset_inputs("mpt", season=0.5, time_scale_years=5000.0)
        assert inputs.orbit.precession == 275.0
        assert inputs.atmosphere.co2 == 240.0
        assert inputs.season == 0.5

    def test_to_dict(self):
        d = PRESETS["future"].to_dict()
        assert d["key"] == "future"
        assert d["axial_tilt"] == 23.2
        assert "description" in d

    def test_parameter_ranges_cover_presets(self):
        ecc = PARAMETER_RANGES["eccentricity"]
        for preset in PRESETS.values():
            assert ecc["min"] <= preset.orbit.eccentricity <= ecc["max"]


class TestChecks:
    def test_parameter_ranges_pass(self):
        for preset in PRESETS.values():
            result = check_parameter_ranges(preset)
            assert result.passed, result.diagnostics

    def test_precession_wrapped_before_range_check(self):
        preset = Preset(
            key="custom",
            name="Custom",
            orbit=OrbitalState(0.0167, 23.44, -45.0),
            co2=280.0,
            year=0,
            expected_temp_range=(0.0, 30.0),
            description="",
        )
        assert preset.orbit.precession == 315.0
        assert check_parameter_ranges(preset).passed

    def test_parameter_ranges_reject_out_of_window_orbit(self):
        preset = Preset(
            key="custom",
            name="Custom",
            orbit=OrbitalState(0.1, 25.0, float("nan")),
            co2=280.0,
            year=0,
            expected_temp_range=(0.0, 30.0),
            description="",
        )
        result = check_parameter_ranges(preset)
        assert not result.passed
        assert len(result.diagnostics) == 3
        assert any(d.startswith("precession=nan") for d in result.diagnostics)

    def test_co2_monotonicity_pass(self):
        assert check_co2_monotonicity().passed

    def test_co2_monotonicity_detects_plateau(self):
        result = check_co2_monotonicity([280.0, 280.0])
        assert not result.passed
        assert result.diagnostics

    def test_insolation_check_reports_values(self):
        result = check_insolation_pattern()
        assert result.name == "insolation pattern"
        assert not result.passed
        assert "not above" in result.diagnostics[0]

    def test_temperature_check_never_raises(self):
        result = check_temperature(PRESETS["lgm"])
        assert isinstance(result, CheckResult)
        assert result.name.startswith("temperature: ")
        assert not result.passed
        assert result.diagnostics[0].endswith("outside [-6.0, -2.0]")

    def test_line_format(self):
        assert CheckResult("x", True).line() == "[PASS] x"
        assert CheckResult("x", False, ("bad",)).line() == "[FAIL] x (bad)"


class TestValidationReport:
    def test_structure(self):
        report = validate()
        assert len(report.checks) == 2 * len(PRESETS) + 2
        assert report.passed == all(c.passed for c in report.checks)
        assert report.get("co2 forcing monotonicity").passed
        with pytest.raises(KeyError):
            report.get("missing")

    def test_failing_checks_at_medium_sensitivity(self):
        report = validate()
        assert not report.passed
        assert {c.name for c in report.failures} == {
            "temperature: Last Glacial Maximum (21,000 BP)",
            "temperature: Mid-Holocene Optimum (6,000 BP)",
            "temperature: Mid-Pleistocene Transition (800,000 BP)",
            "temperature: PETM (56 Million BP)",
            "temperature: Future Configuration (50,000 AP)",
            "insolation pattern",
        }
        assert all(c.passed for c in report.checks if c.name.startswith("parameters: "))

    def test_lines(self):
        report = validate([PRESETS["future"]])
        lines = report.lines()
        assert len(lines) == len(report.checks) + 1
        assert lines[-1].startswith("OVERALL: ")
        assert f"/{len(report.checks)} checks passed" in lines[-1]

    def test_empty_report_passes(self):
        report = ValidationReport()
        assert report.passed
        report.add(CheckResult("a", False, ("oops",)))
        assert not report.passed
        assert report.to_dict()["checks"][0]["diagnostics"] == ["oops"]

    def test_module_entry_point(self, capsys):
        status = validation_main()
        out = capsys.readouterr().out
        assert "OVERALL" in out
        assert status == 1
        assert "[FAIL] insolation pattern" in out
