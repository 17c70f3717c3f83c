"""Tests for the point solver and the ClimateModel facade."""

import math

import numpy as np
import pytest

from milankovic import (
    ClimateInputs,
    ClimateModel,
    Fallback,
    Ok,
    daily_insolation,
    enhanced_point_temperature,
    point_temperature,
    solve_point,
)

from milankovic.core.feedbacks import base_temperature
from milankovic.core.model import fallback_result, sensitivity_for


class TestPointTemperature:
    def test_bounded_and_finite(self, present_day):
        for lat in np.linspace(-90, 90, 19):
            for s in np.linspace(0, 1, 12, endpoint=False):
                result = point_temperature(present_day.replace(latitude=float(lat), season=float(s)))
                assert math.isfinite(result.temperature)
                assert -60.0 <= result.temperature <= 60.0
                assert 0.0 <= result.ice_factor <= 1.0
                assert not result.calculation_error

    def test_temperature_is_sum_of_effects(self, present_day):
        result = point_temperature(present_day.replace(latitude=30.0, temp_offset=1.5))
        total = result.base_temperature + sum(result.effects.values())
        assert result.temperature == pytest.approx(total)
        assert result.offset_effect == 1.5

    def test_solve_point_ok(self, present_day):
        outcome = solve_point(present_day)
        assert isinstance(outcome, Ok)
        assert not outcome.is_fallback
        assert outcome.result.is_valid

    def test_latitude_override(self, present_day):
        outcome = solve_point(present_day, latitude=-65.0)
        direct = point_temperature(present_day.replace(latitude=-65.0))
        assert outcome.result == direct

    def test_greenhouse_effect_grouping(self, present_day):
        result = point_temperature(present_day)
        assert result.greenhouse_effect == pytest.approx(1.7 * result.co2_effect)

    def test_co2_monotone(self, present_day):
        inputs = present_day.replace(latitude=65.0, time_scale_years=1000.0)
        temps = [point_temperature(inputs.with_co2(c)).temperature for c in (180, 280, 415, 560, 1000, 2000)]
        assert all(b >= a for a, b in zip(temps, temps[1:]))


class TestSolverCoefficients:
    """Each effect against a closed form written with literal coefficients."""

    LGM_ORBIT = (0.019, 22.99, 114.0)
    PRESENT_ORBIT = (0.0167, 23.44, 0.0)

    CASES = [
        # latitude, season, orbit, co2, base temperature
        (30.0, 0.3, LGM_ORBIT, 560.0, 15.0),
        (65.0, 0.5, PRESENT_ORBIT, 415.0, -5.0),
        (-65.0, 0.5, PRESENT_ORBIT, 415.0, -4.0),
    ]

    @staticmethod
    def _expected(lat, season, orbit, co2, t0, time_scale_years):
        q = daily_insolation(lat, season, *orbit)
        q_base = daily_insolation(lat, season, 0.0167, 23.44, 0.0)
        e_ins = 10.0 * (q - q_base) / q_base
        e_co2 = 0.75 * 5.35 * math.log(co2 / 280.0)
        e_wv = 0.6 * e_co2
        e_cl = 0.1 * e_co2
        preliminary = t0 + e_ins + e_co2 + e_wv + e_cl
        phi = math.radians(lat)
        ice = 1.0 / (1.0 + math.exp((preliminary - 2.0 * math.cos(phi)) / 1.5))
        e_ice = -(0.5 + 3.5 * math.sin(phi) ** 2) * ice
        phase = -math.pi / 2 if lat >= 0 else math.pi / 2
        e_season = 20.0 * math.sin(abs(phi)) * math.sin(2 * math.pi * season + phase)
        if time_scale_years > 0:
            r_atm = 1.0 - math.exp(-time_scale_years / 1.0)
            r_ice = 1.0 - math.exp(-time_scale_years / 5000.0)
        else:
            r_atm = r_ice = 1.0
        return {
            "ice_factor": ice,
            "insolation_effect": e_ins,
            "co2_effect": e_co2 * r_atm,
            "water_vapor_effect": e_wv * r_atm,
            "cloud_effect": e_cl * r_atm,
            "ice_albedo_effect": e_ice * r_ice,
            "seasonal_effect": e_season,
        }

    @pytest.mark.parametrize("time_scale_years", [0.0, 1000.0])
    @pytest.mark.parametrize("lat, season, orbit, co2, t0", CASES)
    def test_effects_match_closed_form(self, lat, season, orbit, co2, t0, time_scale_years):
        inputs = ClimateInputs.from_values(
            *orbit, co2=co2, latitude=lat, season=season, time_scale_years=time_scale_years
        )
        result = point_temperature(inputs)
        expected = self._expected(lat, season, orbit, co2, t0, time_scale_years)

        assert not result.calculation_error
        assert result.base_temperature == t0
        assert result.sensitivity_used == 0.75
        for name, value in expected.items():
            assert getattr(result, name) == pytest.approx(value, rel=1e-9, abs=1e-12), name
        total = t0 + sum(v for k, v in expected.items() if k != "ice_factor")
        assert total < 60.0
        assert result.temperature == pytest.approx(total, rel=1e-9)

    def test_cases_exercise_insolation_and_ice(self):
        lat, season, orbit, co2, t0 = self.CASES[0]
        glacial_orbit = self._expected(lat, season, orbit, co2, t0, 0.0)
        assert glacial_orbit["insolation_effect"] > 1.0
        for lat, season, orbit, co2, t0 in self.CASES[1:]:
            expected = self._expected(lat, season, orbit, co2, t0, 0.0)
            assert 0.5 < expected["ice_factor"] < 0.99


class TestFallback:
    def test_nan_eccentricity(self):
        inputs = ClimateInputs.from_values(eccentricity=float("nan"), latitude=45.0, season=0.5)
        outcome = solve_point(inputs)
        assert isinstance(outcome, Fallback)
        assert outcome.is_fallback
        assert "eccentricity" in outcome.reason
        assert outcome.result.calculation_error
        assert outcome.result.temperature == base_temperature(45.0) == 15.0
        assert outcome.result.ice_factor == 0.0

    def test_polar_fallback_ice(self):
        inputs = ClimateInputs.from_values(co2=float("inf"), latitude=75.0)
        result = point_temperature(inputs)
        assert result.calculation_error
        assert result.temperature == -5.0
        assert result.ice_factor == 0.8
        assert not result.is_valid

    def test_nan_time_scale(self, present_day):
        result = point_temperature(present_day.replace(time_scale_years=float("nan")))
        assert result.calculation_error

    def test_fallback_result_non_finite_latitude(self):
        result = fallback_result(float("nan"))
        assert result.temperature == 25.0
        assert result.ice_factor == 0.0
        assert result.calculation_error


class TestTimeResponse:
    def test_long_time_scale_matches_equilibrium(self, present_day):
        for lat in (-65.0, 0.0, 52.37, 90.0):
            eq = point_temperature(present_day.replace(latitude=lat))
            slow = point_temperature(present_day.replace(latitude=lat, time_scale_years=1e9))
            assert slow.temperature == pytest.approx(eq.temperature, abs=1e-3)
            assert slow.time_scale_applied
            assert not eq.time_scale_applied

    def test_short_time_scale_attenuates_ice(self, present_day):
        inputs = present_day.replace(latitude=90.0)
        eq = point_temperature(inputs)
        short = point_temperature(inputs.replace(time_scale_years=100.0))
        assert abs(short.ice_albedo_effect) < abs(eq.ice_albedo_effect)

    def test_infinite_time_scale_allowed(self, present_day):
        result = point_temperature(present_day.replace(time_scale_years=float("inf")))
        assert not result.calculation_error


class TestSensitivity:
    def test_levels(self):
        assert sensitivity_for("low") == 0.5
        assert sensitivity_for("medium") == 0.75
        assert sensitivity_for("high") == 1.0
        assert sensitivity_for("extreme") == 0.75

    def test_ordering(self, present_day):
        inputs = present_day.replace(latitude=30.0, time_scale_years=1000.0).with_co2(560.0)
        temps = [
            point_temperature(inputs.replace(sensitivity_level=level)).temperature
            for level in ("low", "medium", "high")
        ]
        assert temps[0] < temps[1] < temps[2]


class TestEnhancedPoint:
    def test_no_extra_gases_at_equator(self, present_day):
        inputs = present_day.replace(latitude=0.0)
        assert enhanced_point_temperature(inputs).temperature == pytest.approx(
            point_temperature(inputs).temperature
        )

    def test_aerosol_cools_and_methane_warms(self):
        base = ClimateInputs.from_values(latitude=30.0, season=0.5)
        plain = point_temperature(base).temperature
        dusty = enhanced_point_temperature(ClimateInputs.from_values(aerosol_od=0.1, latitude=30.0, season=0.5))
        methane = enhanced_point_temperature(ClimateInputs.from_values(ch4=1800.0, latitude=30.0, season=0.5))
        assert dusty.aerosol_effect < 0.0
        assert dusty.temperature < plain
        assert methane.methane_effect > 0.0
        assert methane.temperature > plain

    def test_effects_include_extra_terms(self, present_day):
        result = enhanced_point_temperature(present_day)
        assert "vegetation_effect" in result.effects
        assert len(result.effects) == 11

    def test_fallback_passes_through(self):
        result = enhanced_point_temperature(ClimateInputs.from_values(axial_tilt=float("nan"), latitude=10.0))
        assert result.calculation_error
        assert result.methane_effect == 0.0


class TestClimateModel:
    def test_default_params(self):
        model = ClimateModel()
        assert model.params["sensitivity_level"] == "medium"
        assert model.sensitivity == 0.75

    def test_repr(self):
        assert "ClimateModel" in repr(ClimateModel(sensitivity_level="low"))

    def test_inputs_from_preset(self):
        model = ClimateModel(time_scale_years=5000.0)
        inputs = model.inputs("lgm", season=0.25)
        assert inputs.atmosphere.co2 == 180.0
        assert inputs.orbit.axial_tilt == 22.99
        assert inputs.time_scale_years == 5000.0
        assert inputs.season == 0.25

    def test_inputs_override_preset(self):
        inputs = ClimateModel().inputs("petm", co2=800.0, precession=None)
        assert inputs.atmosphere.co2 == 800.0
        assert inputs.orbit.precession == 180.0

    def test_unknown_preset(self):
        with pytest.raises(KeyError):
            ClimateModel().inputs("snowball")

    def test_point_and_run(self, present_day):
        model = ClimateModel()
        assert model.point(present_day).temperature == point_temperature(present_day).temperature
        assert model.point(present_day, enhanced=True).vegetation_effect is not None
        region = model.run(present_day, name="Present")
        assert region.name == "Present"
        assert region.n_errors == 0

    def test_cycle_and_sweep(self, present_day):
        model = ClimateModel()
        cycle = model.cycle(present_day, n_seasons=4, show_progress=False)
        assert cycle.n_seasons == 4
        df = model.sweep(present_day, [280.0, 560.0], show_progress=False)
        assert len(df) == 2
