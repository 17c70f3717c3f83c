"""Tests for feedbacks, the baseline climatology and response times."""

import math

import numpy as np
import pytest

from milankovic.core.feedbacks import (
    base_temperature,
    ice_albedo_effect,
    ice_albedo_response,
    ice_fraction,
    seasonal_variation,
    vegetation_albedo_feedback,
)
from milankovic.core.response import EQUILIBRIUM, relaxation_factor, time_response_factors


class TestBaseTemperature:
    @pytest.mark.parametrize(
        "latitude, expected",
        [
            (0.0, 25.0),
            (30.0, 15.0),
            (45.0, 15.0),
            (52.37, -5.0),
            (65.0, -5.0),
            (75.0, -5.0),
            (90.0, -20.0),
            (-30.0, 16.0),
            (-90.0, -19.0),
        ],
    )
    def test_nearest_reference(self, latitude, expected):
        assert base_temperature(latitude) == expected

    def test_tie_goes_to_lower_reference(self):
        assert base_temperature(15.0) == 25.0

    def test_non_finite_latitude(self):
        assert base_temperature(float("nan")) == 25.0


class TestIceFraction:
    def test_half_at_threshold(self):
        assert ice_fraction(2.0, 0.0) == pytest.approx(0.5)

    def test_limits(self):
        assert ice_fraction(-20.0, 65.0) > 0.99
        assert ice_fraction(30.0, 0.0) < 0.01

    def test_bounded_for_extremes(self):
        for t in (-1e6, -100.0, 0.0, 100.0, 1e6):
            assert 0.0 <= ice_fraction(t, 45.0) <= 1.0

    def test_decreasing_in_temperature(self):
        values = [ice_fraction(t, 45.0) for t in np.linspace(-10, 10, 21)]
        assert all(a >= b for a, b in zip(values, values[1:]))

    def test_non_finite_gives_half(self):
        assert ice_fraction(float("nan"), 45.0) == 0.5
        assert ice_fraction(0.0, float("inf")) == 0.5


class TestSeasonalVariation:
    @pytest.mark.parametrize("season", [0.0, 0.13, 0.25, 0.5, 0.8])
    def test_hemispheres_in_antiphase(self, season):
        north = seasonal_variation(45.0, season)
        south = seasonal_variation(-45.0, season)
        assert north + south == pytest.approx(0.0, abs=1e-12)

    def test_zero_at_equator(self):
        assert seasonal_variation(0.0, 0.37) == 0.0

    def test_northern_peak(self):
        assert seasonal_variation(90.0, 0.5) == pytest.approx(20.0)
        assert seasonal_variation(90.0, 0.0) == pytest.approx(-20.0)

    def test_non_finite(self):
        assert seasonal_variation(float("nan"), 0.5) == 0.0


class TestAlbedoFeedbacks:
    def test_ice_albedo_response_range(self):
        assert ice_albedo_response(0.0) == pytest.approx(0.5)
        assert ice_albedo_response(90.0) == pytest.approx(4.0)
        assert ice_albedo_response(-90.0) == pytest.approx(4.0)

    def test_ice_albedo_effect_cools(self):
        assert ice_albedo_effect(1.0, 65.0) < 0.0
        assert ice_albedo_effect(0.0, 65.0) == 0.0

    def test_vegetation_asymmetry(self):
        assert vegetation_albedo_feedback(2.0, 90.0) == pytest.approx(0.1)
        assert vegetation_albedo_feedback(-2.0, 90.0) == pytest.approx(-0.06)
        assert vegetation_albedo_feedback(2.0, 0.0) == 0.0


class TestResponseTime:
    def test_relaxation_factor(self):
        assert relaxation_factor(0.0, 500.0) == 0.0
        assert relaxation_factor(500.0, 500.0) == pytest.approx(1.0 - math.exp(-1.0))
        assert relaxation_factor(100.0, 0.0) == 1.0
        assert relaxation_factor(float("inf"), 500.0) == 1.0

    def test_equilibrium_when_not_set(self):
        assert time_response_factors(0.0) == EQUILIBRIUM
        assert time_response_factors(-5.0) == EQUILIBRIUM
        assert time_response_factors(float("nan")) == EQUILIBRIUM
        assert not EQUILIBRIUM.applied

    def test_factors_after_1000_years(self):
        factors = time_response_factors(1000.0)
        assert factors.applied
        assert factors.atmosphere == pytest.approx(1.0)
        assert factors.ocean == pytest.approx(1.0 - math.exp(-2.0))
        assert factors.ice_sheets == pytest.approx(1.0 - math.exp(-0.2))

    def test_factors_bounded_and_ordered(self):
        for t in (1.0, 10.0, 1e3, 1e5):
            f = time_response_factors(t)
            assert 0.0 <= f.ice_sheets <= f.ocean <= f.atmosphere <= 1.0

    def test_infinite_time_scale(self):
        factors = time_response_factors(float("inf"))
        assert factors.applied
        assert (factors.atmosphere, factors.ocean, factors.ice_sheets) == (1.0, 1.0, 1.0)
