"""Tests for the insolation kernel."""

import math

import numpy as np
import pytest

from milankovic import baseline_insolation, daily_insolation
from milankovic.core.insolation import is_polar_night

E, TILT, PREC = 0.0167, 23.44, 0.0


class TestDailyInsolation:
    def test_non_negative_and_finite_everywhere(self):
        for lat in np.linspace(-90, 90, 37):
            for s in np.linspace(0, 1, 25, endpoint=False):
                q = daily_insolation(lat, s, E, TILT, PREC)
                assert math.isfinite(q)
                assert q >= 0.0

    def test_equator_magnitude(self):
        q = daily_insolation(0.0, 0.3, E, TILT, PREC)
        assert 380.0 < q < 450.0

    def test_non_finite_input_gives_zero(self):
        assert daily_insolation(float("nan"), 0.5, E, TILT, PREC) == 0.0
        assert daily_insolation(45.0, 0.5, float("inf"), TILT, PREC) == 0.0
        assert daily_insolation(45.0, float("nan"), E, TILT, PREC) == 0.0

    def test_season_wraps(self):
        assert daily_insolation(45.0, 1.3, E, TILT, PREC) == pytest.approx(
            daily_insolation(45.0, 0.3, E, TILT, PREC)
        )
        assert daily_insolation(45.0, -0.25, E, TILT, PREC) == pytest.approx(
            daily_insolation(45.0, 0.75, E, TILT, PREC)
        )

    def test_precession_wraps(self):
        assert daily_insolation(45.0, 0.3, E, TILT, 370.0) == pytest.approx(
            daily_insolation(45.0, 0.3, E, TILT, 10.0)
        )

    def test_second_half_of_year_is_northern_summer(self):
        # sun longitude θ + π puts the northern solstice at s = 0.75
        assert daily_insolation(65.0, 0.75, E, TILT, PREC) > daily_insolation(65.0, 0.25, E, TILT, PREC)

    def test_hemispheres_mirror_on_circular_orbit(self):
        north = daily_insolation(40.0, 0.75, 0.0, TILT, PREC)
        south = daily_insolation(-40.0, 0.25, 0.0, TILT, PREC)
        assert north == pytest.approx(south)

    def test_zero_tilt_has_no_seasons(self):
        values = [daily_insolation(50.0, s, 0.0, 0.0, 0.0) for s in (0.1, 0.4, 0.7)]
        assert values == pytest.approx([values[0]] * 3)


class TestPolarNight:
    @pytest.mark.parametrize("season", [0.0, 0.1, 0.2, 0.7, 0.85, 0.99])
    def test_north_pole_dark(self, season):
        assert daily_insolation(90.0, season, E, TILT, PREC) == 0.0

    @pytest.mark.parametrize("season", [0.2, 0.35, 0.5, 0.7])
    def test_south_pole_dark(self, season):
        assert daily_insolation(-90.0, season, E, TILT, PREC) == 0.0

    def test_poles_lit_outside_dark_season(self):
        assert daily_insolation(90.0, 0.45, E, TILT, PREC) > 0.0
        assert daily_insolation(-90.0, 0.9, E, TILT, PREC) > 0.0

    def test_polar_formula_applies_from_89_degrees(self):
        assert daily_insolation(89.5, 0.1, E, TILT, PREC) == 0.0
        assert is_polar_night(89.0, 0.8)
        assert not is_polar_night(-89.0, 0.8)

    def test_lit_pole_value(self):
        expected = 1361.0 / 4.0 * math.sin(math.radians(TILT)) * (1.0 + E * math.sin(math.pi * 0.25))
        assert daily_insolation(90.0, 0.5, E, TILT, PREC) == pytest.approx(expected)


class TestBaselineInsolation:
    def test_matches_present_day_orbit(self):
        for lat, s in [(65.0, 0.25), (-30.0, 0.6), (0.0, 0.0)]:
            assert baseline_insolation(lat, s) == daily_insolation(lat, s, E, TILT, PREC)
