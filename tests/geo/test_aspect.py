"""Tests for geo.aspect module."""

import math

import pytest

from domain.models import RenderRegion
from geo.aspect import AspectFactors, compute_aspect, distance_sq_km
from shared.constants import KM_PER_DEGREE_LAT


def _region(south: float, north: float) -> RenderRegion:
    return RenderRegion(west=4.0, east=5.0, south=south, north=north)


class TestComputeAspect:
    def test_equator_has_no_correction(self):
        aspect = compute_aspect(_region(-1.0, 1.0))
        assert aspect.lon == pytest.approx(aspect.lat)
        assert aspect.lat == KM_PER_DEGREE_LAT

    def test_higher_latitude_shrinks_longitude(self):
        aspect = compute_aspect(_region(52.0, 53.0))
        assert aspect.lon < aspect.lat
        assert aspect.lon == pytest.approx(KM_PER_DEGREE_LAT * math.cos(math.radians(52.5)))

    def test_sixty_degrees_is_half(self):
        aspect = compute_aspect(_region(59.0, 61.0))
        assert aspect.lon == pytest.approx(aspect.lat / 2.0)

    def test_southern_hemisphere_is_symmetric(self):
        north = compute_aspect(_region(40.0, 50.0))
        south = compute_aspect(_region(-50.0, -40.0))
        assert north.lon == pytest.approx(south.lon)

    def test_latitude_factor_constant(self):
        assert KM_PER_DEGREE_LAT == pytest.approx(40075.0 / 360.0)


class TestDistanceSq:
    def test_zero_for_same_point(self):
        aspect = AspectFactors(lon=70.0, lat=111.0)
        assert distance_sq_km(aspect, 4.5, 52.5, 4.5, 52.5) == 0.0

    def test_scales_each_axis(self):
        aspect = AspectFactors(lon=2.0, lat=3.0)
        # dx = 2 * 1, dy = 3 * 1
        assert distance_sq_km(aspect, 1.0, 1.0, 0.0, 0.0) == pytest.approx(13.0)

    def test_symmetric(self):
        aspect = AspectFactors(lon=67.0, lat=111.0)
        a = distance_sq_km(aspect, 4.1, 52.2, 4.7, 52.9)
        b = distance_sq_km(aspect, 4.7, 52.9, 4.1, 52.2)
        assert a == pytest.approx(b)
