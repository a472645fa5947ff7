"""Tests for services.render_service module."""

import logging

from domain.models import RenderJob, SensorSample
from services.render_service import render_job


def _job(**overrides):
    defaults = {
        'name': 'scenario',
        'west': 4.0,
        'east': 5.0,
        'south': 52.0,
        'north': 53.0,
        'min_radius': 1.0,
        'max_distance': 50.0,
        'width': 4,
        'height': 4,
    }
    defaults.update(overrides)
    return RenderJob(**defaults)


class TestRenderJob:
    def test_renders_job_raster(self):
        samples = [SensorSample(id=1, lon=4.5, lat=52.5, value=40.0)]
        raster = render_job(_job(), samples)
        assert raster.size == (4, 4)
        assert raster.pixel(1, 1) == (153, 255, 102, 192)

    def test_filtered_samples_do_not_shade(self):
        samples = [
            SensorSample(id=1, lon=4.5, lat=52.5, value=40.0),
            # blacklisted sensor right on top would dominate the pixel
            SensorSample(id=2, lon=4.375, lat=52.625, value=150.0),
        ]
        raster = render_job(_job(blacklist=[2]), samples)
        assert raster.pixel(1, 1) == (153, 255, 102, 192)

    def test_no_samples_warns_and_returns_empty_raster(self, caplog):
        with caplog.at_level(logging.WARNING, logger='services.render_service'):
            raster = render_job(_job(), [SensorSample(id=1, lon=4.5, lat=52.5, value=900.0)])
        assert not raster.pixels.any()
        assert 'no samples left' in caplog.text

    def test_workers_override(self):
        samples = [SensorSample(id=1, lon=4.5, lat=52.5, value=40.0)]
        a = render_job(_job(width=20, height=32, workers=1), samples)
        b = render_job(_job(width=20, height=32, workers=1), samples, workers=3)
        assert (a.pixels == b.pixels).all()
