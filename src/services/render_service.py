"""
Job-level entry point of the rendering layer.

Takes a validated RenderJob and a raw sample snapshot, applies the sample
filters and runs the raster sweep. Retrieval of telemetry and anything done
with the returned buffer belong to the caller.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from geo.aspect import compute_aspect
from render.interpolator import render
from services.sensor_filters import prepare_samples

if TYPE_CHECKING:
    from collections.abc import Sequence

    from domain.models import RenderJob, SensorSample
    from render.raster import RasterBuffer

logger = logging.getLogger(__name__)


def render_job(
    job: RenderJob,
    samples: Sequence[SensorSample],
    *,
    workers: int | None = None,
) -> RasterBuffer:
    """Filter ``samples`` for ``job`` and render its overlay raster."""
    started = time.monotonic()
    region = job.region
    prepared = prepare_samples(samples, job)
    aspect = compute_aspect(region)
    logger.info(
        'Job %s: %d samples, aspect km/deg lon=%.3f lat=%.3f',
        job.name,
        len(prepared),
        aspect.lon,
        aspect.lat,
    )
    if not prepared:
        logger.warning('Job %s: no samples left after filtering, raster is empty', job.name)

    raster = render(
        region,
        aspect,
        prepared,
        job.gradient,
        job.width,
        job.height,
        workers=workers or job.workers,
        label=f'Rendering {job.name}',
    )
    logger.info('Job %s rendered in %.2fs', job.name, time.monotonic() - started)
    return raster
