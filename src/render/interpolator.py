"""
Raster sweep: every output pixel -> geographic point -> field -> color.

Rows are split into bands processed by a thread pool. Each band only reads
the shared immutable inputs and writes its own rows of the output buffer.
"""

from __future__ import annotations

import logging
import math
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING

import numpy as np

from interpolation.estimator import estimate, estimate_grid, sample_arrays
from render.gradient import map_color, map_colors
from render.raster import RasterBuffer
from shared.constants import RENDER_MIN_BAND_ROWS, RENDER_WORKERS
from shared.diagnostics import log_memory_usage
from shared.errors import ConfigurationError
from shared.progress import ConsoleProgress

if TYPE_CHECKING:
    from collections.abc import Sequence

    from domain.models import RenderRegion, SensorSample
    from geo.aspect import AspectFactors
    from render.gradient import RGBA, Gradient

logger = logging.getLogger(__name__)


def pixel_to_geo(
    region: RenderRegion,
    width: int,
    height: int,
    px: float,
    py: float,
) -> tuple[float, float]:
    """Pixel center -> (lon, lat); row 0 is the northern edge."""
    lon = region.west + (region.east - region.west) * (px + 0.5) / width
    lat = region.north - (region.north - region.south) * (py + 0.5) / height
    return lon, lat


def pixel_centers(
    region: RenderRegion,
    width: int,
    height: int,
) -> tuple[np.ndarray, np.ndarray]:
    """Longitudes of all columns and latitudes of all rows."""
    lons = region.west + (region.east - region.west) * (np.arange(width) + 0.5) / width
    lats = region.north - (region.north - region.south) * (np.arange(height) + 0.5) / height
    return lons, lats


def render_pixel(
    region: RenderRegion,
    aspect: AspectFactors,
    samples: Sequence[SensorSample],
    gradient: Gradient,
    width: int,
    height: int,
    px: int,
    py: int,
) -> RGBA:
    """Color of a single pixel via the scalar estimator."""
    query = pixel_to_geo(region, width, height, px, py)
    return map_color(gradient, estimate(region, aspect, samples, query))


def _band_bounds(height: int, workers: int) -> list[tuple[int, int]]:
    band_rows = max(RENDER_MIN_BAND_ROWS, math.ceil(height / (workers * 4)))
    return [(y, min(height, y + band_rows)) for y in range(0, height, band_rows)]


class Interpolator:
    """Renders sample snapshots for one fixed region, gradient and raster size."""

    def __init__(
        self,
        region: RenderRegion,
        aspect: AspectFactors,
        gradient: Gradient,
        width: int,
        height: int,
        workers: int | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            msg = f'Raster size must be positive, got {width}x{height}'
            raise ConfigurationError(msg)
        self.region = region
        self.aspect = aspect
        self.gradient = gradient
        self.width = width
        self.height = height
        self.workers = workers or RENDER_WORKERS or os.cpu_count() or 1
        self._lons, self._lats = pixel_centers(region, width, height)

    def interpolate(
        self,
        samples: Sequence[SensorSample],
        out: RasterBuffer | None = None,
        progress: ConsoleProgress | None = None,
    ) -> RasterBuffer:
        if out is None:
            out = RasterBuffer(self.width, self.height)
        elif out.size != (self.width, self.height):
            msg = f'Buffer is {out.width}x{out.height}, expected {self.width}x{self.height}'
            raise ConfigurationError(msg)

        arrays = sample_arrays(samples)
        bands = _band_bounds(self.height, self.workers)
        logger.info(
            'Interpolating %d samples over %dx%d px: %d bands, %d workers',
            arrays.size,
            self.width,
            self.height,
            len(bands),
            self.workers,
        )

        def render_band(start: int, stop: int) -> None:
            lons, lats = np.meshgrid(self._lons, self._lats[start:stop])
            kinds, values = estimate_grid(self.region, self.aspect, arrays, lons, lats)
            out.rows(start, stop)[:] = map_colors(self.gradient, kinds, values)

        if self.workers == 1 or len(bands) == 1:
            for start, stop in bands:
                render_band(start, stop)
                if progress is not None:
                    progress.step_sync(1)
            return out

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = [executor.submit(render_band, s, e) for s, e in bands]
            for future in as_completed(futures):
                # re-raises errors from worker threads
                future.result()
                if progress is not None:
                    progress.step_sync(1)
        return out


def render(
    region: RenderRegion,
    aspect: AspectFactors,
    samples: Sequence[SensorSample],
    gradient: Gradient,
    width: int,
    height: int,
    *,
    out: RasterBuffer | None = None,
    workers: int | None = None,
    label: str = 'Interpolation',
) -> RasterBuffer:
    """Render ``samples`` into a ``width x height`` RGBA raster."""
    interpolator = Interpolator(region, aspect, gradient, width, height, workers=workers)
    progress = ConsoleProgress(total=len(_band_bounds(height, interpolator.workers)), label=label)
    log_memory_usage(f'before {label}')
    try:
        return interpolator.interpolate(samples, out=out, progress=progress)
    finally:
        progress.close()
        log_memory_usage(f'after {label}')
