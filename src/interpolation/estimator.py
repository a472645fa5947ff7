"""
Inverse-distance-weighted field estimator.

The scalar ``estimate`` walks the samples once per query point. The block
form ``estimate_grid`` gives the same answers for many query points at once
and is what the raster sweep uses.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, NamedTuple

import numpy as np

from geo.aspect import distance_sq_km
from interpolation.field import NO_DATA, Estimated, Exact, FieldKind
from shared.constants import ESTIMATE_BLOCK_ELEMENTS, ZERO_DISTANCE_EPSILON

if TYPE_CHECKING:
    from collections.abc import Sequence

    from domain.models import RenderRegion, SensorSample
    from geo.aspect import AspectFactors
    from interpolation.field import FieldValue


class SampleArrays(NamedTuple):
    """Column view of a sample snapshot (float64 arrays of equal length)."""

    lon: np.ndarray
    lat: np.ndarray
    value: np.ndarray

    @property
    def size(self) -> int:
        return int(self.value.size)


def sample_arrays(samples: Sequence[SensorSample]) -> SampleArrays:
    """Convert samples to column arrays once per rendering job."""
    n = len(samples)
    lon = np.fromiter((s.lon for s in samples), dtype=np.float64, count=n)
    lat = np.fromiter((s.lat for s in samples), dtype=np.float64, count=n)
    value = np.fromiter((s.value for s in samples), dtype=np.float64, count=n)
    return SampleArrays(lon, lat, value)


def estimate(
    region: RenderRegion,
    aspect: AspectFactors,
    samples: Sequence[SensorSample],
    query: tuple[float, float],
) -> FieldValue:
    """
    Estimate the field at ``query`` = (lon, lat).

    Returns:
        Exact(v) when the closest sample is within ``min_radius`` (or the
        query coincides with a sample), Estimated(v) with the IDW average of
        all samples when the closest one is within ``max_distance``,
        otherwise NoData. An empty sample set always gives NoData.

    """
    q_lon, q_lat = query
    closest_d2 = math.inf
    closest_value = 0.0
    value_sum = 0.0
    weight_sum = 0.0
    for s in samples:
        d2 = distance_sq_km(aspect, s.lon, s.lat, q_lon, q_lat)
        if d2 < ZERO_DISTANCE_EPSILON:
            return Exact(s.value)
        w = 1.0 / d2
        value_sum += s.value * w
        weight_sum += w
        if d2 < closest_d2:
            closest_d2 = d2
            closest_value = s.value

    if closest_d2 < region.min_radius_sq:
        return Exact(closest_value)
    if closest_d2 < region.max_distance_sq:
        return Estimated(value_sum / weight_sum)
    return NO_DATA


def estimate_grid(
    region: RenderRegion,
    aspect: AspectFactors,
    samples: SampleArrays,
    lons: np.ndarray,
    lats: np.ndarray,
    block_elements: int = ESTIMATE_BLOCK_ELEMENTS,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Estimate the field at many query points.

    Args:
        region: Render region with the interpolation cutoffs
        aspect: km-per-degree factors of the job
        samples: Sample snapshot as column arrays
        lons: Query longitudes (any shape)
        lats: Query latitudes (same shape as ``lons``)
        block_elements: Upper bound for points x samples per distance block

    Returns:
        (kinds, values): uint8 FieldKind codes and float64 values, both
        shaped like ``lons``. Values are 0.0 where the kind is NO_DATA.

    """
    lons = np.asarray(lons, dtype=np.float64)
    lats = np.asarray(lats, dtype=np.float64)
    shape = lons.shape
    q_lon = lons.ravel()
    q_lat = lats.ravel()
    n = q_lon.size

    kinds = np.full(n, FieldKind.NO_DATA, dtype=np.uint8)
    values = np.zeros(n, dtype=np.float64)
    if samples.size == 0 or n == 0:
        return kinds.reshape(shape), values.reshape(shape)

    exact_sq = max(region.min_radius_sq, ZERO_DISTANCE_EPSILON)
    max_sq = region.max_distance_sq
    block = max(1, block_elements // samples.size)

    for start in range(0, n, block):
        stop = min(n, start + block)
        dx = aspect.lon * (samples.lon[np.newaxis, :] - q_lon[start:stop, np.newaxis])
        dy = aspect.lat * (samples.lat[np.newaxis, :] - q_lat[start:stop, np.newaxis])
        d2 = dx * dx + dy * dy
        del dx, dy

        nearest = np.argmin(d2, axis=1)
        closest = d2[np.arange(stop - start), nearest]

        exact = closest < exact_sq
        estimated = ~exact & (closest < max_sq)

        out_kinds = kinds[start:stop]
        out_values = values[start:stop]
        out_kinds[exact] = FieldKind.EXACT
        out_values[exact] = samples.value[nearest[exact]]

        if estimated.any():
            # closest >= exact_sq here, so every d2 in these rows is > 0
            w = 1.0 / d2[estimated]
            out_kinds[estimated] = FieldKind.ESTIMATED
            out_values[estimated] = (w @ samples.value) / w.sum(axis=1)

    return kinds.reshape(shape), values.reshape(shape)
