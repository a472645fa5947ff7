"""Local flat-earth scale factors for distance-weighted interpolation."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, NamedTuple

from shared.constants import KM_PER_DEGREE_LAT

if TYPE_CHECKING:
    from domain.models import RenderRegion


class AspectFactors(NamedTuple):
    """Kilometres per degree of longitude and latitude at the region center."""

    lon: float
    lat: float


def compute_aspect(region: RenderRegion) -> AspectFactors:
    """
    Compute km-per-degree factors once per rendering job.

    Longitude degrees shrink with cos(latitude); the factor is taken at the
    center latitude and applied uniformly across the whole bounding box.
    """
    km_per_deg_lon = KM_PER_DEGREE_LAT * math.cos(math.radians(region.center_lat))
    return AspectFactors(lon=km_per_deg_lon, lat=KM_PER_DEGREE_LAT)


def distance_sq_km(
    aspect: AspectFactors,
    lon1: float,
    lat1: float,
    lon2: float,
    lat2: float,
) -> float:
    """Squared corrected planar distance between two points (km²)."""
    dx = aspect.lon * (lon1 - lon2)
    dy = aspect.lat * (lat1 - lat2)
    return dx * dx + dy * dy
