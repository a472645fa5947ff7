"""Geo module - aspect correction for degree-based coordinates."""

from .aspect import AspectFactors, compute_aspect, distance_sq_km

__all__ = [
    'AspectFactors',
    'compute_aspect',
    'distance_sq_km',
]
