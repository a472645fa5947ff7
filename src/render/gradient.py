"""Color gradient: scalar field value -> RGBA pixel."""

from __future__ import annotations

import bisect
from collections.abc import Iterable, Sequence
from typing import NamedTuple

import numpy as np

from interpolation.field import FieldKind, FieldValue
from shared.constants import GRADIENT_MIN_STOPS, RGBA_CHANNELS, TRANSPARENT_PIXEL
from shared.errors import ConfigurationError

RGBA = tuple[int, int, int, int]


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b."""
    return a + (b - a) * t


class ColorStop(NamedTuple):
    threshold: float
    color: RGBA


def _validate_color(color: Sequence[int]) -> RGBA:
    if len(color) != RGBA_CHANNELS:
        msg = f'Color must have {RGBA_CHANNELS} channels, got {len(color)}'
        raise ConfigurationError(msg)
    for ch in color:
        if not 0 <= int(ch) <= 255:
            msg = f'Color channel out of range [0, 255]: {ch}'
            raise ConfigurationError(msg)
    r, g, b, a = (int(ch) for ch in color)
    return (r, g, b, a)


class Gradient:
    """
    Ordered color stops with per-channel linear interpolation between them.

    Values are looked up by magnitude; below the first threshold the first
    color is used, above the last threshold the last color.
    """

    def __init__(self, stops: Iterable[tuple[float, Sequence[int]]]) -> None:
        validated = [
            ColorStop(float(t), _validate_color(c)) for t, c in stops
        ]
        if len(validated) < GRADIENT_MIN_STOPS:
            msg = f'Gradient needs at least {GRADIENT_MIN_STOPS} stops, got {len(validated)}'
            raise ConfigurationError(msg)
        for prev, cur in zip(validated, validated[1:]):
            if not cur.threshold > prev.threshold:
                msg = (
                    'Gradient thresholds must be strictly increasing: '
                    f'{prev.threshold} then {cur.threshold}'
                )
                raise ConfigurationError(msg)
        self._stops = tuple(validated)
        self._thresholds = [s.threshold for s in self._stops]
        self._threshold_arr = np.array(self._thresholds, dtype=np.float64)
        self._color_arr = np.array([s.color for s in self._stops], dtype=np.float64)

    @classmethod
    def from_palette(cls, rows: Iterable[Sequence[float]]) -> Gradient:
        """Build from flat ``[threshold, r, g, b, a]`` rows (profile format)."""
        stops = []
        for row in rows:
            if len(row) != 1 + RGBA_CHANNELS:
                msg = f'Palette row must be [threshold, r, g, b, a], got {list(row)}'
                raise ConfigurationError(msg)
            stops.append((row[0], tuple(row[1:])))
        return cls(stops)

    @property
    def stops(self) -> tuple[ColorStop, ...]:
        return self._stops

    def __len__(self) -> int:
        return len(self._stops)

    def __repr__(self) -> str:
        return f'Gradient({list(self._stops)!r})'

    def color_at(self, value: float) -> RGBA:
        v = abs(value)
        first = self._stops[0]
        last = self._stops[-1]
        if v <= first.threshold:
            return first.color
        if v >= last.threshold:
            return last.color
        # thresholds[i - 1] <= v < thresholds[i]
        i = bisect.bisect_right(self._thresholds, v)
        t0, c0 = self._stops[i - 1]
        t1, c1 = self._stops[i]
        local = (v - t0) / (t1 - t0)
        r, g, b, a = (round(lerp(lo, hi, local)) for lo, hi in zip(c0, c1))
        return (r, g, b, a)

    def colors_at(self, values: np.ndarray) -> np.ndarray:
        """
        Vectorized ``color_at``.

        Args:
            values: Field values (any shape)

        Returns:
            uint8 array of shape ``values.shape + (4,)``

        """
        v = np.abs(np.asarray(values, dtype=np.float64))
        th = self._threshold_arr
        j = np.clip(np.searchsorted(th, v, side='right'), 1, len(th) - 1)
        t0 = th[j - 1]
        t1 = th[j]
        local = np.clip((v - t0) / (t1 - t0), 0.0, 1.0)[..., np.newaxis]
        c0 = self._color_arr[j - 1]
        c1 = self._color_arr[j]
        return np.rint(c0 + (c1 - c0) * local).astype(np.uint8)


def map_color(gradient: Gradient, field: FieldValue) -> RGBA:
    """
    Map an estimator result to a pixel.

    NoData is fully transparent. Exact and Estimated share the same gradient
    lookup.
    """
    if field.kind is FieldKind.NO_DATA:
        return TRANSPARENT_PIXEL
    return gradient.color_at(field.value)


def map_colors(
    gradient: Gradient,
    kinds: np.ndarray,
    values: np.ndarray,
) -> np.ndarray:
    """Vectorized ``map_color`` over kind/value arrays from ``estimate_grid``."""
    rgba = gradient.colors_at(values)
    rgba[kinds == FieldKind.NO_DATA] = TRANSPARENT_PIXEL
    return rgba
