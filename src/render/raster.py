"""RGBA output grid of a rendering job."""

from __future__ import annotations

import numpy as np
from PIL import Image

from shared.constants import RGBA_CHANNELS
from shared.errors import ConfigurationError


class RasterBuffer:
    """
    Row-major ``height x width`` grid of RGBA pixels, origin top-left.

    The sweep writes each row band exactly once; after ``render`` returns the
    buffer is only read (e.g. handed to Pillow).
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            msg = f'Raster size must be positive, got {width}x{height}'
            raise ConfigurationError(msg)
        self.width = int(width)
        self.height = int(height)
        self.pixels = np.zeros((self.height, self.width, RGBA_CHANNELS), dtype=np.uint8)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def pixel(self, px: int, py: int) -> tuple[int, int, int, int]:
        r, g, b, a = (int(c) for c in self.pixels[py, px])
        return (r, g, b, a)

    def set_pixel(self, px: int, py: int, rgba: tuple[int, int, int, int]) -> None:
        self.pixels[py, px] = rgba

    def rows(self, start: int, stop: int) -> np.ndarray:
        """Writable view of rows ``[start, stop)``."""
        return self.pixels[start:stop]

    def to_image(self) -> Image.Image:
        """Pillow RGBA image sharing no memory with the buffer."""
        return Image.fromarray(self.pixels.copy())
