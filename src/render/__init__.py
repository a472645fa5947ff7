# Модуль рендеринга растра
from render.gradient import ColorStop, Gradient, lerp, map_color, map_colors
from render.interpolator import (
    Interpolator,
    pixel_centers,
    pixel_to_geo,
    render,
    render_pixel,
)
from render.raster import RasterBuffer

__all__ = [
    'ColorStop',
    'Gradient',
    'Interpolator',
    'RasterBuffer',
    'lerp',
    'map_color',
    'map_colors',
    'pixel_centers',
    'pixel_to_geo',
    'render',
    'render_pixel',
]
