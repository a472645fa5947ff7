"""Exceptions shared across the rendering layers."""


class ConfigurationError(ValueError):
    """Render job, region or palette cannot be used to produce a raster."""
