"""Services package - sample preparation and job rendering."""

from services.render_service import render_job
from services.sensor_filters import (
    filter_by_bounding_box,
    filter_by_sensor_id,
    filter_by_value,
    prepare_samples,
    samples_from_records,
)

__all__ = [
    'filter_by_bounding_box',
    'filter_by_sensor_id',
    'filter_by_value',
    'prepare_samples',
    'render_job',
    'samples_from_records',
]
