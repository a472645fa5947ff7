"""Domain layer - business models and job profiles."""
from domain.models import RenderJob, RenderRegion, SensorSample
from domain.profiles import (
    delete_job,
    ensure_jobs_dir,
    list_jobs,
    load_job,
    load_samples,
    save_job,
    save_samples,
)

__all__ = [
    'RenderJob',
    'RenderRegion',
    'SensorSample',
    'delete_job',
    'ensure_jobs_dir',
    'list_jobs',
    'load_job',
    'load_samples',
    'save_job',
    'save_samples',
]
