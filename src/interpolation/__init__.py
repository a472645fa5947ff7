"""Scalar field estimation from scattered sensor samples."""

from interpolation.estimator import (
    SampleArrays,
    estimate,
    estimate_grid,
    sample_arrays,
)
from interpolation.field import (
    NO_DATA,
    Estimated,
    Exact,
    FieldKind,
    FieldValue,
    NoData,
    field_from_code,
)

__all__ = [
    'NO_DATA',
    'Estimated',
    'Exact',
    'FieldKind',
    'FieldValue',
    'NoData',
    'SampleArrays',
    'estimate',
    'estimate_grid',
    'field_from_code',
    'sample_arrays',
]
