"""Preparation of the sensor sample snapshot before interpolation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from domain.models import SensorSample
from shared.constants import BOUNDING_BOX_MARGIN_FACTOR, SensorItem

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from domain.models import RenderJob, RenderRegion

logger = logging.getLogger(__name__)


def _item_value(record: Mapping[str, Any], item: str) -> Any:
    for dv in record.get('sensordatavalues') or ():
        if dv.get('value_type') == item:
            return dv.get('value')
    return None


def samples_from_records(
    records: Iterable[Mapping[str, Any]],
    item: SensorItem | str = SensorItem.P1,
) -> list[SensorSample]:
    """
    Convert decoded telemetry records to samples.

    Each record carries ``sensor.id``, ``location.longitude/latitude/indoor``
    and a ``sensordatavalues`` list of ``{value_type, value}``; numbers may
    arrive as strings. Indoor sensors and records without ``item`` are
    skipped.
    """
    item = SensorItem(item).value
    samples: list[SensorSample] = []
    num_indoor = 0
    num_invalid = 0
    for record in records:
        location = record.get('location') or {}
        try:
            if int(location.get('indoor') or 0) != 0:
                num_indoor += 1
                continue
            raw = _item_value(record, item)
            if raw is None:
                continue
            samples.append(
                SensorSample(
                    id=int(record['sensor']['id']),
                    lon=float(location['longitude']),
                    lat=float(location['latitude']),
                    value=float(raw),
                )
            )
        except (KeyError, TypeError, ValueError) as e:
            num_invalid += 1
            logger.debug('Skipping malformed record: %s', e)
    logger.info('Ignored %d indoor sensors, %d malformed records', num_indoor, num_invalid)
    return samples


def filter_by_value(samples: Sequence[SensorSample], max_value: float) -> list[SensorSample]:
    """Keep samples with ``0 <= value < max_value``."""
    filtered = [s for s in samples if 0.0 <= s.value < max_value]
    logger.info('Filtered by sensor value: %d -> %d', len(samples), len(filtered))
    return filtered


def filter_by_sensor_id(
    samples: Sequence[SensorSample],
    blacklist: Iterable[int],
) -> list[SensorSample]:
    banned = set(blacklist)
    filtered = [s for s in samples if s.id not in banned]
    logger.info('Filtered by sensor id: %d -> %d', len(samples), len(filtered))
    return filtered


def filter_by_bounding_box(
    samples: Sequence[SensorSample],
    region: RenderRegion,
) -> list[SensorSample]:
    """
    Keep samples inside a box around the region.

    The box is BOUNDING_BOX_MARGIN_FACTOR times the region per side and
    shares its center, so sensors just outside the frame still shade the
    edges.
    """
    half_extra = (BOUNDING_BOX_MARGIN_FACTOR - 1.0) / 2.0
    dx = (region.east - region.west) * half_extra
    dy = (region.north - region.south) * half_extra
    min_x, max_x = region.west - dx, region.east + dx
    min_y, max_y = region.south - dy, region.north + dy
    filtered = [
        s for s in samples if min_x < s.lon < max_x and min_y < s.lat < max_y
    ]
    logger.info('Filtered by bounding box: %d -> %d', len(samples), len(filtered))
    return filtered


def prepare_samples(samples: Sequence[SensorSample], job: RenderJob) -> list[SensorSample]:
    """Value range, then blacklist, then bounding box of the job."""
    filtered = filter_by_value(samples, job.max_value)
    filtered = filter_by_sensor_id(filtered, job.blacklist)
    return filter_by_bounding_box(filtered, job.region)
