"""Tests for TOML sectioned job mapping layer."""

import tomlkit

from domain.models import RenderJob
from domain.toml_sections import (
    DEFAULT_SECTION,
    SECTION_MAP,
    flat_to_sectioned,
    sectioned_to_flat,
)


def _base_job(**overrides):
    defaults = {
        'name': 'rotterdam',
        'west': 4.2,
        'east': 4.7,
        'south': 51.8,
        'north': 52.05,
        'width': 320,
        'height': 200,
    }
    defaults.update(overrides)
    return RenderJob(**defaults)


class TestFlatToSectioned:
    def test_creates_expected_sections(self):
        result = flat_to_sectioned(_base_job().model_dump(mode='json'))
        for section in ('job', 'region', 'interpolation', 'raster', 'filters', 'palette'):
            assert section in result

    def test_short_names(self):
        result = flat_to_sectioned(_base_job(min_radius=0.5).model_dump(mode='json'))
        assert result['interpolation'] == {'min_radius_km': 0.5, 'max_distance_km': 50.0}
        assert result['region']['north'] == 52.05

    def test_unknown_fields_go_to_job_section(self):
        result = flat_to_sectioned({'name': 'x', 'comment': 'hi'})
        assert result[DEFAULT_SECTION] == {'name': 'x', 'comment': 'hi'}

    def test_every_mapped_field_exists_on_model(self):
        for fields in SECTION_MAP.values():
            for flat_name in fields:
                assert flat_name in RenderJob.model_fields


class TestSectionedToFlat:
    def test_round_trip(self):
        flat = _base_job(blacklist=[7], workers=2).model_dump(mode='json')
        assert sectioned_to_flat(flat_to_sectioned(flat)) == flat

    def test_flat_input_passes_through(self):
        assert sectioned_to_flat({'name': 'a', 'width': 3}) == {'name': 'a', 'width': 3}

    def test_unknown_section_passes_through(self):
        assert sectioned_to_flat({'extra': {'foo': 1}}) == {'foo': 1}

    def test_via_toml_text(self):
        job = _base_job()
        text = tomlkit.dumps(flat_to_sectioned(job.model_dump(mode='json', exclude_none=True)))
        flat = sectioned_to_flat(tomlkit.parse(text).unwrap())
        assert RenderJob.model_validate(flat) == job
