"""Tests for the command line entry point."""

import pytest
from PIL import Image

from main import build_parser, main, setup_logging

JOB_TOML = """\
[job]
name = "scenario"

[region]
west = 4.0
east = 5.0
south = 52.0
north = 53.0

[raster]
width = 4
height = 4
"""

SAMPLES_TOML = """\
[[samples]]
id = 1
lon = 4.5
lat = 52.5
value = 40.0
"""


@pytest.fixture
def app_dirs(tmp_path, monkeypatch):
    monkeypatch.setenv('APPDATA', str(tmp_path / 'roaming'))
    monkeypatch.setenv('LOCALAPPDATA', str(tmp_path / 'local'))
    return tmp_path


@pytest.fixture
def job_files(tmp_path):
    job = tmp_path / 'scenario.toml'
    job.write_text(JOB_TOML, encoding='utf-8')
    samples = tmp_path / 'samples.toml'
    samples.write_text(SAMPLES_TOML, encoding='utf-8')
    return job, samples


def test_setup_logging_creates_dirs(app_dirs):
    appdata_base, local_base = setup_logging()
    assert appdata_base == app_dirs / 'roaming' / 'LuftMapper'
    assert local_base == app_dirs / 'local' / 'LuftMapper'
    assert (local_base / 'log').is_dir()


def test_parser_requires_arguments():
    with pytest.raises(SystemExit):
        build_parser().parse_args(['--job', 'x'])


def test_main_writes_image(app_dirs, job_files, tmp_path):
    job, samples = job_files
    output = tmp_path / 'out' / 'overlay.png'
    code = main(['--job', str(job), '--samples', str(samples), '--output', str(output), '--workers', '2'])
    assert code == 0
    with Image.open(output) as img:
        assert img.mode == 'RGBA'
        assert img.size == (4, 4)
        assert img.getpixel((1, 1)) == (153, 255, 102, 192)


def test_main_missing_job(app_dirs, job_files, tmp_path):
    _, samples = job_files
    code = main(['--job', str(tmp_path / 'absent.toml'), '--samples', str(samples), '--output', str(tmp_path / 'o.png')])
    assert code == 1
    assert not (tmp_path / 'o.png').exists()


def test_main_invalid_job(app_dirs, job_files, tmp_path):
    job, samples = job_files
    job.write_text(JOB_TOML.replace('width = 4', 'width = 0'), encoding='utf-8')
    code = main(['--job', str(job), '--samples', str(samples), '--output', str(tmp_path / 'o.png')])
    assert code == 1


def test_main_unparsable_job(app_dirs, job_files, tmp_path):
    job, samples = job_files
    job.write_text('[region\nwest = 4.0\n', encoding='utf-8')
    code = main(['--job', str(job), '--samples', str(samples), '--output', str(tmp_path / 'o.png')])
    assert code == 1
    assert not (tmp_path / 'o.png').exists()


def test_main_malformed_samples(app_dirs, job_files, tmp_path):
    job, samples = job_files
    samples.write_text('samples = 5\n', encoding='utf-8')
    code = main(['--job', str(job), '--samples', str(samples), '--output', str(tmp_path / 'o.png')])
    assert code == 1
