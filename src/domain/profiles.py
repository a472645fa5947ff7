import logging
import os
from collections.abc import Iterable
from pathlib import Path

import tomlkit
from pydantic import ValidationError
from tomlkit.exceptions import TOMLKitError

from domain.models import RenderJob, SensorSample
from domain.toml_sections import flat_to_sectioned, sectioned_to_flat
from shared.constants import APP_DIR_NAME, JOBS_DIR
from shared.errors import ConfigurationError

logger = logging.getLogger(__name__)


def _user_jobs_dir() -> Path:
    """
    Determine job profiles directory.

    1) If <project_root>/configs/jobs exists, use it (run-from-repo setups).
    2) Otherwise, fall back to %APPDATA%/LuftMapper/configs/jobs
       or ~/AppData/Roaming/LuftMapper/configs/jobs when APPDATA is not set.
    """
    project_root = Path(__file__).resolve().parent.parent.parent
    local_jobs = project_root / JOBS_DIR
    if local_jobs.exists():
        return local_jobs

    return (
        Path(os.getenv('APPDATA') or (Path.home() / 'AppData' / 'Roaming'))
        / APP_DIR_NAME
        / JOBS_DIR
    )


def _read_toml(path: Path) -> dict:
    """Разбор TOML файла; синтаксические ошибки -> ConfigurationError."""
    try:
        return tomlkit.parse(path.read_text(encoding='utf-8')).unwrap()
    except TOMLKitError as e:
        msg = f'Некорректный TOML {path}: {e}'
        raise ConfigurationError(msg) from e


def ensure_jobs_dir() -> Path:
    jobs_dir = _user_jobs_dir()
    jobs_dir.mkdir(parents=True, exist_ok=True)
    return jobs_dir


def list_jobs() -> list[str]:
    """Список имён заданий без расширения."""
    folder = ensure_jobs_dir()
    return sorted(p.stem for p in folder.glob('*.toml') if p.is_file())


def job_path(name: str) -> Path:
    """Путь к файлу задания по имени."""
    return ensure_jobs_dir() / f'{name}.toml'


def _resolve(name_or_path: str) -> Path:
    p = Path(name_or_path)
    return p if p.suffix.lower() == '.toml' else job_path(name_or_path)


def load_job(name_or_path: str) -> RenderJob:
    """
    Загрузка и валидация задания TOML -> RenderJob.

    Поддерживает как имя задания (без .toml) из каталога заданий,
    так и абсолютный/относительный путь до TOML файла.
    """
    path = _resolve(name_or_path)
    if not path.exists():
        msg = f'Задание не найдено: {path}'
        raise FileNotFoundError(msg)
    data = _read_toml(path)
    flat = sectioned_to_flat(data)
    flat.setdefault('name', path.stem)
    try:
        job = RenderJob.model_validate(flat)
    except ValidationError as e:
        msg = f'Некорректное задание {path}: {e}'
        raise ConfigurationError(msg) from e
    logger.info(
        'Loaded job %s: bbox=(%.4f, %.4f, %.4f, %.4f) raster=%dx%d',
        job.name,
        job.west,
        job.south,
        job.east,
        job.north,
        job.width,
        job.height,
    )
    return job


def save_job(job: RenderJob) -> Path:
    """Сохранение задания в TOML (без атомарности и бэкапов)."""
    path = job_path(job.name)
    data = flat_to_sectioned(job.model_dump(mode='json', exclude_none=True))
    path.write_text(tomlkit.dumps(data), encoding='utf-8')
    return path


def delete_job(name: str) -> None:
    """Удаление файла задания, если он существует."""
    path = job_path(name)
    if path.exists():
        path.unlink()


def load_samples(path: str | Path) -> list[SensorSample]:
    """Снимок показаний датчиков из TOML (таблицы ``[[samples]]``)."""
    p = Path(path)
    if not p.exists():
        msg = f'Файл показаний не найден: {p}'
        raise FileNotFoundError(msg)
    rows = _read_toml(p).get('samples', [])
    if not isinstance(rows, list):
        msg = f'Ожидался массив таблиц [[samples]] в {p}'
        raise ConfigurationError(msg)
    try:
        samples = [SensorSample.model_validate(row) for row in rows]
    except ValidationError as e:
        msg = f'Некорректные показания в {p}: {e}'
        raise ConfigurationError(msg) from e
    logger.info('Loaded %d samples from %s', len(samples), p)
    return samples


def save_samples(path: str | Path, samples: Iterable[SensorSample]) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    data = {'samples': [s.model_dump() for s in samples]}
    p.write_text(tomlkit.dumps(data), encoding='utf-8')
    return p
