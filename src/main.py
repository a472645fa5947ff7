"""Command line entry point: render one job from a sample snapshot."""

import argparse
import logging
import os
import sys
from pathlib import Path

from domain.profiles import load_job, load_samples
from services.render_service import render_job
from shared.constants import APP_DIR_NAME, LOG_FILE_NAME, LOG_FORMAT
from shared.diagnostics import log_thread_status
from shared.errors import ConfigurationError

logger = logging.getLogger(__name__)


def setup_logging() -> tuple[Path, Path]:
    """Configure application logging to LOCALAPPDATA and ensure user dirs.

    Returns:
        Tuple (appdata_base, local_base) for further use.
    """
    appdata_base = Path(os.getenv('APPDATA') or Path.home() / 'AppData' / 'Roaming') / APP_DIR_NAME
    local_base = Path(os.getenv('LOCALAPPDATA') or Path.home() / 'AppData' / 'Local') / APP_DIR_NAME
    log_dir = local_base / 'log'
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(str(log_file), encoding='utf-8'),
        ],
    )
    return appdata_base, local_base


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='LuftMapper - интерполяция показаний датчиков в растровый слой'
    )
    parser.add_argument('--job', required=True, help='Имя задания или путь к TOML')
    parser.add_argument('--samples', required=True, help='TOML со снимком показаний')
    parser.add_argument('--output', required=True, help='Путь к итоговому изображению')
    parser.add_argument('--workers', type=int, default=None, help='Число потоков')
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    setup_logging()
    logger.info('Starting LuftMapper')

    try:
        job = load_job(args.job)
        samples = load_samples(args.samples)
        raster = render_job(job, samples, workers=args.workers)
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        logger.info('Writing to %s', output)
        raster.to_image().save(output)
    except (ConfigurationError, FileNotFoundError) as e:
        logger.error('Failed to render job: %s', e)
        return 1
    finally:
        log_thread_status('shutdown')
    return 0


if __name__ == '__main__':
    sys.exit(main())
