"""
Diagnostic utilities.

Memory and thread snapshots logged around long-running renders.
"""

import logging
import threading
from typing import Any

import psutil

logger = logging.getLogger(__name__)


def get_memory_info() -> dict[str, Any]:
    """Get comprehensive memory usage information."""
    try:
        process = psutil.Process()
        memory_info = process.memory_info()
        system_memory = psutil.virtual_memory()

        return {
            'process_rss_mb': round(memory_info.rss / 1024 / 1024, 2),
            'process_vms_mb': round(memory_info.vms / 1024 / 1024, 2),
            'system_total_mb': round(system_memory.total / 1024 / 1024, 2),
            'system_available_mb': round(
                system_memory.available / 1024 / 1024,
                2,
            ),
            'system_used_percent': system_memory.percent,
            'process_memory_percent': round(process.memory_percent(), 2),
        }
    except Exception as e:
        return {'error': f'Failed to get memory info: {e}'}


def get_thread_info() -> dict[str, Any]:
    """Get information about active threads."""
    try:
        info: dict[str, Any] = {
            'active_count': threading.active_count(),
            'thread_names': [t.name for t in threading.enumerate()],
        }
        info['system_threads'] = psutil.Process().num_threads()
    except Exception as e:
        return {'error': f'Failed to get thread info: {e}'}
    else:
        return info


def log_memory_usage(context: str = '') -> None:
    """Log current memory usage with optional context."""
    memory_info = get_memory_info()
    if 'error' in memory_info:
        logger.warning('Memory info unavailable (%s): %s', context, memory_info['error'])
        return
    logger.info(
        'Memory usage%s: process RSS=%.2fMB, system available=%.2fMB (%.1f%% used)',
        f' ({context})' if context else '',
        memory_info['process_rss_mb'],
        memory_info['system_available_mb'],
        memory_info['system_used_percent'],
    )


def log_thread_status(context: str = '') -> None:
    """Log active threads with optional context."""
    thread_info = get_thread_info()
    if 'error' in thread_info:
        logger.warning('Thread info unavailable (%s): %s', context, thread_info['error'])
        return
    logger.info(
        'Threads%s: python=%d system=%s',
        f' ({context})' if context else '',
        thread_info['active_count'],
        thread_info.get('system_threads', '?'),
    )
