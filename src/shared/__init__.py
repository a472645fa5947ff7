"""Shared utilities and helpers."""
from shared.diagnostics import log_memory_usage, log_thread_status
from shared.errors import ConfigurationError
from shared.progress import ConsoleProgress, set_progress_callback

__all__ = [
    'ConfigurationError',
    'ConsoleProgress',
    'log_memory_usage',
    'log_thread_status',
    'set_progress_callback',
]
