import contextlib
import logging
import sys
import threading
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


# Глобальный колбэк прогресса для внешних потребителей (опционально)
class _CbStore:
    progress: Callable[[int, int, str], None] | None = None


def set_progress_callback(cb: Callable[[int, int, str], None] | None) -> None:
    """Устанавливает глобальный колбэк прогресса: (done, total, label)."""
    _CbStore.progress = cb


class SingleLineRenderer:
    """Пишет сообщения прогресса в одну строку терминала."""

    def __init__(self, *, single_line: bool = True, stream=None) -> None:
        self.single_line = single_line
        self._stream = stream if stream is not None else sys.stderr
        self._last_len = 0

    def write_line(self, msg: str) -> None:
        if self.single_line:
            pad = max(0, self._last_len - len(msg))
            self._stream.write('\r' + msg + ' ' * pad)
        else:
            self._stream.write(msg + '\n')
        self._stream.flush()
        self._last_len = len(msg)

    def clear_line(self) -> None:
        if self.single_line and self._last_len:
            self._stream.write('\r' + ' ' * self._last_len + '\r')
            self._stream.flush()
        self._last_len = 0


class ConsoleProgress:
    """Прогресс-бар для пошаговых операций, безопасный для потоков."""

    def __init__(
        self,
        total: int,
        label: str = 'Прогресс',
        writer: SingleLineRenderer | None = None,
    ) -> None:
        self.total = max(1, int(total))
        self.done = 0
        self.start = time.monotonic()
        self.label = label
        self._writer = writer
        self._lock = threading.Lock()
        self._render()  # показать 0%

    def _render(self) -> None:
        if self._writer is not None:
            bar_len = 30
            filled = int(bar_len * self.done / self.total)
            bar = '█' * filled + '░' * (bar_len - filled)
            self._writer.write_line(f'{self.label}: [{bar}] {self.done}/{self.total}')
        # Сообщаем о прогрессе
        if _CbStore.progress is not None:
            with contextlib.suppress(Exception):
                _CbStore.progress(self.done, self.total, self.label)

    def step_sync(self, n: int = 1) -> None:
        with self._lock:
            self.done = min(self.total, self.done + n)
            self._render()

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.start

    def close(self) -> None:
        if self._writer is not None:
            self._writer.clear_line()
        logger.debug('%s finished in %.3fs', self.label, self.elapsed)
