"""QuitKeyListener — внеполосный слушатель клавиши отмены.

Best-effort опрос клавиатуры в daemon-потоке с низким приоритетом.
При нажатии quit-клавиши устанавливает CancellationSignal. Гарантии
латентности нет: вычисления наблюдают флаг только в своих точках проверки.

Источники клавиш (KeySource):
- PosixKeySource: termios cbreak + select по stdin
- WindowsKeySource: msvcrt.kbhit / getwch
- ScriptedKeySource: заранее заданная последовательность (тесты, batch)
"""

import logging
import os
import sys
import threading
from abc import ABC, abstractmethod
from typing import Callable, Iterable, Optional

from numint.cancellation.signal import CancellationSignal
from numint.config import ListenerConfig


logger = logging.getLogger(__name__)

INTERRUPTED_MESSAGE = "Computation interrupted."


# =============================================================================
# KEY SOURCES
# =============================================================================


class KeySource(ABC):
    """Неблокирующий источник нажатий клавиш."""

    def open(self) -> None:
        """Подготовка источника (например, перевод терминала в cbreak)."""

    def close(self) -> None:
        """Восстановление состояния источника."""

    @abstractmethod
    def read_key(self, timeout: float) -> Optional[str]:
        """Одна клавиша или None если за timeout ничего не нажато."""


class PosixKeySource(KeySource):
    """stdin в режиме cbreak, опрос через select."""

    def __init__(self, stream=None):
        self._stream = stream or sys.stdin
        self._saved_attrs = None

    def open(self) -> None:
        import termios
        import tty

        fd = self._stream.fileno()
        self._saved_attrs = termios.tcgetattr(fd)
        tty.setcbreak(fd)

    def close(self) -> None:
        import termios

        if self._saved_attrs is not None:
            termios.tcsetattr(self._stream.fileno(), termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None

    def read_key(self, timeout: float) -> Optional[str]:
        import select

        fd = self._stream.fileno()
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None
        # select видит только байты в fd, поэтому чтение мимо буфера TextIOWrapper
        data = os.read(fd, 1)
        return data.decode(errors="ignore") or None


class WindowsKeySource(KeySource):
    """Консоль Windows через msvcrt."""

    def read_key(self, timeout: float) -> Optional[str]:
        import msvcrt
        import time

        deadline = time.monotonic() + timeout
        while True:
            if msvcrt.kbhit():
                return msvcrt.getwch()
            if time.monotonic() >= deadline:
                return None
            time.sleep(min(0.01, timeout))


class ScriptedKeySource(KeySource):
    """Последовательность клавиш, выдаваемых по одной на опрос.

    Пустая строка в последовательности означает "ничего не нажато" на
    этом опросе.
    """

    def __init__(self, keys: Iterable[str]):
        self._keys = iter(keys)
        self._wait = threading.Event()

    def read_key(self, timeout: float) -> Optional[str]:
        key = next(self._keys, None)
        if not key:
            # Имитация паузы опроса без нажатия
            self._wait.wait(timeout)
            return None
        return key


def default_key_source(stream=None) -> Optional[KeySource]:
    """Источник клавиш для текущей платформы или None если stdin не TTY."""
    stream = stream or sys.stdin
    try:
        is_tty = stream.isatty()
    except (AttributeError, ValueError):
        is_tty = False

    if not is_tty:
        return None

    if sys.platform == "win32":
        return WindowsKeySource()
    return PosixKeySource(stream)


# =============================================================================
# LISTENER
# =============================================================================


class QuitKeyListener:
    """Daemon-поток, устанавливающий CancellationSignal по quit-клавише.

    Использование:
        with QuitKeyListener(signal, source):
            strategy.process(...)
    """

    def __init__(
        self,
        signal: CancellationSignal,
        source: KeySource,
        config: Optional[ListenerConfig] = None,
        write: Optional[Callable[[str], None]] = None,
    ):
        self.signal = signal
        self.source = source
        self.config = config or ListenerConfig()
        self._write = write or print
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("listener already started")

        self.source.open()
        self._thread = threading.Thread(
            target=self._run, name="quit-key-listener", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        """Останавливает опрос и восстанавливает источник клавиш."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
        self.source.close()

    def _run(self) -> None:
        quit_key = self.config.quit_key.lower()
        poll = self.config.poll_interval_seconds

        while not self._stop.is_set() and not self.signal.is_requested:
            try:
                key = self.source.read_key(poll)
            except (OSError, ValueError):
                logger.exception("Key source failed, listener stopped")
                return

            if key is not None and key.lower() == quit_key:
                if self.signal.request("quit key"):
                    self._write(INTERRUPTED_MESSAGE)

    def __enter__(self) -> "QuitKeyListener":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
