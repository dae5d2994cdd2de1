"""CancellationSignal — общий кооперативный флаг остановки.

Монотонный флаг: единственный переход "not requested" → "requested",
повторные request() — no-op. Один экземпляр разделяется всеми
вычислениями (threads, asyncio tasks, pool items), никогда не копируется
на воркер.
"""

import logging
import threading
from typing import Optional


logger = logging.getLogger(__name__)


class ComputationCancelled(Exception):
    """
    Кооперативная отмена одного вычисления.

    Поднимается в точке проверки внутри цикла интегрирования. Частичный
    результат не возвращается.
    """

    def __init__(self, message: str = "Computation cancelled", label: Optional[str] = None):
        super().__init__(message)
        self.label = label


class CancellationSignal:
    """Thread-safe монотонный флаг отмены поверх threading.Event."""

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._reason: Optional[str] = None

    @property
    def is_requested(self) -> bool:
        """True после первого request()."""
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        """Причина отмены, переданная в первый request()."""
        return self._reason

    def request(self, reason: str = "requested") -> bool:
        """Запрос отмены.

        Returns:
            True если этот вызов выполнил переход, False если отмена уже
            была запрошена ранее.
        """
        with self._lock:
            if self._event.is_set():
                return False
            self._reason = reason
            self._event.set()

        logger.info("Cancellation requested: %s", reason)
        return True

    def raise_if_requested(self, label: Optional[str] = None) -> None:
        """Поднимает ComputationCancelled если отмена запрошена."""
        if self._event.is_set():
            raise ComputationCancelled(label=label)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Блокирует до запроса отмены или timeout; возвращает is_requested."""
        return self._event.wait(timeout)

    def __repr__(self) -> str:
        return f"CancellationSignal(requested={self.is_requested})"
