"""CountdownEvent — счётный сигнал завершения для pooled-стратегии."""

import threading
from typing import Optional


class CountdownEvent:
    """Событие, срабатывающее когда счётчик достигает нуля.

    Каждый work item вызывает signal() ровно один раз (успех, отмена или
    ошибка); ожидающий вызывает wait().
    """

    def __init__(self, initial_count: int):
        if initial_count < 0:
            raise ValueError(f"initial_count must be non-negative, got {initial_count}")

        self._remaining = initial_count
        self._condition = threading.Condition()

    @property
    def remaining(self) -> int:
        with self._condition:
            return self._remaining

    @property
    def is_set(self) -> bool:
        return self.remaining == 0

    def signal(self) -> int:
        """Уменьшает счётчик; возвращает оставшееся количество.

        Raises:
            RuntimeError: Если счётчик уже равен нулю
        """
        with self._condition:
            if self._remaining == 0:
                raise RuntimeError("CountdownEvent signalled more times than expected")
            self._remaining -= 1
            if self._remaining == 0:
                self._condition.notify_all()
            return self._remaining

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Блокирует до нуля или timeout; True если счётчик достиг нуля."""
        with self._condition:
            return self._condition.wait_for(lambda: self._remaining == 0, timeout)
