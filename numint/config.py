"""Конфигурация движка и слушателя клавиши отмены.

Frozen dataclass конфиги с environment overrides:
- NUMINT_THROTTLE_MS: задержка на итерацию (мс), 0 — без задержки
- NUMINT_MAX_WORKERS: размер пула для pooled-стратегии
- NUMINT_PROGRESS: 0/false/no отключает уведомления о прогрессе
"""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional


# Задержка демо-режима CLI: ~10 мс на итерацию, чтобы отмена и прогресс
# были наблюдаемы
DEMO_THROTTLE_SECONDS = 0.01

_FALSE_VALUES = {"0", "false", "no", "off"}
_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class EngineConfig:
    """Конфигурация выполнения вычислений.

    throttle_seconds = 0 означает отсутствие throttle hook (no-op).
    max_workers = None — размер пула выбирает runtime.
    """
    throttle_seconds: float = 0.0
    max_workers: Optional[int] = None
    progress_enabled: bool = True

    def __post_init__(self):
        if self.throttle_seconds < 0:
            raise ValueError(
                f"throttle_seconds must be non-negative, got {self.throttle_seconds}"
            )
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        base: Optional["EngineConfig"] = None,
    ) -> "EngineConfig":
        """Конфиг с overrides из переменных окружения.

        Args:
            environ: источник переменных (default: os.environ)
            base: исходный конфиг (default: EngineConfig())

        Raises:
            ValueError: Если значение переменной невалидно
        """
        env = os.environ if environ is None else environ
        config = base or cls()
        changes = {}

        throttle_ms = env.get("NUMINT_THROTTLE_MS")
        if throttle_ms is not None:
            try:
                changes["throttle_seconds"] = float(throttle_ms) / 1000.0
            except ValueError:
                raise ValueError(
                    f"NUMINT_THROTTLE_MS must be a number, got {throttle_ms!r}"
                ) from None

        max_workers = env.get("NUMINT_MAX_WORKERS")
        if max_workers is not None:
            try:
                changes["max_workers"] = int(max_workers)
            except ValueError:
                raise ValueError(
                    f"NUMINT_MAX_WORKERS must be an integer, got {max_workers!r}"
                ) from None

        progress = env.get("NUMINT_PROGRESS")
        if progress is not None:
            flag = progress.strip().lower()
            if flag in _FALSE_VALUES:
                changes["progress_enabled"] = False
            elif flag in _TRUE_VALUES:
                changes["progress_enabled"] = True
            else:
                raise ValueError(
                    f"NUMINT_PROGRESS must be a boolean flag, got {progress!r}"
                )

        return replace(config, **changes) if changes else config


@dataclass(frozen=True)
class ListenerConfig:
    """Конфигурация слушателя клавиши отмены.

    poll_interval_seconds — пауза между опросами (низкий приоритет,
    гарантии латентности нет).
    """
    quit_key: str = "q"
    poll_interval_seconds: float = 0.05

    def __post_init__(self):
        if len(self.quit_key) != 1:
            raise ValueError(f"quit_key must be a single character, got {self.quit_key!r}")
        if self.poll_interval_seconds <= 0:
            raise ValueError(
                f"poll_interval_seconds must be positive, got {self.poll_interval_seconds}"
            )
