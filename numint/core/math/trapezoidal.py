"""
Trapezoidal — Составная формула трапеций с кооперативной отменой

Одно вычисление (IntervalComputation) = фиксированная функция + интервал.

Алгоритм:
    h   = (b - a) / n
    sum = 0.5 * (f(a) + f(b))
    для i = 1..n-1:
        проверка отмены → ComputationCancelled (без частичного результата)
        если step = n // 10 > 0 и i % step == 0 → уведомление о прогрессе
        sum += f(a + i*h)
        throttle() (искусственная задержка, no-op по умолчанию)
    результат = sum * h

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. n < 10 → прогресс не сообщается (нет modulo-by-zero)
2. b < a не нормализуется: integrate(f, a, b) == -integrate(f, b, a)
3. a == b → h = 0 → результат 0
4. Вся арифметика в float64, NaN/Inf пропагируют естественно
"""

import logging
import time
from typing import Callable, Optional

from numint.cancellation.signal import CancellationSignal
from numint.core.domain.function import Integrand
from numint.core.domain.interval import Interval
from numint.core.domain.result import ComputationResult, ProgressEvent
from numint.core.math.numerical_safeguards import (
    progress_percent,
    progress_step,
    should_report_progress,
    validate_finite,
    validate_subdivisions,
)


logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]
Throttle = Callable[[], None]


def sleep_throttle(delay_seconds: float) -> Optional[Throttle]:
    """
    Throttle hook с фиксированной задержкой на итерацию.

    Returns:
        None при delay_seconds == 0 (no-op), иначе callable с time.sleep

    Raises:
        ValueError: Если delay_seconds < 0
    """
    if delay_seconds < 0:
        raise ValueError(f"delay_seconds must be non-negative, got {delay_seconds}")

    if delay_seconds == 0:
        return None

    def throttle() -> None:
        time.sleep(delay_seconds)

    return throttle


def trapezoid_value(
    function: Callable[[float], float],
    a: float,
    b: float,
    subdivisions: int,
) -> float:
    """
    Оценка ∫_a^b f(x) dx составной формулой трапеций без отмены и прогресса.

    Examples:
        >>> trapezoid_value(lambda x: 1.0, 0.0, 2.0, 4)
        2.0
    """
    validate_finite(a, "a")
    validate_finite(b, "b")
    validate_subdivisions(subdivisions)

    h = (b - a) / subdivisions
    total = 0.5 * (function(a) + function(b))

    for i in range(1, subdivisions):
        total += function(a + i * h)

    return total * h


def compute(
    function: Integrand,
    interval: Interval,
    cancellation: CancellationSignal,
    on_progress: Optional[ProgressCallback] = None,
    throttle: Optional[Throttle] = None,
) -> ComputationResult:
    """
    Вычисление интеграла на одном интервале с отменой и прогрессом.

    Args:
        function: подынтегральная функция из фиксированного набора
        interval: интервал и число подразбиений
        cancellation: общий флаг отмены (читается на каждой итерации)
        on_progress: получатель уведомлений о прогрессе (None — не сообщать)
        throttle: задержка после каждой итерации (None — без задержки)

    Returns:
        ComputationResult с оценкой и сводкой

    Raises:
        ComputationCancelled: Если отмена запрошена до или во время цикла
    """
    label = interval.label
    a = interval.a
    b = interval.b
    n = interval.subdivisions

    # Отмена до старта: вычисление не начинается
    cancellation.raise_if_requested(label)

    h = (b - a) / n
    total = 0.5 * (function.evaluate(a) + function.evaluate(b))
    step = progress_step(n) if on_progress is not None else 0

    for i in range(1, n):
        cancellation.raise_if_requested(label)

        if should_report_progress(i, step):
            on_progress(
                ProgressEvent(
                    interval=interval,
                    iteration=i,
                    percent=progress_percent(i, n),
                )
            )

        total += function.evaluate(a + i * h)

        if throttle is not None:
            throttle()

    value = total * h
    logger.debug("Interval %s done: %s", label, value)

    return ComputationResult(
        value=value,
        function_name=function.name,
        interval=interval,
        exact_value=function.exact_integral(a, b),
    )
