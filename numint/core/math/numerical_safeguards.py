"""
Numerical Safeguards — Safe Math Primitives для интегрирования

Модуль обеспечивает численную устойчивость вспомогательных операций движка:
- Округление "half away from zero" для процентов прогресса
- Защита шага прогресса от modulo-by-zero при малом числе подразбиений
- Валидация входных параметров (finite bounds, subdivisions >= 1)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Modulo-by-zero никогда не происходит (шаг 0 означает "прогресс отключён")
2. NaN/Inf во входных границах отклоняются до начала вычислений
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Количество отчётов о прогрессе на интервал (шаг = n // PROGRESS_REPORTS)
PROGRESS_REPORTS: Final[int] = 10


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def round_to_epsilon(value: float, eps: float) -> float:
    """
    Округление значения до ближайшего кратного epsilon.

    Использует "round half away from zero" (а не банковское округление
    встроенного round()), поэтому 12.5% печатается как 13%.

    Args:
        value: Значение для округления
        eps: Шаг квантования

    Returns:
        Округлённое значение

    Raises:
        ValueError: Если eps <= 0

    Examples:
        >>> round_to_epsilon(12.5, 1.0)
        13.0
        >>> round_to_epsilon(-12.5, 1.0)
        -13.0
    """
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")

    ratio = value / eps

    if ratio >= 0:
        steps = math.floor(ratio + 0.5)
    else:
        steps = math.ceil(ratio - 0.5)

    return steps * eps


# =============================================================================
# ПРОГРЕСС
# =============================================================================


def progress_step(subdivisions: int) -> int:
    """
    Шаг итераций между отчётами о прогрессе.

    Returns:
        subdivisions // PROGRESS_REPORTS; 0 означает, что прогресс не
        сообщается (n < 10), иначе i % 0 упал бы с ZeroDivisionError.

    Examples:
        >>> progress_step(1000)
        100
        >>> progress_step(10)
        1
        >>> progress_step(9)
        0
    """
    return subdivisions // PROGRESS_REPORTS


def should_report_progress(iteration: int, step: int) -> bool:
    """True если на итерации iteration нужно сообщить прогресс (step > 0)."""
    if step <= 0:
        return False
    return iteration % step == 0


def progress_percent(iteration: int, subdivisions: int) -> int:
    """
    Доля i/n в целых процентах.

    Examples:
        >>> progress_percent(1, 8)
        13
        >>> progress_percent(100, 1000)
        10
    """
    return int(round_to_epsilon(100.0 * iteration / subdivisions, 1.0))


# =============================================================================
# ВАЛИДАЦИЯ И ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """True если значение finite (не NaN, не Inf)."""
    return math.isfinite(value)


def validate_finite(value: float, name: str) -> None:
    """
    Валидация, что значение конечное.

    Raises:
        ValueError: Если value NaN или Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")


def validate_subdivisions(value: int, name: str = "subdivisions") -> None:
    """
    Валидация числа подразбиений: целое n >= 1.

    Шаг h = (b - a) / n, поэтому n = 0 недопустимо.

    Raises:
        ValueError: Если value не int или value < 1
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")

    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
