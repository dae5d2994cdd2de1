"""
Interval — Модель интервала интегрирования

Immutable Pydantic модель: границы [a, b] и число подразбиений n.

Инварианты:
- n >= 1 (шаг h = (b - a) / n)
- a, b конечные
- b < a допустимо: интеграл с отрицательной ориентацией, границы НЕ
  нормализуются
"""

import math

from pydantic import BaseModel, Field, field_validator


# Выше этого порога целое float печатается в экспоненциальной форме
_INTEGRAL_DISPLAY_LIMIT = 1e16


def format_number(value: float) -> str:
    """
    Кратчайшее представление float для вывода.

    Целые значения по модулю меньше 1e16 печатаются без ".0" (2.0 → "2"),
    остальные через repr (1e103 → "1e+103", а не 104 цифры).

    Examples:
        >>> format_number(2.0)
        '2'
        >>> format_number(-0.5)
        '-0.5'
        >>> format_number(1e103)
        '1e+103'
    """
    if (
        math.isfinite(value)
        and value.is_integer()
        and abs(value) < _INTEGRAL_DISPLAY_LIMIT
    ):
        return str(int(value))
    return repr(value)


class Interval(BaseModel):
    """
    Интервал интегрирования с числом подразбиений.

    Attributes:
        a: начало интервала
        b: конец интервала (может быть меньше a)
        subdivisions: число равных отрезков n >= 1
    """

    a: float = Field(..., description="Начало интервала")
    b: float = Field(..., description="Конец интервала")
    subdivisions: int = Field(..., ge=1, description="Число подразбиений n")

    model_config = {"frozen": True}

    @field_validator("a", "b")
    @classmethod
    def validate_finite_bound(cls, v: float) -> float:
        """Границы должны быть конечными (NaN/Inf отклоняются)."""
        if not math.isfinite(v):
            raise ValueError(f"interval bound must be finite, got {v}")
        return v

    @property
    def step(self) -> float:
        """Шаг h = (b - a) / n."""
        return (self.b - self.a) / self.subdivisions

    @property
    def label(self) -> str:
        """Идентификатор интервала в строках прогресса: "<a>-<b>"."""
        return f"{format_number(self.a)}-{format_number(self.b)}"

    @property
    def bounds_text(self) -> str:
        """Границы для сводки: "[<a>, <b>]"."""
        return f"[{format_number(self.a)}, {format_number(self.b)}]"

    def reversed(self) -> "Interval":
        """Тот же интервал с обратной ориентацией [b, a]."""
        return Interval(a=self.b, b=self.a, subdivisions=self.subdivisions)
