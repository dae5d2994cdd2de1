"""
ComputationResult — Результат вычисления интеграла на одном интервале

Immutable Pydantic модели:
- ComputationResult: значение интеграла + сводка (создаётся только при
  успешном, не отменённом завершении)
- ProgressEvent: уведомление о прогрессе одного вычисления
"""

import math
from typing import Final, Optional

from pydantic import BaseModel, Field

from .interval import Interval


METHOD_TRAPEZOIDAL: Final[str] = "trapezoidal"


class ComputationResult(BaseModel):
    """
    Результат вычисления на одном интервале.

    Attributes:
        value: оценка интеграла
        function_name: отображаемое имя функции
        interval: интервал и число подразбиений
        method: метод интегрирования
        exact_value: точное значение интеграла (если известна первообразная)
    """

    value: float = Field(..., description="Оценка интеграла")
    function_name: str = Field(..., min_length=1, description="Имя функции")
    interval: Interval = Field(..., description="Интервал интегрирования")
    method: str = Field(default=METHOD_TRAPEZOIDAL, description="Метод")
    exact_value: Optional[float] = Field(
        default=None, description="Точное значение интеграла"
    )

    model_config = {"frozen": True}

    @property
    def summary(self) -> str:
        """
        Человекочитаемая сводка.

        Формат: "Function: <name>, Interval: [<a>, <b>], Method: trapezoidal,
        Subdivisions: <n>."
        """
        return (
            f"Function: {self.function_name}, "
            f"Interval: {self.interval.bounds_text}, "
            f"Method: {self.method}, "
            f"Subdivisions: {self.interval.subdivisions}."
        )

    @property
    def absolute_error(self) -> Optional[float]:
        """|value - exact_value| или None если точное значение неизвестно.

        Переполнение (inf/NaN в оценке или в точном значении) тоже даёт None:
        погрешность в этом случае не определена.
        """
        if self.exact_value is None:
            return None
        if not (math.isfinite(self.value) and math.isfinite(self.exact_value)):
            return None
        return abs(self.value - self.exact_value)

    def report_line(self, show_error: bool = False) -> str:
        """Строка итогового отчёта: сводка + значение с 4 знаками."""
        line = f"{self.summary} Result: {self.value:.4f}"
        error = self.absolute_error
        if show_error and error is not None:
            line += f" (exact: {self.exact_value:.4f}, error: {error:.2e})"
        return line


class ProgressEvent(BaseModel):
    """
    Уведомление о прогрессе вычисления.

    Attributes:
        interval: интервал, к которому относится уведомление
        iteration: номер внутренней точки i (1..n-1)
        percent: i/n в целых процентах
    """

    interval: Interval
    iteration: int = Field(..., ge=1)
    percent: int = Field(..., ge=0, le=100)

    model_config = {"frozen": True}

    def message(self) -> str:
        """Формат: "[Interval <a>-<b>] Progress: <percent>%"."""
        return f"[Interval {self.interval.label}] Progress: {self.percent}%"
