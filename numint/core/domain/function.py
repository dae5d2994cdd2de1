"""
Integrand — Фиксированный набор подынтегральных функций

Закрытый набор из трёх многочленов. Каждая функция — immutable value object:
отображаемое имя, чистый evaluator f(x) и первообразная F(x) в замкнутой
форме (для точного значения интеграла и оценки погрешности).

Пользовательские функции не поддерживаются: набор фиксирован и создаётся
один раз при импорте модуля.

Степени записаны через умножение: при переполнении float получается inf,
а не OverflowError от оператора **.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Final


# =============================================================================
# ENUMS
# =============================================================================


class IntegrandKind(str, Enum):
    """Идентификатор функции из фиксированного набора (порядок меню)."""

    LINEAR_QUADRATIC = "LINEAR_QUADRATIC"
    SHIFTED_QUADRATIC = "SHIFTED_QUADRATIC"
    FULL_QUADRATIC = "FULL_QUADRATIC"


# =============================================================================
# VALUE OBJECT
# =============================================================================


@dataclass(frozen=True)
class Integrand:
    """
    Подынтегральная функция ℝ→ℝ с отображаемым именем.

    Attributes:
        kind: идентификатор в фиксированном наборе
        name: строка для меню и сводки (например, "y = 2x^2 + 3")
        evaluate: чистая функция f(x)
        antiderivative: первообразная F(x), F' = f
    """

    kind: IntegrandKind
    name: str
    evaluate: Callable[[float], float]
    antiderivative: Callable[[float], float]

    def __call__(self, x: float) -> float:
        return self.evaluate(x)

    def exact_integral(self, a: float, b: float) -> float:
        """Точное значение ∫_a^b f(x) dx = F(b) - F(a) (знак сохраняется при b < a)."""
        return self.antiderivative(b) - self.antiderivative(a)

    def __str__(self) -> str:
        return self.name


# =============================================================================
# ФИКСИРОВАННЫЙ НАБОР
# =============================================================================


LINEAR_QUADRATIC: Final[Integrand] = Integrand(
    kind=IntegrandKind.LINEAR_QUADRATIC,
    name="y = 2x + 2x^2",
    evaluate=lambda x: 2 * x + 2 * x * x,
    antiderivative=lambda x: x * x + 2 * x * x * x / 3,
)

SHIFTED_QUADRATIC: Final[Integrand] = Integrand(
    kind=IntegrandKind.SHIFTED_QUADRATIC,
    name="y = 2x^2 + 3",
    evaluate=lambda x: 2 * x * x + 3,
    antiderivative=lambda x: 2 * x * x * x / 3 + 3 * x,
)

FULL_QUADRATIC: Final[Integrand] = Integrand(
    kind=IntegrandKind.FULL_QUADRATIC,
    name="y = 3x^2 + 2x - 3",
    evaluate=lambda x: 3 * x * x + 2 * x - 3,
    antiderivative=lambda x: x * x * x + x * x - 3 * x,
)

# Порядок соответствует нумерации меню (1-based)
FUNCTIONS: Final[tuple[Integrand, ...]] = (
    LINEAR_QUADRATIC,
    SHIFTED_QUADRATIC,
    FULL_QUADRATIC,
)


def get_function(choice: int) -> Integrand:
    """
    Функция по номеру пункта меню.

    Args:
        choice: номер в диапазоне [1, len(FUNCTIONS)]

    Raises:
        ValueError: Если номер вне диапазона
    """
    if isinstance(choice, bool) or not isinstance(choice, int):
        raise ValueError(f"function choice must be an integer, got {choice!r}")

    if not 1 <= choice <= len(FUNCTIONS):
        raise ValueError(
            f"function choice must be in [1, {len(FUNCTIONS)}], got {choice}"
        )

    return FUNCTIONS[choice - 1]


def get_function_by_kind(kind: IntegrandKind) -> Integrand:
    """Функция по идентификатору IntegrandKind."""
    for function in FUNCTIONS:
        if function.kind == kind:
            return function
    raise ValueError(f"Unknown integrand kind: {kind}")
