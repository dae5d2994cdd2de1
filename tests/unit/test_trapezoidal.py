"""
Тесты для Trapezoidal — составная формула трапеций

Проверяемые инварианты:
1. Сходимость к точному интегралу при росте n
2. Смена ориентации меняет знак: I(a, b) == -I(b, a)
3. n = 1 → двухточечная трапеция
4. a == b → 0
5. Прогресс: n = 10 → 9 уведомлений, n < 10 → ни одного
6. Кооперативная отмена без частичного результата
"""

import math

import pytest

from numint.cancellation.signal import CancellationSignal, ComputationCancelled
from numint.core.domain import FUNCTIONS, SHIFTED_QUADRATIC, Interval
from numint.core.math.trapezoidal import compute, sleep_throttle, trapezoid_value


def _compute(function, a, b, n, **kwargs):
    return compute(function, Interval(a=a, b=b, subdivisions=n), CancellationSignal(), **kwargs)


# =============================================================================
# ТЕСТЫ: Численная корректность
# =============================================================================


class TestTrapezoidalAccuracy:
    """Численные свойства формулы трапеций."""

    def test_shifted_quadratic_scenario(self) -> None:
        """y = 2x^2 + 3 на [0, 2], n = 1000 → 34/3 с точностью 1e-4."""
        result = _compute(SHIFTED_QUADRATIC, 0.0, 2.0, 1000)
        assert abs(result.value - 34.0 / 3.0) < 1e-4
        assert result.report_line().endswith("Result: 11.3333")

    @pytest.mark.parametrize("function", FUNCTIONS, ids=lambda f: f.kind.value)
    def test_convergence_monotonic(self, function) -> None:
        """Погрешность монотонно убывает с ростом n."""
        exact = function.exact_integral(-1.0, 3.0)
        errors = [
            abs(_compute(function, -1.0, 3.0, n).value - exact)
            for n in (1, 2, 4, 8, 16, 64, 256)
        ]
        assert all(later < earlier for earlier, later in zip(errors, errors[1:]))
        assert errors[-1] < 1e-3

    @pytest.mark.parametrize("function", FUNCTIONS, ids=lambda f: f.kind.value)
    def test_orientation_reversal_negates(self, function) -> None:
        """integrate(f, a, b, n) == -integrate(f, b, a, n)."""
        forward = _compute(function, -1.5, 2.0, 37).value
        backward = _compute(function, 2.0, -1.5, 37).value
        assert forward == pytest.approx(-backward, rel=1e-9, abs=1e-12)

    @pytest.mark.parametrize("function", FUNCTIONS, ids=lambda f: f.kind.value)
    def test_single_subdivision_is_two_point_trapezoid(self, function) -> None:
        """n = 1 → 0.5 * (f(a) + f(b)) * (b - a)."""
        a, b = 0.5, 2.5
        expected = 0.5 * (function(a) + function(b)) * (b - a)
        assert _compute(function, a, b, 1).value == pytest.approx(expected, rel=1e-12, abs=1e-12)

    @pytest.mark.parametrize("function", FUNCTIONS, ids=lambda f: f.kind.value)
    def test_degenerate_interval_is_zero(self, function) -> None:
        """a == b → h = 0 → интеграл 0."""
        assert _compute(function, 1.25, 1.25, 50).value == 0.0

    def test_huge_bounds_do_not_raise(self) -> None:
        """Переполнение первообразной не роняет вычисление: оценка остаётся конечной."""
        result = _compute(SHIFTED_QUADRATIC, 1e103, 1.00001e103, 10)

        assert math.isfinite(result.value)
        assert math.isnan(result.exact_value)
        assert result.absolute_error is None
        assert result.report_line(show_error=True) == result.report_line()

    def test_overflowing_estimate_propagates_inf(self) -> None:
        """f(b) = inf пропагирует в результат без исключения."""
        result = _compute(SHIFTED_QUADRATIC, 0.0, 1e200, 2)
        assert result.value == math.inf
        assert result.report_line().endswith("Result: inf")

    @pytest.mark.parametrize("function", FUNCTIONS, ids=lambda f: f.kind.value)
    def test_wide_huge_interval(self, function) -> None:
        result = _compute(function, 1e103, 2e103, 10)
        assert result.interval.label == "1e+103-2e+103"
        assert result.absolute_error is None

    def test_summary_and_exact_value(self) -> None:
        result = _compute(SHIFTED_QUADRATIC, 0.0, 2.0, 100)
        assert result.summary == (
            "Function: y = 2x^2 + 3, Interval: [0, 2], "
            "Method: trapezoidal, Subdivisions: 100."
        )
        assert result.exact_value == pytest.approx(34.0 / 3.0)
        assert result.absolute_error < 1e-3

    def test_trapezoid_value_matches_compute(self) -> None:
        """Некэнселлируемый вариант даёт то же значение."""
        for function in FUNCTIONS:
            expected = _compute(function, -2.0, 1.0, 123).value
            assert trapezoid_value(function, -2.0, 1.0, 123) == pytest.approx(expected, rel=1e-14)

    def test_trapezoid_value_validates(self) -> None:
        with pytest.raises(ValueError, match="must be >= 1"):
            trapezoid_value(SHIFTED_QUADRATIC, 0.0, 1.0, 0)

        with pytest.raises(ValueError, match="NaN/Inf"):
            trapezoid_value(SHIFTED_QUADRATIC, float("nan"), 1.0, 10)


# =============================================================================
# ТЕСТЫ: Прогресс
# =============================================================================


class TestTrapezoidalProgress:
    """Уведомления о прогрессе."""

    def test_ten_subdivisions_reports_every_iteration(self) -> None:
        """n = 10 → шаг 1 → 9 уведомлений (i = 1..9)."""
        events = []
        _compute(SHIFTED_QUADRATIC, 0.0, 2.0, 10, on_progress=events.append)

        assert len(events) == 9
        assert [e.iteration for e in events] == list(range(1, 10))
        assert [e.percent for e in events] == [10, 20, 30, 40, 50, 60, 70, 80, 90]

    @pytest.mark.parametrize("n", [1, 2, 5, 9])
    def test_small_subdivisions_suppress_progress(self, n) -> None:
        """n < 10 → без уведомлений и без ZeroDivisionError."""
        events = []
        _compute(SHIFTED_QUADRATIC, 0.0, 2.0, n, on_progress=events.append)
        assert events == []

    def test_thousand_subdivisions_report_tenths(self) -> None:
        events = []
        _compute(SHIFTED_QUADRATIC, 0.0, 2.0, 1000, on_progress=events.append)

        assert [e.iteration for e in events] == [100, 200, 300, 400, 500, 600, 700, 800, 900]
        assert events[0].message() == "[Interval 0-2] Progress: 10%"

    def test_progress_identifies_interval(self) -> None:
        events = []
        _compute(SHIFTED_QUADRATIC, -1.0, 0.5, 20, on_progress=events.append)
        assert all(e.interval.label == "-1-0.5" for e in events)

    def test_no_callback_no_progress(self) -> None:
        """Без on_progress вычисление проходит без уведомлений."""
        result = _compute(SHIFTED_QUADRATIC, 0.0, 2.0, 10)
        assert math.isfinite(result.value)


# =============================================================================
# ТЕСТЫ: Отмена и throttle
# =============================================================================


class TestTrapezoidalCancellation:
    """Кооперативная отмена."""

    def test_cancelled_before_start(self) -> None:
        """Отмена до старта → ComputationCancelled, результата нет."""
        signal = CancellationSignal()
        signal.request()

        with pytest.raises(ComputationCancelled):
            compute(SHIFTED_QUADRATIC, Interval(a=0.0, b=2.0, subdivisions=1), signal)

    def test_cancelled_during_loop(self) -> None:
        """Отмена на первом уведомлении → следующая проверка прерывает цикл."""
        signal = CancellationSignal()
        evaluated = []

        def on_progress(event):
            evaluated.append(event.iteration)
            signal.request("test")

        with pytest.raises(ComputationCancelled) as exc_info:
            compute(
                SHIFTED_QUADRATIC,
                Interval(a=0.0, b=2.0, subdivisions=1000),
                signal,
                on_progress=on_progress,
            )

        assert evaluated == [100]
        assert exc_info.value.label == "0-2"

    def test_throttle_called_per_interior_point(self) -> None:
        """Throttle hook вызывается n - 1 раз."""
        calls = []
        _compute(SHIFTED_QUADRATIC, 0.0, 2.0, 25, throttle=lambda: calls.append(1))
        assert len(calls) == 24

    def test_sleep_throttle_zero_is_noop(self) -> None:
        assert sleep_throttle(0.0) is None

    def test_sleep_throttle_positive(self) -> None:
        throttle = sleep_throttle(0.0001)
        assert callable(throttle)
        throttle()

    def test_sleep_throttle_negative_raises(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            sleep_throttle(-0.01)
