"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. Округление half away from zero
2. Защиту шага прогресса от modulo-by-zero
3. Валидацию параметров
"""

import pytest

from numint.core.math.numerical_safeguards import (
    PROGRESS_REPORTS,
    is_valid_float,
    progress_percent,
    progress_step,
    round_to_epsilon,
    should_report_progress,
    validate_finite,
    validate_subdivisions,
)


# =============================================================================
# ТЕСТЫ ОКРУГЛЕНИЯ
# =============================================================================


class TestRoundToEpsilon:
    """Тесты для round_to_epsilon"""

    def test_half_rounds_away_from_zero(self) -> None:
        """0.5 округляется от нуля (не банковское округление)"""
        assert round_to_epsilon(12.5, 1.0) == 13.0
        assert round_to_epsilon(2.5, 1.0) == 3.0
        assert round_to_epsilon(-12.5, 1.0) == -13.0

    def test_regular_rounding(self) -> None:
        assert round_to_epsilon(12.4, 1.0) == 12.0
        assert round_to_epsilon(12.6, 1.0) == 13.0
        assert round_to_epsilon(1.23456789, 0.01) == pytest.approx(1.23)

    def test_invalid_eps_raises(self) -> None:
        """Невалидный eps вызывает ошибку"""
        with pytest.raises(ValueError, match="eps must be positive"):
            round_to_epsilon(1.0, 0.0)

        with pytest.raises(ValueError, match="eps must be positive"):
            round_to_epsilon(1.0, -1.0)


# =============================================================================
# ТЕСТЫ ПРОГРЕССА
# =============================================================================


class TestProgressStep:
    """Тесты для progress_step и should_report_progress"""

    def test_step_is_tenth_of_subdivisions(self) -> None:
        assert PROGRESS_REPORTS == 10
        assert progress_step(1000) == 100
        assert progress_step(25) == 2
        assert progress_step(10) == 1

    def test_small_subdivisions_disable_progress(self) -> None:
        """n < 10 → шаг 0 → прогресс отключён"""
        for n in range(1, 10):
            assert progress_step(n) == 0

    def test_zero_step_never_reports(self) -> None:
        """Шаг 0 не вызывает ZeroDivisionError"""
        for i in range(1, 10):
            assert should_report_progress(i, 0) is False

    def test_step_one_reports_every_iteration(self) -> None:
        assert all(should_report_progress(i, 1) for i in range(1, 10))

    def test_reports_on_multiples(self) -> None:
        reported = [i for i in range(1, 1000) if should_report_progress(i, 100)]
        assert reported == [100, 200, 300, 400, 500, 600, 700, 800, 900]


class TestProgressPercent:
    """Тесты для progress_percent"""

    def test_whole_percent(self) -> None:
        assert progress_percent(100, 1000) == 10
        assert progress_percent(9, 10) == 90
        assert progress_percent(1, 10) == 10

    def test_rounding(self) -> None:
        """1/8 = 12.5% → 13%"""
        assert progress_percent(1, 8) == 13
        assert progress_percent(1, 3) == 33
        assert progress_percent(2, 3) == 67


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ
# =============================================================================


class TestValidation:
    """Тесты для validate_finite и validate_subdivisions"""

    def test_is_valid_float(self) -> None:
        assert is_valid_float(1.0)
        assert not is_valid_float(float("nan"))
        assert not is_valid_float(float("inf"))

    def test_validate_finite_accepts(self) -> None:
        validate_finite(0.0, "a")
        validate_finite(-1e300, "b")

    def test_validate_finite_rejects(self) -> None:
        with pytest.raises(ValueError, match="NaN/Inf"):
            validate_finite(float("nan"), "a")

        with pytest.raises(ValueError, match="NaN/Inf"):
            validate_finite(float("-inf"), "b")

    def test_validate_subdivisions_accepts(self) -> None:
        validate_subdivisions(1)
        validate_subdivisions(1000)

    def test_validate_subdivisions_rejects_zero_and_negative(self) -> None:
        with pytest.raises(ValueError, match="must be >= 1"):
            validate_subdivisions(0)

        with pytest.raises(ValueError, match="must be >= 1"):
            validate_subdivisions(-5)

    def test_validate_subdivisions_rejects_non_integer(self) -> None:
        with pytest.raises(ValueError, match="must be an integer"):
            validate_subdivisions(2.5)

        with pytest.raises(ValueError, match="must be an integer"):
            validate_subdivisions(True)
