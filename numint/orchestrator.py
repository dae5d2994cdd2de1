"""Orchestrator — связывание стратегии, вычислений, отмены и отчёта.

Порядок запуска:
1. Набор вычислений: выбранная функция × каждый интервал
2. Стратегия выполнения по идентификатору
3. Слушатель quit-клавиши (если есть источник клавиш)
4. strategy.process(...) до завершения или отмены
5. Отчёт: сводка по результатам ИЛИ единственное сообщение об отмене,
   затем затраченное время
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, Field

from numint.cancellation.listener import KeySource, QuitKeyListener
from numint.cancellation.signal import CancellationSignal
from numint.config import EngineConfig, ListenerConfig
from numint.core.domain.function import FUNCTIONS, Integrand, get_function
from numint.core.domain.interval import Interval
from numint.core.domain.result import ComputationResult
from numint.execution.strategies import (
    ExecutionCancelled,
    ExecutionFailed,
    StrategyKind,
    create_strategy,
)


logger = logging.getLogger(__name__)

CANCEL_HINT = "Press 'q' to cancel the computation."
CANCELLED_MESSAGE = "Computation cancelled."
SUMMARY_HEADER = "Summary:"


# =============================================================================
# REQUEST
# =============================================================================


class IntegrationRequest(BaseModel):
    """
    Запрос на интегрирование: одна функция, N интервалов, стратегия.

    Attributes:
        function: номер функции в меню (1-based)
        intervals: интервалы в порядке подачи
        strategy: модель конкурентности
    """

    function: int = Field(..., ge=1, le=len(FUNCTIONS), description="Номер функции (1-based)")
    intervals: tuple[Interval, ...] = Field(default=(), description="Интервалы")
    strategy: StrategyKind = Field(default=StrategyKind.TASKS)

    model_config = {"frozen": True}

    @property
    def integrand(self) -> Integrand:
        """Выбранная функция; вычисляется на каждом интервале запроса."""
        return get_function(self.function)

    @classmethod
    def from_contract(
        cls,
        data: Dict[str, Any],
        default_strategy: StrategyKind = StrategyKind.TASKS,
    ) -> "IntegrationRequest":
        """Запрос из провалидированного integration_request dict."""
        return cls(
            function=data["function"],
            intervals=tuple(
                Interval(a=item["a"], b=item["b"], subdivisions=item["n"])
                for item in data["intervals"]
            ),
            strategy=data.get("strategy", default_strategy),
        )


# =============================================================================
# OUTCOME
# =============================================================================


class RunStatus(str, Enum):
    """Бинарный исход запуска (+ ошибка)."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True)
class RunOutcome:
    """Результат запуска оркестратора."""

    status: RunStatus
    elapsed_seconds: float
    results: tuple[ComputationResult, ...] = field(default_factory=tuple)
    error: Optional[str] = None

    @property
    def completed(self) -> bool:
        return self.status == RunStatus.COMPLETED

    @property
    def cancelled(self) -> bool:
        return self.status == RunStatus.CANCELLED


# =============================================================================
# ORCHESTRATOR
# =============================================================================


class Orchestrator:
    """Запуск вычислений по IntegrationRequest с отчётом в write.

    Args:
        config: конфигурация движка
        listener_config: конфигурация слушателя quit-клавиши
        key_source: источник клавиш; None — без слушателя (batch, не TTY)
        write: вывод строк (default: print)
        show_error: печатать точное значение и погрешность
        report_elapsed: печатать затраченное время
        clock: монотонные часы (секунды)
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        listener_config: Optional[ListenerConfig] = None,
        key_source: Optional[KeySource] = None,
        write: Optional[Callable[[str], None]] = None,
        show_error: bool = False,
        report_elapsed: bool = True,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.config = config or EngineConfig()
        self.listener_config = listener_config or ListenerConfig()
        self.key_source = key_source
        self.show_error = show_error
        self.report_elapsed = report_elapsed
        self._write = write or print
        self._clock = clock

    def run(
        self,
        request: IntegrationRequest,
        cancellation: Optional[CancellationSignal] = None,
    ) -> RunOutcome:
        """Выполнение запроса.

        Args:
            request: функция, интервалы, стратегия
            cancellation: общий флаг отмены (default: новый на запуск)

        Returns:
            RunOutcome со статусом, результатами и временем
        """
        cancellation = cancellation or CancellationSignal()
        strategy = create_strategy(
            request.strategy,
            config=self.config,
            on_result=self._report_result,
            write=self._write,
        )

        listener = None
        if self.key_source is not None:
            listener = QuitKeyListener(
                cancellation, self.key_source, self.listener_config, write=self._write
            )
            self._write(CANCEL_HINT)

        logger.info(
            "Run: function=%s, intervals=%d, strategy=%s",
            request.integrand.name, len(request.intervals), request.strategy.value,
        )

        start = self._clock()
        try:
            if listener is not None:
                listener.start()
            try:
                results = strategy.process(
                    request.integrand, request.intervals, cancellation
                )
            finally:
                if listener is not None:
                    listener.stop()
        except ExecutionCancelled as exc:
            logger.info("Run cancelled: %s", exc)
            self._write(CANCELLED_MESSAGE)
            outcome = RunOutcome(
                status=RunStatus.CANCELLED,
                elapsed_seconds=self._clock() - start,
            )
        except ExecutionFailed as exc:
            self._write(f"An error occurred: {exc}")
            outcome = RunOutcome(
                status=RunStatus.FAILED,
                elapsed_seconds=self._clock() - start,
                error=str(exc),
            )
        else:
            if not strategy.reports_inline:
                self._write("")
                self._write(SUMMARY_HEADER)
                for result in results:
                    self._report_result(result)
            outcome = RunOutcome(
                status=RunStatus.COMPLETED,
                elapsed_seconds=self._clock() - start,
                results=tuple(results),
            )

        if self.report_elapsed:
            self._write(f"Elapsed time: {outcome.elapsed_seconds:.3f} s")

        return outcome

    def _report_result(self, result: ComputationResult) -> None:
        self._write(result.report_line(self.show_error))
