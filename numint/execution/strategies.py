"""Execution Strategies — конкурентное выполнение вычислений по интервалам.

Три взаимозаменяемых варианта с единым контрактом
process(function, intervals, cancellation) -> list[ComputationResult]:

- StructuredTaskStrategy: asyncio task на интервал, ожидание всех,
  агрегированная отмена (ExecutionCancelled)
- RawThreadStrategy: отдельный threading.Thread на интервал, join всех;
  каждый воркер сам печатает свой результат по завершении (порядок
  завершения, не порядок подачи)
- PooledStrategy: work item на интервал в ThreadPoolExecutor, размер пула
  выбирает runtime; завершение через CountdownEvent

Исход выполнения бинарный: список результатов (успех) или агрегированное
исключение (ExecutionCancelled / ExecutionFailed). Частичные результаты
при отмене не возвращаются.
"""

import asyncio
import logging
import threading
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Callable, Optional, Sequence

from numint.cancellation.signal import CancellationSignal, ComputationCancelled
from numint.config import EngineConfig
from numint.core.domain.function import Integrand
from numint.core.domain.interval import Interval
from numint.core.domain.result import ComputationResult, ProgressEvent
from numint.core.math.trapezoidal import ProgressCallback, compute, sleep_throttle
from numint.execution.countdown import CountdownEvent


logger = logging.getLogger(__name__)

ResultCallback = Callable[[ComputationResult], None]


# =============================================================================
# ENUMS & EXCEPTIONS
# =============================================================================


class StrategyKind(str, Enum):
    """Модель конкурентности (порядок меню)."""

    TASKS = "tasks"
    THREADS = "threads"
    POOL = "pool"

    @property
    def title(self) -> str:
        return _STRATEGY_TITLES[self]


_STRATEGY_TITLES = {
    StrategyKind.TASKS: "Structured tasks (asyncio)",
    StrategyKind.THREADS: "Dedicated threads",
    StrategyKind.POOL: "Thread pool",
}


class ExecutionCancelled(Exception):
    """
    Агрегированная отмена: одно или несколько вычислений отменены.

    Attributes:
        cancelled_count: число отменённых вычислений
        total: общее число вычислений в запуске
    """

    def __init__(self, cancelled_count: int, total: int):
        super().__init__(f"{cancelled_count} of {total} computation(s) cancelled")
        self.cancelled_count = cancelled_count
        self.total = total


class ExecutionFailed(Exception):
    """Агрегированная ошибка: одно или несколько вычислений упали."""

    def __init__(self, errors: Sequence[BaseException]):
        first = errors[0] if errors else None
        super().__init__(str(first) if first is not None else "computation failed")
        self.errors = list(errors)


# =============================================================================
# BASE
# =============================================================================


class ExecutionStrategy(ABC):
    """Базовый класс стратегии выполнения.

    Args:
        config: конфигурация движка (throttle, размер пула, прогресс)
        on_progress: получатель ProgressEvent (default: печать строки)
        on_result: получатель результата для inline-отчёта (RawThread)
        write: вывод строк (default: print)
    """

    kind: StrategyKind
    # True если стратегия сама печатает результаты по мере завершения
    reports_inline: bool = False

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        on_progress: Optional[ProgressCallback] = None,
        on_result: Optional[ResultCallback] = None,
        write: Optional[Callable[[str], None]] = None,
    ):
        self.config = config or EngineConfig()
        self._write = write or print
        self._throttle = sleep_throttle(self.config.throttle_seconds)

        if not self.config.progress_enabled:
            self._on_progress = None
        else:
            self._on_progress = on_progress or self._print_progress

        self._on_result = on_result or self._print_result

    def process(
        self,
        function: Integrand,
        intervals: Sequence[Interval],
        cancellation: CancellationSignal,
    ) -> list[ComputationResult]:
        """Конкурентное вычисление по всем интервалам.

        Returns:
            Результаты (порядок подачи для tasks/pool, порядок завершения
            для threads); пустой список для пустого набора интервалов

        Raises:
            ExecutionCancelled: Если отмена запрошена до старта или хотя бы
                одно вычисление отменено
            ExecutionFailed: Если хотя бы одно вычисление упало
        """
        intervals = list(intervals)

        if cancellation.is_requested:
            raise ExecutionCancelled(len(intervals), len(intervals))

        logger.debug(
            "Strategy %s: %d interval(s), function %s",
            self.kind.value, len(intervals), function.name,
        )
        results = self._execute(function, intervals, cancellation)
        logger.debug("Strategy %s finished: %d result(s)", self.kind.value, len(results))
        return results

    @abstractmethod
    def _execute(
        self,
        function: Integrand,
        intervals: list[Interval],
        cancellation: CancellationSignal,
    ) -> list[ComputationResult]:
        """Выполнение конкретной моделью конкурентности."""

    def _compute(
        self,
        function: Integrand,
        interval: Interval,
        cancellation: CancellationSignal,
    ) -> ComputationResult:
        return compute(
            function,
            interval,
            cancellation,
            on_progress=self._on_progress,
            throttle=self._throttle,
        )

    @staticmethod
    def _raise_for_outcome(
        cancelled_count: int,
        errors: Sequence[BaseException],
        total: int,
    ) -> None:
        """Бинарный исход: отмена приоритетнее ошибок."""
        if cancelled_count:
            raise ExecutionCancelled(cancelled_count, total)
        if errors:
            raise ExecutionFailed(errors)

    def _print_progress(self, event: ProgressEvent) -> None:
        self._write(event.message())

    def _print_result(self, result: ComputationResult) -> None:
        self._write(result.report_line())


# =============================================================================
# STRUCTURED TASKS (asyncio)
# =============================================================================


class StructuredTaskStrategy(ExecutionStrategy):
    """Одна asyncio task на интервал под общим event loop.

    Вычисления выполняются в executor цикла (default executor или пул
    размера config.max_workers); ожидание всех задач через gather.
    Если вызывающий код уже работает в event loop, следует использовать
    aprocess().
    """

    kind = StrategyKind.TASKS

    def _execute(self, function, intervals, cancellation):
        return asyncio.run(self._gather(function, intervals, cancellation))

    async def aprocess(
        self,
        function: Integrand,
        intervals: Sequence[Interval],
        cancellation: CancellationSignal,
    ) -> list[ComputationResult]:
        """Асинхронный вариант process() для вызова из event loop."""
        intervals = list(intervals)
        if cancellation.is_requested:
            raise ExecutionCancelled(len(intervals), len(intervals))
        return await self._gather(function, intervals, cancellation)

    async def _gather(self, function, intervals, cancellation):
        loop = asyncio.get_running_loop()
        # None: default executor цикла
        executor = None
        if self.config.max_workers is not None:
            executor = ThreadPoolExecutor(
                max_workers=self.config.max_workers, thread_name_prefix="numint-task"
            )

        async def run(interval):
            return await loop.run_in_executor(
                executor, self._compute, function, interval, cancellation
            )

        try:
            tasks = [
                asyncio.create_task(run(interval), name=f"interval-{interval.label}")
                for interval in intervals
            ]
            outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        finally:
            if executor is not None:
                executor.shutdown(wait=False)

        results = []
        errors = []
        cancelled_count = 0
        for outcome in outcomes:
            if isinstance(outcome, (ComputationCancelled, asyncio.CancelledError)):
                cancelled_count += 1
            elif isinstance(outcome, BaseException):
                logger.error("Computation failed: %r", outcome)
                errors.append(outcome)
            else:
                results.append(outcome)

        self._raise_for_outcome(cancelled_count, errors, len(intervals))
        return results


# =============================================================================
# RAW THREADS
# =============================================================================


class RawThreadStrategy(ExecutionStrategy):
    """Отдельный поток на интервал.

    Каждый воркер сообщает свой результат сразу по завершении (on_result),
    поэтому порядок вывода и порядок возвращаемого списка — порядок
    завершения. При отмене уже напечатанные результаты остаются в выводе.
    """

    kind = StrategyKind.THREADS
    reports_inline = True

    def _execute(self, function, intervals, cancellation):
        results: list[ComputationResult] = []
        errors: list[BaseException] = []
        cancelled = []
        lock = threading.Lock()

        def worker(interval: Interval) -> None:
            try:
                result = self._compute(function, interval, cancellation)
            except ComputationCancelled:
                with lock:
                    cancelled.append(interval)
                return
            except Exception as exc:
                logger.exception("Computation on interval %s failed", interval.label)
                with lock:
                    errors.append(exc)
                return

            with lock:
                results.append(result)
            self._on_result(result)

        threads = [
            threading.Thread(
                target=worker, args=(interval,), name=f"interval-{index + 1}"
            )
            for index, interval in enumerate(intervals)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self._raise_for_outcome(len(cancelled), errors, len(intervals))
        return results


# =============================================================================
# POOLED WORKERS
# =============================================================================


class PooledStrategy(ExecutionStrategy):
    """Work item на интервал в общем ThreadPoolExecutor.

    Размер пула: config.max_workers или значение по умолчанию runtime.
    Каждый work item сигналит CountdownEvent ровно один раз.
    """

    kind = StrategyKind.POOL

    def _execute(self, function, intervals, cancellation):
        slots: list[Optional[ComputationResult]] = [None] * len(intervals)
        errors: list[BaseException] = []
        cancelled = []
        lock = threading.Lock()
        done = CountdownEvent(len(intervals))

        def work_item(index: int, interval: Interval) -> None:
            try:
                slots[index] = self._compute(function, interval, cancellation)
            except ComputationCancelled:
                with lock:
                    cancelled.append(interval)
            except Exception as exc:
                logger.exception("Computation on interval %s failed", interval.label)
                with lock:
                    errors.append(exc)
            finally:
                done.signal()

        with ThreadPoolExecutor(
            max_workers=self.config.max_workers, thread_name_prefix="numint-pool"
        ) as pool:
            for index, interval in enumerate(intervals):
                pool.submit(work_item, index, interval)
            done.wait()

        self._raise_for_outcome(len(cancelled), errors, len(intervals))
        return [result for result in slots if result is not None]


# =============================================================================
# FACTORY
# =============================================================================


_STRATEGIES = {
    StrategyKind.TASKS: StructuredTaskStrategy,
    StrategyKind.THREADS: RawThreadStrategy,
    StrategyKind.POOL: PooledStrategy,
}


def create_strategy(
    kind: StrategyKind,
    config: Optional[EngineConfig] = None,
    on_progress: Optional[ProgressCallback] = None,
    on_result: Optional[ResultCallback] = None,
    write: Optional[Callable[[str], None]] = None,
) -> ExecutionStrategy:
    """Стратегия по идентификатору.

    Raises:
        ValueError: Если kind не является StrategyKind
    """
    try:
        strategy_cls = _STRATEGIES[StrategyKind(kind)]
    except ValueError:
        raise ValueError(f"Unknown execution strategy: {kind!r}") from None

    return strategy_cls(
        config=config, on_progress=on_progress, on_result=on_result, write=write
    )
