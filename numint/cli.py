"""Command-line interface numint.

Тонкий слой ввода/вывода вокруг Orchestrator:
- интерактивные меню и запросы чисел с повторным вводом
- batch-режим (--request FILE) с валидацией по JSON Schema
- выбор стратегии через меню или --strategy

Exit codes: 0 — завершено, 1 — ошибка вычислений, 2 — невалидный ввод,
130 — отмена.
"""

import argparse
import json
import logging
import math
import sys
from typing import Callable, Optional, Sequence

from pydantic import ValidationError as ModelValidationError

from numint.cancellation.listener import KeySource, default_key_source
from numint.config import DEMO_THROTTLE_SECONDS, EngineConfig
from numint.core.contracts import ValidationError, load_integration_request
from numint.core.domain.function import FUNCTIONS
from numint.core.domain.interval import Interval
from numint.execution.strategies import StrategyKind
from numint.orchestrator import IntegrationRequest, Orchestrator, RunStatus


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID_INPUT = 2
EXIT_CANCELLED = 130

_STRATEGY_MENU = (StrategyKind.TASKS, StrategyKind.THREADS, StrategyKind.POOL)

Reader = Callable[[str], str]
Writer = Callable[[str], None]


class InvalidSelectionError(ValueError):
    """Выбор вне допустимого диапазона меню."""


# =============================================================================
# PROMPTS
# =============================================================================


def prompt_int(read: Reader, write: Writer, prompt: str, minimum: Optional[int] = None) -> int:
    """Целое число с повторным запросом при некорректном вводе."""
    while True:
        text = read(prompt).strip()
        try:
            value = int(text)
        except ValueError:
            write("Invalid number. Try again.")
            continue

        if minimum is not None and value < minimum:
            write(f"Value must be at least {minimum}. Try again.")
            continue
        return value


def prompt_float(read: Reader, write: Writer, prompt: str) -> float:
    """Конечное float с повторным запросом при некорректном вводе."""
    while True:
        text = read(prompt).strip()
        try:
            value = float(text)
        except ValueError:
            write("Invalid number. Try again.")
            continue

        if not math.isfinite(value):
            write("Value must be finite. Try again.")
            continue
        return value


def prompt_function(read: Reader, write: Writer) -> int:
    """Меню функций; номер в [1, len(FUNCTIONS)], повтор при неверном выборе."""
    write("Choose a function:")
    for index, function in enumerate(FUNCTIONS, start=1):
        write(f"{index}: {function.name}")

    count = len(FUNCTIONS)
    while True:
        text = read(f"Your choice (1-{count}): ").strip()
        try:
            choice = int(text)
        except ValueError:
            choice = 0

        if 1 <= choice <= count:
            return choice
        write("Invalid choice. Try again.")


def prompt_intervals(read: Reader, write: Writer) -> list[Interval]:
    """Число интервалов, затем a, b, n для каждого."""
    count = prompt_int(read, write, "Number of intervals: ", minimum=1)

    intervals = []
    for index in range(1, count + 1):
        a = prompt_float(read, write, f"Interval {index} - start: ")
        b = prompt_float(read, write, f"Interval {index} - end: ")
        n = prompt_int(read, write, f"Interval {index} - subdivisions: ", minimum=1)
        intervals.append(Interval(a=a, b=b, subdivisions=n))
    return intervals


def prompt_strategy(read: Reader, write: Writer) -> StrategyKind:
    """Меню стратегий; неверный выбор фатален.

    Raises:
        InvalidSelectionError: Если ввод не является номером пункта меню
    """
    write("Choose an execution strategy:")
    for index, kind in enumerate(_STRATEGY_MENU, start=1):
        write(f"{index}: {kind.title}")

    text = read(f"Your choice (1-{len(_STRATEGY_MENU)}): ").strip()
    try:
        choice = int(text)
    except ValueError:
        raise InvalidSelectionError(f"Invalid strategy selection: {text!r}") from None

    if not 1 <= choice <= len(_STRATEGY_MENU):
        raise InvalidSelectionError(f"Invalid strategy selection: {choice}")
    return _STRATEGY_MENU[choice - 1]


# =============================================================================
# ARGUMENTS
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="numint",
        description="Trapezoidal integration of a fixed polynomial over "
                    "one or more intervals, computed concurrently.",
    )
    parser.add_argument(
        "--strategy",
        choices=[kind.value for kind in StrategyKind],
        default=None,
        help="Execution strategy. Without it the strategy menu is shown.",
    )
    parser.add_argument(
        "--request",
        metavar="FILE",
        default=None,
        help="JSON batch request (function, intervals, strategy) instead of prompts.",
    )
    parser.add_argument(
        "--throttle-ms",
        type=float,
        default=None,
        help=f"Delay per iteration in milliseconds (default: {DEMO_THROTTLE_SECONDS * 1000:g}).",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        default=None,
        help="Worker thread limit for the tasks and pool strategies (default: runtime chosen).",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not print progress lines.",
    )
    parser.add_argument(
        "--show-error",
        action="store_true",
        help="Print the exact integral and absolute error next to each result.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for diagnostics on stderr.",
    )
    return parser


def build_config(args: argparse.Namespace, throttle_ms: Optional[float] = None) -> EngineConfig:
    """EngineConfig: демо-задержка → env overrides → аргументы командной строки."""
    config = EngineConfig.from_env(base=EngineConfig(throttle_seconds=DEMO_THROTTLE_SECONDS))

    if throttle_ms is None:
        throttle_ms = args.throttle_ms

    return EngineConfig(
        throttle_seconds=config.throttle_seconds if throttle_ms is None else throttle_ms / 1000.0,
        max_workers=config.max_workers if args.max_workers is None else args.max_workers,
        progress_enabled=config.progress_enabled and not args.no_progress,
    )


# =============================================================================
# ENTRY POINT
# =============================================================================


def main(
    argv: Optional[Sequence[str]] = None,
    read: Optional[Reader] = None,
    write: Optional[Writer] = None,
    key_source: Optional[KeySource] = None,
) -> int:
    """Точка входа CLI; возвращает exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    read = read or input
    write = write or print
    interactive = args.request is None

    try:
        if interactive:
            function = prompt_function(read, write)
            intervals = prompt_intervals(read, write)
            if args.strategy is not None:
                strategy = StrategyKind(args.strategy)
            else:
                strategy = prompt_strategy(read, write)
            request = IntegrationRequest(
                function=function, intervals=intervals, strategy=strategy
            )
            throttle_ms = None
        else:
            data = load_integration_request(args.request)
            request = IntegrationRequest.from_contract(data)
            if args.strategy is not None:
                request = request.model_copy(update={"strategy": StrategyKind(args.strategy)})
            throttle_ms = args.throttle_ms
            if throttle_ms is None:
                throttle_ms = data.get("throttle_ms")

        config = build_config(args, throttle_ms)
        logger.debug("Request: %s, config: %s", request, config)
    except InvalidSelectionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except (ValidationError, ModelValidationError) as exc:
        print(f"Invalid request: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except (OSError, json.JSONDecodeError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except EOFError:
        print("Error: input closed", file=sys.stderr)
        return EXIT_INVALID_INPUT

    if key_source is None:
        key_source = default_key_source()

    orchestrator = Orchestrator(
        config=config,
        key_source=key_source,
        write=write,
        show_error=args.show_error,
    )
    outcome = orchestrator.run(request)

    if outcome.status == RunStatus.CANCELLED:
        return EXIT_CANCELLED
    if outcome.status == RunStatus.FAILED:
        return EXIT_FAILED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
