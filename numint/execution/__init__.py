"""Execution — стратегии конкурентного выполнения вычислений по интервалам.

- asyncio tasks, выделенные потоки или пул потоков
- агрегированные исходы ExecutionCancelled / ExecutionFailed
"""

from .countdown import CountdownEvent
from .strategies import (
    ExecutionCancelled,
    ExecutionFailed,
    ExecutionStrategy,
    PooledStrategy,
    RawThreadStrategy,
    StrategyKind,
    StructuredTaskStrategy,
    create_strategy,
)

__all__ = [
    "CountdownEvent",
    "ExecutionCancelled",
    "ExecutionFailed",
    "ExecutionStrategy",
    "PooledStrategy",
    "RawThreadStrategy",
    "StrategyKind",
    "StructuredTaskStrategy",
    "create_strategy",
]
