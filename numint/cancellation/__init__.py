"""Cancellation — кооперативная отмена вычислений.

- Общий монотонный флаг CancellationSignal
- Внеполосный слушатель quit-клавиши
"""

from .signal import CancellationSignal, ComputationCancelled
from .listener import (
    KeySource,
    PosixKeySource,
    QuitKeyListener,
    ScriptedKeySource,
    WindowsKeySource,
    default_key_source,
)

__all__ = [
    "CancellationSignal",
    "ComputationCancelled",
    "KeySource",
    "PosixKeySource",
    "WindowsKeySource",
    "ScriptedKeySource",
    "QuitKeyListener",
    "default_key_source",
]
