"""
Domain models and value objects.

Contains the fixed integrand set, Interval, ComputationResult and ProgressEvent.
"""

from numint.core.domain.function import (
    FUNCTIONS,
    FULL_QUADRATIC,
    LINEAR_QUADRATIC,
    SHIFTED_QUADRATIC,
    Integrand,
    IntegrandKind,
    get_function,
    get_function_by_kind,
)
from numint.core.domain.interval import Interval, format_number
from numint.core.domain.result import (
    METHOD_TRAPEZOIDAL,
    ComputationResult,
    ProgressEvent,
)

__all__ = [
    # Function set
    "FUNCTIONS",
    "LINEAR_QUADRATIC",
    "SHIFTED_QUADRATIC",
    "FULL_QUADRATIC",
    "Integrand",
    "IntegrandKind",
    "get_function",
    "get_function_by_kind",
    # Interval model
    "Interval",
    "format_number",
    # Result models
    "METHOD_TRAPEZOIDAL",
    "ComputationResult",
    "ProgressEvent",
]
