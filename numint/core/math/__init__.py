"""
Core math modules для numint

Математические примитивы и численные алгоритмы с гарантией стабильности.
"""

# Numerical Safeguards
from numint.core.math.numerical_safeguards import (
    # Constants
    PROGRESS_REPORTS,
    # Rounding
    round_to_epsilon,
    # Progress
    progress_percent,
    progress_step,
    should_report_progress,
    # Validation
    is_valid_float,
    validate_finite,
    validate_subdivisions,
)

# Trapezoidal rule
from numint.core.math.trapezoidal import (
    ProgressCallback,
    Throttle,
    compute,
    sleep_throttle,
    trapezoid_value,
)

__all__ = [
    # Numerical Safeguards: Constants
    "PROGRESS_REPORTS",
    # Numerical Safeguards: Rounding
    "round_to_epsilon",
    # Numerical Safeguards: Progress
    "progress_percent",
    "progress_step",
    "should_report_progress",
    # Numerical Safeguards: Validation
    "is_valid_float",
    "validate_finite",
    "validate_subdivisions",
    # Trapezoidal: Types
    "ProgressCallback",
    "Throttle",
    # Trapezoidal: Functions
    "compute",
    "sleep_throttle",
    "trapezoid_value",
]
