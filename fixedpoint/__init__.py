"""
fixedpoint — числа с фиксированной точкой и детерминированным округлением

Значение FixedNumber(I, F) имеет I целых бит (включая знак) и F дробных бит,
хранится в 64-битном контейнере с двоичной точкой в бите 32.
"""

from fixedpoint.core.domain import (
    FixedFormat,
    FixedNumber,
    FixedPointZeroDivisionError,
)
from fixedpoint.diagnostics import (
    TruncationEvent,
    TruncationKind,
    log_truncation,
    logging_sink,
)

__version__ = "0.3.0"

__all__ = [
    "FixedFormat",
    "FixedNumber",
    "FixedPointZeroDivisionError",
    "TruncationEvent",
    "TruncationKind",
    "log_truncation",
    "logging_sink",
]
