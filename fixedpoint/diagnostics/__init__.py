"""
Diagnostics для fixedpoint

Наблюдение за усечением значимых бит (overflow/underflow) без влияния
на результат арифметики.
"""

from fixedpoint.diagnostics.truncation import (
    DiagnosticSink,
    TruncationEvent,
    TruncationKind,
    detect_truncation,
    log_truncation,
    logging_sink,
)

__all__ = [
    "DiagnosticSink",
    "TruncationEvent",
    "TruncationKind",
    "detect_truncation",
    "log_truncation",
    "logging_sink",
]
