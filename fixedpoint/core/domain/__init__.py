"""
Domain models and value objects.

Contains the fixed-point format definition and the FixedNumber value type.
"""

from fixedpoint.core.domain.format import FixedFormat
from fixedpoint.core.domain.fixed_number import (
    CANONICAL_ONE,
    FixedNumber,
    FixedPointZeroDivisionError,
)

__all__ = [
    # Format
    "FixedFormat",
    # Value type
    "CANONICAL_ONE",
    "FixedNumber",
    "FixedPointZeroDivisionError",
]
