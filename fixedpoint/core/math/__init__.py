"""
Core math modules для fixedpoint

Битовые примитивы 64-битного контейнера, 128-битная промежуточная
арифметика и примитив округления/маскирования.
"""

from fixedpoint.core.math.bits import (
    BINARY_POINT,
    INT64_MAX,
    INT64_MIN,
    MASK32,
    MASK64,
    MAX_FRAC_BITS,
    MAX_INT_BITS,
    NARROW_OPERAND_BITS,
    STORAGE_BITS,
    field_mask,
    fraction_field,
    round_bias,
    sign_extend,
    to_int64,
)
from fixedpoint.core.math.wide_int import (
    div_trunc,
    mul_wide,
    to_int128,
)
from fixedpoint.core.math.rounding import round_to_field

__all__ = [
    # Bits — Constants
    "BINARY_POINT",
    "INT64_MAX",
    "INT64_MIN",
    "MASK32",
    "MASK64",
    "MAX_FRAC_BITS",
    "MAX_INT_BITS",
    "NARROW_OPERAND_BITS",
    "STORAGE_BITS",
    # Bits — Functions
    "field_mask",
    "fraction_field",
    "round_bias",
    "sign_extend",
    "to_int64",
    # Wide Int
    "div_trunc",
    "mul_wide",
    "to_int128",
    # Rounding
    "round_to_field",
]
