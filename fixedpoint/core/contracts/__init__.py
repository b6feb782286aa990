"""
Contract Validation Module

Модуль для валидации и обмена JSON представлением значений FixedNumber.
"""

from .interchange import SCHEMA_VERSION, dump_fixed_number, load_fixed_number
from .validators import (
    ContractValidator,
    FixedNumberValidator,
    SchemaLoader,
    validate_fixed_number,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "FixedNumberValidator",
    # Functions
    "validate_fixed_number",
    "dump_fixed_number",
    "load_fixed_number",
    # Constants
    "SCHEMA_VERSION",
]
