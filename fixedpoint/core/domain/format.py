"""
FixedFormat — определение типа FixedNumber(I, F)

Immutable Pydantic модель, фиксирующая ширину формата:
- int_bits (I): 1..32, включая знаковый бит
- frac_bits (F): 0..32
- report: опциональный диагностический sink (overflow/underflow)

Некорректная ширина отклоняется при определении формата
(pydantic.ValidationError), а не усекается молча.
"""

from functools import lru_cache
from typing import Callable, Optional

from pydantic import BaseModel, Field

from fixedpoint.core.math.bits import (
    BINARY_POINT,
    MAX_FRAC_BITS,
    MAX_INT_BITS,
    NARROW_OPERAND_BITS,
    field_mask,
)


class FixedFormat(BaseModel):
    """
    Формат значения с фиксированной точкой.

    Immutable модель (frozen=True). Два значения одного формата
    взаимозаменяемы; значения разных форматов взаимодействуют только
    через sign-extend → round.
    """

    int_bits: int = Field(..., ge=1, le=MAX_INT_BITS, description="Целые биты (I), включая знак")
    frac_bits: int = Field(..., ge=0, le=MAX_FRAC_BITS, description="Дробные биты (F)")
    report: Optional[Callable[[str], None]] = Field(
        default=None,
        exclude=True,
        repr=False,
        description="Sink для сообщений об overflow/underflow",
    )

    model_config = {"frozen": True}

    @classmethod
    def of(cls, int_bits: int, frac_bits: int) -> "FixedFormat":
        """Кэшированный формат без диагностического sink."""
        return _cached_format(int_bits, frac_bits)

    def with_report(self, report: Optional[Callable[[str], None]]) -> "FixedFormat":
        """Копия формата с подключённым (или отключённым) sink."""
        return FixedFormat(int_bits=self.int_bits, frac_bits=self.frac_bits, report=report)

    @property
    def total_bits(self) -> int:
        return self.int_bits + self.frac_bits

    @property
    def mask(self) -> int:
        """Маска активного поля внутри 64-битного storage."""
        return field_mask(self.int_bits, self.frac_bits)

    @property
    def ulp_shift(self) -> int:
        """Позиция младшего бита поля."""
        return BINARY_POINT - self.frac_bits

    @property
    def denominator(self) -> int:
        return 1 << self.frac_bits

    @property
    def sign_bit(self) -> int:
        return 1 << (BINARY_POINT + self.int_bits - 1)

    @property
    def is_narrow(self) -> bool:
        """Умножение без 128-битного промежуточного возможно только для узких операндов."""
        return self.total_bits <= NARROW_OPERAND_BITS

    @property
    def label(self) -> str:
        return f"FixedNumber({self.int_bits},{self.frac_bits})"

    def __str__(self) -> str:
        return self.label


@lru_cache(maxsize=None)
def _cached_format(int_bits: int, frac_bits: int) -> FixedFormat:
    return FixedFormat(int_bits=int_bits, frac_bits=frac_bits)
