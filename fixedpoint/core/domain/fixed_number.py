"""
FixedNumber — значение с фиксированной точкой

Значение формата (I, F) хранится как маскированное поле 64-битного storage
с двоичной точкой в бите 32 (см. fixedpoint.core.math.bits) и обозначает
число sign_extend(storage) / 2^32.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. storage всегда результат round_to_field для формата значения
2. Бинарные операции принимают правый операнд любой ширины,
   результат имеет формат ЛЕВОГО операнда
3. Операнды разной ширины комбинируются только через sign_extend
4. Overflow/underflow не является ошибкой: результат усекается маской
5. Деление на значение, равное нулю, — единственная ошибка времени выполнения

АЛГОРИТМЫ УМНОЖЕНИЯ:
    Узкий путь (I + F <= 32 у обоих операндов):
        a = sign_extend(lhs) >> I_lhs,  b = sign_extend(rhs) >> I_rhs
        product = a * b  (помещается в int64)
        shift = I_lhs + I_rhs - 32:  product << shift  или  product >> -shift
    Широкий путь:
        product = int128(sign_extend(lhs)) * int128(sign_extend(rhs)) >> 32

ДЕЛЕНИЕ:
    На FixedNumber: (int128(sign_extend(lhs)) << 32) / int128(sign_extend(rhs)),
    усечение к нулю.
    На int: storage / n по сырому полю (точно для неотрицательных значений).
"""

import math
from typing import Optional, Union

from fixedpoint.core.domain.format import FixedFormat
from fixedpoint.core.math.bits import (
    BINARY_POINT,
    fraction_field,
    sign_extend,
    to_int64,
)
from fixedpoint.core.math.rounding import round_to_field
from fixedpoint.core.math.wide_int import div_trunc, mul_wide, to_int128
from fixedpoint.diagnostics.truncation import DiagnosticSink

# Масштаб канонического представления: 2^32
CANONICAL_ONE = 1 << BINARY_POINT

NumberLike = Union[int, float, "FixedNumber", None]


# =============================================================================
# EXCEPTIONS
# =============================================================================


class FixedPointZeroDivisionError(ZeroDivisionError):
    """
    Деление на значение, равное нулю.

    Единственная ошибка арифметики FixedNumber: результат не может быть
    возвращён в виде усечённого значения.
    """

    pass


# =============================================================================
# FIXED NUMBER
# =============================================================================


class FixedNumber:
    """
    Значение с фиксированной точкой формата (I, F).

    Examples:
        >>> str(FixedNumber(10, 10, 3.25))
        '3 + 256/1024'
        >>> str(FixedNumber(10, 10, 3.25) + FixedNumber(11, 11, 7.5))
        '10 + 768/1024'
    """

    __slots__ = ("_fmt", "_storage")

    def __init__(
        self,
        int_bits: int,
        frac_bits: int,
        value: NumberLike = None,
        *,
        report: Optional[DiagnosticSink] = None,
    ) -> None:
        if report is None:
            fmt = FixedFormat.of(int_bits, frac_bits)
        else:
            fmt = FixedFormat(int_bits=int_bits, frac_bits=frac_bits, report=report)

        self._fmt = fmt
        self._storage = _encode(value, fmt)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def _wrap(cls, fmt: FixedFormat, storage: int) -> "FixedNumber":
        # storage уже прошёл round_to_field для fmt
        number = object.__new__(cls)
        number._fmt = fmt
        number._storage = storage
        return number

    @classmethod
    def _rounded(cls, fmt: FixedFormat, raw: int) -> "FixedNumber":
        return cls._wrap(fmt, round_to_field(raw, fmt.int_bits, fmt.frac_bits, fmt.report))

    @classmethod
    def zero(cls, fmt: FixedFormat) -> "FixedNumber":
        return cls._wrap(fmt, 0)

    @classmethod
    def from_float(cls, value: float, fmt: FixedFormat) -> "FixedNumber":
        """
        Конструирование из float: round(value * 2^32), затем round_to_field.

        Raises:
            ValueError: Если value равно NaN или Inf
        """
        return cls._rounded(fmt, _scale_float(value))

    @classmethod
    def from_int(cls, value: int, fmt: FixedFormat) -> "FixedNumber":
        return cls._rounded(fmt, value << BINARY_POINT)

    @classmethod
    def from_parts(cls, integer_part: int, fraction_numerator: int, fmt: FixedFormat) -> "FixedNumber":
        """
        Конструирование из пары (целая часть, числитель дроби).

        Значение равно integer_part + fraction_numerator / 2^F; целая часть
        отрицательного значения — floor, дробь всегда неотрицательна.

        Examples:
            >>> fmt = FixedFormat.of(10, 10)
            >>> float(FixedNumber.from_parts(-20, 896, fmt))
            -19.125

        Raises:
            ValueError: Если fraction_numerator вне [0, 2^F)
        """
        if not 0 <= fraction_numerator < fmt.denominator:
            raise ValueError(
                f"fraction_numerator must be in [0, {fmt.denominator}), got {fraction_numerator}"
            )

        raw = (integer_part << BINARY_POINT) | (fraction_numerator << fmt.ulp_shift)
        return cls._rounded(fmt, raw)

    @classmethod
    def from_storage(cls, raw: int, fmt: FixedFormat) -> "FixedNumber":
        """Округление произвольного аккумулятора в канонической шкале."""
        return cls._rounded(fmt, raw)

    @classmethod
    def from_field(cls, storage: int, fmt: FixedFormat) -> "FixedNumber":
        """
        Восстановление значения из уже маскированного поля (см. storage).

        Raises:
            ValueError: Если storage содержит биты вне активного поля
        """
        if storage < 0 or storage & ~fmt.mask:
            raise ValueError(f"storage {storage:#x} has bits outside the active field of {fmt.label}")
        return cls._wrap(fmt, storage)

    @classmethod
    def max_value(cls, fmt: FixedFormat) -> "FixedNumber":
        """Наибольшее представимое значение формата."""
        return cls._wrap(fmt, fmt.mask & ~fmt.sign_bit)

    @classmethod
    def min_value(cls, fmt: FixedFormat) -> "FixedNumber":
        """Наименьшее (наиболее отрицательное) представимое значение формата."""
        return cls._wrap(fmt, fmt.sign_bit)

    def convert(self, fmt: FixedFormat) -> "FixedNumber":
        """
        Конверсия в другой формат: sign_extend, затем round_to_field.

        Может отбросить величину (overflow) или точность (лишние дробные
        биты); результат всегда определён.
        """
        return FixedNumber._rounded(fmt, self._sign_extended())

    def resize(self, int_bits: int, frac_bits: int) -> "FixedNumber":
        return self.convert(FixedFormat.of(int_bits, frac_bits))

    # -------------------------------------------------------------------------
    # Read surface
    # -------------------------------------------------------------------------

    @property
    def fmt(self) -> FixedFormat:
        return self._fmt

    @property
    def int_bits(self) -> int:
        return self._fmt.int_bits

    @property
    def frac_bits(self) -> int:
        return self._fmt.frac_bits

    @property
    def storage(self) -> int:
        """Маскированное поле (биты вне поля равны нулю)."""
        return self._storage

    @property
    def integer_part(self) -> int:
        """Целая часть (floor): для -19.125 возвращает -20."""
        return self._sign_extended() >> BINARY_POINT

    @property
    def fraction_bits(self) -> int:
        """Сырые дробные биты: младшие 32 бита storage."""
        return fraction_field(self._storage)

    @property
    def fraction_numerator(self) -> int:
        """Числитель дроби со знаменателем 2^F."""
        return self.fraction_bits >> self._fmt.ulp_shift

    @property
    def fraction_quotient(self) -> str:
        return f"{self.fraction_numerator}/{self._fmt.denominator}"

    def to_float(self) -> float:
        return self._sign_extended() / CANONICAL_ONE

    def _sign_extended(self) -> int:
        # Единственный путь чтения для операций над операндами разной ширины
        return sign_extend(self._storage, self._fmt.int_bits)

    def __float__(self) -> float:
        return self.to_float()

    def __bool__(self) -> bool:
        return self._storage != 0

    def __str__(self) -> str:
        return f"{self.integer_part} + {self.fraction_quotient}"

    def __repr__(self) -> str:
        return f"<{self._fmt.label} {self}>"

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        return format(self.to_float(), format_spec)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __neg__(self) -> "FixedNumber":
        # Наиболее отрицательное значение формата при отрицании возвращается в себя
        return FixedNumber._rounded(self._fmt, -self._sign_extended())

    def __pos__(self) -> "FixedNumber":
        return self

    def __abs__(self) -> "FixedNumber":
        if self._sign_extended() < 0:
            return -self
        return self

    def __add__(self, other: "FixedNumber") -> "FixedNumber":
        if not isinstance(other, FixedNumber):
            return NotImplemented
        return FixedNumber._rounded(self._fmt, self._sign_extended() + other._sign_extended())

    def __sub__(self, other: "FixedNumber") -> "FixedNumber":
        if not isinstance(other, FixedNumber):
            return NotImplemented
        return FixedNumber._rounded(self._fmt, self._sign_extended() - other._sign_extended())

    def __mul__(self, other: "FixedNumber") -> "FixedNumber":
        if not isinstance(other, FixedNumber):
            return NotImplemented

        if self._fmt.is_narrow and other._fmt.is_narrow:
            raw = self._mul_narrow(other)
        else:
            raw = self._mul_wide(other)
        return FixedNumber._rounded(self._fmt, raw)

    def _mul_narrow(self, other: "FixedNumber") -> int:
        lhs_mantissa = self._sign_extended() >> self.int_bits
        rhs_mantissa = other._sign_extended() >> other.int_bits
        product = lhs_mantissa * rhs_mantissa

        shift = self.int_bits + other.int_bits - BINARY_POINT
        if shift > 0:
            return to_int64(product << shift)
        return product >> -shift

    def _mul_wide(self, other: "FixedNumber") -> int:
        product = mul_wide(self._sign_extended(), other._sign_extended())
        return to_int64(product >> BINARY_POINT)

    def __truediv__(self, other: Union["FixedNumber", int]) -> "FixedNumber":
        if isinstance(other, FixedNumber):
            return self._div_fixed(other)
        if isinstance(other, int) and not isinstance(other, bool):
            return self._div_int(other)
        return NotImplemented

    def _div_fixed(self, other: "FixedNumber") -> "FixedNumber":
        divisor = to_int128(other._sign_extended())
        if divisor == 0:
            raise FixedPointZeroDivisionError(f"{self._fmt.label} division by zero-valued {other._fmt.label}")

        dividend = to_int128(to_int128(self._sign_extended()) << BINARY_POINT)
        quotient = div_trunc(dividend, divisor)
        return FixedNumber._rounded(self._fmt, to_int64(quotient))

    def _div_int(self, divisor: int) -> "FixedNumber":
        if divisor == 0:
            raise FixedPointZeroDivisionError(f"{self._fmt.label} division by integer zero")

        # Деление сырого поля, без sign_extend
        return FixedNumber._rounded(self._fmt, div_trunc(to_int64(self._storage), divisor))

    # -------------------------------------------------------------------------
    # Ordering
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedNumber):
            return NotImplemented
        return self._sign_extended() == other._sign_extended()

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, FixedNumber):
            return NotImplemented
        return self._sign_extended() != other._sign_extended()

    def __lt__(self, other: "FixedNumber") -> bool:
        if not isinstance(other, FixedNumber):
            return NotImplemented
        return self._sign_extended() < other._sign_extended()

    def __le__(self, other: "FixedNumber") -> bool:
        if not isinstance(other, FixedNumber):
            return NotImplemented
        return self._sign_extended() <= other._sign_extended()

    def __gt__(self, other: "FixedNumber") -> bool:
        if not isinstance(other, FixedNumber):
            return NotImplemented
        return self._sign_extended() > other._sign_extended()

    def __ge__(self, other: "FixedNumber") -> bool:
        if not isinstance(other, FixedNumber):
            return NotImplemented
        return self._sign_extended() >= other._sign_extended()

    def __hash__(self) -> int:
        # Равные значения разных форматов имеют одинаковый sign_extend
        return hash(self._sign_extended())


# =============================================================================
# ENCODING HELPERS
# =============================================================================


def _scale_float(value: float) -> int:
    """
    round_to_nearest(value * 2^32), ties → +inf.

    Умножение на степень двойки точное; разность scaled - floor(scaled)
    тоже точная, поэтому округление не зависит от величины value.
    """
    if not math.isfinite(value):
        raise ValueError(f"FixedNumber cannot encode non-finite value {value}")

    scaled = value * CANONICAL_ONE
    floor = math.floor(scaled)
    if scaled - floor >= 0.5:
        floor += 1
    return floor


def _encode(value: NumberLike, fmt: FixedFormat) -> int:
    if value is None:
        return 0
    if isinstance(value, FixedNumber):
        raw = value._sign_extended()
    elif isinstance(value, bool):
        raise TypeError("FixedNumber cannot be constructed from bool")
    elif isinstance(value, int):
        raw = value << BINARY_POINT
    elif isinstance(value, float):
        raw = _scale_float(value)
    else:
        raise TypeError(f"FixedNumber cannot be constructed from {type(value).__name__}")
    return round_to_field(raw, fmt.int_bits, fmt.frac_bits, fmt.report)
