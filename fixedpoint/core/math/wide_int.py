"""
Wide Int — 128-битная промежуточная арифметика

Используется умножением и делением, когда произведение или сдвинутый делимый
не помещаются в 64 бита. Python int не ограничен по ширине, поэтому функции
только фиксируют семантику знакового 128-битного слова и целочисленного
деления с усечением к нулю.
"""

from typing import Final

WIDE_BITS: Final[int] = 128
MASK128: Final[int] = (1 << WIDE_BITS) - 1
INT128_MAX: Final[int] = (1 << (WIDE_BITS - 1)) - 1


def to_int128(value: int) -> int:
    """Приведение int к диапазону signed int128 (wrap-around)."""
    value &= MASK128
    if value > INT128_MAX:
        value -= 1 << WIDE_BITS
    return value


def mul_wide(a: int, b: int) -> int:
    """
    Точное знаковое произведение двух int64 в 128 битах.

    Examples:
        >>> mul_wide(-(1 << 63), -(1 << 63)) == 1 << 126
        True
    """
    return to_int128(to_int128(a) * to_int128(b))


def div_trunc(numerator: int, denominator: int) -> int:
    """
    Целочисленное деление с усечением к нулю.

    Оператор // в Python округляет к -inf; здесь частное вычисляется
    по модулям и знак восстанавливается отдельно.

    Raises:
        ZeroDivisionError: Если denominator == 0

    Examples:
        >>> div_trunc(7, 2)
        3
        >>> div_trunc(-7, 2)
        -3
    """
    if denominator == 0:
        raise ZeroDivisionError("integer division by zero")

    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        quotient = -quotient
    return quotient
