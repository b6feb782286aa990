"""
Bits — Storage Primitives

Модуль описывает 64-битный контейнер значения и соглашение о раскладке битов:
- Двоичная точка всегда находится в бите 32, независимо от (I, F)
- Активное поле занимает биты [32 - F, 32 + I)
- Все биты вне активного поля после маскирования равны нулю,
  знак восстанавливается при чтении (sign_extend)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Любое промежуточное значение интерпретируется как signed int64
   (two's complement), как в машинном слове
2. Сравнение и комбинирование значений разной ширины возможно только
   через sign_extend
"""

from typing import Final

# =============================================================================
# РАЗМЕРЫ КОНТЕЙНЕРА
# =============================================================================

# Ширина контейнера storage (бит)
STORAGE_BITS: Final[int] = 64

# Позиция двоичной точки внутри storage
BINARY_POINT: Final[int] = 32

# Максимальное количество целых и дробных бит
MAX_INT_BITS: Final[int] = 32
MAX_FRAC_BITS: Final[int] = 32

# Операнды шириной до NARROW_OPERAND_BITS умножаются без 128-битного промежуточного
NARROW_OPERAND_BITS: Final[int] = 32

MASK64: Final[int] = (1 << STORAGE_BITS) - 1
MASK32: Final[int] = (1 << BINARY_POINT) - 1
INT64_MIN: Final[int] = -(1 << (STORAGE_BITS - 1))
INT64_MAX: Final[int] = (1 << (STORAGE_BITS - 1)) - 1


# =============================================================================
# ЭМУЛЯЦИЯ МАШИННОГО СЛОВА
# =============================================================================


def to_int64(value: int) -> int:
    """
    Приведение произвольного int к диапазону signed int64 (wrap-around).

    Examples:
        >>> to_int64(1 << 63)
        -9223372036854775808
        >>> to_int64(-1)
        -1
    """
    value &= MASK64
    if value > INT64_MAX:
        value -= 1 << STORAGE_BITS
    return value


# =============================================================================
# АКТИВНОЕ ПОЛЕ
# =============================================================================


def field_mask(int_bits: int, frac_bits: int) -> int:
    """
    Маска активного поля: I + F подряд идущих бит, нижний край в бите 32 - F.

    Examples:
        >>> hex(field_mask(10, 10))
        '0x3ffffc00000'
        >>> field_mask(32, 32) == MASK64
        True
    """
    return ((1 << (int_bits + frac_bits)) - 1) << (BINARY_POINT - frac_bits)


def round_bias(frac_bits: int) -> int:
    """
    Half-ULP смещение, добавляемое перед маскированием.

    При F == 32 бита ниже младшего дробного бита не существует,
    смещение не добавляется (значения усекаются к -inf).
    """
    if frac_bits >= MAX_FRAC_BITS:
        return 0
    return 1 << (BINARY_POINT - 1 - frac_bits)


def sign_extend(storage: int, int_bits: int) -> int:
    """
    Знаковое значение storage в канонической шкале (32 дробных бита).

    Логический сдвиг влево на 32 - I, затем арифметический сдвиг вправо
    на ту же величину: знаковый бит поля (бит 32 + I - 1) распространяется
    на все старшие биты.

    Args:
        storage: Маскированное поле значения
        int_bits: Количество целых бит (I) формата

    Returns:
        signed int64, равный value * 2^32

    Examples:
        >>> sign_extend(0x3FF << 32, 10)  # все единицы в 10-битной целой части
        -4294967296
    """
    shift = STORAGE_BITS - BINARY_POINT - int_bits
    return to_int64(storage << shift) >> shift


def fraction_field(storage: int) -> int:
    """Младшие 32 бита storage (сырые дробные биты)."""
    return storage & MASK32
