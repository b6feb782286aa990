"""
Rounding — единственный примитив восстановления инварианта

Все операции, меняющие величину значения, проходят через round_to_field
перед тем, как результат становится валидным storage.

Алгоритм:
    1. raw приводится к signed int64
    2. F < 32: raw += 1 << (31 - F)  (half-ULP, ties → +inf)
       F == 32: смещение не добавляется, значение усекается к -inf
    3. storage = raw & (((1 << (I + F)) - 1) << (32 - F))

Биты вне активного поля после шага 3 равны нулю; знак восстанавливается
при чтении через sign_extend.
"""

from typing import Optional

from fixedpoint.core.math.bits import field_mask, round_bias, to_int64
from fixedpoint.diagnostics.truncation import (
    DiagnosticSink,
    TruncationEvent,
    detect_truncation,
)


def round_to_field(
    raw: int,
    int_bits: int,
    frac_bits: int,
    report: Optional[DiagnosticSink] = None,
) -> int:
    """
    Округление аккумулятора и маскирование до активного поля формата (I, F).

    Args:
        raw: Неокруглённый аккумулятор в канонической шкале (32 дробных бита)
        int_bits: Количество целых бит целевого формата
        frac_bits: Количество дробных бит целевого формата
        report: Опциональный sink для сообщений об overflow/underflow

    Returns:
        Маскированное поле (неотрицательный int, биты вне поля = 0)

    Examples:
        >>> round_to_field(3 << 32, 10, 10) == 3 << 32
        True
        >>> round_to_field(-1, 12, 12) == 0  # -2^-32 округляется к нулю
        True
    """
    target = to_int64(raw)
    biased = to_int64(target + round_bias(frac_bits))
    storage = biased & field_mask(int_bits, frac_bits)

    if report is not None:
        kind = detect_truncation(biased, int_bits)
        if kind is not None:
            event = TruncationEvent(
                kind=kind,
                int_bits=int_bits,
                frac_bits=frac_bits,
                target=target,
                result=storage,
            )
            report(event.message())

    return storage
