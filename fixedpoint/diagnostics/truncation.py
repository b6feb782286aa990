"""
Truncation Diagnostics — отчёты об overflow/underflow при маскировании

Маскирование активного поля всегда завершается успешно и даёт
детерминированный результат. Диагностика только наблюдает: если биты
выше активного поля не являются расширением знакового бита поля, формируется
событие и сообщение передаётся во внешний sink (callback с одним
строковым аргументом). Результат маскирования от этого не меняется.

Биты от знакового бита поля до бита 63 должны быть одинаковы.
Классификация нарушения по знаку аккумулятора:
- OVERFLOW: аккумулятор неотрицателен и не помещается в поле
- UNDERFLOW: аккумулятор отрицателен и не помещается в поле

Классификация намеренно не следует правилу "по знаковому биту поля": по
нему положительный перенос (9.5 в формат с 4 целыми битами) назывался бы
underflow, хотя значение переполнило поле сверху.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Final, Optional

from fixedpoint.core.math.bits import BINARY_POINT, MAX_INT_BITS, sign_extend

logger = logging.getLogger("fixedpoint.diagnostics")

# Тип внешнего получателя диагностических сообщений
DiagnosticSink = Callable[[str], None]

# Масштаб канонического представления (32 дробных бита)
CANONICAL_SCALE: Final[float] = float(1 << BINARY_POINT)


class TruncationKind(str, Enum):
    """Направление потери значимых бит"""

    OVERFLOW = "overflow"
    UNDERFLOW = "underflow"


@dataclass(frozen=True)
class TruncationEvent:
    """Событие усечения значимых бит при маскировании."""

    kind: TruncationKind
    int_bits: int
    frac_bits: int

    # Аккумулятор до округления (signed int64, каноническая шкала)
    target: int

    # Маскированное поле, которое будет сохранено
    result: int

    @property
    def target_value(self) -> float:
        return self.target / CANONICAL_SCALE

    @property
    def result_value(self) -> float:
        return sign_extend(self.result, self.int_bits) / CANONICAL_SCALE

    def message(self) -> str:
        """
        Текст диагностики: целевое значение, направление, усечённый результат.

        Examples:
            'FixedNumber(4,4) overflow: 9.5 truncated to -6.5'
        """
        return (
            f"FixedNumber({self.int_bits},{self.frac_bits}) {self.kind.value}: "
            f"{self.target_value!r} truncated to {self.result_value!r}"
        )


def detect_truncation(raw: int, int_bits: int) -> Optional[TruncationKind]:
    """
    Классификация бит выше активного поля.

    Args:
        raw: signed int64 аккумулятор (уже со смещением округления)
        int_bits: Количество целых бит (I) целевого формата

    Returns:
        TruncationKind или None, если старшие биты являются
        корректным расширением знака поля
    """
    if int_bits >= MAX_INT_BITS:
        # Поле доходит до бита 63, выше ничего не отбрасывается
        return None

    # Знаковый бит поля и всё, что выше: 0 или -1, если поле вмещает значение
    top = raw >> (BINARY_POINT + int_bits - 1)
    if top in (0, -1):
        return None

    if raw >= 0:
        return TruncationKind.OVERFLOW
    return TruncationKind.UNDERFLOW


# =============================================================================
# SINKS
# =============================================================================


def log_truncation(message: str) -> None:
    """Sink по умолчанию: WARNING в logger 'fixedpoint.diagnostics'."""
    logger.warning(message)


def logging_sink(target: Optional[logging.Logger] = None, level: int = logging.WARNING) -> DiagnosticSink:
    """
    Построение sink, пишущего сообщения в заданный logger.

    Args:
        target: Logger (default: 'fixedpoint.diagnostics')
        level: Уровень логирования (default: WARNING)

    Returns:
        Callable[[str], None] для FixedFormat.report
    """
    sink_logger = target if target is not None else logger

    def _sink(message: str) -> None:
        sink_logger.log(level, message)

    return _sink
