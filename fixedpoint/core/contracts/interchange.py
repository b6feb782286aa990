"""
Interchange — JSON представление FixedNumber

Значение передаётся как формат (int_bits, frac_bits) и маскированное поле
storage. Загрузка проверяет контракт fixed_number.json и то, что storage
не содержит бит вне активного поля, поэтому восстановленное значение
бит-в-бит совпадает с исходным.
"""

from typing import Any, Dict, Final

from fixedpoint.core.contracts.validators import validate_fixed_number
from fixedpoint.core.domain import FixedFormat, FixedNumber

SCHEMA_VERSION: Final[str] = "1"


def dump_fixed_number(value: FixedNumber) -> Dict[str, Any]:
    """
    Сериализация значения в dict, соответствующий fixed_number.json.

    Examples:
        >>> dump_fixed_number(FixedNumber(10, 10, 3.25))["text"]
        '3 + 256/1024'
    """
    return {
        "schema_version": SCHEMA_VERSION,
        "int_bits": value.int_bits,
        "frac_bits": value.frac_bits,
        "storage": value.storage,
        "text": str(value),
    }


def load_fixed_number(data: Dict[str, Any]) -> FixedNumber:
    """
    Восстановление значения из dict.

    Raises:
        ValidationError: Если данные не соответствуют схеме
        ValueError: Если storage содержит биты вне активного поля или
            text не совпадает с отображением восстановленного значения
    """
    validate_fixed_number(data)

    fmt = FixedFormat.of(data["int_bits"], data["frac_bits"])
    value = FixedNumber.from_field(data["storage"], fmt)

    text = data.get("text")
    if text is not None and text != str(value):
        raise ValueError(f"text {text!r} does not match storage of {fmt.label} ({value})")
    return value
