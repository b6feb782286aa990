"""
Tests for JSON Schema Contract Validators

Комплексное тестирование контракта fixed_number:
- Валидность самой схемы
- Валидация правильных данных
- Детекция нарушений required полей, типов и constraints
- Сериализация и восстановление FixedNumber бит-в-бит
"""

import json

import pytest
from jsonschema import ValidationError

from fixedpoint.core.contracts import (
    SCHEMA_VERSION,
    FixedNumberValidator,
    SchemaLoader,
    dump_fixed_number,
    load_fixed_number,
    validate_fixed_number,
)
from fixedpoint.core.domain import FixedNumber


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_fixed_number():
    """Валидный fixed_number для тестирования."""
    return {
        "schema_version": "1",
        "int_bits": 10,
        "frac_bits": 10,
        "storage": (3 << 32) | (1 << 30),
        "text": "3 + 256/1024",
    }


# =============================================================================
# SCHEMA LOADING
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузки схем"""

    def test_load_fixed_number_schema(self) -> None:
        schema = SchemaLoader().load_schema("fixed_number")
        assert schema["title"] == "FixedNumber"
        assert set(schema["required"]) == {"schema_version", "int_bits", "frac_bits", "storage"}

    def test_schema_is_cached(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema("fixed_number") is loader.load_schema("fixed_number")

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_invalid_schema(self, tmp_path) -> None:
        (tmp_path / "broken.json").write_text(json.dumps({"type": 12}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")

    def test_missing_directory(self, tmp_path) -> None:
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "nowhere")


# =============================================================================
# VALIDATION
# =============================================================================


class TestFixedNumberValidator:
    """Тесты валидации fixed_number"""

    def test_valid_data(self, valid_fixed_number) -> None:
        validate_fixed_number(valid_fixed_number)
        assert FixedNumberValidator().is_valid(valid_fixed_number)

    def test_text_is_optional(self, valid_fixed_number) -> None:
        del valid_fixed_number["text"]
        validate_fixed_number(valid_fixed_number)

    @pytest.mark.parametrize("field", ["schema_version", "int_bits", "frac_bits", "storage"])
    def test_missing_required_field(self, valid_fixed_number, field: str) -> None:
        del valid_fixed_number[field]
        with pytest.raises(ValidationError):
            validate_fixed_number(valid_fixed_number)

    @pytest.mark.parametrize(
        "field, value",
        [
            ("int_bits", 0),
            ("int_bits", 33),
            ("frac_bits", -1),
            ("frac_bits", 33),
            ("storage", -1),
            ("storage", 1 << 64),
            ("storage", 1.5),
            ("int_bits", "10"),
            ("schema_version", "2"),
            ("text", "3.25"),
        ],
    )
    def test_constraint_violations(self, valid_fixed_number, field: str, value) -> None:
        valid_fixed_number[field] = value
        with pytest.raises(ValidationError):
            validate_fixed_number(valid_fixed_number)

    def test_additional_properties_rejected(self, valid_fixed_number) -> None:
        valid_fixed_number["value"] = 3.25
        assert not FixedNumberValidator().is_valid(valid_fixed_number)

    def test_iter_errors(self, valid_fixed_number) -> None:
        valid_fixed_number["int_bits"] = 0
        valid_fixed_number["frac_bits"] = 40
        errors = list(FixedNumberValidator().iter_errors(valid_fixed_number))
        assert len(errors) == 2


# =============================================================================
# INTERCHANGE
# =============================================================================


class TestInterchange:
    """Тесты dump/load FixedNumber"""

    def test_dump(self, valid_fixed_number) -> None:
        assert dump_fixed_number(FixedNumber(10, 10, 3.25)) == valid_fixed_number

    def test_dump_is_valid_contract(self) -> None:
        data = dump_fixed_number(FixedNumber(32, 32, -1.5))
        assert data["schema_version"] == SCHEMA_VERSION
        validate_fixed_number(data)

    @pytest.mark.parametrize(
        "int_bits, frac_bits, value",
        [(10, 10, 3.25), (10, 10, -19.125), (32, 32, -1.5), (1, 0, -1.0), (13, 22, 7.6)],
    )
    def test_load_restores_bits(self, int_bits: int, frac_bits: int, value: float) -> None:
        original = FixedNumber(int_bits, frac_bits, value)
        restored = load_fixed_number(json.loads(json.dumps(dump_fixed_number(original))))
        assert restored.storage == original.storage
        assert restored.fmt == original.fmt
        assert str(restored) == str(original)

    def test_load_rejects_bits_outside_field(self, valid_fixed_number) -> None:
        valid_fixed_number["storage"] |= 1
        with pytest.raises(ValueError, match="outside the active field"):
            load_fixed_number(valid_fixed_number)

    def test_load_rejects_invalid_contract(self, valid_fixed_number) -> None:
        valid_fixed_number["int_bits"] = 40
        with pytest.raises(ValidationError):
            load_fixed_number(valid_fixed_number)

    def test_load_rejects_mismatched_text(self, valid_fixed_number) -> None:
        valid_fixed_number["text"] = "3 + 512/1024"
        with pytest.raises(ValueError, match="does not match storage"):
            load_fixed_number(valid_fixed_number)

    def test_load_without_text(self, valid_fixed_number) -> None:
        del valid_fixed_number["text"]
        assert str(load_fixed_number(valid_fixed_number)) == "3 + 256/1024"
