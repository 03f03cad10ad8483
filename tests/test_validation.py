"""
Tests for payload validation utilities.
"""

from datetime import date

import pytest
from pydantic import BaseModel, field_validator

from novellia_pets.exceptions import ValidationException
from novellia_pets.utils.validation import (
    INVALID_DATE_MESSAGE,
    FieldError,
    ValidationResult,
    blank_to_none,
    parse_date_string,
    require_text,
    validate_payload,
)


class _Named(BaseModel):
    name: str = None

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v):
        return require_text(v, 5, "Name is required", "Name is too long")


class TestValidationResult:
    """Test cases for ValidationResult."""

    def test_starts_valid(self):
        result = ValidationResult(value=1)

        assert result.is_valid
        assert result.unwrap() == 1

    def test_add_error_invalidates(self):
        result = ValidationResult()
        result.add_error(FieldError(["name"], "Name is required"))

        assert not result.is_valid
        assert result.error_dicts() == [{"path": ["name"], "message": "Name is required"}]

    def test_unwrap_raises_with_all_errors(self):
        result = ValidationResult()
        result.add_error(FieldError(["name"], "Name is required"))
        result.add_error(FieldError(["date"], INVALID_DATE_MESSAGE))

        with pytest.raises(ValidationException) as exc_info:
            result.unwrap()

        assert [e["path"] for e in exc_info.value.errors] == [["name"], ["date"]]


class TestFieldHelpers:
    """Test cases for the field-level helpers."""

    @pytest.mark.parametrize("value", ["2024-01-31", "2000-02-29"])
    def test_parse_valid_dates(self, value):
        assert parse_date_string(value) == date.fromisoformat(value)

    @pytest.mark.parametrize(
        "value", ["2024-1-31", "31-01-2024", "2024/01/31", "", 20240131, None, "2023-02-29"]
    )
    def test_parse_invalid_dates(self, value):
        with pytest.raises(ValueError, match="Invalid date format"):
            parse_date_string(value)

    def test_require_text_bounds(self):
        assert require_text("a", 1, "req", "long") == "a"

        with pytest.raises(ValueError, match="req"):
            require_text("", 1, "req", "long")
        with pytest.raises(ValueError, match="req"):
            require_text(None, 1, "req", "long")
        with pytest.raises(ValueError, match="long"):
            require_text("ab", 1, "req", "long")

    def test_blank_to_none(self):
        assert blank_to_none("") is None
        assert blank_to_none(" ") == " "
        assert blank_to_none(None) is None
        assert blank_to_none("x") == "x"


class TestValidatePayload:
    """Test cases for validate_payload."""

    def test_valid_payload(self):
        result = validate_payload(_Named, {"name": "Rex"})

        assert result.is_valid
        assert result.value.name == "Rex"

    def test_field_errors_are_collected(self):
        result = validate_payload(_Named, {"name": "Rexford"})

        assert result.error_dicts() == [{"path": ["name"], "message": "Name is too long"}]

    def test_non_object_body_is_rejected(self):
        result = validate_payload(_Named, ["Rex"])

        assert not result.is_valid
        assert result.errors[0].path == []

    def test_rules_run_after_field_errors(self):
        def never_ok(data):
            return FieldError(["other"], "Other is wrong")

        result = validate_payload(_Named, {"name": ""}, rules=[never_ok])

        assert result.error_dicts() == [
            {"path": ["name"], "message": "Name is required"},
            {"path": ["other"], "message": "Other is wrong"},
        ]

    def test_passing_rules_add_nothing(self):
        result = validate_payload(_Named, {"name": "Rex"}, rules=[lambda data: None])

        assert result.is_valid
