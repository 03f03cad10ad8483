"""
Validation utilities for request payloads.

This module provides the field-error and validation-result types consumed by
every request handler, the calendar-date pattern shared by the schemas, and
``validate_payload`` which runs a Pydantic schema plus cross-field rules and
collects every problem in a single pass.
"""

import re
from datetime import date
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Type,
    TypeVar,
    Union,
)

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationException, format_validation_errors

# Type variable for generic validation functions
T = TypeVar("T")

PathItem = Union[str, int]

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
INVALID_DATE_MESSAGE = "Invalid date format. Use YYYY-MM-DD"


class FieldError:
    """A single rejected field with the message shown to the client."""

    def __init__(
        self,
        path: Sequence[PathItem],
        message: str,
        code: Optional[str] = None,
    ):
        self.path = list(path)
        self.message = message
        self.code = code

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to the wire format."""
        return {"path": self.path, "message": self.message}

    def __repr__(self) -> str:
        return f"FieldError(path={self.path!r}, message={self.message!r})"


class ValidationResult(Generic[T]):
    """Result of a validation operation."""

    def __init__(
        self, value: Optional[T] = None, errors: Optional[List[FieldError]] = None
    ):
        self.value = value
        self.errors = errors or []
        self.is_valid = len(self.errors) == 0

    def add_error(self, error: FieldError) -> None:
        """Add an error to the result."""
        self.errors.append(error)
        self.is_valid = False

    def error_dicts(self) -> List[Dict[str, Any]]:
        """Return the errors in wire format, in the order they were found."""
        return [error.to_dict() for error in self.errors]

    def unwrap(self) -> T:
        """
        Return the validated value.

        Raises:
            ValidationException: If validation failed
        """
        if not self.is_valid:
            raise ValidationException(errors=self.error_dicts())
        return self.value  # type: ignore[return-value]


CrossFieldRule = Callable[[Mapping[str, Any]], Optional[FieldError]]


def blank_to_none(value: Any) -> Any:
    """Treat an empty string as an absent value."""
    if isinstance(value, str) and value == "":
        return None
    return value


def require_text(
    value: Any, max_length: int, required_message: str, too_long_message: str
) -> str:
    """
    Check a required, length-bounded string.

    Args:
        value: Raw input value
        max_length: Maximum number of characters
        required_message: Message for a missing, null, empty or non-string value
        too_long_message: Message for a value longer than ``max_length``

    Returns:
        The value unchanged

    Raises:
        ValueError: If the value is rejected
    """
    if not isinstance(value, str) or len(value) < 1:
        raise ValueError(required_message)
    if len(value) > max_length:
        raise ValueError(too_long_message)
    return value


def parse_date_string(value: Any) -> date:
    """
    Parse a ``YYYY-MM-DD`` string into a calendar date.

    Strings that match the pattern but do not name a real day (``2024-02-30``)
    are rejected with the same message as malformed input.

    Raises:
        ValueError: If the value is not a valid date string
    """
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise ValueError(INVALID_DATE_MESSAGE)
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(INVALID_DATE_MESSAGE)


def validate_payload(
    schema_cls: Type[BaseModel],
    data: Any,
    rules: Iterable[CrossFieldRule] = (),
) -> ValidationResult[BaseModel]:
    """
    Validate a request payload against a schema and cross-field rules.

    Field-level errors come first in schema field order, followed by the
    errors of each rule in the order given. Rules see the raw payload, so they
    also run when individual fields were rejected.

    Args:
        schema_cls: Pydantic model describing the payload
        data: Decoded JSON body
        rules: Cross-field checks returning a ``FieldError`` or None

    Returns:
        ValidationResult holding the parsed model or the accumulated errors
    """
    result: ValidationResult[BaseModel] = ValidationResult()

    if not isinstance(data, Mapping):
        result.add_error(FieldError([], "Expected object", "type_error"))
        return result

    model = None
    try:
        model = schema_cls.model_validate(data)
    except PydanticValidationError as e:
        for item in format_validation_errors(e.errors()):
            result.add_error(FieldError(item["path"], item["message"], "field_error"))

    for rule in rules:
        error = rule(data)
        if error is not None:
            result.add_error(error)

    if result.is_valid:
        result.value = model

    return result
