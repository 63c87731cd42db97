"""
RangeValidator - validates numeric values are within a specified range.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from .base_validator import BaseValidator, ValidationError


def _to_decimal(bound: Any) -> Decimal | None:
    if bound is None:
        return None
    try:
        return Decimal(str(bound))
    except InvalidOperation:
        raise ValueError(f"Range boundary must be numeric, got {bound!r}")


class RangeValidator(BaseValidator):
    """
    Validates that a numeric field is within a specified range.

    Boundaries are compared as Decimal so that prices are checked
    without binary floating point error.

    Parameters:
    - min: Minimum value (inclusive)
    - max: Maximum value (inclusive)
    - min_exclusive: Minimum value (exclusive)
    - max_exclusive: Maximum value (exclusive)
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        self.min_value = _to_decimal(self.parameters.get("min"))
        self.max_value = _to_decimal(self.parameters.get("max"))
        self.min_exclusive = _to_decimal(self.parameters.get("min_exclusive"))
        self.max_exclusive = _to_decimal(self.parameters.get("max_exclusive"))

        if all(v is None for v in [self.min_value, self.max_value, self.min_exclusive, self.max_exclusive]):
            raise ValueError("RangeValidator requires at least one of: min, max, min_exclusive, max_exclusive")

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        """
        Validate that the value is within the specified range.

        Args:
            value: The field value to validate
            record: The entire record

        Raises:
            ValidationError: If value is missing, non-numeric or outside the range
        """
        # bool is an int subclass but never a valid quantity or price
        if value is None or isinstance(value, bool) or not isinstance(value, int | Decimal):
            raise ValidationError(
                rule_name="range",
                field_name=self.field_name,
                message=f"Value must be numeric, got {type(value).__name__}"
            )

        if self.min_value is not None and value < self.min_value:
            raise ValidationError(
                rule_name="range",
                field_name=self.field_name,
                message=f"Value {value} is less than minimum {self.min_value}"
            )

        if self.min_exclusive is not None and value <= self.min_exclusive:
            raise ValidationError(
                rule_name="range",
                field_name=self.field_name,
                message=f"Value {value} must be greater than {self.min_exclusive}"
            )

        if self.max_value is not None and value > self.max_value:
            raise ValidationError(
                rule_name="range",
                field_name=self.field_name,
                message=f"Value {value} exceeds maximum {self.max_value}"
            )

        if self.max_exclusive is not None and value >= self.max_exclusive:
            raise ValidationError(
                rule_name="range",
                field_name=self.field_name,
                message=f"Value {value} must be less than {self.max_exclusive}"
            )

    @property
    def rule_type(self) -> str:
        return "range"
