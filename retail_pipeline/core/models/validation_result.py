"""
ValidationResult model representing the outcome of cleaning one raw record (ephemeral).
"""

from typing import List

from pydantic import BaseModel, Field, field_validator


class ValidationResult(BaseModel):
    """
    Outcome of running the cleaning rules on a record.

    Attributes:
        record_index: Position of the record in the raw input
        passed: Whether the record survives cleaning
        passed_rules: Rules that succeeded
        failed_rules: Rules that failed
    """

    record_index: int = Field(..., ge=0)
    passed: bool
    passed_rules: List[str] = Field(default_factory=list)
    failed_rules: List[str] = Field(default_factory=list)

    @field_validator('failed_rules')
    @classmethod
    def check_passed_consistency(cls, v, info):
        """Validate that passed=True implies failed_rules is empty."""
        if info.data.get('passed') and len(v) > 0:
            raise ValueError("passed=True but failed_rules is not empty")
        return v
