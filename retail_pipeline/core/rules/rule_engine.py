"""
Rule engine for applying the cleaning rules to raw records.

The rule engine builds validators from rule configurations, applies them
to records, and produces validation results.
"""

from typing import Any

from retail_pipeline.core.models import RawRecord, ValidationResult
from retail_pipeline.core.validators import (
    BaseValidator,
    RangeValidator,
    RegexValidator,
    RequiredFieldValidator,
    ValidationError,
)


class RuleEngine:
    """
    Applies cleaning rules to raw records.

    Every enabled rule is evaluated for every record so that the
    cleaning summary can attribute a dropped record to each rule it broke.
    """

    VALIDATOR_REGISTRY = {
        "required_field": RequiredFieldValidator,
        "range": RangeValidator,
        "regex": RegexValidator,
    }

    def __init__(self, rules: list[dict[str, Any]]):
        """
        Initialize the rule engine with cleaning rules.

        Args:
            rules: List of rule configurations, each containing:
                   - rule_name: str
                   - rule_type: str (required_field, range, regex)
                   - field_name: str
                   - parameters: Dict[str, Any] (optional)
                   - enabled: bool (default True)
        """
        self.rules = rules
        self.validators: list[tuple[str, BaseValidator]] = []
        self._build_validators()

    def _build_validators(self) -> None:
        """Build validator instances from rule configurations."""
        for rule in self.rules:
            if not rule.get("enabled", True):
                continue

            rule_name = rule["rule_name"]
            rule_type = rule["rule_type"]
            field_name = rule["field_name"]
            parameters = rule.get("parameters", {})

            if field_name not in RawRecord.model_fields:
                raise ValueError(f"Rule '{rule_name}' targets unknown field: {field_name}")

            validator_class = self.VALIDATOR_REGISTRY.get(rule_type)
            if not validator_class:
                raise ValueError(f"Unknown rule type: {rule_type}")

            try:
                validator = validator_class(field_name, parameters)
            except ValueError as e:
                raise ValueError(f"Failed to create validator for rule '{rule_name}': {e}") from e
            self.validators.append((rule_name, validator))

    @property
    def rule_names(self) -> list[str]:
        return [rule_name for rule_name, _ in self.validators]

    def validate_record(self, record: RawRecord, record_index: int = 0) -> ValidationResult:
        """
        Validate a raw record against all rules.

        Args:
            record: The RawRecord to validate
            record_index: Position of the record in its input sequence

        Returns:
            ValidationResult containing pass/fail status and the rules involved
        """
        passed_rules = []
        failed_rules = []

        payload = record.model_dump()

        for rule_name, validator in self.validators:
            value = payload.get(validator.field_name)
            try:
                validator.validate(value, payload)
                passed_rules.append(rule_name)
            except ValidationError:
                failed_rules.append(rule_name)

        return ValidationResult(
            record_index=record_index,
            passed=not failed_rules,
            passed_rules=passed_rules,
            failed_rules=failed_rules,
        )

    def validate_batch(self, records: list[RawRecord]) -> list[ValidationResult]:
        """
        Validate a batch of records.

        Args:
            records: List of RawRecord objects

        Returns:
            List of ValidationResult objects, one per record, in input order
        """
        return [self.validate_record(record, idx) for idx, record in enumerate(records)]

    def get_rule_summary(self) -> dict[str, Any]:
        """
        Get summary of loaded rules.

        Returns:
            Dictionary with rule count and counts per rule type
        """
        counts: dict[str, int] = {}
        for _, validator in self.validators:
            counts[validator.rule_type] = counts.get(validator.rule_type, 0) + 1
        return {
            "total_rules": len(self.validators),
            "rules_by_type": counts,
        }
