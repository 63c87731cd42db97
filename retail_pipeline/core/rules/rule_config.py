"""
Cleaning rule configuration.

Builds the fixed cleaning rule set in code and can load the same
rules from a YAML file.
"""

from pathlib import Path
from typing import Any

import yaml

CANCELLED_INVOICE_PREFIX = "C"


class RuleConfigLoader:
    """
    Loads cleaning rules from YAML configuration files.

    Expected YAML format:
    ```yaml
    rules:
      invoice_number:
        - type: regex
          name: not_cancelled
          params:
            pattern: "^(?!C)"
      quantity:
        - type: range
          name: positive_quantity
          params:
            min_exclusive: 0
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")

    def load_rules(self) -> list[dict[str, Any]]:
        """
        Load and parse cleaning rules from YAML file.

        Returns:
            List of rule dictionaries suitable for RuleEngine

        Raises:
            ValueError: If YAML is invalid or missing required fields
        """
        with open(self.config_path) as f:
            config = yaml.safe_load(f)

        if not config or "rules" not in config:
            raise ValueError("Configuration file must contain 'rules' section")

        rules = []
        for field_name, field_rule_list in config["rules"].items():
            if not isinstance(field_rule_list, list):
                raise ValueError(f"Rules for field '{field_name}' must be a list")

            for idx, rule_def in enumerate(field_rule_list):
                rules.append(self._parse_rule(field_name, rule_def, idx))

        return rules

    def _parse_rule(self, field_name: str, rule_def: dict[str, Any], idx: int) -> dict[str, Any]:
        """
        Parse a single rule definition.

        Args:
            field_name: The field this rule applies to
            rule_def: The rule definition from YAML
            idx: Index of this rule for the field (for naming)

        Returns:
            Parsed rule dictionary
        """
        if "type" not in rule_def:
            raise ValueError(f"Rule for field '{field_name}' is missing 'type'")

        rule_type = rule_def["type"]

        return {
            "rule_name": rule_def.get("name", f"{field_name}_{rule_type}_{idx}"),
            "rule_type": rule_type,
            "field_name": field_name,
            "parameters": rule_def.get("params", rule_def.get("parameters", {})),
            "enabled": rule_def.get("enabled", True),
        }


class RuleConfigBuilder:
    """
    Programmatically build rule configurations.
    """

    def __init__(self):
        self.rules: list[dict[str, Any]] = []

    def add_required_field(
        self,
        field_name: str,
        allow_empty_string: bool = False,
        rule_name: str | None = None
    ) -> "RuleConfigBuilder":
        """Add a required field rule."""
        self.rules.append({
            "rule_name": rule_name or f"{field_name}_required",
            "rule_type": "required_field",
            "field_name": field_name,
            "parameters": {"allow_empty_string": allow_empty_string},
            "enabled": True,
        })
        return self

    def add_range(
        self,
        field_name: str,
        min_value: Any = None,
        max_value: Any = None,
        min_exclusive: Any = None,
        rule_name: str | None = None
    ) -> "RuleConfigBuilder":
        """Add a range validation rule."""
        params = {}
        if min_value is not None:
            params["min"] = min_value
        if max_value is not None:
            params["max"] = max_value
        if min_exclusive is not None:
            params["min_exclusive"] = min_exclusive

        self.rules.append({
            "rule_name": rule_name or f"{field_name}_range",
            "rule_type": "range",
            "field_name": field_name,
            "parameters": params,
            "enabled": True,
        })
        return self

    def add_regex(self, field_name: str, pattern: str, rule_name: str | None = None) -> "RuleConfigBuilder":
        """Add a regex validation rule."""
        self.rules.append({
            "rule_name": rule_name or f"{field_name}_regex",
            "rule_type": "regex",
            "field_name": field_name,
            "parameters": {"pattern": pattern},
            "enabled": True,
        })
        return self

    def build(self) -> list[dict[str, Any]]:
        """Build and return the rule configuration."""
        return self.rules


def default_cleaning_rules() -> list[dict[str, Any]]:
    """
    The four rules a sale line must pass to be analysed.

    - not cancelled: invoice number does not start with "C"
    - positive quantity: removes returns and zero-quantity rows
    - positive price: removes free or erroneous rows
    - customer present: customer id not missing or blank
    """
    return RuleConfigBuilder() \
        .add_regex("invoice_number", f"^(?!{CANCELLED_INVOICE_PREFIX})", rule_name="not_cancelled") \
        .add_range("quantity", min_exclusive=0, rule_name="positive_quantity") \
        .add_range("unit_price", min_exclusive=0, rule_name="positive_unit_price") \
        .add_required_field("customer_id", rule_name="customer_present") \
        .build()
