"""
Unit tests for rule engine and rule configuration.
"""

from decimal import Decimal
from pathlib import Path

import pytest

from retail_pipeline.core.rules import (
    RuleConfigBuilder,
    RuleConfigLoader,
    RuleEngine,
    default_cleaning_rules,
)

REPO_RULES = Path(__file__).resolve().parents[2] / "config" / "cleaning_rules.yaml"


class TestRuleEngine:
    """Tests for RuleEngine with the default cleaning rules"""

    def test_valid_record_passes_all_rules(self, raw_record_factory):
        engine = RuleEngine(default_cleaning_rules())

        result = engine.validate_record(raw_record_factory())

        assert result.passed is True
        assert result.failed_rules == []
        assert result.passed_rules == [
            "not_cancelled", "positive_quantity", "positive_unit_price", "customer_present"
        ]

    @pytest.mark.parametrize("overrides,rule", [
        ({"invoice_number": "C536379"}, "not_cancelled"),
        ({"quantity": 0}, "positive_quantity"),
        ({"quantity": -6}, "positive_quantity"),
        ({"unit_price": Decimal("0.00")}, "positive_unit_price"),
        ({"unit_price": Decimal("-11062.06")}, "positive_unit_price"),
        ({"customer_id": None}, "customer_present"),
        ({"customer_id": ""}, "customer_present"),
        ({"customer_id": "   "}, "customer_present"),
    ])
    def test_each_rule_drops_its_records(self, raw_record_factory, overrides, rule):
        engine = RuleEngine(default_cleaning_rules())

        result = engine.validate_record(raw_record_factory(**overrides), record_index=7)

        assert result.passed is False
        assert result.failed_rules == [rule]
        assert result.record_index == 7

    def test_all_failing_rules_reported(self, raw_record_factory):
        """Test a cancelled return is attributed to both rules"""
        engine = RuleEngine(default_cleaning_rules())

        result = engine.validate_record(raw_record_factory(invoice_number="C536379", quantity=-1))

        assert result.failed_rules == ["not_cancelled", "positive_quantity"]

    def test_validate_batch_keeps_order(self, raw_record_factory):
        engine = RuleEngine(default_cleaning_rules())
        records = [raw_record_factory(), raw_record_factory(quantity=-1), raw_record_factory()]

        results = engine.validate_batch(records)

        assert [r.record_index for r in results] == [0, 1, 2]
        assert [r.passed for r in results] == [True, False, True]

    def test_disabled_rule_skipped(self, raw_record_factory):
        rules = default_cleaning_rules()
        rules[0]["enabled"] = False
        engine = RuleEngine(rules)

        result = engine.validate_record(raw_record_factory(invoice_number="C536379"))

        assert result.passed is True
        assert "not_cancelled" not in engine.rule_names

    def test_unknown_rule_type(self):
        rules = [{"rule_name": "x", "rule_type": "soundex", "field_name": "country"}]
        with pytest.raises(ValueError) as exc_info:
            RuleEngine(rules)
        assert "Unknown rule type" in str(exc_info.value)

    def test_unknown_field(self):
        rules = RuleConfigBuilder().add_required_field("email").build()
        with pytest.raises(ValueError) as exc_info:
            RuleEngine(rules)
        assert "unknown field" in str(exc_info.value)

    def test_invalid_parameters(self):
        rules = [{"rule_name": "bad_range", "rule_type": "range", "field_name": "quantity", "parameters": {}}]
        with pytest.raises(ValueError) as exc_info:
            RuleEngine(rules)
        assert "bad_range" in str(exc_info.value)

    def test_rule_summary(self):
        engine = RuleEngine(default_cleaning_rules())
        assert engine.get_rule_summary() == {
            "total_rules": 4,
            "rules_by_type": {"regex": 1, "range": 2, "required_field": 1},
        }


class TestRuleConfigLoader:
    """Tests for RuleConfigLoader"""

    def test_repository_rules_match_defaults(self):
        """Test the shipped YAML describes the built-in rule set"""
        loaded = RuleConfigLoader(REPO_RULES).load_rules()
        defaults = default_cleaning_rules()

        assert [r["rule_name"] for r in loaded] == [r["rule_name"] for r in defaults]
        assert [r["rule_type"] for r in loaded] == [r["rule_type"] for r in defaults]
        assert [r["field_name"] for r in loaded] == [r["field_name"] for r in defaults]

    def test_load_rules_from_yaml(self, tmp_path):
        config = tmp_path / "rules.yaml"
        config.write_text(
            "rules:\n"
            "  quantity:\n"
            "    - type: range\n"
            "      params:\n"
            "        min_exclusive: 0\n"
            "        max: 80995\n"
        )

        rules = RuleConfigLoader(config).load_rules()

        assert rules == [{
            "rule_name": "quantity_range_0",
            "rule_type": "range",
            "field_name": "quantity",
            "parameters": {"min_exclusive": 0, "max": 80995},
            "enabled": True,
        }]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuleConfigLoader(tmp_path / "absent.yaml")

    def test_missing_rules_section(self, tmp_path):
        config = tmp_path / "rules.yaml"
        config.write_text("settings: {}\n")
        with pytest.raises(ValueError) as exc_info:
            RuleConfigLoader(config).load_rules()
        assert "rules" in str(exc_info.value)

    def test_rule_list_required(self, tmp_path):
        config = tmp_path / "rules.yaml"
        config.write_text("rules:\n  quantity:\n    type: range\n")
        with pytest.raises(ValueError) as exc_info:
            RuleConfigLoader(config).load_rules()
        assert "must be a list" in str(exc_info.value)

    def test_rule_type_required(self, tmp_path):
        config = tmp_path / "rules.yaml"
        config.write_text("rules:\n  quantity:\n    - name: q\n")
        with pytest.raises(ValueError) as exc_info:
            RuleConfigLoader(config).load_rules()
        assert "missing 'type'" in str(exc_info.value)
