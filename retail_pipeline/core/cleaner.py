"""
Validator/Cleaner: turns raw transaction lines into clean sale lines.

A raw record that fails any cleaning rule is dropped, never repaired.
Survivors get their invoice date parsed; a date that cannot be parsed
aborts the whole run.
"""

from decimal import Decimal
from typing import Iterable, Sequence

from retail_pipeline.core.dates import InvoiceDateParser
from retail_pipeline.core.models import CleaningSummary, CleanRecord, RawRecord
from retail_pipeline.core.rules import RuleEngine, default_cleaning_rules
from retail_pipeline.observability.logger import get_logger

logger = get_logger(__name__)

# Records that each break one clean-record invariant; the rule set must drop all of them
_INVARIANT_CHECKS = {
    "invoice number is not a cancellation": [{"invoice_number": "C536365"}, {"invoice_number": "C"}],
    "quantity is positive": [{"quantity": 0}, {"quantity": -1}],
    "unit price is positive": [{"unit_price": Decimal("0.00")}, {"unit_price": Decimal("-1.00")}],
    "customer id is present": [{"customer_id": None}, {"customer_id": "  "}],
}

_VALID_TEMPLATE = {
    "invoice_number": "536365",
    "stock_code": "85123A",
    "description": "CHECK",
    "quantity": 1,
    "invoice_date": "12/1/2010 8:26",
    "unit_price": Decimal("1.00"),
    "customer_id": "17850",
    "country": "United Kingdom",
}


def check_rule_coverage(rule_engine: RuleEngine) -> None:
    """
    Verify a rule set drops every record a CleanRecord would refuse.

    Raises:
        ValueError: Naming the invariants the enabled rules do not enforce
    """
    missing = [
        invariant
        for invariant, overrides in _INVARIANT_CHECKS.items()
        if any(
            rule_engine.validate_record(RawRecord(**{**_VALID_TEMPLATE, **override})).passed
            for override in overrides
        )
    ]
    if missing:
        raise ValueError(f"Cleaning rules do not enforce: {', '.join(missing)}")


class Cleaner:
    """
    Applies the cleaning rules and date parsing to a raw record set.

    Each call to clean() uses a fresh date parser, so format detection
    never leaks between runs.
    """

    def __init__(self, rule_engine: RuleEngine | None = None, date_format: str | None = None):
        """
        Args:
            rule_engine: Engine with the cleaning rules (default: the fixed rule set)
            date_format: strptime format of invoice dates, detected when None

        Raises:
            ValueError: If the rules let through records that cannot be clean
        """
        self.rule_engine = rule_engine or RuleEngine(default_cleaning_rules())
        check_rule_coverage(self.rule_engine)
        self.date_format = date_format

    def clean(self, records: Iterable[RawRecord]) -> tuple[list[CleanRecord], CleaningSummary]:
        """
        Clean a raw record set.

        Args:
            records: Raw records in input order

        Returns:
            Tuple of (clean records in input order, cleaning summary)

        Raises:
            MalformedDateError: If a surviving record's date cannot be parsed
        """
        parser = InvoiceDateParser(self.date_format)
        dropped_by_rule = {name: 0 for name in self.rule_engine.rule_names}
        clean_records: list[CleanRecord] = []
        total = 0

        for idx, record in enumerate(records):
            total += 1
            result = self.rule_engine.validate_record(record, idx)
            if not result.passed:
                for rule_name in result.failed_rules:
                    dropped_by_rule[rule_name] += 1
                continue

            clean_records.append(CleanRecord(
                invoice_number=record.invoice_number,
                stock_code=record.stock_code,
                description=record.description,
                quantity=record.quantity,
                invoice_date=parser.parse(record.invoice_date, idx),
                unit_price=record.unit_price,
                customer_id=record.customer_id,
                country=record.country,
            ))

        summary = CleaningSummary(
            total_records=total,
            clean_records=len(clean_records),
            dropped_records=total - len(clean_records),
            dropped_by_rule=dropped_by_rule,
            date_format=parser.date_format,
        )
        logger.info(
            f"Cleaned {total} records: {summary.clean_records} kept, {summary.dropped_records} dropped",
            extra={"dropped_by_rule": dropped_by_rule},
        )
        return clean_records, summary


def clean(records: Sequence[RawRecord], date_format: str | None = None) -> list[CleanRecord]:
    """
    Return the clean records of a raw record set, in input order.

    Raises:
        MalformedDateError: If a surviving record's date cannot be parsed
    """
    clean_records, _ = Cleaner(date_format=date_format).clean(records)
    return clean_records
