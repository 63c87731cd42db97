"""
Data quality profiling of raw records before cleaning.

Counts the problems the cleaning rules exist for, so a run can report
how much of the dataset was cancelled, returned, unpriced or anonymous.
"""

from datetime import datetime
from typing import Sequence

from retail_pipeline.core.dates import InvoiceDateParser
from retail_pipeline.core.models import DataQualityProfile, RawRecord
from retail_pipeline.core.rules.rule_config import CANCELLED_INVOICE_PREFIX

PROFILED_TEXT_FIELDS = (
    "invoice_number",
    "stock_code",
    "description",
    "invoice_date",
    "customer_id",
    "country",
)


def _is_missing(value: str | None) -> bool:
    return value is None or value.strip() == ""


def profile_raw(records: Sequence[RawRecord]) -> DataQualityProfile:
    """
    Count missing values and invalid rows in a raw record set.

    Args:
        records: Raw records

    Returns:
        DataQualityProfile with one count per problem; rows with several
        problems are counted under each of them
    """
    missing = {field_name: 0 for field_name in PROFILED_TEXT_FIELDS}
    non_positive_quantity = 0
    non_positive_unit_price = 0
    cancelled = 0

    for record in records:
        for field_name in PROFILED_TEXT_FIELDS:
            if _is_missing(getattr(record, field_name)):
                missing[field_name] += 1
        if record.quantity <= 0:
            non_positive_quantity += 1
        if record.unit_price <= 0:
            non_positive_unit_price += 1
        if record.invoice_number.startswith(CANCELLED_INVOICE_PREFIX):
            cancelled += 1

    return DataQualityProfile(
        total_records=len(records),
        missing_counts=missing,
        non_positive_quantity=non_positive_quantity,
        non_positive_unit_price=non_positive_unit_price,
        cancelled_invoices=cancelled,
    )


def check_date_conversion(
    records: Sequence[RawRecord],
    sample_size: int = 20,
    date_format: str | None = None,
) -> list[tuple[str, datetime]]:
    """
    Preview how the first invoice dates convert to timestamps.

    Returns:
        (raw text, parsed datetime) pairs for up to sample_size records

    Raises:
        ValueError: If sample_size is less than 1
        MalformedDateError: On the first value that does not convert
    """
    if sample_size < 1:
        raise ValueError(f"sample_size must be at least 1, got {sample_size}")

    parser = InvoiceDateParser(date_format)
    return [
        (record.invoice_date, parser.parse(record.invoice_date, idx))
        for idx, record in enumerate(records[:sample_size])
    ]
