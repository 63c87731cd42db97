"""
Aggregator: the fixed battery of revenue questions over clean records.

Every function is pure and takes the same clean record sequence.
Grouped reports are built with one accumulator pass, then sorted by
revenue descending. Equal revenues are ordered by ascending key, with
the missing-description group (None) first, so results never depend on
input order.
"""

from collections.abc import Callable, Hashable
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from retail_pipeline.core.exceptions import UndefinedAverageError
from retail_pipeline.core.models import CleanRecord, GroupRevenue

ZERO = Decimal("0.00")
CENT = Decimal("0.01")

DEFAULT_PRODUCT_LIMIT = 10
DEFAULT_COUNTRY_LIMIT = 5
DEFAULT_MONTH_LIMIT = 5
DEFAULT_CUSTOMER_LIMIT = 5


def total_revenue(records: Sequence[CleanRecord]) -> Decimal:
    """Sum of line revenue over all records; 0.00 for no records."""
    return sum((record.line_revenue for record in records), ZERO)


def unique_customer_count(records: Sequence[CleanRecord]) -> int:
    return len({record.customer_id for record in records})


def unique_order_count(records: Sequence[CleanRecord]) -> int:
    return len({record.invoice_number for record in records})


def average_order_value(records: Sequence[CleanRecord]) -> Decimal:
    """
    Total revenue divided by the number of distinct invoices,
    rounded half-up to two decimal places.

    Raises:
        UndefinedAverageError: If there are no orders
    """
    orders = unique_order_count(records)
    if orders == 0:
        raise UndefinedAverageError()
    return (total_revenue(records) / orders).quantize(CENT, rounding=ROUND_HALF_UP)


def _product_key(record: CleanRecord) -> str | None:
    # Blank and absent descriptions are one group
    if record.description is None or record.description.strip() == "":
        return None
    return record.description


def _rank_key(row: GroupRevenue) -> tuple:
    return (-row.revenue, row.key is not None, row.key)


def group_revenue(
    records: Sequence[CleanRecord],
    key_func: Callable[[CleanRecord], Hashable],
    limit: int | None = None,
) -> list[GroupRevenue]:
    """
    Sum line revenue per group and rank the groups.

    Args:
        records: Clean records
        key_func: Maps a record to its group key
        limit: Keep only the first N groups (all when None)

    Returns:
        Groups ordered by revenue descending, ties by ascending key
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    totals: dict[Hashable, Decimal] = {}
    for record in records:
        key = key_func(record)
        totals[key] = totals.get(key, ZERO) + record.line_revenue

    ranked = sorted(
        (GroupRevenue(key=key, revenue=revenue) for key, revenue in totals.items()),
        key=_rank_key,
    )
    return ranked if limit is None else ranked[:limit]


def revenue_by_product(
    records: Sequence[CleanRecord], limit: int | None = DEFAULT_PRODUCT_LIMIT
) -> list[GroupRevenue]:
    """Revenue per product description, missing descriptions grouped under None."""
    return group_revenue(records, _product_key, limit)


def top_product(records: Sequence[CleanRecord]) -> GroupRevenue | None:
    """The product with the highest revenue, or None for no records."""
    ranked = revenue_by_product(records, limit=1)
    return ranked[0] if ranked else None


def revenue_by_country(
    records: Sequence[CleanRecord], limit: int | None = DEFAULT_COUNTRY_LIMIT
) -> list[GroupRevenue]:
    return group_revenue(records, lambda record: record.country, limit)


def revenue_by_month(
    records: Sequence[CleanRecord], limit: int | None = DEFAULT_MONTH_LIMIT
) -> list[GroupRevenue]:
    """Revenue per calendar month (1-12), pooling all years."""
    return group_revenue(records, lambda record: record.invoice_date.month, limit)


def spending_by_customer(
    records: Sequence[CleanRecord], limit: int | None = DEFAULT_CUSTOMER_LIMIT
) -> list[GroupRevenue]:
    return group_revenue(records, lambda record: record.customer_id, limit)
