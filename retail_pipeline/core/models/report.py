"""
Report models produced by the aggregator and the profiler.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GroupRevenue(BaseModel):
    """One row of a grouped revenue report."""

    model_config = ConfigDict(frozen=True)

    key: str | int | None
    revenue: Decimal


class CleaningSummary(BaseModel):
    """
    Counts describing one cleaning pass.

    A record failing several rules is counted once in dropped_records
    and once per rule in dropped_by_rule.
    """

    total_records: int = 0
    clean_records: int = 0
    dropped_records: int = 0
    dropped_by_rule: dict[str, int] = Field(default_factory=dict)
    date_format: str | None = None


class MetricsReport(BaseModel):
    """
    Answers to the fixed question set for one pipeline run.

    Metrics that were not requested stay None. Metrics that were requested
    but are undefined for the data (average order value with no orders)
    also stay None and are listed in undefined_metrics.
    """

    total_revenue: Decimal | None = None
    unique_customers: int | None = None
    unique_orders: int | None = None
    average_order_value: Decimal | None = None
    top_products: list[GroupRevenue] | None = None
    revenue_by_country: list[GroupRevenue] | None = None
    revenue_by_month: list[GroupRevenue] | None = None
    top_customers: list[GroupRevenue] | None = None
    requested_metrics: list[str] = Field(default_factory=list)
    undefined_metrics: list[str] = Field(default_factory=list)

    @property
    def top_product(self) -> GroupRevenue | None:
        """Rank-1 product, if the product report was computed and non-empty."""
        if not self.top_products:
            return None
        return self.top_products[0]

    def to_dict(self) -> dict[str, Any]:
        """
        Plain mapping of requested metric name to value or ordered list.

        Decimals are rendered as strings so the result is JSON-safe
        without losing precision.
        """
        result: dict[str, Any] = {}
        for name in self.requested_metrics:
            value = getattr(self, name)
            if isinstance(value, list):
                result[name] = [
                    {"key": row.key, "revenue": str(row.revenue)} for row in value
                ]
            elif isinstance(value, Decimal):
                result[name] = str(value)
            else:
                result[name] = value
        return result


class DataQualityProfile(BaseModel):
    """
    Data problems found in a raw record set before cleaning.

    Attributes:
        total_records: Number of raw records
        missing_counts: Per field, rows where the value is absent or blank
        non_positive_quantity: Rows with quantity <= 0 (returns, invalid)
        non_positive_unit_price: Rows with unit_price <= 0
        cancelled_invoices: Rows whose invoice number starts with "C"
    """

    total_records: int = 0
    missing_counts: dict[str, int] = Field(default_factory=dict)
    non_positive_quantity: int = 0
    non_positive_unit_price: int = 0
    cancelled_invoices: int = 0
