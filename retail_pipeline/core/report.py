"""
Builds the metrics report from clean records.
"""

import warnings
from typing import Sequence

from retail_pipeline.core import aggregator
from retail_pipeline.core.exceptions import EmptyInputWarning, UndefinedAverageError, UnknownMetricError
from retail_pipeline.core.models import CleanRecord, MetricsReport
from retail_pipeline.observability.logger import get_logger

logger = get_logger(__name__)

METRIC_NAMES = [
    "total_revenue",
    "unique_customers",
    "unique_orders",
    "average_order_value",
    "top_products",
    "revenue_by_country",
    "revenue_by_month",
    "top_customers",
]


def build_report(
    records: Sequence[CleanRecord],
    metrics: Sequence[str] | None = None,
    product_limit: int | None = aggregator.DEFAULT_PRODUCT_LIMIT,
    country_limit: int | None = aggregator.DEFAULT_COUNTRY_LIMIT,
    month_limit: int | None = aggregator.DEFAULT_MONTH_LIMIT,
    customer_limit: int | None = aggregator.DEFAULT_CUSTOMER_LIMIT,
) -> MetricsReport:
    """
    Compute the requested metrics over one clean record set.

    Args:
        records: Clean records
        metrics: Metric names to compute (all when None), see METRIC_NAMES
        product_limit: Size of the top products list
        country_limit: Size of the country list
        month_limit: Size of the month list
        customer_limit: Size of the top customers list

    Returns:
        MetricsReport; an undefined average order value is reported as
        None and listed in undefined_metrics

    Raises:
        UnknownMetricError: If a requested name is not a known metric
    """
    requested = list(metrics) if metrics is not None else list(METRIC_NAMES)
    for name in requested:
        if name not in METRIC_NAMES:
            raise UnknownMetricError(name, METRIC_NAMES)

    if not records:
        warnings.warn("No clean records to aggregate; metrics degrade to zero/empty", EmptyInputWarning)
        logger.warning("No clean records to aggregate")

    calculators = {
        "total_revenue": lambda: aggregator.total_revenue(records),
        "unique_customers": lambda: aggregator.unique_customer_count(records),
        "unique_orders": lambda: aggregator.unique_order_count(records),
        "average_order_value": lambda: aggregator.average_order_value(records),
        "top_products": lambda: aggregator.revenue_by_product(records, product_limit),
        "revenue_by_country": lambda: aggregator.revenue_by_country(records, country_limit),
        "revenue_by_month": lambda: aggregator.revenue_by_month(records, month_limit),
        "top_customers": lambda: aggregator.spending_by_customer(records, customer_limit),
    }

    values = {}
    undefined = []
    for name in requested:
        try:
            values[name] = calculators[name]()
        except UndefinedAverageError:
            logger.warning("Average order value is undefined: no orders")
            undefined.append(name)

    return MetricsReport(requested_metrics=requested, undefined_metrics=undefined, **values)
