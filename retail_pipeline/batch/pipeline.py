"""
Batch pipeline orchestration.

Coordinates the flow: read -> clean -> aggregate -> (optionally) materialize
"""

import time
from typing import Sequence

from pydantic import BaseModel
from pyspark.sql import SparkSession

from retail_pipeline.config import PipelineSettings
from retail_pipeline.core import Cleaner, build_report
from retail_pipeline.core.models import CleaningSummary, CleanRecord, MetricsReport, RawRecord
from retail_pipeline.core.rules import RuleConfigLoader, RuleEngine, default_cleaning_rules
from retail_pipeline.observability import metrics
from retail_pipeline.observability.logger import get_logger, log_operation
from retail_pipeline.warehouse import DatabaseConnectionPool, TableManager

from .readers import FileReader, RawTableReader

logger = get_logger(__name__)


class PipelineResult(BaseModel):
    """
    Outcome of one pipeline run.

    Attributes:
        report: Requested metrics
        summary: Cleaning counts
        clean_records: The clean record set the metrics were computed on
        materialized_rows: Rows written to the clean table (None when not materialized)
    """

    report: MetricsReport
    summary: CleaningSummary
    clean_records: list[CleanRecord]
    materialized_rows: int | None = None


class RetailPipeline:
    """
    Orchestrates one run over a static dataset.

    Flow:
    1. Read raw records (file via Spark, or the raw table)
    2. Clean them with the fixed rule set and parse invoice dates
    3. Compute the requested metrics
    4. Optionally materialize the clean table
    """

    def __init__(
        self,
        settings: PipelineSettings | None = None,
        spark: SparkSession | None = None,
        pool: DatabaseConnectionPool | None = None,
    ):
        """
        Args:
            settings: Pipeline settings (defaults when None)
            spark: Spark session, needed by process_file
            pool: Open database pool, needed by process_table and materialization
        """
        self.settings = settings or PipelineSettings()
        self.spark = spark
        self.pool = pool

        if self.settings.rules_path:
            rules = RuleConfigLoader(self.settings.rules_path).load_rules()
        else:
            rules = default_cleaning_rules()
        self.cleaner = Cleaner(RuleEngine(rules), date_format=self.settings.date_format)

    def run(
        self,
        records: Sequence[RawRecord],
        metric_names: Sequence[str] | None = None,
        materialize: bool = False,
        source: str = "memory",
    ) -> PipelineResult:
        """
        Clean raw records and compute metrics.

        Args:
            records: Raw records
            metric_names: Metrics to compute (all when None)
            materialize: Write the clean records to the clean table
            source: Input label for logs and metrics

        Returns:
            PipelineResult

        Raises:
            MalformedDateError: If a surviving record has an unparseable date
            UnknownMetricError: If a requested metric does not exist
        """
        start = time.time()
        try:
            with log_operation("Cleaning records", logger=logger, source=source):
                clean_records, summary = self.cleaner.clean(records)

            with log_operation("Computing metrics", logger=logger, source=source):
                report = build_report(
                    clean_records,
                    metrics=metric_names,
                    product_limit=self.settings.product_limit,
                    country_limit=self.settings.country_limit,
                    month_limit=self.settings.month_limit,
                    customer_limit=self.settings.customer_limit,
                )

            materialized_rows = None
            if materialize:
                if self.pool is None:
                    raise RuntimeError("Materializing the clean table requires a database pool")
                with log_operation("Materializing clean table", logger=logger, source=source):
                    materialized_rows = TableManager(self.pool).materialize_clean(clean_records)
        except Exception:
            metrics.record_failure(source)
            raise

        metrics.record_run(
            source=source,
            clean_records=summary.clean_records,
            dropped_records=summary.dropped_records,
            dropped_by_rule=summary.dropped_by_rule,
            duration_seconds=time.time() - start,
            revenue=report.total_revenue,
        )

        return PipelineResult(
            report=report,
            summary=summary,
            clean_records=clean_records,
            materialized_rows=materialized_rows,
        )

    def process_file(
        self,
        file_path: str,
        file_format: str = "csv",
        metric_names: Sequence[str] | None = None,
        materialize: bool = False,
        **read_options
    ) -> PipelineResult:
        """
        Read a raw transaction file with Spark and run the pipeline on it.
        """
        if self.spark is None:
            raise RuntimeError("Reading files requires a Spark session")

        with log_operation("Reading raw file", logger=logger, source=file_path):
            records = FileReader(self.spark).read_records(file_path, file_format=file_format, **read_options)
        logger.info(f"Read {len(records)} raw records from {file_path}")

        return self.run(records, metric_names=metric_names, materialize=materialize, source=file_path)

    def process_table(
        self,
        metric_names: Sequence[str] | None = None,
        materialize: bool = False,
    ) -> PipelineResult:
        """
        Read the raw transaction table and run the pipeline on it.
        """
        if self.pool is None:
            raise RuntimeError("Reading the raw table requires a database pool")

        reader = RawTableReader(self.pool)
        with log_operation("Reading raw table", logger=logger, source=reader.table_name):
            records = reader.read_records()
        logger.info(f"Read {len(records)} raw records from {reader.table_name}")

        return self.run(records, metric_names=metric_names, materialize=materialize, source=reader.table_name)
