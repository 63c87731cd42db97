"""
Command-line interface for the retail sales report.

Usage:
    retail-report report --input <file_path> [options]
    retail-report report --from-db [options]
    retail-report profile --input <file_path>
    retail-report load --input <file_path>
"""

import argparse
import json
import sys
from pathlib import Path

from pyspark.sql import SparkSession

from retail_pipeline.batch import FileReader, RetailPipeline
from retail_pipeline.config import load_settings
from retail_pipeline.core import METRIC_NAMES
from retail_pipeline.core.profiler import check_date_conversion, profile_raw
from retail_pipeline.observability.logger import configure_logging, get_logger
from retail_pipeline.warehouse import DatabaseConnectionPool, TableManager

logger = get_logger(__name__)


def create_spark_session(app_name: str = "RetailReport") -> SparkSession:
    """
    Create a local Spark session for reading raw files.
    """
    spark = SparkSession.builder \
        .appName(app_name) \
        .master("local[*]") \
        .config("spark.ui.enabled", "false") \
        .getOrCreate()
    spark.sparkContext.setLogLevel("WARN")
    return spark


def create_pool(args) -> DatabaseConnectionPool:
    pool = DatabaseConnectionPool(
        host=args.db_host,
        port=args.db_port,
        database=args.db_name,
        user=args.db_user,
        password=args.db_password,
    )
    pool.open()
    return pool


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def _check_input(args) -> Path:
    input_path = Path(args.input)
    if not input_path.exists():
        logger.error(f"Input file not found: {args.input}")
        sys.exit(1)
    return input_path


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, default=str))


def report_command(args, settings) -> None:
    """
    Run the pipeline and print the metrics report as JSON.
    """
    if not args.from_db and not args.input:
        logger.error("Either --input or --from-db is required")
        sys.exit(1)

    spark = None
    pool = None
    try:
        # Rule set problems surface before any pool or Spark session starts
        pipeline = RetailPipeline(settings=settings)

        if args.from_db or args.materialize:
            pipeline.pool = pool = create_pool(args)

        if args.input:
            input_path = _check_input(args)
            pipeline.spark = spark = create_spark_session()
            result = pipeline.process_file(
                str(input_path),
                file_format=args.format,
                metric_names=args.metrics,
                materialize=args.materialize,
            )
        else:
            result = pipeline.process_table(metric_names=args.metrics, materialize=args.materialize)

        _print_json({
            "metrics": result.report.to_dict(),
            "undefined_metrics": result.report.undefined_metrics,
            "cleaning": result.summary.model_dump(),
        })

    except Exception as e:
        logger.error(f"Report failed: {e}", exc_info=True)
        sys.exit(1)
    finally:
        if pool is not None:
            pool.close()
        if spark is not None:
            spark.stop()


def profile_command(args, settings) -> None:
    """
    Print the data quality profile and a date conversion preview.
    """
    input_path = _check_input(args)
    spark = None
    try:
        spark = create_spark_session()
        records = FileReader(spark).read_records(str(input_path), file_format=args.format)
        profile = profile_raw(records)
        preview = check_date_conversion(records, sample_size=args.sample_size, date_format=settings.date_format)
        _print_json({
            "profile": profile.model_dump(),
            "date_conversion": [{"raw": raw, "parsed": parsed.isoformat()} for raw, parsed in preview],
        })
    except Exception as e:
        logger.error(f"Profile failed: {e}", exc_info=True)
        sys.exit(1)
    finally:
        if spark is not None:
            spark.stop()


def load_command(args, settings) -> None:
    """
    Load a raw file into the raw transaction table.
    """
    input_path = _check_input(args)
    spark = None
    pool = None
    try:
        pool = create_pool(args)
        spark = create_spark_session()
        records = FileReader(spark).read_records(str(input_path), file_format=args.format)
        count = TableManager(pool).load_raw(records)
        logger.info(f"Loaded {count} raw records into the raw table")
    except Exception as e:
        logger.error(f"Load failed: {e}", exc_info=True)
        sys.exit(1)
    finally:
        if pool is not None:
            pool.close()
        if spark is not None:
            spark.stop()


def _add_db_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--db-host", default=None, help="Database host (default: DB_HOST or localhost)")
    parser.add_argument("--db-port", type=int, default=None, help="Database port (default: DB_PORT or 5432)")
    parser.add_argument("--db-name", default=None, help="Database name (default: DB_NAME or online_retail)")
    parser.add_argument("--db-user", default=None, help="Database user (default: DB_USER or retail)")
    parser.add_argument("--db-password", default=None, help="Database password (default: DB_PASSWORD)")


def _add_input_arguments(parser: argparse.ArgumentParser, required: bool) -> None:
    parser.add_argument("--input", required=required, help="Path to raw transaction file")
    parser.add_argument(
        "--format",
        default="csv",
        choices=list(FileReader.SUPPORTED_FORMATS),
        help="Input file format (default: csv)"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Online retail sales report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Full report from a CSV export
  retail-report report --input data/online_retail.csv

  # Only revenue and average order value
  retail-report report --input data/online_retail.csv --metrics total_revenue average_order_value

  # Report from the raw table, saving the clean table
  retail-report report --from-db --materialize

  # Data quality profile before cleaning
  retail-report profile --input data/online_retail.csv
        """
    )
    parser.add_argument("--config", default=None, help="Pipeline settings YAML file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    report_parser = subparsers.add_parser("report", help="Compute the sales metrics")
    _add_input_arguments(report_parser, required=False)
    report_parser.add_argument("--from-db", action="store_true", help="Read the raw table instead of a file")
    report_parser.add_argument(
        "--metrics",
        nargs="+",
        choices=METRIC_NAMES,
        default=None,
        help="Metrics to compute (default: all)"
    )
    report_parser.add_argument("--materialize", action="store_true", help="Write the clean table")
    _add_db_arguments(report_parser)

    profile_parser = subparsers.add_parser("profile", help="Profile data quality before cleaning")
    _add_input_arguments(profile_parser, required=True)
    profile_parser.add_argument("--sample-size", type=_positive_int, default=20, help="Dates to preview (default: 20)")

    load_parser = subparsers.add_parser("load", help="Load a raw file into the raw table")
    _add_input_arguments(load_parser, required=True)
    _add_db_arguments(load_parser)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    settings = load_settings(args.config)
    configure_logging(level=settings.log_level, format_type=settings.log_format)

    commands = {
        "report": report_command,
        "profile": profile_command,
        "load": load_command,
    }
    commands[args.command](args, settings)


if __name__ == "__main__":
    main()
