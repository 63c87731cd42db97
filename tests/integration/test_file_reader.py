"""
Integration tests for reading raw transaction files with Spark.
"""

from decimal import Decimal

import pytest

from retail_pipeline.batch import FileReader, RetailPipeline
from retail_pipeline.batch.readers import RAW_SCHEMA


@pytest.mark.integration
class TestFileReader:

    def test_read_csv_with_fixed_schema(self, spark_session, sample_csv_path):
        df = FileReader(spark_session).read(sample_csv_path)

        assert df.schema == RAW_SCHEMA
        assert df.count() == 9

    def test_read_records(self, spark_session, sample_csv_path, sample_raw_records):
        records = FileReader(spark_session).read_records(sample_csv_path)

        assert records == sample_raw_records

    def test_missing_values_become_none(self, spark_session, sample_csv_path):
        records = FileReader(spark_session).read_records(sample_csv_path)

        assert records[4].customer_id is None
        assert records[6].description is None
        assert records[6].unit_price == Decimal("0.00")

    def test_json_round_trip(self, spark_session, sample_csv_path, tmp_path):
        reader = FileReader(spark_session)
        json_path = str(tmp_path / "raw_json")
        reader.read(sample_csv_path).write.json(json_path)

        records = reader.read_records(json_path, file_format="json")

        assert len(records) == 9
        assert {r.invoice_number for r in records} >= {"536365", "C536379"}

    def test_unsupported_format(self, spark_session):
        with pytest.raises(ValueError):
            FileReader(spark_session).read("data.xlsx", file_format="xlsx")


@pytest.mark.integration
class TestPipelineFromFile:

    def test_process_file(self, spark_session, sample_csv_path):
        result = RetailPipeline(spark=spark_session).process_file(sample_csv_path)

        report = result.report
        assert report.total_revenue == Decimal("139.44")
        assert report.unique_customers == 3
        assert report.unique_orders == 4
        assert report.average_order_value == Decimal("34.86")
        assert report.revenue_by_country[0].key == "France"
        assert result.summary.total_records == 9
