"""
Unit tests for the raw table reader and table DDL.
"""

from decimal import Decimal

from retail_pipeline.batch import RawTableReader
from retail_pipeline.warehouse.tables import CLEAN_TABLE_DDL, RAW_TABLE_DDL


class RecordingPool:
    """Stands in for DatabaseConnectionPool, returning canned rows."""

    def __init__(self, rows):
        self.rows = rows
        self.queries = []

    def execute_query(self, query, params=None):
        self.queries.append(query)
        return self.rows


def test_reads_in_load_order():
    pool = RecordingPool([{
        "invoiceno": "536365",
        "stockcode": "85123A",
        "description": None,
        "quantity": 6,
        "invoicedate": "12/1/2010 8:26",
        "unitprice": Decimal("2.55"),
        "customerid": "17850",
        "country": "United Kingdom",
    }])

    [record] = RawTableReader(pool).read_records()

    assert "ORDER BY line_no" in pool.queries[0]
    assert "ctid" not in pool.queries[0]
    assert record.unit_price == Decimal("2.55")
    assert record.description is None


def test_tables_number_rows_in_load_order():
    for ddl in (RAW_TABLE_DDL, CLEAN_TABLE_DDL):
        assert "line_no     bigint GENERATED ALWAYS AS IDENTITY" in ddl
