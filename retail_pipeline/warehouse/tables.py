"""
DDL and bulk loads for the raw and clean transaction tables.

Column names and types follow the original online retail tables:
the raw table keeps the invoice date as text, the clean table stores
it as a timestamp. Both number their rows in load order (line_no).
"""

from typing import Sequence

from retail_pipeline.core.models import CleanRecord, RawRecord

from .connection import DatabaseConnectionPool

RAW_TABLE = "online_retail_raw"
CLEAN_TABLE = "online_retail_clean"

RAW_TABLE_DDL = """
    CREATE TABLE {table} (
        line_no     bigint GENERATED ALWAYS AS IDENTITY PRIMARY KEY,
        invoiceno   text,
        stockcode   text,
        description text,
        quantity    integer,
        invoicedate text,
        unitprice   numeric(12,2),
        customerid  text,
        country     text
    )
"""

CLEAN_TABLE_DDL = """
    CREATE TABLE {table} (
        line_no     bigint GENERATED ALWAYS AS IDENTITY PRIMARY KEY,
        invoiceno   text,
        stockcode   text,
        description text,
        quantity    integer,
        invoicedate timestamp,
        unitprice   numeric(12,2),
        customerid  text,
        country     text
    )
"""

INSERT_SQL = """
    INSERT INTO {table} (
        invoiceno, stockcode, description, quantity,
        invoicedate, unitprice, customerid, country
    )
    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
"""


def _row(record: RawRecord | CleanRecord) -> tuple:
    return (
        record.invoice_number,
        record.stock_code,
        record.description,
        record.quantity,
        record.invoice_date,
        record.unit_price,
        record.customer_id,
        record.country,
    )


class TableManager:
    """
    Creates and fills the transaction tables.
    """

    def __init__(self, pool: DatabaseConnectionPool):
        """
        Args:
            pool: Database connection pool
        """
        self.pool = pool

    def recreate_table(self, table: str, ddl: str) -> None:
        self.pool.execute_command(f"DROP TABLE IF EXISTS {table}")
        self.pool.execute_command(ddl.format(table=table))

    def table_exists(self, table: str) -> bool:
        result = self.pool.execute_query("SELECT to_regclass(%s) AS oid", (table,))
        return result[0]["oid"] is not None

    def count_rows(self, table: str) -> int:
        result = self.pool.execute_query(f"SELECT COUNT(*) AS count FROM {table}")
        return result[0]["count"]

    def load_raw(self, records: Sequence[RawRecord], table: str = RAW_TABLE) -> int:
        """
        Replace the raw table with the given records.

        Returns:
            Number of rows written
        """
        self.recreate_table(table, RAW_TABLE_DDL)
        if records:
            self.pool.execute_batch(INSERT_SQL.format(table=table), [_row(r) for r in records])
        return len(records)

    def materialize_clean(self, records: Sequence[CleanRecord], table: str = CLEAN_TABLE) -> int:
        """
        Replace the clean table with the given clean records.

        Returns:
            Number of rows written
        """
        self.recreate_table(table, CLEAN_TABLE_DDL)
        if records:
            self.pool.execute_batch(INSERT_SQL.format(table=table), [_row(r) for r in records])
        return len(records)
