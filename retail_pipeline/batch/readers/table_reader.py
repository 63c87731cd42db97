"""
Reader for the raw transaction table in PostgreSQL.
"""

from retail_pipeline.core.models import RawRecord
from retail_pipeline.warehouse.connection import DatabaseConnectionPool
from retail_pipeline.warehouse.tables import RAW_TABLE


class RawTableReader:
    """
    Bulk reads the raw transaction table.
    """

    def __init__(self, pool: DatabaseConnectionPool, table_name: str = RAW_TABLE):
        self.pool = pool
        self.table_name = table_name

    def read_records(self) -> list[RawRecord]:
        """
        Read every row of the raw table as RawRecords, in load order.
        """
        query = f"""
            SELECT invoiceno, stockcode, description, quantity,
                   invoicedate, unitprice, customerid, country
            FROM {self.table_name}
            ORDER BY line_no
        """
        rows = self.pool.execute_query(query)
        return [RawRecord.from_row(row) for row in rows]
