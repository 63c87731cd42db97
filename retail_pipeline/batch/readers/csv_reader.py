"""
CSV reader using Spark for batch ingestion of raw transactions.
"""

from pyspark.sql import DataFrame, SparkSession
from pyspark.sql.types import (
    DecimalType,
    IntegerType,
    StringType,
    StructField,
    StructType,
)

# Column layout of the online retail export; the schema is fixed, never inferred
RAW_SCHEMA = StructType([
    StructField("InvoiceNo", StringType(), True),
    StructField("StockCode", StringType(), True),
    StructField("Description", StringType(), True),
    StructField("Quantity", IntegerType(), True),
    StructField("InvoiceDate", StringType(), True),
    StructField("UnitPrice", DecimalType(12, 2), True),
    StructField("CustomerID", StringType(), True),
    StructField("Country", StringType(), True),
])


class CSVReader:
    """
    Reads raw transaction CSV files with Spark using the fixed raw schema.
    """

    def __init__(self, spark: SparkSession):
        """
        Initialize CSV reader.

        Args:
            spark: Active Spark session
        """
        self.spark = spark

    def read(
        self,
        file_path: str,
        schema: StructType = RAW_SCHEMA,
        header: bool = True,
        delimiter: str = ",",
        encoding: str = "UTF-8",
    ) -> DataFrame:
        """
        Read CSV file into Spark DataFrame.

        Malformed rows fail the read instead of being silently nulled.

        Args:
            file_path: Path to CSV file
            schema: Column schema (default: the raw transaction schema)
            header: Whether CSV has header row
            delimiter: Field delimiter
            encoding: File encoding (the public dataset is ISO-8859-1)

        Returns:
            Spark DataFrame
        """
        return self.spark.read \
            .schema(schema) \
            .option("header", str(header).lower()) \
            .option("delimiter", delimiter) \
            .option("encoding", encoding) \
            .option("mode", "FAILFAST") \
            .csv(file_path)
