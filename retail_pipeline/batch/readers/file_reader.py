"""
Generic raw transaction file reader for multiple formats (CSV, JSON, Parquet).
"""

from pyspark.sql import DataFrame, SparkSession

from retail_pipeline.core.models import RawRecord

from .csv_reader import RAW_SCHEMA, CSVReader


class FileReader:
    """
    Reads raw transaction files and turns them into RawRecords.
    """

    SUPPORTED_FORMATS = ("csv", "json", "parquet")

    def __init__(self, spark: SparkSession):
        """
        Initialize file reader.

        Args:
            spark: Active Spark session
        """
        self.spark = spark
        self.csv_reader = CSVReader(spark)

    def read(self, file_path: str, file_format: str = "csv", **options) -> DataFrame:
        """
        Read file into Spark DataFrame.

        Args:
            file_path: Path to file
            file_format: Format (csv, json, parquet)
            **options: CSV options passed to CSVReader.read

        Returns:
            Spark DataFrame

        Raises:
            ValueError: If file format is unsupported
        """
        file_format = file_format.lower()
        if file_format == "csv":
            return self.csv_reader.read(file_path, **options)
        elif file_format == "json":
            return self.spark.read.schema(RAW_SCHEMA).option("mode", "FAILFAST").json(file_path)
        elif file_format == "parquet":
            return self.spark.read.parquet(file_path)
        else:
            raise ValueError(f"Unsupported file format: {file_format}")

    def read_records(self, file_path: str, file_format: str = "csv", **options) -> list[RawRecord]:
        """
        Read a file and collect it to the driver as RawRecords, in file order.
        """
        df = self.read(file_path, file_format=file_format, **options)
        return [RawRecord.from_row(row.asDict()) for row in df.collect()]
