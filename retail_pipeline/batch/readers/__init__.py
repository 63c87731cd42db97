"""
Raw transaction readers.
"""

from .csv_reader import RAW_SCHEMA, CSVReader
from .file_reader import FileReader
from .table_reader import RawTableReader

__all__ = [
    "RAW_SCHEMA",
    "CSVReader",
    "FileReader",
    "RawTableReader",
]
