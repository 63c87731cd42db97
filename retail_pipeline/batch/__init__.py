"""
Batch processing: readers and pipeline orchestration.
"""

from .pipeline import PipelineResult, RetailPipeline
from .readers import CSVReader, FileReader, RawTableReader

__all__ = [
    "RetailPipeline",
    "PipelineResult",
    "CSVReader",
    "FileReader",
    "RawTableReader",
]
