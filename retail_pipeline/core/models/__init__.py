"""
Core data models for the retail sales pipeline.

All models use Pydantic for runtime validation and type safety.
"""

from .clean_record import CleanRecord
from .raw_record import COLUMN_MAP, RawRecord
from .report import CleaningSummary, DataQualityProfile, GroupRevenue, MetricsReport
from .validation_result import ValidationResult

__all__ = [
    "COLUMN_MAP",
    "RawRecord",
    "CleanRecord",
    "ValidationResult",
    "GroupRevenue",
    "CleaningSummary",
    "MetricsReport",
    "DataQualityProfile",
]
