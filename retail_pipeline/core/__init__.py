"""
Cleaning and aggregation core of the retail sales pipeline.
"""

from .cleaner import Cleaner, clean
from .exceptions import (
    EmptyInputWarning,
    MalformedDateError,
    RetailPipelineError,
    UndefinedAverageError,
    UnknownMetricError,
)
from .report import METRIC_NAMES, build_report

__all__ = [
    "Cleaner",
    "clean",
    "build_report",
    "METRIC_NAMES",
    "RetailPipelineError",
    "MalformedDateError",
    "UndefinedAverageError",
    "UnknownMetricError",
    "EmptyInputWarning",
]
