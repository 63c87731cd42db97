"""
Error taxonomy for the retail sales pipeline.

Records that fail a cleaning rule are never errors; they are excluded.
Only structural problems surface here.
"""


class RetailPipelineError(Exception):
    """Base class for pipeline errors."""


class MalformedDateError(RetailPipelineError):
    """Raised when a surviving record's invoice date cannot be parsed."""

    def __init__(self, value: str, record_index: int | None = None, date_format: str | None = None):
        self.value = value
        self.record_index = record_index
        self.date_format = date_format

        location = f" (record {record_index})" if record_index is not None else ""
        expected = f", expected format '{date_format}'" if date_format else ""
        super().__init__(f"Cannot parse invoice date '{value}'{location}{expected}")


class UndefinedAverageError(RetailPipelineError):
    """Raised when average order value is requested with zero orders."""

    def __init__(self, message: str = "Average order value is undefined: no orders"):
        super().__init__(message)


class UnknownMetricError(RetailPipelineError, ValueError):
    """Raised when a caller requests a metric outside the fixed question set."""

    def __init__(self, metric_name: str, known: list[str]):
        self.metric_name = metric_name
        super().__init__(f"Unknown metric '{metric_name}'. Known metrics: {', '.join(known)}")


class EmptyInputWarning(UserWarning):
    """Issued when the pipeline has no records to aggregate."""
