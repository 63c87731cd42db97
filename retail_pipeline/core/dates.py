"""
Invoice date parsing.

A dataset is assumed to use one date format throughout. The parser
either uses an explicit format or detects it from the first value and
then holds every later value to that format.
"""

from datetime import datetime

from retail_pipeline.core.exceptions import MalformedDateError

# Tried in order when no format is configured. The first entry is the
# format of the public online retail dataset ("12/1/2010 8:26").
CANDIDATE_FORMATS = (
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d",
    "%m/%d/%Y",
)


class InvoiceDateParser:
    """
    Parses invoice date text into naive datetimes with a single format.

    strptime with numeric directives only, so results do not depend on
    the locale or the current time.
    """

    def __init__(self, date_format: str | None = None):
        """
        Args:
            date_format: strptime format; detected from the first value when None
        """
        self.date_format = date_format

    def parse(self, value: str, record_index: int | None = None) -> datetime:
        """
        Parse one invoice date.

        Raises:
            MalformedDateError: If the value does not match the dataset format
        """
        text = value.strip() if isinstance(value, str) else value
        if not text:
            raise MalformedDateError(str(value), record_index, self.date_format)

        if self.date_format is None:
            self.date_format = self._detect(text, record_index)

        try:
            return datetime.strptime(text, self.date_format)
        except ValueError as e:
            raise MalformedDateError(value, record_index, self.date_format) from e

    @staticmethod
    def _detect(text: str, record_index: int | None) -> str:
        for candidate in CANDIDATE_FORMATS:
            try:
                datetime.strptime(text, candidate)
            except ValueError:
                continue
            return candidate
        raise MalformedDateError(text, record_index)
