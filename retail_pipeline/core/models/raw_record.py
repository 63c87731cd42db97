"""
RawRecord model representing one untrusted transaction line item.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Source column name (lower-cased) -> model field
COLUMN_MAP = {
    "invoiceno": "invoice_number",
    "stockcode": "stock_code",
    "description": "description",
    "quantity": "quantity",
    "invoicedate": "invoice_date",
    "unitprice": "unit_price",
    "customerid": "customer_id",
    "country": "country",
}


class RawRecord(BaseModel):
    """
    A single transaction line item as imported (immutable, untrusted).

    No business invariant is enforced here: cancellations, returns,
    zero prices and missing customers are all representable.

    Attributes:
        invoice_number: Invoice identifier, "C" prefix marks a cancellation
        stock_code: Product code (may contain letters)
        description: Product name, may be missing
        quantity: Signed quantity, negative for returns
        invoice_date: Date as free-form text
        unit_price: Signed price with two fractional digits
        customer_id: Customer identifier, may be missing or blank
        country: Customer country
    """

    model_config = ConfigDict(frozen=True)

    invoice_number: str
    stock_code: str
    description: str | None = None
    quantity: int
    invoice_date: str
    unit_price: Decimal = Field(..., decimal_places=2)
    customer_id: str | None = None
    country: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "RawRecord":
        """
        Build a RawRecord from a tabular row keyed by source column names.

        Keys are matched case-insensitively, so both the CSV header
        ("InvoiceNo") and PostgreSQL column names ("invoiceno") work.
        Snake-case field names are accepted as well.
        """
        values: dict[str, Any] = {}
        for key, value in row.items():
            normalized = key.lower()
            field_name = COLUMN_MAP.get(normalized, normalized)
            if field_name in cls.model_fields:
                values[field_name] = value

        # Spark and psycopg hand back non-str ids (e.g. 17850.0) for some sources
        for text_field in ("invoice_number", "stock_code", "customer_id"):
            value = values.get(text_field)
            if value is not None and not isinstance(value, str):
                values[text_field] = str(value)

        return cls(**values)
