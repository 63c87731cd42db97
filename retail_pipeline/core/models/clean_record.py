"""
CleanRecord model representing a transaction line that passed every cleaning rule.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CleanRecord(BaseModel):
    """
    A valid sale line item with a parsed timestamp.

    The cleaning invariants are enforced on construction, so an instance
    can never describe a cancellation, a return, a free item or an
    anonymous customer.

    Attributes:
        invoice_number: Invoice identifier (never "C"-prefixed)
        stock_code: Product code
        description: Product name, None when missing
        quantity: Positive quantity
        invoice_date: Parsed invoice timestamp
        unit_price: Positive price
        customer_id: Non-blank customer identifier
        country: Customer country
    """

    model_config = ConfigDict(frozen=True)

    invoice_number: str
    stock_code: str
    description: str | None = None
    quantity: int = Field(..., gt=0)
    invoice_date: datetime
    unit_price: Decimal = Field(..., gt=0, decimal_places=2)
    customer_id: str
    country: str

    @field_validator("invoice_number")
    @classmethod
    def check_not_cancelled(cls, v: str) -> str:
        """Reject cancellation invoices."""
        if v.startswith("C"):
            raise ValueError(f"invoice_number '{v}' is a cancellation")
        return v

    @field_validator("customer_id")
    @classmethod
    def check_customer_present(cls, v: str) -> str:
        """Reject blank customer ids."""
        if v.strip() == "":
            raise ValueError("customer_id must not be blank")
        return v

    @property
    def line_revenue(self) -> Decimal:
        """Monetary contribution of this line: quantity * unit_price."""
        return self.quantity * self.unit_price
