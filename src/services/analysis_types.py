from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field

class LineItem(BaseModel):
    description: str | None = None
    quantity: Decimal | None = None
    unit_price: Decimal | None = None
    total_price: Decimal | None = None

    def has_content(self) -> bool:
        """True when at least one of description/quantity/unit price/total is present"""
        return bool(self.description and self.description.strip()) or any(
            v is not None for v in (self.quantity, self.unit_price, self.total_price)
        )

class AnalysisResult(BaseModel):
    vendor_name: str | None = None
    customer_name: str | None = None
    invoice_number: str | None = None
    invoice_date: datetime | None = None  # Always UTC
    total_amount: Decimal | None = None
    currency_code: str | None = None
    notes: str = ""  # Full recognized text
    items: list[LineItem] = Field(default_factory=list)
    raw_fields: dict[str, str] = Field(default_factory=dict)  # Field name -> recognized text
