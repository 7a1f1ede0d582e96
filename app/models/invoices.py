# app/models/invoices.py

import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, field_serializer


class InvoiceStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class LatestInvoice(BaseModel):
    id: str
    name: str
    email: str
    image_url: str
    amount: str  # formatted, e.g. "$1,234.56"


class InvoicesTableRow(BaseModel):
    id: str
    customer_id: str
    name: str
    email: str
    image_url: str
    date: datetime.date
    amount: int  # cents
    status: InvoiceStatus


class InvoiceForm(BaseModel):
    id: str
    customer_id: str
    amount: Decimal  # dollars
    status: InvoiceStatus

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, amount: Decimal) -> float:
        return float(amount)


class InvoicePages(BaseModel):
    total_pages: int
