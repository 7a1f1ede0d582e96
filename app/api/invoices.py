# app/api/invoices.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncEngine

from app.api.deps import get_engine
from app.db.queries import (
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
)
from app.models.invoices import InvoiceForm, InvoicePages, InvoicesTableRow

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("/", response_model=List[InvoicesTableRow])
async def list_invoices(
    query: str = Query(
        default="",
        description="Case-insensitive search over customer name/email, amount, date and status",
    ),
    page: int = Query(1, ge=1),
    engine: AsyncEngine = Depends(get_engine),
) -> List[InvoicesTableRow]:
    """
    One page (6 rows) of invoices matching the search text, newest first.
    """
    return await fetch_filtered_invoices(engine, query, page)


@router.get("/pages", response_model=InvoicePages)
async def count_invoice_pages(
    query: str = Query(default=""),
    engine: AsyncEngine = Depends(get_engine),
) -> InvoicePages:
    total_pages = await fetch_invoices_pages(engine, query)
    return InvoicePages(total_pages=total_pages)


@router.get("/{invoice_id}", response_model=InvoiceForm)
async def get_invoice(
    invoice_id: str, engine: AsyncEngine = Depends(get_engine)
) -> InvoiceForm:
    """
    Look up a single invoice for editing; amount is in dollars.
    """
    invoice = await fetch_invoice_by_id(engine, invoice_id)

    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")

    return invoice
