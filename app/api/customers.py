# app/api/customers.py

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncEngine

from app.api.deps import get_engine
from app.db.queries import fetch_customers, fetch_filtered_customers
from app.models.customers import CustomerField, CustomersTableRow

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("/", response_model=List[CustomerField])
async def list_customers(
    engine: AsyncEngine = Depends(get_engine),
) -> List[CustomerField]:
    """
    Return all customers (id and name), for selection lists.
    """
    return await fetch_customers(engine)


@router.get("/table", response_model=List[CustomersTableRow])
async def customers_table(
    query: str = Query(default="", description="Case-insensitive search over name and email"),
    engine: AsyncEngine = Depends(get_engine),
) -> List[CustomersTableRow]:
    """
    Customers with their invoice count and pending/paid totals.
    """
    return await fetch_filtered_customers(engine, query)
