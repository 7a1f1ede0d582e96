# app/api/dashboard.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncEngine

from app.api.deps import get_engine
from app.db.queries import fetch_card_data, fetch_latest_invoices, fetch_revenue
from app.models.dashboard import CardData, Revenue
from app.models.invoices import LatestInvoice

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/revenue", response_model=List[Revenue])
async def get_revenue(engine: AsyncEngine = Depends(get_engine)) -> List[Revenue]:
    return await fetch_revenue(engine)


@router.get("/latest-invoices", response_model=List[LatestInvoice])
async def get_latest_invoices(
    engine: AsyncEngine = Depends(get_engine),
) -> List[LatestInvoice]:
    """
    The five most recent invoices with their customer.
    """
    return await fetch_latest_invoices(engine)


@router.get("/cards", response_model=CardData)
async def get_card_data(engine: AsyncEngine = Depends(get_engine)) -> CardData:
    return await fetch_card_data(engine)
