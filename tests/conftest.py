# pylint: disable=redefined-outer-name

from collections.abc import AsyncIterator, Awaitable, Callable
from datetime import date
from pathlib import Path

import httpx
import pytest
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncEngine

from app.api.deps import get_engine
from app.config import Settings
from app.db.engine import create_tables, with_async_engine
from app.db.schema import customers, invoices, revenue, users
from app.main import app

CUSTOMERS = [
    {
        "id": "3958dc9e-712f-4377-85e9-fec4b6a6442a",
        "name": "Delba de Oliveira",
        "email": "delba@oliveira.com",
        "image_url": "/customers/delba-de-oliveira.png",
    },
    {
        "id": "3958dc9e-742f-4377-85e9-fec4b6a6442a",
        "name": "Lee Robinson",
        "email": "lee@robinson.com",
        "image_url": "/customers/lee-robinson.png",
    },
    {
        "id": "3958dc9e-737f-4377-85e9-fec4b6a6442a",
        "name": "Hector Simpson",
        "email": "hector@simpson.com",
        "image_url": "/customers/hector-simpson.png",
    },
    {
        # no invoices
        "id": "50ca3e18-62cd-11ee-8c99-0242ac120002",
        "name": "Steven Tey",
        "email": "steven@tey.com",
        "image_url": "/customers/steven-tey.png",
    },
]

DELBA, LEE, HECTOR, STEVEN = (c["id"] for c in CUSTOMERS)

INVOICES = [
    {"id": "inv-01", "customer_id": DELBA, "amount": 15795, "status": "pending", "date": date(2022, 12, 6)},
    {"id": "inv-02", "customer_id": LEE, "amount": 20348, "status": "pending", "date": date(2022, 11, 14)},
    {"id": "inv-03", "customer_id": HECTOR, "amount": 3040, "status": "paid", "date": date(2022, 10, 29)},
    {"id": "inv-04", "customer_id": DELBA, "amount": 44800, "status": "paid", "date": date(2023, 9, 10)},
    {"id": "inv-05", "customer_id": LEE, "amount": 34577, "status": "pending", "date": date(2023, 8, 5)},
    {"id": "inv-06", "customer_id": HECTOR, "amount": 54246, "status": "pending", "date": date(2023, 7, 16)},
    {"id": "inv-07", "customer_id": DELBA, "amount": 666, "status": "pending", "date": date(2023, 6, 27)},
    {"id": "inv-08", "customer_id": LEE, "amount": 32545, "status": "paid", "date": date(2023, 6, 9)},
    {"id": "inv-09", "customer_id": HECTOR, "amount": 1250, "status": "paid", "date": date(2023, 6, 17)},
    {"id": "inv-10", "customer_id": DELBA, "amount": 8546, "status": "paid", "date": date(2023, 6, 7)},
    {"id": "inv-11", "customer_id": LEE, "amount": 500, "status": "paid", "date": date(2023, 8, 19)},
    {"id": "inv-12", "customer_id": HECTOR, "amount": 8945, "status": "paid", "date": date(2023, 6, 3)},
    {"id": "inv-13", "customer_id": DELBA, "amount": 1000, "status": "paid", "date": date(2022, 6, 5)},
]

REVENUE = [
    {"month": "Jan", "revenue": 2000},
    {"month": "Feb", "revenue": 1800},
    {"month": "Mar", "revenue": 2200},
]

USERS = [
    {
        "id": "410544b2-4001-4271-9855-fec4b6a6442a",
        "name": "User",
        "email": "user@nextmail.com",
        "password": "$2b$10$abcdefghijklmnopqrstuu2v1uXk0jvJQ0Ckb3uJ4w5d6e7f8g9h0",
    },
]


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite'}")


@pytest.fixture
async def empty_engine(settings: Settings) -> AsyncIterator[AsyncEngine]:
    """Engine on a database without any tables"""
    async with with_async_engine(settings) as engine:
        yield engine


@pytest.fixture
async def engine(empty_engine: AsyncEngine) -> AsyncEngine:
    """Engine on a database with the schema created but no rows"""
    await create_tables(empty_engine)
    return empty_engine


@pytest.fixture
def insert_rows(engine: AsyncEngine) -> Callable[..., Awaitable[None]]:
    async def _(table, rows: list[dict]) -> None:
        async with engine.begin() as conn:
            await conn.execute(insert(table), rows)

    return _


@pytest.fixture
async def seeded_engine(
    engine: AsyncEngine, insert_rows: Callable[..., Awaitable[None]]
) -> AsyncEngine:
    await insert_rows(customers, CUSTOMERS)
    await insert_rows(invoices, INVOICES)
    await insert_rows(revenue, REVENUE)
    await insert_rows(users, USERS)
    return engine


@pytest.fixture
async def client(seeded_engine: AsyncEngine) -> AsyncIterator[httpx.AsyncClient]:
    app.dependency_overrides[get_engine] = lambda: seeded_engine
    async with httpx.AsyncClient(
        base_url="http://invoices.testserver.io",
        transport=httpx.ASGITransport(app=app),
    ) as acli:
        try:
            yield acli
        finally:
            app.dependency_overrides.clear()
