# app/db/queries.py
"""
Read queries backing the invoices dashboard.

Every function takes the engine explicitly, runs its statement(s), shapes the
rows into the records in ``app.models`` and, on any failure, logs the cause
and raises ``DataFetchError`` with a fixed message.
"""

import asyncio
import contextlib
import logging
import math
from decimal import Decimal
from typing import Iterator, List, Optional

from sqlalchemy import String, case, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncEngine

from app.db.errors import DataFetchError
from app.db.schema import customers, invoices, revenue, users
from app.models.customers import CustomerField, CustomersTableRow
from app.models.dashboard import CardData, Revenue
from app.models.invoices import (
    InvoiceForm,
    InvoicesTableRow,
    InvoiceStatus,
    LatestInvoice,
)
from app.models.users import User
from app.utils import format_currency

logger = logging.getLogger(__name__)

ITEMS_PER_PAGE = 6
LATEST_INVOICES_LIMIT = 5


@contextlib.contextmanager
def _fetch_boundary(message: str) -> Iterator[None]:
    try:
        yield
    except Exception as err:
        logger.exception("Database Error: %s", message)
        raise DataFetchError(message) from err


def _invoice_search(query: str):
    # %/_ in the search text are matched literally
    return or_(
        customers.c.name.icontains(query, autoescape=True),
        customers.c.email.icontains(query, autoescape=True),
        cast(invoices.c.amount, String).icontains(query, autoescape=True),
        cast(invoices.c.date, String).icontains(query, autoescape=True),
        invoices.c.status.icontains(query, autoescape=True),
    )


def _sum_by_status(status: InvoiceStatus):
    return func.coalesce(
        func.sum(
            case((invoices.c.status == status.value, invoices.c.amount), else_=0)
        ),
        0,
    )


async def fetch_revenue(engine: AsyncEngine) -> List[Revenue]:
    with _fetch_boundary("Failed to fetch revenue data."):
        async with engine.connect() as conn:
            result = await conn.execute(select(revenue.c.month, revenue.c.revenue))
            rows = result.mappings().all()

        return [Revenue(**row) for row in rows]


async def fetch_latest_invoices(engine: AsyncEngine) -> List[LatestInvoice]:
    with _fetch_boundary("Failed to fetch the latest invoices."):
        stmt = (
            select(
                invoices.c.amount,
                customers.c.name,
                customers.c.image_url,
                customers.c.email,
                invoices.c.id,
            )
            .select_from(invoices.join(customers))
            .order_by(invoices.c.date.desc())
            .limit(LATEST_INVOICES_LIMIT)
        )

        async with engine.connect() as conn:
            rows = (await conn.execute(stmt)).mappings().all()

        return [
            LatestInvoice(
                id=row["id"],
                name=row["name"],
                email=row["email"],
                image_url=row["image_url"],
                amount=format_currency(row["amount"]),
            )
            for row in rows
        ]


async def _scalar_row(engine: AsyncEngine, stmt):
    # one connection per statement so the card queries can run side by side
    async with engine.connect() as conn:
        return (await conn.execute(stmt)).one()


async def fetch_card_data(engine: AsyncEngine) -> CardData:
    """
    Dashboard card totals.

    The three aggregates are independent statements dispatched together; if
    any of them fails the others are cancelled and the whole call fails.
    """
    with _fetch_boundary("Failed to fetch card data."):
        invoice_count_stmt = select(func.count()).select_from(invoices)
        customer_count_stmt = select(func.count()).select_from(customers)
        invoice_status_stmt = select(
            _sum_by_status(InvoiceStatus.PAID).label("paid"),
            _sum_by_status(InvoiceStatus.PENDING).label("pending"),
        )

        async with asyncio.TaskGroup() as tg:
            invoice_count_task = tg.create_task(_scalar_row(engine, invoice_count_stmt))
            customer_count_task = tg.create_task(_scalar_row(engine, customer_count_stmt))
            invoice_status_task = tg.create_task(_scalar_row(engine, invoice_status_stmt))

        status_row = invoice_status_task.result()

        return CardData(
            number_of_invoices=int(invoice_count_task.result()[0] or 0),
            number_of_customers=int(customer_count_task.result()[0] or 0),
            total_paid_invoices=format_currency(status_row.paid or 0),
            total_pending_invoices=format_currency(status_row.pending or 0),
        )


async def fetch_filtered_invoices(
    engine: AsyncEngine, query: str, current_page: int
) -> List[InvoicesTableRow]:
    offset = (current_page - 1) * ITEMS_PER_PAGE

    with _fetch_boundary("Failed to fetch invoices."):
        stmt = (
            select(
                invoices.c.id,
                invoices.c.customer_id,
                invoices.c.amount,
                invoices.c.date,
                invoices.c.status,
                customers.c.name,
                customers.c.email,
                customers.c.image_url,
            )
            .select_from(invoices.join(customers))
            .where(_invoice_search(query))
            .order_by(invoices.c.date.desc())
            .limit(ITEMS_PER_PAGE)
            .offset(offset)
        )

        async with engine.connect() as conn:
            rows = (await conn.execute(stmt)).mappings().all()

        return [InvoicesTableRow(**row) for row in rows]


async def fetch_invoices_pages(engine: AsyncEngine, query: str) -> int:
    with _fetch_boundary("Failed to fetch total number of invoices."):
        stmt = (
            select(func.count())
            .select_from(invoices.join(customers))
            .where(_invoice_search(query))
        )

        async with engine.connect() as conn:
            total = (await conn.execute(stmt)).scalar_one()

        return math.ceil(int(total) / ITEMS_PER_PAGE)


async def fetch_invoice_by_id(
    engine: AsyncEngine, invoice_id: str
) -> Optional[InvoiceForm]:
    """
    Invoice fields for the edit form, amount converted from cents to dollars.

    Returns None when no invoice has that id.
    """
    with _fetch_boundary("Failed to fetch invoice."):
        stmt = select(
            invoices.c.id,
            invoices.c.customer_id,
            invoices.c.amount,
            invoices.c.status,
        ).where(invoices.c.id == invoice_id)

        async with engine.connect() as conn:
            row = (await conn.execute(stmt)).mappings().first()

        if row is None:
            return None

        return InvoiceForm(
            id=row["id"],
            customer_id=row["customer_id"],
            amount=Decimal(row["amount"]) / 100,
            status=row["status"],
        )


async def fetch_customers(engine: AsyncEngine) -> List[CustomerField]:
    with _fetch_boundary("Failed to fetch all customers."):
        stmt = select(customers.c.id, customers.c.name).order_by(customers.c.name.asc())

        async with engine.connect() as conn:
            rows = (await conn.execute(stmt)).mappings().all()

        return [CustomerField(**row) for row in rows]


async def fetch_filtered_customers(
    engine: AsyncEngine, query: str
) -> List[CustomersTableRow]:
    with _fetch_boundary("Failed to fetch customer table."):
        stmt = (
            select(
                customers.c.id,
                customers.c.name,
                customers.c.email,
                customers.c.image_url,
                func.count(invoices.c.id).label("total_invoices"),
                _sum_by_status(InvoiceStatus.PENDING).label("total_pending"),
                _sum_by_status(InvoiceStatus.PAID).label("total_paid"),
            )
            .select_from(customers.outerjoin(invoices))
            .where(
                or_(
                    customers.c.name.icontains(query, autoescape=True),
                    customers.c.email.icontains(query, autoescape=True),
                )
            )
            .group_by(
                customers.c.id,
                customers.c.name,
                customers.c.email,
                customers.c.image_url,
            )
            .order_by(customers.c.name.asc())
        )

        async with engine.connect() as conn:
            rows = (await conn.execute(stmt)).mappings().all()

        return [
            CustomersTableRow(
                id=row["id"],
                name=row["name"],
                email=row["email"],
                image_url=row["image_url"],
                total_invoices=row["total_invoices"],
                total_pending=format_currency(row["total_pending"]),
                total_paid=format_currency(row["total_paid"]),
            )
            for row in rows
        ]


async def get_user(engine: AsyncEngine, email: str) -> Optional[User]:
    """
    Looks up a user by email for the sign-in flow; None when unknown.
    """
    with _fetch_boundary("Failed to fetch user."):
        stmt = select(
            users.c.id, users.c.name, users.c.email, users.c.password
        ).where(users.c.email == email)

        async with engine.connect() as conn:
            row = (await conn.execute(stmt)).mappings().first()

        return User(**row) if row is not None else None
