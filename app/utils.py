# app/utils.py

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENTS = Decimal("0.01")


def format_currency(amount: Union[int, str, Decimal]) -> str:
    """
    Formats an amount in cents as a US dollar string, e.g. 123456 -> "$1,234.56".

    Aggregates come back as int, Decimal or numeric text depending on the
    driver, so all three are accepted.
    """
    dollars = (Decimal(amount) / 100).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"
