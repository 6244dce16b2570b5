"""
Pure aggregation helpers over payment and storage cost rows.

They accept model instances or plain dicts so the same code serves the ORM
and the unit tests.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable


ZERO = Decimal("0")


def field(row: Any, name: str):
    if isinstance(row, dict):
        return row.get(name)
    return getattr(row, name, None)


def to_decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _in_month(moment: datetime, month: int, year: int) -> bool:
    return moment is not None and moment.month == month and moment.year == year


def monthly_revenue(payments: Iterable[Any], month: int, year: int) -> Decimal:
    """Sum of ``amount`` for payments dated in ``month``/``year``."""
    return sum(
        (to_decimal(field(p, "amount")) for p in payments if _in_month(field(p, "payment_date"), month, year)),
        ZERO,
    )


def monthly_storage_costs(costs: Iterable[Any], month: int, year: int) -> Decimal:
    return sum(
        (
            to_decimal(field(c, "cost_amount"))
            for c in costs
            if field(c, "month") == month and field(c, "year") == year
        ),
        ZERO,
    )


def total_margin(payments: Iterable[Any]) -> Decimal:
    return sum((to_decimal(field(p, "margin")) for p in payments), ZERO)
