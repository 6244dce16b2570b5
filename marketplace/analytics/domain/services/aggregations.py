"""
Admin dashboard aggregations.

Each ``calculate_*`` function is a single in-memory pass over rows that were
fetched in full. Rows are plain dicts as returned by ``QuerySet.values()``:

* orders: ``id``, ``product_id``, ``client_id``, ``seller_id``, ``quantity``,
  ``status``, ``created_at``
* products: ``id``, ``title``
* sellers: ``id``, ``name``
* payments: ``order_id``, ``amount``, ``cost``, ``payment_date``
* storage costs: ``cost_amount``
* user roles: ``user_id``, ``role``

Money stays ``Decimal``; percentages are floats rounded to two places.
"""

from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from django.utils import timezone

from marketplace.finance.domain.services.calculations import ZERO, to_decimal
from marketplace.ordering.domain.models.order import Order
from utils.rbac import ROLE_CLIENT


Row = Dict[str, Any]


def period_starts(now: datetime) -> Dict[str, datetime]:
    """Start of today, of this month and of this year in the current time zone."""
    if timezone.is_aware(now):
        now = timezone.localtime(now)
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return {
        "day": today,
        "month": today.replace(day=1),
        "year": today.replace(month=1, day=1),
    }


def _since(rows: List[Row], key: str, start: datetime) -> List[Row]:
    return [row for row in rows if row.get(key) is not None and row[key] >= start]


def _sum_amounts(payments: List[Row]) -> Decimal:
    return sum((to_decimal(p.get("amount")) for p in payments), ZERO)


def _percent(part, whole) -> float:
    if not whole:
        return 0.0
    return round(float(part) / float(whole) * 100, 2)


def _payments_by_order(payments: List[Row]) -> Dict[Any, Decimal]:
    totals: Dict[Any, Decimal] = defaultdict(lambda: ZERO)
    for payment in payments:
        totals[payment["order_id"]] += to_decimal(payment.get("amount"))
    return totals


def default_client_name(client_id) -> str:
    return f"Client {str(client_id)[:8]}"


def calculate_order_analytics(
    orders: List[Row],
    products: List[Row],
    payments: List[Row],
    now: datetime,
    client_names: Optional[Mapping[Any, str]] = None,
) -> Row:
    client_names = client_names or {}
    starts = period_starts(now)
    paid = _payments_by_order(payments)

    status_breakdown: Dict[str, int] = {}
    product_stats: Dict[Any, Row] = defaultdict(lambda: {"order_count": 0, "total_value": ZERO})
    client_stats: Dict[Any, Row] = {}

    for order in orders:
        status_breakdown[order["status"]] = status_breakdown.get(order["status"], 0) + 1

        product_stats[order["product_id"]]["order_count"] += 1
        product_stats[order["product_id"]]["total_value"] += paid.get(order["id"], ZERO)

        stats = client_stats.setdefault(order["client_id"], {"order_count": 0, "total_value": ZERO})
        stats["order_count"] += 1
        stats["total_value"] += paid.get(order["id"], ZERO)

    orders_per_product = []
    for product in products:
        stats = product_stats.get(product["id"], {"order_count": 0, "total_value": ZERO})
        orders_per_product.append(
            {
                "product_id": product["id"],
                "product_title": product["title"],
                "order_count": stats["order_count"],
                "total_value": stats["total_value"],
            }
        )

    orders_per_client = [
        {
            "client_id": client_id,
            "client_name": client_names.get(client_id) or default_client_name(client_id),
            "order_count": stats["order_count"],
            "total_value": stats["total_value"],
        }
        for client_id, stats in client_stats.items()
    ]

    return {
        "total_orders": len(orders),
        "daily_orders": len(_since(orders, "created_at", starts["day"])),
        "monthly_orders": len(_since(orders, "created_at", starts["month"])),
        "yearly_orders": len(_since(orders, "created_at", starts["year"])),
        "status_breakdown": status_breakdown,
        "total_order_value": _sum_amounts(payments),
        "orders_per_product": orders_per_product,
        "orders_per_client": orders_per_client,
    }


def calculate_product_analytics(products: List[Row], orders: List[Row], payments: List[Row]) -> Row:
    paid = _payments_by_order(payments)
    sold: Dict[Any, int] = defaultdict(int)
    revenue: Dict[Any, Decimal] = defaultdict(lambda: ZERO)
    for order in orders:
        sold[order["product_id"]] += order["quantity"]
        revenue[order["product_id"]] += paid.get(order["id"], ZERO)

    best_selling = [
        {
            "product_id": product["id"],
            "title": product["title"],
            "total_sold": sold.get(product["id"], 0),
            "revenue": revenue.get(product["id"], ZERO),
        }
        for product in products
    ]
    # Stable sort keeps catalog order among ties
    best_selling.sort(key=lambda row: row["total_sold"], reverse=True)

    total_value_sold = _sum_amounts(payments)
    average = total_value_sold / len(payments) if payments else ZERO

    return {
        "total_products": len(products),
        "best_selling_products": best_selling,
        "total_value_sold": total_value_sold,
        "average_order_value": average.quantize(Decimal("0.01")),
    }


def calculate_seller_analytics(sellers: List[Row], orders: List[Row], payments: List[Row]) -> Row:
    paid = _payments_by_order(payments)
    counts: Dict[Any, int] = defaultdict(int)
    validated: Dict[Any, int] = defaultdict(int)
    revenue: Dict[Any, Decimal] = defaultdict(lambda: ZERO)
    for order in orders:
        counts[order["seller_id"]] += 1
        if order["status"] in (Order.CONFIRMED, Order.COMPLETED):
            validated[order["seller_id"]] += 1
        revenue[order["seller_id"]] += paid.get(order["id"], ZERO)

    orders_per_seller = [
        {
            "seller_id": seller["id"],
            "seller_name": seller["name"],
            "order_count": counts.get(seller["id"], 0),
            "validation_rate": _percent(validated.get(seller["id"], 0), counts.get(seller["id"], 0)),
        }
        for seller in sellers
    ]

    top_performing = sorted(
        (
            {
                "seller_id": row["seller_id"],
                "seller_name": row["seller_name"],
                "revenue": revenue.get(row["seller_id"], ZERO),
                "order_count": row["order_count"],
            }
            for row in orders_per_seller
        ),
        key=lambda row: row["order_count"],
        reverse=True,
    )

    return {
        "total_sellers": len(sellers),
        "orders_per_seller": orders_per_seller,
        "top_performing_sellers": top_performing,
    }


def calculate_financial_analytics(payments: List[Row], storage_costs: List[Row], now: datetime) -> Row:
    starts = period_starts(now)
    total_revenue = _sum_amounts(payments)
    total_costs = sum((to_decimal(p.get("cost")) for p in payments), ZERO)
    total_storage = sum((to_decimal(c.get("cost_amount")) for c in storage_costs), ZERO)

    return {
        "total_revenue": total_revenue,
        "daily_revenue": _sum_amounts(_since(payments, "payment_date", starts["day"])),
        "monthly_revenue": _sum_amounts(_since(payments, "payment_date", starts["month"])),
        "yearly_revenue": _sum_amounts(_since(payments, "payment_date", starts["year"])),
        "total_costs": total_costs,
        "profit_margin": _percent(total_revenue - total_costs, total_revenue),
        "storage_costs": total_storage,
        "net_profit": total_revenue - total_costs - total_storage,
    }


def calculate_client_analytics(
    orders: List[Row],
    user_roles: List[Row],
    payments: List[Row],
    client_names: Optional[Mapping[Any, str]] = None,
) -> Row:
    client_names = client_names or {}
    paid = _payments_by_order(payments)
    client_ids = [row["user_id"] for row in user_roles if row["role"] == ROLE_CLIENT]

    by_client: Dict[Any, List[Row]] = defaultdict(list)
    for order in orders:
        by_client[order["client_id"]].append(order)

    history = []
    for client_id in client_ids:
        client_orders = by_client.get(client_id, [])
        last_order = max((o["created_at"] for o in client_orders), default=None)
        history.append(
            {
                "client_id": client_id,
                "client_name": client_names.get(client_id) or default_client_name(client_id),
                "order_count": len(client_orders),
                "total_spent": sum((paid.get(o["id"], ZERO) for o in client_orders), ZERO),
                "last_order": last_order.isoformat() if last_order else "",
            }
        )

    most_active = {"client_id": "", "client_name": "", "order_count": 0, "total_spent": ZERO}
    for stats in history:
        if stats["order_count"] > most_active["order_count"]:
            most_active = {key: stats[key] for key in ("client_id", "client_name", "order_count", "total_spent")}

    history.sort(key=lambda row: row["order_count"], reverse=True)

    return {
        "total_clients": len(client_ids),
        "most_active_client": most_active,
        "client_order_history": history,
    }
