from .cart_service import CartService
from .reconciliation import CartLine, Reconciliation, calculate_total, count_items, reconcile, rehydrate_items

__all__ = [
    "CartService",
    "CartLine",
    "Reconciliation",
    "calculate_total",
    "count_items",
    "reconcile",
    "rehydrate_items",
]
