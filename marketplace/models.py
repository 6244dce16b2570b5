from marketplace.cart.domain.models import Cart, CartItem
from marketplace.catalog.domain.models import Product
from marketplace.finance.domain.models import Payment, StorageCost
from marketplace.ordering.domain.models import Order


__all__ = [
    "Product",
    "Cart",
    "CartItem",
    "Order",
    "Payment",
    "StorageCost",
]
