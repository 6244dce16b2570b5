"""
Cart reconciliation.

A saved cart (persisted rows or a snapshot kept by the browser) only remembers
product ids and quantities. Before it is shown or checked out it is rehydrated
against the freshly fetched product list: fresh product data wins, and entries
whose product no longer exists are dropped.
"""

import logging
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional

from marketplace.catalog.domain.models.catalog import Product

logger = logging.getLogger(__name__)


@dataclass
class CartLine:
    product: Product
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


@dataclass
class Reconciliation:
    lines: List[CartLine] = field(default_factory=list)
    dropped: int = 0


def _normalise_id(value) -> Optional[str]:
    # Browsers may send upper-case or brace-wrapped UUIDs
    if isinstance(value, uuid.UUID):
        return str(value)
    try:
        return str(uuid.UUID(str(value)))
    except ValueError:
        return None


def _saved_product_id(entry: Mapping[str, Any]) -> Optional[str]:
    # {"product_id": ...} or the browser shape {"product": {"id": ...}}
    if entry.get("product_id"):
        return _normalise_id(entry["product_id"])
    product = entry.get("product")
    if isinstance(product, Mapping) and product.get("id"):
        return _normalise_id(product["id"])
    return None


def _saved_quantity(entry: Mapping[str, Any]) -> Optional[int]:
    quantity = entry.get("quantity")
    if isinstance(quantity, bool):
        return None
    if isinstance(quantity, float) and quantity.is_integer():
        quantity = int(quantity)
    if not isinstance(quantity, int):
        return None
    return quantity if quantity > 0 else None


def reconcile(saved_items: Iterable[Mapping[str, Any]], products: Iterable[Product]) -> Reconciliation:
    """
    Rebuild cart lines from a saved cart and the current catalog.

    Entries are kept in their saved order. Unknown products and quantities that
    are not positive integers are skipped and counted in ``dropped``; a product
    saved twice is merged into one line.
    """
    by_id: Dict[str, Product] = {}
    for product in products:
        key = _normalise_id(product.pk)
        if key:
            by_id[key] = product

    result = Reconciliation()
    merged: Dict[str, CartLine] = {}

    for entry in saved_items:
        if not isinstance(entry, Mapping):
            logger.warning("Skipping malformed cart entry: %r", entry)
            result.dropped += 1
            continue

        product_id = _saved_product_id(entry)
        quantity = _saved_quantity(entry)
        product = by_id.get(product_id) if product_id else None
        if product is None or quantity is None:
            logger.debug("Dropping cart entry product=%s quantity=%r", product_id, entry.get("quantity"))
            result.dropped += 1
            continue

        if product_id in merged:
            merged[product_id].quantity += quantity
        else:
            merged[product_id] = CartLine(product=product, quantity=quantity)

    result.lines = list(merged.values())
    return result


def rehydrate_items(saved_items: Iterable[Mapping[str, Any]], products: Iterable[Product]) -> List[CartLine]:
    return reconcile(saved_items, products).lines


def calculate_total(lines: Iterable[CartLine]) -> Decimal:
    return sum((line.line_total for line in lines), Decimal("0"))


def count_items(lines: Iterable[CartLine]) -> int:
    return sum(line.quantity for line in lines)

