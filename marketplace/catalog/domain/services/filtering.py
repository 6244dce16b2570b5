"""
In-memory product list helpers.

The products page fetches the whole catalog once and narrows it down with these
helpers, so each one takes a sequence of products and returns a new list in the
same order.
"""

from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from marketplace.catalog.domain.models.catalog import Product


def _keywords(product) -> List[str]:
    return [str(k) for k in (product.keywords or [])]


def search_products(products: Sequence[Product], query: Optional[str]) -> List[Product]:
    """Case-insensitive substring match on title, description or any keyword."""
    if not query or not query.strip():
        return list(products)

    q = query.strip().lower()
    return [
        p
        for p in products
        if q in (p.title or "").lower()
        or q in (p.description or "").lower()
        or any(q in keyword.lower() for keyword in _keywords(p))
    ]


def filter_by_keyword(products: Sequence[Product], keyword: Optional[str]) -> List[Product]:
    """Keep products carrying ``keyword`` exactly, ignoring case."""
    if not keyword:
        return list(products)
    wanted = keyword.lower()
    return [p for p in products if any(k.lower() == wanted for k in _keywords(p))]


def filter_by_price_range(
    products: Sequence[Product], min_price: Optional[Decimal] = None, max_price: Optional[Decimal] = None
) -> List[Product]:
    """Inclusive on both ends; a missing bound is open."""
    return [
        p
        for p in products
        if (min_price is None or p.price >= min_price) and (max_price is None or p.price <= max_price)
    ]


def available_keywords(products: Iterable[Product]) -> List[str]:
    """Sorted union of every keyword in the catalog."""
    return sorted({keyword for p in products for keyword in _keywords(p)})


def related_products(product: Product, products: Sequence[Product], limit: int = 3) -> List[Product]:
    """Other products sharing at least one keyword with ``product``."""
    own = set(_keywords(product))
    related = [p for p in products if p.pk != product.pk and own.intersection(_keywords(p))]
    return related[:limit]


def parse_keywords(raw) -> List[str]:
    """Accept a list or a comma separated string; trim entries and drop blanks."""
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = raw.split(",")
    return [str(k).strip() for k in raw if str(k).strip()]
