"""
CatalogService - Product CRUD & Search

Handles product browsing, seller-owned product CRUD and the keyword/price
filters of the products page.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction

from infrastructure.observability.tracing import get_tracer
from marketplace.catalog.domain.models.catalog import Product
from marketplace.catalog.domain.services.filtering import (
    available_keywords,
    filter_by_keyword,
    filter_by_price_range,
    parse_keywords,
    related_products,
    search_products,
)
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from utils.rbac import is_seller


User = get_user_model()
logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

UPDATABLE_TEXT_FIELDS = ("title", "description", "image_url")


class CatalogService(BaseService):
    """
    Service for the product catalog.

    Responsibilities:
    - List products, with search, keyword and price range filters
    - Get product details and related products
    - Create products (sellers only)
    - Update / delete products (owning seller only)
    """

    def _all_products(self) -> List[Product]:
        return list(Product.objects.select_related("seller").order_by("-created_at"))

    @BaseService.log_performance
    def list_products(self, filters: Optional[Dict[str, Any]] = None) -> ServiceResult[List[Product]]:
        """
        List products newest first.

        Args:
            filters: Optional ``search``, ``keyword``, ``min_price`` and ``max_price``

        Example:
            >>> result = catalog_service.list_products({"search": "filter", "max_price": Decimal("50")})
            >>> if result.ok:
            ...     products = result.value
        """
        filters = filters or {}
        with tracer.start_as_current_span("catalog_list_products") as span:
            span.set_attribute("filters.count", len(filters))
            try:
                products = self._all_products()
                products = search_products(products, filters.get("search"))
                products = filter_by_keyword(products, filters.get("keyword"))
                products = filter_by_price_range(products, filters.get("min_price"), filters.get("max_price"))

                span.set_attribute("result.count", len(products))
                self.logger.info(f"Listed products: count={len(products)}")
                return service_ok(products)
            except Exception as e:
                self.logger.error(f"Error listing products: {e}", exc_info=True)
                return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def list_keywords(self) -> ServiceResult[List[str]]:
        """Every keyword in the catalog, sorted."""
        try:
            return service_ok(available_keywords(self._all_products()))
        except Exception as e:
            self.logger.error(f"Error listing keywords: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def get_product(self, product_id) -> ServiceResult[Product]:
        try:
            product = Product.objects.select_related("seller").get(id=product_id)
            return service_ok(product)
        except (Product.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")
        except Exception as e:
            self.logger.error(f"Error getting product {product_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def get_related_products(self, product: Product, limit: int = 3) -> ServiceResult[List[Product]]:
        try:
            return service_ok(related_products(product, self._all_products(), limit=limit))
        except Exception as e:
            self.logger.error(f"Error finding related products for {product.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def seller_products(self, user: User) -> ServiceResult[List[Product]]:
        """Products owned by ``user``; empty for anyone who is not a seller."""
        try:
            if not is_seller(user):
                return service_ok([])
            return service_ok(list(Product.objects.filter(seller=user).order_by("-created_at")))
        except Exception as e:
            self.logger.error(f"Error listing products of seller {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    @transaction.atomic
    def add_product(self, user: User, data: Dict[str, Any]) -> ServiceResult[Product]:
        """
        Create a product owned by the calling seller.

        Example:
            >>> catalog_service.add_product(seller, {
            ...     "title": "Performance Air Filter",
            ...     "description": "High-flow air filter",
            ...     "price": Decimal("49.99"),
            ...     "keywords": "air filter, performance",
            ...     "image_url": "https://example.com/filter.jpg",
            ... })
        """
        try:
            if not is_seller(user):
                return service_err(ErrorCodes.PERMISSION_DENIED, "Only sellers can add products")

            if not data.get("title"):
                return service_err(ErrorCodes.INVALID_PRODUCT_DATA, "Title is required")
            if data.get("price") is None:
                return service_err(ErrorCodes.INVALID_PRODUCT_DATA, "Price is required")

            product = Product.objects.create(
                title=data["title"],
                description=data.get("description") or "",
                price=Decimal(str(data["price"])),
                keywords=parse_keywords(data.get("keywords")),
                image_url=data.get("image_url") or "",
                seller=user,
            )

            self.logger.info(f"Product created: {product.title} (id={product.id}) by seller {user.pk}")
            return service_ok(product)
        except Exception as e:
            self.logger.error(f"Error creating product for seller {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    @transaction.atomic
    def update_product(self, user: User, product_id, updates: Dict[str, Any]) -> ServiceResult[Product]:
        """Apply only the provided, non-empty fields. ``price`` applies whenever it is a number."""
        try:
            try:
                product = Product.objects.select_for_update().get(id=product_id)
            except (Product.DoesNotExist, ValidationError, ValueError):
                return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

            if product.seller_id != user.pk:
                return service_err(ErrorCodes.NOT_PRODUCT_OWNER, "You can only edit your own products")

            changed = []
            for field in UPDATABLE_TEXT_FIELDS:
                if updates.get(field):
                    setattr(product, field, updates[field])
                    changed.append(field)

            keywords = parse_keywords(updates.get("keywords"))
            if keywords:
                product.keywords = keywords
                changed.append("keywords")

            if isinstance(updates.get("price"), (int, float, Decimal)) and not isinstance(updates["price"], bool):
                product.price = Decimal(str(updates["price"]))
                changed.append("price")

            if changed:
                product.save(update_fields=changed + ["updated_at"])
            self.logger.info(f"Product {product.id} updated: {changed}")
            return service_ok(product)
        except Exception as e:
            self.logger.error(f"Error updating product {product_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    @transaction.atomic
    def delete_product(self, user: User, product_id) -> ServiceResult[bool]:
        try:
            try:
                product = Product.objects.get(id=product_id)
            except (Product.DoesNotExist, ValidationError, ValueError):
                return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

            if product.seller_id != user.pk:
                return service_err(ErrorCodes.NOT_PRODUCT_OWNER, "You can only delete your own products")

            product.delete()
            self.logger.info(f"Product {product_id} deleted by seller {user.pk}")
            return service_ok(True)
        except Exception as e:
            self.logger.error(f"Error deleting product {product_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
