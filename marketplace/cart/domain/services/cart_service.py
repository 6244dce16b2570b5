"""
CartService - Shopping Cart Operations

Handles add, remove, update, clear and restore of a user's persisted cart.
Every read goes through ``rehydrate_items`` so the returned cart always reflects
the current product table.
"""

import logging
from typing import Any, Dict, List

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction

from marketplace.infra.observability.metrics import cart_restore_dropped_items_total
from marketplace.models import Cart, CartItem, Product
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

from .reconciliation import calculate_total, count_items, reconcile, rehydrate_items

User = get_user_model()
logger = logging.getLogger(__name__)


def empty_cart() -> Dict[str, Any]:
    return {"items": [], "items_count": 0, "total_items": 0, "total": calculate_total([])}


class CartService(BaseService):
    """
    Service for managing shopping cart operations.

    Responsibilities:
    - Get user's cart (reconciled with the current catalog)
    - Add items (quantities merge for a product already in the cart)
    - Remove items / update quantities (zero or less removes)
    - Clear cart
    - Restore a saved cart snapshot into the user's cart
    """

    def _build_cart(self, cart: Cart) -> Dict[str, Any]:
        rows = list(cart.items.values("product_id", "quantity"))
        product_ids = [row["product_id"] for row in rows]
        products = Product.objects.select_related("seller").filter(id__in=product_ids)

        lines = rehydrate_items(rows, products)
        if len(lines) != len(rows):
            # Products that vanished between reads
            kept = {line.product.pk for line in lines}
            cart.items.exclude(product_id__in=kept).delete()
            self.logger.info(f"Dropped {len(rows) - len(lines)} orphaned items from cart {cart.pk}")

        return {
            "items": lines,
            "items_count": len(lines),
            "total_items": count_items(lines),
            "total": calculate_total(lines),
        }

    @BaseService.log_performance
    def get_cart(self, user: User) -> ServiceResult[Dict]:
        """
        Get user's shopping cart with items and totals.

        Example:
            >>> result = cart_service.get_cart(user)
            >>> if result.ok:
            ...     total = result.value["total"]
        """
        if not getattr(user, "is_authenticated", False):
            return service_ok(empty_cart())

        try:
            cart, _ = Cart.objects.get_or_create(user=user)
            cart_data = self._build_cart(cart)
            self.logger.info(f"Retrieved cart for user {user.pk}: {cart_data['items_count']} items")
            return service_ok(cart_data)
        except Exception as e:
            self.logger.error(f"Error getting cart for user {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    @transaction.atomic
    def add_to_cart(self, user: User, product_id, quantity: int = 1) -> ServiceResult[Dict]:
        """Add ``quantity`` of a product; an item already in the cart has its quantity increased."""
        try:
            if quantity <= 0:
                return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be positive")

            try:
                product = Product.objects.get(id=product_id)
            except (Product.DoesNotExist, ValidationError, ValueError):
                return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

            cart, _ = Cart.objects.get_or_create(user=user)
            cart_item, created = CartItem.objects.select_for_update().get_or_create(
                cart=cart, product=product, defaults={"quantity": quantity}
            )

            if not created:
                cart_item.quantity += quantity
                cart_item.save(update_fields=["quantity"])
                self.logger.info(
                    f"Updated cart item for user {user.pk}: {product.title} quantity -> {cart_item.quantity}"
                )
            else:
                self.logger.info(f"Added to cart for user {user.pk}: {quantity}x {product.title}")

            return self.get_cart(user)
        except Exception as e:
            self.logger.error(f"Error adding to cart for user {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    @transaction.atomic
    def remove_from_cart(self, user: User, product_id) -> ServiceResult[Dict]:
        try:
            try:
                deleted, _ = CartItem.objects.filter(cart__user=user, product_id=product_id).delete()
            except (ValidationError, ValueError):
                deleted = 0

            if not deleted:
                return service_err(ErrorCodes.ITEM_NOT_IN_CART, f"Product {product_id} not in cart")

            self.logger.info(f"Removed from cart for user {user.pk}: {product_id}")
            return self.get_cart(user)
        except Exception as e:
            self.logger.error(f"Error removing from cart for user {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    @transaction.atomic
    def update_quantity(self, user: User, product_id, quantity: int) -> ServiceResult[Dict]:
        """Set the quantity of an item. Zero or less removes it."""
        if quantity <= 0:
            return self.remove_from_cart(user, product_id)

        try:
            try:
                cart_item = CartItem.objects.select_for_update().get(cart__user=user, product_id=product_id)
            except (CartItem.DoesNotExist, ValidationError, ValueError):
                return service_err(ErrorCodes.ITEM_NOT_IN_CART, f"Product {product_id} not in cart")

            old_quantity = cart_item.quantity
            cart_item.quantity = quantity
            cart_item.save(update_fields=["quantity"])

            self.logger.info(f"Updated cart quantity for user {user.pk}: {product_id} {old_quantity} -> {quantity}")
            return self.get_cart(user)
        except Exception as e:
            self.logger.error(f"Error updating cart quantity for user {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    @transaction.atomic
    def clear_cart(self, user: User) -> ServiceResult[bool]:
        try:
            items_count, _ = CartItem.objects.filter(cart__user=user).delete()
            self.logger.info(f"Cleared cart for user {user.pk}: {items_count} items removed")
            return service_ok(True)
        except Exception as e:
            self.logger.error(f"Error clearing cart for user {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    @transaction.atomic
    def restore_cart(self, user: User, saved_items: List[Dict[str, Any]]) -> ServiceResult[Dict]:
        """
        Merge a saved cart snapshot into the user's cart.

        The snapshot is reconciled against the whole catalog first, so entries for
        deleted products are silently dropped.

        Example:
            >>> cart_service.restore_cart(user, [{"product_id": "…", "quantity": 2}])
        """
        if not isinstance(saved_items, list):
            return service_err(ErrorCodes.INVALID_CART_SNAPSHOT, "Saved cart must be a list of items")

        try:
            reconciled = reconcile(saved_items, Product.objects.all())
            lines = reconciled.lines
            if reconciled.dropped:
                cart_restore_dropped_items_total.inc(reconciled.dropped)
            cart, _ = Cart.objects.get_or_create(user=user)

            for line in lines:
                cart_item, created = CartItem.objects.select_for_update().get_or_create(
                    cart=cart, product=line.product, defaults={"quantity": line.quantity}
                )
                if not created:
                    cart_item.quantity += line.quantity
                    cart_item.save(update_fields=["quantity"])

            self.logger.info(
                f"Restored cart for user {user.pk}: {len(lines)} lines kept, {reconciled.dropped} entries dropped"
            )
            return self.get_cart(user)
        except Exception as e:
            self.logger.error(f"Error restoring cart for user {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
