"""
OrderService - Order Lifecycle Management

Handles order placement (checkout of the whole cart or "buy now" of a single
product), role-scoped order listing and status transitions.
"""

import logging
from typing import List, Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction

from authentication.domain.services.seller_service import SellerService
from infrastructure.observability.tracing import get_tracer
from marketplace.cart.domain.services.cart_service import CartService
from marketplace.catalog.domain.models.catalog import Product
from marketplace.infra.observability.metrics import order_status_changes_total, order_value, orders_placed_total
from marketplace.ordering.domain.models.order import Order
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from utils.rbac import ROLE_ADMIN, ROLE_SELLER, resolve_role

User = get_user_model()
logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


class OrderService(BaseService):
    """
    Service for managing order lifecycle.

    Every order covers a single product; checking out a cart with three lines
    creates three orders.
    """

    def __init__(self, cart_service: CartService = None, seller_service: SellerService = None):
        """
        Initialize OrderService.

        Args:
            cart_service: Service for cart operations (injected)
            seller_service: Seller directory lookups (injected)
        """
        super().__init__()
        self.cart_service = cart_service or CartService()
        self.seller_service = seller_service or SellerService()

    def _scoped_queryset(self, user: User):
        queryset = Order.objects.select_related("client", "product", "seller")
        role = resolve_role(user)
        if role == ROLE_ADMIN:
            return queryset
        if role == ROLE_SELLER:
            return queryset.filter(seller=user)
        return queryset.filter(client=user)

    def _create_order(self, user: User, product: Product, quantity: int, address: str) -> Order:
        if self.seller_service.fetch_seller_by_id(product.seller_id) is None:
            # Orders still go through; the seller just has no directory entry yet
            self.logger.warning(f"Seller {product.seller_id} of product {product.id} missing from seller directory")

        order = Order.objects.create(
            client=user,
            product=product,
            seller_id=product.seller_id,
            quantity=quantity,
            status=Order.PENDING,
            shipping_address=address,
        )
        order_value.observe(float(product.price * quantity))
        return order

    @BaseService.log_performance
    @transaction.atomic
    def place_order(
        self, user: User, quantity: int, address: str, product_id: Optional[str] = None
    ) -> ServiceResult[List[Order]]:
        """
        Place orders for a single product ("buy now") or for the whole cart.

        Args:
            user: Client placing the order
            quantity: Quantity for "buy now"; checkout uses each cart line's quantity
            address: Shipping address, must not be blank
            product_id: Product to buy now. When omitted the cart is checked out and cleared.

        Returns:
            ServiceResult with the created orders

        Example:
            >>> result = order_service.place_order(user, 1, "1 Main St", product_id=product.id)
            >>> if result.ok:
            ...     order = result.value[0]
        """
        with tracer.start_as_current_span("order_place") as span:
            span.set_attribute("user.id", str(user.pk))
            span.set_attribute("order.buy_now", product_id is not None)

            if not address or not str(address).strip():
                return service_err(ErrorCodes.ADDRESS_REQUIRED, "Shipping address is required")
            address = str(address).strip()

            try:
                if product_id is not None:
                    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
                        return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be a positive integer")

                    try:
                        product = Product.objects.get(id=product_id)
                    except (Product.DoesNotExist, ValidationError, ValueError):
                        return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

                    orders = [self._create_order(user, product, quantity, address)]
                    source = "buy_now"
                else:
                    cart_result = self.cart_service.get_cart(user)
                    if not cart_result.ok:
                        return cart_result

                    lines = cart_result.value["items"]
                    if not lines:
                        return service_err(ErrorCodes.CART_EMPTY, "Cannot place an order from an empty cart")

                    orders = [self._create_order(user, line.product, line.quantity, address) for line in lines]

                    clear_result = self.cart_service.clear_cart(user)
                    if not clear_result.ok:
                        # Roll the orders back with the cart still intact
                        transaction.set_rollback(True)
                        return clear_result
                    source = "checkout"

                orders_placed_total.labels(source=source).inc(len(orders))
                span.set_attribute("order.count", len(orders))
                self.logger.info(f"Placed {len(orders)} order(s) for user {user.pk} via {source}")
                return service_ok(orders)

            except Exception as e:
                self.logger.error(f"Error placing order for user {user.pk}: {e}", exc_info=True)
                span.record_exception(e)
                transaction.set_rollback(True)
                return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    @transaction.atomic
    def update_order_status(self, user: User, order_id, status: str) -> ServiceResult[Order]:
        """
        Move an order to ``status``.

        Only the order's seller or an admin may do this. Allowed transitions:
        pending -> confirmed | cancelled, confirmed -> completed | cancelled.
        """
        try:
            if status not in dict(Order.STATUS_CHOICES):
                return service_err(ErrorCodes.VALIDATION_ERROR, f"Unknown status '{status}'")

            try:
                order = Order.objects.select_for_update().get(id=order_id)
            except (Order.DoesNotExist, ValidationError, ValueError):
                return service_err(ErrorCodes.ORDER_NOT_FOUND, f"Order {order_id} not found")

            if order.seller_id != user.pk and resolve_role(user) != ROLE_ADMIN:
                return service_err(ErrorCodes.NOT_ORDER_SELLER, "You can only update your own orders")

            if not order.can_transition_to(status):
                return service_err(
                    ErrorCodes.INVALID_ORDER_STATE, f"Cannot change order status from {order.status} to {status}"
                )

            old_status = order.status
            order.status = status
            order.save(update_fields=["status", "updated_at"])

            order_status_changes_total.labels(from_status=old_status, to_status=status).inc()
            self.logger.info(f"Order {order.id} status {old_status} -> {status} by user {user.pk}")
            return service_ok(order)
        except Exception as e:
            self.logger.error(f"Error updating order {order_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def list_orders(self, user: User, status: Optional[str] = None) -> ServiceResult[List[Order]]:
        """
        Orders visible to ``user``, newest first.

        Clients see the orders they placed, sellers the orders for their
        products and admins every order.
        """
        try:
            queryset = self._scoped_queryset(user)
            if status:
                queryset = queryset.filter(status=status)
            orders = list(queryset.order_by("-created_at"))
            self.logger.info(f"Listed orders for user {user.pk}: {len(orders)} total")
            return service_ok(orders)
        except Exception as e:
            self.logger.error(f"Error listing orders for user {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def client_orders(self, user: User) -> ServiceResult[List[Order]]:
        try:
            orders = list(
                Order.objects.filter(client=user).select_related("product", "seller").order_by("-created_at")
            )
            return service_ok(orders)
        except Exception as e:
            self.logger.error(f"Error listing client orders for user {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def seller_orders(self, user: User) -> ServiceResult[List[Order]]:
        try:
            orders = list(
                Order.objects.filter(seller=user).select_related("product", "client").order_by("-created_at")
            )
            return service_ok(orders)
        except Exception as e:
            self.logger.error(f"Error listing seller orders for user {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def get_order(self, user: User, order_id) -> ServiceResult[Order]:
        """Order details, scoped the same way as ``list_orders``."""
        try:
            order = self._scoped_queryset(user).get(id=order_id)
            return service_ok(order)
        except (Order.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.ORDER_NOT_FOUND, f"Order {order_id} not found")
        except Exception as e:
            self.logger.error(f"Error getting order {order_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
