"""
FinancialService - Seller payments and storage costs

Sellers record what they were paid for their orders and what storing their
products costs each month. Every read and write is scoped to the calling
seller's own orders and products.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from marketplace.catalog.domain.models.catalog import Product
from marketplace.finance.domain.models.finance import Payment, StorageCost
from marketplace.infra.observability.metrics import payments_recorded_total
from marketplace.ordering.domain.models.order import Order
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from utils.rbac import is_seller

User = get_user_model()
logger = logging.getLogger(__name__)


def _parse_amount(value, name: str) -> Decimal:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, TypeError):
        raise ValueError(f"{name} must be a number")
    if not amount.is_finite() or amount < 0:
        raise ValueError(f"{name} must be a non-negative number")
    return amount


def _parse_period(month, year):
    try:
        month, year = int(month), int(year)
    except (TypeError, ValueError):
        raise ValueError("month and year must be integers")
    if not 1 <= month <= 12:
        raise ValueError("month must be between 1 and 12")
    if year < 1:
        raise ValueError("year must be positive")
    return month, year


class FinancialService(BaseService):
    """
    Service for seller finance records.

    Responsibilities:
    - List / add payments on the seller's orders (margin derived from amount - cost)
    - List / add / update / delete storage costs for the seller's products
    """

    def _require_seller(self, user: User):
        if not is_seller(user):
            return service_err(ErrorCodes.PERMISSION_DENIED, "Only sellers can manage finances")
        return None

    @BaseService.log_performance
    def list_payments(self, user: User) -> ServiceResult[List[Payment]]:
        """Payments on the seller's orders, newest payment date first."""
        denied = self._require_seller(user)
        if denied:
            return denied
        try:
            payments = list(
                Payment.objects.filter(order__seller=user).select_related("order").order_by("-payment_date")
            )
            return service_ok(payments)
        except Exception as e:
            self.logger.error(f"Error listing payments for seller {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def list_storage_costs(self, user: User) -> ServiceResult[List[StorageCost]]:
        denied = self._require_seller(user)
        if denied:
            return denied
        try:
            costs = list(
                StorageCost.objects.filter(product__seller=user)
                .select_related("product")
                .order_by("-year", "-month")
            )
            return service_ok(costs)
        except Exception as e:
            self.logger.error(f"Error listing storage costs for seller {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    @transaction.atomic
    def add_payment(self, user: User, order_id, amount, cost=0, payment_date=None) -> ServiceResult[Payment]:
        """
        Record a payment on one of the seller's orders.

        Example:
            >>> finance_service.add_payment(seller, order.id, Decimal("120.00"), Decimal("80.00"))
        """
        denied = self._require_seller(user)
        if denied:
            return denied
        try:
            try:
                order = Order.objects.get(id=order_id, seller=user)
            except (Order.DoesNotExist, ValidationError, ValueError):
                return service_err(ErrorCodes.ORDER_NOT_FOUND, f"Order {order_id} not found")

            try:
                amount = _parse_amount(amount, "amount")
                cost = _parse_amount(cost or 0, "cost")
            except ValueError as e:
                return service_err(ErrorCodes.VALIDATION_ERROR, str(e))

            if payment_date is None:
                payment_date = timezone.now()
            elif isinstance(payment_date, str):
                parsed = parse_datetime(payment_date)
                if parsed is None:
                    return service_err(ErrorCodes.VALIDATION_ERROR, "payment_date must be an ISO datetime")
                payment_date = parsed
            if timezone.is_naive(payment_date):
                payment_date = timezone.make_aware(payment_date)

            payment = Payment.objects.create(order=order, amount=amount, cost=cost, payment_date=payment_date)
            payments_recorded_total.inc()
            self.logger.info(f"Payment {payment.pk} recorded on order {order.id}: amount={amount} cost={cost}")
            return service_ok(payment)
        except Exception as e:
            self.logger.error(f"Error adding payment for seller {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    @transaction.atomic
    def add_storage_cost(self, user: User, product_id, cost_amount, month, year) -> ServiceResult[StorageCost]:
        denied = self._require_seller(user)
        if denied:
            return denied
        try:
            try:
                product = Product.objects.get(id=product_id, seller=user)
            except (Product.DoesNotExist, ValidationError, ValueError):
                return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

            try:
                cost_amount = _parse_amount(cost_amount, "cost_amount")
                month, year = _parse_period(month, year)
            except ValueError as e:
                return service_err(ErrorCodes.VALIDATION_ERROR, str(e))

            storage_cost = StorageCost.objects.create(product=product, cost_amount=cost_amount, month=month, year=year)
            self.logger.info(f"Storage cost {storage_cost.pk} recorded for product {product.id}: {month}/{year}")
            return service_ok(storage_cost)
        except Exception as e:
            self.logger.error(f"Error adding storage cost for seller {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    @transaction.atomic
    def update_storage_cost(self, user: User, storage_cost_id, updates: Dict[str, Any]) -> ServiceResult[StorageCost]:
        """Apply ``cost_amount``, ``month`` and ``year`` when present."""
        denied = self._require_seller(user)
        if denied:
            return denied
        try:
            try:
                storage_cost = StorageCost.objects.select_for_update().get(id=storage_cost_id, product__seller=user)
            except (StorageCost.DoesNotExist, ValidationError, ValueError):
                return service_err(ErrorCodes.STORAGE_COST_NOT_FOUND, f"Storage cost {storage_cost_id} not found")

            try:
                if updates.get("cost_amount") is not None:
                    storage_cost.cost_amount = _parse_amount(updates["cost_amount"], "cost_amount")
                month = updates.get("month", storage_cost.month)
                year = updates.get("year", storage_cost.year)
                storage_cost.month, storage_cost.year = _parse_period(month, year)
            except ValueError as e:
                return service_err(ErrorCodes.VALIDATION_ERROR, str(e))

            storage_cost.save(update_fields=["cost_amount", "month", "year"])
            self.logger.info(f"Storage cost {storage_cost.pk} updated by seller {user.pk}")
            return service_ok(storage_cost)
        except Exception as e:
            self.logger.error(f"Error updating storage cost {storage_cost_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    @transaction.atomic
    def delete_storage_cost(self, user: User, storage_cost_id) -> ServiceResult[bool]:
        denied = self._require_seller(user)
        if denied:
            return denied
        try:
            try:
                deleted, _ = StorageCost.objects.filter(id=storage_cost_id, product__seller=user).delete()
            except (ValidationError, ValueError):
                deleted = 0
            if not deleted:
                return service_err(ErrorCodes.STORAGE_COST_NOT_FOUND, f"Storage cost {storage_cost_id} not found")

            self.logger.info(f"Storage cost {storage_cost_id} deleted by seller {user.pk}")
            return service_ok(True)
        except Exception as e:
            self.logger.error(f"Error deleting storage cost {storage_cost_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
