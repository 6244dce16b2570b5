"""
AdminAnalyticsService - Admin dashboard

Fetches orders, products, sellers, payments, storage costs and role rows in
full and hands them to the aggregation functions in ``aggregations``.
"""

import logging
from typing import Dict, Optional

from django.contrib.auth import get_user_model
from django.utils import timezone

from authentication.domain.models import Seller, UserRole
from infrastructure.observability.tracing import trace_function
from marketplace.infra.observability.metrics import admin_dashboard_build_duration
from marketplace.models import Order, Payment, Product, StorageCost
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from utils.rbac import is_admin

from .aggregations import (
    calculate_client_analytics,
    calculate_financial_analytics,
    calculate_order_analytics,
    calculate_product_analytics,
    calculate_seller_analytics,
)

User = get_user_model()
logger = logging.getLogger(__name__)


class AdminAnalyticsService(BaseService):
    """Builds the five sections of the admin dashboard."""

    @trace_function("admin_dashboard_fetch")
    def _fetch(self) -> Dict[str, list]:
        orders = list(
            Order.objects.values("id", "product_id", "client_id", "seller_id", "quantity", "status", "created_at")
        )
        client_ids = {row["client_id"] for row in orders} | set(
            UserRole.objects.filter(role=UserRole.CLIENT).values_list("user_id", flat=True)
        )
        return {
            "orders": orders,
            "products": list(Product.objects.order_by("-created_at").values("id", "title")),
            "sellers": [
                {"id": row["user_id"], "name": row["name"]} for row in Seller.objects.values("user_id", "name")
            ],
            "payments": list(Payment.objects.values("order_id", "amount", "cost", "payment_date")),
            "storage_costs": list(StorageCost.objects.values("cost_amount")),
            "user_roles": list(UserRole.objects.values("user_id", "role")),
            "client_names": {user.pk: user.get_display_name() for user in User.objects.filter(pk__in=client_ids)},
        }

    @BaseService.log_performance
    def get_dashboard_data(self, user: User, now: Optional[timezone.datetime] = None) -> ServiceResult[Dict]:
        """
        Admin dashboard data, or an error. Partial data is never returned.

        Example:
            >>> result = analytics_service.get_dashboard_data(admin)
            >>> if result.ok:
            ...     revenue = result.value["financial"]["total_revenue"]
        """
        if not is_admin(user):
            return service_err(ErrorCodes.PERMISSION_DENIED, "Admin access required")

        now = now or timezone.now()
        try:
            with admin_dashboard_build_duration.time():
                data = self._fetch()
                dashboard = {
                    "orders": calculate_order_analytics(
                        data["orders"], data["products"], data["payments"], now, data["client_names"]
                    ),
                    "products": calculate_product_analytics(data["products"], data["orders"], data["payments"]),
                    "sellers": calculate_seller_analytics(data["sellers"], data["orders"], data["payments"]),
                    "financial": calculate_financial_analytics(data["payments"], data["storage_costs"], now),
                    "clients": calculate_client_analytics(
                        data["orders"], data["user_roles"], data["payments"], data["client_names"]
                    ),
                }
            self.logger.info(
                f"Built admin dashboard: orders={dashboard['orders']['total_orders']} "
                f"products={dashboard['products']['total_products']}"
            )
            return service_ok(dashboard)
        except Exception as e:
            self.logger.error(f"Error building admin dashboard: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
