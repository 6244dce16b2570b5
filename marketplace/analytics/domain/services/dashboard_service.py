"""
DashboardService - Client and seller dashboards
"""

import logging
from typing import Dict, Optional

from django.contrib.auth import get_user_model
from django.utils import timezone

from marketplace.finance.domain.services import FinancialService, monthly_revenue, monthly_storage_costs, total_margin
from marketplace.models import Order, Product
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from utils.rbac import is_seller

User = get_user_model()
logger = logging.getLogger(__name__)


class DashboardService(BaseService):
    def __init__(self, financial_service: FinancialService = None):
        super().__init__()
        self.financial_service = financial_service or FinancialService()

    @BaseService.log_performance
    def client_dashboard(self, user: User) -> ServiceResult[Dict]:
        """The client's orders, newest first, with a count per status and the total quantity ordered."""
        try:
            orders = list(Order.objects.filter(client=user).select_related("product").order_by("-created_at"))
            status_counts: Dict[str, int] = {}
            for order in orders:
                status_counts[order.status] = status_counts.get(order.status, 0) + 1

            return service_ok(
                {
                    "orders": orders,
                    "total_orders": len(orders),
                    "status_counts": status_counts,
                    "total_quantity": sum(order.quantity for order in orders),
                }
            )
        except Exception as e:
            self.logger.error(f"Error building client dashboard for user {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def seller_dashboard(self, user: User, now: Optional[timezone.datetime] = None) -> ServiceResult[Dict]:
        """
        Seller figures for the current month.

        net_profit is this month's revenue minus this month's storage costs;
        total_margin covers every payment the seller has recorded.
        """
        if not is_seller(user):
            return service_err(ErrorCodes.PERMISSION_DENIED, "Seller access required")

        now = timezone.localtime(now or timezone.now())
        try:
            payments_result = self.financial_service.list_payments(user)
            if not payments_result.ok:
                return payments_result
            costs_result = self.financial_service.list_storage_costs(user)
            if not costs_result.ok:
                return costs_result

            payments = payments_result.value
            costs = costs_result.value
            revenue = monthly_revenue(
                [{"amount": p.amount, "payment_date": timezone.localtime(p.payment_date)} for p in payments],
                now.month,
                now.year,
            )
            storage = monthly_storage_costs(costs, now.month, now.year)

            return service_ok(
                {
                    "total_products": Product.objects.filter(seller=user).count(),
                    "pending_orders": Order.objects.filter(seller=user, status=Order.PENDING).count(),
                    "monthly_revenue": revenue,
                    "monthly_storage_costs": storage,
                    "total_margin": total_margin(payments),
                    "net_profit": revenue - storage,
                    "total_payments": len(payments),
                }
            )
        except Exception as e:
            self.logger.error(f"Error building seller dashboard for user {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
