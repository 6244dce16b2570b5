from .admin_analytics_service import AdminAnalyticsService
from .aggregations import (
    calculate_client_analytics,
    calculate_financial_analytics,
    calculate_order_analytics,
    calculate_product_analytics,
    calculate_seller_analytics,
)
from .dashboard_service import DashboardService


__all__ = [
    "AdminAnalyticsService",
    "DashboardService",
    "calculate_order_analytics",
    "calculate_product_analytics",
    "calculate_seller_analytics",
    "calculate_financial_analytics",
    "calculate_client_analytics",
]
