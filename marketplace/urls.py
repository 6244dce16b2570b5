from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .analytics.api.views.dashboard_views import AdminDashboardView, ClientDashboardView, SellerDashboardView
from .api.views import prometheus_metrics
from .cart.api.views.cart_views import CartViewSet
from .catalog.api.views.product_views import ProductViewSet
from .finance.api.views.finance_views import PaymentListCreateView, StorageCostDetailView, StorageCostListCreateView
from .ordering.api.views.order_views import OrderViewSet

# Create the main router
router = DefaultRouter()
router.register(r"products", ProductViewSet, basename="product")
router.register(r"cart", CartViewSet, basename="cart")
router.register(r"orders", OrderViewSet, basename="order")

app_name = "marketplace"

urlpatterns = [
    # Main API routes
    path("", include(router.urls)),
    # Finance (seller)
    path("finance/payments/", PaymentListCreateView.as_view(), name="finance-payments"),
    path("finance/storage-costs/", StorageCostListCreateView.as_view(), name="finance-storage-costs"),
    path("finance/storage-costs/<int:pk>/", StorageCostDetailView.as_view(), name="finance-storage-cost-detail"),
    # Dashboards
    path("client/dashboard/", ClientDashboardView.as_view(), name="client-dashboard"),
    path("seller/dashboard/", SellerDashboardView.as_view(), name="seller-dashboard"),
    path("admin/dashboard/", AdminDashboardView.as_view(), name="admin-dashboard"),
    # Prometheus metrics endpoint
    path("metrics/", prometheus_metrics.marketplace_prometheus_metrics, name="marketplace-metrics"),
]
