"""
Service Container Tests
========================

Unit tests for dependency injection container.
"""

from django.test import SimpleTestCase

from authentication.domain.services import AuthService, SellerService
from infrastructure.container import ServiceContainer, container
from marketplace.analytics.domain.services import AdminAnalyticsService, DashboardService
from marketplace.cart.domain.services import CartService
from marketplace.catalog.domain.services import CatalogService
from marketplace.finance.domain.services import FinancialService
from marketplace.ordering.domain.services import OrderService


class ServiceContainerTest(SimpleTestCase):
    """Test ServiceContainer implementation."""

    def setUp(self):
        # Reset container before each test
        container.reset()

    def test_container_is_singleton(self):
        container1 = ServiceContainer()
        container2 = ServiceContainer()

        self.assertIs(container1, container2)
        self.assertIs(container1, container)

    def test_services_are_cached(self):
        for getter, service_class in [
            (container.auth_service, AuthService),
            (container.seller_service, SellerService),
            (container.catalog_service, CatalogService),
            (container.cart_service, CartService),
            (container.order_service, OrderService),
            (container.financial_service, FinancialService),
            (container.dashboard_service, DashboardService),
            (container.admin_analytics_service, AdminAnalyticsService),
        ]:
            service = getter()
            self.assertIsInstance(service, service_class)
            self.assertIs(service, getter())

    def test_order_service_shares_collaborators(self):
        order_service = container.order_service()

        self.assertIs(order_service.cart_service, container.cart_service())
        self.assertIs(order_service.seller_service, container.seller_service())

    def test_dashboard_service_shares_financial_service(self):
        self.assertIs(container.dashboard_service().financial_service, container.financial_service())

    def test_reset_clears_cached_instances(self):
        catalog = container.catalog_service()
        container.reset()
        self.assertIsNot(catalog, container.catalog_service())
