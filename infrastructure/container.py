"""
Dependency Injection Container
================================

Simple service locator for the domain services. Views ask the container for a
service instead of constructing it, so tests can swap an instance in and
services that depend on each other are wired in one place.

Usage:
    from infrastructure.container import container

    result = container.cart_service().get_cart(request.user)
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for domain services.

    Implements lazy initialization and caching of service instances.
    Singleton pattern.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize container (only once)."""
        if not self._initialized:
            self._reset_services()
            self._initialized = True
            logger.info("Service container initialized")

    def _reset_services(self):
        self._auth_service = None
        self._seller_service = None
        self._catalog_service = None
        self._cart_service = None
        self._order_service = None
        self._financial_service = None
        self._dashboard_service = None
        self._admin_analytics_service = None

    def auth_service(self):
        """Get AuthService instance."""
        if self._auth_service is None:
            from authentication.domain.services import AuthService

            self._auth_service = AuthService()
            logger.debug("Created AuthService")
        return self._auth_service

    def seller_service(self):
        """Get SellerService instance."""
        if self._seller_service is None:
            from authentication.domain.services import SellerService

            self._seller_service = SellerService()
            logger.debug("Created SellerService")
        return self._seller_service

    def catalog_service(self):
        """Get CatalogService instance."""
        if self._catalog_service is None:
            from marketplace.catalog.domain.services import CatalogService

            self._catalog_service = CatalogService()
            logger.debug("Created CatalogService")
        return self._catalog_service

    def cart_service(self):
        """Get CartService instance."""
        if self._cart_service is None:
            from marketplace.cart.domain.services import CartService

            self._cart_service = CartService()
            logger.debug("Created CartService")
        return self._cart_service

    def order_service(self):
        """Get OrderService instance."""
        if self._order_service is None:
            from marketplace.ordering.domain.services import OrderService

            # OrderService clears the cart on checkout and checks the seller directory
            self._order_service = OrderService(
                cart_service=self.cart_service(),
                seller_service=self.seller_service(),
            )
            logger.debug("Created OrderService")
        return self._order_service

    def financial_service(self):
        """Get FinancialService instance."""
        if self._financial_service is None:
            from marketplace.finance.domain.services import FinancialService

            self._financial_service = FinancialService()
            logger.debug("Created FinancialService")
        return self._financial_service

    def dashboard_service(self):
        """Get DashboardService instance."""
        if self._dashboard_service is None:
            from marketplace.analytics.domain.services import DashboardService

            self._dashboard_service = DashboardService(financial_service=self.financial_service())
            logger.debug("Created DashboardService")
        return self._dashboard_service

    def admin_analytics_service(self):
        """Get AdminAnalyticsService instance."""
        if self._admin_analytics_service is None:
            from marketplace.analytics.domain.services import AdminAnalyticsService

            self._admin_analytics_service = AdminAnalyticsService()
            logger.debug("Created AdminAnalyticsService")
        return self._admin_analytics_service

    def reset(self):
        """
        Reset all cached service instances.

        Useful for testing or when switching between environments.
        """
        self._reset_services()
        logger.info("Service container reset")


# Global singleton instance
container = ServiceContainer()
