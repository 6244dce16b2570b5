"""
Marketplace Service Layer primitives.

Domain services live in their bounded contexts and share the result type,
error codes and base class defined here:

- CatalogService: marketplace.catalog.domain.services
- CartService: marketplace.cart.domain.services
- OrderService: marketplace.ordering.domain.services
- FinancialService: marketplace.finance.domain.services
- DashboardService, AdminAnalyticsService: marketplace.analytics.domain.services

Usage:
    from infrastructure.container import container

    result = container.catalog_service().list_products(filters={})

    if result.ok:
        products = result.value
    else:
        error = result.error
"""

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

__all__ = [
    "BaseService",
    "ServiceResult",
    "service_ok",
    "service_err",
    "ErrorCodes",
]
