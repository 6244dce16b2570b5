import uuid
from decimal import Decimal
from unittest.mock import patch

import pytest

from marketplace.catalog.domain.services.catalog_service import CatalogService
from marketplace.services.base import ErrorCodes
from marketplace.tests.factories import ClientFactory, ProductFactory, SellerFactory


@pytest.fixture
def catalog_service():
    return CatalogService()


@pytest.mark.django_db
class TestCatalogService:
    def test_add_product_requires_seller(self, catalog_service):
        result = catalog_service.add_product(ClientFactory(), {"title": "Pads", "price": Decimal("10")})

        assert result.ok is False
        assert result.error == ErrorCodes.PERMISSION_DENIED

    def test_add_product_requires_title(self, catalog_service):
        result = catalog_service.add_product(SellerFactory(), {"title": "", "price": Decimal("10")})

        assert result.ok is False
        assert result.error == ErrorCodes.INVALID_PRODUCT_DATA

    def test_update_ignores_empty_fields_and_non_numeric_price(self, catalog_service):
        product = ProductFactory(title="Pads", description="Ceramic", price=Decimal("10.00"), keywords=["brakes"])

        result = catalog_service.update_product(
            product.seller, product.id, {"title": "", "description": "Semi-metallic", "price": True, "keywords": []}
        )

        assert result.ok is True
        product.refresh_from_db()
        assert product.title == "Pads"
        assert product.description == "Semi-metallic"
        assert product.price == Decimal("10.00")
        assert product.keywords == ["brakes"]

    def test_update_zero_price_is_applied(self, catalog_service):
        product = ProductFactory(price=Decimal("10.00"))

        result = catalog_service.update_product(product.seller, product.id, {"price": Decimal("0")})

        assert result.ok is True
        product.refresh_from_db()
        assert product.price == Decimal("0.00")

    def test_get_product_with_malformed_id(self, catalog_service):
        result = catalog_service.get_product("not-a-uuid")
        assert result.error == ErrorCodes.PRODUCT_NOT_FOUND

    def test_delete_unknown_product(self, catalog_service):
        result = catalog_service.delete_product(SellerFactory(), uuid.uuid4())
        assert result.error == ErrorCodes.PRODUCT_NOT_FOUND

    def test_seller_products_empty_for_clients(self, catalog_service):
        ProductFactory()
        result = catalog_service.seller_products(ClientFactory())

        assert result.ok is True
        assert result.value == []

    def test_list_products_reports_internal_error(self, catalog_service):
        with patch.object(CatalogService, "_all_products", side_effect=RuntimeError("db down")):
            result = catalog_service.list_products({})

        assert result.ok is False
        assert result.error == ErrorCodes.INTERNAL_ERROR
