import pytest
from django.conf import settings

from authentication.api.serializers.jwt_serializers import CustomRefreshToken
from marketplace.tests.factories import AdminFactory, SellerFactory


@pytest.mark.django_db
class TestCustomRefreshToken:
    def test_seller_claims(self):
        seller = SellerFactory(name="Jane Smith")
        token = CustomRefreshToken.for_user(seller)

        assert token["role"] == "seller"
        assert token["is_seller"] is True
        assert token["is_admin"] is False
        assert token["name"] == "Jane Smith"
        assert token.access_token["role"] == "seller"

    def test_admin_claims(self):
        token = CustomRefreshToken.for_user(AdminFactory())
        assert token["role"] == "admin"
        assert token["is_admin"] is True

    def test_login_view_is_the_only_token_issuer(self):
        assert "TOKEN_OBTAIN_SERIALIZER" not in settings.SIMPLE_JWT
