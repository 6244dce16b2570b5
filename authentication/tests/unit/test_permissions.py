from unittest.mock import Mock

import pytest
from rest_framework.exceptions import PermissionDenied

from authentication.permissions import AdminRequired, ClientRequired, RoleRequired, SellerRequired
from marketplace.tests.factories import ClientFactory, SellerFactory


def make_request(user, path="/api/marketplace/seller/dashboard/"):
    return Mock(user=user, path=path)


@pytest.mark.django_db
class TestRoleRequired:
    def test_anonymous_is_not_permitted(self):
        request = make_request(Mock(is_authenticated=False))
        assert SellerRequired().has_permission(request, None) is False

    def test_matching_role_is_permitted(self):
        assert SellerRequired().has_permission(make_request(SellerFactory()), None) is True
        assert ClientRequired().has_permission(make_request(ClientFactory()), None) is True

    def test_wrong_role_gets_redirect_hint(self):
        with pytest.raises(PermissionDenied) as exc_info:
            SellerRequired().has_permission(make_request(ClientFactory()), None)

        detail = exc_info.value.detail
        assert detail["role"] == "client"
        assert detail["redirect_to"] == "/"

    def test_seller_denied_admin_page_is_sent_to_seller_dashboard(self):
        with pytest.raises(PermissionDenied) as exc_info:
            AdminRequired().has_permission(make_request(SellerFactory()), None)

        assert exc_info.value.detail["redirect_to"] == "/seller-dashboard"

    def test_no_required_roles_only_needs_authentication(self):
        assert RoleRequired().has_permission(make_request(ClientFactory()), None) is True
