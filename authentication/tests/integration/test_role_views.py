import uuid

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from authentication.models import Seller, UserRole
from marketplace.tests.factories import AdminFactory, ClientFactory, SellerFactory


class RoleManagementIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = AdminFactory()
        self.user = ClientFactory(name="Future Seller", email="future@example.com")
        self.url = reverse("roles")

    def test_grant_seller_creates_directory_entry(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(self.url, {"user_id": str(self.user.id), "role": "seller", "action": "grant"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["role"], "seller")
        self.assertTrue(UserRole.objects.filter(user=self.user, role="seller").exists())

        seller = Seller.objects.get(user=self.user)
        self.assertEqual(seller.name, "Future Seller")
        self.assertEqual(seller.contact_email, "future@example.com")

    def test_grant_is_idempotent(self):
        self.client.force_authenticate(user=self.admin)
        payload = {"user_id": str(self.user.id), "role": "seller", "action": "grant"}
        self.client.post(self.url, payload)
        response = self.client.post(self.url, payload)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(UserRole.objects.filter(user=self.user, role="seller").count(), 1)

    def test_revoke_role(self):
        seller = SellerFactory()
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(self.url, {"user_id": str(seller.id), "role": "seller", "action": "revoke"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(UserRole.objects.filter(user=seller, role="seller").exists())

    def test_revoke_role_not_held(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(self.url, {"user_id": str(self.user.id), "role": "admin", "action": "revoke"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_user(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(self.url, {"user_id": str(uuid.uuid4()), "role": "seller", "action": "grant"})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_non_admin_is_denied_with_redirect(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.post(self.url, {"user_id": str(self.user.id), "role": "admin", "action": "grant"})

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["redirect_to"], "/")
        self.assertFalse(UserRole.objects.filter(user=self.user, role="admin").exists())


class SellerDirectoryIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(user=ClientFactory())

    def test_fetch_seller(self):
        seller = SellerFactory(name="Brake Masters", email="brakes@example.com")
        response = self.client.get(reverse("seller_detail", kwargs={"pk": seller.id}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], str(seller.id))
        self.assertEqual(response.data["name"], "Brake Masters")
        self.assertEqual(response.data["contact_email"], "brakes@example.com")

    def test_missing_seller(self):
        response = self.client.get(reverse("seller_detail", kwargs={"pk": uuid.uuid4()}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
