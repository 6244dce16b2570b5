import uuid
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from prometheus_client import REGISTRY
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.models import CartItem, Product
from marketplace.tests.factories import CartItemFactory, ClientFactory, ProductFactory, SellerFactory


class CartViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()

        self.user1 = ClientFactory()
        self.user2 = ClientFactory()
        self.seller = SellerFactory()

        self.product1 = ProductFactory(seller=self.seller, price=Decimal("10.00"))
        self.product2 = ProductFactory(seller=self.seller, price=Decimal("20.00"))

        # URLs for the CartViewSet actions, using app_name and basename
        self.cart_list_url = reverse("marketplace:cart-list")
        self.cart_add_item_url = reverse("marketplace:cart-add-item")
        self.cart_update_item_url = reverse("marketplace:cart-update-item")
        self.cart_remove_item_url = reverse("marketplace:cart-remove-item")
        self.cart_clear_url = reverse("marketplace:cart-clear")
        self.cart_restore_url = reverse("marketplace:cart-restore")

        self.client.force_authenticate(user=self.user1)

    def test_cart_requires_authentication(self):
        self.client.force_authenticate(user=None)
        response = self.client.get(self.cart_list_url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_list_empty_cart(self):
        response = self.client.get(self.cart_list_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["items_count"], 0)
        self.assertEqual(Decimal(response.data["total"]), Decimal("0.00"))

    def test_add_item_to_cart(self):
        response = self.client.post(self.cart_add_item_url, {"product_id": str(self.product1.id), "quantity": 2})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["items_count"], 1)
        self.assertEqual(response.data["items"][0]["product"]["id"], str(self.product1.id))
        self.assertEqual(response.data["items"][0]["quantity"], 2)
        self.assertEqual(Decimal(response.data["total"]), Decimal("20.00"))

    def test_adding_same_product_merges_quantity(self):
        self.client.post(self.cart_add_item_url, {"product_id": str(self.product1.id), "quantity": 2})
        response = self.client.post(self.cart_add_item_url, {"product_id": str(self.product1.id), "quantity": 3})

        self.assertEqual(response.data["items_count"], 1)
        self.assertEqual(response.data["total_items"], 5)
        self.assertEqual(CartItem.objects.get(cart__user=self.user1).quantity, 5)

    def test_add_item_product_not_found(self):
        response = self.client.post(self.cart_add_item_url, {"product_id": str(uuid.uuid4()), "quantity": 1})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertIn("not found", response.data["detail"])

    def test_add_item_rejects_zero_quantity(self):
        response = self.client.post(self.cart_add_item_url, {"product_id": str(self.product1.id), "quantity": 0})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_item_quantity(self):
        self.client.post(self.cart_add_item_url, {"product_id": str(self.product1.id), "quantity": 2})

        response = self.client.patch(self.cart_update_item_url, {"product_id": str(self.product1.id), "quantity": 5})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["items"][0]["quantity"], 5)
        self.assertEqual(Decimal(response.data["total"]), Decimal("50.00"))

    def test_update_to_zero_removes_item(self):
        self.client.post(self.cart_add_item_url, {"product_id": str(self.product1.id), "quantity": 2})

        response = self.client.patch(self.cart_update_item_url, {"product_id": str(self.product1.id), "quantity": 0})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["items_count"], 0)

    def test_update_item_not_in_cart(self):
        response = self.client.patch(self.cart_update_item_url, {"product_id": str(self.product2.id), "quantity": 1})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_remove_item(self):
        self.client.post(self.cart_add_item_url, {"product_id": str(self.product1.id), "quantity": 1})
        self.client.post(self.cart_add_item_url, {"product_id": str(self.product2.id), "quantity": 1})

        response = self.client.delete(self.cart_remove_item_url, {"product_id": str(self.product1.id)}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["product"]["id"] for item in response.data["items"]], [str(self.product2.id)])

    def test_remove_item_not_in_cart(self):
        response = self.client.delete(self.cart_remove_item_url, {"product_id": str(self.product1.id)}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_clear_cart(self):
        self.client.post(self.cart_add_item_url, {"product_id": str(self.product1.id), "quantity": 1})

        response = self.client.post(self.cart_clear_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["items_count"], 0)
        self.assertFalse(CartItem.objects.filter(cart__user=self.user1).exists())

    def test_carts_are_isolated_per_user(self):
        self.client.post(self.cart_add_item_url, {"product_id": str(self.product1.id), "quantity": 1})

        self.client.force_authenticate(user=self.user2)
        response = self.client.get(self.cart_list_url)
        self.assertEqual(response.data["items_count"], 0)

    def test_deleted_product_disappears_from_cart(self):
        CartItemFactory(cart__user=self.user1, product=self.product1, quantity=1)
        CartItemFactory(cart__user=self.user1, product=self.product2, quantity=1)
        Product.objects.filter(id=self.product1.id).delete()

        response = self.client.get(self.cart_list_url)
        self.assertEqual(response.data["items_count"], 1)
        self.assertEqual(Decimal(response.data["total"]), Decimal("20.00"))

    def test_restore_saved_cart_drops_unknown_products(self):
        saved = [
            {"product_id": str(self.product1.id), "quantity": 2},
            {"product_id": str(uuid.uuid4()), "quantity": 1},
            {"product": {"id": str(self.product2.id)}, "quantity": 1},
        ]
        response = self.client.post(self.cart_restore_url, {"items": saved}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["items_count"], 2)
        self.assertEqual(Decimal(response.data["total"]), Decimal("40.00"))

    def test_restore_merges_into_existing_cart(self):
        self.client.post(self.cart_add_item_url, {"product_id": str(self.product1.id), "quantity": 1})

        saved = [{"product_id": str(self.product1.id), "quantity": 2}]
        response = self.client.post(self.cart_restore_url, {"items": saved}, format="json")
        self.assertEqual(response.data["items"][0]["quantity"], 3)

    def test_restore_drops_fractional_quantities_and_matches_upper_case_ids(self):
        before = REGISTRY.get_sample_value("marketplace_cart_restore_dropped_items_total") or 0
        saved = [
            {"product_id": str(self.product1.id).upper(), "quantity": 1},
            {"product_id": str(self.product1.id), "quantity": 1},
            {"product_id": str(self.product2.id), "quantity": 2.7},
        ]
        response = self.client.post(self.cart_restore_url, {"items": saved}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["items_count"], 1)
        self.assertEqual(response.data["items"][0]["quantity"], 2)
        self.assertFalse(CartItem.objects.filter(cart__user=self.user1, product=self.product2).exists())
        after = REGISTRY.get_sample_value("marketplace_cart_restore_dropped_items_total")
        self.assertEqual(after - before, 1)

    def test_restore_rejects_non_list(self):
        response = self.client.post(self.cart_restore_url, {"items": {"product_id": "x"}}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
