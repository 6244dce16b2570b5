import uuid
from decimal import Decimal
from unittest.mock import patch

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.models import CartItem, Order
from marketplace.services.base import ErrorCodes, service_err
from marketplace.tests.factories import (
    AdminFactory,
    CartItemFactory,
    ClientFactory,
    OrderFactory,
    ProductFactory,
    SellerFactory,
)


class OrderPlacementIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.customer = ClientFactory()
        self.seller1 = SellerFactory()
        self.seller2 = SellerFactory()
        self.product1 = ProductFactory(seller=self.seller1, price=Decimal("10.00"))
        self.product2 = ProductFactory(seller=self.seller2, price=Decimal("25.00"))

        self.checkout_url = reverse("marketplace:order-checkout")
        self.buy_now_url = reverse("marketplace:order-buy-now")
        self.client.force_authenticate(user=self.customer)

    def test_checkout_creates_one_order_per_cart_line_and_clears_cart(self):
        CartItemFactory(cart__user=self.customer, product=self.product1, quantity=2)
        CartItemFactory(cart__user=self.customer, product=self.product2, quantity=1)

        response = self.client.post(self.checkout_url, {"shipping_address": "1 Main St"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(response.data), 2)
        orders = {order.product_id: order for order in Order.objects.filter(client=self.customer)}
        self.assertEqual(orders[self.product1.id].quantity, 2)
        self.assertEqual(orders[self.product1.id].seller, self.seller1)
        self.assertEqual(orders[self.product2.id].seller, self.seller2)
        self.assertTrue(all(order.status == Order.PENDING for order in orders.values()))
        self.assertTrue(all(order.shipping_address == "1 Main St" for order in orders.values()))
        self.assertFalse(CartItem.objects.filter(cart__user=self.customer).exists())

    def test_checkout_empty_cart(self):
        response = self.client.post(self.checkout_url, {"shipping_address": "1 Main St"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Order.objects.exists())

    def test_checkout_requires_address(self):
        CartItemFactory(cart__user=self.customer, product=self.product1, quantity=1)

        response = self.client.post(self.checkout_url, {"shipping_address": "   "}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Order.objects.exists())
        self.assertTrue(CartItem.objects.filter(cart__user=self.customer).exists())

    def test_checkout_rolls_back_when_cart_cannot_be_cleared(self):
        CartItemFactory(cart__user=self.customer, product=self.product1, quantity=1)

        with patch(
            "marketplace.cart.domain.services.cart_service.CartService.clear_cart",
            return_value=service_err(ErrorCodes.INTERNAL_ERROR, "boom"),
        ):
            response = self.client.post(self.checkout_url, {"shipping_address": "1 Main St"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertFalse(Order.objects.exists())
        self.assertTrue(CartItem.objects.filter(cart__user=self.customer).exists())

    def test_buy_now_leaves_cart_alone(self):
        CartItemFactory(cart__user=self.customer, product=self.product2, quantity=1)

        response = self.client.post(
            self.buy_now_url,
            {"product_id": str(self.product1.id), "quantity": 3, "shipping_address": "1 Main St"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["quantity"], 3)
        self.assertEqual(response.data[0]["seller_id"], str(self.seller1.id))
        self.assertEqual(CartItem.objects.filter(cart__user=self.customer).count(), 1)

    def test_buy_now_unknown_product(self):
        response = self.client.post(
            self.buy_now_url,
            {"product_id": str(uuid.uuid4()), "quantity": 1, "shipping_address": "1 Main St"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_buy_now_rejects_non_positive_quantity(self):
        response = self.client.post(
            self.buy_now_url,
            {"product_id": str(self.product1.id), "quantity": 0, "shipping_address": "1 Main St"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Order.objects.exists())

    def test_sellers_cannot_place_orders(self):
        self.client.force_authenticate(user=self.seller1)
        response = self.client.post(
            self.buy_now_url,
            {"product_id": str(self.product2.id), "quantity": 1, "shipping_address": "1 Main St"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["redirect_to"], "/seller-dashboard")


class OrderStatusIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.customer = ClientFactory()
        self.seller = SellerFactory()
        self.other_seller = SellerFactory()
        self.admin = AdminFactory()
        self.order = OrderFactory(client=self.customer, product=ProductFactory(seller=self.seller))

    def status_url(self, order_id):
        return reverse("marketplace:order-update-status", kwargs={"pk": str(order_id)})

    def test_seller_confirms_then_completes(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.post(self.status_url(self.order.id), {"status": "confirmed"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "confirmed")

        response = self.client.post(self.status_url(self.order.id), {"status": "completed"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.COMPLETED)

    def test_completed_order_is_final(self):
        self.order.status = Order.COMPLETED
        self.order.save()
        self.client.force_authenticate(user=self.seller)

        response = self.client.post(self.status_url(self.order.id), {"status": "cancelled"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_pending_cannot_jump_to_completed(self):
        self.client.force_authenticate(user=self.seller)
        response = self.client.post(self.status_url(self.order.id), {"status": "completed"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_other_seller_cannot_update(self):
        self.client.force_authenticate(user=self.other_seller)
        response = self.client.post(self.status_url(self.order.id), {"status": "confirmed"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.PENDING)

    def test_admin_can_cancel_any_order(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(self.status_url(self.order.id), {"status": "cancelled"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_client_cannot_update_status(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.post(self.status_url(self.order.id), {"status": "cancelled"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_unknown_order(self):
        self.client.force_authenticate(user=self.seller)
        response = self.client.post(self.status_url(uuid.uuid4()), {"status": "confirmed"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class OrderListingIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.customer = ClientFactory()
        self.other_customer = ClientFactory()
        self.seller = SellerFactory()
        self.admin = AdminFactory()

        product = ProductFactory(seller=self.seller)
        self.mine = OrderFactory(client=self.customer, product=product)
        self.confirmed = OrderFactory(client=self.customer, product=product, status=Order.CONFIRMED)
        self.theirs = OrderFactory(client=self.other_customer)

        self.list_url = reverse("marketplace:order-list")

    def ids(self, response):
        return {item["id"] for item in response.data}

    def test_client_sees_own_orders(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.get(self.list_url)
        self.assertEqual(self.ids(response), {str(self.mine.id), str(self.confirmed.id)})

    def test_status_filter(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.get(self.list_url, {"status": "confirmed"})
        self.assertEqual(self.ids(response), {str(self.confirmed.id)})

    def test_invalid_status_filter(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.get(self.list_url, {"status": "shipped"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_seller_sees_orders_for_own_products(self):
        self.client.force_authenticate(user=self.seller)
        response = self.client.get(reverse("marketplace:order-seller-orders"))
        self.assertEqual(self.ids(response), {str(self.mine.id), str(self.confirmed.id)})

    def test_admin_sees_every_order(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get(self.list_url)
        self.assertEqual(len(response.data), 3)

    def test_retrieve_is_scoped(self):
        self.client.force_authenticate(user=self.customer)
        url = reverse("marketplace:order-detail", kwargs={"pk": str(self.theirs.id)})
        self.assertEqual(self.client.get(url).status_code, status.HTTP_404_NOT_FOUND)

        url = reverse("marketplace:order-detail", kwargs={"pk": str(self.mine.id)})
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["client_id"], str(self.customer.id))
