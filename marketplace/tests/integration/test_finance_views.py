import uuid
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.models import Payment, StorageCost
from marketplace.tests.factories import (
    ClientFactory,
    OrderFactory,
    PaymentFactory,
    ProductFactory,
    SellerFactory,
    StorageCostFactory,
)


class FinanceIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.seller = SellerFactory()
        self.other_seller = SellerFactory()

        self.product = ProductFactory(seller=self.seller, title="Brake Pads")
        self.order = OrderFactory(product=self.product)
        self.foreign_order = OrderFactory(product=ProductFactory(seller=self.other_seller))

        self.payments_url = reverse("marketplace:finance-payments")
        self.storage_url = reverse("marketplace:finance-storage-costs")
        self.client.force_authenticate(user=self.seller)

    def storage_detail_url(self, pk):
        return reverse("marketplace:finance-storage-cost-detail", kwargs={"pk": pk})

    def test_add_payment_derives_margin(self):
        response = self.client.post(
            self.payments_url,
            {"order_id": str(self.order.id), "amount": "120.00", "cost": "80.00"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(response.data["margin"]), Decimal("40.00"))
        self.assertEqual(Payment.objects.get(id=response.data["id"]).margin, Decimal("40.00"))

    def test_add_payment_on_another_sellers_order(self):
        response = self.client.post(
            self.payments_url,
            {"order_id": str(self.foreign_order.id), "amount": "10.00"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(Payment.objects.exists())

    def test_add_payment_rejects_negative_amount(self):
        response = self.client.post(
            self.payments_url,
            {"order_id": str(self.order.id), "amount": "-1.00"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_payments_scoped_to_seller(self):
        PaymentFactory(order=self.order)
        PaymentFactory(order=self.foreign_order)

        response = self.client.get(self.payments_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["order_id"], str(self.order.id))

    def test_storage_cost_lifecycle(self):
        response = self.client.post(
            self.storage_url,
            {"product_id": str(self.product.id), "cost_amount": "15.00", "month": 5, "year": 2024},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["product_title"], "Brake Pads")
        cost_id = response.data["id"]

        response = self.client.patch(self.storage_detail_url(cost_id), {"cost_amount": "20.00"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(StorageCost.objects.get(id=cost_id).cost_amount, Decimal("20.00"))
        self.assertEqual(StorageCost.objects.get(id=cost_id).month, 5)

        response = self.client.delete(self.storage_detail_url(cost_id))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(StorageCost.objects.filter(id=cost_id).exists())

    def test_storage_cost_rejects_invalid_month(self):
        response = self.client.post(
            self.storage_url,
            {"product_id": str(self.product.id), "cost_amount": "15.00", "month": 13, "year": 2024},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_storage_cost_for_unknown_product(self):
        response = self.client.post(
            self.storage_url,
            {"product_id": str(uuid.uuid4()), "cost_amount": "15.00", "month": 1, "year": 2024},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_cannot_touch_another_sellers_storage_cost(self):
        foreign = StorageCostFactory(product=self.foreign_order.product)

        response = self.client.patch(self.storage_detail_url(foreign.id), {"cost_amount": "1.00"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        response = self.client.delete(self.storage_detail_url(foreign.id))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(StorageCost.objects.filter(id=foreign.id).exists())

    def test_client_is_redirected_away(self):
        self.client.force_authenticate(user=ClientFactory())
        response = self.client.get(self.payments_url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["redirect_to"], "/")
