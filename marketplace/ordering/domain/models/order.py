import uuid

from django.contrib.auth import get_user_model
from django.db import models

from marketplace.catalog.domain.models.catalog import Product

User = get_user_model()


class Order(models.Model):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (PENDING, "Pending"),  # Default status on placement
        (CONFIRMED, "Confirmed"),  # Accepted by the seller
        (COMPLETED, "Completed"),
        (CANCELLED, "Cancelled"),
    ]

    # status -> statuses it may move to
    ALLOWED_TRANSITIONS = {
        PENDING: {CONFIRMED, CANCELLED},
        CONFIRMED: {COMPLETED, CANCELLED},
        COMPLETED: set(),
        CANCELLED: set(),
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    client = models.ForeignKey(User, on_delete=models.CASCADE, related_name="orders")
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="orders")
    seller = models.ForeignKey(User, on_delete=models.CASCADE, related_name="sold_orders")

    quantity = models.PositiveIntegerField(default=1)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)
    shipping_address = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["client", "-created_at"], name="order_client_created_idx"),
            models.Index(fields=["seller", "status"], name="order_seller_status_idx"),
        ]

    def can_transition_to(self, status):
        return status in self.ALLOWED_TRANSITIONS.get(self.status, set())

    def __str__(self):
        return f"Order {str(self.id)[:8]} by {self.client.email}"
