from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from marketplace.catalog.domain.models.catalog import Product
from marketplace.ordering.domain.models.order import Order


class Payment(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="payments")
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    cost = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    # Always amount - cost, kept in sync on save
    margin = models.DecimalField(max_digits=12, decimal_places=2, editable=False, default=0)
    payment_date = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-payment_date"]
        app_label = "marketplace"

    def save(self, *args, **kwargs):
        self.margin = self.amount - self.cost
        super().save(*args, **kwargs)

    def __str__(self):
        return f"Payment {self.amount} for order {str(self.order_id)[:8]}"


class StorageCost(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="storage_costs")
    cost_amount = models.DecimalField(max_digits=12, decimal_places=2)
    month = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(12)])
    year = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-year", "-month"]
        app_label = "marketplace"

    def __str__(self):
        return f"Storage {self.cost_amount} for {self.product_id} ({self.month}/{self.year})"
