from django.conf import settings
from django.db import models


class Seller(models.Model):
    """Public seller directory entry. Shares its primary key with the seller's user."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="seller_profile",
    )
    name = models.CharField(max_length=200)
    contact_email = models.EmailField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        app_label = "authentication"

    def __str__(self):
        return self.name
