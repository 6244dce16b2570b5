from django.conf import settings
from django.db import models


class UserRole(models.Model):
    """A role granted to a user. A user may hold several roles."""

    CLIENT = "client"
    SELLER = "seller"
    ADMIN = "admin"

    ROLE_CHOICES = [
        (CLIENT, "Client"),
        (SELLER, "Seller"),
        (ADMIN, "Admin"),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="roles")
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=CLIENT)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ["user", "role"]
        app_label = "authentication"
        indexes = [models.Index(fields=["role"], name="userrole_role_idx")]

    def __str__(self):
        return f"{self.user_id}: {self.role}"
