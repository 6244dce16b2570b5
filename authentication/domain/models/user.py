import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


class CustomUser(AbstractUser):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    # Display name given at registration
    name = models.CharField(max_length=150, blank=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        app_label = "authentication"

    def get_display_name(self):
        """Name from registration, else the local part of the email."""
        if self.name:
            return self.name
        if self.email:
            return self.email.split("@")[0]
        return "User"

    def __str__(self):
        return self.email
